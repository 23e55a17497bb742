from .base import (
    BaseProbe,
    CommandError,
    CommandResult,
    query_sysctl,
    read_proc,
    run_command,
)
from .cloud import AwsInfoFetcher, CloudProbe
from .container import ContainerProbe
from .kernel import KernelProbe
from .memory import MemoryProbe
from .processor import ProcessorProbe

__all__ = [
    "BaseProbe",
    "CommandError",
    "CommandResult",
    "query_sysctl",
    "read_proc",
    "run_command",
    "AwsInfoFetcher",
    "CloudProbe",
    "ContainerProbe",
    "KernelProbe",
    "MemoryProbe",
    "ProcessorProbe",
]
