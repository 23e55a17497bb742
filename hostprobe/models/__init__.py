from .platform import OSFamily, detect_os_family
from .snapshot import DockerInfo, ProcessorStats, SystemSnapshot, UtilizationConfig

__all__ = [
    "OSFamily",
    "detect_os_family",
    "DockerInfo",
    "ProcessorStats",
    "SystemSnapshot",
    "UtilizationConfig",
]
