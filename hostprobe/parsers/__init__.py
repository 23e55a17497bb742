from .cpuinfo import parse_cpu_info
from .dockerinfo import parse_docker_info
from .meminfo import parse_mem_info

__all__ = ["parse_cpu_info", "parse_docker_info", "parse_mem_info"]
