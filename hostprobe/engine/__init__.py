from .aggregator import Aggregator, ProbeSet, collect_system_info
from .normalizer import normalize_utilization

__all__ = [
    "Aggregator",
    "ProbeSet",
    "collect_system_info",
    "normalize_utilization",
]
