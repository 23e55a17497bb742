from __future__ import annotations

import re
import sys
from enum import StrEnum


class OSFamily(StrEnum):
    DARWIN = "darwin"
    BSD = "bsd"
    LINUX = "linux"
    UNKNOWN = "unknown"


_FAMILY_PATTERNS = (
    (re.compile(r"darwin", re.IGNORECASE), OSFamily.DARWIN),
    (re.compile(r"bsd", re.IGNORECASE), OSFamily.BSD),
    (re.compile(r"linux", re.IGNORECASE), OSFamily.LINUX),
)


def detect_os_family(platform_name: str | None = None) -> OSFamily:
    """Map a ``sys.platform`` style name to the probe strategy family."""
    name = sys.platform if platform_name is None else platform_name
    for pattern, family in _FAMILY_PATTERNS:
        if pattern.search(name):
            return family
    return OSFamily.UNKNOWN
