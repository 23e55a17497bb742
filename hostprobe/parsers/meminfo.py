from __future__ import annotations

import logging
import re

logger = logging.getLogger(__name__)

_MEM_TOTAL = re.compile(r"^MemTotal:\s+(\d+)\s*kB", re.MULTILINE)


def parse_mem_info(text: str) -> float | None:
    """Return ``MemTotal`` from ``/proc/meminfo`` in MiB."""
    match = _MEM_TOTAL.search(text)
    if match is None:
        logger.debug("No MemTotal found in meminfo")
        return None
    return int(match.group(1)) / 1024
