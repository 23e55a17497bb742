from __future__ import annotations

import logging
from typing import Callable

from hostprobe.models.platform import OSFamily
from hostprobe.parsers.meminfo import parse_mem_info
from hostprobe.probes.base import BaseProbe

logger = logging.getLogger(__name__)

MEMINFO_PATH = "/proc/meminfo"
BYTES_PER_MIB = 1024 * 1024

_MEMSIZE_NAMES = {
    OSFamily.DARWIN: "hw.memsize",
    OSFamily.BSD: "hw.realmem",
}


def bytes_to_mib(raw: str | None) -> float | None:
    if raw is None:
        return None
    try:
        size = int(raw.strip())
    except ValueError:
        return None
    if size <= 0:
        return None
    return size / BYTES_PER_MIB


class MemoryProbe(BaseProbe):
    """Total physical memory in MiB."""

    name = "memory"

    def __init__(
        self,
        os_family: OSFamily,
        parse: Callable[[str], float | None] = parse_mem_info,
        **kwargs,
    ) -> None:
        super().__init__(os_family, **kwargs)
        self._parse = parse

    async def probe(self) -> float | None:
        sysctl_name = _MEMSIZE_NAMES.get(self.os_family)
        if sysctl_name is not None:
            return bytes_to_mib(await self._sysctl(sysctl_name))
        if self.os_family == OSFamily.LINUX:
            data = await self._read(MEMINFO_PATH)
            if data is None:
                return None
            return self._parse(data)

        logger.debug(
            "Unknown platform: %s, could not retrieve memory info", self.os_family
        )
        return None
