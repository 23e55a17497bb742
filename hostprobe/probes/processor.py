from __future__ import annotations

import logging
from typing import Callable

from hostprobe.models.platform import OSFamily
from hostprobe.models.snapshot import ProcessorStats
from hostprobe.parsers.cpuinfo import parse_cpu_info
from hostprobe.probes.base import BaseProbe, parse_count

logger = logging.getLogger(__name__)

CPUINFO_PATH = "/proc/cpuinfo"

PACKAGE_NAMES = ("hw.packages",)
CORE_NAMES = ("hw.physicalcpu_max", "hw.physicalcpu")
LOGICAL_NAMES = ("hw.logicalcpu_max", "hw.logicalcpu", "hw.ncpu")


class ProcessorProbe(BaseProbe):
    """Determines logical processor, core and package counts.

    - Darwin: three sysctl counters, queried one after another
    - BSD: ``hw.ncpu`` only
    - Linux: ``/proc/cpuinfo`` handed to the cpuinfo parser
    """

    name = "processor"

    def __init__(
        self,
        os_family: OSFamily,
        parse: Callable[[str], ProcessorStats] = parse_cpu_info,
        **kwargs,
    ) -> None:
        super().__init__(os_family, **kwargs)
        self._parse = parse

    async def probe(self) -> ProcessorStats:
        if self.os_family == OSFamily.DARWIN:
            return await self._probe_darwin()
        if self.os_family == OSFamily.BSD:
            logical = await self._sysctl("hw.ncpu")
            return ProcessorStats(logical=parse_count(logical))
        if self.os_family == OSFamily.LINUX:
            data = await self._read(CPUINFO_PATH)
            if data is None:
                return ProcessorStats()
            return self._parse(data)

        logger.debug(
            "Unknown platform: %s, could not retrieve processor info", self.os_family
        )
        return ProcessorStats()

    async def _probe_darwin(self) -> ProcessorStats:
        # Serial on purpose: at most one sysctl process in flight per probe.
        packages = await self._sysctl(*PACKAGE_NAMES)
        cores = await self._sysctl(*CORE_NAMES)
        logical = await self._sysctl(*LOGICAL_NAMES)
        return ProcessorStats(
            logical=parse_count(logical),
            cores=parse_count(cores),
            packages=parse_count(packages),
        )
