from __future__ import annotations

import logging

from hostprobe.models.platform import OSFamily
from hostprobe.probes.base import BaseProbe

logger = logging.getLogger(__name__)

VERSION_PATH = "/proc/version"


class KernelProbe(BaseProbe):
    """Raw kernel version string, unparsed."""

    name = "kernel"

    async def probe(self) -> str | None:
        if self.os_family in (OSFamily.DARWIN, OSFamily.BSD):
            version = await self._sysctl("kern.version")
        elif self.os_family == OSFamily.LINUX:
            version = await self._read(VERSION_PATH)
        else:
            logger.debug(
                "Unknown platform: %s, could not read kernel version", self.os_family
            )
            return None

        # Blank output is no answer.
        if not version or not version.strip():
            return None
        return version
