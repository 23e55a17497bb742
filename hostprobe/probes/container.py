from __future__ import annotations

import logging
from typing import Callable

from hostprobe.config import Settings
from hostprobe.models.platform import OSFamily
from hostprobe.parsers.dockerinfo import parse_docker_info
from hostprobe.probes.base import BaseProbe

logger = logging.getLogger(__name__)

CGROUP_PATH = "/proc/self/cgroup"


class ContainerProbe(BaseProbe):
    """Docker container id of the current process, Linux only."""

    name = "container"

    def __init__(
        self,
        os_family: OSFamily,
        settings: Settings,
        parse: Callable[[Settings, str], str | None] = parse_docker_info,
        **kwargs,
    ) -> None:
        super().__init__(os_family, **kwargs)
        self._settings = settings
        self._parse = parse

    async def probe(self) -> str | None:
        if self.os_family != OSFamily.LINUX:
            logger.debug("Platform is not a flavor of linux, omitting docker info")
            return None

        data = await self._read(CGROUP_PATH)
        if not data:
            return None
        return self._parse(self._settings, data)
