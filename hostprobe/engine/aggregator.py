from __future__ import annotations

import asyncio
import logging
import platform
from dataclasses import dataclass
from typing import Any, Callable

from hostprobe.config import Settings
from hostprobe.engine.normalizer import normalize_utilization
from hostprobe.models.platform import OSFamily, detect_os_family
from hostprobe.models.snapshot import DockerInfo, SystemSnapshot
from hostprobe.probes import (
    BaseProbe,
    CloudProbe,
    ContainerProbe,
    KernelProbe,
    MemoryProbe,
    ProcessorProbe,
)

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[SystemSnapshot], Any]


@dataclass
class ProbeSet:
    """The five probes an aggregation waits for."""

    processor: BaseProbe
    memory: BaseProbe
    kernel: BaseProbe
    container: BaseProbe
    cloud: BaseProbe

    @classmethod
    def for_platform(cls, os_family: OSFamily, settings: Settings) -> ProbeSet:
        sysctl = {"sysctl_command": settings.sysctl_command}
        return cls(
            processor=ProcessorProbe(os_family, **sysctl),
            memory=MemoryProbe(os_family, **sysctl),
            kernel=KernelProbe(os_family, **sysctl),
            container=ContainerProbe(os_family, settings),
            cloud=CloudProbe(os_family, settings),
        )


class Aggregator:
    """Runs every probe concurrently and merges the results into one snapshot.

    The snapshot is complete once all five probes have reported. A probe that
    raises, or outlives ``settings.probe_timeout`` when one is set, reports
    ``None`` like any other probe that found nothing.
    """

    def __init__(
        self,
        settings: Settings,
        os_family: OSFamily | None = None,
        probes: ProbeSet | None = None,
        processor_arch: str | None = None,
    ) -> None:
        self.settings = settings
        self.os_family = os_family if os_family is not None else detect_os_family()
        self.probes = (
            probes if probes is not None
            else ProbeSet.for_platform(self.os_family, settings)
        )
        self.processor_arch = processor_arch or platform.machine() or "unknown"

    async def collect(self) -> SystemSnapshot:
        snapshot = SystemSnapshot(
            processor_arch=self.processor_arch,
            config=normalize_utilization(self.settings.utilization),
        )

        processor, memory, kernel_version, container_id, aws = await asyncio.gather(
            self._run(self.probes.processor),
            self._run(self.probes.memory),
            self._run(self.probes.kernel),
            self._run(self.probes.container),
            self._run(self.probes.cloud),
        )

        if processor is not None:
            snapshot.packages = processor.packages
            snapshot.logical_processors = processor.logical
            snapshot.cores = processor.cores
        snapshot.memory = memory
        snapshot.kernel_version = kernel_version
        if container_id:
            snapshot.docker = DockerInfo(id=container_id)
        snapshot.aws = aws

        logger.debug("System info collected for platform %s", self.os_family)
        return snapshot

    # ── internals ───────────────────────────────────────

    async def _run(self, probe: BaseProbe) -> Any:
        timeout = self.settings.probe_timeout
        try:
            if timeout is None:
                return await probe.probe()
            return await asyncio.wait_for(probe.probe(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning("Probe [%s] timed out after %.1fs", probe.name, timeout)
        except Exception:
            logger.exception("Probe [%s] failed", probe.name)
        return None


async def collect_system_info(
    settings: Settings,
    callback: SnapshotCallback,
    **kwargs: Any,
) -> None:
    """Collect one snapshot and hand it to ``callback`` exactly once.

    Keyword arguments are passed through to ``Aggregator``.
    """
    snapshot = await Aggregator(settings, **kwargs).collect()
    callback(snapshot)
