from __future__ import annotations

import logging

from hostprobe.models.snapshot import ProcessorStats

logger = logging.getLogger(__name__)


def _split_blocks(text: str) -> list[dict[str, str]]:
    blocks: list[dict[str, str]] = []
    current: dict[str, str] = {}
    for line in text.splitlines():
        if not line.strip():
            if current:
                blocks.append(current)
                current = {}
            continue
        key, sep, value = line.partition(":")
        if sep:
            current[key.strip()] = value.strip()
    if current:
        blocks.append(current)
    return blocks


def parse_cpu_info(text: str) -> ProcessorStats:
    """Count processors described by ``/proc/cpuinfo``.

    ``logical`` counts ``processor`` entries, ``packages`` counts distinct
    ``physical id`` values and ``cores`` sums ``cpu cores`` over those
    packages. Counts that the text does not support stay ``None``.
    """
    processors = [b for b in _split_blocks(text) if "processor" in b]
    if not processors:
        logger.debug("No applicable cpu info found")
        return ProcessorStats()

    stats = ProcessorStats(logical=len(processors))

    cores_by_package: dict[str, str | None] = {}
    for block in processors:
        package_id = block.get("physical id")
        if package_id is None:
            continue
        cores_by_package.setdefault(package_id, block.get("cpu cores"))

    if not cores_by_package:
        return stats
    stats.packages = len(cores_by_package)

    total_cores = 0
    for cores in cores_by_package.values():
        if cores is None or not cores.isdigit() or int(cores) == 0:
            return stats
        total_cores += int(cores)
    stats.cores = total_cores
    return stats
