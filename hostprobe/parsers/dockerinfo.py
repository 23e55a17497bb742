from __future__ import annotations

import logging
import re

from hostprobe.config import Settings

logger = logging.getLogger(__name__)

_CONTAINER_ID = re.compile(r"[0-9a-f]{64}")


def _container_id(path: str) -> str | None:
    matches = _CONTAINER_ID.findall(path)
    return matches[-1] if matches else None


def parse_docker_info(settings: Settings, text: str) -> str | None:
    """Recover the docker container id from ``/proc/self/cgroup`` text.

    The ``cpu`` controller line (cgroup v1) wins; the unified hierarchy
    line ``0::<path>`` (cgroup v2) is used when no v1 cpu line exists.
    """
    if not settings.utilization.detect_docker:
        logger.debug("Docker detection disabled, omitting docker info")
        return None

    unified_path: str | None = None
    for line in text.splitlines():
        parts = line.strip().split(":", 2)
        if len(parts) != 3:
            continue
        hierarchy, controllers, path = parts
        if "cpu" in controllers.split(","):
            return _container_id(path)
        if hierarchy == "0" and controllers == "":
            unified_path = path

    if unified_path is not None:
        return _container_id(unified_path)

    logger.debug("No cpu cgroup found in cgroup info")
    return None
