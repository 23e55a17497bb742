from __future__ import annotations

import logging
import math
from typing import Any

from hostprobe.config import UtilizationOverrides
from hostprobe.models.snapshot import UtilizationConfig

logger = logging.getLogger(__name__)


def _coerce_whole_number(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number) or not number.is_integer():
        return None
    return int(number)


def normalize_utilization(
    overrides: UtilizationOverrides | None,
) -> UtilizationConfig | None:
    """Validate user overrides into the snapshot's ``config`` record.

    Invalid values are dropped with an info log. Returns ``None`` when no
    override was accepted.
    """
    if overrides is None:
        return None

    accepted: dict[str, Any] = {}

    for field in ("logical_processors", "total_ram_mib"):
        raw = getattr(overrides, field)
        if not raw:
            continue
        value = _coerce_whole_number(raw)
        if value is None:
            logger.info(
                "%s supplied in config for utilization.%s, expected a number",
                raw,
                field,
            )
            continue
        accepted[field] = value

    hostname = overrides.billing_hostname
    if hostname:
        if isinstance(hostname, str):
            accepted["hostname"] = hostname
        else:
            logger.info(
                "%s supplied in config for utilization.billing_hostname, expected a string",
                hostname,
            )

    if not accepted:
        return None
    return UtilizationConfig(**accepted)
