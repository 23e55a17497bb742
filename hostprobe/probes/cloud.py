from __future__ import annotations

import logging
import re
from typing import Any, Awaitable, Callable

import httpx

from hostprobe.config import Settings
from hostprobe.models.platform import OSFamily
from hostprobe.probes.base import BaseProbe

logger = logging.getLogger(__name__)

AWS_KEYS = ("instanceType", "instanceId", "availabilityZone")

_VALID_VALUE = re.compile(r"^[0-9a-zA-Z_ ./-]+$")
_MAX_VALUE_LENGTH = 255

CloudFetcher = Callable[[Settings], Awaitable[dict[str, Any] | None]]


def _is_valid_value(value: Any) -> bool:
    return (
        isinstance(value, str)
        and len(value) <= _MAX_VALUE_LENGTH
        and bool(_VALID_VALUE.match(value))
    )


class AwsInfoFetcher:
    """Reads the EC2 instance identity document.

    Off EC2 the metadata address does not answer and the fetch degrades to
    ``None`` once the HTTP timeout expires. A successful record is cached
    for the lifetime of the fetcher.
    """

    def __init__(self, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._transport = transport
        self._cached: dict[str, Any] | None = None

    async def __call__(self, settings: Settings) -> dict[str, Any] | None:
        if not settings.utilization.detect_aws:
            logger.debug("AWS detection disabled, omitting aws info")
            return None
        if self._cached is not None:
            return self._cached

        try:
            async with httpx.AsyncClient(
                timeout=settings.aws_timeout, transport=self._transport
            ) as client:
                response = await client.get(settings.aws_metadata_url)
                response.raise_for_status()
                document = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.debug("Failed to query AWS metadata: %s", e)
            return None

        if not isinstance(document, dict):
            logger.debug("Unexpected AWS metadata document: %r", document)
            return None

        record: dict[str, Any] = {}
        for key in AWS_KEYS:
            value = document.get(key)
            if not _is_valid_value(value):
                logger.debug("Invalid AWS metadata value for %s: %r", key, value)
                return None
            record[key] = value

        self._cached = record
        return record


class CloudProbe(BaseProbe):
    """Cloud provider metadata. Runs the same way on every platform."""

    name = "cloud"

    def __init__(
        self,
        os_family: OSFamily,
        settings: Settings,
        fetch: CloudFetcher | None = None,
        **kwargs,
    ) -> None:
        super().__init__(os_family, **kwargs)
        self._settings = settings
        self._fetch = fetch if fetch is not None else AwsInfoFetcher()

    async def probe(self) -> dict[str, Any] | None:
        return await self._fetch(self._settings)
