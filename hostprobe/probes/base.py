from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Awaitable, Callable, Sequence

from hostprobe.models.platform import OSFamily

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """The command could not be started or exited with a non-zero status."""


@dataclass
class CommandResult:
    returncode: int
    stdout: str
    stderr: str


Runner = Callable[..., Awaitable[CommandResult]]
Reader = Callable[[str | Path], Awaitable[str | None]]


async def run_command(*args: str) -> CommandResult:
    """Run ``args`` as a subprocess and capture its output.

    Raises ``CommandError`` when the process cannot be spawned or exits
    non-zero.
    """
    try:
        proc = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as e:
        raise CommandError(f"{' '.join(args)}: {e}") from e

    try:
        stdout, stderr = await proc.communicate()
    except asyncio.CancelledError:
        if proc.returncode is None:
            proc.kill()
            await proc.wait()
        raise
    result = CommandResult(
        returncode=proc.returncode,
        stdout=stdout.decode(errors="replace"),
        stderr=stderr.decode(errors="replace"),
    )
    if result.returncode != 0:
        raise CommandError(
            f"{' '.join(args)} exited with {result.returncode}: {result.stderr.strip()}"
        )
    return result


async def query_sysctl(
    names: Sequence[str],
    runner: Runner = run_command,
    command: str = "sysctl",
) -> str | None:
    """Return the first ``sysctl -n <name>`` value that answers cleanly.

    An invocation error ends the search immediately with ``None``; only a
    run that succeeds but writes to stderr moves on to the next name.
    """
    if not names:
        return None

    for name in names:
        try:
            result = await runner(command, "-n", name)
        except CommandError as e:
            logger.debug("Error when trying to run: %s -n %s: %s", command, name, e)
            return None
        if not result.stderr:
            return result.stdout

    logger.debug("No sysctl info found for names: %s", ",".join(names))
    return None


async def read_proc(path: str | Path) -> str | None:
    """Read a pseudo-file off the event loop. Failures degrade to ``None``."""
    try:
        return await asyncio.to_thread(Path(path).read_text)
    except (OSError, UnicodeDecodeError):
        logger.error("Error when trying to read %s", path, exc_info=True)
        return None


class BaseProbe(ABC):
    """Abstract base for all host probes.

    A probe determines one slice of the snapshot for the OS family it was
    built for. ``probe()`` resolves to a value or ``None``; it should not
    raise for ordinary I/O failures.
    """

    name: str = "base"

    def __init__(
        self,
        os_family: OSFamily,
        runner: Runner = run_command,
        reader: Reader = read_proc,
        sysctl_command: str = "sysctl",
    ) -> None:
        self.os_family = os_family
        self._runner = runner
        self._reader = reader
        self._sysctl_command = sysctl_command

    @abstractmethod
    async def probe(self) -> Any:
        """Resolve this probe's slice of the snapshot."""
        ...

    # ── helpers ─────────────────────────────────────────

    async def _sysctl(self, *names: str) -> str | None:
        return await query_sysctl(names, runner=self._runner, command=self._sysctl_command)

    async def _read(self, path: str | Path) -> str | None:
        return await self._reader(path)


def parse_count(raw: str | None) -> int | None:
    """Parse a raw counter as a positive whole number, else ``None``."""
    if raw is None:
        return None
    try:
        value = float(raw.strip())
    except ValueError:
        return None
    if not value.is_integer() or value <= 0:
        return None
    return int(value)
