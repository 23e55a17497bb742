from __future__ import annotations

import asyncio

import pytest

from hostprobe.probes.base import CommandError, CommandResult


class FakeRunner:
    """Stands in for ``run_command``; answers ``sysctl -n <name>`` from a table.

    Table values are stdout strings, ``CommandResult`` objects, or exceptions
    to raise. Names missing from the table answer on stderr.
    """

    def __init__(self, table: dict[str, object] | None = None) -> None:
        self.table = table or {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, *args: str) -> CommandResult:
        name = args[-1]
        self.calls.append(name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(0)
            answer = self.table.get(name)
            if answer is None:
                return CommandResult(0, "", f"sysctl: unknown oid '{name}'")
            if isinstance(answer, BaseException):
                raise answer
            if isinstance(answer, CommandResult):
                return answer
            return CommandResult(0, str(answer), "")
        finally:
            self.in_flight -= 1


class FakeReader:
    """Stands in for ``read_proc``; serves pseudo-file text from a table."""

    def __init__(self, files: dict[str, str] | None = None) -> None:
        self.files = files or {}
        self.reads: list[str] = []

    async def __call__(self, path) -> str | None:
        self.reads.append(str(path))
        return self.files.get(str(path))


@pytest.fixture
def runner_factory():
    return FakeRunner


@pytest.fixture
def reader_factory():
    return FakeReader


@pytest.fixture
def broken_sysctl():
    return CommandError("sysctl: command not found")
