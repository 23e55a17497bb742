"""Architecture and runtime validation tests.

Verifies:
- No circular imports
- Aggregation leaves no pending tasks behind
- Snapshots are JSON-serializable
"""

from __future__ import annotations

import asyncio
import importlib
import json
import os
import sys

import pytest

from hostprobe.config import Settings
from hostprobe.engine.aggregator import Aggregator, ProbeSet
from hostprobe.models import OSFamily
from hostprobe.probes import BaseProbe, run_command


# ── Circular import checks ────────────────────────────


_MODULES = [
    "hostprobe.config",
    "hostprobe.models",
    "hostprobe.models.platform",
    "hostprobe.models.snapshot",
    "hostprobe.parsers",
    "hostprobe.parsers.cpuinfo",
    "hostprobe.parsers.dockerinfo",
    "hostprobe.probes.base",
    "hostprobe.probes.processor",
    "hostprobe.probes.container",
    "hostprobe.probes.cloud",
    "hostprobe.engine.normalizer",
    "hostprobe.engine.aggregator",
    "hostprobe.main",
]


@pytest.mark.parametrize("module_name", _MODULES)
def test_no_circular_imports(module_name: str):
    """Every hostprobe module imports on its own."""
    saved = dict(sys.modules)
    to_remove = [k for k in sys.modules if k.startswith("hostprobe")]
    for k in to_remove:
        del sys.modules[k]
    try:
        importlib.import_module(module_name)
    except ImportError as e:
        if "circular" in str(e).lower():
            pytest.fail(f"Circular import detected in {module_name}: {e}")
        raise
    finally:
        sys.modules.update(saved)


def test_cross_module_imports():
    """Verify all key cross-module imports work together."""
    from hostprobe.config import settings
    from hostprobe.engine import Aggregator, ProbeSet, collect_system_info, normalize_utilization
    from hostprobe.models import OSFamily, SystemSnapshot, detect_os_family
    from hostprobe.parsers import parse_cpu_info, parse_docker_info, parse_mem_info
    from hostprobe.probes import CloudProbe, ContainerProbe, KernelProbe, MemoryProbe, ProcessorProbe

    assert settings is not None
    assert SystemSnapshot is not None


# ── Task hygiene ──────────────────────────────────────


class SlowProbe(BaseProbe):
    name = "slow"

    async def probe(self):
        await asyncio.sleep(0.02)
        return None


@pytest.mark.asyncio
async def test_collect_leaves_no_pending_tasks():
    before = asyncio.all_tasks()
    probes = ProbeSet(*(SlowProbe(OSFamily.LINUX) for _ in range(5)))

    await Aggregator(Settings(), os_family=OSFamily.LINUX, probes=probes).collect()

    leftover = asyncio.all_tasks() - before
    assert leftover == set()


@pytest.mark.asyncio
async def test_timed_out_probe_is_cancelled():
    cancelled = asyncio.Event()

    class StuckProbe(BaseProbe):
        name = "stuck"

        async def probe(self):
            try:
                await asyncio.sleep(60)
            except asyncio.CancelledError:
                cancelled.set()
                raise

    probes = ProbeSet(*(SlowProbe(OSFamily.LINUX) for _ in range(4)), StuckProbe(OSFamily.LINUX))
    await Aggregator(Settings(probe_timeout=0.05), os_family=OSFamily.LINUX, probes=probes).collect()

    assert cancelled.is_set()


@pytest.mark.asyncio
async def test_timed_out_command_leaves_no_child(tmp_path):
    pid_file = tmp_path / "child.pid"
    script = (
        "import os, time; "
        f"open({str(pid_file)!r}, 'w').write(str(os.getpid())); "
        "time.sleep(30)"
    )

    class SleepyCommandProbe(BaseProbe):
        name = "sleepy"

        async def probe(self):
            return await run_command(sys.executable, "-c", script)

    probes = ProbeSet(
        *(SlowProbe(OSFamily.LINUX) for _ in range(4)), SleepyCommandProbe(OSFamily.LINUX)
    )
    snapshot = await Aggregator(
        Settings(probe_timeout=2.0), os_family=OSFamily.LINUX, probes=probes
    ).collect()

    assert snapshot.aws is None
    pid = int(pid_file.read_text())
    with pytest.raises(ProcessLookupError):
        os.kill(pid, 0)


# ── Serialization ─────────────────────────────────────


@pytest.mark.asyncio
async def test_real_snapshot_is_json_serializable():
    """A snapshot from the real probes on this machine round-trips through json."""
    cfg = Settings()
    cfg.utilization.detect_aws = False
    snapshot = await Aggregator(cfg).collect()

    payload = snapshot.to_payload()
    assert json.loads(json.dumps(payload)) == payload
    assert payload["processorArch"]
