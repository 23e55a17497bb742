"""One-shot host snapshot.

Collects processor, memory, kernel, container and cloud details for the
current machine and prints them as JSON.

Usage:
    hostprobe                          # settings from HOSTPROBE_* env vars
    hostprobe --config hostprobe.yaml  # settings from a YAML file
    hostprobe --platform freebsd --no-aws --debug
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from hostprobe.config import Settings, settings as env_settings
from hostprobe.engine import collect_system_info
from hostprobe.models import SystemSnapshot, detect_os_family

logger = logging.getLogger("hostprobe")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Host introspection snapshot")
    parser.add_argument("--config", help="YAML settings file")
    parser.add_argument("--platform", help="Override the detected platform (e.g. linux, darwin, freebsd)")
    parser.add_argument("--timeout", type=float, help="Per-probe timeout in seconds")
    parser.add_argument("--no-aws", action="store_true", help="Skip the AWS metadata lookup")
    parser.add_argument("--no-docker", action="store_true", help="Skip container id detection")
    parser.add_argument("--indent", type=int, default=2, help="JSON indent (default: 2)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def load_settings(args: argparse.Namespace) -> Settings:
    cfg = Settings.from_yaml(args.config) if args.config else env_settings.model_copy(deep=True)
    if args.timeout is not None:
        cfg.probe_timeout = args.timeout
    if args.no_aws:
        cfg.utilization.detect_aws = False
    if args.no_docker:
        cfg.utilization.detect_docker = False
    return cfg


async def run(args: argparse.Namespace) -> dict:
    cfg = load_settings(args)
    os_family = detect_os_family(args.platform)
    results: list[SystemSnapshot] = []

    await collect_system_info(cfg, results.append, os_family=os_family)

    logger.debug("Snapshot ready for %s", os_family)
    return results[0].to_payload()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )

    payload = asyncio.run(run(args))
    json.dump(payload, sys.stdout, indent=args.indent)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
