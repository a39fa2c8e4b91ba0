# -*- coding: utf-8 -*-
"""
Command line plan generation.

Usage:
    python -m dietplanner.cli generate <client.json> [--today YYYY-MM-DD] [--use-ai]
    python -m dietplanner.cli generate --client-id <id> [--clients-dir DIR]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from .agent_service import build_text_generator
from .clients.storage import JsonClientStore
from .errors import ClientNotFoundError
from .nutrition.calculator import policy_from_settings
from .plans.generator import PlanOrchestrator


def _parse_day(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date: {value}") from exc


def cmd_generate(args: argparse.Namespace) -> int:
    """Generate a plan and print it as JSON."""
    if args.client_file:
        path = Path(args.client_file)
        if not path.exists():
            print(f"Error: client file not found: {path}", file=sys.stderr)
            return 1
        try:
            record = json.loads(path.read_text(encoding="utf-8"))
        except ValueError as exc:
            print(f"Error: invalid JSON in {path}: {exc}", file=sys.stderr)
            return 1
        client_id = args.client_id or path.stem

        def fetch_client(_: str):
            return record
    else:
        if not args.client_id:
            print("Error: pass a client file or --client-id", file=sys.stderr)
            return 1
        client_id = args.client_id
        fetch_client = JsonClientStore(Path(args.clients_dir) if args.clients_dir else None)

    today = args.today
    orchestrator = PlanOrchestrator(
        fetch_client,
        build_text_generator() if args.use_ai else None,
        clock=lambda: today or date.today(),
        policy=policy_from_settings(),
        timeout=args.timeout,
    )
    try:
        outcome = asyncio.run(orchestrator.generate(client_id))
    except ClientNotFoundError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    payload = {"source": outcome.source, "plan": outcome.plan.model_dump()}
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dietplanner",
        description="Generate personalized meal plans",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    gen = subparsers.add_parser("generate", help="Generate a plan for one client")
    gen.add_argument("client_file", nargs="?", help="JSON file with the client record")
    gen.add_argument("--client-id", help="Client id (looked up in the clients directory without a file)")
    gen.add_argument("--clients-dir", help="Directory of <client_id>.json records")
    gen.add_argument("--today", type=_parse_day, help="Date used for age calculation (YYYY-MM-DD)")
    gen.add_argument("--use-ai", action="store_true", help="Try the configured AI provider first")
    gen.add_argument("--timeout", type=float, default=None, help="Seconds to wait for the AI provider")
    gen.set_defaults(func=cmd_generate)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
