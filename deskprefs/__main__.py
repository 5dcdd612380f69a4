"""Command line access to the settings store."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from typing import Any, Sequence

from deskprefs_core import LocalSettingsProvider, SettingsError

from .app import bootstrap_async, get_provider

LOGGER = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="deskprefs", description="Inspect and edit desktop settings.")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("path", help="print the settings file location")
    sub.add_parser("show", help="print all settings as JSON")
    sub.add_parser("migrate", help="load settings, migrating from the legacy location if needed")

    set_cmd = sub.add_parser("set", help="set KEY to VALUE (parsed as JSON when possible) and save")
    set_cmd.add_argument("key")
    set_cmd.add_argument("value")

    unset_cmd = sub.add_parser("unset", help="remove KEY and save")
    unset_cmd.add_argument("key")

    export_cmd = sub.add_parser("export", help="write settings to PATH")
    export_cmd.add_argument("path")

    import_cmd = sub.add_parser("import", help="replace settings with the contents of PATH and save")
    import_cmd.add_argument("path")
    return parser


async def _run_command(args: argparse.Namespace, provider: LocalSettingsProvider) -> int:
    if args.command == "path":
        if not provider.available:
            print("unavailable", file=sys.stderr)
            return 1
        print(provider.file_path)
        return 0

    if args.command == "import":
        if not provider.backend.exists(args.path):
            print(f"No settings file at {args.path}", file=sys.stderr)
            return 1
        await provider.import_async(args.path)
        await provider.save_async()
        print(f"Imported {len(provider)} settings from {args.path}")
        return 0

    outcome = await bootstrap_async(provider)
    if args.command == "migrate":
        print(outcome.value)
    elif args.command == "show":
        print(json.dumps(provider.snapshot(), indent=2, sort_keys=True, default=_json_default))
    elif args.command == "set":
        provider.set(args.key, _parse_value(args.value))
        await provider.save_async()
    elif args.command == "unset":
        if not provider.remove(args.key):
            print(f"No setting named {args.key!r}", file=sys.stderr)
            return 1
        await provider.save_async()
    elif args.command == "export":
        await provider.export_async(args.path)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)
    provider = get_provider()
    try:
        return asyncio.run(_run_command(args, provider))
    except (SettingsError, TypeError) as exc:
        LOGGER.error("%s", exc)
        return 1


def _parse_value(raw: str) -> Any:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw


def _json_default(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    raise TypeError(f"Cannot display {type(value).__name__}")


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
