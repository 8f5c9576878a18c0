"""Command line entrypoint: run the service, export data, manage Discord commands."""

from __future__ import annotations

import argparse
import json
import logging
import os
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version

from issuebot.infrastructure.discord.commands import DiscordCommandRegistrar
from issuebot.observability.logging import init_logging
from issuebot.runtime.bootstrap import build_discord_client, open_store
from issuebot.runtime.settings import Settings

logger = logging.getLogger("issuebot.cli")

_LOG_LEVELS = ("debug", "info", "warning", "error")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="issuebot", description="Discord bot for filing GitHub and GitLab issues.")
    parser.add_argument(
        "--log-level",
        choices=_LOG_LEVELS,
        help="Log level for this session (defaults to LOG_LEVEL or info).",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("serve", help="Run the interactions HTTP service.")
    commands.add_parser("export", help="Print all repository registrations as JSON.")
    sync = commands.add_parser("sync-commands", help="Register the bot's Discord application commands.")
    sync.add_argument(
        "--reset",
        action="store_true",
        help="Delete and recreate all commands. Requires users to re-install the app.",
    )
    commands.add_parser("version", help="Show the installed version.")
    return parser


def _package_version() -> str:
    try:
        return version("issuebot")
    except PackageNotFoundError:
        return "0.0.0"


def _export(settings: Settings) -> str:
    store = open_store(settings)
    try:
        records = store.export()
    finally:
        store.close()
    return json.dumps(records, indent=4)


def _sync_commands(settings: Settings, *, reset: bool) -> list[str]:
    registrar = DiscordCommandRegistrar(build_discord_client(settings))
    return registrar.sync(reset=reset)


def main(argv: Sequence[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command == "version":
        print(_package_version())
        return

    if args.log_level:
        os.environ["LOG_LEVEL"] = args.log_level
    init_logging()

    try:
        settings = Settings.load()
        if args.command == "serve":
            from issuebot.server import serve

            serve(settings)
        elif args.command == "export":
            print(_export(settings))
        elif args.command == "sync-commands":
            created = _sync_commands(settings, reset=args.reset)
            logger.info("discord commands synced", extra={"data": {"created": created, "reset": args.reset}})
    except KeyboardInterrupt:
        raise
    except Exception as exc:
        raise SystemExit(str(exc)) from exc


__all__ = ["main"]
