#!/usr/bin/env python3
"""
Command-line entry point.

    diningbot run [-t TOKEN] [--personal-id ID] [--browser-mode MODE] [--server] [-p PORT]

Flags take precedence over environment variables (TELEGRAM_BOT_TOKEN,
TELEGRAM_PERSONAL_ID, BROWSER_MODE, AS_SERVER, PORT) and ``.env``.
"""
import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from diningbot_core import __version__
from diningbot_core.config import BROWSER_MODES, Config, load_config
from diningbot_core.diagnostics import configure_logging
from diningbot_core.exceptions import ConfigError
from diningbot_core.orchestrator import run_daily_menu

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="diningbot",
        description="Gets today's dinner menu from the dining website and sends it to you via Telegram",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="Run the bot")
    run.add_argument("-t", "--token", help="Telegram bot token")
    run.add_argument("--personal-id", type=int, help="Telegram personal ID")
    run.add_argument("--browser-mode", choices=BROWSER_MODES, help="Browser mode: host, docker, or remote")
    run.add_argument("--server", action="store_const", const=True, default=None, help="Run as a server")
    run.add_argument("-p", "--port", type=int, help="Port to listen on")
    return parser


def config_from_args(args: argparse.Namespace) -> Config:
    return load_config(
        telegram_bot_token=args.token,
        personal_id=args.personal_id,
        browser_mode=args.browser_mode,
        as_server=args.server,
        port=args.port,
    )


def cmd_run(args: argparse.Namespace) -> int:
    try:
        config = config_from_args(args).validate()
    except ConfigError as e:
        logger.error(str(e))
        return 1
    configure_logging(config.debug)
    logger.info("Running bot")

    if config.as_server:
        from diningbot_server.app import run_server
        run_server(config)
        return 0

    if not asyncio.run(run_daily_menu(config, max_attempts=1)):
        logger.error("Failed to run handler")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "run":
        return cmd_run(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
