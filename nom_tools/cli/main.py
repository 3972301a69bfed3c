"""
NOM Tools CLI entry point.
"""

from __future__ import annotations

import sys

from rich.console import Console

from ..config.config import get_config
from ..plugins import PluginConfigNotFoundError
from ..utils.logger import setup_logger
from .argparser import build_parser
from .commands import COMMANDS

console = Console()


def _log_level(args, default: str) -> str:
    if args.debug:
        return "DEBUG"
    if args.verbose:
        return "INFO"
    if args.quiet:
        return "WARNING"
    return default


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    config = get_config()
    setup_logger(config.log.log_dir, _log_level(args, config.log.level))

    try:
        return COMMANDS[args.command](args, console)
    except (ValueError, KeyError, FileNotFoundError, PluginConfigNotFoundError) as e:
        # KeyError str() wraps the message in quotes
        message = e.args[0] if isinstance(e, KeyError) and e.args else str(e)
        console.print(f"[bold red]Error:[/bold red] {message}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
