"""Command-line front door for zeno.

Parses CLI options, resolves settings, and configures file logging.
Then dispatches into the interactive search session or the add flow.
"""

from __future__ import annotations

import argparse
import sys

from .config import load_settings, save_ui_preferences
from .errors import ZenoError
from .logs import configure_logging
from .runtime import run_search
from .ui_theme import available_theme_names

COMMANDS = ("search", "add", "help")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="zeno",
        description="Store and retrieve command snippets from the terminal.",
        epilog="Commands: search (default) browse, copy, edit and delete snippets; "
        "add stores a new snippet; help shows this message.",
    )
    parser.add_argument("command", nargs="?", default="search", help="search, add, or help.")
    parser.add_argument("--style", default=None, help="Pygments style name for code previews.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--no-ai", action="store_true", help="Skip AI summaries when adding snippets.")
    parser.add_argument("--log-file", default=None, help="Write logs to this file.")
    parser.add_argument("--log-level", default=None, help="Log level (DEBUG, INFO, WARNING, ERROR).")
    return parser


def run_add_command(settings) -> int:
    """Run the add flow against the configured store; errors print and exit 1."""
    from .add import run_add
    from .store import SqlItemStore

    store = SqlItemStore(settings.database_url)
    try:
        run_add(store, ai_enabled=settings.ai_enabled)
    except ZenoError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Error: aborted", file=sys.stderr)
        return 1
    finally:
        store.close()
    return 0


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and run the selected command.

    Always finishes with ``SystemExit`` carrying the process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "help":
        parser.print_help()
        raise SystemExit(0)
    if args.command not in COMMANDS:
        print(f"zeno: unknown command {args.command!r}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        raise SystemExit(1)

    settings = load_settings(
        style=args.style,
        theme=args.theme,
        no_color=args.no_color,
        no_ai=args.no_ai,
        log_file=args.log_file,
        log_level=args.log_level,
    )
    configure_logging(settings.log_file, settings.log_level)
    save_ui_preferences(style=args.style, theme=args.theme)

    if args.command == "add":
        raise SystemExit(run_add_command(settings))
    raise SystemExit(run_search(settings))


if __name__ == "__main__":
    main()
