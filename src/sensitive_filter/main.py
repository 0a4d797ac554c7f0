"""
sensitive-filter command line

Run with: sensitive-filter <command>
Or: python -m sensitive_filter.main <command>

Commands:
    cache             Rebuild the trie from configuration and cache it
    clear             Remove the cached trie
    search [TEXT]     Print each sensitive word found, one per line
    filter [TEXT]     Print the redacted text

TEXT defaults to standard input. Configuration comes from --config, then
SENSITIVE_CONFIG_PATH, then SENSITIVE_* environment variables.

Exit Codes:
    0   OK
    1   Error (cache or word file failure, invalid configuration)
    2   Cache not enabled
"""

import argparse
import os
import sys
from typing import Optional

from sensitive_filter import __version__
from sensitive_filter.config.settings import load_config_from_yaml
from sensitive_filter.core.engine import Sensitive
from sensitive_filter.exceptions import SensitiveError
from sensitive_filter.logging.setup import correlation_scope, get_logger, setup_logging
from sensitive_filter.provider import load_default_config

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_CACHE_DISABLED = 2

CACHE_DISABLED_MESSAGE = "Please configure the cache value to true!"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sensitive-filter",
        description="Detect and redact sensitive words",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--log-level", default=None, help="Log level (default: WARNING)")
    parser.add_argument(
        "--correlation-id",
        default=None,
        help="Id stamped on every log line of this run (default: random)",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("cache", help="Rebuild the trie from configuration and cache it")
    sub.add_parser("clear", help="Remove the cached trie")

    search = sub.add_parser("search", help="List sensitive words in text")
    search.add_argument("text", nargs="?", help="Text to scan (default: stdin)")

    filter_ = sub.add_parser("filter", help="Redact sensitive words in text")
    filter_.add_argument("text", nargs="?", help="Text to redact (default: stdin)")
    filter_.add_argument("--replace-code", default=None, help="Replacement unit")

    return parser


def _read_text(args: argparse.Namespace) -> str:
    if args.text is not None:
        return args.text
    return sys.stdin.read()


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command and return the exit code."""
    config = load_config_from_yaml(args.config) if args.config else load_default_config()
    sensitive = Sensitive(config, name="cli")

    if args.command == "cache":
        if sensitive.reset_from_config().save_to_cache():
            print("Cache success.")
            return EXIT_OK
        print(CACHE_DISABLED_MESSAGE, file=sys.stderr)
        return EXIT_CACHE_DISABLED

    if args.command == "clear":
        if sensitive.clear_cache():
            print("Clear cache success.")
            return EXIT_OK
        print(CACHE_DISABLED_MESSAGE, file=sys.stderr)
        return EXIT_CACHE_DISABLED

    text = _read_text(args)

    if args.command == "search":
        for word in sensitive.search(text):
            print(word)
        return EXIT_OK

    if args.replace_code is not None:
        sensitive.configure_replacement(args.replace_code)
    sys.stdout.write(sensitive.filter(text))
    if args.text is not None:
        sys.stdout.write("\n")
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> int:
    """Entry point for the sensitive-filter command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level or os.getenv("SENSITIVE_LOG_LEVEL", "WARNING"))

    with correlation_scope(args.correlation_id):
        logger.info("Running command", extra={"event": "command_started", "command": args.command})
        try:
            return run(args)
        except (SensitiveError, FileNotFoundError, ValueError) as e:
            logger.error(str(e), extra={"event": "command_failed", "command": args.command})
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
