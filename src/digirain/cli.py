"""Command-line entry point: run the rain until interrupted."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .errors import TerminalIOError, ViewportError
from .field import RainField, RainStyle
from .logging_utils import setup_logging
from .paths import log_dir
from .runtime_config import (
    DEFAULT_DROP_COUNT,
    DEFAULT_FRAME_DELAY_S,
    DEFAULT_LENGTH_RANGE,
    resolve_log_level,
)
from .terminal import AnsiTerminal, TerminalBackend

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="digirain", description="Digital rain for your terminal."
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}"
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--quiet", action="store_true", help="Only log warnings and errors"
    )
    parser.add_argument("--log-file", help="Write logs to a file path")
    return parser


def build_field(terminal: TerminalBackend) -> RainField:
    return RainField(
        DEFAULT_DROP_COUNT,
        DEFAULT_LENGTH_RANGE,
        RainStyle.rainbow(),
        DEFAULT_FRAME_DELAY_S,
        terminal=terminal,
    )


def main() -> int:
    parser = build_parser()
    args = parser.parse_args()
    try:
        level = resolve_log_level(verbose=args.verbose, quiet=args.quiet)
        setup_logging(
            log_dir=log_dir(),
            level=level,
            log_file=Path(args.log_file) if args.log_file else None,
        )
    except OSError as exc:
        print(f"Could not set up logging: {exc}", file=sys.stderr)
        return 1

    terminal = AnsiTerminal(sys.stdout)
    try:
        field = build_field(terminal)
        with terminal.session():
            field.run()
    except KeyboardInterrupt:
        logger.info("Interrupted, exiting")
        return 0
    except ViewportError as exc:
        logger.exception("Terminal size unavailable")
        print(f"digirain needs a terminal: {exc}", file=sys.stderr)
        return 1
    except TerminalIOError as exc:
        logger.exception("Terminal output failed")
        print(f"Terminal output failed: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
