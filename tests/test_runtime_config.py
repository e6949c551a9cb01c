"""Tests for runtime config defaults and precedence behavior."""

from __future__ import annotations

import math

from digirain.cli import build_parser
from digirain.runtime_config import (
    DEFAULT_DROP_COUNT,
    DEFAULT_LENGTH_RANGE,
    FALLBACK_FRAME_DELAY_S,
    normalize_frame_delay,
    resolve_log_level,
)


def test_resolve_log_level_precedence_matrix() -> None:
    assert resolve_log_level(verbose=False, quiet=False) == "INFO"
    assert resolve_log_level(verbose=True, quiet=False) == "DEBUG"
    assert resolve_log_level(verbose=False, quiet=True) == "WARNING"
    assert resolve_log_level(verbose=True, quiet=True) == "WARNING"


def test_parser_flags_feed_log_level_resolution() -> None:
    args = build_parser().parse_args(["--verbose", "--quiet", "--log-file", "x.log"])
    assert resolve_log_level(verbose=args.verbose, quiet=args.quiet) == "WARNING"
    assert args.log_file == "x.log"


def test_normalize_frame_delay() -> None:
    assert normalize_frame_delay(0.05) == 0.05
    assert normalize_frame_delay(0) == 0.0
    assert normalize_frame_delay(None) == FALLBACK_FRAME_DELAY_S
    assert normalize_frame_delay(-1.0) == FALLBACK_FRAME_DELAY_S
    assert normalize_frame_delay(math.nan) == FALLBACK_FRAME_DELAY_S
    assert normalize_frame_delay(math.inf) == FALLBACK_FRAME_DELAY_S


def test_defaults() -> None:
    assert DEFAULT_DROP_COUNT == 80
    assert DEFAULT_LENGTH_RANGE == (6, 20)
