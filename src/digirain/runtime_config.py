"""Runtime configuration defaults and normalization helpers.

These helpers keep CLI flag interpretation deterministic across entrypoints.
"""

from __future__ import annotations

import math

DEFAULT_DROP_COUNT = 80
DEFAULT_LENGTH_RANGE = (6, 20)
DEFAULT_FRAME_DELAY_S = 0.1
FALLBACK_FRAME_DELAY_S = 0.15


def resolve_log_level(*, verbose: bool, quiet: bool) -> str:
    """Resolve effective log level from CLI flags.

    Precedence is deterministic: --quiet overrides --verbose.
    """
    if quiet:
        return "WARNING"
    if verbose:
        return "DEBUG"
    return "INFO"


def normalize_frame_delay(value: float | None) -> float:
    """Return a usable frame delay in seconds, falling back when unset/invalid."""
    if value is None or not math.isfinite(value) or value < 0:
        return FALLBACK_FRAME_DELAY_S
    return float(value)
