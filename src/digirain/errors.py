"""Error types raised by the rain simulation and its terminal backends."""

from __future__ import annotations


class DigiRainError(Exception):
    """Base class for unrecoverable rain errors."""


class ViewportError(DigiRainError):
    """Terminal size could not be determined (e.g. stdout is not a tty)."""


class TerminalIOError(DigiRainError):
    """Writing or flushing queued terminal output failed."""
