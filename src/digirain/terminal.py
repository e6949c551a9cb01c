"""Terminal backend contract and the ANSI implementation used at runtime.

The rain field only ever talks to `TerminalBackend`. Operations are queued and
released to the real stream by a single `flush()` per frame.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from functools import lru_cache
from typing import Protocol, TextIO

from rich.color import Color, ColorParseError, ColorSystem
from rich.control import Control
from rich.style import Style

from .colors import DropColor, validate_rgb
from .errors import TerminalIOError, ViewportError

logger = logging.getLogger(__name__)


class TerminalBackend(Protocol):
    """Queued terminal operations consumed by `Drop` and `RainField`."""

    def size(self) -> tuple[int, int]: ...
    def move_to(self, column: int, row: int) -> None: ...
    def set_foreground(self, color: DropColor) -> None: ...
    def write(self, char: str) -> None: ...
    def clear_screen(self) -> None: ...
    def hide_cursor(self) -> None: ...
    def show_cursor(self) -> None: ...
    def reset_style(self) -> None: ...
    def flush(self) -> None: ...


class AnsiTerminal:
    """Render queued operations as ANSI escapes through rich primitives."""

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        color_system: ColorSystem = ColorSystem.TRUECOLOR,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._color_system = color_system
        self._pending: list[str] = []
        self._style = Style()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def size(self) -> tuple[int, int]:
        try:
            dimensions = os.get_terminal_size(self._stream.fileno())
        except (OSError, ValueError) as exc:
            raise ViewportError(f"cannot query terminal size: {exc}") from exc
        return dimensions.columns, dimensions.lines

    def move_to(self, column: int, row: int) -> None:
        self._pending.append(str(Control.move_to(column, row)))

    def set_foreground(self, color: DropColor) -> None:
        self._style = _foreground_style(color)

    def write(self, char: str) -> None:
        self._pending.append(
            self._style.render(char, color_system=self._color_system)
        )

    def clear_screen(self) -> None:
        self._pending.append(str(Control.clear()))
        self._pending.append(str(Control.home()))

    def hide_cursor(self) -> None:
        self._pending.append(str(Control.show_cursor(False)))

    def show_cursor(self) -> None:
        self._pending.append(str(Control.show_cursor(True)))

    def reset_style(self) -> None:
        self._style = Style()
        self._pending.append("\x1b[0m")

    def flush(self) -> None:
        payload = "".join(self._pending)
        self._pending.clear()
        try:
            if payload:
                self._stream.write(payload)
            self._stream.flush()
        except OSError as exc:
            raise TerminalIOError(f"terminal write failed: {exc}") from exc

    @contextmanager
    def session(self) -> Iterator[AnsiTerminal]:
        """Restore style and cursor on exit, including after errors."""
        try:
            yield self
        finally:
            self._pending.clear()
            self.reset_style()
            self.show_cursor()
            try:
                self.flush()
            except TerminalIOError:
                logger.warning("Could not restore terminal state", exc_info=True)


@lru_cache(maxsize=512)
def _foreground_style(color: DropColor) -> Style:
    if isinstance(color, tuple):
        r, g, b = validate_rgb(color)
        return Style(color=Color.from_rgb(r, g, b))
    try:
        return Style(color=Color.parse(color))
    except ColorParseError as exc:
        raise ValueError(f"unknown color: {color!r}") from exc

