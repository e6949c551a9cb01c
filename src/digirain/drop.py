"""Single falling stream of glyphs."""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import NamedTuple

from .colors import SPARK_COLOR, DropColor, gradient, is_reset
from .glyphs import stable_symbol
from .terminal import TerminalBackend

GlyphPicker = Callable[[int], str]

SPAWN_POSITION_RANGE = (1, 8)
SPAWN_SPEED_RANGE = (1, 3)


class Cell(NamedTuple):
    offset: int
    glyph: str
    color: DropColor


class Drop:
    """State of one stream: where its head is and how it is colored.

    Cell offsets count down from the top row, `position - length`. The last
    offset is the spark. `column` is read-only after creation.
    """

    def __init__(
        self,
        length: int,
        color: DropColor,
        column: int,
        *,
        speed: int = 1,
        position: int = 0,
        serial: int = 0,
    ) -> None:
        if length < 1:
            raise ValueError("drop length must be >= 1")
        if speed < 1:
            raise ValueError("drop speed must be >= 1")
        if column < 0:
            raise ValueError("drop column must be >= 0")
        self.length = length
        self.color = color
        self._column = column
        self.speed = speed
        self.position = position
        self.serial = serial

    def __repr__(self) -> str:
        return (
            f"Drop(serial={self.serial}, column={self._column}, "
            f"position={self.position}, length={self.length}, speed={self.speed})"
        )

    @property
    def column(self) -> int:
        return self._column

    @classmethod
    def spawn(
        cls,
        length: int,
        color: DropColor,
        column: int,
        rng: random.Random,
        *,
        serial: int = 0,
    ) -> Drop:
        """Create a drop near the top with a random start row and speed."""
        return cls(
            length=length,
            color=color,
            column=column,
            position=rng.randrange(*SPAWN_POSITION_RANGE),
            speed=rng.randrange(*SPAWN_SPEED_RANGE),
            serial=serial,
        )

    @property
    def top(self) -> int:
        return self.position - self.length

    def glyph_for(self, offset: int) -> str:
        return stable_symbol(self.serial, self.position + offset)

    def visible_cells(self, pick: GlyphPicker | None = None) -> list[Cell]:
        """Return gradient cells followed by the spark cell."""
        pick = pick or self.glyph_for
        if is_reset(self.color):
            colors: list[DropColor] = []
        elif isinstance(self.color, tuple):
            colors = list(gradient(self.color, self.length))
        else:
            colors = [self.color] * self.length
        cells = [Cell(i, pick(i), color) for i, color in enumerate(colors)]
        spark = len(cells)
        cells.append(Cell(spark, pick(spark), SPARK_COLOR))
        return cells

    def draw(
        self,
        terminal: TerminalBackend,
        viewport_height: int,
        pick: GlyphPicker | None = None,
    ) -> int:
        """Queue writes for cells inside the viewport; return how many."""
        drawn = 0
        for offset, glyph, color in self.visible_cells(pick):
            row = self.top + offset
            if not 0 <= row < viewport_height:
                continue
            terminal.move_to(self.column, row)
            terminal.set_foreground(color)
            terminal.write(glyph)
            drawn += 1
        return drawn

    def clear_tail(
        self,
        terminal: TerminalBackend,
        viewport_height: int,
        speed: int | None = None,
    ) -> int:
        """Blank the rows just above the top cell that the last fall vacated."""
        cleared = 0
        for step in range(1, (self.speed if speed is None else speed) + 1):
            row = self.top - step
            if not 0 <= row < viewport_height:
                continue
            terminal.move_to(self.column, row)
            terminal.write(" ")
            cleared += 1
        return cleared

    def is_exhausted(self, viewport_height: int) -> bool:
        return self.top > viewport_height

    def fall(self) -> None:
        self.position += self.speed
