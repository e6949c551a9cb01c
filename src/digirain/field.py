"""Rain field: owns the drop population and drives the frame loop."""

from __future__ import annotations

import itertools
import logging
import random
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Literal

from rich.color import Color, ColorParseError

from .colors import DropColor, random_rgb, validate_rgb
from .drop import Drop, GlyphPicker
from .glyphs import random_symbol
from .runtime_config import normalize_frame_delay
from .terminal import TerminalBackend

logger = logging.getLogger(__name__)

GlyphMode = Literal["stable", "random"]
GLYPH_MODES: tuple[GlyphMode, ...] = ("stable", "random")


@dataclass(frozen=True)
class RainStyle:
    """Coloring policy for new drops; `color=None` means rainbow."""

    color: DropColor | None = None

    @classmethod
    def solid(cls, color: DropColor) -> RainStyle:
        if isinstance(color, tuple):
            validate_rgb(color)
        else:
            try:
                Color.parse(color)
            except ColorParseError as exc:
                raise ValueError(f"unknown color: {color!r}") from exc
        return cls(color=color)

    @classmethod
    def rainbow(cls) -> RainStyle:
        return cls(color=None)

    @property
    def is_rainbow(self) -> bool:
        return self.color is None

    def pick(self, rng: random.Random) -> DropColor:
        if self.color is None:
            return random_rgb(rng)
        return self.color


class RainField:
    """Fixed-size population of drops rendered onto one terminal.

    Exhausted drops are swap-removed, so collection order is not stable across
    ticks and carries no meaning.
    """

    def __init__(
        self,
        drop_count: int,
        length_range: tuple[int, int],
        style: RainStyle,
        frame_delay: float | None,
        *,
        terminal: TerminalBackend,
        rng: random.Random | None = None,
        glyph_mode: GlyphMode = "stable",
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if drop_count < 0:
            raise ValueError("drop_count must be >= 0")
        start, stop = length_range
        if start < 1 or stop < start:
            raise ValueError(f"invalid length range: {length_range!r}")
        if glyph_mode not in GLYPH_MODES:
            raise ValueError(f"unknown glyph mode: {glyph_mode!r}")
        self.drop_count = drop_count
        self.length_range = (start, stop)
        self.style = style
        self.frame_delay = normalize_frame_delay(frame_delay)
        self.terminal = terminal
        self.rng = rng if rng is not None else random.Random()
        self.glyph_mode = glyph_mode
        self.tick_count = 0
        self.recycled_count = 0
        self.drops: list[Drop] = []
        self._sleep = sleep
        self._serials = itertools.count()
        for _ in range(drop_count):
            self.add_drop()

    def add_drop(self) -> Drop:
        """Append a drop with a fresh random column, length and color."""
        width, _ = self.terminal.size()
        drop = Drop.spawn(
            self._sample_length(),
            self.style.pick(self.rng),
            self.rng.randrange(0, max(1, width)),
            self.rng,
            serial=next(self._serials),
        )
        self.drops.append(drop)
        return drop

    def _sample_length(self) -> int:
        start, stop = self.length_range
        if stop <= start + 1:
            return start
        return self.rng.randrange(start, stop)

    def _glyph_picker(self) -> GlyphPicker | None:
        if self.glyph_mode == "random":
            return lambda _offset: random_symbol(self.rng)
        return None

    def tick(self) -> int:
        """Advance one frame and flush it; return the number of drops recycled."""
        _, height = self.terminal.size()
        pick = self._glyph_picker()
        for drop in self.drops:
            drop.draw(self.terminal, height, pick)

        recycled = 0
        remaining = len(self.drops)
        index = 0
        while index < remaining:
            drop = self.drops[index]
            drop.fall()
            drop.clear_tail(self.terminal, height)
            if drop.is_exhausted(height):
                self.drops[index] = self.drops[-1]
                self.drops.pop()
                remaining -= 1
                recycled += 1
                logger.debug(
                    "Recycling drop",
                    extra={"serial": drop.serial, "column": drop.column},
                )
                continue
            index += 1
        for _ in range(recycled):
            self.add_drop()

        self.terminal.flush()
        self.tick_count += 1
        self.recycled_count += recycled
        return recycled

    def run(
        self,
        stop: threading.Event | None = None,
        *,
        max_ticks: int | None = None,
    ) -> int:
        """Run the frame loop until `stop` is set or `max_ticks` have elapsed.

        Without either bound this never returns. Terminal failures propagate.
        """
        self.terminal.clear_screen()
        self.terminal.hide_cursor()
        self.terminal.flush()
        logger.info(
            "Starting rain loop",
            extra={
                "drop_count": self.drop_count,
                "frame_delay_s": self.frame_delay,
                "rainbow": self.style.is_rainbow,
            },
        )
        ticks = 0
        while True:
            if stop is not None and stop.is_set():
                break
            if max_ticks is not None and ticks >= max_ticks:
                break
            self.tick()
            ticks += 1
            self._sleep(self.frame_delay)
        logger.info(
            "Rain loop stopped",
            extra={"ticks": ticks, "recycled": self.recycled_count},
        )
        return ticks
