"""Drop color model and gradient arithmetic.

A drop color is either an RGB triple (faded across the drop's length), a named
terminal color string (used unchanged for every cell), or `RESET`, which draws
nothing but the spark.
"""

from __future__ import annotations

import random
from typing import Union

RGB = tuple[int, int, int]
DropColor = Union[RGB, str]

RESET = "default"
SPARK_COLOR = "bright_white"
BLACK: RGB = (0, 0, 0)
_CHANNEL_MASK = 0xFF


def is_reset(color: DropColor) -> bool:
    return isinstance(color, str) and color.strip().lower() == RESET


def gradient(color: RGB, length: int) -> list[RGB]:
    """Return `length` colors stepping up from black toward `color`.

    Each channel grows by `channel // length` per cell with 8-bit wraparound
    addition, so the first cell is always black.
    """
    if length < 1:
        raise ValueError("length must be >= 1")
    steps = tuple(channel // length for channel in color)
    current = BLACK
    colors: list[RGB] = []
    for _ in range(length):
        colors.append(current)
        current = (
            (current[0] + steps[0]) & _CHANNEL_MASK,
            (current[1] + steps[1]) & _CHANNEL_MASK,
            (current[2] + steps[2]) & _CHANNEL_MASK,
        )
    return colors


def random_rgb(rng: random.Random) -> RGB:
    """Sample a rainbow-style drop color, each channel in [0, 255)."""
    return (rng.randrange(0, 255), rng.randrange(0, 255), rng.randrange(0, 255))


def validate_rgb(color: RGB) -> RGB:
    if len(color) != 3 or any(
        not isinstance(channel, int) or not 0 <= channel <= 255 for channel in color
    ):
        raise ValueError(f"invalid RGB color: {color!r}")
    return color
