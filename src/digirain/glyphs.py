"""Glyph tables and pickers for rain cells."""

from __future__ import annotations

import random
from hashlib import sha256

# Inclusive code point bands sampled by `random_symbol`.
ASCII_SYMBOL_BANDS: tuple[tuple[int, int], ...] = (
    (33, 47),  # ! " # $ % & ' ( ) * + , - . /
    (58, 64),  # : ; < = > ? @
    (65, 90),  # A-Z
    (91, 96),  # [ \ ] ^ _ `
    (97, 122),  # a-z
    (123, 126),  # { | } ~
)

PRINTABLE_SYMBOLS = "".join(
    ch for ch in map(chr, range(33, 127)) if ch.isprintable() and not ch.isspace()
)


def stable_symbol(serial: int, row: int) -> str:
    """Return a glyph that depends only on the drop serial and absolute row."""
    digest = sha256(f"{serial}:{row}".encode("ascii")).hexdigest()
    return PRINTABLE_SYMBOLS[int(digest[:8], 16) % len(PRINTABLE_SYMBOLS)]


def random_symbol(rng: random.Random) -> str:
    """Pick a band first, then a code point inside it."""
    low, high = rng.choice(ASCII_SYMBOL_BANDS)
    return chr(rng.randrange(low, high + 1))
