"""Test configuration."""

from __future__ import annotations

import random
import sys
from collections.abc import Callable
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from digirain.fake_terminal import RecordingTerminal  # noqa: E402


@pytest.fixture
def rng() -> random.Random:
    """Seeded randomness source so drop sampling is reproducible."""
    return random.Random(1337)


@pytest.fixture
def make_terminal() -> Callable[..., RecordingTerminal]:
    def _make(width: int = 40, height: int = 10, **kwargs) -> RecordingTerminal:
        return RecordingTerminal(width=width, height=height, **kwargs)

    return _make
