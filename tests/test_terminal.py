"""Tests for the ANSI terminal backend and the recording fake."""

from __future__ import annotations

import io

import pytest

from digirain.errors import TerminalIOError, ViewportError
from digirain.fake_terminal import CellWrite, RecordingTerminal
from digirain.terminal import AnsiTerminal


class BrokenStream(io.StringIO):
    def write(self, s: str) -> int:
        raise BrokenPipeError("pipe closed")


def test_size_raises_viewport_error_when_not_a_tty() -> None:
    terminal = AnsiTerminal(io.StringIO())
    with pytest.raises(ViewportError):
        terminal.size()


def test_queued_operations_are_written_only_on_flush() -> None:
    stream = io.StringIO()
    terminal = AnsiTerminal(stream)
    terminal.move_to(2, 3)
    terminal.set_foreground((1, 2, 3))
    terminal.write("x")
    assert stream.getvalue() == ""
    assert terminal.pending == 2

    terminal.flush()
    output = stream.getvalue()
    assert "\x1b[4;3H" in output
    assert "\x1b[38;2;1;2;3mx" in output
    assert terminal.pending == 0


def test_named_colors_render_as_palette_codes() -> None:
    stream = io.StringIO()
    terminal = AnsiTerminal(stream)
    terminal.set_foreground("bright_white")
    terminal.write("#")
    terminal.flush()
    assert "\x1b[97m#" in stream.getvalue()


def test_unknown_color_name_is_rejected() -> None:
    terminal = AnsiTerminal(io.StringIO())
    with pytest.raises(ValueError):
        terminal.set_foreground("not-a-color")


def test_screen_setup_sequences() -> None:
    stream = io.StringIO()
    terminal = AnsiTerminal(stream)
    terminal.clear_screen()
    terminal.hide_cursor()
    terminal.flush()
    output = stream.getvalue()
    assert "\x1b[2J" in output
    assert "\x1b[?25l" in output


def test_flush_failure_raises_terminal_io_error() -> None:
    terminal = AnsiTerminal(BrokenStream())
    terminal.write("x")
    with pytest.raises(TerminalIOError) as excinfo:
        terminal.flush()
    assert isinstance(excinfo.value.__cause__, BrokenPipeError)


def test_session_restores_cursor_after_error() -> None:
    stream = io.StringIO()
    terminal = AnsiTerminal(stream)
    with pytest.raises(RuntimeError):
        with terminal.session():
            terminal.hide_cursor()
            raise RuntimeError("boom")
    output = stream.getvalue()
    assert output.endswith("\x1b[?25h")
    assert "\x1b[?25l" not in output


def test_recording_terminal_resolves_cell_writes() -> None:
    terminal = RecordingTerminal(width=10, height=5)
    terminal.move_to(1, 2)
    terminal.set_foreground("green")
    terminal.write("a")
    terminal.write("b")
    terminal.reset_style()
    terminal.write("c")
    assert terminal.cell_writes() == [
        CellWrite(1, 2, "a", "green"),
        CellWrite(2, 2, "b", "green"),
        CellWrite(3, 2, "c", None),
    ]
    terminal.flush()
    assert terminal.pending == []
    assert len(terminal.flushed) == 1


def test_recording_terminal_failure_switches() -> None:
    terminal = RecordingTerminal(fail_size=True, fail_flush=True)
    with pytest.raises(ViewportError):
        terminal.size()
    with pytest.raises(TerminalIOError):
        terminal.flush()
