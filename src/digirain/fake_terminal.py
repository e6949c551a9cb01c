"""In-memory terminal backend for deterministic testing."""

from __future__ import annotations

from dataclasses import dataclass, field

from .colors import DropColor
from .errors import TerminalIOError, ViewportError

Op = tuple[object, ...]


@dataclass(frozen=True)
class CellWrite:
    """One character written at a resolved screen position."""

    column: int
    row: int
    char: str
    color: DropColor | None


@dataclass
class RecordingTerminal:
    """Record queued operations instead of writing escape sequences.

    `pending` holds operations queued since the last flush; each successful
    flush appends them to `flushed` as one batch.
    """

    width: int = 80
    height: int = 24
    fail_size: bool = False
    fail_flush: bool = False
    pending: list[Op] = field(default_factory=list)
    flushed: list[list[Op]] = field(default_factory=list)
    size_queries: int = 0

    def size(self) -> tuple[int, int]:
        self.size_queries += 1
        if self.fail_size:
            raise ViewportError("not attached to a terminal")
        return self.width, self.height

    def move_to(self, column: int, row: int) -> None:
        self.pending.append(("move", column, row))

    def set_foreground(self, color: DropColor) -> None:
        self.pending.append(("color", color))

    def write(self, char: str) -> None:
        self.pending.append(("write", char))

    def clear_screen(self) -> None:
        self.pending.append(("clear",))

    def hide_cursor(self) -> None:
        self.pending.append(("hide_cursor",))

    def show_cursor(self) -> None:
        self.pending.append(("show_cursor",))

    def reset_style(self) -> None:
        self.pending.append(("reset",))

    def flush(self) -> None:
        if self.fail_flush:
            raise TerminalIOError("broken pipe")
        self.flushed.append(list(self.pending))
        self.pending.clear()

    def cell_writes(self, ops: list[Op] | None = None) -> list[CellWrite]:
        """Resolve a run of operations into positioned character writes."""
        column = row = 0
        color: DropColor | None = None
        writes: list[CellWrite] = []
        for op in self.pending if ops is None else ops:
            kind = op[0]
            if kind == "move":
                column, row = int(op[1]), int(op[2])  # type: ignore[call-overload]
            elif kind == "color":
                color = op[1]  # type: ignore[assignment]
            elif kind == "write":
                writes.append(CellWrite(column, row, str(op[1]), color))
                column += 1
            elif kind == "reset":
                color = None
        return writes
