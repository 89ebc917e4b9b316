"""Cell-addressable output surfaces.

Positions are ``(column, row)`` pairs. Rows are counted relative to where the
screen object started writing, so nothing needs to query the terminal for an
absolute cursor position.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Protocol, Tuple

from rich.cells import cell_len
from rich.console import Console
from rich.control import Control
from rich.style import Style

Position = Tuple[int, int]


class Screen(Protocol):
    """Output sink used by the renderer and the line editor."""

    @property
    def width(self) -> int:
        ...

    @property
    def position(self) -> Position:
        ...

    def move_to(self, column: int, row: int) -> None:
        ...

    def write(self, text: str, style: Optional[Style] = None) -> None:
        ...

    def newline(self) -> None:
        ...


def _advance(column: int, row: int, length: int, width: int) -> Position:
    total = column + length
    return total % width, row + total // width


class RichScreen:
    """Screen driving a ``rich`` console.

    The cursor position is tracked from what was written through this object;
    the console is assumed to start at the beginning of a line.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console(highlight=False)
        self._column = 0
        self._row = 0

    @property
    def width(self) -> int:
        return max(1, self.console.width)

    @property
    def position(self) -> Position:
        return self._column, self._row

    def move_to(self, column: int, row: int) -> None:
        self.console.control(Control.move_to_column(column, row - self._row))
        self._column, self._row = column, row

    def write(self, text: str, style: Optional[Style] = None) -> None:
        lines = text.split("\n")
        for index, line in enumerate(lines):
            if index:
                self.newline()
            if not line:
                continue
            self.console.print(
                line,
                style=style,
                end="",
                markup=False,
                highlight=False,
                emoji=False,
                soft_wrap=True,
            )
            self._column, self._row = _advance(self._column, self._row, cell_len(line), self.width)

    def newline(self) -> None:
        self.console.print()
        self._column = 0
        self._row += 1


class MemoryScreen:
    """In-memory cell grid, used for headless rendering and in tests."""

    def __init__(self, width: int = 80):
        self._width = width
        self._column = 0
        self._row = 0
        self._cells: Dict[int, Dict[int, Tuple[str, Optional[Style]]]] = {}
        self.moves: List[Position] = []

    @property
    def width(self) -> int:
        return self._width

    @property
    def position(self) -> Position:
        return self._column, self._row

    def move_to(self, column: int, row: int) -> None:
        self.moves.append((column, row))
        self._column, self._row = column, row

    def write(self, text: str, style: Optional[Style] = None) -> None:
        for ch in text:
            if ch == "\n":
                self.newline()
                continue
            self._cells.setdefault(self._row, {})[self._column] = (ch, style)
            self._column, self._row = _advance(self._column, self._row, 1, self._width)

    def newline(self) -> None:
        self._column = 0
        self._row += 1

    # ------------------------------------------------------------------
    # Inspection helpers
    # ------------------------------------------------------------------
    def line(self, row: int) -> str:
        cells = self._cells.get(row, {})
        if not cells:
            return ""
        text = "".join(cells.get(col, (" ", None))[0] for col in range(max(cells) + 1))
        return text.rstrip()

    def lines(self) -> List[str]:
        if not self._cells:
            return []
        return [self.line(row) for row in range(max(self._cells) + 1)]

    def text(self) -> str:
        return "\n".join(self.lines())

    def style_at(self, column: int, row: int) -> Optional[Style]:
        return self._cells.get(row, {}).get(column, (" ", None))[1]
