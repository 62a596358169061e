"""Label character grid used for one-keystroke candidate selection.

The grid mirrors a Japanese 106-key keyboard: four unshifted rows on top, the
shifted rows below, with punctuation keys in the three right-most columns.
"""
from __future__ import annotations

from typing import Iterator, Optional, Sequence, Tuple

LABEL_ROWS = 8
LABEL_COLUMNS = 13
LABEL_CELLS = LABEL_ROWS * LABEL_COLUMNS

Cell = Tuple[int, int]

# None marks a cell without a key binding.
DEFAULT_LABEL_LAYOUT: Tuple[Optional[str], ...] = (
    "1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "-", "^", "\\",
    "q", "w", "e", "r", "t", "y", "u", "i", "o", "p", "@", "[", None,
    "a", "s", "d", "f", "g", "h", "j", "k", "l", ";", ":", "]", None,
    "z", "x", "c", "v", "b", "n", "m", ",", ".", "/", None, None, " ",
    "!", '"', "#", "$", "%", "&", "'", "(", ")", None, "=", "~", "|",
    "Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P", "`", "{", None,
    "A", "S", "D", "F", "G", "H", "J", "K", "L", "+", "*", "}", None,
    "Z", "X", "C", "V", "B", "N", "M", "<", ">", "?", "_", None, None,
)


def cell_offset(row: int, col: int) -> int:
    return row * LABEL_COLUMNS + col


class LabelTable:
    """Immutable 8x13 table of label characters."""

    def __init__(self, cells: Optional[Sequence[Optional[str]]] = None) -> None:
        if cells is None:
            cells = DEFAULT_LABEL_LAYOUT
        if len(cells) != LABEL_CELLS:
            raise ValueError(f"label table needs {LABEL_CELLS} cells, got {len(cells)}")
        self._cells: Tuple[Optional[str], ...] = tuple(cells)

    @classmethod
    def from_layout(cls, layout: Optional[Sequence[Optional[str]]]) -> "LabelTable":
        """Build a table that replaces every cell from a configured layout.

        Entry i contributes its first character to cell i. Cells past the end of
        the layout, and entries that are empty or not strings, are left without
        a binding. An empty layout keeps the built-in keyboard table.
        """
        if not layout:
            return cls()
        cells: list[Optional[str]] = []
        for offset in range(LABEL_CELLS):
            entry = layout[offset] if offset < len(layout) else None
            if isinstance(entry, str) and entry:
                cells.append(entry[0])
            else:
                cells.append(None)
        return cls(cells)

    @property
    def cells(self) -> Tuple[Optional[str], ...]:
        return self._cells

    def label_at(self, row: int, col: int) -> Optional[str]:
        return self._cells[cell_offset(row, col)]

    def lookup(self, char: Optional[str]) -> Cell:
        """Return the first cell bound to ``char``; (0, 0) when none is."""
        for offset, label in enumerate(self._cells):
            if label == char:
                return divmod(offset, LABEL_COLUMNS)
        return (0, 0)

    def __iter__(self) -> Iterator[Tuple[int, int, Optional[str]]]:
        for offset, label in enumerate(self._cells):
            row, col = divmod(offset, LABEL_COLUMNS)
            yield row, col, label
