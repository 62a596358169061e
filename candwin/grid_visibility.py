"""Decide which blocks of the label grid are shown for the loaded page.

The grid is split into four blocks::

    Main  A
    LRS   AS      (shifted keys)

Empty blocks are hidden so the popup keeps a minimal footprint that still
contains every occupied cell. The decision stays free of Qt types; the
renderer applies the resulting region and spacing.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict

from candwin.label_table import LABEL_COLUMNS, LABEL_ROWS

OccupancyFn = Callable[[int, int], bool]

BLOCK_SPACING = 20
HOMEPOSITION_SPACING = 2

SPACING_LEFT_BLOCK_COLUMN = 4
SPACING_LEFTHAND_FAR_COLUMN = 3
SPACING_RIGHTHAND_FAR_COLUMN = 5
SPACING_UPPER_FAR_ROW = 0
SPACING_SHIFT_UPPER_FAR_ROW = 4


@dataclass(frozen=True)
class Block:
    name: str
    row_start: int
    row_end: int
    col_start: int
    col_end: int

    def contains(self, row: int, col: int) -> bool:
        return self.row_start <= row < self.row_end and self.col_start <= col < self.col_end


BLOCK_MAIN = Block("main", 0, 4, 0, 10)
BLOCK_A = Block("a", 0, 4, 10, LABEL_COLUMNS)
BLOCK_LRS = Block("lrs", 4, LABEL_ROWS, 0, 10)
BLOCK_AS = Block("as", 4, LABEL_ROWS, 10, LABEL_COLUMNS)

SPACING_RIGHT_BLOCK_COLUMN = BLOCK_A.col_start - 1
SPACING_UP_BLOCK_ROW = BLOCK_A.row_end - 1


@dataclass(frozen=True)
class VisibleRegion:
    """Cells at ``row >= hide_row`` or ``col >= hide_col`` are hidden."""

    hide_row: int
    hide_col: int

    def is_visible(self, row: int, col: int) -> bool:
        return row < self.hide_row and col < self.hide_col


@dataclass(frozen=True)
class GridSpacing:
    """Pixel gaps after the given column/row indices."""

    col_spacing: Dict[int, int] = field(default_factory=dict)
    row_spacing: Dict[int, int] = field(default_factory=dict)


FULL_REGION = VisibleRegion(LABEL_ROWS, LABEL_COLUMNS)
MINIMAL_REGION = VisibleRegion(BLOCK_A.row_end, BLOCK_A.col_start)


def is_empty_block(occupied: OccupancyFn, block: Block) -> bool:
    for row in range(block.row_start, block.row_end):
        for col in range(block.col_start, block.col_end):
            if occupied(row, col):
                return False
    return True


def compute_visible_region(occupied: OccupancyFn) -> VisibleRegion:
    block_a = not is_empty_block(occupied, BLOCK_A)
    block_as = not is_empty_block(occupied, BLOCK_AS)
    block_lrs = not is_empty_block(occupied, BLOCK_LRS)

    if block_as:
        return FULL_REGION
    if block_lrs:
        if block_a:
            return FULL_REGION
        # shifted rows without the symbol columns
        return VisibleRegion(LABEL_ROWS, BLOCK_A.col_start)
    if block_a:
        # unshifted rows with the symbol columns
        return VisibleRegion(BLOCK_A.row_end, LABEL_COLUMNS)
    return MINIMAL_REGION


def grid_spacing(region: VisibleRegion) -> GridSpacing:
    """Spacing that separates visible blocks and marks the home position."""
    col_spacing = {
        SPACING_LEFT_BLOCK_COLUMN: BLOCK_SPACING,
        SPACING_LEFTHAND_FAR_COLUMN: HOMEPOSITION_SPACING,
        SPACING_RIGHTHAND_FAR_COLUMN: HOMEPOSITION_SPACING,
        SPACING_RIGHT_BLOCK_COLUMN: BLOCK_SPACING if region.hide_col > BLOCK_A.col_start else 0,
    }
    shift_rows_visible = region.hide_row > BLOCK_LRS.row_start
    row_spacing = {
        SPACING_UPPER_FAR_ROW: HOMEPOSITION_SPACING,
        SPACING_UP_BLOCK_ROW: BLOCK_SPACING if shift_rows_visible else 0,
        SPACING_SHIFT_UPPER_FAR_ROW: HOMEPOSITION_SPACING if shift_rows_visible else 0,
    }
    return GridSpacing(col_spacing=col_spacing, row_spacing=row_spacing)
