from __future__ import annotations

from candwin.grid_visibility import (
    BLOCK_A,
    BLOCK_AS,
    BLOCK_LRS,
    BLOCK_MAIN,
    BLOCK_SPACING,
    FULL_REGION,
    HOMEPOSITION_SPACING,
    MINIMAL_REGION,
    VisibleRegion,
    compute_visible_region,
    grid_spacing,
    is_empty_block,
)


def occupancy(*cells):
    occupied = set(cells)
    return lambda row, col: (row, col) in occupied


def test_only_main_block_visible_when_others_empty() -> None:
    region = compute_visible_region(occupancy((0, 0), (3, 9)))
    assert region == VisibleRegion(hide_row=4, hide_col=10)
    assert region == MINIMAL_REGION


def test_nothing_occupied_shows_main_block() -> None:
    assert compute_visible_region(occupancy()) == MINIMAL_REGION


def test_only_shifted_symbols_show_everything() -> None:
    assert compute_visible_region(occupancy((7, 12))) == FULL_REGION


def test_shifted_keys_without_symbols_hide_symbol_columns() -> None:
    assert compute_visible_region(occupancy((0, 0), (5, 3))) == VisibleRegion(hide_row=8, hide_col=10)


def test_shifted_keys_with_symbols_show_everything() -> None:
    assert compute_visible_region(occupancy((5, 3), (1, 11))) == FULL_REGION


def test_symbols_without_shift_hide_shift_rows() -> None:
    assert compute_visible_region(occupancy((2, 10))) == VisibleRegion(hide_row=4, hide_col=13)


def test_region_contains_every_occupied_cell() -> None:
    samples = [(0, 0), (3, 12), (4, 0), (7, 9), (6, 11), (2, 5)]
    for first in samples:
        for second in samples:
            region = compute_visible_region(occupancy(first, second))
            assert region.is_visible(*first)
            assert region.is_visible(*second)


def test_blocks_cover_grid_without_overlap() -> None:
    blocks = (BLOCK_MAIN, BLOCK_A, BLOCK_LRS, BLOCK_AS)
    for row in range(8):
        for col in range(13):
            assert sum(block.contains(row, col) for block in blocks) == 1


def test_is_empty_block() -> None:
    assert is_empty_block(occupancy((0, 0)), BLOCK_A)
    assert not is_empty_block(occupancy((0, 10)), BLOCK_A)


def test_spacing_collapses_for_hidden_blocks() -> None:
    minimal = grid_spacing(MINIMAL_REGION)
    assert minimal.col_spacing[9] == 0
    assert minimal.row_spacing[3] == 0
    assert minimal.row_spacing[4] == 0
    assert minimal.col_spacing[4] == BLOCK_SPACING
    assert minimal.col_spacing[3] == HOMEPOSITION_SPACING

    full = grid_spacing(FULL_REGION)
    assert full.col_spacing[9] == BLOCK_SPACING
    assert full.row_spacing[3] == BLOCK_SPACING
    assert full.row_spacing[4] == HOMEPOSITION_SPACING
