from __future__ import annotations

import pytest

from candwin.label_table import DEFAULT_LABEL_LAYOUT, LABEL_CELLS, LABEL_COLUMNS, LabelTable


def test_default_table_has_every_cell() -> None:
    table = LabelTable()
    assert len(table.cells) == LABEL_CELLS
    assert table.label_at(0, 0) == "1"
    assert table.label_at(1, 0) == "q"
    assert table.label_at(3, 12) == " "
    assert table.label_at(7, 10) == "_"
    assert table.label_at(1, 12) is None


def test_lookup_returns_row_and_column() -> None:
    table = LabelTable()
    assert table.lookup("a") == (2, 0)
    assert table.lookup("P") == (5, 9)
    assert table.lookup("|") == (4, 12)


def test_lookup_falls_back_to_origin_for_unknown_char() -> None:
    assert LabelTable().lookup("あ") == (0, 0)


def test_absent_label_lands_on_first_unbound_cell() -> None:
    assert LabelTable().lookup(None) == (1, 12)


def test_lookup_is_left_inverse_of_table() -> None:
    table = LabelTable()
    for row, col, label in table:
        if label is None:
            continue
        found = table.lookup(label)
        offset = found[0] * LABEL_COLUMNS + found[1]
        assert offset <= row * LABEL_COLUMNS + col
        assert table.label_at(*found) == label


def test_lookup_prefers_first_duplicate() -> None:
    cells = [None] * LABEL_CELLS
    cells[5] = "x"
    cells[40] = "x"
    table = LabelTable(cells)
    assert table.lookup("x") == (0, 5)


def test_from_layout_replaces_every_cell() -> None:
    table = LabelTable.from_layout(["ab", "c", "", None])
    assert table.label_at(0, 0) == "a"
    assert table.label_at(0, 1) == "c"
    assert table.label_at(0, 2) is None
    assert table.label_at(0, 3) is None
    # cells beyond the configured list are unbound, not taken from the default
    assert table.label_at(1, 0) is None


def test_from_layout_ignores_entries_past_the_grid() -> None:
    layout = ["k"] * (LABEL_CELLS + 10)
    table = LabelTable.from_layout(layout)
    assert all(label == "k" for label in table.cells)


def test_empty_layout_keeps_default() -> None:
    assert LabelTable.from_layout([]).cells == DEFAULT_LABEL_LAYOUT
    assert LabelTable.from_layout(None).cells == DEFAULT_LABEL_LAYOUT


def test_rejects_partial_cell_list() -> None:
    with pytest.raises(ValueError):
        LabelTable(["a", "b"])
