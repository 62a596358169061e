from __future__ import annotations

import logging

from candwin.commands import (
    Activate,
    Deactivate,
    HideCaretState,
    Move,
    Select,
    SetNrCandidates,
    SetPageCandidates,
    ShowCaretState,
    ShowPage,
    parse_frame,
    parse_int,
)


def test_parse_int_behaves_like_atoi() -> None:
    assert parse_int(b"42") == 42
    assert parse_int(b" -3") == -3
    assert parse_int(b"12abc") == 12
    assert parse_int(b"abc") == 0
    assert parse_int(b"") == 0
    assert parse_int(None) == 0


def test_activate_with_charset_and_limit() -> None:
    command = parse_frame(b"activate\fcharset=EUC-JP\fdisplay_limit=10\fa\afoo\f1\abar\f")
    assert command == Activate(charset="EUC-JP", display_limit=10, entries=(b"a\afoo", b"1\abar"))


def test_activate_prefixes_are_optional() -> None:
    command = parse_frame(b"activate\fa\afoo")
    assert command == Activate(charset="UTF-8", display_limit=0, entries=(b"a\afoo",))


def test_activate_limit_without_charset() -> None:
    command = parse_frame(b"activate\fdisplay_limit=5\fa\afoo")
    assert command == Activate(charset="UTF-8", display_limit=5, entries=(b"a\afoo",))


def test_activate_entries_stop_at_empty_field() -> None:
    command = parse_frame(b"activate\fa\afoo\f\fb\abar")
    assert command.entries == (b"a\afoo",)


def test_negative_display_limit_is_clamped() -> None:
    command = parse_frame(b"activate\fdisplay_limit=-4\fa\afoo")
    assert command.display_limit == 0


def test_select_reads_highlight_flag() -> None:
    assert parse_frame(b"select\f7\f1") == Select(index=7, need_hilite=True)
    assert parse_frame(b"select\f7\f0") == Select(index=7, need_hilite=False)
    assert parse_frame(b"select") == Select(index=0, need_hilite=False)


def test_move_and_show_page() -> None:
    assert parse_frame(b"move\f120\f45") == Move(x=120, y=45)
    assert parse_frame(b"move\fx") == Move(x=0, y=0)
    assert parse_frame(b"show_page\f2") == ShowPage(page=2)


def test_caret_state_commands() -> None:
    assert parse_frame("show_caret_state\f3\fあ".encode("utf-8")) == ShowCaretState(timeout_seconds=3, text="あ")
    assert parse_frame(b"show_caret_state") == ShowCaretState(timeout_seconds=0, text="")
    assert parse_frame(b"hide_caret_state") == HideCaretState()


def test_set_nr_candidates_clamps_negatives() -> None:
    assert parse_frame(b"set_nr_candidates\f7\f0") == SetNrCandidates(nr_candidates=7, display_limit=0)
    assert parse_frame(b"set_nr_candidates\f-2\f-1") == SetNrCandidates(nr_candidates=0, display_limit=0)


def test_set_page_candidates() -> None:
    command = parse_frame(b"set_page_candidates\fcharset=UTF-8\fpage=2\fa\afoo\fs\abar\f")
    assert command == SetPageCandidates(charset="UTF-8", page=2, entries=(b"a\afoo", b"s\abar"))


def test_set_page_candidates_without_prefixes() -> None:
    command = parse_frame(b"set_page_candidates\fa\afoo")
    assert command == SetPageCandidates(charset="UTF-8", page=0, entries=(b"a\afoo",))


def test_no_argument_commands() -> None:
    assert parse_frame(b"deactivate") == Deactivate()
    # extra fields are ignored
    assert parse_frame(b"deactivate\fjunk") == Deactivate()


def test_unknown_command_is_ignored(caplog) -> None:
    caplog.set_level(logging.DEBUG, logger="CandWin.Controller")
    assert parse_frame(b"frobnicate\f1") is None
    assert "frobnicate" in caplog.text
