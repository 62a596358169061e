"""Typed commands of the candidate window protocol.

A frame is split on a single form feed. The first field names the command,
the remaining fields are positional. Parsing never raises: numeric fields that
cannot be read become 0 and missing text fields become empty.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Type, Union

from candwin.candidate_store import DEFAULT_CHARSET
from candwin.frame_reader import FIELD_SEPARATOR

_LOGGER = logging.getLogger("CandWin.Controller")

_INT_PREFIX = re.compile(rb"\s*([+-]?\d+)")

CHARSET_PREFIX = b"charset="
DISPLAY_LIMIT_PREFIX = b"display_limit="
PAGE_PREFIX = b"page="


@dataclass(frozen=True)
class Activate:
    charset: str
    display_limit: int
    entries: Tuple[bytes, ...]


@dataclass(frozen=True)
class Select:
    index: int
    need_hilite: bool


@dataclass(frozen=True)
class Show:
    pass


@dataclass(frozen=True)
class Hide:
    pass


@dataclass(frozen=True)
class Move:
    x: int
    y: int


@dataclass(frozen=True)
class Deactivate:
    pass


@dataclass(frozen=True)
class ShowCaretState:
    timeout_seconds: int
    text: str


@dataclass(frozen=True)
class UpdateCaretState:
    pass


@dataclass(frozen=True)
class HideCaretState:
    pass


@dataclass(frozen=True)
class SetNrCandidates:
    nr_candidates: int
    display_limit: int


@dataclass(frozen=True)
class SetPageCandidates:
    charset: str
    page: int
    entries: Tuple[bytes, ...]


@dataclass(frozen=True)
class ShowPage:
    page: int


Command = Union[
    Activate,
    Select,
    Show,
    Hide,
    Move,
    Deactivate,
    ShowCaretState,
    UpdateCaretState,
    HideCaretState,
    SetNrCandidates,
    SetPageCandidates,
    ShowPage,
]

COMMAND_NAMES: Dict[str, Type] = {
    "activate": Activate,
    "select": Select,
    "show": Show,
    "hide": Hide,
    "move": Move,
    "deactivate": Deactivate,
    "show_caret_state": ShowCaretState,
    "update_caret_state": UpdateCaretState,
    "hide_caret_state": HideCaretState,
    "set_nr_candidates": SetNrCandidates,
    "set_page_candidates": SetPageCandidates,
    "show_page": ShowPage,
}


def parse_int(field: Optional[bytes]) -> int:
    """Read a leading decimal integer the way ``atoi`` does; 0 otherwise."""
    if not field:
        return 0
    match = _INT_PREFIX.match(field)
    if match is None:
        return 0
    return int(match.group(1))


class _Fields:
    """Positional cursor over the argument fields of one frame."""

    def __init__(self, fields: Sequence[bytes]) -> None:
        self._fields = list(fields)
        self._pos = 0

    def peek(self) -> Optional[bytes]:
        if self._pos < len(self._fields):
            return self._fields[self._pos]
        return None

    def next(self) -> Optional[bytes]:
        value = self.peek()
        if value is not None:
            self._pos += 1
        return value

    def next_int(self) -> int:
        return parse_int(self.next())

    def next_text(self) -> str:
        value = self.next()
        if value is None:
            return ""
        return value.decode("utf-8", errors="replace")

    def optional_prefixed(self, prefix: bytes) -> Optional[bytes]:
        value = self.peek()
        if value is not None and value.startswith(prefix):
            self._pos += 1
            return value[len(prefix):]
        return None

    def entries(self) -> Tuple[bytes, ...]:
        collected: List[bytes] = []
        while True:
            value = self.next()
            if value is None or value == b"":
                break
            collected.append(value)
        return tuple(collected)


def _charset(fields: _Fields) -> str:
    value = fields.optional_prefixed(CHARSET_PREFIX)
    if not value:
        return DEFAULT_CHARSET
    return value.decode("ascii", errors="replace")


def _parse_activate(fields: _Fields) -> Activate:
    charset = _charset(fields)
    display_limit = parse_int(fields.optional_prefixed(DISPLAY_LIMIT_PREFIX))
    return Activate(charset=charset, display_limit=max(0, display_limit), entries=fields.entries())


def _parse_set_page_candidates(fields: _Fields) -> SetPageCandidates:
    charset = _charset(fields)
    page = parse_int(fields.optional_prefixed(PAGE_PREFIX))
    return SetPageCandidates(charset=charset, page=page, entries=fields.entries())


def _build(command_type: Type, fields: _Fields) -> Command:
    if command_type is Activate:
        return _parse_activate(fields)
    if command_type is Select:
        index = fields.next_int()
        return Select(index=index, need_hilite=fields.next_int() == 1)
    if command_type is Move:
        x = fields.next_int()
        return Move(x=x, y=fields.next_int())
    if command_type is ShowCaretState:
        timeout = fields.next_int()
        return ShowCaretState(timeout_seconds=timeout, text=fields.next_text())
    if command_type is SetNrCandidates:
        nr = fields.next_int()
        return SetNrCandidates(nr_candidates=max(0, nr), display_limit=max(0, fields.next_int()))
    if command_type is SetPageCandidates:
        return _parse_set_page_candidates(fields)
    if command_type is ShowPage:
        return ShowPage(page=fields.next_int())
    return command_type()


def parse_frame(frame: bytes) -> Optional[Command]:
    """Turn one frame into a command; None for unknown command names."""
    name_raw, *rest = frame.split(FIELD_SEPARATOR)
    name = name_raw.decode("ascii", errors="replace")
    command_type = COMMAND_NAMES.get(name)
    if command_type is None:
        _LOGGER.debug("Ignoring unknown command %r", name)
        return None
    return _build(command_type, _Fields(rest))
