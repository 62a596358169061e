"""Decoded candidates and their partitioning into grid pages."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from candwin.label_table import LabelTable

_LOGGER = logging.getLogger("CandWin.Controller")

DEFAULT_CHARSET = "UTF-8"
ENTRY_SEPARATOR = b"\a"

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Candidate:
    index: int
    label_char: Optional[str]
    text: str
    annotation: str = ""


def decode_entry(raw: bytes, charset: str, index: int) -> Optional[Candidate]:
    """Decode ``label<\\a>text<\\a>annotation``; None when the bytes are invalid."""
    try:
        # non-text codecs (zlib, rot13, ...) raise LookupError here
        decoded = raw.decode(charset or DEFAULT_CHARSET)
    except (LookupError, UnicodeDecodeError, ValueError) as exc:
        _LOGGER.warning("Dropping candidate %d: cannot decode as %s (%s)", index, charset, exc)
        return None
    parts = decoded.split(ENTRY_SEPARATOR.decode("ascii"), 2)
    label = parts[0][:1] or None
    text = parts[1] if len(parts) > 1 else ""
    annotation = parts[2] if len(parts) > 2 else ""
    return Candidate(index=index, label_char=label, text=text, annotation=annotation)


def page_count_for(nr_candidates: int, display_limit: int) -> int:
    if display_limit <= 0:
        return 1
    return max(1, -(-nr_candidates // display_limit))


class Page:
    """Candidates of one page placed on the label grid."""

    def __init__(self, entries: Sequence[Optional[Candidate]], label_table: LabelTable) -> None:
        self._entries: Tuple[Optional[Candidate], ...] = tuple(entries)
        self._cells: Dict[Cell, Candidate] = {}
        for candidate in self._entries:
            if candidate is None:
                continue
            # later candidates overwrite earlier ones bound to the same key
            self._cells[label_table.lookup(candidate.label_char)] = candidate

    @property
    def entries(self) -> Tuple[Optional[Candidate], ...]:
        return self._entries

    def candidate_at(self, row: int, col: int) -> Optional[Candidate]:
        return self._cells.get((row, col))

    def is_occupied(self, row: int, col: int) -> bool:
        return (row, col) in self._cells

    def cell_of(self, index: int) -> Optional[Cell]:
        for cell, candidate in self._cells.items():
            if candidate.index == index:
                return cell
        return None

    def __len__(self) -> int:
        return len(self._entries)


def empty_occupancy(row: int, col: int) -> bool:
    return False


class CandidateStore:
    """Owns the candidate pages of the current session."""

    def __init__(self, label_table: Optional[LabelTable] = None) -> None:
        self._label_table = label_table or LabelTable()
        self.nr_candidates = 0
        self.display_limit = 0
        self._pages: List[Optional[Page]] = [None]

    @property
    def label_table(self) -> LabelTable:
        return self._label_table

    @property
    def page_count(self) -> int:
        return len(self._pages)

    @property
    def pages(self) -> Tuple[Optional[Page], ...]:
        return tuple(self._pages)

    def page(self, page_number: int) -> Optional[Page]:
        if 0 <= page_number < len(self._pages):
            return self._pages[page_number]
        return None

    def activate(self, charset: str, display_limit: int, raw_entries: Iterable[bytes]) -> None:
        """Replace every page with eagerly delivered candidates."""
        entries = [decode_entry(raw, charset, index) for index, raw in enumerate(raw_entries)]
        self.nr_candidates = len(entries)
        self.display_limit = max(0, display_limit)
        count = page_count_for(self.nr_candidates, self.display_limit)
        if self.display_limit:
            chunks = [
                entries[number * self.display_limit:(number + 1) * self.display_limit]
                for number in range(count)
            ]
        else:
            chunks = [entries]
        self._pages = [Page(chunk, self._label_table) for chunk in chunks]
        _LOGGER.debug(
            "Activated %d candidates (display_limit=%d, pages=%d, charset=%s)",
            self.nr_candidates,
            self.display_limit,
            self.page_count,
            charset,
        )

    def reserve(self, nr_candidates: int, display_limit: int) -> None:
        """Allocate empty page placeholders for lazily streamed candidates."""
        self.nr_candidates = max(0, nr_candidates)
        self.display_limit = max(0, display_limit)
        self._pages = [None] * page_count_for(self.nr_candidates, self.display_limit)
        _LOGGER.debug(
            "Reserved %d candidates (display_limit=%d, pages=%d)",
            self.nr_candidates,
            self.display_limit,
            self.page_count,
        )

    def fill_page(self, page_number: int, charset: str, raw_entries: Iterable[bytes]) -> bool:
        if not 0 <= page_number < len(self._pages):
            _LOGGER.debug("Ignoring candidates for page %d (page_count=%d)", page_number, self.page_count)
            return False
        base = page_number * self.display_limit
        slots = self.nr_candidates - base
        if self.display_limit:
            slots = min(self.display_limit, slots)
        raw_list = list(raw_entries)
        if len(raw_list) > slots:
            _LOGGER.debug(
                "Dropping %d candidates past the end of page %d (slots=%d)",
                len(raw_list) - slots,
                page_number,
                slots,
            )
            raw_list = raw_list[:max(0, slots)]
        entries = [decode_entry(raw, charset, base + offset) for offset, raw in enumerate(raw_list)]
        self._pages[page_number] = Page(entries, self._label_table)
        return True


__all__ = [
    "Candidate",
    "CandidateStore",
    "DEFAULT_CHARSET",
    "ENTRY_SEPARATOR",
    "Page",
    "decode_entry",
    "empty_occupancy",
    "page_count_for",
]
