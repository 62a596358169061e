"""Candidate window session owner.

The controller applies protocol commands to the candidate store and the
pagination state, then tells the renderer what to display. It keeps no Qt
types; the renderer, caret indicator and index reply sink are injected.
"""
from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional, Tuple

from candwin.candidate_store import CandidateStore, Page, empty_occupancy
from candwin.grid_visibility import MINIMAL_REGION, VisibleRegion, compute_visible_region, grid_spacing
from candwin.label_table import LabelTable
from candwin.layout_positioner import DEFAULT_POPUP_HEIGHT, DEFAULT_POPUP_WIDTH, place_popup
from candwin.pagination import PaginationState
from candwin.renderer import CaretIndicator, Renderer, build_cell_views

_LOGGER = logging.getLogger("CandWin.Controller")

ScreenSizeFn = Callable[[], Tuple[int, int]]
ReportIndexFn = Callable[[int], None]


def _ignore_index(index: int) -> None:
    return None


class CandidateWindowController:
    """Owns the single session of the candidate table window."""

    def __init__(
        self,
        renderer: Renderer,
        *,
        screen_size_fn: ScreenSizeFn,
        label_table: Optional[LabelTable] = None,
        caret_indicator: Optional[CaretIndicator] = None,
        report_index_fn: ReportIndexFn = _ignore_index,
    ) -> None:
        self._renderer = renderer
        self._caret = caret_indicator
        self._screen_size = screen_size_fn
        self._report_index = report_index_fn
        self.store = CandidateStore(label_table)
        self.pagination = PaginationState(
            self.store,
            load_page_fn=self._load_page,
            shrink_fn=self._renderer.shrink,
            index_changed_fn=self._index_changed,
        )
        self.is_active = False
        self.need_hilite = False
        self.pos_x = 0
        self.pos_y = 0
        self.width = DEFAULT_POPUP_WIDTH
        self.height = DEFAULT_POPUP_HEIGHT
        self.region: VisibleRegion = MINIMAL_REGION
        if self._caret is not None:
            self._caret.update_state(0, 0, None)

    @property
    def label_table(self) -> LabelTable:
        return self.store.label_table

    # Engine commands ------------------------------------------------------

    def activate(self, charset: str, display_limit: int, entries: Iterable[bytes]) -> None:
        self.store.activate(charset, display_limit, entries)
        self._reset_session()
        self.pagination.set_page(0)
        self.is_active = True
        self._show_window()

    def select(self, index: int, need_hilite: bool) -> None:
        self.need_hilite = need_hilite
        self.pagination.set_index(index)

    def show(self) -> None:
        if self.is_active:
            self._show_window()

    def hide(self) -> None:
        self._renderer.hide()

    def move(self, x: int, y: int) -> None:
        self.pos_x = x
        self.pos_y = y
        self.layout()

    def deactivate(self) -> None:
        self._renderer.hide()
        self.is_active = False

    def show_caret_state(self, timeout_seconds: int, text: str) -> None:
        if self._caret is None:
            _LOGGER.debug("No caret indicator attached; dropping show_caret_state")
            return
        self._caret.update_state(self.pos_x, self.pos_y, text)
        if timeout_seconds != 0:
            self._caret.set_timeout(timeout_seconds * 1000)
        self._caret.show()

    def update_caret_state(self) -> None:
        if self._caret is not None:
            self._caret.update_state(self.pos_x, self.pos_y, None)

    def hide_caret_state(self) -> None:
        if self._caret is not None:
            self._caret.hide()

    def set_nr_candidates(self, nr_candidates: int, display_limit: int) -> None:
        self.store.reserve(nr_candidates, display_limit)
        self._reset_session()
        self.is_active = True

    def set_page_candidates(self, charset: str, page: int, entries: Iterable[bytes]) -> None:
        self.store.fill_page(page, charset, entries)

    def show_page(self, page: int) -> None:
        self.pagination.set_page(page)
        self._show_window()

    # Renderer feedback ----------------------------------------------------

    def resize(self, width: int, height: int) -> None:
        """Record the popup size reported by the window system and re-place it."""
        self.width = width
        self.height = height
        self.layout()

    def layout(self) -> Tuple[int, int]:
        x, y = place_popup((self.pos_x, self.pos_y), (self.width, self.height), self._screen_size())
        self._renderer.move_to(x, y)
        return x, y

    def select_cell(self, row: int, col: int) -> Optional[int]:
        """Select the candidate shown in a cell and report it to the engine."""
        if not self.is_active:
            return None
        page = self.store.page(self.pagination.page_index)
        candidate = page.candidate_at(row, col) if page is not None else None
        if candidate is None:
            return None
        self.pagination.set_index(candidate.index)
        _LOGGER.debug("Candidate %d picked from cell (%d, %d)", candidate.index, row, col)
        self._report_index(candidate.index)
        return candidate.index

    # Internals ------------------------------------------------------------

    def _reset_session(self) -> None:
        self.pagination.reset()
        self.need_hilite = False

    def _load_page(self, page_number: int, page: Optional[Page]) -> None:
        self._renderer.show_page(build_cell_views(page, self.label_table))
        occupied = page.is_occupied if page is not None else empty_occupancy
        self.region = compute_visible_region(occupied)
        if page is None:
            _LOGGER.debug("Page %d has not been filled yet", page_number)

    def _index_changed(self, index: int) -> None:
        self._renderer.set_label(self.pagination.label_text())
        self._renderer.set_highlight(self._highlight_cell(index))

    def _highlight_cell(self, index: int) -> Optional[Tuple[int, int]]:
        if not self.need_hilite or index < 0:
            return None
        page = self.store.page(self.pagination.page_index)
        if page is None:
            return None
        return page.cell_of(index)

    def _show_window(self) -> None:
        self._renderer.set_visible_region(self.region, grid_spacing(self.region))
        self._renderer.show()
