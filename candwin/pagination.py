"""Index/page selection state machine over the candidate store."""
from __future__ import annotations

from typing import Callable, Optional

from candwin.candidate_store import CandidateStore, Page

LoadPageFn = Callable[[int, Optional[Page]], None]
IndexChangedFn = Callable[[int], None]


def _noop_load(page_number: int, page: Optional[Page]) -> None:
    return None


def _noop() -> None:
    return None


def _noop_index(index: int) -> None:
    return None


class PaginationState:
    """Keeps ``candidate_index`` and ``page_index`` mutually consistent.

    Navigation wraps around in both directions: selecting past the last
    candidate returns to the first one, and flipping before the first page
    lands on the last one. ``set_page`` finalises the index itself and never
    goes back through the wraparound branch of ``set_index``, so a page change
    triggered from ``set_index`` bounces at most once.
    """

    def __init__(
        self,
        store: CandidateStore,
        *,
        load_page_fn: LoadPageFn = _noop_load,
        shrink_fn: Callable[[], None] = _noop,
        index_changed_fn: IndexChangedFn = _noop_index,
    ) -> None:
        self._store = store
        self._load_page = load_page_fn
        self._shrink = shrink_fn
        self._index_changed = index_changed_fn
        self.candidate_index = -1
        self.page_index = 0

    @property
    def nr_candidates(self) -> int:
        return self._store.nr_candidates

    @property
    def display_limit(self) -> int:
        return self._store.display_limit

    @property
    def page_count(self) -> int:
        return self._store.page_count

    def reset(self) -> None:
        self.candidate_index = -1
        self.page_index = 0

    def set_index(self, index: int) -> None:
        if index >= self.nr_candidates:
            resolved = 0
        elif index < -1:
            resolved = -1
        else:
            resolved = index
        self.candidate_index = resolved

        if resolved >= 0 and self.display_limit:
            new_page = resolved // self.display_limit
        else:
            new_page = self.page_index
        if new_page != self.page_index:
            self._change_page(new_page)

        self._index_changed(self.candidate_index)

    def set_page(self, page: int) -> None:
        self._change_page(page)
        self._index_changed(self.candidate_index)

    def _change_page(self, page: int) -> None:
        count = self.page_count
        if page < 0:
            new_page = count - 1
        elif page >= count:
            new_page = 0
        else:
            new_page = page

        self._load_page(new_page, self._store.page(new_page))
        self.page_index = new_page

        limit = self.display_limit
        if limit:
            if self.candidate_index >= 0:
                new_index = new_page * limit + self.candidate_index % limit
            else:
                new_index = -1
        else:
            new_index = self.candidate_index

        if new_index >= self.nr_candidates:
            new_index = self.nr_candidates - 1

        # shrink before the renderer measures the new page
        self._shrink()
        self.candidate_index = new_index

    def label_text(self) -> str:
        if self.candidate_index >= 0:
            return f"{self.candidate_index + 1} / {self.nr_candidates}"
        return f"- / {self.nr_candidates}"
