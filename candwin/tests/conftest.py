from __future__ import annotations

import os
from typing import Any, List, Optional, Tuple

import pytest

from candwin.controller import CandidateWindowController


def pytest_runtest_setup(item):
    if item.get_closest_marker("pyqt_required"):
        if not os.getenv("PYQT_TESTS"):
            pytest.skip("PYQT_TESTS not set; skipping PyQt-dependent test")


class RecordingRenderer:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []
        self.cells: Tuple = ()
        self.region = None
        self.spacing = None
        self.position: Optional[Tuple[int, int]] = None
        self.label = ""
        self.highlight: Optional[Tuple[int, int]] = None
        self.visible = False

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]

    def show_page(self, cells) -> None:
        self.cells = tuple(cells)
        self.calls.append(("show_page", len(self.cells)))

    def set_visible_region(self, region, spacing) -> None:
        self.region = region
        self.spacing = spacing
        self.calls.append(("set_visible_region", region))

    def move_to(self, x: int, y: int) -> None:
        self.position = (x, y)
        self.calls.append(("move_to", (x, y)))

    def set_label(self, text: str) -> None:
        self.label = text
        self.calls.append(("set_label", text))

    def set_highlight(self, cell) -> None:
        self.highlight = cell
        self.calls.append(("set_highlight", cell))

    def shrink(self) -> None:
        self.calls.append(("shrink", None))

    def show(self) -> None:
        self.visible = True
        self.calls.append(("show", None))

    def hide(self) -> None:
        self.visible = False
        self.calls.append(("hide", None))


class RecordingCaret:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    def update_state(self, x: int, y: int, text: Optional[str]) -> None:
        self.calls.append(("update_state", (x, y, text)))

    def set_timeout(self, milliseconds: int) -> None:
        self.calls.append(("set_timeout", milliseconds))

    def show(self) -> None:
        self.calls.append(("show", None))

    def hide(self) -> None:
        self.calls.append(("hide", None))


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def caret() -> RecordingCaret:
    return RecordingCaret()


@pytest.fixture
def reported() -> List[int]:
    return []


@pytest.fixture
def controller(renderer, caret, reported) -> CandidateWindowController:
    return CandidateWindowController(
        renderer,
        screen_size_fn=lambda: (1024, 768),
        caret_indicator=caret,
        report_index_fn=reported.append,
    )
