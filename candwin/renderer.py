"""Presentation contracts driven by the controller.

The controller never touches widgets; it talks to these protocols. The PyQt6
implementation lives in ``candwin.qt_renderer``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence, Tuple

from candwin.candidate_store import Page
from candwin.grid_visibility import GridSpacing, VisibleRegion
from candwin.label_table import LabelTable


@dataclass(frozen=True)
class CellView:
    row: int
    col: int
    label: Optional[str]
    text: Optional[str]
    annotation: str = ""

    @property
    def occupied(self) -> bool:
        return self.text is not None


def build_cell_views(page: Optional[Page], label_table: LabelTable) -> Tuple[CellView, ...]:
    """Row-major cell views for a page; a reserved page yields empty cells."""
    views = []
    for row, col, label in label_table:
        candidate = page.candidate_at(row, col) if page is not None else None
        if candidate is None:
            views.append(CellView(row=row, col=col, label=label, text=None))
        else:
            views.append(
                CellView(row=row, col=col, label=label, text=candidate.text, annotation=candidate.annotation)
            )
    return tuple(views)


class Renderer(Protocol):
    """Popup window showing one page of the candidate grid."""

    def show_page(self, cells: Sequence[CellView]) -> None:
        ...

    def set_visible_region(self, region: VisibleRegion, spacing: GridSpacing) -> None:
        ...

    def move_to(self, x: int, y: int) -> None:
        ...

    def set_label(self, text: str) -> None:
        ...

    def set_highlight(self, cell: Optional[Tuple[int, int]]) -> None:
        ...

    def shrink(self) -> None:
        ...

    def show(self) -> None:
        ...

    def hide(self) -> None:
        ...


class CaretIndicator(Protocol):
    """Small overlay next to the caret that shows the input state."""

    def update_state(self, x: int, y: int, text: Optional[str]) -> None:
        ...

    def set_timeout(self, milliseconds: int) -> None:
        ...

    def show(self) -> None:
        ...

    def hide(self) -> None:
        ...
