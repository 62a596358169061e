"""PyQt6 widgets implementing the renderer and caret indicator protocols."""
from __future__ import annotations

from functools import partial
from typing import Callable, List, Optional, Sequence, Tuple

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QGuiApplication, QResizeEvent
from PyQt6.QtWidgets import QFrame, QGridLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from candwin.grid_visibility import GridSpacing, VisibleRegion
from candwin.label_table import LABEL_COLUMNS, LABEL_ROWS, cell_offset
from candwin.layout_positioner import DEFAULT_POPUP_HEIGHT, DEFAULT_POPUP_WIDTH
from candwin.renderer import CellView

CellClickedFn = Callable[[int, int], None]
SizeChangedFn = Callable[[int, int], None]

EMPTY_CELL_TEXT = "  "

_POPUP_FLAGS = (
    Qt.WindowType.ToolTip
    | Qt.WindowType.FramelessWindowHint
    | Qt.WindowType.WindowStaysOnTopHint
    | Qt.WindowType.WindowDoesNotAcceptFocus
)


def primary_screen_size() -> Tuple[int, int]:
    screen = QGuiApplication.primaryScreen()
    if screen is None:
        return DEFAULT_POPUP_WIDTH, DEFAULT_POPUP_HEIGHT
    geometry = screen.geometry()
    return geometry.width(), geometry.height()


class CandidateTableWindow(QWidget):
    """Popup with one button per label cell and an index/total label.

    Buttons sit on even grid rows/columns; the odd rows/columns in between are
    spacer tracks whose minimum size carries the block spacing.
    """

    def __init__(
        self,
        *,
        cell_clicked_fn: Optional[CellClickedFn] = None,
        size_changed_fn: Optional[SizeChangedFn] = None,
    ) -> None:
        super().__init__(None, _POPUP_FLAGS)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)
        self._cell_clicked = cell_clicked_fn
        self._size_changed = size_changed_fn
        self._highlight: Optional[Tuple[int, int]] = None

        frame = QFrame(self)
        frame.setFrameShape(QFrame.Shape.Box)
        outer = QVBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.addWidget(frame)

        body = QVBoxLayout(frame)
        body.setContentsMargins(0, 0, 0, 0)
        self._grid = QGridLayout()
        self._grid.setSpacing(0)
        self._buttons: List[QPushButton] = []
        for row in range(LABEL_ROWS):
            for col in range(LABEL_COLUMNS):
                button = QPushButton(EMPTY_CELL_TEXT, frame)
                button.setFocusPolicy(Qt.FocusPolicy.NoFocus)
                button.setEnabled(False)
                button.clicked.connect(partial(self._on_cell_clicked, row, col))
                self._grid.addWidget(button, row * 2, col * 2)
                self._buttons.append(button)
        body.addLayout(self._grid)

        self._num_label = QLabel("", frame)
        body.addWidget(self._num_label)
        self.resize(DEFAULT_POPUP_WIDTH, DEFAULT_POPUP_HEIGHT)

    def bind(
        self,
        *,
        cell_clicked_fn: Optional[CellClickedFn] = None,
        size_changed_fn: Optional[SizeChangedFn] = None,
    ) -> None:
        if cell_clicked_fn is not None:
            self._cell_clicked = cell_clicked_fn
        if size_changed_fn is not None:
            self._size_changed = size_changed_fn

    def button_at(self, row: int, col: int) -> QPushButton:
        return self._buttons[cell_offset(row, col)]

    @property
    def label_text(self) -> str:
        return self._num_label.text()

    # Renderer protocol ----------------------------------------------------

    def show_page(self, cells: Sequence[CellView]) -> None:
        for cell in cells:
            button = self.button_at(cell.row, cell.col)
            if cell.occupied:
                button.setText(cell.text or EMPTY_CELL_TEXT)
                button.setToolTip(cell.annotation)
                button.setFlat(False)
                button.setEnabled(True)
            else:
                button.setText(EMPTY_CELL_TEXT)
                button.setToolTip("")
                # unbound keys render without a frame
                button.setFlat(cell.label is None)
                button.setEnabled(False)

    def set_visible_region(self, region: VisibleRegion, spacing: GridSpacing) -> None:
        for row in range(LABEL_ROWS):
            for col in range(LABEL_COLUMNS):
                self.button_at(row, col).setVisible(region.is_visible(row, col))
        for col in range(LABEL_COLUMNS - 1):
            self._grid.setColumnMinimumWidth(col * 2 + 1, spacing.col_spacing.get(col, 0))
        for row in range(LABEL_ROWS - 1):
            self._grid.setRowMinimumHeight(row * 2 + 1, spacing.row_spacing.get(row, 0))

    def move_to(self, x: int, y: int) -> None:
        self.move(x, y)

    def set_label(self, text: str) -> None:
        self._num_label.setText(text)

    def set_highlight(self, cell: Optional[Tuple[int, int]]) -> None:
        if self._highlight is not None:
            self.button_at(*self._highlight).setDown(False)
        self._highlight = cell
        if cell is not None:
            self.button_at(*cell).setDown(True)

    def shrink(self) -> None:
        self.resize(DEFAULT_POPUP_WIDTH, DEFAULT_POPUP_HEIGHT)
        self.adjustSize()

    # Qt events ------------------------------------------------------------

    def resizeEvent(self, event: QResizeEvent) -> None:  # noqa: N802 - Qt override
        super().resizeEvent(event)
        if self._size_changed is not None:
            size = event.size()
            self._size_changed(size.width(), size.height())

    def _on_cell_clicked(self, row: int, col: int, _checked: bool = False) -> None:
        if self._cell_clicked is not None:
            self._cell_clicked(row, col)


class CaretStateIndicator(QLabel):
    """Label that follows the caret and can hide itself after a timeout."""

    def __init__(self) -> None:
        super().__init__(None, _POPUP_FLAGS)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating, True)
        self.setFrameShape(QFrame.Shape.Box)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.timeout.connect(self.hide)

    def update_state(self, x: int, y: int, text: Optional[str]) -> None:
        if text is not None:
            self.setText(text)
            self.adjustSize()
        self.move(x, y)

    def set_timeout(self, milliseconds: int) -> None:
        self._timer.start(max(0, milliseconds))

    @property
    def timeout_active(self) -> bool:
        return self._timer.isActive()
