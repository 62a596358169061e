"""Popup placement relative to the caret anchor."""
from __future__ import annotations

from typing import Tuple

Point = Tuple[int, int]
Size = Tuple[int, int]

DEFAULT_POPUP_WIDTH = 80
DEFAULT_POPUP_HEIGHT = 1

# Approximation: the engine does not send the preedit height, so flipping the
# popup above the anchor assumes one line of this many pixels.
PREEDIT_HEIGHT_APPROX = 20


def place_popup(anchor: Point, size: Size, screen: Size) -> Point:
    """Return the top-left corner for the popup.

    The popup opens below/right of the anchor and flips to the other side on
    each axis where it would run past the screen edge.
    """
    pos_x, pos_y = anchor
    width, height = size
    screen_w, screen_h = screen
    if pos_x + width <= screen_w:
        x = pos_x
    else:
        x = pos_x - width
    if pos_y + height <= screen_h:
        y = pos_y
    else:
        y = pos_y - height - PREEDIT_HEIGHT_APPROX
    return x, y
