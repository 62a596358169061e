"""Split the engine's byte stream into protocol frames."""
from __future__ import annotations

from typing import Callable, List

FRAME_SEPARATOR = b"\f\f"
FIELD_SEPARATOR = b"\f"

FrameHandler = Callable[[bytes], None]


class TransportClosed(Exception):
    """Raised when the peer closed the input stream."""


class FrameReader:
    """Buffers chunks and hands every complete frame to ``frame_handler``.

    Bytes after the last separator stay buffered until a later chunk completes
    the frame. Empty frames are dropped.
    """

    def __init__(self, frame_handler: FrameHandler) -> None:
        self._frame_handler = frame_handler
        self._buffer = bytearray()

    @property
    def pending(self) -> int:
        return len(self._buffer)

    def feed(self, chunk: bytes) -> int:
        """Consume one read result; returns the number of frames handed on."""
        if not chunk:
            raise TransportClosed("input stream closed by peer")
        self._buffer.extend(chunk)
        frames = self._take_frames()
        for frame in frames:
            self._frame_handler(frame)
        return len(frames)

    def _take_frames(self) -> List[bytes]:
        if FRAME_SEPARATOR not in self._buffer:
            return []
        *complete, rest = bytes(self._buffer).split(FRAME_SEPARATOR)
        self._buffer = bytearray(rest)
        return [frame for frame in complete if frame]
