"""Readiness-driven input from the engine and index replies back to it."""
from __future__ import annotations

import logging
import os
import select
from typing import BinaryIO, Callable, Optional

from PyQt6.QtCore import QCoreApplication, QObject, QSocketNotifier

from candwin.config import EOF_POLICY_FATAL, EOF_POLICY_GRACEFUL, coerce_eof_policy
from candwin.frame_reader import FrameReader, TransportClosed

_LOGGER = logging.getLogger("CandWin.Transport")

BUFFER_SIZE = 4096
EXIT_FAILURE = 1
EXIT_SUCCESS = 0

ExitFn = Callable[[int], None]


def fd_readable(fd: int) -> bool:
    readable, _, _ = select.select([fd], [], [], 0)
    return bool(readable)


def drain_fd(fd: int, reader: FrameReader, *, readable_fn: Callable[[int], bool] = fd_readable) -> int:
    """Feed every chunk that is ready on ``fd``; returns frames dispatched.

    Raises TransportClosed on end of stream or a failed read.
    """
    frames = 0
    while readable_fn(fd):
        try:
            chunk = os.read(fd, BUFFER_SIZE)
        except BlockingIOError:
            break
        except OSError as exc:
            raise TransportClosed(f"read failed: {exc}") from exc
        frames += reader.feed(chunk)
    return frames


class IndexReplyWriter:
    """Tells the engine which candidate the user picked."""

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream

    def __call__(self, index: int) -> None:
        self._stream.write(b"index\n%d\n\n" % index)
        self._stream.flush()


def _quit_event_loop(code: int) -> None:
    QCoreApplication.exit(code)


class StdinTransport(QObject):
    """Watches the engine's pipe from the Qt event loop."""

    def __init__(
        self,
        fd: int,
        reader: FrameReader,
        *,
        eof_policy: str = EOF_POLICY_FATAL,
        on_graceful_close: Optional[Callable[[], None]] = None,
        exit_fn: ExitFn = _quit_event_loop,
    ) -> None:
        super().__init__()
        self._fd = fd
        self._reader = reader
        self._eof_policy = coerce_eof_policy(eof_policy)
        self._on_graceful_close = on_graceful_close
        self._exit = exit_fn
        self._notifier: Optional[QSocketNotifier] = None
        self._closed = False

    @property
    def eof_policy(self) -> str:
        return self._eof_policy

    @property
    def closed(self) -> bool:
        return self._closed

    def start(self) -> None:
        if self._notifier is not None:
            return
        notifier = QSocketNotifier(self._fd, QSocketNotifier.Type.Read, self)
        notifier.activated.connect(self._on_activated)
        self._notifier = notifier
        _LOGGER.debug("Watching fd %d (eof_policy=%s)", self._fd, self._eof_policy)

    def stop(self) -> None:
        notifier = self._notifier
        self._notifier = None
        if notifier is not None:
            notifier.setEnabled(False)
            notifier.deleteLater()

    def _on_activated(self, *_args: object) -> None:
        self.poll()

    def poll(self) -> int:
        """Drain the fd once; applies the EOF policy when the peer is gone."""
        if self._closed:
            return 0
        try:
            return drain_fd(self._fd, self._reader)
        except TransportClosed as exc:
            self._handle_close(exc)
            return 0

    def _handle_close(self, exc: TransportClosed) -> None:
        self._closed = True
        self.stop()
        if self._eof_policy == EOF_POLICY_GRACEFUL:
            _LOGGER.info("Engine closed the input stream (%s); shutting down", exc)
            if self._on_graceful_close is not None:
                self._on_graceful_close()
            self._exit(EXIT_SUCCESS)
            return
        _LOGGER.error("Engine closed the input stream (%s); exiting", exc)
        self._exit(EXIT_FAILURE)
