from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Callable, Optional

from PyQt6.QtWidgets import QApplication

from candwin.config import EOF_POLICIES, CandWinSettings, load_settings, resolve_settings_path
from candwin.controller import CandidateWindowController
from candwin.dispatcher import Dispatcher
from candwin.frame_reader import FrameReader
from candwin.label_table import LabelTable
from candwin.logging_utils import configure_logging
from candwin.qt_renderer import CandidateTableWindow, CaretStateIndicator, primary_screen_size
from candwin.transport import IndexReplyWriter, StdinTransport
from candwin.version import __version__

_LOGGER = logging.getLogger("CandWin.Controller")


def build_frame_handler(dispatcher: Dispatcher) -> Callable[[bytes], None]:
    def _handle_frame(frame: bytes) -> None:
        try:
            dispatcher.dispatch(frame)
        except Exception:
            _LOGGER.exception("Command handler failed for frame %r", frame[:64])

    return _handle_frame


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Candidate table window for input method engines")
    parser.add_argument("--settings", help="Path to candwin_settings.json")
    parser.add_argument(
        "--eof-policy",
        choices=EOF_POLICIES,
        help="What to do when the engine closes stdin (default from settings: fatal)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    args = parser.parse_args(argv)

    settings_path = resolve_settings_path(args.settings)
    settings: CandWinSettings = load_settings(settings_path)
    configure_logging(retention=settings.log_retention)
    eof_policy = args.eof_policy or settings.eof_policy

    _LOGGER.info("Starting candidate window %s (pid=%s)", __version__, os.getpid())
    _LOGGER.debug(
        "Loaded settings from %s: custom_layout=%s eof_policy=%s retention=%d",
        settings_path,
        settings.label_layout is not None,
        eof_policy,
        settings.log_retention,
    )

    # input method modules must not attach to the helper's own widgets
    os.environ["QT_IM_MODULE"] = "compose"
    app = QApplication(sys.argv[:1])

    window = CandidateTableWindow()
    caret = CaretStateIndicator()
    controller = CandidateWindowController(
        window,
        screen_size_fn=primary_screen_size,
        label_table=LabelTable.from_layout(settings.label_layout),
        caret_indicator=caret,
        report_index_fn=IndexReplyWriter(sys.stdout.buffer),
    )
    window.bind(cell_clicked_fn=controller.select_cell, size_changed_fn=controller.resize)

    reader = FrameReader(build_frame_handler(Dispatcher(controller)))
    transport = StdinTransport(
        sys.stdin.fileno(),
        reader,
        eof_policy=eof_policy,
        on_graceful_close=controller.deactivate,
    )
    transport.start()

    exit_code = app.exec()
    transport.stop()
    _LOGGER.info("Candidate window exiting with code %s", exit_code)
    return int(exit_code)
