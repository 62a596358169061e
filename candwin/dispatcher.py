"""Apply parsed protocol commands to the candidate window controller."""
from __future__ import annotations

import logging
import typing
from typing import Callable, Dict, Optional, Type

from candwin.commands import (
    Activate,
    Command,
    Deactivate,
    Hide,
    HideCaretState,
    Move,
    Select,
    SetNrCandidates,
    SetPageCandidates,
    Show,
    ShowCaretState,
    ShowPage,
    UpdateCaretState,
    parse_frame,
)
from candwin.controller import CandidateWindowController

_LOGGER = logging.getLogger("CandWin.Controller")

Handler = Callable[[typing.Any], None]


class Dispatcher:
    """Maps every command variant to exactly one controller operation."""

    def __init__(self, controller: CandidateWindowController) -> None:
        self._controller = controller
        self._handlers: Dict[Type, Handler] = {
            Activate: lambda cmd: controller.activate(cmd.charset, cmd.display_limit, cmd.entries),
            Select: lambda cmd: controller.select(cmd.index, cmd.need_hilite),
            Show: lambda cmd: controller.show(),
            Hide: lambda cmd: controller.hide(),
            Move: lambda cmd: controller.move(cmd.x, cmd.y),
            Deactivate: lambda cmd: controller.deactivate(),
            ShowCaretState: lambda cmd: controller.show_caret_state(cmd.timeout_seconds, cmd.text),
            UpdateCaretState: lambda cmd: controller.update_caret_state(),
            HideCaretState: lambda cmd: controller.hide_caret_state(),
            SetNrCandidates: lambda cmd: controller.set_nr_candidates(cmd.nr_candidates, cmd.display_limit),
            SetPageCandidates: lambda cmd: controller.set_page_candidates(cmd.charset, cmd.page, cmd.entries),
            ShowPage: lambda cmd: controller.show_page(cmd.page),
        }
        missing = set(typing.get_args(Command)) - set(self._handlers)
        if missing:
            names = ", ".join(sorted(cls.__name__ for cls in missing))
            raise TypeError(f"Dispatcher has no handler for: {names}")

    def dispatch(self, frame: bytes) -> Optional[Command]:
        """Parse and apply one frame; returns the applied command, if any."""
        command = parse_frame(frame)
        if command is None:
            return None
        self.apply(command)
        return command

    def apply(self, command: Command) -> None:
        _LOGGER.debug("Applying %s", type(command).__name__)
        self._handlers[type(command)](command)
