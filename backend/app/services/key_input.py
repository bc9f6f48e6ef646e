"""Keyboard handling for line item rows.

Decides what a keydown in a row's description or amount field means. The
decision is returned as a :class:`KeyOutcome`; the editor applies it and the
host uses ``prevent_default`` to suppress the browser/toolkit default.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class KeyAction(str, Enum):
    PASS_THROUGH = "pass_through"
    HIGHLIGHT_NEXT = "highlight_next"
    HIGHLIGHT_PREVIOUS = "highlight_previous"
    ACCEPT_SUGGESTION = "accept_suggestion"
    CLOSE_DROPDOWN = "close_dropdown"
    REMOVE_ROW = "remove_row"
    APPEND_ROW = "append_row"


@dataclass(frozen=True)
class KeyEvent:
    key: str
    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    meta: bool = False

    @property
    def has_modifier(self) -> bool:
        return self.shift or self.ctrl or self.alt or self.meta


@dataclass(frozen=True)
class KeyOutcome:
    action: KeyAction
    prevent_default: bool = False
    # candidate index for ACCEPT_SUGGESTION
    candidate_index: Optional[int] = None
    # row whose amount field takes focus after REMOVE_ROW
    focus_row: Optional[int] = None


PASS_THROUGH = KeyOutcome(KeyAction.PASS_THROUGH)


class KeyInputStateMachine:
    def on_description_key(
        self,
        event: KeyEvent,
        *,
        row_is_blank: bool,
        index: int,
        row_count: int,
        previous_row: Optional[int],
        dropdown_open: bool,
        candidate_count: int,
        highlighted_index: int,
    ) -> KeyOutcome:
        key = event.key
        if dropdown_open and candidate_count > 0:
            if key == "ArrowDown":
                return KeyOutcome(KeyAction.HIGHLIGHT_NEXT, prevent_default=True)
            if key == "ArrowUp":
                return KeyOutcome(KeyAction.HIGHLIGHT_PREVIOUS, prevent_default=True)
            if key == "Enter" and 0 <= highlighted_index < candidate_count:
                return KeyOutcome(KeyAction.ACCEPT_SUGGESTION, prevent_default=True, candidate_index=highlighted_index)

        if key == "Escape":
            return KeyOutcome(KeyAction.CLOSE_DROPDOWN)

        if key == "Tab":
            # default traversal still moves on to the amount field
            return KeyOutcome(KeyAction.CLOSE_DROPDOWN)

        if key == "Backspace" and row_is_blank and row_count > 1:
            return KeyOutcome(
                KeyAction.REMOVE_ROW,
                prevent_default=True,
                focus_row=previous_row if index > 0 else None,
            )

        return PASS_THROUGH

    def on_amount_key(self, event: KeyEvent, *, index: int, row_count: int) -> KeyOutcome:
        if event.key == "Tab" and not event.has_modifier and index == row_count - 1:
            return KeyOutcome(KeyAction.APPEND_ROW, prevent_default=True)
        return PASS_THROUGH
