"""Deferred focus handling for the line item editor.

Mutations record a single pending focus intent. The host applies it after it
has rendered the mutation (``apply_pending``), by which time the target row's
field handles have been registered.
"""

from typing import Dict, Optional, Protocol, Tuple

from backend.app.core.logging import get_logger

logger = get_logger(__name__)

DESCRIPTION = "description"
QUANTITY = "quantity"
AMOUNT = "amount"


class Focusable(Protocol):
    def focus(self) -> None: ...


class FocusCoordinator:
    def __init__(self):
        self._handles: Dict[int, Dict[str, Focusable]] = {}
        self._pending: Optional[Tuple[int, str]] = None

    @property
    def pending(self) -> Optional[Tuple[int, str]]:
        return self._pending

    def register(self, local_id: int, field: str, handle: Focusable) -> None:
        self._handles.setdefault(local_id, {})[field] = handle

    def unregister(self, local_id: int) -> None:
        self._handles.pop(local_id, None)

    def handle_for(self, local_id: int, field: str) -> Optional[Focusable]:
        return self._handles.get(local_id, {}).get(field)

    def request(self, local_id: int, field: str) -> None:
        """Record the focus target; replaces any earlier unapplied request."""
        self._pending = (local_id, field)

    def clear(self) -> None:
        self._pending = None

    def apply_pending(self) -> bool:
        """Focus the pending target once. Returns True when a handle was focused."""
        if self._pending is None:
            return False
        local_id, field = self._pending
        self._pending = None
        handle = self.handle_for(local_id, field)
        if handle is None:
            logger.debug("focus_target_missing", local_id=local_id, field=field)
            return False
        handle.focus()
        return True
