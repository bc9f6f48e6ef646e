"""Single-open suggestion dropdown state and outside-click dismissal."""

from typing import Callable, List, Optional

PointerListener = Callable[[Optional[int]], None]


class PointerDownHub:
    """Pointer-down events reported by the host.

    The host publishes the ``local_id`` of the row the pointer landed in, or
    None when it landed outside every row.
    """

    def __init__(self):
        self._listeners: List[PointerListener] = []

    def subscribe(self, listener: PointerListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def publish(self, target_row: Optional[int]) -> None:
        for listener in list(self._listeners):
            listener(target_row)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


class DropdownController:
    """Tracks which row's dropdown is open and which candidate is highlighted."""

    def __init__(self):
        self.open_row: Optional[int] = None
        self.highlighted_index = -1

    def is_open(self, local_id: int) -> bool:
        return self.open_row is not None and self.open_row == local_id

    def open(self, local_id: int) -> None:
        # opening always resets: either the row or the filter text just changed
        self.open_row = local_id
        self.highlighted_index = -1

    def close(self) -> None:
        self.open_row = None
        self.highlighted_index = -1

    def hover(self, index: int, candidate_count: int) -> None:
        if 0 <= index < candidate_count:
            self.highlighted_index = index

    def highlight_next(self, candidate_count: int) -> int:
        self.highlighted_index = min(self.highlighted_index + 1, candidate_count - 1)
        return self.highlighted_index

    def highlight_previous(self) -> int:
        self.highlighted_index = max(self.highlighted_index - 1, -1)
        return self.highlighted_index

    def pointer_down(self, target_row: Optional[int]) -> None:
        if self.open_row is not None and target_row != self.open_row:
            self.close()

    def row_removed(self, local_id: int) -> None:
        if self.is_open(local_id):
            self.close()
