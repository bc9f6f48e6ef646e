"""Ordered line item collection with client-side identity.

Rows carry a ``local_id`` handed out by an :class:`IdAllocator`. Ids are never
reused, so a row keeps its identity through edits and moves, and a removed
row's id can never come back attached to a different row.
"""

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Iterator, List, Mapping, Optional

from backend.app.core.logging import get_logger
from backend.app.services.focus import AMOUNT, DESCRIPTION, QUANTITY, FocusCoordinator
from backend.app.services.line_item_numbers import number_text

logger = get_logger(__name__)

EDITABLE_FIELDS = (DESCRIPTION, QUANTITY, AMOUNT)


class IdAllocator:
    """Monotonic id source, shareable between editors on the same host form."""

    def __init__(self, start: int = 0):
        self._next = start

    def next(self) -> int:
        value = self._next
        self._next += 1
        return value


@dataclass
class LineItem:
    local_id: int
    description: str = ""
    quantity: str = ""
    amount: str = ""
    position: int = 0
    server_id: Optional[int] = None

    def is_blank(self) -> bool:
        return not self.description and not self.quantity and not self.amount


class LineItemCollection:
    """Mutable ordered sequence of :class:`LineItem` rows.

    ``rows`` is the host's list; it is mutated in place and ``on_change`` is
    called with it after every mutation so the host can re-render or recompute
    totals.
    """

    def __init__(
        self,
        rows: Optional[List[LineItem]] = None,
        *,
        on_change: Optional[Callable[[List[LineItem]], None]] = None,
        allocator: Optional[IdAllocator] = None,
        focus: Optional[FocusCoordinator] = None,
    ):
        self.items: List[LineItem] = rows if rows is not None else []
        if allocator is None:
            # continue after any rows the host already holds
            allocator = IdAllocator(max((item.local_id for item in self.items), default=-1) + 1)
        self.allocator = allocator
        self.focus = focus
        self._on_change = on_change
        self._renumber()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self.items)

    def get(self, local_id: int) -> Optional[LineItem]:
        for item in self.items:
            if item.local_id == local_id:
                return item
        return None

    def index_of(self, local_id: int) -> int:
        for index, item in enumerate(self.items):
            if item.local_id == local_id:
                return index
        return -1

    def local_ids(self) -> List[int]:
        return [item.local_id for item in self.items]

    def add(self) -> int:
        """Append an empty row and ask for focus on its description field."""
        item = LineItem(local_id=self.allocator.next(), position=len(self.items))
        self.items.append(item)
        if self.focus is not None:
            self.focus.request(item.local_id, DESCRIPTION)
        logger.debug("line_item_added", local_id=item.local_id, count=len(self.items))
        self._changed(structural=True)
        return item.local_id

    def update(self, local_id: int, field: str, value: str) -> None:
        self.update_fields(local_id, **{field: value})

    def update_fields(self, local_id: int, **values: str) -> None:
        """Replace several fields of one row with a single change notification."""
        unknown = [field for field in values if field not in EDITABLE_FIELDS]
        if unknown:
            raise ValueError(f"Unknown line item field '{unknown[0]}'")
        item = self.get(local_id)
        if item is None:
            return
        for field, value in values.items():
            setattr(item, field, value)
        self._changed(structural=False)

    def remove(self, local_id: int) -> None:
        index = self.index_of(local_id)
        if index < 0:
            return
        del self.items[index]
        if self.focus is not None:
            self.focus.unregister(local_id)
        logger.debug("line_item_removed", local_id=local_id, count=len(self.items))
        self._changed(structural=True)

    def move(self, index: int, direction: int) -> None:
        """Swap the row at ``index`` with its neighbour above (-1) or below (+1)."""
        if direction not in (-1, 1):
            raise ValueError("direction must be -1 or 1")
        new_index = index + direction
        if not (0 <= index < len(self.items)) or not (0 <= new_index < len(self.items)):
            return
        self.items[index], self.items[new_index] = self.items[new_index], self.items[index]
        self._changed(structural=True)

    def seed(self, rows: Iterable[Mapping[str, Any]]) -> List[int]:
        """Replace the sequence with rows loaded from an existing document."""
        seeded = [
            LineItem(
                local_id=self.allocator.next(),
                description=row.get("description") or "",
                quantity=number_text(row.get("quantity")),
                amount=number_text(row.get("amount")),
                server_id=row.get("id"),
            )
            for row in rows
        ]
        for item in self.items:
            if self.focus is not None:
                self.focus.unregister(item.local_id)
        self.items[:] = seeded
        self._changed(structural=True)
        return [item.local_id for item in seeded]

    def _renumber(self) -> None:
        for index, item in enumerate(self.items):
            item.position = index

    def _changed(self, *, structural: bool) -> None:
        if structural:
            self._renumber()
        if self._on_change is not None:
            self._on_change(self.items)
