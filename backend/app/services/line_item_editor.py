"""Line item editor shared by the quote and bill forms.

The editor is headless: the host renders rows, forwards input events to the
methods below, registers field handles with ``editor.focus`` while rendering,
and calls :meth:`LineItemEditor.commit` once a render has finished so any
pending focus request lands on a field that now exists.
"""

from typing import Any, Callable, Iterable, List, Mapping, Optional

from backend.app.core.logging import get_logger
from backend.app.schemas.line_item_template import LineItemTemplateRead
from backend.app.services.focus import AMOUNT, FocusCoordinator
from backend.app.services.key_input import PASS_THROUGH, KeyAction, KeyEvent, KeyInputStateMachine, KeyOutcome
from backend.app.services.line_item_numbers import number_text
from backend.app.services.line_items import IdAllocator, LineItem, LineItemCollection
from backend.app.services.suggestion_dropdown import DropdownController, PointerDownHub
from backend.app.services.template_catalog import SuggestionEngine, TemplateCatalog, TemplateSource

logger = get_logger(__name__)


class LineItemEditor:
    def __init__(
        self,
        rows: Optional[List[LineItem]] = None,
        *,
        on_change: Optional[Callable[[List[LineItem]], None]] = None,
        allocator: Optional[IdAllocator] = None,
        template_source: Optional[TemplateSource] = None,
        css_prefix: str = "li",
    ):
        self.css_prefix = css_prefix
        self.focus = FocusCoordinator()
        self.collection = LineItemCollection(rows, on_change=on_change, allocator=allocator, focus=self.focus)
        self.catalog = TemplateCatalog(template_source)
        self.suggestions = SuggestionEngine(self.catalog)
        self.dropdown = DropdownController()
        self.keys = KeyInputStateMachine()
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def items(self) -> List[LineItem]:
        return self.collection.items

    def css_class(self, element: str) -> str:
        return f"{self.css_prefix}-{element}"

    # --- lifecycle ---

    def mount(self, pointer_events: Optional[PointerDownHub] = None) -> None:
        """Load the catalog and start listening for outside clicks."""
        self.catalog.load()
        if pointer_events is not None and self._unsubscribe is None:
            self._unsubscribe = pointer_events.subscribe(self.dropdown.pointer_down)
        logger.debug("line_item_editor_mounted", templates=len(self.catalog), rows=len(self.collection))

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
        self.dropdown.close()
        self.focus.clear()

    def commit(self) -> bool:
        """Apply the pending focus request after the host has rendered."""
        return self.focus.apply_pending()

    # --- collection ---

    def add_line_item(self) -> int:
        return self.collection.add()

    def update_line_item(self, local_id: int, field: str, value: str) -> None:
        self.collection.update(local_id, field, value)
        if field == "description" and self.dropdown.is_open(local_id):
            # new filter text, so the old highlight may be out of range
            self.dropdown.open(local_id)

    def seed(self, rows: Iterable[Mapping[str, Any]]) -> List[int]:
        """Replace every row with rows from an existing document."""
        self.dropdown.close()
        self.focus.clear()
        return self.collection.seed(rows)

    def remove_line_item(self, local_id: int) -> None:
        self.dropdown.row_removed(local_id)
        self.collection.remove(local_id)

    def move_line_item(self, index: int, direction: int) -> None:
        self.collection.move(index, direction)

    # --- description field ---

    def change_description(self, local_id: int, text: str) -> None:
        self.collection.update(local_id, "description", text)
        if self.collection.get(local_id) is not None:
            self.dropdown.open(local_id)

    def focus_description(self, local_id: int) -> None:
        item = self.collection.get(local_id)
        if item is not None and item.description:
            self.dropdown.open(local_id)

    def candidates(self, local_id: int) -> List[LineItemTemplateRead]:
        """Suggestions shown under the row; empty unless its dropdown is open."""
        if not self.dropdown.is_open(local_id):
            return []
        item = self.collection.get(local_id)
        if item is None:
            return []
        return self.suggestions.filter(item.description)

    def hover_candidate(self, local_id: int, index: int) -> None:
        if self.dropdown.is_open(local_id):
            self.dropdown.hover(index, len(self.candidates(local_id)))

    def pointer_down(self, target_row: Optional[int]) -> None:
        self.dropdown.pointer_down(target_row)

    # --- templates ---

    def select_template(self, local_id: int, template: LineItemTemplateRead) -> None:
        """Fill the row from ``template`` and move focus to its amount field."""
        item = self.collection.get(local_id)
        if item is not None:
            self.collection.update_fields(
                local_id,
                description=template.description,
                quantity=number_text(template.default_quantity),
                amount=number_text(template.default_amount),
            )
            self.focus.request(local_id, AMOUNT)
        self.dropdown.close()

    def shows_save_as_template(self, local_id: int) -> bool:
        item = self.collection.get(local_id)
        return item is not None and self.suggestions.can_save_as_template(item.description)

    def save_as_template(self, local_id: int) -> Optional[LineItemTemplateRead]:
        """Best-effort save of the row as a template. None when nothing was saved."""
        item = self.collection.get(local_id)
        if item is None or not self.suggestions.can_save_as_template(item.description):
            return None
        return self.catalog.create_template(item.description, item.quantity, item.amount)

    # --- keyboard ---

    def handle_description_key(self, local_id: int, event: KeyEvent) -> KeyOutcome:
        index = self.collection.index_of(local_id)
        if index < 0:
            return PASS_THROUGH
        item = self.collection.items[index]
        dropdown_open = self.dropdown.is_open(local_id)
        candidates = self.suggestions.filter(item.description) if dropdown_open else []
        outcome = self.keys.on_description_key(
            event,
            row_is_blank=item.is_blank(),
            index=index,
            row_count=len(self.collection),
            previous_row=self.collection.items[index - 1].local_id if index > 0 else None,
            dropdown_open=dropdown_open,
            candidate_count=len(candidates),
            highlighted_index=self.dropdown.highlighted_index,
        )

        if outcome.action is KeyAction.HIGHLIGHT_NEXT:
            self.dropdown.highlight_next(len(candidates))
        elif outcome.action is KeyAction.HIGHLIGHT_PREVIOUS:
            self.dropdown.highlight_previous()
        elif outcome.action is KeyAction.ACCEPT_SUGGESTION:
            self.select_template(local_id, candidates[outcome.candidate_index])
        elif outcome.action is KeyAction.CLOSE_DROPDOWN:
            self.dropdown.close()
        elif outcome.action is KeyAction.REMOVE_ROW:
            self.remove_line_item(local_id)
            if outcome.focus_row is not None:
                self.focus.request(outcome.focus_row, AMOUNT)
        return outcome

    def handle_amount_key(self, local_id: int, event: KeyEvent) -> KeyOutcome:
        index = self.collection.index_of(local_id)
        if index < 0:
            return PASS_THROUGH
        outcome = self.keys.on_amount_key(
            event,
            index=index,
            row_count=len(self.collection),
        )
        if outcome.action is KeyAction.APPEND_ROW:
            self.add_line_item()
        return outcome
