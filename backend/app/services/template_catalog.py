"""Template catalog and suggestion matching for line item autocomplete."""

from typing import List, Optional, Protocol, Tuple

import httpx

from backend.app.core.logging import get_logger
from backend.app.schemas.line_item_template import LineItemTemplateCreate, LineItemTemplateRead
from backend.app.services.line_item_numbers import parse_number

logger = get_logger(__name__)

# Transport errors, non-2xx responses, bad JSON and payloads that fail validation.
CATALOG_ERRORS = (httpx.HTTPError, ValueError, TypeError)

DEFAULT_TEMPLATE_QUANTITY = 1.0


class TemplateSource(Protocol):
    def list_templates(self) -> List[LineItemTemplateRead]: ...

    def create_template(self, template_in: LineItemTemplateCreate) -> LineItemTemplateRead: ...


class TemplateCatalog:
    """In-memory template list for one editor session.

    Loaded once at mount and only ever appended to afterwards. Remote failures
    never propagate: a failed load leaves the catalog empty and a failed create
    leaves it unchanged.
    """

    def __init__(self, source: Optional[TemplateSource] = None, templates: Optional[List[LineItemTemplateRead]] = None):
        self.source = source
        self.templates: List[LineItemTemplateRead] = list(templates or [])
        self.loaded = False

    def __len__(self) -> int:
        return len(self.templates)

    def load(self) -> List[LineItemTemplateRead]:
        self.loaded = True
        if self.source is None:
            return self.templates
        try:
            self.templates = list(self.source.list_templates())
        except CATALOG_ERRORS as exc:
            logger.warning("template_catalog_load_failed", error=str(exc))
            self.templates = []
        return self.templates

    def append(self, template: LineItemTemplateRead) -> None:
        self.templates.append(template)

    def create_template(self, description: str, quantity: str = "", amount: str = "") -> Optional[LineItemTemplateRead]:
        """Save a row as a new template. Returns the created template, or None on failure."""
        if self.source is None:
            return None
        parsed_quantity = parse_number(quantity)
        try:
            template_in = LineItemTemplateCreate(
                description=(description or "").strip(),
                default_quantity=parsed_quantity if parsed_quantity is not None else DEFAULT_TEMPLATE_QUANTITY,
                default_amount=parse_number(amount),
            )
            created = self.source.create_template(template_in)
        except CATALOG_ERRORS as exc:
            logger.warning("template_create_failed", description=description, error=str(exc))
            return None
        self.append(created)
        logger.info("template_created", template_id=created.id)
        return created


class SuggestionEngine:
    """Filters the catalog for a row's dropdown."""

    def __init__(self, catalog: TemplateCatalog):
        self.catalog = catalog

    def filter(self, query: Optional[str]) -> List[LineItemTemplateRead]:
        needle = (query or "").strip().lower()
        if not needle:
            return list(self.catalog.templates)
        return [t for t in self.catalog.templates if needle in t.description.lower()]

    def is_exact_match(self, description: Optional[str]) -> bool:
        """True for blank text or text equal to an existing template's description."""
        if not description or not description.strip():
            return True
        lowered = description.strip().lower()
        return any(t.description.lower() == lowered for t in self.catalog.templates)

    def can_save_as_template(self, description: Optional[str]) -> bool:
        return not self.is_exact_match(description)


def highlight_match(text: str, query: Optional[str]) -> Tuple[str, str, str]:
    """Split ``text`` around the first case-insensitive occurrence of ``query``."""
    if not query or not query.strip():
        return text, "", ""
    needle = query.strip()
    start = text.lower().find(needle.lower())
    if start < 0:
        return text, "", ""
    end = start + len(needle)
    return text[:start], text[start:end], text[end:]
