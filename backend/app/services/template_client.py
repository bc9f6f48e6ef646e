"""HTTP client for the line item template service."""

from typing import List, Optional

import httpx

from backend.app.core.settings import get_settings
from backend.app.schemas.line_item_template import LineItemTemplateCreate, LineItemTemplateRead


class TemplateApiClient:
    """Reads and creates templates through ``/line-item-templates``.

    Any ``httpx.Client`` pointed at the service works, FastAPI's ``TestClient``
    included. Errors are raised to the caller; the catalog decides what to do
    with them.
    """

    def __init__(self, http: httpx.Client, path: Optional[str] = None):
        self._http = http
        self._path = path or get_settings().templates_path

    @classmethod
    def from_settings(cls) -> "TemplateApiClient":
        settings = get_settings()
        http = httpx.Client(
            base_url=settings.api_url,
            timeout=settings.http_timeout,
            follow_redirects=True,
        )
        return cls(http, settings.templates_path)

    def list_templates(self) -> List[LineItemTemplateRead]:
        response = self._http.get(self._path)
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError("Template listing must be a JSON array")
        return [LineItemTemplateRead.model_validate(item) for item in payload]

    def create_template(self, template_in: LineItemTemplateCreate) -> LineItemTemplateRead:
        response = self._http.post(self._path, json=template_in.model_dump(by_alias=True))
        response.raise_for_status()
        return LineItemTemplateRead.model_validate(response.json())

    def close(self) -> None:
        self._http.close()
