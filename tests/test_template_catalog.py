import json

import httpx
import pytest
from fastapi.testclient import TestClient

from backend.app.db.base import Base
from backend.app.db.session import engine
from backend.app.main import app
from backend.app.schemas.line_item_template import LineItemTemplateRead
from backend.app.services.template_catalog import SuggestionEngine, TemplateCatalog, highlight_match
from backend.app.services.template_client import TemplateApiClient


def make_template(template_id, description, quantity=None, amount=None):
    return LineItemTemplateRead(
        id=template_id,
        description=description,
        default_quantity=quantity,
        default_amount=amount,
    )


CATALOG = [
    make_template(1, "Window Install", 1, 250),
    make_template(2, "Door Repair", 1, 120),
    make_template(3, "Window Washing", 4, 15),
]


def failing_client(handler):
    return TemplateApiClient(httpx.Client(base_url="http://templates.test", transport=httpx.MockTransport(handler)))


@pytest.fixture
def db_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


def test_filter_blank_query_returns_catalog_in_order():
    engine_ = SuggestionEngine(TemplateCatalog(templates=CATALOG))
    assert engine_.filter("") == CATALOG
    assert engine_.filter("   ") == CATALOG
    assert engine_.filter(None) == CATALOG


def test_filter_is_case_insensitive_substring():
    engine_ = SuggestionEngine(TemplateCatalog(templates=CATALOG))
    assert [t.id for t in engine_.filter("WIND")] == [1, 3]
    assert [t.id for t in engine_.filter(" pair ")] == [2]
    assert engine_.filter("roof") == []


def test_is_exact_match():
    engine_ = SuggestionEngine(TemplateCatalog(templates=CATALOG))
    assert engine_.is_exact_match("") is True
    assert engine_.is_exact_match("   ") is True
    assert engine_.is_exact_match(" Window Install ") is True
    assert engine_.is_exact_match("window install") is True
    assert engine_.is_exact_match("Window Instal") is False
    assert engine_.can_save_as_template("Window Instal") is True
    assert engine_.can_save_as_template("") is False


def test_highlight_match():
    assert highlight_match("Window Install", "inst") == ("Window ", "Inst", "all")
    assert highlight_match("Window Install", " WIN ") == ("", "Win", "dow Install")
    assert highlight_match("Window Install", "") == ("Window Install", "", "")
    assert highlight_match("Window Install", "roof") == ("Window Install", "", "")


def test_load_through_api(db_tables):
    client = TestClient(app)
    client.post("/line-item-templates", json={"description": "Window Install", "defaultQuantity": 1, "defaultAmount": 250})
    client.post("/line-item-templates", json={"description": "Door Repair"})

    catalog = TemplateCatalog(TemplateApiClient(client))
    templates = catalog.load()
    assert [t.description for t in templates] == ["Window Install", "Door Repair"]
    assert templates[0].default_amount == 250.0
    assert templates[1].default_amount is None
    assert catalog.loaded


def test_create_through_api_appends_to_catalog(db_tables):
    client = TestClient(app)
    catalog = TemplateCatalog(TemplateApiClient(client))
    catalog.load()

    created = catalog.create_template(" Gutter Cleaning ", "", "80")
    assert created is not None
    assert created.description == "Gutter Cleaning"
    assert created.default_quantity == 1.0
    assert created.default_amount == 80.0
    assert catalog.templates == [created]
    assert client.get("/line-item-templates").json()[0]["description"] == "Gutter Cleaning"


def test_create_parses_row_text_with_fallbacks():
    sent = []

    def handler(request):
        sent.append(json.loads(request.content))
        return httpx.Response(201, json={"id": 9, **sent[-1]})

    catalog = TemplateCatalog(failing_client(handler))
    created = catalog.create_template("Paint", "lots", "n/a")
    assert sent[0]["defaultQuantity"] == 1.0
    assert sent[0]["defaultAmount"] is None
    assert created.id == 9

    catalog.create_template("Prime", "0", "12.5")
    assert sent[1]["defaultQuantity"] == 0.0
    assert sent[1]["defaultAmount"] == 12.5


@pytest.mark.parametrize(
    "handler",
    [
        lambda request: httpx.Response(500, json={"detail": "boom"}),
        lambda request: httpx.Response(200, content=b"not json"),
        lambda request: httpx.Response(200, json={"unexpected": "shape"}),
        lambda request: httpx.Response(200, json=[{"description": "missing id"}]),
    ],
)
def test_load_failure_yields_empty_catalog(handler):
    catalog = TemplateCatalog(failing_client(handler), templates=CATALOG)
    assert catalog.load() == []
    assert len(catalog) == 0


def test_load_connection_error_yields_empty_catalog():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    catalog = TemplateCatalog(failing_client(handler))
    assert catalog.load() == []


def test_create_failure_leaves_catalog_unchanged():
    catalog = TemplateCatalog(failing_client(lambda request: httpx.Response(503)), templates=CATALOG[:1])
    assert catalog.create_template("Door Repair", "1", "120") is None
    assert catalog.templates == CATALOG[:1]


def test_create_blank_description_is_not_sent():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(201, json={"id": 1, "description": "x"})

    catalog = TemplateCatalog(failing_client(handler))
    assert catalog.create_template("   ", "1", "1") is None
    assert calls == []


def test_catalog_without_source():
    catalog = TemplateCatalog()
    assert catalog.load() == []
    assert catalog.create_template("Anything") is None


def test_client_from_settings_points_at_configured_service():
    client = TemplateApiClient.from_settings()
    try:
        assert client._http.base_url.host == "localhost"
        assert client._path == "/line-item-templates/"
    finally:
        client.close()
