import pytest
from fastapi.testclient import TestClient

from main import app
from printshop.api.endpoints.quotes import get_pricing_engine
from printshop.services.pricing_config import PricingConfiguration
from printshop.services.pricing_engine import PricingEngine


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_pricing_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_calculate_quote(client):
    response = client.post("/api/v1/quotes/calculate", json={
        "product_type": "flyer",
        "options": {"side": "recto", "paper": "offset-80"},
        "quantity": 500,
    })

    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 70
    assert data["total_display"] == "70.00 DT"
    assert data["surcharges"] == []
    assert data["details"]["paper"] == "Offset 80gsm Standard"


def test_calculate_quote_with_design_service(client):
    response = client.post("/api/v1/quotes/calculate", json={
        "product_type": "brochure",
        "options": {},
        "quantity": 10,
        "design_service": "layout",
    })

    data = response.json()
    assert response.status_code == 200
    assert data["design_details"]["service"] == "layout"
    assert data["design_details"]["hours"] == 2.72
    assert data["total"] == pytest.approx(182.92)


@pytest.mark.parametrize("body,status_code,error_code", [
    ({"product_type": "flyer", "quantity": 0}, 400, "INVALID_QUANTITY"),
    ({"product_type": "flyer"}, 400, "INVALID_QUANTITY"),
    ({"product_type": "banner", "quantity": 100}, 404, "UNKNOWN_PRODUCT"),
    ({"product_type": "poster", "options": {"format": "a2"}, "quantity": 5}, 422, "CALCULATION_ERROR"),
])
def test_calculate_failures(client, body, status_code, error_code):
    response = client.post("/api/v1/quotes/calculate", json=body)

    assert response.status_code == status_code
    assert response.json()["error"]["code"] == error_code


def test_missing_rate_table_is_service_unavailable(config_data):
    del config_data["rates"]["letterhead"]
    engine = PricingEngine(config=PricingConfiguration.from_dict(config_data))
    app.dependency_overrides[get_pricing_engine] = lambda: engine
    try:
        response = TestClient(app).post("/api/v1/quotes/calculate", json={
            "product_type": "letterhead",
            "quantity": 100,
        })
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 503
    assert response.json()["error"]["code"] == "MISSING_RATE_TABLE"


def test_request_validation_error(client):
    response = client.post("/api/v1/quotes/calculate", json={"quantity": 100})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("quantity", ["100", True, "abc"])
def test_non_numeric_quantity_rejected(client, quantity):
    response = client.post("/api/v1/quotes/calculate", json={"product_type": "flyer", "quantity": quantity})

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "VALIDATION_ERROR"


def test_fractional_quantity_accepted(client):
    response = client.post("/api/v1/quotes/calculate", json={
        "product_type": "flyer",
        "options": {"paper": "offset-80"},
        "quantity": 300.5,
    })

    assert response.status_code == 200
    assert response.json()["quantity"] == 300.5


def test_quote_summary(client):
    response = client.post("/api/v1/quotes/summary", json={
        "product_type": "letterhead",
        "options": {"paper": "offset-100"},
        "quantity": 100,
        "design_service": "correction",
    })

    assert response.status_code == 200
    data = response.json()
    assert data["summary"] == "Format A4\nPaper: Offset 100gsm Premium\n\n[DESIGN OPTION]: Simple correction (2.00h)"
    assert data["total"] == pytest.approx(116.4)
    assert data["total_display"] == "116.40 DT"


def test_list_products(client):
    response = client.get("/api/v1/quotes/products")

    assert response.status_code == 200
    products = {product["product_type"]: product for product in response.json()}
    assert set(products) == {"flyer", "card", "leaflet", "letterhead", "brochure", "book", "poster"}
    assert products["flyer"]["defaults"] == {"side": "recto", "paper": "coated-90-matte"}
    assert products["book"]["defaults"]["pages"] == 50
    assert products["book"]["defaults"]["inner_paper"] == "offset-80"
    assert products["poster"]["design_services"] == ["creation", "layout", "correction"]


def test_get_config(client):
    response = client.get("/api/v1/quotes/config")

    assert response.status_code == 200
    data = response.json()
    assert data["source"] == "tests"
    assert data["currency"] == "DT"
    assert data["fixed_costs"]["minimum_price"] == 28


def test_health(client):
    response = client.get("/api/v1/monitoring/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_metrics(client):
    client.post("/api/v1/quotes/calculate", json={"product_type": "flyer", "quantity": 500})

    response = client.get("/api/v1/monitoring/metrics")

    assert response.status_code == 200
    assert "quotes_calculated_total" in response.text


def test_startup_loads_pricing_configuration(monkeypatch, tmp_path, pricing_config):
    from printshop.core.config import settings
    from printshop.services.config_loader import config_loader
    from printshop.services.pricing_engine import pricing_engine

    monkeypatch.setattr(settings, "LOG_CONFIG", str(tmp_path / "missing.conf"))
    monkeypatch.setattr(config_loader, "load", lambda: pricing_config)
    # Restored after the test
    monkeypatch.setattr(pricing_engine, "config", pricing_engine.config)

    with TestClient(app) as startup_client:
        response = startup_client.get("/api/v1/monitoring/health")

    assert pricing_engine.config is pricing_config
    assert response.json()["config_source"] == "tests"
