"""
Dashboard endpoints: price trends, retail connections, schemes, weather, SDG.
"""

import pytest

from farmconnect.data_provider import InMemoryDataProvider, get_data_provider
from farmconnect.main import app
from farmconnect.routers.dashboard import price_trend


def test_price_trend():
    assert price_trend([{"price": 100, "predicted": 110}])["trend"] == "increasing"
    assert price_trend([{"price": 100, "predicted": 90}])["percentage_change"] == -10.0
    assert price_trend([{"price": 100, "predicted": 100}])["trend"] == "stable"


def test_price_crops(client):
    assert client.get("/api/dashboard/prices").json()["crops"] == ["cotton", "maize", "rice", "wheat"]


def test_crop_prices(client):
    resp = client.get("/api/dashboard/prices/Rice")
    assert resp.status_code == 200
    data = resp.json()
    assert data["crop"] == "rice"
    assert len(data["series"]) == 12
    assert data["current_price"] == 2750
    assert data["predicted_price"] == 2800
    assert data["price_difference"] == 50
    assert data["percentage_change"] == pytest.approx(1.82)
    assert data["trend"] == "increasing"


def test_unknown_crop_prices(client):
    resp = client.get("/api/dashboard/prices/saffron")
    assert resp.status_code == 404


def test_static_dashboards(client):
    for path in ("/api/dashboard/retail-connections", "/api/dashboard/government-schemes", "/api/weather"):
        resp = client.get(path)
        assert resp.status_code == 200, path
        assert resp.json()


def test_sdg_all(client):
    data = client.get("/api/sdg").json()
    assert [g["number"] for g in data["goals"]] == [2, 1, 13, 8]
    assert len(data["success_stories"]) == 3


def test_sdg_filter(client):
    data = client.get("/api/sdg", params={"goal": 8}).json()
    assert [g["number"] for g in data["goals"]] == [8]
    assert len(data["success_stories"]) == 1
    assert 8 in data["success_stories"][0]["sdg_goals"]


def test_missing_dataset_is_404(client):
    app.dependency_overrides[get_data_provider] = lambda: InMemoryDataProvider({})
    try:
        resp = client.get("/api/weather")
    finally:
        del app.dependency_overrides[get_data_provider]
    assert resp.status_code == 404
