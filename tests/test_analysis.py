"""
Analysis boundary and analysis endpoints: crop recommendation, disease detection.
"""

import asyncio
import os

import pytest

from farmconnect.analysis import AnalysisTimeout, filter_treatments, run_analysis
from farmconnect.config import settings
from farmconnect.data_provider import InMemoryDataProvider, get_data_provider
from farmconnect.main import app

CROP_INPUT = {
    "soil_type": "loamy", "region": "karnataka", "temperature": 28, "humidity": 70,
    "rainfall": 120, "ph": 6.5, "nitrogen": 80, "phosphorus": 50, "potassium": 40,
}

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


# ============================================================
# run_analysis
# ============================================================

def test_run_analysis_returns_producer_result():
    result = asyncio.run(run_analysis("test", lambda: {"ok": True}, delay=0))
    assert result == {"ok": True}


def test_run_analysis_awaits_async_producer():
    async def producer():
        return [1, 2, 3]
    assert asyncio.run(run_analysis("test", producer, delay=0)) == [1, 2, 3]


def test_run_analysis_times_out():
    with pytest.raises(AnalysisTimeout):
        asyncio.run(run_analysis("slow", lambda: "late", delay=1.0, timeout=0.05))


def test_run_analysis_propagates_errors():
    def broken():
        raise KeyError("crop_recommendations")
    with pytest.raises(KeyError):
        asyncio.run(run_analysis("broken", broken, delay=0))


def test_run_analysis_cancellation_propagates():
    async def main():
        task = asyncio.ensure_future(run_analysis("cancelled", lambda: "never", delay=5.0))
        await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        return task.cancelled()
    assert asyncio.run(main())


def test_filter_treatments():
    diagnosis = {"disease": "Leaf Spot", "treatments": {"organic": ["neem"], "synthetic": ["mancozeb"]}}
    assert filter_treatments(dict(diagnosis))["treatments"] == diagnosis["treatments"]
    assert filter_treatments(dict(diagnosis), "organic")["treatments"] == {"organic": ["neem"]}


# ============================================================
# Endpoints
# ============================================================

def test_crop_recommendation(client):
    resp = client.post("/api/analysis/crop-recommendation", json=CROP_INPUT)
    assert resp.status_code == 200
    data = resp.json()
    assert data["inputs"]["region"] == "karnataka"
    assert len(data["recommendations"]) > 0
    assert len(data["weather_forecast"]["temperature"]) == 7


def test_crop_recommendation_validates_ranges(client):
    resp = client.post("/api/analysis/crop-recommendation", json={**CROP_INPUT, "ph": 15})
    assert resp.status_code == 422


def test_crop_recommendation_timeout(client, monkeypatch):
    monkeypatch.setattr(settings, "CROP_ANALYSIS_DELAY_SECONDS", 1.0)
    monkeypatch.setattr(settings, "ANALYSIS_TIMEOUT_SECONDS", 0.05)
    resp = client.post("/api/analysis/crop-recommendation", json=CROP_INPUT)
    assert resp.status_code == 504


def test_crop_recommendation_uses_injected_provider(client):
    provider = InMemoryDataProvider({
        "crop_recommendations": [{"crop": "Ragi", "confidence": 88}],
        "weekly_forecast": {},
    })
    app.dependency_overrides[get_data_provider] = lambda: provider
    try:
        resp = client.post("/api/analysis/crop-recommendation", json=CROP_INPUT)
    finally:
        del app.dependency_overrides[get_data_provider]
    assert resp.status_code == 200
    assert resp.json()["recommendations"] == [{"crop": "Ragi", "confidence": 88}]


def test_disease_detection(client):
    resp = client.post(
        "/api/analysis/disease-detection",
        files={"file": ("leaf.png", PNG_BYTES, "image/png")},
        data={"description": "Brown spots on lower leaves"},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["disease"] == "Late Blight"
    assert set(data["treatments"]) == {"organic", "synthetic"}
    assert data["image_url"].startswith("/uploads/plants/plant_")
    assert data["description"] == "Brown spots on lower leaves"


def test_disease_detection_filters_treatments(client):
    resp = client.post(
        "/api/analysis/disease-detection",
        files={"file": ("leaf.jpg", PNG_BYTES, "image/jpeg")},
        data={"fertilizer": "organic"},
    )
    assert resp.status_code == 200
    assert list(resp.json()["treatments"]) == ["organic"]


def test_disease_detection_rejects_non_images(client):
    resp = client.post(
        "/api/analysis/disease-detection",
        files={"file": ("notes.txt", b"hello", "text/plain")},
    )
    assert resp.status_code == 400
    assert "not allowed" in resp.json()["detail"]


def test_disease_detection_rejects_empty_file(client):
    resp = client.post(
        "/api/analysis/disease-detection",
        files={"file": ("leaf.png", b"", "image/png")},
    )
    assert resp.status_code == 400


def test_disease_detection_timeout_stores_nothing(client, monkeypatch):
    plants_dir = os.path.join(settings.UPLOAD_DIR, "plants")
    before = set(os.listdir(plants_dir)) if os.path.isdir(plants_dir) else set()
    monkeypatch.setattr(settings, "DISEASE_ANALYSIS_DELAY_SECONDS", 1.0)
    monkeypatch.setattr(settings, "ANALYSIS_TIMEOUT_SECONDS", 0.05)
    resp = client.post(
        "/api/analysis/disease-detection",
        files={"file": ("leaf.png", PNG_BYTES, "image/png")},
    )
    assert resp.status_code == 504
    after = set(os.listdir(plants_dir)) if os.path.isdir(plants_dir) else set()
    assert after == before
