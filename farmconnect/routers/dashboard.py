from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from ..data_provider import DataProvider, get_data_provider

router = APIRouter(tags=["dashboard"])


def _fetch(provider: DataProvider, key: str):
    try:
        return provider.fetch(key)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Dataset not available: {key}")


def price_trend(series: list) -> dict:
    """Compare the latest actual price with the latest predicted price."""
    current = series[-1]["price"]
    predicted = series[-1]["predicted"]
    difference = predicted - current
    if difference > 0:
        trend = "increasing"
    elif difference < 0:
        trend = "decreasing"
    else:
        trend = "stable"
    return {
        "current_price": current,
        "predicted_price": predicted,
        "price_difference": difference,
        "percentage_change": round(difference / current * 100, 2) if current else 0.0,
        "trend": trend,
    }


@router.get("/dashboard/prices")
def price_crops(provider: DataProvider = Depends(get_data_provider)):
    return {"crops": sorted(_fetch(provider, "price_predictions"))}


@router.get("/dashboard/prices/{crop}")
def crop_prices(crop: str, provider: DataProvider = Depends(get_data_provider)):
    predictions = _fetch(provider, "price_predictions")
    series = predictions.get(crop.lower())
    if not series:
        raise HTTPException(
            status_code=404,
            detail=f"No price data for crop: {crop}. Available: {sorted(predictions)}",
        )
    return {"crop": crop.lower(), "series": series, **price_trend(series)}


@router.get("/dashboard/retail-connections")
def retail_connections(provider: DataProvider = Depends(get_data_provider)):
    return _fetch(provider, "retail_connections")


@router.get("/dashboard/government-schemes")
def government_schemes(provider: DataProvider = Depends(get_data_provider)):
    return _fetch(provider, "government_schemes")


@router.get("/weather")
def weather(provider: DataProvider = Depends(get_data_provider)):
    return _fetch(provider, "weather")


@router.get("/sdg")
def sdg(goal: Optional[int] = None, provider: DataProvider = Depends(get_data_provider)):
    goals = _fetch(provider, "sdg_goals")
    stories = _fetch(provider, "success_stories")
    if goal is not None:
        goals = [g for g in goals if g["number"] == goal]
        stories = [s for s in stories if goal in s.get("sdg_goals", [])]
    return {"goals": goals, "success_stories": stories}
