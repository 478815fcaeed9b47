"""
Analysis endpoints: crop recommendation and plant disease detection.

Both return sample results through the async analysis boundary. The disease
endpoint still validates and stores the uploaded image so the flow matches
what a real inference service needs.
"""

import logging
from typing import Literal, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from .. import schemas
from ..analysis import AnalysisTimeout, filter_treatments, run_analysis
from ..config import settings
from ..data_provider import DataProvider, get_data_provider
from ..storage import UploadRejected, store_file, validate_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])

IMAGE_EXTENSIONS = {"jpg", "jpeg", "png", "webp", "heic"}


@router.post("/crop-recommendation")
async def crop_recommendation(
    payload: schemas.CropRecommendationInput,
    provider: DataProvider = Depends(get_data_provider),
):
    try:
        recommendations = await run_analysis(
            "crop recommendation",
            lambda: provider.fetch("crop_recommendations"),
            delay=settings.CROP_ANALYSIS_DELAY_SECONDS,
        )
    except AnalysisTimeout as e:
        raise HTTPException(status_code=504, detail=str(e))

    return {
        "inputs": payload.model_dump(),
        "recommendations": recommendations,
        "weather_forecast": provider.fetch("weekly_forecast"),
    }


@router.post("/disease-detection")
async def disease_detection(
    file: UploadFile = File(...),
    description: Optional[str] = Form(None),
    fertilizer: Optional[Literal["organic", "synthetic"]] = Form(None),
    provider: DataProvider = Depends(get_data_provider),
):
    file_bytes = await file.read()
    try:
        ext = validate_upload(file.filename or "", file_bytes, IMAGE_EXTENSIONS)
    except UploadRejected as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        diagnosis = await run_analysis(
            "disease detection",
            lambda: provider.fetch("disease_detection"),
            delay=settings.DISEASE_ANALYSIS_DELAY_SECONDS,
        )
    except AnalysisTimeout as e:
        raise HTTPException(status_code=504, detail=str(e))

    image_url = store_file(file_bytes, ext, "plants", prefix="plant")

    if description:
        logger.info("Symptom description received with %s (%d chars)", image_url, len(description))

    result = filter_treatments(diagnosis, fertilizer)
    result["image_url"] = image_url
    result["description"] = description
    return result
