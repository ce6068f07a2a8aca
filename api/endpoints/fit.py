"""Fit prediction endpoints"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import get_current_user_id
from core.dependencies import get_storage
from core.logging import logger, log_structured
from database.entities import FitAnalysis
from database.repository import StorageRepository
from services.activity_log import record_history
from services.fit_engine import predict_fit
from api.dependencies import FitPredictRequest, FitPredictionResponse, parse_payload


router = APIRouter()


@router.post("/fit-predict", response_model=FitPredictionResponse)
async def fit_predict(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> FitPredictionResponse:
    """
    Predict how a product fits the caller and store the analysis

    Flow:
    1. Load the product and the caller's measurement record
    2. Compare them with the fit engine
    3. Persist a FitAnalysis (empty advisories are stored as null)
    4. Record the activity in the caller's history

    Raises:
        HTTPException: 400 if the body is invalid, the product/measurement is
            missing, or the analysis could not be stored
    """
    data = await parse_payload(request, FitPredictRequest, "Fit prediction failed")

    product = storage.get_product(data.product_id)
    measurement = storage.get_measurement(user_id)
    if not product or not measurement:
        raise HTTPException(status_code=400, detail="Product or measurements not found")

    result = predict_fit(measurement, product.measurements)

    analysis = {
        "predictions": result.predictions,
        "measurements": {
            "user": measurement.model_dump(by_alias=True, mode="json"),
            "product": product.measurements
        }
    }

    try:
        fit_analysis = storage.create_fit_analysis(
            user_id,
            product.id,
            result.fit_status.value,
            analysis,
            result.recommendations or None
        )
    except Exception as e:
        logger.error(f"❌ Fit analysis save failed (user={user_id}, product={product.id}): {str(e)}")
        raise HTTPException(status_code=400, detail="Fit prediction failed")

    log_structured("fit_predicted", {
        "user_id": user_id,
        "product_id": product.id,
        "fit_status": fit_analysis.fit_status,
        "predictions": result.predictions
    })
    record_history(
        storage,
        user_id,
        f"Predicted fit for {product.name}",
        details=f"Fit: {fit_analysis.fit_status}",
        metadata={"productId": product.id, "fitAnalysisId": fit_analysis.id}
    )

    return FitPredictionResponse(
        id=fit_analysis.id,
        fit_status=fit_analysis.fit_status,
        analysis=fit_analysis.analysis,
        recommendations=fit_analysis.recommendations
    )


@router.get("/fit-analyses", response_model=List[FitAnalysis])
async def list_fit_analyses(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> List[FitAnalysis]:
    """The caller's fit analyses, newest first"""
    return storage.get_user_fit_analyses(user_id)
