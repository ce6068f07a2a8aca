"""Body measurement endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from core.auth import get_current_user_id
from core.dependencies import get_capture_service, get_storage
from core.logging import logger, log_structured
from database.entities import Measurement, MeasurementData
from database.repository import StorageRepository
from services.activity_log import record_history
from services.measurement_capture import MeasurementCaptureService
from api.dependencies import MeasurementRequest, parse_payload


router = APIRouter()


def save_measurement(
    storage: StorageRepository,
    user_id: str,
    data: MeasurementData,
    source: str
) -> Measurement:
    """Upsert the user's measurement and record the activity"""
    try:
        measurement = storage.create_or_update_measurement(user_id, data)
    except Exception as e:
        logger.error(f"❌ Measurement save failed (user={user_id}): {str(e)}")
        raise HTTPException(status_code=500, detail="Server error")

    log_structured("measurement_saved", {
        "user_id": user_id,
        "measurement_id": measurement.id,
        "source": source
    })
    record_history(storage, user_id, "Measured body", details=f"Measurements updated ({source})")

    return measurement


@router.get("/measurements", response_model=Optional[Measurement])
async def get_measurement(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> Optional[Measurement]:
    """Return the caller's measurement record, or null if none exists yet"""
    return storage.get_measurement(user_id)


@router.post("/measurements", response_model=Measurement)
async def upsert_measurement(
    request: Request,
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage)
) -> Measurement:
    """
    Create or replace the caller's measurement record

    Raises:
        HTTPException: 400 if the body is not a valid measurement set
    """
    data = await parse_payload(request, MeasurementRequest, "Invalid measurement data")
    return save_measurement(storage, user_id, data, source="manual")


@router.post("/measurements/capture", response_model=Measurement)
async def capture_measurement(
    user_id: str = Depends(get_current_user_id),
    storage: StorageRepository = Depends(get_storage),
    capture_service: MeasurementCaptureService = Depends(get_capture_service)
) -> Measurement:
    """Run the simulated detector and store its result as the caller's measurement"""
    data = capture_service.capture()
    return save_measurement(storage, user_id, data, source="capture")
