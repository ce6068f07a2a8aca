"""Services module for SmartFit Backend"""

from services.fit_engine import FitResult, FitStatus, predict_fit
from services.measurement_capture import MeasurementCaptureService, get_measurement_capture_service
from services.recommendation_service import favorite_recommendation, seed_sample_recommendations
from services.activity_log import record_history

__all__ = [
    "FitResult",
    "FitStatus",
    "predict_fit",
    "MeasurementCaptureService",
    "get_measurement_capture_service",
    "favorite_recommendation",
    "seed_sample_recommendations",
    "record_history",
]
