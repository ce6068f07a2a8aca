"""Dependency injection providers for FastAPI"""

from database.repository import StorageRepository, get_repository
from services.measurement_capture import MeasurementCaptureService, get_measurement_capture_service


# ========== Dependency Providers (for FastAPI Depends) ==========
def get_storage() -> StorageRepository:
    """
    Get the configured storage repository

    Tests replace this provider through ``app.dependency_overrides``.
    """
    return get_repository()


def get_capture_service() -> MeasurementCaptureService:
    """Get the measurement capture simulator"""
    return get_measurement_capture_service()
