"""
Simulated body measurement capture

Stands in for a camera-based detector: every capture returns a randomized but
plausible measurement set with per-dimension confidence scores. Values are in
centimetres, confidences in percent, both rounded to two decimals.
"""

import random
from typing import Dict, Optional, Tuple

from database.entities import MeasurementData
from core.logging import logger


# (min, max) in cm
MEASUREMENT_RANGES: Dict[str, Tuple[float, float]] = {
    "chest": (95.0, 110.0),
    "shoulders": (40.0, 50.0),
    "waist": (80.0, 95.0),
    "height": (165.0, 185.0),
    "hips": (85.0, 100.0),
}

# (min, max) in percent
CONFIDENCE_RANGES: Dict[str, Tuple[float, float]] = {
    "chest": (90.0, 100.0),
    "shoulders": (85.0, 100.0),
    "waist": (88.0, 100.0),
    "height": (95.0, 100.0),
    "hips": (87.0, 100.0),
}


class MeasurementCaptureService:
    """Mock measurement detector"""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def _sample(self, bounds: Tuple[float, float]) -> float:
        low, high = bounds
        return round(self.rng.uniform(low, high), 2)

    def capture(self) -> MeasurementData:
        """Produce one simulated measurement set"""
        values = {name: self._sample(bounds) for name, bounds in MEASUREMENT_RANGES.items()}
        confidence = {name: self._sample(bounds) for name, bounds in CONFIDENCE_RANGES.items()}

        logger.debug(f"📏 Simulated capture: {values}")
        return MeasurementData(confidence=confidence, **values)


# Singleton instance
_capture_service: Optional[MeasurementCaptureService] = None


def get_measurement_capture_service() -> MeasurementCaptureService:
    """Get singleton capture service instance"""
    global _capture_service

    if _capture_service is None:
        _capture_service = MeasurementCaptureService()

    return _capture_service
