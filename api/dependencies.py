"""FastAPI dependencies and Pydantic request/response models"""

import json
from typing import Any, Dict, Optional, Type, TypeVar

from fastapi import HTTPException, Request, status
from pydantic import BaseModel, EmailStr, Field, ValidationError

from database.entities import (
    CamelModel,
    HistoryData,
    MeasurementData,
    NotificationData,
    ProductData,
    RecommendationData,
    User,
)

M = TypeVar("M", bound=BaseModel)


# ========== Request Models ==========
class SignupRequest(CamelModel):
    """Account creation request"""
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=8, description="Plaintext, at least 8 characters")
    full_name: str = Field(..., min_length=1)


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class MeasurementRequest(MeasurementData):
    """Measurement upsert request; every dimension is optional"""


class ProductRequest(ProductData):
    name: str = Field(..., min_length=1)


class FitPredictRequest(CamelModel):
    product_id: str = Field(..., min_length=1)


class FavoriteRequest(CamelModel):
    product_id: str = Field(..., min_length=1)


class RecommendationRequest(RecommendationData):
    product_name: str = Field(..., min_length=1)


class HistoryRequest(HistoryData):
    action: str = Field(..., min_length=1)


class NotificationRequest(NotificationData):
    pass


# ========== Response Models ==========
class UserPublic(CamelModel):
    """User as returned to clients (no password hash)"""
    id: str
    username: str
    email: str
    full_name: str

    @classmethod
    def from_user(cls, user: User) -> "UserPublic":
        return cls.model_validate(user.model_dump(exclude={"password"}))


class AuthResponse(CamelModel):
    user: UserPublic
    token: str


class FitPredictionResponse(CamelModel):
    id: str
    fit_status: str
    analysis: Dict[str, Any]
    recommendations: Optional[str] = None


class MessageResponse(BaseModel):
    message: str


# ========== Payload Parsing ==========
async def parse_payload(request: Request, model: Type[M], message: str) -> M:
    """
    Read the JSON body and validate it against ``model``

    Validation failures are reported with a single per-endpoint message
    instead of FastAPI's field-level 422 response. ``NaN`` and ``Infinity``
    literals are not JSON and are rejected like any other malformed body.

    Raises:
        HTTPException: 400 with ``message`` for malformed JSON or invalid fields
    """
    try:
        payload = json.loads(await request.body(), parse_constant=_reject_constant)
        return model.model_validate(payload)
    except (ValueError, ValidationError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=message)


def _reject_constant(name: str):
    raise ValueError(f"Non-finite number in JSON: {name}")
