"""Pydantic entity models shared by every storage backend

Attributes are snake_case in Python and camelCase on the wire and in MongoDB
documents (``full_name`` <-> ``fullName``).
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serializing field names as camelCase"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False)


# ========== Users ==========
class NewUser(CamelModel):
    """User creation payload; ``password`` must already be hashed"""
    username: str
    email: str
    password: str
    full_name: str


class User(NewUser):
    id: str
    created_at: datetime


# ========== Measurements ==========
class MeasurementData(CamelModel):
    """Body measurements in centimetres plus per-dimension confidence (%)"""
    chest: Optional[float] = None
    shoulders: Optional[float] = None
    waist: Optional[float] = None
    height: Optional[float] = None
    hips: Optional[float] = None
    confidence: Optional[Dict[str, float]] = None


class Measurement(MeasurementData):
    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime


# ========== Products ==========
class ProductData(CamelModel):
    name: str
    brand: Optional[str] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    size: Optional[str] = None
    measurements: Optional[Dict[str, float]] = None


class Product(ProductData):
    id: str
    user_id: str
    created_at: datetime


# ========== Fit analyses ==========
class FitAnalysis(CamelModel):
    id: str
    user_id: str
    product_id: str
    fit_status: str
    analysis: Dict[str, Any]
    recommendations: Optional[str] = None
    created_at: datetime


# ========== Favorites ==========
class Favorite(CamelModel):
    id: str
    user_id: str
    product_id: str
    created_at: datetime


class FavoriteWithProduct(Favorite):
    product: Product


# ========== Recommendations ==========
class RecommendationData(CamelModel):
    product_name: str
    brand: Optional[str] = None
    price: Optional[str] = None  # display string, e.g. "₹1,299"
    image_url: Optional[str] = None
    fit_score: float
    reason: str
    category: Optional[str] = None
    size: Optional[str] = None
    external_url: Optional[str] = None


class Recommendation(RecommendationData):
    id: str
    user_id: str
    created_at: datetime


# ========== History ==========
class HistoryData(CamelModel):
    action: str
    details: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None


class UserHistory(HistoryData):
    id: str
    user_id: str
    created_at: datetime


# ========== Notifications ==========
class NotificationData(CamelModel):
    title: str
    message: str
    type: str
    action_url: Optional[str] = None


class Notification(NotificationData):
    id: str
    user_id: str
    is_read: bool = False
    created_at: datetime
