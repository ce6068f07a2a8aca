"""In-memory implementation of StorageRepository"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, TypeVar

from database.entities import (
    Favorite,
    FavoriteWithProduct,
    FitAnalysis,
    HistoryData,
    Measurement,
    MeasurementData,
    NewUser,
    Notification,
    NotificationData,
    Product,
    ProductData,
    Recommendation,
    RecommendationData,
    User,
    UserHistory,
)
from database.repository import StorageRepository
from core.exceptions import DuplicateFavoriteException, DuplicateUserException

T = TypeVar("T")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


def _newest_first(records: List[T]) -> List[T]:
    # Stable sort over the reversed list keeps later inserts first on equal timestamps
    return sorted(reversed(records), key=lambda r: r.created_at, reverse=True)


class MemoryStorageRepository(StorageRepository):
    """
    Dict-backed repository for development and tests

    State lives in the process and is lost on restart. Uniqueness of user
    email/username and of (user, product) favorite pairs is enforced here
    exactly like the MongoDB unique indexes enforce it.
    """

    backend_name = "memory"

    def __init__(self) -> None:
        self.users: Dict[str, User] = {}
        self.measurements: Dict[str, Measurement] = {}  # keyed by user id
        self.products: Dict[str, Product] = {}
        self.fit_analyses: Dict[str, FitAnalysis] = {}
        self.favorites: Dict[str, Favorite] = {}
        self.recommendations: Dict[str, Recommendation] = {}
        self.history: Dict[str, UserHistory] = {}
        self.notifications: Dict[str, Notification] = {}

    # ========== Users ==========
    def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.email == email), None)

    def get_user_by_username(self, username: str) -> Optional[User]:
        return next((u for u in self.users.values() if u.username == username), None)

    def create_user(self, data: NewUser) -> User:
        if self.get_user_by_email(data.email):
            raise DuplicateUserException("email")
        if self.get_user_by_username(data.username):
            raise DuplicateUserException("username")

        user = User(id=_new_id(), created_at=_now(), **data.model_dump())
        self.users[user.id] = user
        return user

    # ========== Measurements ==========
    def get_measurement(self, user_id: str) -> Optional[Measurement]:
        return self.measurements.get(user_id)

    def create_or_update_measurement(self, user_id: str, data: MeasurementData) -> Measurement:
        existing = self.measurements.get(user_id)
        now = _now()

        measurement = Measurement(
            id=existing.id if existing else _new_id(),
            user_id=user_id,
            created_at=existing.created_at if existing else now,
            updated_at=now,
            **data.model_dump()
        )
        self.measurements[user_id] = measurement
        return measurement

    # ========== Products ==========
    def create_product(self, user_id: str, data: ProductData) -> Product:
        product = Product(id=_new_id(), user_id=user_id, created_at=_now(), **data.model_dump())
        self.products[product.id] = product
        return product

    def get_product(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    def get_user_products(self, user_id: str) -> List[Product]:
        return [p for p in self.products.values() if p.user_id == user_id]

    def delete_product(self, product_id: str) -> None:
        self.products.pop(product_id, None)

    # ========== Fit analyses ==========
    def create_fit_analysis(
        self,
        user_id: str,
        product_id: str,
        fit_status: str,
        analysis: Dict[str, Any],
        recommendations: Optional[str] = None
    ) -> FitAnalysis:
        fit_analysis = FitAnalysis(
            id=_new_id(),
            user_id=user_id,
            product_id=product_id,
            fit_status=fit_status,
            analysis=analysis,
            recommendations=recommendations,
            created_at=_now()
        )
        self.fit_analyses[fit_analysis.id] = fit_analysis
        return fit_analysis

    def get_user_fit_analyses(self, user_id: str) -> List[FitAnalysis]:
        return _newest_first([a for a in self.fit_analyses.values() if a.user_id == user_id])

    # ========== Favorites ==========
    def _find_favorite(self, user_id: str, product_id: str) -> Optional[Favorite]:
        return next(
            (f for f in self.favorites.values() if f.user_id == user_id and f.product_id == product_id),
            None
        )

    def add_to_favorites(self, user_id: str, product_id: str) -> Favorite:
        if self._find_favorite(user_id, product_id):
            raise DuplicateFavoriteException(product_id)

        favorite = Favorite(id=_new_id(), user_id=user_id, product_id=product_id, created_at=_now())
        self.favorites[favorite.id] = favorite
        return favorite

    def remove_from_favorites(self, user_id: str, product_id: str) -> None:
        favorite = self._find_favorite(user_id, product_id)
        if favorite:
            del self.favorites[favorite.id]

    def get_user_favorites(self, user_id: str) -> List[FavoriteWithProduct]:
        results = []
        for favorite in self.favorites.values():
            if favorite.user_id != user_id:
                continue
            product = self.products.get(favorite.product_id)
            if product:
                results.append(FavoriteWithProduct(product=product, **favorite.model_dump()))
        return results

    # ========== Recommendations ==========
    def create_recommendation(self, user_id: str, data: RecommendationData) -> Recommendation:
        recommendation = Recommendation(id=_new_id(), user_id=user_id, created_at=_now(), **data.model_dump())
        self.recommendations[recommendation.id] = recommendation
        return recommendation

    def get_recommendation(self, recommendation_id: str) -> Optional[Recommendation]:
        return self.recommendations.get(recommendation_id)

    def get_user_recommendations(self, user_id: str) -> List[Recommendation]:
        return _newest_first([r for r in self.recommendations.values() if r.user_id == user_id])

    # ========== History ==========
    def add_to_history(self, user_id: str, data: HistoryData) -> UserHistory:
        entry = UserHistory(id=_new_id(), user_id=user_id, created_at=_now(), **data.model_dump())
        self.history[entry.id] = entry
        return entry

    def get_user_history(self, user_id: str) -> List[UserHistory]:
        return _newest_first([h for h in self.history.values() if h.user_id == user_id])

    # ========== Notifications ==========
    def create_notification(self, user_id: str, data: NotificationData) -> Notification:
        notification = Notification(
            id=_new_id(),
            user_id=user_id,
            is_read=False,
            created_at=_now(),
            **data.model_dump()
        )
        self.notifications[notification.id] = notification
        return notification

    def get_notification(self, notification_id: str) -> Optional[Notification]:
        return self.notifications.get(notification_id)

    def get_user_notifications(self, user_id: str) -> List[Notification]:
        return _newest_first([n for n in self.notifications.values() if n.user_id == user_id])

    def mark_notification_as_read(self, notification_id: str) -> None:
        notification = self.notifications.get(notification_id)
        if notification:
            self.notifications[notification_id] = notification.model_copy(update={"is_read": True})

    # ========== Health ==========
    def ping(self) -> bool:
        return True
