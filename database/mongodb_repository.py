"""MongoDB implementation of StorageRepository"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Type, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import BaseModel
from pymongo import DESCENDING
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError, PyMongoError

from database import mongodb_connection as collections
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
from core.exceptions import DuplicateFavoriteException, DuplicateUserException, MongoDBException
from core.logging import logger

M = TypeVar("M", bound=BaseModel)

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: Any) -> Any:
    """MongoDB returns naive UTC datetimes unless the client is tz-aware"""
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _to_entity(model: Type[M], doc: Dict[str, Any]) -> M:
    """Convert a MongoDB document into an entity model"""
    data = {key: _as_utc(value) for key, value in doc.items() if key != "_id"}
    data["id"] = str(doc["_id"])
    return model.model_validate(data)


def _to_document(data: BaseModel, **extra: Any) -> Dict[str, Any]:
    """Serialize an entity payload using camelCase field names"""
    document = data.model_dump(by_alias=True)
    document.update(extra)
    return document


class MongoStorageRepository(StorageRepository):
    """
    MongoDB implementation of StorageRepository

    Reads log driver errors and return None / [] so a failing read looks like
    missing data; writes log and raise MongoDBException.
    """

    backend_name = "mongodb"

    def __init__(self, db: Database) -> None:
        self.db = db
        self.users = db[collections.USERS]
        self.measurements = db[collections.MEASUREMENTS]
        self.products = db[collections.PRODUCTS]
        self.fit_analyses = db[collections.FIT_ANALYSES]
        self.favorites = db[collections.FAVORITES]
        self.recommendations = db[collections.RECOMMENDATIONS]
        self.user_history = db[collections.USER_HISTORY]
        self.notifications = db[collections.NOTIFICATIONS]

    # ========== Helpers ==========
    def _find_one(self, collection, model: Type[M], query: Dict[str, Any], what: str) -> Optional[M]:
        try:
            doc = collection.find_one(query)
        except PyMongoError as e:
            logger.error(f"❌ MongoDB read failed ({what}): {str(e)}")
            return None
        return _to_entity(model, doc) if doc else None

    def _find_by_id(self, collection, model: Type[M], record_id: str, what: str) -> Optional[M]:
        try:
            object_id = ObjectId(record_id)
        except (InvalidId, TypeError):
            logger.debug(f"Malformed {what} id: {record_id!r}")
            return None
        return self._find_one(collection, model, {"_id": object_id}, what)

    def _find_many(self, collection, model: Type[M], query: Dict[str, Any], what: str,
                   newest_first: bool = True) -> List[M]:
        try:
            cursor = collection.find(query)
            if newest_first:
                cursor = cursor.sort(NEWEST_FIRST)
            docs = list(cursor)
        except PyMongoError as e:
            logger.error(f"❌ MongoDB read failed ({what}): {str(e)}")
            return []
        return [_to_entity(model, doc) for doc in docs]

    def _insert(self, collection, model: Type[M], document: Dict[str, Any], what: str) -> M:
        try:
            result = collection.insert_one(document)
        except DuplicateKeyError:
            raise
        except PyMongoError as e:
            logger.error(f"❌ MongoDB write failed ({what}): {str(e)}")
            raise MongoDBException(f"Failed to save {what}") from e

        document["_id"] = result.inserted_id
        return _to_entity(model, document)

    # ========== Users ==========
    def get_user(self, user_id: str) -> Optional[User]:
        return self._find_by_id(self.users, User, user_id, "user")

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._find_one(self.users, User, {"email": email}, "user")

    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._find_one(self.users, User, {"username": username}, "user")

    def create_user(self, data: NewUser) -> User:
        try:
            return self._insert(self.users, User, _to_document(data, createdAt=_now()), "user")
        except DuplicateKeyError as e:
            try:
                field = "username" if self.users.find_one({"username": data.username}) else "email"
            except PyMongoError as lookup_error:
                logger.error(f"❌ MongoDB read failed (user): {str(lookup_error)}")
                field = "email"
            logger.warning(f"⚠️ Duplicate user rejected by unique index ({field})")
            raise DuplicateUserException(field) from e

    # ========== Measurements ==========
    def get_measurement(self, user_id: str) -> Optional[Measurement]:
        return self._find_one(self.measurements, Measurement, {"userId": user_id}, "measurement")

    def create_or_update_measurement(self, user_id: str, data: MeasurementData) -> Measurement:
        now = _now()
        try:
            self.measurements.update_one(
                {"userId": user_id},
                {
                    "$set": _to_document(data, updatedAt=now),
                    "$setOnInsert": {"createdAt": now},
                },
                upsert=True
            )
            doc = self.measurements.find_one({"userId": user_id})
        except PyMongoError as e:
            logger.error(f"❌ MongoDB write failed (measurement): {str(e)}")
            raise MongoDBException("Failed to save measurement") from e

        return _to_entity(Measurement, doc)

    # ========== Products ==========
    def create_product(self, user_id: str, data: ProductData) -> Product:
        document = _to_document(data, userId=user_id, createdAt=_now())
        return self._insert(self.products, Product, document, "product")

    def get_product(self, product_id: str) -> Optional[Product]:
        return self._find_by_id(self.products, Product, product_id, "product")

    def get_user_products(self, user_id: str) -> List[Product]:
        return self._find_many(self.products, Product, {"userId": user_id}, "products", newest_first=False)

    def delete_product(self, product_id: str) -> None:
        try:
            object_id = ObjectId(product_id)
        except (InvalidId, TypeError):
            return
        try:
            self.products.delete_one({"_id": object_id})
        except PyMongoError as e:
            logger.error(f"❌ MongoDB write failed (product delete): {str(e)}")
            raise MongoDBException("Failed to delete product") from e

    # ========== Fit analyses ==========
    def create_fit_analysis(
        self,
        user_id: str,
        product_id: str,
        fit_status: str,
        analysis: Dict[str, Any],
        recommendations: Optional[str] = None
    ) -> FitAnalysis:
        document = {
            "userId": user_id,
            "productId": product_id,
            "fitStatus": fit_status,
            "analysis": analysis,
            "recommendations": recommendations,
            "createdAt": _now(),
        }
        return self._insert(self.fit_analyses, FitAnalysis, document, "fit analysis")

    def get_user_fit_analyses(self, user_id: str) -> List[FitAnalysis]:
        return self._find_many(self.fit_analyses, FitAnalysis, {"userId": user_id}, "fit analyses")

    # ========== Favorites ==========
    def add_to_favorites(self, user_id: str, product_id: str) -> Favorite:
        document = {"userId": user_id, "productId": product_id, "createdAt": _now()}
        try:
            return self._insert(self.favorites, Favorite, document, "favorite")
        except DuplicateKeyError as e:
            raise DuplicateFavoriteException(product_id) from e

    def remove_from_favorites(self, user_id: str, product_id: str) -> None:
        try:
            self.favorites.delete_one({"userId": user_id, "productId": product_id})
        except PyMongoError as e:
            logger.error(f"❌ MongoDB write failed (favorite delete): {str(e)}")
            raise MongoDBException("Failed to remove favorite") from e

    def get_user_favorites(self, user_id: str) -> List[FavoriteWithProduct]:
        results = []
        for favorite in self._find_many(self.favorites, Favorite, {"userId": user_id}, "favorites",
                                        newest_first=False):
            product = self.get_product(favorite.product_id)
            if product:
                results.append(FavoriteWithProduct(product=product, **favorite.model_dump()))
        return results

    # ========== Recommendations ==========
    def create_recommendation(self, user_id: str, data: RecommendationData) -> Recommendation:
        document = _to_document(data, userId=user_id, createdAt=_now())
        return self._insert(self.recommendations, Recommendation, document, "recommendation")

    def get_recommendation(self, recommendation_id: str) -> Optional[Recommendation]:
        return self._find_by_id(self.recommendations, Recommendation, recommendation_id, "recommendation")

    def get_user_recommendations(self, user_id: str) -> List[Recommendation]:
        return self._find_many(self.recommendations, Recommendation, {"userId": user_id}, "recommendations")

    # ========== History ==========
    def add_to_history(self, user_id: str, data: HistoryData) -> UserHistory:
        document = _to_document(data, userId=user_id, createdAt=_now())
        return self._insert(self.user_history, UserHistory, document, "history entry")

    def get_user_history(self, user_id: str) -> List[UserHistory]:
        return self._find_many(self.user_history, UserHistory, {"userId": user_id}, "history")

    # ========== Notifications ==========
    def create_notification(self, user_id: str, data: NotificationData) -> Notification:
        document = _to_document(data, userId=user_id, isRead=False, createdAt=_now())
        return self._insert(self.notifications, Notification, document, "notification")

    def get_notification(self, notification_id: str) -> Optional[Notification]:
        return self._find_by_id(self.notifications, Notification, notification_id, "notification")

    def get_user_notifications(self, user_id: str) -> List[Notification]:
        return self._find_many(self.notifications, Notification, {"userId": user_id}, "notifications")

    def mark_notification_as_read(self, notification_id: str) -> None:
        try:
            object_id = ObjectId(notification_id)
        except (InvalidId, TypeError):
            return
        try:
            self.notifications.update_one({"_id": object_id}, {"$set": {"isRead": True}})
        except PyMongoError as e:
            logger.error(f"❌ MongoDB write failed (notification): {str(e)}")
            raise MongoDBException("Failed to update notification") from e

    # ========== Health ==========
    def ping(self) -> bool:
        try:
            self.db.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.error(f"❌ MongoDB ping failed: {str(e)}")
            return False
