"""Abstract repository interface for SmartFit data storage"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

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


class StorageRepository(ABC):
    """
    Abstract base class for SmartFit repositories

    This interface allows seamless switching between the in-memory store and
    MongoDB without changing business logic code. Lookups signal "not found"
    by returning None; list operations return newest-first where noted.
    """

    backend_name: str = "abstract"

    # ========== Users ==========
    @abstractmethod
    def get_user(self, user_id: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        pass

    @abstractmethod
    def create_user(self, data: NewUser) -> User:
        """
        Create a user

        Raises:
            DuplicateUserException: email or username already taken
        """
        pass

    # ========== Measurements ==========
    @abstractmethod
    def get_measurement(self, user_id: str) -> Optional[Measurement]:
        pass

    @abstractmethod
    def create_or_update_measurement(self, user_id: str, data: MeasurementData) -> Measurement:
        """
        Upsert the user's single measurement record

        The record id and created_at survive updates; updated_at is refreshed
        and every measurement field is replaced by ``data``.
        """
        pass

    # ========== Products ==========
    @abstractmethod
    def create_product(self, user_id: str, data: ProductData) -> Product:
        pass

    @abstractmethod
    def get_product(self, product_id: str) -> Optional[Product]:
        pass

    @abstractmethod
    def get_user_products(self, user_id: str) -> List[Product]:
        pass

    @abstractmethod
    def delete_product(self, product_id: str) -> None:
        """Delete a product; no-op if it does not exist"""
        pass

    # ========== Fit analyses ==========
    @abstractmethod
    def create_fit_analysis(
        self,
        user_id: str,
        product_id: str,
        fit_status: str,
        analysis: Dict[str, Any],
        recommendations: Optional[str] = None
    ) -> FitAnalysis:
        pass

    @abstractmethod
    def get_user_fit_analyses(self, user_id: str) -> List[FitAnalysis]:
        """Newest-first"""
        pass

    # ========== Favorites ==========
    @abstractmethod
    def add_to_favorites(self, user_id: str, product_id: str) -> Favorite:
        """
        Raises:
            DuplicateFavoriteException: the (user, product) pair already exists
        """
        pass

    @abstractmethod
    def remove_from_favorites(self, user_id: str, product_id: str) -> None:
        pass

    @abstractmethod
    def get_user_favorites(self, user_id: str) -> List[FavoriteWithProduct]:
        """Favorites joined to their product; unresolved products are dropped"""
        pass

    # ========== Recommendations ==========
    @abstractmethod
    def create_recommendation(self, user_id: str, data: RecommendationData) -> Recommendation:
        pass

    @abstractmethod
    def get_recommendation(self, recommendation_id: str) -> Optional[Recommendation]:
        pass

    @abstractmethod
    def get_user_recommendations(self, user_id: str) -> List[Recommendation]:
        """Newest-first"""
        pass

    # ========== History ==========
    @abstractmethod
    def add_to_history(self, user_id: str, data: HistoryData) -> UserHistory:
        pass

    @abstractmethod
    def get_user_history(self, user_id: str) -> List[UserHistory]:
        """Newest-first"""
        pass

    # ========== Notifications ==========
    @abstractmethod
    def create_notification(self, user_id: str, data: NotificationData) -> Notification:
        pass

    @abstractmethod
    def get_notification(self, notification_id: str) -> Optional[Notification]:
        pass

    @abstractmethod
    def get_user_notifications(self, user_id: str) -> List[Notification]:
        """Newest-first"""
        pass

    @abstractmethod
    def mark_notification_as_read(self, notification_id: str) -> None:
        """Flip is_read to True; no-op if the notification does not exist"""
        pass

    # ========== Health ==========
    @abstractmethod
    def ping(self) -> bool:
        pass


_repository: Optional[StorageRepository] = None


def get_repository() -> StorageRepository:
    """
    Factory function returning the process-wide repository implementation
    based on configuration

    MONGODB_URI set -> MongoStorageRepository, otherwise MemoryStorageRepository.

    Example:
        >>> repo = get_repository()
        >>> user = repo.get_user_by_email("demo@example.com")
    """
    global _repository

    if _repository is None:
        from config.settings import settings

        if settings.use_mongodb:
            from database.mongodb_connection import init_mongodb
            from database.mongodb_repository import MongoStorageRepository
            _repository = MongoStorageRepository(init_mongodb())
        else:
            from database.memory_repository import MemoryStorageRepository
            _repository = MemoryStorageRepository()

    return _repository


def reset_repository() -> None:
    """Drop the cached repository so the next call re-reads configuration"""
    global _repository
    _repository = None
