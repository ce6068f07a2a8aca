"""Tests for the MongoDB storage repository (mongomock-backed)"""

from unittest.mock import MagicMock, patch

import mongomock
import pytest
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.exceptions import (
    DuplicateFavoriteException,
    DuplicateUserException,
    MongoDBConnectionException,
    MongoDBException,
)
from database.entities import (
    HistoryData,
    MeasurementData,
    NewUser,
    NotificationData,
    ProductData,
    RecommendationData,
)
from database.mongodb_connection import ensure_indexes, init_mongodb
from database.mongodb_repository import MongoStorageRepository


@pytest.fixture
def db():
    database = mongomock.MongoClient().db
    ensure_indexes(database)
    return database


@pytest.fixture
def repo(db):
    return MongoStorageRepository(db)


@pytest.fixture
def user(repo):
    return repo.create_user(NewUser(
        username="alice", email="alice@example.com", password="hash", full_name="Alice Kim"
    ))


class TestUsers:
    def test_create_assigns_object_id_string(self, repo, user):
        assert len(user.id) == 24
        assert user.created_at.tzinfo is not None

        fetched = repo.get_user(user.id)
        assert fetched.email == "alice@example.com"
        assert fetched.full_name == "Alice Kim"

    def test_documents_use_camel_case(self, db, user):
        doc = db["users"].find_one({"email": "alice@example.com"})

        assert "fullName" in doc
        assert "createdAt" in doc

    def test_duplicate_email_rejected(self, repo, user):
        with pytest.raises(DuplicateUserException) as exc_info:
            repo.create_user(NewUser(
                username="other", email="alice@example.com", password="x", full_name="Other"
            ))
        assert exc_info.value.field == "email"

    def test_duplicate_username_rejected(self, repo, user):
        with pytest.raises(DuplicateUserException) as exc_info:
            repo.create_user(NewUser(
                username="alice", email="other@example.com", password="x", full_name="Other"
            ))
        assert exc_info.value.field == "username"

    def test_duplicate_lookup_failure_defaults_to_email(self, repo):
        repo.users = MagicMock()
        repo.users.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")
        repo.users.find_one.side_effect = PyMongoError("down")

        with pytest.raises(DuplicateUserException) as exc_info:
            repo.create_user(NewUser(
                username="alice", email="alice@example.com", password="x", full_name="Alice Kim"
            ))
        assert exc_info.value.field == "email"

    def test_malformed_id_reads_as_missing(self, repo):
        assert repo.get_user("not-an-object-id") is None

    def test_read_errors_return_none(self, repo):
        repo.users = MagicMock()
        repo.users.find_one.side_effect = PyMongoError("boom")

        assert repo.get_user_by_email("alice@example.com") is None


class TestMeasurements:
    def test_upsert_keeps_id_and_created_at(self, repo, user):
        data = MeasurementData(chest=100.0, shoulders=45.0, confidence={"chest": 95.0})

        first = repo.create_or_update_measurement(user.id, data)
        second = repo.create_or_update_measurement(user.id, data)

        assert second.id == first.id
        assert second.created_at == first.created_at
        assert second.user_id == user.id
        assert second.confidence == {"chest": 95.0}

    def test_upsert_replaces_fields(self, repo, user):
        repo.create_or_update_measurement(user.id, MeasurementData(chest=100.0, waist=80.0))
        updated = repo.create_or_update_measurement(user.id, MeasurementData(chest=102.0))

        assert updated.chest == 102.0
        assert updated.waist is None
        assert repo.get_measurement(user.id).chest == 102.0


class TestProductsAndFavorites:
    def test_product_round_trip(self, repo, user):
        product = repo.create_product(user.id, ProductData(
            name="Oxford Shirt", size="L", measurements={"chest": 100.0}
        ))

        fetched = repo.get_product(product.id)
        assert fetched.name == "Oxford Shirt"
        assert fetched.measurements == {"chest": 100.0}
        assert [p.id for p in repo.get_user_products(user.id)] == [product.id]

    def test_duplicate_favorite_rejected(self, repo, user):
        product = repo.create_product(user.id, ProductData(name="Oxford Shirt"))
        repo.add_to_favorites(user.id, product.id)

        with pytest.raises(DuplicateFavoriteException):
            repo.add_to_favorites(user.id, product.id)

    def test_deleted_product_disappears_from_favorites(self, repo, user):
        product = repo.create_product(user.id, ProductData(name="Oxford Shirt"))
        repo.add_to_favorites(user.id, product.id)
        assert len(repo.get_user_favorites(user.id)) == 1

        repo.delete_product(product.id)

        assert repo.get_user_favorites(user.id) == []

    def test_delete_with_malformed_id_is_noop(self, repo):
        repo.delete_product("not-an-object-id")

    def test_write_errors_raise(self, repo, user):
        repo.products = MagicMock()
        repo.products.insert_one.side_effect = PyMongoError("boom")

        with pytest.raises(MongoDBException):
            repo.create_product(user.id, ProductData(name="Oxford Shirt"))


class TestListings:
    def test_history_newest_first(self, repo, user):
        for action in ["first", "second", "third"]:
            repo.add_to_history(user.id, HistoryData(action=action))

        assert [h.action for h in repo.get_user_history(user.id)] == ["third", "second", "first"]

    def test_recommendation_lookup(self, repo, user):
        recommendation = repo.create_recommendation(user.id, RecommendationData(
            product_name="Formal Blazer", price="₹4,999", fit_score=94, reason="fits"
        ))

        fetched = repo.get_recommendation(recommendation.id)
        assert fetched.product_name == "Formal Blazer"
        assert fetched.price == "₹4,999"

    def test_fit_analysis_stored(self, repo, user):
        analysis = repo.create_fit_analysis(
            user.id, "product-1", "poor", {"predictions": {"chest": "too_large"}},
            "Chest: Consider smaller size"
        )

        stored = repo.get_user_fit_analyses(user.id)
        assert [a.id for a in stored] == [analysis.id]
        assert stored[0].analysis == {"predictions": {"chest": "too_large"}}


class TestNotifications:
    def test_mark_as_read(self, repo, user):
        notification = repo.create_notification(user.id, NotificationData(
            title="Welcome", message="Hello", type="info"
        ))
        assert notification.is_read is False

        repo.mark_notification_as_read(notification.id)

        assert repo.get_notification(notification.id).is_read is True


class TestConnection:
    def test_ping_failure_reports_false(self, repo):
        repo.db = MagicMock()
        repo.db.client.admin.command.side_effect = PyMongoError("down")

        assert repo.ping() is False

    def test_init_requires_uri(self):
        with patch("database.mongodb_connection.settings") as mock_settings:
            mock_settings.MONGODB_URI = None
            with pytest.raises(MongoDBConnectionException):
                init_mongodb()

    def test_init_connection_failure(self):
        with patch("database.mongodb_connection.MongoClient") as mock_client:
            mock_client.return_value.admin.command.side_effect = PyMongoError("unreachable")
            with pytest.raises(MongoDBConnectionException):
                init_mongodb(uri="mongodb://localhost:27017/smartfit")
