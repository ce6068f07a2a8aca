"""Tests for the SQLAlchemy relational schema"""

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError

from database.models import FavoriteRecord, ProductRecord, UserRecord, create_relational_schema


def test_create_relational_schema_creates_all_tables():
    engine = create_relational_schema("sqlite://")

    tables = set(inspect(engine).get_table_names())

    assert tables == {
        "users", "measurements", "products", "fit_analyses",
        "favorites", "recommendations", "user_history", "notifications"
    }


def test_user_email_is_unique(test_db):
    test_db.add(UserRecord(username="alice", email="alice@example.com", password="h", full_name="Alice"))
    test_db.commit()

    test_db.add(UserRecord(username="alice2", email="alice@example.com", password="h", full_name="Alice"))
    with pytest.raises(IntegrityError):
        test_db.commit()


def test_favorite_pair_is_unique(test_db):
    user = UserRecord(username="alice", email="alice@example.com", password="h", full_name="Alice")
    test_db.add(user)
    test_db.flush()
    product = ProductRecord(user_id=user.id, name="Oxford Shirt", measurements={"chest": 100.0})
    test_db.add(product)
    test_db.flush()

    test_db.add(FavoriteRecord(user_id=user.id, product_id=product.id))
    test_db.commit()

    test_db.add(FavoriteRecord(user_id=user.id, product_id=product.id))
    with pytest.raises(IntegrityError):
        test_db.commit()


def test_defaults_are_applied(test_db):
    user = UserRecord(username="alice", email="alice@example.com", password="h", full_name="Alice")
    test_db.add(user)
    test_db.commit()

    assert len(user.id) == 36
    assert user.created_at is not None
