"""SQLAlchemy relational schema for SmartFit data

Mirrors the document collections as relational tables. No runtime backend
reads or writes these tables; they exist for deployments that provision a SQL
database and for migrations.
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    String,
    Text,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from core.logging import logger, log_structured

Base = declarative_base()


def _uuid() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_uuid)
    username = Column(Text, nullable=False, unique=True)
    email = Column(Text, nullable=False, unique=True)
    password = Column(Text, nullable=False)  # bcrypt hash
    full_name = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class MeasurementRecord(Base):
    """One row per user (upserted)"""
    __tablename__ = "measurements"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, unique=True)
    chest = Column(Float)
    shoulders = Column(Float)
    waist = Column(Float)
    height = Column(Float)
    hips = Column(Float)
    confidence = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=_utcnow)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)


class ProductRecord(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(Text, nullable=False)
    brand = Column(Text)
    image_url = Column(Text)
    description = Column(Text)
    size = Column(Text)
    measurements = Column(JSON)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class FitAnalysisRecord(Base):
    __tablename__ = "fit_analyses"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    fit_status = Column(String(20), nullable=False)  # perfect | acceptable | poor
    analysis = Column(JSON, nullable=False)
    recommendations = Column(Text)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)


class FavoriteRecord(Base):
    __tablename__ = "favorites"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_favorites_user_product"),
    )

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=_utcnow)


class RecommendationRecord(Base):
    __tablename__ = "recommendations"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    product_name = Column(Text, nullable=False)
    brand = Column(Text)
    price = Column(Text)
    image_url = Column(Text)
    fit_score = Column(Float, nullable=False)
    reason = Column(Text, nullable=False)
    category = Column(Text)
    size = Column(Text)
    external_url = Column(Text)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)


class UserHistoryRecord(Base):
    __tablename__ = "user_history"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    action = Column(Text, nullable=False)
    details = Column(Text)
    # "metadata" is reserved on declarative classes
    meta = Column("metadata", JSON)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)


class NotificationRecord(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    title = Column(Text, nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    is_read = Column(Boolean, default=False, nullable=False)
    action_url = Column(Text)
    created_at = Column(DateTime(timezone=True), default=_utcnow, index=True)


def create_relational_schema(database_url: str) -> Engine:
    """
    Create every SmartFit table on the given database

    Args:
        database_url: SQLAlchemy URL, e.g. "postgresql://user:pw@host/smartfit"

    Returns:
        Engine bound to the database
    """
    engine = create_engine(database_url, pool_pre_ping=True, echo=False)
    Base.metadata.create_all(bind=engine)

    tables = sorted(Base.metadata.tables.keys())
    logger.info(f"✅ Relational schema ready ({len(tables)} tables)")
    log_structured("relational_schema_created", {"tables": tables})

    return engine
