"""
Database module for SmartFit Backend

This module provides a unified interface for storage operations,
supporting an in-memory store and MongoDB.

Environment Variables:
    MONGODB_URI: When set, MongoDB is used; otherwise the in-memory store (default)

Usage:
    from database import init_storage

    # Initialize storage (MongoDB or in-memory based on MONGODB_URI)
    storage = init_storage()
    user = storage.get_user_by_email("demo@example.com")
"""

from core.logging import logger, log_structured


def init_storage():
    """
    Initialize the storage backend selected by configuration

    Returns:
        StorageRepository: the process-wide repository

    Raises:
        MongoDBConnectionException: MONGODB_URI is set but the server is unreachable
    """
    from database.repository import get_repository

    repository = get_repository()

    logger.info(f"✅ Storage initialized: {repository.backend_name}")
    log_structured("storage_initialized", {"backend": repository.backend_name})

    return repository
