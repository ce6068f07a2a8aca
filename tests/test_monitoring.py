"""Tests for Sentry helpers and the exception taxonomy"""

from unittest.mock import patch

from core.exceptions import (
    AuthenticationException,
    DatabaseException,
    DuplicateUserException,
    InvalidTokenException,
    MongoDBConnectionException,
    MongoDBException,
    SmartFitException,
    TokenMissingException,
)
from core.monitoring import before_send_filter, init_sentry


class TestBeforeSendFilter:
    def test_health_transactions_dropped(self):
        assert before_send_filter({"transaction": "GET /api/health"}, {}) is None

    def test_expected_exceptions_dropped(self):
        event = {"exception": {"values": [{"type": "InvalidTokenException"}]}}

        assert before_send_filter(event, {}) is None

    def test_unexpected_exceptions_kept(self):
        event = {"exception": {"values": [{"type": "MongoDBException"}]}}

        assert before_send_filter(event, {}) == event


def test_sentry_disabled_without_dsn():
    with patch.dict("os.environ", {"SENTRY_DSN": ""}):
        assert init_sentry(dsn=None) is False


class TestExceptionTaxonomy:
    def test_hierarchy(self):
        assert issubclass(MongoDBConnectionException, MongoDBException)
        assert issubclass(MongoDBException, DatabaseException)
        assert issubclass(DuplicateUserException, DatabaseException)
        assert issubclass(TokenMissingException, AuthenticationException)
        assert issubclass(AuthenticationException, SmartFitException)

    def test_auth_status_codes(self):
        assert TokenMissingException().status_code == 401
        assert InvalidTokenException().status_code == 403
        assert TokenMissingException().message == "Access token required"

    def test_duplicate_user_keeps_field(self):
        exc = DuplicateUserException("username")

        assert exc.field == "username"
        assert "username" in exc.message
