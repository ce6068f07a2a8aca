"""Tests for recommendation endpoints and the favorite-from-recommendation flow"""

from unittest.mock import patch

import pytest

from core.exceptions import DatabaseException
from services.recommendation_service import favorite_recommendation
from services.sample_data import SAMPLE_RECOMMENDATIONS

RECOMMENDATION = {
    "productName": "Formal Blazer",
    "brand": "Raymond",
    "price": "₹4,999",
    "fitScore": 94,
    "reason": "Professional fit, excellent shoulder measurements",
    "category": "jackets",
    "size": "L"
}


class TestRecommendationFeed:
    def test_create_and_list(self, client, auth_headers):
        created = client.post("/api/recommendations", json=RECOMMENDATION, headers=auth_headers)

        assert created.status_code == 200
        assert created.json()["price"] == "₹4,999"

        feed = client.get("/api/recommendations", headers=auth_headers).json()
        assert [r["productName"] for r in feed] == ["Formal Blazer"]

    def test_invalid_body(self, client, auth_headers):
        response = client.post("/api/recommendations", json={"productName": "X"}, headers=auth_headers)

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid recommendation data"}

    def test_seed_samples_once(self, client, auth_headers):
        first = client.post("/api/recommendations/samples", headers=auth_headers)
        second = client.post("/api/recommendations/samples", headers=auth_headers)

        assert first.status_code == 200
        assert len(first.json()) == len(SAMPLE_RECOMMENDATIONS)
        assert len(second.json()) == len(SAMPLE_RECOMMENDATIONS)
        names = {r["productName"] for r in first.json()}
        assert "Premium Cotton Formal Shirt" in names

    def test_seed_skipped_when_feed_exists(self, client, auth_headers):
        client.post("/api/recommendations", json=RECOMMENDATION, headers=auth_headers)

        feed = client.post("/api/recommendations/samples", headers=auth_headers).json()

        assert [r["productName"] for r in feed] == ["Formal Blazer"]


class TestFavoriteFromRecommendation:
    @pytest.fixture
    def recommendation_id(self, client, auth_headers):
        return client.post("/api/recommendations", json=RECOMMENDATION, headers=auth_headers).json()["id"]

    def test_creates_product_and_favorite(self, client, auth_headers, recommendation_id):
        response = client.post(f"/api/recommendations/{recommendation_id}/favorite", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["product"]["name"] == "Formal Blazer"
        assert body["product"]["description"] == RECOMMENDATION["reason"]
        assert body["productId"] == body["product"]["id"]

        favorites = client.get("/api/favorites", headers=auth_headers).json()
        assert [f["product"]["name"] for f in favorites] == ["Formal Blazer"]

    def test_unknown_recommendation(self, client, auth_headers):
        response = client.post("/api/recommendations/missing/favorite", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {"message": "Recommendation not found"}

    def test_other_users_recommendation(self, client, other_headers, recommendation_id):
        response = client.post(f"/api/recommendations/{recommendation_id}/favorite", headers=other_headers)

        assert response.status_code == 404

    def test_failed_favorite_removes_product(self, client, auth_headers, recommendation_id, storage):
        with patch.object(storage, "add_to_favorites", side_effect=DatabaseException("write failed")):
            response = client.post(f"/api/recommendations/{recommendation_id}/favorite", headers=auth_headers)

        assert response.status_code == 500
        assert response.json() == {"message": "Server error"}
        assert client.get("/api/products", headers=auth_headers).json() == []

    def test_failed_rollback_keeps_original_error(self, client, auth_headers, recommendation_id, storage):
        recommendation = storage.get_recommendation(recommendation_id)

        with patch.object(storage, "add_to_favorites", side_effect=DatabaseException("write failed")), \
                patch.object(storage, "delete_product", side_effect=RuntimeError("delete failed")), \
                patch("services.recommendation_service.logger") as mock_logger:
            with pytest.raises(DatabaseException):
                favorite_recommendation(storage, recommendation.user_id, recommendation)

        messages = [call.args[0] for call in mock_logger.error.call_args_list]
        assert any("orphaned" in message for message in messages)
