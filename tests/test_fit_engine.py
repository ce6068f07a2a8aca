"""Tests for the fit comparison engine"""

import pytest

from database.entities import MeasurementData
from services.fit_engine import FitStatus, predict_fit


def user(**values):
    return MeasurementData(**values)


class TestChestRule:
    """Chest thresholds: <=2 perfect, <=4 tight, otherwise size mismatch"""

    @pytest.mark.parametrize("product_chest", [100.0, 101.5, 98.0, 102.0])
    def test_within_two_cm_is_perfect(self, product_chest):
        result = predict_fit(user(chest=100.0), {"chest": product_chest})

        assert result.predictions == {"chest": "perfect"}
        assert result.fit_status == FitStatus.PERFECT
        assert result.recommendations == ""

    @pytest.mark.parametrize("product_chest", [103.0, 97.0, 104.0])
    def test_two_to_four_cm_is_tight_and_acceptable(self, product_chest):
        result = predict_fit(user(chest=100.0), {"chest": product_chest})

        assert result.predictions["chest"] == "tight"
        assert result.fit_status == FitStatus.ACCEPTABLE
        assert result.recommendations == ""

    def test_user_larger_than_garment_is_too_small(self):
        result = predict_fit(user(chest=110.0), {"chest": 100.0})

        assert result.predictions["chest"] == "too_small"
        assert result.fit_status == FitStatus.POOR
        assert result.recommendations == "Chest: Consider larger size"

    def test_garment_larger_than_user_is_too_large(self):
        result = predict_fit(user(chest=100.0), {"chest": 106.0})

        assert result.predictions["chest"] == "too_large"
        assert result.fit_status == FitStatus.POOR
        assert result.recommendations == "Chest: Consider smaller size"


class TestShoulderRule:
    """Shoulders: <=3 good, otherwise size mismatch"""

    def test_within_three_cm_is_good(self):
        result = predict_fit(user(shoulders=45.0), {"shoulders": 48.0})

        assert result.predictions == {"shoulders": "good"}
        assert result.fit_status == FitStatus.PERFECT

    def test_mismatch_is_poor(self):
        result = predict_fit(user(shoulders=50.0), {"shoulders": 45.0})

        assert result.predictions["shoulders"] == "too_small"
        assert result.fit_status == FitStatus.POOR
        assert result.recommendations == "Shoulders: Consider larger size"


class TestOverallFit:
    """Overall status is the worst dimension"""

    def test_poor_is_not_upgraded_by_later_dimensions(self):
        result = predict_fit(user(chest=100.0, shoulders=45.0), {"chest": 110.0, "shoulders": 45.0})

        assert result.predictions == {"chest": "too_large", "shoulders": "good"}
        assert result.fit_status == FitStatus.POOR

    def test_tight_chest_and_bad_shoulders_is_poor(self):
        result = predict_fit(user(chest=100.0, shoulders=45.0), {"chest": 103.0, "shoulders": 40.0})

        assert result.fit_status == FitStatus.POOR
        assert result.recommendations == "Shoulders: Consider larger size"

    def test_advisories_are_joined_in_rule_order(self):
        result = predict_fit(user(chest=90.0, shoulders=50.0), {"chest": 100.0, "shoulders": 40.0})

        assert result.recommendations == "Chest: Consider smaller size; Shoulders: Consider larger size"

    def test_other_dimensions_are_not_evaluated(self):
        result = predict_fit(user(waist=80.0, hips=90.0), {"waist": 120.0, "hips": 60.0})

        assert result.predictions == {}
        assert result.fit_status == FitStatus.PERFECT

    def test_status_ordering(self):
        assert FitStatus.PERFECT.worst(FitStatus.ACCEPTABLE) == FitStatus.ACCEPTABLE
        assert FitStatus.POOR.worst(FitStatus.PERFECT) == FitStatus.POOR
        assert FitStatus.ACCEPTABLE.worst(FitStatus.ACCEPTABLE) == FitStatus.ACCEPTABLE


class TestMissingData:
    """Absent values are skipped"""

    def test_product_without_measurements_defaults_to_perfect(self):
        # Optimistic default: no declared sizes means no evidence of a bad fit
        result = predict_fit(user(chest=100.0, shoulders=45.0), None)

        assert result.predictions == {}
        assert result.fit_status == FitStatus.PERFECT
        assert result.recommendations == ""

    def test_empty_measurement_map_defaults_to_perfect(self):
        result = predict_fit(user(chest=100.0), {})

        assert result.fit_status == FitStatus.PERFECT

    def test_dimension_missing_on_user_is_skipped(self):
        result = predict_fit(user(shoulders=45.0), {"chest": 80.0, "shoulders": 45.0})

        assert "chest" not in result.predictions
        assert result.fit_status == FitStatus.PERFECT

    def test_zero_values_count_as_missing(self):
        result = predict_fit(user(chest=0.0), {"chest": 120.0})

        assert result.predictions == {}
        assert result.fit_status == FitStatus.PERFECT
