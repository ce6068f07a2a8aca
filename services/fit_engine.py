"""
Fit comparison engine

Compares a user's body measurements with the measurements a product declares
and classifies the fit. Each rule dimension yields a per-dimension prediction;
the overall fit is the worst one seen (perfect < acceptable < poor).

Thresholds (absolute difference in cm):
    chest      <= 2 perfect, <= 4 tight, otherwise too_small / too_large
    shoulders  <= 3 good, otherwise too_small / too_large
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

from database.entities import MeasurementData


class FitStatus(str, Enum):
    """Overall fit, ordered from best to worst"""
    PERFECT = "perfect"
    ACCEPTABLE = "acceptable"
    POOR = "poor"

    @property
    def rank(self) -> int:
        return _FIT_ORDER.index(self)

    def worst(self, other: "FitStatus") -> "FitStatus":
        """Worst of the two statuses"""
        return self if self.rank >= other.rank else other


_FIT_ORDER = [FitStatus.PERFECT, FitStatus.ACCEPTABLE, FitStatus.POOR]


@dataclass(frozen=True)
class DimensionRule:
    """
    Threshold rule for one body dimension

    A difference above ``poor_above`` is a size mismatch. A difference above
    ``acceptable_above`` (when set) is a snug fit labelled ``near_label``.
    """
    name: str
    label: str
    poor_above: float
    match_label: str
    acceptable_above: Optional[float] = None
    near_label: Optional[str] = None


FIT_RULES: List[DimensionRule] = [
    DimensionRule(
        name="chest",
        label="Chest",
        poor_above=4,
        acceptable_above=2,
        match_label="perfect",
        near_label="tight",
    ),
    DimensionRule(
        name="shoulders",
        label="Shoulders",
        poor_above=3,
        match_label="good",
    ),
]


@dataclass
class FitResult:
    fit_status: FitStatus = FitStatus.PERFECT
    predictions: Dict[str, str] = field(default_factory=dict)
    recommendations: str = ""


def _evaluate(rule: DimensionRule, user_value: float, product_value: float):
    """Return (prediction, status, advisory) for one dimension"""
    diff = abs(user_value - product_value)

    if diff > rule.poor_above:
        # User larger than the garment means the garment is too small
        prediction = "too_small" if user_value > product_value else "too_large"
        hint = "Consider larger size" if prediction == "too_small" else "Consider smaller size"
        return prediction, FitStatus.POOR, f"{rule.label}: {hint}"

    if rule.acceptable_above is not None and diff > rule.acceptable_above:
        return rule.near_label, FitStatus.ACCEPTABLE, None

    return rule.match_label, FitStatus.PERFECT, None


def predict_fit(
    user_measurement: MeasurementData,
    product_measurements: Optional[Mapping[str, float]]
) -> FitResult:
    """
    Predict how a product fits a user

    Dimensions missing (or zero) on either side are skipped. A product with no
    declared measurements yields no predictions and a ``perfect`` fit.

    Args:
        user_measurement: The user's stored measurement record
        product_measurements: Measurements declared by the product, keyed by dimension

    Returns:
        FitResult with the overall status, per-dimension predictions and the
        "; "-joined advisories
    """
    result = FitResult()
    if not product_measurements:
        return result

    advisories = []
    for rule in FIT_RULES:
        user_value = getattr(user_measurement, rule.name, None)
        product_value = product_measurements.get(rule.name)
        if not user_value or not product_value:
            continue

        prediction, status, advisory = _evaluate(rule, user_value, product_value)
        result.predictions[rule.name] = prediction
        result.fit_status = result.fit_status.worst(status)
        if advisory:
            advisories.append(advisory)

    result.recommendations = "; ".join(advisories)
    return result
