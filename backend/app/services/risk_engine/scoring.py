"""Risk scoring module - weighted alternative-data model.

Each data category produces a sub-score, the weighted sum is clamped to
the 0-100 range. Lower scores mean riskier applicants.
"""

import logging
from typing import Sequence

from app.services.risk_engine.errors import InvalidInputError
from app.services.risk_engine.models import (
    AlternativeData,
    GeoLocationData,
    SocialMediaMetrics,
    TraditionalData,
    TransactionRecord,
    UtilityPayment,
)

logger = logging.getLogger(__name__)


# Scoring weights (must sum to 1.0)
WEIGHTS = {
    "income": 0.20,
    "credit_score": 0.15,
    "utility_payments": 0.15,
    "social_media": 0.10,
    "transactions": 0.20,
    "geo_location": 0.20,
}

INCOME_SATURATION = 100000
DEFAULT_CREDIT_SCORE = 50

MIN_SCORE = 0
MAX_SCORE = 100


def _clamp(value: float, low: float = MIN_SCORE, high: float = MAX_SCORE) -> float:
    return max(low, min(value, high))


def payment_reliability(payment: UtilityPayment, field: str = "paymentHistory") -> float:
    """Share of on-time payments for one provider, 0-1."""
    history = payment.payment_history
    if not history:
        raise InvalidInputError(field, "payment history must not be empty")
    return sum(1 for paid in history if paid) / len(history)


def income_score(traditional: TraditionalData) -> float:
    return min(traditional.income / INCOME_SATURATION, 1) * 100


def credit_score(traditional: TraditionalData) -> float:
    """Existing bureau score, or the neutral default when none was reported."""
    if traditional.existing_credit_score is None:
        return DEFAULT_CREDIT_SCORE
    return traditional.existing_credit_score


def utility_score(payments: Sequence[UtilityPayment]) -> float:
    """Unweighted mean of per-provider reliability, as a percentage."""
    if not payments:
        raise InvalidInputError(
            "alternativeData.utilityPayments", "at least one utility provider is required"
        )
    total = 0.0
    for i, payment in enumerate(payments):
        field = f"alternativeData.utilityPayments[{i}].paymentHistory"
        total += payment_reliability(payment, field) * 100
    return total / len(payments)


def social_score(metrics: SocialMediaMetrics) -> float:
    return (metrics.profile_stability + metrics.network_strength + metrics.sentiment_score) / 3


def transaction_score(transactions: Sequence[TransactionRecord]) -> float:
    """Frequency-weighted count of inflows minus outflows, clamped to 0-100.

    Zero amounts count as outflows. This is a running sum, so the score
    grows with the number of transactions until it saturates.
    """
    total = 0.0
    for txn in transactions:
        total += txn.frequency * (1 if txn.amount > 0 else -1)
    return _clamp(total)


def geo_score(geo: GeoLocationData) -> float:
    return (geo.residential_stability + geo.workplace_stability) / 2


def calculate_component_scores(
    traditional: TraditionalData,
    alternative: AlternativeData,
) -> dict[str, float]:
    """Sub-score for every weighted component, keyed like ``WEIGHTS``."""
    return {
        "income": income_score(traditional),
        "credit_score": credit_score(traditional),
        "utility_payments": utility_score(alternative.utility_payments),
        "social_media": social_score(alternative.social_media_metrics),
        "transactions": transaction_score(alternative.transaction_history),
        "geo_location": geo_score(alternative.geo_location_data),
    }


def aggregate_score(breakdown: dict[str, float]) -> float:
    """Weighted sum of component scores clamped to 0-100.

    Individual components are not re-clamped; only the final sum is.
    """
    weighted_sum = sum(breakdown[key] * WEIGHTS[key] for key in WEIGHTS)
    return _clamp(weighted_sum)


def calculate_risk_score(
    traditional: TraditionalData,
    alternative: AlternativeData,
) -> float:
    """Calculate the 0-100 risk score for one applicant."""
    breakdown = calculate_component_scores(traditional, alternative)
    final = aggregate_score(breakdown)
    logger.debug("Risk score %.2f from components %s", final, breakdown)
    return final

