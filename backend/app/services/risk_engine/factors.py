"""Risk factor rules - qualitative flags derived from raw applicant data.

Rules look at the submitted data, not at the computed score. They run in a
fixed order and that order is the order of the returned messages.
"""

from dataclasses import dataclass

from app.services.risk_engine.models import ApplicantData
from app.services.risk_engine.scoring import payment_reliability


LOW_INCOME_THRESHOLD = 30000
UTILITY_RELIABILITY_THRESHOLD = 0.8
NEGATIVE_SENTIMENT_THRESHOLD = 0.6

LOW_INCOME = "Low income level"
INCONSISTENT_UTILITY_PAYMENTS = "Inconsistent utility payments"
NEGATIVE_SOCIAL_PRESENCE = "Negative social media presence"


@dataclass
class RiskFactorResult:
    """A single risk factor rule evaluation."""
    rule_id: str
    rule_name: str
    triggered: bool
    message: str


def _utility_payments_reliable(applicant: ApplicantData) -> bool:
    payments = applicant.alternative_data.utility_payments
    return all(
        payment_reliability(p, f"alternativeData.utilityPayments[{i}].paymentHistory")
        > UTILITY_RELIABILITY_THRESHOLD
        for i, p in enumerate(payments)
    )


def evaluate_risk_factors(applicant: ApplicantData) -> list[RiskFactorResult]:
    """Evaluate every risk factor rule, triggered or not, in rule order."""
    results: list[RiskFactorResult] = []

    # RF01: Low income
    income = applicant.traditional_data.income
    results.append(RiskFactorResult(
        "RF01", "Low Income", income < LOW_INCOME_THRESHOLD, LOW_INCOME,
    ))

    # RF02: Every provider must be paid on time more than 80% of the time
    results.append(RiskFactorResult(
        "RF02", "Utility Payment Consistency",
        not _utility_payments_reliable(applicant), INCONSISTENT_UTILITY_PAYMENTS,
    ))

    # RF03: Social sentiment
    sentiment = applicant.alternative_data.social_media_metrics.sentiment_score
    results.append(RiskFactorResult(
        "RF03", "Social Media Sentiment",
        sentiment < NEGATIVE_SENTIMENT_THRESHOLD, NEGATIVE_SOCIAL_PRESENCE,
    ))

    return results


def derive_risk_factors(applicant: ApplicantData) -> list[str]:
    """Messages of the triggered rules, in rule order. Empty when none trigger."""
    return [r.message for r in evaluate_risk_factors(applicant) if r.triggered]
