"""Explanation report for a stored risk assessment.

The impact labels below are presentation text and are maintained apart
from ``scoring.WEIGHTS``. They do not sum to 100% and the traditional
group (35%) covers income and credit score together; keep the two tables
as they are until the intended split is confirmed.
"""

from typing import Any, Sequence

from app.services.risk_engine.models import ApplicantData
from app.services.risk_engine.scoring import payment_reliability


IMPACT_LABELS = {
    "traditional_metrics": "35% of total score",
    "utility_payments": "15% of total score",
    "social_media_metrics": "10% of total score",
    "transaction_history": "20% of total score",
    "geo_location": "20% of total score",
}


def format_reliability(reliability: float) -> str:
    """0-1 reliability as a percentage string with two decimals."""
    return f"{reliability * 100:.2f}%"


def build_explanation(
    applicant: ApplicantData,
    risk_score: float,
    risk_factors: Sequence[str],
) -> dict[str, Any]:
    """Assemble the read-only explanation for a previously scored applicant.

    ``risk_score`` and ``risk_factors`` are the stored values; they are echoed,
    not recomputed. Utility reliability is recomputed for display only.
    """
    traditional = applicant.traditional_data
    alternative = applicant.alternative_data

    utility_reliability = [
        {
            "provider": p.provider,
            "reliability": format_reliability(
                payment_reliability(p, f"alternativeData.utilityPayments[{i}].paymentHistory")
            ),
        }
        for i, p in enumerate(alternative.utility_payments)
    ]

    return {
        "overallScore": risk_score,
        "factors": list(risk_factors),
        "components": {
            "traditionalMetrics": {
                "income": traditional.income,
                "creditScore": traditional.existing_credit_score,
                "impact": IMPACT_LABELS["traditional_metrics"],
            },
            "alternativeMetrics": {
                "utilityPayments": {
                    "reliability": utility_reliability,
                    "impact": IMPACT_LABELS["utility_payments"],
                },
                "socialMediaMetrics": {
                    **alternative.social_media_metrics.to_dict(),
                    "impact": IMPACT_LABELS["social_media_metrics"],
                },
                "transactionHistory": {
                    "categories": len(alternative.transaction_history),
                    "impact": IMPACT_LABELS["transaction_history"],
                },
                "geoLocation": {
                    **alternative.geo_location_data.to_dict(),
                    "impact": IMPACT_LABELS["geo_location"],
                },
            },
        },
    }
