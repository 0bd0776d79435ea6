"""Risk engine entry points used by the application service.

Everything here is pure: callers pass plain camelCase dicts (as received
from the API or loaded from storage) and get plain values back.
"""

import logging
from typing import Any, Mapping

from app.services.risk_engine.explanation import build_explanation
from app.services.risk_engine.factors import derive_risk_factors
from app.services.risk_engine.models import ApplicantData, ScoringResult
from app.services.risk_engine.scoring import aggregate_score, calculate_component_scores

logger = logging.getLogger(__name__)


def score_applicant(applicant: ApplicantData) -> ScoringResult:
    """Score an applicant and derive their risk factors in one pass."""
    breakdown = calculate_component_scores(applicant.traditional_data, applicant.alternative_data)
    result = ScoringResult(
        risk_score=aggregate_score(breakdown),
        risk_factors=tuple(derive_risk_factors(applicant)),
        breakdown={key: round(value, 2) for key, value in breakdown.items()},
    )
    logger.debug(
        "Scored applicant: score=%.2f factors=%s", result.risk_score, list(result.risk_factors)
    )
    return result


def assess_application(application_data: Mapping[str, Any]) -> ScoringResult:
    """Parse a submitted application payload and score it.

    Raises:
        InvalidInputError: when the payload is missing data the engine needs.
    """
    return score_applicant(ApplicantData.from_dict(dict(application_data)))


def explain_record(record: Mapping[str, Any]) -> dict[str, Any]:
    """Explanation report for a stored record holding ``riskScore``,
    ``riskFactors`` and the submitted applicant data."""
    applicant = ApplicantData.from_dict(dict(record))
    return build_explanation(
        applicant,
        record.get("riskScore"),
        record.get("riskFactors") or [],
    )
