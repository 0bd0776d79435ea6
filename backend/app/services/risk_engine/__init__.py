"""Alternative-data credit risk engine.

Pure, synchronous scoring, risk factor derivation and explanation. No I/O,
no configuration and no shared mutable state.
"""

from app.services.risk_engine.engine import assess_application, explain_record, score_applicant
from app.services.risk_engine.errors import InvalidInputError
from app.services.risk_engine.explanation import IMPACT_LABELS, build_explanation
from app.services.risk_engine.factors import derive_risk_factors, evaluate_risk_factors
from app.services.risk_engine.models import (
    AlternativeData,
    ApplicantData,
    GeoLocationData,
    ScoringResult,
    SocialMediaMetrics,
    TraditionalData,
    TransactionRecord,
    UtilityPayment,
)
from app.services.risk_engine.scoring import (
    WEIGHTS,
    calculate_component_scores,
    calculate_risk_score,
)

__all__ = [
    "AlternativeData",
    "ApplicantData",
    "GeoLocationData",
    "IMPACT_LABELS",
    "InvalidInputError",
    "ScoringResult",
    "SocialMediaMetrics",
    "TraditionalData",
    "TransactionRecord",
    "UtilityPayment",
    "WEIGHTS",
    "assess_application",
    "build_explanation",
    "calculate_component_scores",
    "calculate_risk_score",
    "derive_risk_factors",
    "evaluate_risk_factors",
    "explain_record",
    "score_applicant",
]
