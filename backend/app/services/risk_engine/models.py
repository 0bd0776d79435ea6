"""Applicant data model consumed by the risk engine.

Plain frozen dataclasses. ``from_dict`` accepts the camelCase payload the API
and the storage layer exchange, ``to_dict`` produces it again.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from app.services.risk_engine.errors import InvalidInputError


def _join(path: str, key: str) -> str:
    return f"{path}.{key}" if path else key


def _require(data: Any, key: str, path: str) -> Any:
    if not isinstance(data, dict):
        raise InvalidInputError(path or "applicant", "expected an object")
    if key not in data or data[key] is None:
        raise InvalidInputError(_join(path, key), "field is required")
    return data[key]


def _check_number(value: Any, field_path: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInputError(field_path, f"expected a number, got {value!r}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidInputError(field_path, "expected a finite number")
    return value


def _number(data: dict, key: str, path: str) -> float:
    return _check_number(_require(data, key, path), _join(path, key))


def _optional_number(data: dict, key: str, path: str, default: Optional[float] = None) -> Optional[float]:
    value = data.get(key)
    if value is None:
        return default
    return _check_number(value, _join(path, key))


def _sequence(data: dict, key: str, path: str) -> list:
    value = _require(data, key, path)
    if not isinstance(value, (list, tuple)):
        raise InvalidInputError(_join(path, key), "expected a list")
    return list(value)


@dataclass(frozen=True)
class TraditionalData:
    income: float
    employment_status: str = ""
    existing_credit_score: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any, path: str = "traditionalData") -> "TraditionalData":
        if not isinstance(data, dict):
            raise InvalidInputError(path, "expected an object")
        return cls(
            income=_number(data, "income", path),
            employment_status=str(data.get("employmentStatus") or ""),
            existing_credit_score=_optional_number(data, "existingCreditScore", path),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "income": self.income,
            "employmentStatus": self.employment_status,
            "existingCreditScore": self.existing_credit_score,
        }


@dataclass(frozen=True)
class UtilityPayment:
    provider: str
    payment_history: tuple[bool, ...]
    average_payment_delay: float = 0.0

    @classmethod
    def from_dict(cls, data: Any, path: str) -> "UtilityPayment":
        history = _sequence(data, "paymentHistory", path)
        return cls(
            provider=str(data.get("provider") or ""),
            payment_history=tuple(bool(paid) for paid in history),
            average_payment_delay=_optional_number(data, "averagePaymentDelay", path, 0.0),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "provider": self.provider,
            "paymentHistory": list(self.payment_history),
            "averagePaymentDelay": self.average_payment_delay,
        }


@dataclass(frozen=True)
class SocialMediaMetrics:
    profile_stability: float
    network_strength: float
    sentiment_score: float

    @classmethod
    def from_dict(cls, data: Any, path: str) -> "SocialMediaMetrics":
        return cls(
            profile_stability=_number(data, "profileStability", path),
            network_strength=_number(data, "networkStrength", path),
            sentiment_score=_number(data, "sentimentScore", path),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "profileStability": self.profile_stability,
            "networkStrength": self.network_strength,
            "sentimentScore": self.sentiment_score,
        }


@dataclass(frozen=True)
class TransactionRecord:
    category: str
    amount: float
    frequency: float

    @classmethod
    def from_dict(cls, data: Any, path: str) -> "TransactionRecord":
        return cls(
            category=str(_require(data, "category", path)),
            amount=_number(data, "amount", path),
            frequency=_number(data, "frequency", path),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"category": self.category, "amount": self.amount, "frequency": self.frequency}


@dataclass(frozen=True)
class GeoLocationData:
    residential_stability: float
    workplace_stability: float

    @classmethod
    def from_dict(cls, data: Any, path: str) -> "GeoLocationData":
        return cls(
            residential_stability=_number(data, "residentialStability", path),
            workplace_stability=_number(data, "workplaceStability", path),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "residentialStability": self.residential_stability,
            "workplaceStability": self.workplace_stability,
        }


@dataclass(frozen=True)
class AlternativeData:
    utility_payments: tuple[UtilityPayment, ...]
    social_media_metrics: SocialMediaMetrics
    transaction_history: tuple[TransactionRecord, ...]
    geo_location_data: GeoLocationData

    @classmethod
    def from_dict(cls, data: Any, path: str = "alternativeData") -> "AlternativeData":
        payments = _sequence(data, "utilityPayments", path)
        transactions = _sequence(data, "transactionHistory", path)
        return cls(
            utility_payments=tuple(
                UtilityPayment.from_dict(p, f"{path}.utilityPayments[{i}]")
                for i, p in enumerate(payments)
            ),
            social_media_metrics=SocialMediaMetrics.from_dict(
                _require(data, "socialMediaMetrics", path), f"{path}.socialMediaMetrics"
            ),
            transaction_history=tuple(
                TransactionRecord.from_dict(t, f"{path}.transactionHistory[{i}]")
                for i, t in enumerate(transactions)
            ),
            geo_location_data=GeoLocationData.from_dict(
                _require(data, "geoLocationData", path), f"{path}.geoLocationData"
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "utilityPayments": [p.to_dict() for p in self.utility_payments],
            "socialMediaMetrics": self.social_media_metrics.to_dict(),
            "transactionHistory": [t.to_dict() for t in self.transaction_history],
            "geoLocationData": self.geo_location_data.to_dict(),
        }


@dataclass(frozen=True)
class ApplicantData:
    """One applicant's traditional and alternative data."""
    traditional_data: TraditionalData
    alternative_data: AlternativeData

    @classmethod
    def from_dict(cls, data: Any) -> "ApplicantData":
        return cls(
            traditional_data=TraditionalData.from_dict(_require(data, "traditionalData", "")),
            alternative_data=AlternativeData.from_dict(_require(data, "alternativeData", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "traditionalData": self.traditional_data.to_dict(),
            "alternativeData": self.alternative_data.to_dict(),
        }


@dataclass(frozen=True)
class ScoringResult:
    """Output of one scoring call.

    ``breakdown`` is a read-only view of the per-component sub-scores and is
    left out of the hash.
    """
    risk_score: float
    risk_factors: tuple[str, ...] = ()
    breakdown: Mapping[str, float] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "breakdown", MappingProxyType(dict(self.breakdown)))
