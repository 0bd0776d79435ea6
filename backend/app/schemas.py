"""Pydantic schemas for request/response validation.

Field names are snake_case in Python and camelCase on the wire.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_CAMEL = {"alias_generator": to_camel, "populate_by_name": True, "allow_inf_nan": False}


# ── Traditional data ─────────────────────────────────

class TraditionalDataSchema(BaseModel):
    income: float = Field(ge=0)
    employment_status: Optional[str] = None  # employed, self_employed, unemployed, ...
    existing_credit_score: Optional[float] = None

    model_config = _CAMEL


# ── Alternative data ─────────────────────────────────

class UtilityPaymentSchema(BaseModel):
    provider: str
    payment_history: list[bool] = Field(min_length=1)  # True = paid on time
    average_payment_delay: float = 0

    model_config = _CAMEL


class SocialMediaMetricsSchema(BaseModel):
    profile_stability: float = Field(ge=0, le=1)
    network_strength: float = Field(ge=0, le=1)
    sentiment_score: float = Field(ge=0, le=1)

    model_config = _CAMEL


class TransactionSchema(BaseModel):
    category: str
    amount: float  # signed: inflows positive, outflows negative
    frequency: float = Field(ge=0)

    model_config = _CAMEL


class GeoLocationDataSchema(BaseModel):
    residential_stability: float = Field(ge=0, le=100)
    workplace_stability: float = Field(ge=0, le=100)

    model_config = _CAMEL


class AlternativeDataSchema(BaseModel):
    utility_payments: list[UtilityPaymentSchema] = Field(min_length=1)
    social_media_metrics: SocialMediaMetricsSchema
    transaction_history: list[TransactionSchema] = []
    geo_location_data: GeoLocationDataSchema

    model_config = _CAMEL


# ── Applications ─────────────────────────────────────

class ApplicationCreate(BaseModel):
    """Body for creating or replacing an application."""
    name: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=30)
    traditional_data: TraditionalDataSchema
    alternative_data: AlternativeDataSchema

    model_config = _CAMEL


class ApplicationResponse(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    traditional_data: TraditionalDataSchema
    alternative_data: AlternativeDataSchema
    risk_score: float
    risk_factors: list[str] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = _CAMEL


class ApplicationSubmitResult(BaseModel):
    application_id: int
    risk_score: float
    risk_factors: list[str]

    model_config = _CAMEL


class ApplicationSubmitEnvelope(BaseModel):
    success: bool = True
    data: ApplicationSubmitResult


class ApplicationEnvelope(BaseModel):
    success: bool = True
    data: ApplicationResponse


class ExplanationEnvelope(BaseModel):
    success: bool = True
    data: dict[str, Any]


class ErrorEnvelope(BaseModel):
    success: bool = False
    error: str
