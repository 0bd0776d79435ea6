"""Shared applicant payloads for risk engine and API tests."""

import copy

import pytest


BASE_APPLICATION = {
    "name": "Jane Doe",
    "email": "jane@example.com",
    "phone": "+1-868-555-0100",
    "traditionalData": {
        "income": 50000,
        "employmentStatus": "employed",
        "existingCreditScore": 70,
    },
    "alternativeData": {
        "utilityPayments": [
            {"provider": "X", "paymentHistory": [True, True, True, False], "averagePaymentDelay": 2},
        ],
        "socialMediaMetrics": {
            "profileStability": 0.8,
            "networkStrength": 0.7,
            "sentimentScore": 0.9,
        },
        "transactionHistory": [
            {"category": "food", "amount": 50, "frequency": 3},
        ],
        "geoLocationData": {
            "residentialStability": 0.9,
            "workplaceStability": 0.8,
        },
    },
}


def make_application(**overrides) -> dict:
    """Copy of the base payload. Keyword overrides replace whole sections:
    ``traditionalData``/``alternativeData`` keys are merged one level deep."""
    payload = copy.deepcopy(BASE_APPLICATION)
    for key, value in overrides.items():
        if key in ("traditionalData", "alternativeData"):
            payload[key].update(copy.deepcopy(value))
        else:
            payload[key] = value
    return payload


@pytest.fixture
def application() -> dict:
    return make_application()
