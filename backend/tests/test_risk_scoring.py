"""Tests for the risk scoring components and the weighted aggregator."""

import random

import pytest

from app.services.risk_engine import (
    ApplicantData,
    InvalidInputError,
    WEIGHTS,
    calculate_component_scores,
    calculate_risk_score,
    score_applicant,
)
from app.services.risk_engine.models import (
    GeoLocationData,
    SocialMediaMetrics,
    TraditionalData,
    TransactionRecord,
    UtilityPayment,
)
from app.services.risk_engine.scoring import (
    credit_score,
    geo_score,
    income_score,
    payment_reliability,
    social_score,
    transaction_score,
    utility_score,
)

from conftest import make_application


def _applicant(**overrides) -> ApplicantData:
    return ApplicantData.from_dict(make_application(**overrides))


class TestComponentScores:
    def test_income_zero_scores_zero(self):
        assert income_score(TraditionalData(income=0)) == 0

    def test_income_linear_below_saturation(self):
        assert income_score(TraditionalData(income=50000)) == pytest.approx(50)

    @pytest.mark.parametrize("income", [100000, 100001, 250000, 10**9])
    def test_income_saturates_at_100(self, income):
        assert income_score(TraditionalData(income=income)) == 100

    def test_credit_score_used_when_present(self):
        assert credit_score(TraditionalData(income=1, existing_credit_score=82)) == 82

    def test_credit_score_defaults_to_50(self):
        assert credit_score(TraditionalData(income=1)) == 50

    def test_credit_score_zero_is_kept(self):
        assert credit_score(TraditionalData(income=1, existing_credit_score=0)) == 0

    def test_reliability_all_paid(self):
        p = UtilityPayment(provider="X", payment_history=(True, True, True, True))
        assert payment_reliability(p) == 1.0
        assert utility_score([p]) == 100

    def test_reliability_half_paid(self):
        p = UtilityPayment(provider="X", payment_history=(True, False))
        assert utility_score([p]) == 50

    def test_utility_score_is_unweighted_mean(self):
        """Providers count equally regardless of how long their history is."""
        long_history = UtilityPayment(provider="A", payment_history=(True,) * 4)
        short_history = UtilityPayment(provider="B", payment_history=(True, False))
        assert utility_score([long_history, short_history]) == pytest.approx(75)

    def test_utility_score_requires_a_provider(self):
        with pytest.raises(InvalidInputError) as exc:
            utility_score([])
        assert exc.value.field == "alternativeData.utilityPayments"

    def test_utility_score_rejects_empty_history(self):
        payments = [
            UtilityPayment(provider="A", payment_history=(True,)),
            UtilityPayment(provider="B", payment_history=()),
        ]
        with pytest.raises(InvalidInputError) as exc:
            utility_score(payments)
        assert exc.value.field == "alternativeData.utilityPayments[1].paymentHistory"

    def test_social_score_is_mean(self):
        metrics = SocialMediaMetrics(profile_stability=0.8, network_strength=0.7, sentiment_score=0.9)
        assert social_score(metrics) == pytest.approx(0.8)

    def test_geo_score_is_mean(self):
        geo = GeoLocationData(residential_stability=0.9, workplace_stability=0.8)
        assert geo_score(geo) == pytest.approx(0.85)

    def test_transaction_score_sums_signed_frequency(self):
        txns = [
            TransactionRecord(category="salary", amount=3000, frequency=10),
            TransactionRecord(category="rent", amount=-1200, frequency=4),
        ]
        assert transaction_score(txns) == 6

    def test_transaction_zero_amount_counts_as_outflow(self):
        txns = [
            TransactionRecord(category="salary", amount=100, frequency=5),
            TransactionRecord(category="refund", amount=0, frequency=2),
        ]
        assert transaction_score(txns) == 3

    def test_transaction_score_clamped(self):
        many_inflows = [TransactionRecord(category="gig", amount=10, frequency=30)] * 5
        assert transaction_score(many_inflows) == 100
        outflows = [TransactionRecord(category="bills", amount=-10, frequency=30)]
        assert transaction_score(outflows) == 0

    def test_transaction_score_empty_history(self):
        assert transaction_score([]) == 0


class TestAggregator:
    def test_weights_sum_to_one(self):
        assert sum(WEIGHTS.values()) == pytest.approx(1.0)

    def test_reference_applicant(self):
        """income 50, credit 70, utility 75, social 0.8, transactions 3, geo 0.85."""
        applicant = _applicant()
        score = calculate_risk_score(applicant.traditional_data, applicant.alternative_data)
        assert score == pytest.approx(32.6)

    def test_breakdown_has_all_components(self):
        applicant = _applicant()
        breakdown = calculate_component_scores(applicant.traditional_data, applicant.alternative_data)
        assert set(breakdown) == set(WEIGHTS)
        assert breakdown["utility_payments"] == pytest.approx(75)
        assert breakdown["transactions"] == 3

    def test_final_score_clamped_high(self):
        """Credit score is not clamped on its own, only the final sum is."""
        applicant = _applicant(traditionalData={"income": 500000, "existingCreditScore": 5000})
        assert calculate_risk_score(applicant.traditional_data, applicant.alternative_data) == 100

    def test_final_score_clamped_low(self):
        applicant = _applicant(traditionalData={"income": -10**7, "existingCreditScore": -300})
        assert calculate_risk_score(applicant.traditional_data, applicant.alternative_data) == 0

    def test_score_applicant_bundles_factors(self):
        result = score_applicant(_applicant())
        assert result.risk_score == pytest.approx(32.6)
        assert result.risk_factors == ("Inconsistent utility payments",)
        assert result.breakdown["income"] == 50

    def test_result_breakdown_is_read_only(self):
        result = score_applicant(_applicant())
        with pytest.raises(TypeError):
            result.breakdown["income"] = 0
        assert hash(result) == hash(score_applicant(_applicant()))


class TestScoringProperties:
    @staticmethod
    def _random_applicant(rng: random.Random) -> ApplicantData:
        providers = [
            {
                "provider": f"P{i}",
                "paymentHistory": [rng.random() < 0.7 for _ in range(rng.randint(1, 24))],
            }
            for i in range(rng.randint(1, 4))
        ]
        transactions = [
            {
                "category": "misc",
                "amount": rng.uniform(-10**6, 10**6),
                "frequency": rng.uniform(-10**4, 10**4),
            }
            for _ in range(rng.randint(0, 12))
        ]
        return _applicant(
            traditionalData={
                "income": rng.uniform(-10**7, 10**7),
                "existingCreditScore": rng.choice([None, rng.uniform(-10**6, 10**6)]),
            },
            alternativeData={
                "utilityPayments": providers,
                "socialMediaMetrics": {
                    "profileStability": rng.uniform(-10, 10),
                    "networkStrength": rng.uniform(-10, 10),
                    "sentimentScore": rng.uniform(-10, 10),
                },
                "transactionHistory": transactions,
                "geoLocationData": {
                    "residentialStability": rng.uniform(-100, 100),
                    "workplaceStability": rng.uniform(-100, 100),
                },
            },
        )

    def test_score_always_in_range(self):
        rng = random.Random(20241019)
        for _ in range(500):
            applicant = self._random_applicant(rng)
            score = calculate_risk_score(applicant.traditional_data, applicant.alternative_data)
            assert 0 <= score <= 100

    def test_scoring_is_idempotent(self):
        rng = random.Random(7)
        for _ in range(50):
            applicant = self._random_applicant(rng)
            first = calculate_risk_score(applicant.traditional_data, applicant.alternative_data)
            second = calculate_risk_score(applicant.traditional_data, applicant.alternative_data)
            assert first == second

    def test_income_contribution_is_monotonic(self):
        previous = -1.0
        for income in range(0, 150001, 2500):
            current = income_score(TraditionalData(income=income)) * WEIGHTS["income"]
            assert current >= previous
            previous = current
        assert previous == pytest.approx(20)
