"""Tests for the financial projection calculator."""

import math

import pytest

from pitchkit.composition.industry import IndustryDefaults, lookup_defaults
from pitchkit.composition.projection import (
    FinancialProjectionCalculator,
    NumberSource,
    coerce_number,
    round_half_up,
)
from pitchkit.models.config import ProjectionDefaults
from pitchkit.models.inputs import IndustryBenchmarks, MarketData, PitchInputs


@pytest.fixture
def calculator():
    return FinancialProjectionCalculator()


@pytest.fixture
def restaurant_defaults():
    return IndustryDefaults(
        naics_code="722511",
        title="Full-Service Restaurants",
        category="Food & Beverage",
        subcategory="Full Service Restaurant",
        avg_transaction=45,
        monthly_customers=1200,
        market_growth_rate=4.5,
    )


class TestCoerceNumber:
    """Tests for the safe number rule."""

    def test_plain_number(self):
        """Positive numbers are kept."""
        assert coerce_number(120, 50) == (120.0, NumberSource.PROVIDED)

    def test_numeric_string(self):
        """Currency, separators and percent signs are stripped."""
        assert coerce_number("$1,250", 50).value == 1250.0
        assert coerce_number(" 25% ", 10).value == 25.0

    @pytest.mark.parametrize(
        "value,source",
        [
            (None, NumberSource.MISSING),
            ("", NumberSource.MISSING),
            ("   ", NumberSource.MISSING),
            ("about twenty", NumberSource.INVALID),
            (True, NumberSource.INVALID),
            (float("nan"), NumberSource.INVALID),
            (math.inf, NumberSource.INVALID),
            ([1, 2], NumberSource.INVALID),
            (0, NumberSource.ZERO),
            ("0", NumberSource.ZERO),
            (-5, NumberSource.NEGATIVE),
            ("-12.5", NumberSource.NEGATIVE),
        ],
    )
    def test_unusable_values_fall_back(self, value, source):
        """Unusable values return the fallback and say why."""
        coerced = coerce_number(value, 50)
        assert coerced.value == 50
        assert coerced.source == source
        assert coerced.fell_back


class TestRoundHalfUp:
    """Tests for round_half_up."""

    @pytest.mark.parametrize(
        "value,expected", [(0.5, 1), (1.5, 2), (2.5, 3), (2.4, 2), (-2.5, -3), (0, 0)]
    )
    def test_rounding(self, value, expected):
        """Halves round away from zero."""
        assert round_half_up(value) == expected


class TestFinancialProjectionCalculator:
    """Tests for FinancialProjectionCalculator.compute."""

    def test_reference_scenario(self, calculator):
        """200 visits at $450 and 20% growth yields 40 customers and $108k over six months."""
        inputs = PitchInputs(monthly_visits=200, avg_ticket=450)
        projection = calculator.compute(inputs)

        assert projection.growth_rate == 20
        assert projection.new_customers == 40
        assert projection.monthly_incremental_revenue == 18000
        assert projection.six_month_revenue == 108000

    def test_reference_scenario_roi(self, calculator):
        """ROI is net gain over cost, as a rounded percent."""
        projection = calculator.compute(PitchInputs(monthly_visits=200, avg_ticket=450))

        assert projection.monthly_cost == 168
        assert projection.six_month_cost == 1008
        assert projection.roi == 10614

    def test_all_missing_uses_constants(self, calculator):
        """An empty record uses the conservative constants."""
        projection = calculator.compute(PitchInputs())

        assert projection.monthly_customers == 200
        assert projection.avg_ticket == 50
        assert projection.repeat_rate == 25
        assert projection.new_customers == 40
        assert projection.monthly_incremental_revenue == 2000
        assert set(projection.defaulted_fields) == {"monthly_visits", "avg_ticket", "repeat_rate"}

    def test_dirty_inputs_fall_back(self, calculator):
        """Zero, negative and non-numeric values fall back instead of failing."""
        inputs = PitchInputs(monthly_visits="lots", avg_ticket=-20, repeat_rate=0)
        projection = calculator.compute(inputs)

        assert projection.monthly_customers == 200
        assert projection.avg_ticket == 50
        assert projection.repeat_rate == 25

    def test_string_inputs_coerced(self, calculator):
        """Numeric strings are accepted."""
        inputs = PitchInputs(monthly_visits="1,000", avg_transaction="$25")
        projection = calculator.compute(inputs)

        assert projection.monthly_customers == 1000
        assert projection.avg_ticket == 25
        assert projection.new_customers == 200

    def test_avg_transaction_before_avg_ticket(self, calculator):
        """avg_transaction wins over avg_ticket when both are usable."""
        inputs = PitchInputs(avg_transaction=30, avg_ticket=90)
        assert calculator.compute(inputs).avg_ticket == 30

    def test_industry_defaults_replace_constants(self, calculator, restaurant_defaults):
        """Industry benchmarks are the fallback when the record is missing metrics."""
        projection = calculator.compute(PitchInputs(), restaurant_defaults)

        assert projection.monthly_customers == 1200
        assert projection.avg_ticket == 45
        assert projection.industry == "Full Service Restaurant"

    def test_industry_growth_rate_override(self, calculator):
        """An industry growth rate replaces the flat default."""
        defaults = IndustryDefaults(
            naics_code="000000",
            title="Test",
            category="Test",
            subcategory="Test",
            avg_transaction=100,
            monthly_customers=100,
            market_growth_rate=3.0,
            growth_rate=10,
        )
        projection = calculator.compute(PitchInputs(monthly_visits=300), defaults)

        assert projection.growth_rate == 10
        assert projection.new_customers == 30

    def test_market_benchmarks_win(self, calculator):
        """Benchmarks attached to the market report override the record's metrics."""
        inputs = PitchInputs(
            monthly_visits=100,
            avg_ticket=20,
            market_data=MarketData(
                opportunity_score=70,
                industry=IndustryBenchmarks(avg_transaction=60, monthly_customers=500),
            ),
        )
        projection = calculator.compute(inputs)

        assert projection.monthly_customers == 500
        assert projection.avg_ticket == 60

    def test_repeat_rate_fraction(self, calculator):
        """A repeat rate given as a fraction is reported as a percent."""
        assert calculator.compute(PitchInputs(repeat_rate=0.4)).repeat_rate == 40
        assert calculator.compute(PitchInputs(repeat_rate="35%")).repeat_rate == 35

    def test_monthly_cost_from_seller(self, calculator):
        """The seller's monthly price drives cost and ROI."""
        projection = calculator.compute(PitchInputs(monthly_visits=200, avg_ticket=50), monthly_cost=500)

        assert projection.six_month_cost == 3000
        # 40 * 50 * 6 = 12000 -> (12000 - 3000) / 3000
        assert projection.roi == 300

    def test_zero_cost_roi(self):
        """A zero-cost configuration reports 0% ROI instead of dividing by zero."""
        calculator = FinancialProjectionCalculator(ProjectionDefaults(monthly_cost=0))
        projection = calculator.compute(PitchInputs(monthly_visits=200, avg_ticket=50), monthly_cost=0)

        assert projection.six_month_cost == 0
        assert projection.roi == 0

    def test_negative_roi_when_revenue_below_cost(self, calculator):
        """ROI may be negative; only the counts are floored."""
        projection = calculator.compute(PitchInputs(monthly_visits=5, avg_ticket=1))

        assert projection.new_customers == 1
        assert projection.roi < 0

    @pytest.mark.parametrize("visits", [0, 1, 3, 199, 200, 12345])
    @pytest.mark.parametrize("ticket", [0, 0.5, 19.99, 450])
    def test_non_negative_and_six_month_invariant(self, calculator, visits, ticket):
        """Counts and revenue are never negative and six-month revenue is six months of revenue."""
        projection = calculator.compute(PitchInputs(monthly_visits=visits, avg_ticket=ticket))

        assert projection.new_customers >= 0
        assert projection.monthly_incremental_revenue >= 0
        assert projection.six_month_revenue == projection.monthly_incremental_revenue * 6

    def test_naics_lookup_integration(self, calculator):
        """Defaults looked up by NAICS code feed the projection."""
        defaults = lookup_defaults(None, None, "811111")
        projection = calculator.compute(PitchInputs(), defaults)

        assert projection.monthly_customers == defaults.monthly_customers
        assert projection.avg_ticket == defaults.avg_transaction

    def test_matched_industry_growth_rate(self, calculator):
        """A matched industry projects with its own growth rate and label."""
        defaults = lookup_defaults(None, "Hair Salon")
        projection = calculator.compute(PitchInputs(monthly_visits=400, avg_ticket=35), defaults)

        assert projection.growth_rate == 25
        assert projection.new_customers == 100
        assert projection.industry == "Hair Salon"

    def test_unmatched_industry_uses_flat_rate(self, calculator):
        """No industry match leaves the flat growth rate."""
        defaults = lookup_defaults("Underwater Basket Weaving")
        projection = calculator.compute(PitchInputs(monthly_visits=200), defaults)

        assert defaults is None
        assert projection.growth_rate == 20
        assert projection.industry == "default"
