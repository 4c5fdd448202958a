"""Financial projection from sparse business metrics."""

import logging
import math
from enum import Enum
from typing import Any, NamedTuple, Optional

from pitchkit.composition.industry import IndustryDefaults
from pitchkit.models.config import ProjectionDefaults
from pitchkit.models.document import FinancialProjection
from pitchkit.models.inputs import PitchInputs, parse_number

logger = logging.getLogger(__name__)


class NumberSource(str, Enum):
    """Where a coerced number came from."""

    PROVIDED = "provided"  # Positive finite number
    MISSING = "missing"  # None or empty string
    INVALID = "invalid"  # Not parseable, NaN, infinite or a bool
    ZERO = "zero"  # Parsed to 0
    NEGATIVE = "negative"  # Parsed to a negative number


class CoercedNumber(NamedTuple):
    value: float
    source: NumberSource

    @property
    def fell_back(self) -> bool:
        return self.source != NumberSource.PROVIDED


def coerce_number(value: Any, fallback: float) -> CoercedNumber:
    """
    Coerce a raw metric to a positive number, falling back when it is unusable.

    Strings may carry currency, thousands separators and percent signs
    ("$1,250", "25%"). Missing, invalid, zero and negative values all use
    ``fallback``; the returned source tells them apart.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return CoercedNumber(fallback, NumberSource.MISSING)
    number = parse_number(value)
    if number is None:
        return CoercedNumber(fallback, NumberSource.INVALID)
    if number == 0:
        return CoercedNumber(fallback, NumberSource.ZERO)
    if number < 0:
        return CoercedNumber(fallback, NumberSource.NEGATIVE)
    return CoercedNumber(number, NumberSource.PROVIDED)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value < 0:
        return -math.floor(-value + 0.5)
    return math.floor(value + 0.5)


class FinancialProjectionCalculator:
    """
    Derives a conservative revenue and ROI projection.

    Only new customers are counted: growth rate times monthly customers,
    each spending one average ticket per month. Repeat revenue is reported
    but excluded from ROI.

    Usage:
        calculator = FinancialProjectionCalculator()
        projection = calculator.compute(inputs, lookup_defaults("Automotive", "Auto Repair"))
        print(projection.roi)
    """

    def __init__(self, defaults: Optional[ProjectionDefaults] = None):
        self.defaults = defaults or ProjectionDefaults()

    def compute(
        self,
        inputs: PitchInputs,
        industry_defaults: Optional[IndustryDefaults] = None,
        monthly_cost: Optional[float] = None,
    ) -> FinancialProjection:
        """Compute the projection for a business. Never raises."""
        defaulted: list[str] = []
        benchmarks = inputs.market_data.industry if inputs.market_data else None

        visits_fallback = (
            industry_defaults.monthly_customers if industry_defaults else self.defaults.monthly_visits
        )
        ticket_fallback = (
            industry_defaults.avg_transaction if industry_defaults else self.defaults.avg_ticket
        )

        monthly_customers = self._first_provided(
            "monthly_visits",
            [benchmarks.monthly_customers if benchmarks else None, inputs.monthly_visits],
            visits_fallback,
            defaulted,
        )
        avg_ticket = self._first_provided(
            "avg_ticket",
            [
                benchmarks.avg_transaction if benchmarks else None,
                inputs.avg_transaction,
                inputs.avg_ticket,
            ],
            ticket_fallback,
            defaulted,
        )

        repeat = coerce_number(inputs.repeat_rate, self.defaults.repeat_rate)
        if repeat.fell_back:
            defaulted.append("repeat_rate")
        repeat_rate = repeat.value * 100 if repeat.value <= 1 else repeat.value

        growth_rate = self.defaults.growth_rate
        if industry_defaults and industry_defaults.growth_rate is not None:
            growth_rate = industry_defaults.growth_rate
        industry_label = industry_defaults.label if industry_defaults else "default"

        cost = coerce_number(monthly_cost, self.defaults.monthly_cost)
        months = self.defaults.projection_months

        new_customers = max(round_half_up(monthly_customers * growth_rate / 100), 0)
        monthly_revenue = round(new_customers * avg_ticket, 2)
        six_month_revenue = monthly_revenue * months
        six_month_cost = cost.value * months

        if six_month_cost > 0:
            roi = round_half_up((six_month_revenue - six_month_cost) / six_month_cost * 100)
        else:
            roi = 0

        if defaulted:
            logger.debug(f"Projection inputs defaulted: {', '.join(defaulted)}")
        logger.info(
            f"ROI calculated with {growth_rate:g}% growth rate for {industry_label}: "
            f"{new_customers} new customers, {roi}% ROI"
        )

        return FinancialProjection(
            monthly_customers=monthly_customers,
            avg_ticket=avg_ticket,
            repeat_rate=repeat_rate,
            growth_rate=growth_rate,
            new_customers=new_customers,
            monthly_incremental_revenue=monthly_revenue,
            six_month_revenue=six_month_revenue,
            monthly_cost=cost.value,
            six_month_cost=six_month_cost,
            roi=roi,
            industry=industry_label,
            defaulted_fields=defaulted,
        )

    def _first_provided(
        self,
        name: str,
        candidates: list[Any],
        fallback: float,
        defaulted: list[str],
    ) -> float:
        """Return the first usable candidate, else record the fallback."""
        for candidate in candidates:
            coerced = coerce_number(candidate, fallback)
            if not coerced.fell_back:
                return coerced.value
        defaulted.append(name)
        return fallback
