"""Input models for the business record a pitch is composed from."""

import math
import re
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

_NUMBER_NOISE = re.compile(r"[$,%\s]")


def parse_number(value: Any) -> Optional[float]:
    """Parse a raw metric ("$1,250", "25%", 3) to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = _NUMBER_NOISE.sub("", value)
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _lenient_int(value: Any) -> Optional[int]:
    number = parse_number(value)
    return None if number is None else int(round(number))


def _text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _text_list(value: Any) -> list[str]:
    """Null becomes an empty list, a lone string a one-item list; blank items are dropped."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    elif not isinstance(value, (list, tuple)):
        return []
    return [_text(item) for item in value if item is not None and _text(item).strip()]


class InputModel(BaseModel):
    """Base for request-level input models.

    Accepts both snake_case field names and the camelCase keys used by stored
    pitch records, and ignores keys it does not know about.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


# ============================================================================
# Trigger Events
# ============================================================================


class TriggerEvent(InputModel):
    """A recent news event used as the opening hook of a pitch."""

    headline: str = ""
    summary: str = ""
    key_points: list[str] = Field(default_factory=list, alias="keyPoints")
    source: Optional[str] = None
    event_type: Optional[str] = Field(default=None, alias="type")
    published_at: Optional[str] = Field(default=None, alias="publishedAt")

    @field_validator("headline", "summary", mode="before")
    @classmethod
    def clean_null_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("key_points", mode="before")
    @classmethod
    def clean_null_points(cls, value: Any) -> list[str]:
        return _text_list(value)


# ============================================================================
# Market Data
# ============================================================================


class IndustryBenchmarks(InputModel):
    """Industry benchmarks attached to a market report."""

    avg_transaction: Optional[float] = Field(default=None, alias="avgTransaction")
    monthly_customers: Optional[float] = Field(default=None, alias="monthlyCustomers")
    category: Optional[str] = None
    subcategory: Optional[str] = None

    @field_validator("avg_transaction", "monthly_customers", mode="before")
    @classmethod
    def clean_numbers(cls, value: Any) -> Optional[float]:
        return parse_number(value)


class Demographics(InputModel):
    """Local market demographics."""

    population: Optional[int] = None
    median_income: Optional[int] = Field(default=None, alias="medianIncome")
    median_age: Optional[float] = Field(default=None, alias="medianAge")

    @field_validator("population", "median_income", mode="before")
    @classmethod
    def clean_counts(cls, value: Any) -> Optional[int]:
        return _lenient_int(value)

    @field_validator("median_age", mode="before")
    @classmethod
    def clean_age(cls, value: Any) -> Optional[float]:
        return parse_number(value)


class MarketData(InputModel):
    """Market intelligence for the business's local area."""

    opportunity_score: Optional[float] = Field(default=None, alias="opportunityScore")
    opportunity_level: Optional[str] = Field(default=None, alias="opportunityLevel")
    saturation: Optional[str] = None
    competitor_count: Optional[int] = Field(default=None, alias="competitorCount")
    market_size: Optional[float] = Field(default=None, alias="marketSize")
    growth_rate: Optional[float] = Field(default=None, alias="growthRate")
    demographics: Optional[Demographics] = None
    seasonality: dict[str, Any] = Field(default_factory=dict)
    industry: Optional[IndustryBenchmarks] = None
    recommendations: list[str] = Field(default_factory=list)

    @field_validator("opportunity_score", "market_size", "growth_rate", mode="before")
    @classmethod
    def clean_numbers(cls, value: Any) -> Optional[float]:
        return parse_number(value)

    @field_validator("competitor_count", mode="before")
    @classmethod
    def clean_count(cls, value: Any) -> Optional[int]:
        return _lenient_int(value)

    @field_validator("recommendations", mode="before")
    @classmethod
    def clean_null_list(cls, value: Any) -> list[str]:
        return _text_list(value)

    @field_validator("seasonality", mode="before")
    @classmethod
    def clean_null_dict(cls, value: Any) -> dict[str, Any]:
        return value if isinstance(value, dict) else {}


# ============================================================================
# Review Analytics
# ============================================================================


class Sentiment(InputModel):
    """Sentiment split of a review set, in percent."""

    positive: int = 0
    neutral: int = 0
    negative: int = 0

    @field_validator("positive", "neutral", "negative", mode="before")
    @classmethod
    def clean_percent(cls, value: Any) -> int:
        return _lenient_int(value) or 0


class KeyMetric(InputModel):
    """A single headline metric shown on the review health section."""

    label: str
    value: Any = None
    status: Optional[str] = None  # good, warning, critical


class Insight(InputModel):
    """An issue, opportunity or strength derived from review analytics."""

    title: str
    detail: str = ""


class PitchMetrics(InputModel):
    """Pitch-ready metrics derived from review analytics."""

    health_score: Optional[float] = Field(default=None, alias="healthScore")
    health_label: Optional[str] = Field(default=None, alias="healthLabel")
    key_metrics: list[KeyMetric] = Field(default_factory=list, alias="keyMetrics")
    critical_issues: list[Insight] = Field(default_factory=list, alias="criticalIssues")
    opportunities: list[Insight] = Field(default_factory=list)
    strengths: list[Insight] = Field(default_factory=list)
    recommendation: Optional[str] = None

    @field_validator("health_score", mode="before")
    @classmethod
    def clean_score(cls, value: Any) -> Optional[float]:
        return parse_number(value)

    @field_validator("key_metrics", "critical_issues", "opportunities", "strengths", mode="before")
    @classmethod
    def clean_null_list(cls, value: Any) -> list[Any]:
        return value if isinstance(value, list) else []


class ReviewAnalytics(InputModel):
    """Sentiment and theme summary plus derived pitch metrics."""

    sentiment: Optional[Sentiment] = None
    themes: list[str] = Field(default_factory=list)
    staff_mentions: list[str] = Field(default_factory=list, alias="staffMentions")
    analytics: Optional[dict[str, Any]] = None  # volume, quality, response blocks
    pitch_metrics: Optional[PitchMetrics] = Field(default=None, alias="pitchMetrics")

    @field_validator("themes", "staff_mentions", mode="before")
    @classmethod
    def clean_null_list(cls, value: Any) -> list[str]:
        return _text_list(value)


class GoogleReview(InputModel):
    """A raw review as captured from the business's Google profile."""

    text: str = ""
    rating: Optional[float] = None
    author: Optional[str] = None

    @field_validator("text", mode="before")
    @classmethod
    def clean_null_text(cls, value: Any) -> str:
        return _text(value)

    @field_validator("rating", mode="before")
    @classmethod
    def clean_rating(cls, value: Any) -> Optional[float]:
        return parse_number(value)


# ============================================================================
# Pitch Inputs
# ============================================================================


class PitchInputs(InputModel):
    """The business record a pitch is composed from.

    Projection metrics are kept as raw values and are coerced by the
    projection calculator. Profile and enrichment fields are cleaned on the
    way in: null text becomes "", null lists become [], and unparseable
    numbers become None.
    """

    # Identity
    business_name: str = Field(default="", alias="businessName")
    contact_name: Optional[str] = Field(default=None, alias="contactName")
    address: Optional[str] = None
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")
    industry: Optional[str] = None
    sub_industry: Optional[str] = Field(default=None, alias="subIndustry")
    naics_code: Optional[str] = Field(default=None, alias="naicsCode")

    # Google profile
    google_rating: Optional[float] = Field(default=None, alias="googleRating")
    number_of_reviews: Optional[int] = Field(default=None, alias="numberOfReviews")
    google_reviews: list[GoogleReview] = Field(default_factory=list, alias="googleReviews")

    # Free text
    stated_problem: Optional[str] = Field(default=None, alias="statedProblem")
    custom_message: Optional[str] = Field(default=None, alias="customMessage")

    # Raw metrics
    monthly_visits: Any = Field(default=None, alias="monthlyVisits")
    avg_transaction: Any = Field(default=None, alias="avgTransaction")
    avg_ticket: Any = Field(default=None, alias="avgTicket")
    repeat_rate: Any = Field(default=None, alias="repeatRate")

    # Optional enrichment
    trigger_event: Optional[TriggerEvent] = Field(default=None, alias="triggerEvent")
    market_data: Optional[MarketData] = Field(default=None, alias="marketData")

    @field_validator("business_name", mode="before")
    @classmethod
    def clean_null_name(cls, value: Any) -> str:
        return _text(value)

    @field_validator("naics_code", mode="before")
    @classmethod
    def clean_code(cls, value: Any) -> Optional[str]:
        return None if value in (None, "") else str(value).strip()

    @field_validator("google_rating", mode="before")
    @classmethod
    def clean_rating(cls, value: Any) -> Optional[float]:
        return parse_number(value)

    @field_validator("number_of_reviews", mode="before")
    @classmethod
    def clean_review_count(cls, value: Any) -> Optional[int]:
        return _lenient_int(value)

    @field_validator("google_reviews", mode="before")
    @classmethod
    def clean_null_reviews(cls, value: Any) -> list[Any]:
        return value if isinstance(value, list) else []

    @property
    def display_name(self) -> str:
        """Business name, or a neutral placeholder when none was supplied."""
        return self.business_name or "Your Business"

    @property
    def first_name(self) -> str:
        """First name of the contact, used for greetings."""
        if not self.contact_name:
            return "there"
        return self.contact_name.split()[0]
