"""Output models for composed pitch documents."""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from pitchkit.models.seller import SellerContext


class DocumentLevel(str, Enum):
    """Document types, from lightest to heaviest."""

    OUTREACH = "outreach"  # Level 1: email + LinkedIn sequence
    ONE_PAGER = "one_pager"  # Level 2: single-page brief
    DECK = "deck"  # Level 3: enterprise slide deck

    @property
    def number(self) -> int:
        return _LEVEL_NUMBERS[self]

    @classmethod
    def parse(cls, value: "DocumentLevel | int | str") -> "DocumentLevel":
        """Resolve a level from its name or its number (1, 2, 3)."""
        if isinstance(value, DocumentLevel):
            return value
        if isinstance(value, int) or (isinstance(value, str) and value.strip().isdigit()):
            number = int(value)
            for level, level_number in _LEVEL_NUMBERS.items():
                if level_number == number:
                    return level
            raise ValueError(f"Unknown document level number: {value}")
        try:
            return cls(str(value).strip().lower().replace("-", "_"))
        except ValueError:
            raise ValueError(f"Unknown document level: {value}") from None


_LEVEL_NUMBERS = {
    DocumentLevel.OUTREACH: 1,
    DocumentLevel.ONE_PAGER: 2,
    DocumentLevel.DECK: 3,
}


class SectionId(str, Enum):
    """Identifiers of every section a document can contain."""

    # Shared
    TRIGGER_EVENT = "trigger_event"  # Recent news hook

    # Outreach
    OUTREACH_HEADER = "outreach_header"
    EMAIL_SEQUENCE = "email_sequence"
    LINKEDIN_SEQUENCE = "linkedin_sequence"
    SALES_INTELLIGENCE = "sales_intelligence"
    PERSONALIZATION_NOTES = "personalization_notes"

    # One-pager
    BRIEF_HEADER = "brief_header"
    STATS_ROW = "stats_row"
    OPPORTUNITY = "opportunity"  # Opportunity + customer analysis
    INDUSTRY_CHALLENGES = "industry_challenges"
    PRODUCTS = "products"
    SOLUTIONS = "solutions"
    CALL_TO_ACTION = "call_to_action"

    # Deck
    TITLE = "title"
    WHAT_MAKES_SPECIAL = "what_makes_special"
    REVIEW_HEALTH = "review_health"
    GROWTH_CHALLENGES = "growth_challenges"
    SOLUTION = "solution"
    PROJECTED_ROI = "projected_roi"
    MARKET_INTELLIGENCE = "market_intelligence"
    PRODUCT_STRATEGY = "product_strategy"
    ROLLOUT = "rollout"
    INVESTMENT = "investment"
    NEXT_STEPS = "next_steps"
    CLOSING = "closing"


class SectionFlag(str, Enum):
    """Data-availability flags that gate optional sections."""

    TRIGGER_EVENT = "has_trigger_event"
    REVIEW_ANALYTICS = "has_review_analytics"
    MARKET_DATA = "has_market_data"


class SectionFlags(BaseModel):
    """Which optional data is available for a document."""

    model_config = ConfigDict(frozen=True)

    has_trigger_event: bool = False
    has_review_analytics: bool = False
    has_market_data: bool = False

    def is_set(self, flag: SectionFlag) -> bool:
        return bool(getattr(self, flag.value))


# ============================================================================
# Projection
# ============================================================================


class FinancialProjection(BaseModel):
    """Revenue and ROI projection for the prospect."""

    model_config = ConfigDict(frozen=True)

    # Baseline
    monthly_customers: float
    avg_ticket: float
    repeat_rate: float  # Percent

    # Projection
    growth_rate: float  # Percent of monthly customers gained as new customers
    new_customers: int
    monthly_incremental_revenue: float
    six_month_revenue: float
    monthly_cost: float
    six_month_cost: float
    roi: int  # Percent

    industry: str = "default"
    calculation_model: str = "conservative_new_customers_only"
    defaulted_fields: list[str] = Field(
        default_factory=list, description="Inputs that fell back to defaults"
    )


# ============================================================================
# Composed Document
# ============================================================================


class RenderedSection(BaseModel):
    """A section bound to its place in the document."""

    model_config = ConfigDict(frozen=True)

    id: SectionId
    position: int = Field(ge=1, description="1-based position in the document")
    total: int = Field(ge=1, description="Number of sections in the document")
    data: dict[str, Any] = Field(default_factory=dict)

    @property
    def label(self) -> str:
        """Position label a renderer prints, e.g. "3 / 12"."""
        return f"{self.position} / {self.total}"


class ComposedDocument(BaseModel):
    """An assembled document ready for a section renderer."""

    level: DocumentLevel
    business_name: str
    sections: list[RenderedSection]
    seller: SellerContext
    projection: FinancialProjection
    flags: SectionFlags

    @property
    def total(self) -> int:
        return len(self.sections)

    def section_ids(self) -> list[SectionId]:
        return [section.id for section in self.sections]

    def get_section(self, section_id: SectionId) -> Optional[RenderedSection]:
        """Get a section by id, or None when it was not included."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None
