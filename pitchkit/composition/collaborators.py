"""Base classes for the services the composition pipeline works with."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional, Sequence

from pitchkit.models.document import RenderedSection
from pitchkit.models.inputs import GoogleReview

if TYPE_CHECKING:
    from pitchkit.composition.industry import SalesIntel
    from pitchkit.composition.reviews import ReviewSummary


class PitchStore(ABC):
    """
    Abstract base class for pitch persistence.

    The composition core never calls the store; it is used before and after
    composition, e.g. by the quota gate.
    """

    @abstractmethod
    def create(self, record: dict[str, Any]) -> str:
        """Store a record and return its id."""
        ...

    @abstractmethod
    def get(self, pitch_id: str) -> Optional[dict[str, Any]]:
        ...

    @abstractmethod
    def count_this_month(self, user_id: str) -> int:
        """Number of pitches the user created in the current calendar month."""
        ...


class ReviewAnalyzer(ABC):
    """Abstract base class for extracting sentiment and themes from raw reviews."""

    @abstractmethod
    def analyze(self, raw_reviews: Sequence[GoogleReview]) -> "ReviewSummary":
        ...


class IndustryCatalog(ABC):
    """Abstract base class for sales intelligence lookups by industry."""

    @abstractmethod
    def lookup(self, industry: Optional[str], sub_industry: Optional[str] = None) -> "SalesIntel":
        ...


class SectionRenderer(ABC):
    """
    Abstract base class for turning a section's data slice into markup.

    Renderers print each section's ``label`` as-is and never recompute
    numbering.
    """

    @abstractmethod
    def render(self, section: RenderedSection) -> str:
        """Render one section, including its position label."""
        ...
