"""Document composition pipeline: fitting, projection, seller context and section planning."""

from .assembler import DocumentAssembler, render_sections
from .collaborators import IndustryCatalog, PitchStore, ReviewAnalyzer, SectionRenderer
from .composer import SectionComposer, SectionNumberingError, validate_numbering
from .fitter import ContentFitter
from .industry import (
    IndustryDefaults,
    SalesIntel,
    StaticIndustryCatalog,
    lookup_defaults,
)
from .projection import FinancialProjectionCalculator, coerce_number
from .quota import QuotaGate, QuotaStatus, check_quota
from .reviews import KeywordReviewAnalyzer, ReviewSummary
from .seller_context import SellerContextResolver
from .skeletons import (
    LEVEL_SKELETONS,
    CompositionError,
    LevelSkeleton,
    SectionSpec,
    SkeletonError,
    get_skeleton,
)

__all__ = [
    # Assembly
    "DocumentAssembler",
    "render_sections",
    # Collaborators
    "IndustryCatalog",
    "PitchStore",
    "ReviewAnalyzer",
    "SectionRenderer",
    # Section planning
    "SectionComposer",
    "SectionNumberingError",
    "validate_numbering",
    "LEVEL_SKELETONS",
    "CompositionError",
    "LevelSkeleton",
    "SectionSpec",
    "SkeletonError",
    "get_skeleton",
    # Content
    "ContentFitter",
    "FinancialProjectionCalculator",
    "coerce_number",
    "SellerContextResolver",
    # Industry and reviews
    "IndustryDefaults",
    "SalesIntel",
    "StaticIndustryCatalog",
    "lookup_defaults",
    "KeywordReviewAnalyzer",
    "ReviewSummary",
    # Quota
    "QuotaGate",
    "QuotaStatus",
    "check_quota",
]
