"""Data models for the pitch composition pipeline."""

from pitchkit.models.config import (
    CompositionSettings,
    ContentLimits,
    PlatformProfile,
    ProjectionDefaults,
)
from pitchkit.models.document import (
    ComposedDocument,
    DocumentLevel,
    FinancialProjection,
    RenderedSection,
    SectionFlag,
    SectionFlags,
    SectionId,
)
from pitchkit.models.inputs import (
    MarketData,
    PitchInputs,
    PitchMetrics,
    ReviewAnalytics,
    TriggerEvent,
    parse_number,
)
from pitchkit.models.seller import (
    ICP,
    BrandingOptions,
    CatalogProduct,
    Product,
    SellerContext,
    SellerProfile,
)

__all__ = [
    # Config models
    "CompositionSettings",
    "ContentLimits",
    "PlatformProfile",
    "ProjectionDefaults",
    # Document models
    "ComposedDocument",
    "DocumentLevel",
    "FinancialProjection",
    "RenderedSection",
    "SectionFlag",
    "SectionFlags",
    "SectionId",
    # Input models
    "MarketData",
    "PitchInputs",
    "PitchMetrics",
    "ReviewAnalytics",
    "TriggerEvent",
    "parse_number",
    # Seller models
    "ICP",
    "BrandingOptions",
    "CatalogProduct",
    "Product",
    "SellerContext",
    "SellerProfile",
]
