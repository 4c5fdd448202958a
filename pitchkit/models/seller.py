"""Seller profile and resolved seller context models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from pitchkit.models.inputs import InputModel


# ============================================================================
# Stored Seller Profile
# ============================================================================


class CompanyProfile(InputModel):
    """Company identity section of a seller profile."""

    company_name: Optional[str] = Field(default=None, alias="companyName")
    industry: Optional[str] = None
    company_size: Optional[str] = Field(default=None, alias="companySize")
    website_url: Optional[str] = Field(default=None, alias="websiteUrl")


class Branding(InputModel):
    """Branding settings stored on a seller profile."""

    primary_color: Optional[str] = Field(default=None, alias="primaryColor")
    accent_color: Optional[str] = Field(default=None, alias="accentColor")
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    tone: Optional[str] = None
    footer_text: Optional[str] = Field(default=None, alias="footerText")
    contact_email: Optional[str] = Field(default=None, alias="contactEmail")
    booking_url: Optional[str] = Field(default=None, alias="bookingUrl")
    hide_branding: Optional[bool] = Field(default=None, alias="hideBranding")


class Product(InputModel):
    """A product in the seller's catalog."""

    name: str
    description: str = ""
    pricing: Optional[str] = None  # Free text, e.g. "$99/mo"
    is_primary: bool = Field(default=False, alias="isPrimary")


class ValueProposition(InputModel):
    """Seller's value proposition."""

    unique_selling_points: list[str] = Field(default_factory=list, alias="uniqueSellingPoints")
    key_benefits: list[str] = Field(default_factory=list, alias="keyBenefits")
    differentiator: Optional[str] = None


class ICP(InputModel):
    """Ideal Customer Persona attached to a seller profile."""

    id: Optional[str] = None
    display_name: Optional[str] = Field(default=None, alias="displayName")
    is_default: bool = Field(default=False, alias="isDefault")
    pain_points: list[str] = Field(default_factory=list, alias="painPoints")
    target_industries: list[str] = Field(default_factory=list, alias="targetIndustries")
    company_sizes: list[str] = Field(default_factory=list, alias="companySizes")
    decision_makers: list[str] = Field(default_factory=list, alias="decisionMakers")


class SellerProfile(InputModel):
    """A seller's stored profile."""

    company_profile: Optional[CompanyProfile] = Field(default=None, alias="companyProfile")
    branding: Optional[Branding] = None
    products: list[Product] = Field(default_factory=list)
    value_proposition: Optional[ValueProposition] = Field(default=None, alias="valueProposition")
    icps: list[ICP] = Field(default_factory=list)
    icp: Optional[ICP] = None  # Single-persona profiles saved before multi-ICP support

    @property
    def company_name(self) -> Optional[str]:
        return self.company_profile.company_name if self.company_profile else None


class BrandingOptions(InputModel):
    """Per-request branding overrides."""

    primary_color: Optional[str] = Field(default=None, alias="primaryColor")
    accent_color: Optional[str] = Field(default=None, alias="accentColor")
    logo_url: Optional[str] = Field(default=None, alias="logoUrl")
    company_name: Optional[str] = Field(default=None, alias="companyName")
    footer_text: Optional[str] = Field(default=None, alias="footerText")
    contact_email: Optional[str] = Field(default=None, alias="contactEmail")
    booking_url: Optional[str] = Field(default=None, alias="bookingUrl")
    hide_branding: Optional[bool] = Field(default=None, alias="hideBranding")


# ============================================================================
# Resolved Context
# ============================================================================


class CatalogProduct(BaseModel):
    """A product as presented in a composed document."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str = ""
    price: Optional[str] = None
    icon: str = ""
    is_primary: bool = False


class SellerContext(BaseModel):
    """Canonical seller identity resolved for a single pitch."""

    model_config = ConfigDict(frozen=True)

    company_name: str
    industry: Optional[str] = None
    company_size: Optional[str] = None
    website_url: Optional[str] = None

    # Branding
    primary_color: str
    accent_color: str
    logo_url: Optional[str] = None
    footer_text: Optional[str] = None
    contact_email: Optional[str] = None
    booking_url: Optional[str] = None
    hide_branding: bool = False
    tone: str = "professional"

    # Offer
    products: list[CatalogProduct] = Field(default_factory=list)
    pricing: str = "Contact for pricing"
    pricing_period: str = ""
    monthly_price: Optional[float] = None
    unique_selling_points: list[str] = Field(default_factory=list)
    key_benefits: list[str] = Field(default_factory=list)
    differentiator: Optional[str] = None

    # Targeting
    icp: ICP = Field(default_factory=ICP)

    is_default: bool = False
    field_sources: dict[str, str] = Field(
        default_factory=dict, description="Branding field -> layer it was resolved from"
    )

    @property
    def primary_product(self) -> Optional[CatalogProduct]:
        """The product flagged primary, else the first product."""
        for product in self.products:
            if product.is_primary:
                return product
        return self.products[0] if self.products else None
