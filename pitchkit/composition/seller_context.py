"""Resolve the canonical seller context for a pitch."""

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

from pitchkit.models.config import PlatformProfile
from pitchkit.models.seller import (
    ICP,
    BrandingOptions,
    CatalogProduct,
    Product,
    SellerContext,
    SellerProfile,
)

logger = logging.getLogger(__name__)

PRODUCT_ICONS = ["⭐", "📦", "🎯", "💡", "🚀", "📊", "🔧", "💼", "📱", "🌐"]

CONTACT_FOR_PRICING = "Contact for pricing"

_PRICE_NUMBER = re.compile(r"\d[\d,]*(?:\.\d+)?")

# Written prices that mean "free" rather than a real price
ZERO_PRICES = {"0", "$0", "$0.00", "0.00"}


class FieldSource:
    """Layers a branding field can be resolved from, highest precedence first."""

    REQUEST = "request"
    PROFILE = "profile"
    PLATFORM = "platform"


@dataclass(frozen=True)
class PrecedenceRule:
    """How one branding field is resolved across the three layers."""

    field: str
    from_profile: Callable[[SellerProfile], Any]
    from_platform: Callable[[PlatformProfile], Any]


def _branding(attr: str) -> Callable[[SellerProfile], Any]:
    return lambda profile: getattr(profile.branding, attr) if profile.branding else None


# Request option -> seller profile -> platform default, per field
PRECEDENCE_RULES: list[PrecedenceRule] = [
    PrecedenceRule("company_name", lambda p: p.company_name, lambda d: d.company_name),
    PrecedenceRule("primary_color", _branding("primary_color"), lambda d: d.primary_color),
    PrecedenceRule("accent_color", _branding("accent_color"), lambda d: d.accent_color),
    PrecedenceRule("logo_url", _branding("logo_url"), lambda d: None),
    PrecedenceRule("footer_text", _branding("footer_text"), lambda d: d.footer_text),
    PrecedenceRule("contact_email", _branding("contact_email"), lambda d: d.contact_email),
    PrecedenceRule("booking_url", _branding("booking_url"), lambda d: None),
    PrecedenceRule("hide_branding", _branding("hide_branding"), lambda d: False),
]


def parse_price(value: Optional[str]) -> Optional[float]:
    """Extract the first number from free-text pricing ("$99/mo" -> 99.0)."""
    if not value:
        return None
    match = _PRICE_NUMBER.search(value)
    if match is None:
        return None
    return float(match.group().replace(",", ""))


def _is_zero_price(value: str) -> bool:
    return value.strip() in ZERO_PRICES or parse_price(value) == 0


def format_price(amount: float) -> str:
    if amount == int(amount):
        return f"${int(amount)}"
    return f"${amount:.2f}"


def select_icp(profile: SellerProfile, icp_id: Optional[str] = None) -> ICP:
    """
    Pick the persona a pitch targets.

    Order: the ICP whose id matches ``icp_id``, the ICP flagged default, the
    first ICP, the legacy single ``icp``, and finally an empty persona.
    """
    if profile.icps:
        if icp_id:
            for icp in profile.icps:
                if icp.id == icp_id:
                    return icp
            logger.warning(f"ICP '{icp_id}' not found on seller profile, using default")
        for icp in profile.icps:
            if icp.is_default:
                return icp
        return profile.icps[0]
    if profile.icp is not None:
        return profile.icp
    return ICP()


def derive_pricing(products: list[Product]) -> tuple[str, Optional[float]]:
    """
    Derive the headline price of a catalog.

    Sums every parseable price; when none sum above zero, uses the primary (or
    first) product's price as written unless it is zero; otherwise returns the
    contact-for-pricing sentinel. Also returns the numeric monthly price when
    one is known.
    """
    total = 0.0
    for product in products:
        amount = parse_price(product.pricing)
        if amount:
            total += amount
    if total > 0:
        return format_price(total), total

    primary = next((p for p in products if p.is_primary), products[0] if products else None)
    if primary and primary.pricing and not _is_zero_price(primary.pricing):
        return primary.pricing, parse_price(primary.pricing)

    return CONTACT_FOR_PRICING, None


class SellerContextResolver:
    """
    Merges request overrides, the stored seller profile and platform defaults.

    Each branding field is resolved on its own (see PRECEDENCE_RULES), so a
    request can override just the primary color while the logo still comes
    from the profile. A missing profile, or one without a company name,
    resolves to the platform's own context with ``is_default=True``.

    Usage:
        resolver = SellerContextResolver()
        context = resolver.resolve({"primaryColor": "#111111"}, profile, icp_id="icp-2")
    """

    def __init__(self, platform: Optional[PlatformProfile] = None):
        self.platform = platform or PlatformProfile()

    def resolve(
        self,
        request_options: Union[BrandingOptions, dict, None] = None,
        seller_profile: Union[SellerProfile, dict, None] = None,
        icp_id: Optional[str] = None,
    ) -> SellerContext:
        """Resolve the seller context for one pitch."""
        options = self._coerce_options(request_options)
        profile = self._coerce_profile(seller_profile)

        if profile is None or not profile.company_name:
            logger.debug("No usable seller profile, resolving platform default context")
            return self._build_default(options)

        return self._build_from_profile(options, profile, icp_id)

    # ------------------------------------------------------------------------

    def resolve_branding(
        self, options: BrandingOptions, profile: Optional[SellerProfile]
    ) -> tuple[dict[str, Any], dict[str, str]]:
        """Resolve every branding field and the layer each one came from."""
        values: dict[str, Any] = {}
        sources: dict[str, str] = {}
        for rule in PRECEDENCE_RULES:
            value, source = self._resolve_field(rule, options, profile)
            values[rule.field] = value
            sources[rule.field] = source
        return values, sources

    def _resolve_field(
        self, rule: PrecedenceRule, options: BrandingOptions, profile: Optional[SellerProfile]
    ) -> tuple[Any, str]:
        requested = getattr(options, rule.field)
        if _is_set(requested):
            return requested, FieldSource.REQUEST
        if profile is not None:
            stored = rule.from_profile(profile)
            if _is_set(stored):
                return stored, FieldSource.PROFILE
        return rule.from_platform(self.platform), FieldSource.PLATFORM

    def _build_default(self, options: BrandingOptions) -> SellerContext:
        branding, sources = self.resolve_branding(options, None)
        platform = self.platform
        products = [
            CatalogProduct(
                name=product.name,
                description=product.description,
                icon=product.icon,
                is_primary=index == 0,
            )
            for index, product in enumerate(platform.products)
        ]
        return SellerContext(
            **branding,
            tone=platform.tone,
            products=products,
            pricing=platform.pricing,
            pricing_period=platform.pricing_period,
            monthly_price=parse_price(platform.pricing),
            unique_selling_points=list(platform.unique_selling_points),
            key_benefits=list(platform.key_benefits),
            icp=ICP(pain_points=list(platform.pain_points)),
            is_default=True,
            field_sources=sources,
        )

    def _build_from_profile(
        self, options: BrandingOptions, profile: SellerProfile, icp_id: Optional[str]
    ) -> SellerContext:
        branding, sources = self.resolve_branding(options, profile)
        company = profile.company_profile
        value_prop = profile.value_proposition

        products = [
            CatalogProduct(
                name=product.name,
                description=product.description,
                price=product.pricing,
                icon=PRODUCT_ICONS[index % len(PRODUCT_ICONS)],
                is_primary=product.is_primary,
            )
            for index, product in enumerate(profile.products)
        ]
        pricing, monthly_price = derive_pricing(profile.products)
        icp = select_icp(profile, icp_id)

        logger.info(
            f"Resolved seller context for {branding['company_name']} "
            f"({len(products)} products, ICP: {icp.display_name or icp.id or 'none'})"
        )

        return SellerContext(
            **branding,
            industry=company.industry if company else None,
            company_size=company.company_size if company else None,
            website_url=company.website_url if company else None,
            tone=(profile.branding.tone if profile.branding else None) or "professional",
            products=products,
            pricing=pricing,
            monthly_price=monthly_price,
            unique_selling_points=list(value_prop.unique_selling_points) if value_prop else [],
            key_benefits=list(value_prop.key_benefits) if value_prop else [],
            differentiator=value_prop.differentiator if value_prop else None,
            icp=icp,
            is_default=False,
            field_sources=sources,
        )

    @staticmethod
    def _coerce_options(options: Union[BrandingOptions, dict, None]) -> BrandingOptions:
        if options is None:
            return BrandingOptions()
        if isinstance(options, BrandingOptions):
            return options
        return BrandingOptions.model_validate(options)

    @staticmethod
    def _coerce_profile(profile: Union[SellerProfile, dict, None]) -> Optional[SellerProfile]:
        if profile is None or isinstance(profile, SellerProfile):
            return profile
        return SellerProfile.model_validate(profile)


def _is_set(value: Any) -> bool:
    """A layer supplies a field when the value is neither None nor an empty string."""
    return value is not None and value != ""
