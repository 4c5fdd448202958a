"""Tests for the seller context resolver."""

import pytest

from pitchkit.composition.seller_context import (
    CONTACT_FOR_PRICING,
    FieldSource,
    SellerContextResolver,
    derive_pricing,
    parse_price,
    select_icp,
)
from pitchkit.models.config import PlatformProfile
from pitchkit.models.seller import (
    ICP,
    Branding,
    BrandingOptions,
    CompanyProfile,
    Product,
    SellerProfile,
    ValueProposition,
)


@pytest.fixture
def resolver():
    return SellerContextResolver()


@pytest.fixture
def seller_profile():
    """A complete seller profile with two personas."""
    return SellerProfile(
        company_profile=CompanyProfile(
            company_name="Brightline Marketing",
            industry="Marketing Services",
            company_size="11-50",
            website_url="https://brightline.example.com",
        ),
        branding=Branding(
            primary_color="#222222",
            accent_color="#AA5500",
            logo_url="https://brightline.example.com/logo.png",
            footer_text="Brightline Marketing LLC",
            tone="friendly",
        ),
        products=[
            Product(name="Review Booster", description="Automated review requests", pricing="$99/mo", is_primary=True),
            Product(name="Local SEO", description="Map pack optimization", pricing="$149"),
            Product(name="Onboarding", description="White-glove setup", pricing="Included"),
        ],
        value_proposition=ValueProposition(
            unique_selling_points=["Results in 30 days", "No long-term contracts"],
            key_benefits=["More reviews", "More calls"],
            differentiator="Built only for local service businesses",
        ),
        icps=[
            ICP(id="icp-restaurants", display_name="Restaurants", pain_points=["Slow weeknights"]),
            ICP(id="icp-auto", display_name="Auto shops", is_default=True, pain_points=["Low trust"]),
        ],
    )


class TestColorPrecedence:
    """Branding fields resolve request option, then profile, then platform default."""

    def test_request_option_wins(self, resolver, seller_profile):
        """The request option overrides the stored profile."""
        context = resolver.resolve({"primaryColor": "#111"}, seller_profile.model_copy(
            update={"branding": Branding(primary_color="#222")}
        ))
        assert context.primary_color == "#111"
        assert context.field_sources["primary_color"] == FieldSource.REQUEST

    def test_profile_used_without_request_option(self, resolver, seller_profile):
        """Without a request option the stored profile is used."""
        profile = seller_profile.model_copy(update={"branding": Branding(primary_color="#222")})
        context = resolver.resolve({}, profile)
        assert context.primary_color == "#222"
        assert context.field_sources["primary_color"] == FieldSource.PROFILE

    def test_platform_default_last(self, resolver, seller_profile):
        """Without either, the platform default color is used."""
        profile = seller_profile.model_copy(update={"branding": None})
        context = resolver.resolve({}, profile)
        assert context.primary_color == "#3A6746"
        assert context.field_sources["primary_color"] == FieldSource.PLATFORM

    def test_fields_resolve_independently(self, resolver, seller_profile):
        """Overriding one field leaves the others on their own layers."""
        context = resolver.resolve(BrandingOptions(accent_color="#00FF00"), seller_profile)

        assert context.accent_color == "#00FF00"
        assert context.primary_color == "#222222"
        assert context.logo_url == "https://brightline.example.com/logo.png"
        assert context.contact_email == "hello@pathsynch.com"
        assert context.field_sources["contact_email"] == FieldSource.PLATFORM

    def test_empty_string_does_not_override(self, resolver, seller_profile):
        """An empty request option is treated as unset."""
        context = resolver.resolve({"primaryColor": ""}, seller_profile)
        assert context.primary_color == "#222222"

    def test_request_options_apply_to_default_context(self, resolver):
        """Request overrides also apply when there is no seller profile."""
        context = resolver.resolve({"primaryColor": "#111", "footerText": "Custom footer"})
        assert context.is_default
        assert context.primary_color == "#111"
        assert context.footer_text == "Custom footer"

    def test_company_name_override(self, resolver, seller_profile):
        """The company name can be overridden per request."""
        context = resolver.resolve({"companyName": "Brightline West"}, seller_profile)
        assert context.company_name == "Brightline West"


class TestDefaultContext:
    """Tests for the platform default context."""

    def test_no_profile(self, resolver):
        """No profile resolves to the platform's own context."""
        context = resolver.resolve({}, None, None)

        assert context.is_default is True
        assert context.company_name == "PathSynch"
        assert len(context.products) > 0
        assert context.products[0].is_primary
        assert context.pricing == "$168"
        assert context.monthly_price == 168

    def test_profile_without_company_name(self, resolver, seller_profile):
        """A profile without a company name is not usable."""
        profile = seller_profile.model_copy(update={"company_profile": CompanyProfile()})
        assert resolver.resolve(None, profile).is_default

    def test_custom_platform(self):
        """The platform profile is configurable."""
        resolver = SellerContextResolver(PlatformProfile(company_name="Acme", primary_color="#000000"))
        context = resolver.resolve()
        assert context.company_name == "Acme"
        assert context.primary_color == "#000000"


class TestProfileContext:
    """Tests for contexts built from a seller profile."""

    def test_basic_fields(self, resolver, seller_profile):
        """Company, value proposition and products carry over."""
        context = resolver.resolve(None, seller_profile)

        assert context.is_default is False
        assert context.company_name == "Brightline Marketing"
        assert context.industry == "Marketing Services"
        assert context.tone == "friendly"
        assert context.unique_selling_points == ["Results in 30 days", "No long-term contracts"]
        assert context.differentiator == "Built only for local service businesses"
        assert [p.name for p in context.products] == ["Review Booster", "Local SEO", "Onboarding"]
        assert context.primary_product.name == "Review Booster"

    def test_pricing_summed(self, resolver, seller_profile):
        """Parseable product prices are summed."""
        context = resolver.resolve(None, seller_profile)
        assert context.pricing == "$248"
        assert context.monthly_price == 248

    def test_dict_profile(self, resolver):
        """Profiles stored as camelCase dicts are accepted."""
        context = resolver.resolve(
            None,
            {
                "companyProfile": {"companyName": "Dict Co"},
                "branding": {"primaryColor": "#123456"},
                "products": [{"name": "Widget", "pricing": "$10"}],
            },
        )
        assert context.company_name == "Dict Co"
        assert context.primary_color == "#123456"
        assert context.pricing == "$10"

    def test_icp_by_id(self, resolver, seller_profile):
        """A matching ICP id selects that persona."""
        context = resolver.resolve(None, seller_profile, "icp-restaurants")
        assert context.icp.display_name == "Restaurants"

    def test_icp_unknown_id_uses_default(self, resolver, seller_profile):
        """An unknown ICP id falls back to the default persona."""
        context = resolver.resolve(None, seller_profile, "icp-missing")
        assert context.icp.display_name == "Auto shops"


class TestSelectIcp:
    """Tests for persona selection order."""

    def test_default_flag(self):
        """The persona flagged default wins without an id."""
        profile = SellerProfile(icps=[ICP(id="a"), ICP(id="b", is_default=True)])
        assert select_icp(profile).id == "b"

    def test_first_when_no_default(self):
        """Without a default flag the first persona is used."""
        profile = SellerProfile(icps=[ICP(id="a"), ICP(id="b")])
        assert select_icp(profile).id == "a"

    def test_legacy_single_icp(self):
        """Profiles with a single legacy persona still resolve."""
        profile = SellerProfile(icp=ICP(id="legacy"))
        assert select_icp(profile).id == "legacy"

    def test_empty(self):
        """No personas at all gives an empty persona."""
        icp = select_icp(SellerProfile())
        assert icp.id is None
        assert icp.pain_points == []


class TestPricing:
    """Tests for price parsing and catalog pricing."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("$99/mo", 99.0),
            ("$1,200", 1200.0),
            ("49.50", 49.5),
            ("$99/mo, 12-month minimum", 99.0),
            ("Free", None),
            (None, None),
            ("", None),
        ],
    )
    def test_parse_price(self, value, expected):
        """Numbers are pulled out of free-text prices."""
        assert parse_price(value) == expected

    def test_unparseable_primary_price_kept(self):
        """A text price on the primary product is shown as written."""
        products = [Product(name="A", pricing="Custom quote", is_primary=True)]
        assert derive_pricing(products) == ("Custom quote", None)

    def test_unparseable_prices_use_first_product(self):
        """Without a primary product the first product's text price is used."""
        products = [Product(name="A", pricing="Free trial"), Product(name="B", pricing="Ask us")]
        assert derive_pricing(products) == ("Free trial", None)

    def test_no_written_prices(self):
        """A catalog without any prices asks the prospect to get in touch."""
        products = [Product(name="A"), Product(name="B", pricing="")]
        assert derive_pricing(products) == (CONTACT_FOR_PRICING, None)

    @pytest.mark.parametrize("pricing", ["0", "$0", "$0.00"])
    def test_written_zero_primary(self, pricing):
        """A written zero on the primary product is not a price."""
        products = [Product(name="A", pricing=pricing, is_primary=True)]
        assert derive_pricing(products) == (CONTACT_FOR_PRICING, None)

    def test_no_products(self):
        """An empty catalog asks the prospect to get in touch."""
        assert derive_pricing([]) == (CONTACT_FOR_PRICING, None)

    def test_decimal_sum_formatting(self):
        """Sums with cents keep two decimals."""
        products = [Product(name="A", pricing="$9.99"), Product(name="B", pricing="$10")]
        assert derive_pricing(products)[0] == "$19.99"
