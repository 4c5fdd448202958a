"""Industry benchmark defaults and sales intelligence catalog."""

import logging
from dataclasses import dataclass, field
from typing import Optional

from pitchkit.composition.collaborators import IndustryCatalog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndustryDefaults:
    """Benchmark metrics for a NAICS-coded industry."""

    naics_code: str
    title: str
    category: str
    subcategory: str
    avg_transaction: float
    monthly_customers: float
    market_growth_rate: float  # Annual market growth, percent
    growth_rate: Optional[float] = None  # New-customer growth, percent

    @property
    def label(self) -> str:
        return self.subcategory


@dataclass(frozen=True)
class SalesIntel:
    """Sales intelligence for an industry or sub-industry."""

    decision_makers: list[str]
    pain_points: list[str]
    primary_kpis: list[str]
    top_channels: list[str]
    prospecting_tips: list[str] = field(default_factory=list)
    best_months: list[str] = field(default_factory=list)


# ============================================================================
# Benchmark Defaults (NAICS)
# ============================================================================

# Share of monthly customers gained as new customers, percent, by category.
# Categories not listed use the flat projection default.
NEW_CUSTOMER_GROWTH_RATES: dict[str, float] = {
    "Food & Beverage": 15,
    "Automotive": 20,
    "Health & Wellness": 20,
    "Home Services": 15,
    "Professional Services": 10,
    "Salon & Beauty": 25,
    "Retail": 15,
}


def _defaults(
    code: str,
    title: str,
    category: str,
    subcategory: str,
    avg_transaction: float,
    monthly_customers: float,
    market_growth_rate: float,
) -> tuple[str, IndustryDefaults]:
    return code, IndustryDefaults(
        naics_code=code,
        title=title,
        category=category,
        subcategory=subcategory,
        avg_transaction=avg_transaction,
        monthly_customers=monthly_customers,
        market_growth_rate=market_growth_rate,
        growth_rate=NEW_CUSTOMER_GROWTH_RATES.get(category),
    )


INDUSTRY_DEFAULTS: dict[str, IndustryDefaults] = dict(
    [
        # Food & Beverage
        _defaults("722511", "Full-Service Restaurants", "Food & Beverage", "Full Service Restaurant", 55, 3000, 3.5),
        _defaults("722513", "Limited-Service Restaurants", "Food & Beverage", "Fast Casual", 15, 8000, 2.5),
        _defaults("722515", "Snack and Nonalcoholic Beverage Bars", "Food & Beverage", "Coffee & Cafe", 8, 4500, 4.0),
        _defaults("722410", "Drinking Places (Alcoholic Beverages)", "Food & Beverage", "Bar & Nightlife", 35, 2000, 2.0),
        # Automotive
        _defaults("811111", "General Automotive Repair", "Automotive", "Auto Repair", 450, 200, 2.0),
        _defaults("811121", "Automotive Body, Paint, and Interior Repair", "Automotive", "Body Shop", 2500, 40, 1.5),
        _defaults("441110", "New Car Dealers", "Automotive", "Car Dealership", 35000, 80, 2.0),
        # Health & Wellness
        _defaults("713940", "Fitness and Recreational Sports Centers", "Health & Wellness", "Gym & Fitness", 50, 500, 5.0),
        _defaults("621111", "Offices of Physicians", "Health & Wellness", "Medical Practice", 250, 400, 3.0),
        _defaults("621210", "Offices of Dentists", "Health & Wellness", "Dental Practice", 350, 300, 2.5),
        _defaults("621310", "Offices of Chiropractors", "Health & Wellness", "Chiropractic", 75, 200, 3.5),
        _defaults("812199", "Other Personal Care Services", "Health & Wellness", "Spa & Massage", 120, 250, 4.0),
        # Home Services
        _defaults("238220", "Plumbing, Heating, and Air-Conditioning Contractors", "Home Services", "Plumbing & HVAC", 450, 120, 4.0),
        _defaults("238210", "Electrical Contractors and Other Wiring Installation", "Home Services", "Electrical", 350, 100, 3.5),
        _defaults("238160", "Roofing Contractors", "Home Services", "Roofing", 10000, 20, 3.0),
        _defaults("561730", "Landscaping Services", "Home Services", "Landscaping", 250, 80, 4.5),
        # Professional Services
        _defaults("541110", "Offices of Lawyers", "Professional Services", "Legal", 3500, 25, 1.5),
        _defaults("541211", "Offices of Certified Public Accountants", "Professional Services", "Accounting", 800, 50, 2.0),
        _defaults("531210", "Offices of Real Estate Agents and Brokers", "Professional Services", "Real Estate", 12000, 8, 2.5),
        _defaults("524210", "Insurance Agencies and Brokerages", "Professional Services", "Insurance", 1500, 40, 2.0),
        # Salon & Beauty
        _defaults("812111", "Barber Shops", "Salon & Beauty", "Hair Salon", 35, 400, 2.5),
        _defaults("812112", "Beauty Salons", "Salon & Beauty", "Beauty Salon", 85, 300, 3.0),
        _defaults("812113", "Nail Salons", "Salon & Beauty", "Nail Salon", 45, 500, 3.5),
        # Retail
        _defaults("452319", "All Other General Merchandise Stores", "Retail", "General Merchandise", 45, 2000, 2.5),
        _defaults("448140", "Family Clothing Stores", "Retail", "Clothing", 75, 800, 1.5),
        _defaults("443142", "Electronics Stores", "Retail", "Electronics", 250, 400, 2.0),
    ]
)


def lookup_defaults(
    industry: Optional[str] = None,
    sub_industry: Optional[str] = None,
    naics_code: Optional[str] = None,
) -> Optional[IndustryDefaults]:
    """
    Find benchmark defaults for a business.

    Matching order: exact NAICS code, exact sub-industry display name, then a
    case-insensitive partial match of the sub-industry or industry against
    display subcategories. Returns None when nothing matches.
    """
    if naics_code and naics_code in INDUSTRY_DEFAULTS:
        return INDUSTRY_DEFAULTS[naics_code]

    for candidate in (sub_industry, industry):
        if not candidate:
            continue
        for defaults in INDUSTRY_DEFAULTS.values():
            if defaults.subcategory == candidate:
                return defaults

    for candidate in (sub_industry, industry):
        if not candidate:
            continue
        needle = candidate.lower()
        for defaults in INDUSTRY_DEFAULTS.values():
            subcategory = defaults.subcategory.lower()
            if needle in subcategory or subcategory in needle:
                return defaults

    logger.debug(f"No industry defaults for industry={industry!r} sub_industry={sub_industry!r}")
    return None


# ============================================================================
# Sales Intelligence
# ============================================================================


GENERIC_INTEL = SalesIntel(
    decision_makers=["Owner", "Manager", "Marketing Lead"],
    pain_points=[
        "Customer acquisition costs",
        "Competition in local market",
        "Online reputation management",
        "Operational efficiency",
    ],
    primary_kpis=["Revenue growth", "Customer count", "Customer retention", "Online reviews"],
    top_channels=["Google Business Profile", "Social media", "Referrals", "Local advertising"],
)

# Used for a known industry that has no "default" entry
INDUSTRY_FALLBACK_INTEL = SalesIntel(
    decision_makers=["Owner", "Manager"],
    pain_points=["Customer acquisition", "Competition", "Reputation management"],
    primary_kpis=["Revenue", "Customers", "Reviews"],
    top_channels=["Google Business Profile", "Social media", "Referrals"],
)

DEFAULT_ENTRY = "default"

INDUSTRY_INTELLIGENCE: dict[str, dict[str, SalesIntel]] = {
    "Food & Beverage": {
        DEFAULT_ENTRY: SalesIntel(
            decision_makers=["Owner", "General Manager", "Marketing Manager"],
            pain_points=[
                "Inconsistent foot traffic and seasonal fluctuations",
                "Difficulty standing out in competitive local market",
                "Managing online reputation across review platforms",
                "High customer acquisition costs",
            ],
            primary_kpis=["Daily covers/transactions", "Average ticket size", "Google rating", "Table turnover rate"],
            top_channels=["Google Business Profile", "Instagram", "Yelp", "Local SEO", "Food delivery apps"],
        ),
        "Full Service Restaurant": SalesIntel(
            decision_makers=["Owner", "General Manager", "Marketing Director"],
            pain_points=[
                "Inconsistent reservations and walk-in traffic",
                "Managing online reputation across multiple platforms",
                "Competing with delivery apps and ghost kitchens",
                "Staff retention and training costs",
            ],
            primary_kpis=["Daily covers", "Average check size", "Table turnover", "Google/Yelp rating", "Repeat customer rate"],
            top_channels=["Google Business Profile", "OpenTable/Resy", "Instagram", "Yelp", "Local food blogs"],
            prospecting_tips=[
                "Call between 2pm and 4pm, after lunch service",
                "Avoid Friday and Saturday evenings",
            ],
            best_months=["January", "February", "September"],
        ),
        "Fast Casual": SalesIntel(
            decision_makers=["Owner/Franchisee", "District Manager", "Marketing Manager"],
            pain_points=[
                "High competition from chains and delivery",
                "Speed of service vs. quality balance",
                "Labor costs and scheduling efficiency",
                "Mobile ordering adoption",
            ],
            primary_kpis=["Transactions per hour", "Average ticket", "Speed of service", "Online order percentage"],
            top_channels=["Google Business Profile", "Delivery apps (DoorDash, UberEats)", "Social media", "Loyalty apps"],
        ),
        "Coffee & Cafe": SalesIntel(
            decision_makers=["Owner", "Manager", "Marketing Lead"],
            pain_points=[
                "Morning rush capacity constraints",
                "Competing with chains like Starbucks",
                "Building consistent afternoon traffic",
                "Differentiating product offerings",
            ],
            primary_kpis=["Transactions per day", "Average ticket", "Loyalty program usage", "Peak hour efficiency"],
            top_channels=["Instagram", "Google Business Profile", "Mobile ordering", "Local partnerships"],
        ),
    },
    "Automotive": {
        DEFAULT_ENTRY: SalesIntel(
            decision_makers=["Owner", "Service Manager", "Shop Foreman"],
            pain_points=[
                "Customer trust and transparency",
                "Competition from dealerships",
                "Technician shortage",
                "Parts cost and availability",
            ],
            primary_kpis=["Cars per day", "Average repair order", "Labor rate", "Google reviews", "Customer return rate"],
            top_channels=["Google Business Profile", "Google Ads", "Referrals", "Direct mail"],
        ),
        "Auto Repair": SalesIntel(
            decision_makers=["Owner", "Service Manager", "Service Advisor"],
            pain_points=[
                "Building trust with customers (perception of upselling)",
                "Competition from dealerships and chains",
                "Technician recruitment and retention",
                "Managing online reputation",
            ],
            primary_kpis=["Average repair order", "Car count", "Labor rate", "Parts margin", "Google rating"],
            top_channels=["Google Business Profile", "Google Ads", "Referrals", "Direct mail/postcards"],
            prospecting_tips=[
                "Visit mid-morning once the first wave of drop-offs is done",
                "Lead with review volume compared to nearby dealerships",
            ],
        ),
        "Body Shop": SalesIntel(
            decision_makers=["Owner", "General Manager", "Estimator"],
            pain_points=[
                "Insurance DRP relationships",
                "Cycle time pressure from insurers",
                "Parts availability and delays",
                "Competition for non-DRP work",
            ],
            primary_kpis=["Cycle time", "CSI scores", "Supplement capture", "Revenue per RO"],
            top_channels=["Insurance DRP programs", "Google Business Profile", "Towing company relationships", "Referrals"],
        ),
    },
    "Salon & Beauty": {
        DEFAULT_ENTRY: SalesIntel(
            decision_makers=["Owner", "Salon Manager", "Front Desk Lead"],
            pain_points=[
                "No-shows and last-minute cancellations",
                "Stylist turnover taking clients with them",
                "Filling weekday appointment gaps",
                "Standing out on Instagram and Google",
            ],
            primary_kpis=["Rebooking rate", "Average service ticket", "Chair utilization", "Google rating"],
            top_channels=["Instagram", "Google Business Profile", "Booking apps", "Referrals"],
        ),
    },
    "Health & Wellness": {
        DEFAULT_ENTRY: SalesIntel(
            decision_makers=["Owner", "Practice Manager", "Marketing Coordinator"],
            pain_points=[
                "Patient and member acquisition costs",
                "Retention after the first visit",
                "Managing reviews in a regulated field",
                "Competition from larger networks and chains",
            ],
            primary_kpis=["New patients/members per month", "Retention rate", "Average visit value", "Google rating"],
            top_channels=["Google Business Profile", "Referrals", "Insurance directories", "Social media"],
        ),
    },
    "Professional Services": {},
}


class StaticIndustryCatalog(IndustryCatalog):
    """
    Industry catalog backed by the built-in intelligence table.

    Lookup order: sub-industry entry, then the industry's default entry, then
    generic intel. An industry present in the table without a default entry
    falls back to a shorter industry-level profile.
    """

    def __init__(self, intelligence: Optional[dict[str, dict[str, SalesIntel]]] = None):
        self.intelligence = INDUSTRY_INTELLIGENCE if intelligence is None else intelligence

    def lookup(self, industry: Optional[str], sub_industry: Optional[str] = None) -> SalesIntel:
        industry_data = self.intelligence.get(industry or "")
        if industry_data is None:
            return GENERIC_INTEL

        if sub_industry and sub_industry in industry_data:
            return industry_data[sub_industry]

        return industry_data.get(DEFAULT_ENTRY, INDUSTRY_FALLBACK_INTEL)
