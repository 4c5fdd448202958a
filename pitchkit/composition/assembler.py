"""Assemble composed documents for each pitch level."""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union
from urllib.parse import quote

from pitchkit.composition.collaborators import IndustryCatalog, ReviewAnalyzer, SectionRenderer
from pitchkit.composition.composer import SectionComposer
from pitchkit.composition.fitter import ContentFitter
from pitchkit.composition.industry import (
    IndustryDefaults,
    SalesIntel,
    StaticIndustryCatalog,
    lookup_defaults,
)
from pitchkit.composition.projection import FinancialProjectionCalculator
from pitchkit.composition.reviews import ReviewSummary, summarize_reviews
from pitchkit.composition.seller_context import SellerContextResolver
from pitchkit.composition.skeletons import get_section_name
from pitchkit.models.config import CompositionSettings
from pitchkit.models.document import (
    ComposedDocument,
    DocumentLevel,
    FinancialProjection,
    SectionFlags,
    SectionId,
)
from pitchkit.models.inputs import MarketData, PitchInputs, ReviewAnalytics
from pitchkit.models.seller import BrandingOptions, SellerContext, SellerProfile

logger = logging.getLogger(__name__)

DEFAULT_INDUSTRY = "local business"
DEFAULT_PROBLEM = "increasing customer engagement"
ASSUMED_RATING = 4.0
SOLUTION_ICONS = ["🎯", "📍", "🔄", "📊"]


@dataclass
class AssemblyContext:
    """Everything resolved once per document, shared by the section builders."""

    level: DocumentLevel
    inputs: PitchInputs
    seller: SellerContext
    projection: FinancialProjection
    reviews: ReviewSummary
    intel: SalesIntel
    flags: SectionFlags
    market_data: Optional[MarketData] = None
    review_analytics: Optional[ReviewAnalytics] = None
    industry_defaults: Optional[IndustryDefaults] = None

    @property
    def business_name(self) -> str:
        return self.inputs.display_name

    @property
    def industry(self) -> str:
        return self.inputs.industry or DEFAULT_INDUSTRY

    @property
    def rating(self) -> float:
        return self.inputs.google_rating or ASSUMED_RATING

    @property
    def review_count(self) -> int:
        return self.inputs.number_of_reviews or 0

    @property
    def stated_problem(self) -> str:
        return self.inputs.stated_problem or DEFAULT_PROBLEM

    @property
    def cta(self) -> dict[str, str]:
        """Call-to-action target: the booking link, else a demo-request email."""
        if self.seller.booking_url:
            return {"url": self.seller.booking_url, "text": "Book a Demo", "type": "book_demo"}
        subject = quote(f"Demo Request: {self.business_name}")
        return {
            "url": f"mailto:{self.seller.contact_email}?subject={subject}",
            "text": "Schedule Demo",
            "type": "contact",
        }


class DocumentAssembler:
    """
    Builds a ComposedDocument for any pitch level.

    The assembler resolves the seller context and financial projection once,
    derives which optional data is present, asks the SectionComposer for the
    numbered section list and fills each section with the data its renderer
    needs. Free text is fitted to the content-limit table on the way in. No
    markup is produced here.

    Usage:
        assembler = DocumentAssembler()
        document = assembler.assemble(DocumentLevel.DECK, inputs, seller_profile=profile)
        for section in document.sections:
            renderer.render(section)
    """

    def __init__(
        self,
        settings: Optional[CompositionSettings] = None,
        industry_catalog: Optional[IndustryCatalog] = None,
        review_analyzer: Optional[ReviewAnalyzer] = None,
        composer: Optional[SectionComposer] = None,
    ):
        self.settings = settings or CompositionSettings()
        self.industry_catalog = industry_catalog or StaticIndustryCatalog()
        self.review_analyzer = review_analyzer
        self.composer = composer or SectionComposer()

        self.fitter = ContentFitter(self.settings.content_limits, suffix=self.settings.truncation_suffix)
        self.calculator = FinancialProjectionCalculator(self.settings.projection)
        self.resolver = SellerContextResolver(self.settings.platform)

        self._builders: dict[SectionId, Callable[[AssemblyContext], dict[str, Any]]] = {
            # Shared
            SectionId.TRIGGER_EVENT: self._build_trigger_event,
            # Outreach
            SectionId.OUTREACH_HEADER: self._build_outreach_header,
            SectionId.EMAIL_SEQUENCE: self._build_email_sequence,
            SectionId.LINKEDIN_SEQUENCE: self._build_linkedin_sequence,
            SectionId.SALES_INTELLIGENCE: self._build_sales_intelligence,
            SectionId.PERSONALIZATION_NOTES: self._build_personalization_notes,
            # One-pager
            SectionId.BRIEF_HEADER: self._build_brief_header,
            SectionId.STATS_ROW: self._build_stats_row,
            SectionId.OPPORTUNITY: self._build_opportunity,
            SectionId.INDUSTRY_CHALLENGES: self._build_industry_challenges,
            SectionId.PRODUCTS: self._build_products,
            SectionId.SOLUTIONS: self._build_solutions,
            SectionId.CALL_TO_ACTION: self._build_call_to_action,
            # Deck
            SectionId.TITLE: self._build_title,
            SectionId.WHAT_MAKES_SPECIAL: self._build_what_makes_special,
            SectionId.REVIEW_HEALTH: self._build_review_health,
            SectionId.GROWTH_CHALLENGES: self._build_growth_challenges,
            SectionId.SOLUTION: self._build_solution,
            SectionId.PROJECTED_ROI: self._build_projected_roi,
            SectionId.MARKET_INTELLIGENCE: self._build_market_intelligence,
            SectionId.PRODUCT_STRATEGY: self._build_product_strategy,
            SectionId.ROLLOUT: self._build_rollout,
            SectionId.INVESTMENT: self._build_investment,
            SectionId.NEXT_STEPS: self._build_next_steps,
            SectionId.CLOSING: self._build_closing,
        }

    def assemble(
        self,
        level: Union[DocumentLevel, int, str],
        inputs: PitchInputs,
        seller_profile: Union[SellerProfile, dict, None] = None,
        market_data: Optional[MarketData] = None,
        review_analytics: Optional[ReviewAnalytics] = None,
        request_options: Union[BrandingOptions, dict, None] = None,
        icp_id: Optional[str] = None,
    ) -> ComposedDocument:
        """
        Assemble a document for one business.

        Args:
            level: Document level, by enum, name or number
            inputs: The business record
            seller_profile: Stored seller profile, if any
            market_data: Market report; defaults to the one attached to inputs
            review_analytics: Review analytics with derived pitch metrics
            request_options: Per-request branding overrides
            icp_id: Persona to target, when the profile has several

        Returns:
            The composed document with numbered sections
        """
        level = DocumentLevel.parse(level)
        context = self._build_context(
            level, inputs, seller_profile, market_data, review_analytics, request_options, icp_id
        )

        logger.info(
            f"Assembling {level.value} for {context.business_name} "
            f"(trigger={context.flags.has_trigger_event}, "
            f"reviews={context.flags.has_review_analytics}, "
            f"market={context.flags.has_market_data})"
        )

        sections = []
        for planned in self.composer.plan(level, context.flags):
            data = self._builders[planned.id](context)
            data.setdefault("title", get_section_name(level, planned.id))
            sections.append(planned.model_copy(update={"data": data}))
            logger.debug(f"Section {planned.label}: {planned.id.value}")

        return ComposedDocument(
            level=level,
            business_name=context.business_name,
            sections=sections,
            seller=context.seller,
            projection=context.projection,
            flags=context.flags,
        )

    # ========================================================================
    # Context
    # ========================================================================

    def _build_context(
        self,
        level: DocumentLevel,
        inputs: PitchInputs,
        seller_profile: Union[SellerProfile, dict, None],
        market_data: Optional[MarketData],
        review_analytics: Optional[ReviewAnalytics],
        request_options: Union[BrandingOptions, dict, None],
        icp_id: Optional[str],
    ) -> AssemblyContext:
        market_data = market_data if market_data is not None else inputs.market_data
        if market_data is not inputs.market_data:
            inputs = inputs.model_copy(update={"market_data": market_data})

        seller = self.resolver.resolve(request_options, seller_profile, icp_id)
        industry_defaults = lookup_defaults(inputs.industry, inputs.sub_industry, inputs.naics_code)
        projection = self.calculator.compute(inputs, industry_defaults, seller.monthly_price)

        return AssemblyContext(
            level=level,
            inputs=inputs,
            seller=seller,
            projection=projection,
            reviews=summarize_reviews(inputs, review_analytics, self.review_analyzer),
            intel=self.industry_catalog.lookup(inputs.industry, inputs.sub_industry),
            flags=self.derive_flags(inputs, market_data, review_analytics),
            market_data=market_data,
            review_analytics=review_analytics,
            industry_defaults=industry_defaults,
        )

    @staticmethod
    def derive_flags(
        inputs: PitchInputs,
        market_data: Optional[MarketData] = None,
        review_analytics: Optional[ReviewAnalytics] = None,
    ) -> SectionFlags:
        """Work out which optional sections have the data they need."""
        return SectionFlags(
            has_trigger_event=inputs.trigger_event is not None,
            has_review_analytics=(
                review_analytics is not None
                and review_analytics.analytics is not None
                and review_analytics.pitch_metrics is not None
            ),
            has_market_data=market_data is not None and market_data.opportunity_score is not None,
        )

    # ========================================================================
    # Shared Builders
    # ========================================================================

    def _build_trigger_event(self, ctx: AssemblyContext) -> dict[str, Any]:
        event = ctx.inputs.trigger_event
        summary = event.summary
        key_points = list(event.key_points)
        if ctx.level == DocumentLevel.ONE_PAGER:
            summary = self.fitter.fit_field(summary, "trigger_excerpt")
            key_points = key_points[:2]

        return {
            "title": "Why We're Reaching Out Now",
            "headline": event.headline or "Recent News",
            "summary": summary,
            "key_points": key_points,
            "source": event.source,
        }

    def _seller_copy(self, ctx: AssemblyContext) -> dict[str, Any]:
        """Fitted value proposition lists used by several sections."""
        seller = ctx.seller
        return {
            "usps": self.fitter.fit_many(seller.unique_selling_points, self.settings.content_limits.usp_item),
            "benefits": self.fitter.fit_many(seller.key_benefits, self.settings.content_limits.benefit_item),
            "differentiator": self.fitter.fit_field(seller.differentiator, "differentiator"),
        }

    def _product_cards(self, ctx: AssemblyContext, max_items: int = 6) -> list[dict[str, Any]]:
        return [
            {
                "icon": product.icon or "📦",
                "name": self.fitter.fit_field(product.name, "product_name"),
                "description": self.fitter.fit_field(product.description, "product_desc"),
                "price": product.price or "Included",
            }
            for product in ctx.seller.products[:max_items]
        ]

    def _decision_makers(self, ctx: AssemblyContext) -> list[str]:
        return ctx.seller.icp.decision_makers or ctx.intel.decision_makers

    def _footer(self, ctx: AssemblyContext) -> dict[str, Any]:
        seller = ctx.seller
        return {
            "footer_text": seller.footer_text,
            "powered_by": None if seller.hide_branding else seller.company_name,
        }

    # ========================================================================
    # Outreach Builders
    # ========================================================================

    def _build_outreach_header(self, ctx: AssemblyContext) -> dict[str, Any]:
        return {
            "title": f"Outreach Sequence: {ctx.business_name}",
            "business_name": ctx.business_name,
            "contact_name": ctx.inputs.contact_name,
            "industry": ctx.industry,
            "sub_industry": ctx.inputs.sub_industry,
            "company_name": ctx.seller.company_name,
            "primary_color": ctx.seller.primary_color,
            "accent_color": ctx.seller.accent_color,
        }

    def _build_email_sequence(self, ctx: AssemblyContext) -> dict[str, Any]:
        intel = ctx.intel
        top_kpi = intel.primary_kpis[0] if intel.primary_kpis else "customer growth"
        pain_point = intel.pain_points[0] if intel.pain_points else "growing customer base"
        top_channel = intel.top_channels[0] if intel.top_channels else "Google Business Profile"
        projection = ctx.projection
        event = ctx.inputs.trigger_event

        if event is not None:
            headline = self.fitter.fit(event.headline, self.settings.content_limits.trigger_subject, "...")
            opener = {
                "label": "Initial Outreach (Trigger-Based)",
                "subject": f"Congrats on {headline or 'the news'} - quick idea",
                "hook": self.fitter.fit_field(event.summary, "trigger_excerpt"),
                "trigger_headline": event.headline or "your recent announcement",
            }
        else:
            opener = {
                "label": "Initial Outreach",
                "subject": f"Quick idea for {ctx.business_name}'s {top_kpi}",
                "hook": f"{ctx.rating}-star rating across {ctx.review_count} reviews",
            }

        return {
            "title": "Email Sequence",
            "subtitle": "3 emails over 8 days",
            "first_name": ctx.inputs.first_name,
            "sender_company": ctx.seller.company_name,
            "emails": [
                {
                    "day": 1,
                    **opener,
                    "pain_point": pain_point,
                    "proof_points": [
                        f"+{projection.growth_rate:g}% more foot traffic from improved {top_channel} visibility",
                        f"+{projection.repeat_rate:g}% of new customers return",
                        f"{projection.roi}%+ ROI in the first 6 months",
                    ],
                },
                {
                    "day": 4,
                    "label": "Value-Add Follow-up",
                    "subject": f"Re: Quick idea for {ctx.business_name}'s {top_kpi}",
                    "proof_points": [
                        f"Your current rating ({ctx.rating}★) puts you ahead of many competitors",
                        f"Improving your {top_channel} presence could add "
                        f"~{projection.new_customers} new customers/month",
                        f"Roughly ${projection.monthly_incremental_revenue:,.0f}/month in additional revenue",
                    ],
                },
                {
                    "day": 8,
                    "label": "Final Touch",
                    "subject": f"One more thought on {ctx.business_name}",
                    "stated_problem": ctx.stated_problem,
                },
            ],
        }

    def _build_linkedin_sequence(self, ctx: AssemblyContext) -> dict[str, Any]:
        return {
            "title": "LinkedIn Sequence",
            "subtitle": "Connection + 2 follow-ups",
            "first_name": ctx.inputs.first_name,
            "messages": [
                {"day": 2, "label": "Connection Request", "angle": f"reputation in the {ctx.industry} space"},
                {"day": 5, "label": "Post-Connection Message", "angle": f"{ctx.rating}-star rating"},
                {"day": 9, "label": "Insight Share", "angle": f"{ctx.industry} client success story"},
            ],
        }

    def _build_sales_intelligence(self, ctx: AssemblyContext) -> dict[str, Any]:
        intel = ctx.intel
        segment = ctx.industry + (f" - {ctx.inputs.sub_industry}" if ctx.inputs.sub_industry else "")
        return {
            "title": f"Sales Intelligence: {segment}",
            "decision_makers": list(intel.decision_makers),
            "pain_points": intel.pain_points[:3],
            "kpis": intel.primary_kpis[:4],
            "channels": intel.top_channels[:4],
            "prospecting_tips": list(intel.prospecting_tips),
        }

    def _build_personalization_notes(self, ctx: AssemblyContext) -> dict[str, Any]:
        return {
            "title": "Personalization Notes",
            "review_highlights": list(ctx.reviews.top_themes),
            "stated_problem": ctx.inputs.stated_problem or "Focus on visibility and customer retention",
            "roi_hook": f"~${ctx.projection.six_month_revenue:,.0f} potential in 6 months",
            "staff_mentions": list(ctx.reviews.staff_mentions),
            **self._footer(ctx),
        }

    # ========================================================================
    # One-Pager Builders
    # ========================================================================

    def _build_brief_header(self, ctx: AssemblyContext) -> dict[str, Any]:
        return {
            "title": f"{ctx.business_name} - {ctx.seller.company_name} Opportunity Brief",
            "business_name": ctx.business_name,
            "industry": ctx.industry,
            "address": ctx.inputs.address,
            "company_name": ctx.seller.company_name,
            "logo_url": ctx.seller.logo_url,
            "primary_color": ctx.seller.primary_color,
            "accent_color": ctx.seller.accent_color,
        }

    def _build_stats_row(self, ctx: AssemblyContext) -> dict[str, Any]:
        projection = ctx.projection
        return {
            "stats": [
                {"label": "Google Rating", "value": f"{ctx.rating}★"},
                {"label": "New Customers/Mo", "value": f"+{projection.new_customers}"},
                {"label": "Monthly Revenue", "value": f"${projection.monthly_incremental_revenue:,.0f}"},
                {"label": "Projected ROI", "value": f"{projection.roi}%"},
            ],
        }

    def _build_opportunity(self, ctx: AssemblyContext) -> dict[str, Any]:
        rating = ctx.rating
        positive = ctx.reviews.sentiment.positive
        projection = ctx.projection

        if rating >= 4.0:
            rating_note = f"Your {rating}-star rating shows customers love you"
        elif rating >= 3.0:
            rating_note = f"Your {rating}-star rating has room for improvement - we can help"
        else:
            rating_note = f"Your {rating}-star rating presents a major growth opportunity"

        if positive >= 60:
            sentiment_note = f"{positive}% positive sentiment shows strong customer satisfaction"
        else:
            sentiment_note = f"{positive}% positive sentiment - opportunity to improve customer experience"

        return {
            "highlights": [
                rating_note,
                sentiment_note,
                f"Potential to add {projection.new_customers}+ new customers/month",
                f"Estimated ${projection.monthly_incremental_revenue:,.0f}/month from new customers",
            ],
            "themes_heading": "What Customers Love" if rating >= 3.5 else "Customer Feedback Themes",
            "themes": ctx.reviews.top_themes[:4],
            "staff_mentions": ctx.reviews.staff_mentions[:2],
        }

    def _build_industry_challenges(self, ctx: AssemblyContext) -> dict[str, Any]:
        return {
            "title": f"Common {ctx.industry} Challenges We Solve",
            "pain_points": ctx.intel.pain_points[:4],
            "kpis": ctx.intel.primary_kpis[:3],
        }

    def _build_products(self, ctx: AssemblyContext) -> dict[str, Any]:
        heading = (
            f"The {ctx.seller.company_name} Platform"
            if ctx.seller.is_default
            else f"What {ctx.seller.company_name} Offers"
        )
        return {"title": heading, "products": self._product_cards(ctx)}

    def _build_solutions(self, ctx: AssemblyContext) -> dict[str, Any]:
        """Solution cards from USPs and benefits, else from products."""
        seller = ctx.seller
        limits = self.settings.content_limits

        if seller.unique_selling_points or seller.key_benefits:
            combined = (seller.unique_selling_points[:2] + seller.key_benefits[:2])[:4]
            cards = [
                {
                    "icon": SOLUTION_ICONS[index] if index < len(SOLUTION_ICONS) else "✨",
                    "title": self.fitter.fit(" ".join(item.split()[:4]), limits.solution_title),
                    "description": self.fitter.fit(item, limits.usp_item),
                }
                for index, item in enumerate(combined)
            ]
        else:
            cards = [
                {
                    "icon": product.icon or SOLUTION_ICONS[index],
                    "title": self.fitter.fit_field(product.name, "product_name"),
                    "description": self.fitter.fit_field(product.description, "product_desc"),
                }
                for index, product in enumerate(seller.products[:4])
            ]
        return {"solutions": cards}

    def _build_call_to_action(self, ctx: AssemblyContext) -> dict[str, Any]:
        presenter = "we" if ctx.seller.hide_branding else ctx.seller.company_name
        return {
            "title": f"Ready to Grow {ctx.business_name}?",
            "message": f"See how {presenter} can help you {ctx.stated_problem}",
            "cta": ctx.cta,
            "contact_email": ctx.seller.contact_email,
            **self._footer(ctx),
        }

    # ========================================================================
    # Deck Builders
    # ========================================================================

    def _build_title(self, ctx: AssemblyContext) -> dict[str, Any]:
        return {
            "title": ctx.business_name,
            "subtitle": f"Growth Partnership Proposal from {ctx.seller.company_name}",
            "industry": ctx.industry,
            "rating": ctx.rating,
            "review_count": ctx.review_count,
            "logo_url": ctx.seller.logo_url,
            "primary_color": ctx.seller.primary_color,
            "accent_color": ctx.seller.accent_color,
        }

    def _build_what_makes_special(self, ctx: AssemblyContext) -> dict[str, Any]:
        sentiment = ctx.reviews.sentiment
        return {
            "title": f"What Makes {ctx.business_name} Special",
            "sentiment": {
                "positive": sentiment.positive,
                "neutral": sentiment.neutral,
                "negative": sentiment.negative,
            },
            "themes": ctx.reviews.top_themes[:4],
            "staff_mentions": ctx.reviews.staff_mentions[:3],
            "differentiators": ctx.reviews.differentiators[:3],
        }

    def _build_review_health(self, ctx: AssemblyContext) -> dict[str, Any]:
        metrics = ctx.review_analytics.pitch_metrics
        analytics = ctx.review_analytics.analytics or {}
        return {
            "health_score": metrics.health_score,
            "health_label": metrics.health_label,
            "key_metrics": [metric.model_dump() for metric in metrics.key_metrics],
            "critical_issues": [issue.model_dump() for issue in metrics.critical_issues],
            "opportunities": [item.model_dump() for item in metrics.opportunities[:2]],
            "strengths": [item.model_dump() for item in metrics.strengths[:2]],
            "recommendation": metrics.recommendation,
            "volume": analytics.get("volume"),
            "quality": analytics.get("quality"),
            "response": analytics.get("response"),
        }

    def _build_growth_challenges(self, ctx: AssemblyContext) -> dict[str, Any]:
        return {
            "stated_problem": ctx.stated_problem,
            "pain_points": (ctx.seller.icp.pain_points or ctx.intel.pain_points)[:4],
            "kpis": ctx.intel.primary_kpis[:4],
        }

    def _build_solution(self, ctx: AssemblyContext) -> dict[str, Any]:
        seller = ctx.seller
        copy = self._seller_copy(ctx)
        if copy["differentiator"]:
            intro = copy["differentiator"]
        elif seller.is_default:
            intro = "Integrated platform to deepen local customer engagement and drive repeat revenue"
        else:
            intro = f"How {seller.company_name} helps businesses like yours succeed"

        return {
            "intro": self.fitter.fit_field(intro, "slide_intro"),
            "heading": "What It Does" if seller.is_default else "Unique Value",
            "usps": copy["usps"][:5],
            "products": self._product_cards(ctx, max_items=4),
            "benefits": copy["benefits"][:5],
        }

    def _build_projected_roi(self, ctx: AssemblyContext) -> dict[str, Any]:
        projection = ctx.projection
        return {
            "title": f"{ctx.business_name}: Projected ROI",
            "intro": f"Conservative 6-month scenario with {ctx.seller.company_name} integration",
            "baseline": {
                "monthly_customers": projection.monthly_customers,
                "avg_ticket": projection.avg_ticket,
                "review_count": ctx.review_count,
            },
            "new_customers": projection.new_customers,
            "growth_rate": projection.growth_rate,
            "repeat_rate": projection.repeat_rate,
            "monthly_incremental_revenue": projection.monthly_incremental_revenue,
            "six_month_revenue": projection.six_month_revenue,
            "six_month_cost": projection.six_month_cost,
            "net_profit": projection.six_month_revenue - projection.six_month_cost,
            "roi": projection.roi,
            "disclaimer": "Only counts revenue from new customers.",
        }

    def _build_market_intelligence(self, ctx: AssemblyContext) -> dict[str, Any]:
        market = ctx.market_data
        demographics = market.demographics.model_dump() if market.demographics else None
        saturation = market.saturation.capitalize() if market.saturation else "Medium"
        return {
            "opportunity_score": market.opportunity_score,
            "opportunity_level": market.opportunity_level,
            "saturation": saturation,
            "competitor_count": market.competitor_count,
            "market_size": market.market_size,
            "growth_rate": market.growth_rate,
            "demographics": demographics,
            "seasonality": dict(market.seasonality),
            "recommendations": list(market.recommendations),
            "best_months": list(ctx.intel.best_months),
        }

    def _build_product_strategy(self, ctx: AssemblyContext) -> dict[str, Any]:
        products = ctx.seller.products
        copy = self._seller_copy(ctx)

        def product_column(index: int, fallback_name: str, fallback_desc: str, points: list[str]):
            product = products[index] if len(products) > index else None
            return {
                "name": self.fitter.fit_field(product.name, "product_name") if product else fallback_name,
                "description": (
                    self.fitter.fit_field(product.description, "product_desc") if product else ""
                ) or fallback_desc,
                "points": points,
            }

        outcome_tagline = self.fitter.fit_field(ctx.seller.differentiator, "strategy_tagline")
        return {
            "columns": [
                product_column(0, "Core Solution", "Primary offering",
                               copy["usps"][0:2] or ["Expert implementation"]),
                product_column(1, "Growth Tools", "Expansion capabilities",
                               copy["usps"][2:4] or ["Feature expansion"]),
                {
                    "name": "Results",
                    "description": outcome_tagline or "Measurable outcomes",
                    "points": copy["benefits"][:3] or ["Measurable improvements", "ROI tracking"],
                },
            ],
        }

    def _build_rollout(self, ctx: AssemblyContext) -> dict[str, Any]:
        products = ctx.seller.products
        limits = self.settings.content_limits
        first = products[0] if products else None

        phase_one = [
            f"{self.fitter.fit_field(first.name, 'product_name') if first else 'Primary solution'} setup",
            self.fitter.fit(first.description, limits.rollout_product_desc) if first and first.description
            else "Initial implementation",
        ]
        phase_two = [
            f"{self.fitter.fit(p.name, limits.phase_product_name)}: "
            f"{self.fitter.fit(p.description, limits.phase_product_desc)}"
            for p in products[1:3]
        ] or ["Additional features enabled"]
        if len(products) > 3:
            phase_three = [
                f"{self.fitter.fit(p.name, limits.activated_product_name)} activated" for p in products[3:5]
            ]
        else:
            phase_three = ["Advanced features & integrations"]

        return {
            "intro": "Phased implementation for maximum impact with minimal disruption",
            "phases": [
                {"label": "Phase 1: Days 1-30", "items": phase_one},
                {"label": "Phase 2: Days 31-60", "items": phase_two},
                {"label": "Phase 3: Days 61-90", "items": phase_three},
            ],
        }

    def _build_investment(self, ctx: AssemblyContext) -> dict[str, Any]:
        seller = ctx.seller
        return {
            "pricing": seller.pricing,
            "pricing_period": seller.pricing_period,
            "benefits": self._seller_copy(ctx)["benefits"][:5],
            "line_items": self._product_cards(ctx),
            "six_month_cost": ctx.projection.six_month_cost,
        }

    def _build_next_steps(self, ctx: AssemblyContext) -> dict[str, Any]:
        seller = ctx.seller
        limits = self.settings.content_limits
        demo_products = ", ".join(
            self.fitter.fit(p.name, limits.phase_product_name) for p in seller.products[:2]
        )
        decision_makers = self._decision_makers(ctx)
        first_contact = decision_makers[0] if decision_makers else "Owner"
        second_contact = decision_makers[1] if len(decision_makers) > 1 else "Manager"

        return {
            "title": "Recommended Next Steps",
            "immediate": [
                {"step": f"Schedule {seller.company_name} demo", "detail": f"See {demo_products} in action"},
                {
                    "step": "Review pricing options",
                    "detail": f"Explore custom {'bundle' if seller.is_default else 'solution'} for {ctx.industry}",
                },
                {"step": "Connect with decision maker", "detail": f"Typical: {first_contact} or {second_contact}"},
            ],
            "short_term": [
                {"step": "Pilot period", "detail": "Start with initial implementation (30 days)"},
                {"step": "Staff training", "detail": "Onboarding and best practices"},
                {"step": "Top channels to leverage", "detail": ", ".join(ctx.intel.top_channels[:2])},
            ],
        }

    def _build_closing(self, ctx: AssemblyContext) -> dict[str, Any]:
        seller = ctx.seller
        return {
            "title": f"Let's Unlock {ctx.business_name}'s Potential",
            "cta": ctx.cta,
            "company_name": None if seller.hide_branding else seller.company_name,
            "contact_email": None if seller.hide_branding else seller.contact_email,
            **self._footer(ctx),
        }


def render_sections(document: ComposedDocument, renderer: SectionRenderer) -> list[str]:
    """Render every section of a document in order."""
    return [renderer.render(section) for section in document.sections]
