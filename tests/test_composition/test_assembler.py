"""Tests for the document assembler."""

import itertools

import pytest

from pitchkit.composition.assembler import DocumentAssembler, render_sections
from pitchkit.composition.collaborators import IndustryCatalog, SectionRenderer
from pitchkit.composition.composer import SectionComposer
from pitchkit.composition.industry import SalesIntel
from pitchkit.composition.reviews import KeywordReviewAnalyzer
from pitchkit.models.config import CompositionSettings, ContentLimits
from pitchkit.models.document import DocumentLevel, SectionFlags, SectionId
from pitchkit.models.inputs import (
    GoogleReview,
    Insight,
    KeyMetric,
    MarketData,
    PitchInputs,
    PitchMetrics,
    ReviewAnalytics,
    TriggerEvent,
)
from pitchkit.models.seller import (
    Branding,
    CompanyProfile,
    Product,
    SellerProfile,
    ValueProposition,
)


@pytest.fixture
def assembler():
    return DocumentAssembler()


@pytest.fixture
def inputs():
    """An auto repair shop with no financial metrics of its own."""
    return PitchInputs(
        business_name="Joe's Garage",
        contact_name="Joe Romano",
        address="12 Main St, Springfield",
        industry="Automotive",
        sub_industry="Auto Repair",
        google_rating=4.7,
        number_of_reviews=212,
        stated_problem="getting more first-time customers",
    )


@pytest.fixture
def trigger_event():
    return TriggerEvent(
        headline="Joe's Garage opens a second location downtown",
        summary=(
            "The family-owned shop is expanding to a new 6,000 square foot facility on Elm Street, "
            "adding eight service bays and extended weekend hours to meet growing demand from "
            "commuters and fleet customers across the county."
        ),
        key_points=["Eight new bays", "Weekend hours", "Fleet services", "Hiring technicians"],
        source="Springfield Business Journal",
    )


@pytest.fixture
def market_data():
    return MarketData(
        opportunity_score=78,
        opportunity_level="High",
        saturation="low",
        competitor_count=14,
        growth_rate=3.2,
        recommendations=["Target fleet accounts"],
    )


@pytest.fixture
def review_analytics():
    return ReviewAnalytics(
        themes=["Honest pricing", "Fast turnaround"],
        analytics={"volume": {"total": 212}, "quality": {"average": 4.7}, "response": {"rate": 0.4}},
        pitch_metrics=PitchMetrics(
            health_score=82,
            health_label="Strong",
            key_metrics=[KeyMetric(label="Response rate", value="40%", status="warning")],
            critical_issues=[Insight(title="Slow replies", detail="Half of reviews unanswered")],
            opportunities=[Insight(title="Ask for reviews"), Insight(title="Reply faster"), Insight(title="Photos")],
            strengths=[Insight(title="High rating")],
            recommendation="Respond to every review within 48 hours",
        ),
    )


@pytest.fixture
def seller_profile():
    return SellerProfile(
        company_profile=CompanyProfile(company_name="Brightline Marketing"),
        branding=Branding(primary_color="#222222", booking_url="https://cal.example.com/brightline"),
        products=[
            Product(
                name="Review Booster Professional Edition With Extras",
                description="Automated review requests sent by text and email after every completed job",
                pricing="$99",
                is_primary=True,
            ),
            Product(name="Local SEO", description="Map pack optimization", pricing="$149"),
        ],
        value_proposition=ValueProposition(
            unique_selling_points=["Results in 30 days"],
            key_benefits=["More reviews"],
            differentiator="Built only for local service businesses",
        ),
    )


class TestDeckAssembly:
    """Tests for deck documents."""

    @pytest.mark.parametrize("trigger,reviews,market", list(itertools.product([False, True], repeat=3)))
    def test_numbering_for_every_flag_combination(
        self, assembler, inputs, trigger_event, market_data, review_analytics, trigger, reviews, market
    ):
        """Assembled decks number sections 1..total for every combination of optional data."""
        record = inputs.model_copy(update={"trigger_event": trigger_event if trigger else None})
        document = assembler.assemble(
            DocumentLevel.DECK,
            record,
            market_data=market_data if market else None,
            review_analytics=review_analytics if reviews else None,
        )

        assert [s.position for s in document.sections] == list(range(1, document.total + 1))
        assert all(s.total == document.total for s in document.sections)
        assert document.total == 10 + sum([trigger, reviews, market])
        assert document.flags == SectionFlags(
            has_trigger_event=trigger, has_review_analytics=reviews, has_market_data=market
        )

    def test_every_section_has_title(self, assembler, inputs, trigger_event, market_data, review_analytics):
        """Each section's data carries a display title."""
        record = inputs.model_copy(update={"trigger_event": trigger_event})
        document = assembler.assemble(
            DocumentLevel.DECK, record, market_data=market_data, review_analytics=review_analytics
        )
        assert all(section.data.get("title") for section in document.sections)
        assert document.get_section(SectionId.CLOSING).data["title"] == "Let's Unlock Joe's Garage's Potential"
        assert document.get_section(SectionId.GROWTH_CHALLENGES).data["title"] == "Growth Challenges"

    def test_projection_uses_industry_defaults(self, assembler, inputs):
        """Missing metrics fall back to the matched industry's benchmarks."""
        document = assembler.assemble(DocumentLevel.DECK, inputs)
        roi = document.get_section(SectionId.PROJECTED_ROI).data

        assert document.projection.monthly_customers == 200
        assert document.projection.avg_ticket == 450
        assert roi["new_customers"] == 40
        assert roi["monthly_incremental_revenue"] == 18000
        assert roi["six_month_revenue"] == 108000
        assert roi["net_profit"] == 108000 - 1008

    def test_default_seller_copy(self, assembler, inputs):
        """Without a seller profile the platform's own copy is used."""
        document = assembler.assemble(DocumentLevel.DECK, inputs)

        assert document.seller.is_default
        assert document.get_section(SectionId.SOLUTION).data["heading"] == "What It Does"
        title = document.get_section(SectionId.TITLE).data
        assert title["subtitle"] == "Growth Partnership Proposal from PathSynch"
        assert title["primary_color"] == "#3A6746"

    def test_seller_profile_copy(self, assembler, inputs, seller_profile):
        """A seller profile switches to seller-specific copy and branding."""
        document = assembler.assemble(DocumentLevel.DECK, inputs, seller_profile=seller_profile)

        solution = document.get_section(SectionId.SOLUTION).data
        assert solution["heading"] == "Unique Value"
        assert solution["intro"] == "Built only for local service businesses"
        assert document.get_section(SectionId.TITLE).data["primary_color"] == "#222222"
        assert document.get_section(SectionId.INVESTMENT).data["pricing"] == "$248"
        # 40 * 450 * 6 = 108000 against 248 * 6 = 1488
        assert document.projection.six_month_cost == 1488

    def test_product_text_fitted(self, assembler, inputs, seller_profile):
        """Product names and descriptions are fitted to their slots."""
        document = assembler.assemble(DocumentLevel.DECK, inputs, seller_profile=seller_profile)
        products = document.get_section(SectionId.SOLUTION).data["products"]

        assert len(products[0]["name"]) <= 30 + 1
        assert products[0]["name"].endswith("…")
        assert len(products[0]["description"]) <= 60 + 1
        assert products[1]["name"] == "Local SEO"

    def test_custom_content_limits(self, inputs, seller_profile):
        """Content limits come from the settings."""
        settings = CompositionSettings(content_limits=ContentLimits(product_name=6))
        document = DocumentAssembler(settings).assemble(DocumentLevel.DECK, inputs, seller_profile=seller_profile)
        products = document.get_section(SectionId.SOLUTION).data["products"]
        assert products[1]["name"] == "Local…"

    def test_review_health(self, assembler, inputs, review_analytics):
        """Review health carries the derived pitch metrics."""
        document = assembler.assemble(DocumentLevel.DECK, inputs, review_analytics=review_analytics)
        health = document.get_section(SectionId.REVIEW_HEALTH)

        assert health.position == 3
        assert health.data["health_score"] == 82
        assert len(health.data["opportunities"]) == 2
        assert health.data["volume"] == {"total": 212}

    def test_analytics_without_metrics_disables_review_health(self, assembler, inputs, review_analytics):
        """Analytics lacking pitch metrics do not enable the review health section."""
        partial = review_analytics.model_copy(update={"pitch_metrics": None})
        document = assembler.assemble(DocumentLevel.DECK, inputs, review_analytics=partial)
        assert SectionId.REVIEW_HEALTH not in document.section_ids()

    def test_market_data_without_score(self, assembler, inputs):
        """Market data without an opportunity score does not enable market intelligence."""
        document = assembler.assemble(DocumentLevel.DECK, inputs, market_data=MarketData(competitor_count=3))
        assert SectionId.MARKET_INTELLIGENCE not in document.section_ids()

    def test_market_data_from_inputs(self, assembler, inputs, market_data):
        """Market data attached to the record is used when none is passed."""
        record = inputs.model_copy(update={"market_data": market_data})
        document = assembler.assemble(DocumentLevel.DECK, record)
        market = document.get_section(SectionId.MARKET_INTELLIGENCE)

        assert market.position == 6
        assert market.data["saturation"] == "Low"
        assert market.data["opportunity_score"] == 78

    def test_trigger_slide(self, assembler, inputs, trigger_event):
        """The deck's trigger slide keeps the full summary and key points."""
        record = inputs.model_copy(update={"trigger_event": trigger_event})
        section = assembler.assemble(DocumentLevel.DECK, record).get_section(SectionId.TRIGGER_EVENT)

        assert section.position == 2
        assert section.data["summary"] == trigger_event.summary
        assert len(section.data["key_points"]) == 4

    def test_empty_trigger_still_composes(self, assembler, inputs):
        """An empty trigger event yields a sparse but valid section."""
        record = inputs.model_copy(update={"trigger_event": TriggerEvent()})
        section = assembler.assemble(DocumentLevel.DECK, record).get_section(SectionId.TRIGGER_EVENT)

        assert section.data["headline"] == "Recent News"
        assert section.data["summary"] == ""

    def test_dirty_record_composes(self, assembler):
        """A stored record with null trigger fields and formatted numbers still composes."""
        record = PitchInputs.model_validate(
            {
                "businessName": "Joe's Garage",
                "googleRating": "",
                "numberOfReviews": "1,234",
                "triggerEvent": {"headline": None, "summary": None, "keyPoints": None},
                "marketData": {"opportunityScore": 72, "industry": {"monthlyCustomers": "1,200"}},
            }
        )
        document = assembler.assemble(DocumentLevel.DECK, record)
        trigger = document.get_section(SectionId.TRIGGER_EVENT)

        assert trigger.position == 2
        assert trigger.data["key_points"] == []
        assert SectionId.MARKET_INTELLIGENCE in document.section_ids()
        assert document.projection.monthly_customers == 1200

    def test_booking_cta(self, assembler, inputs, seller_profile):
        """A booking link becomes the closing call to action."""
        document = assembler.assemble(DocumentLevel.DECK, inputs, seller_profile=seller_profile)
        cta = document.get_section(SectionId.CLOSING).data["cta"]
        assert cta == {"url": "https://cal.example.com/brightline", "text": "Book a Demo", "type": "book_demo"}

    def test_email_cta(self, assembler, inputs):
        """Without a booking link the call to action is a demo-request email."""
        cta = assembler.assemble(DocumentLevel.DECK, inputs).get_section(SectionId.CLOSING).data["cta"]
        assert cta["type"] == "contact"
        assert cta["url"].startswith("mailto:hello@pathsynch.com?subject=Demo%20Request")

    def test_hidden_branding(self, assembler, inputs, seller_profile):
        """Hidden branding drops the seller's name from the closing."""
        document = assembler.assemble(
            DocumentLevel.DECK, inputs, seller_profile=seller_profile, request_options={"hideBranding": True}
        )
        closing = document.get_section(SectionId.CLOSING).data
        assert closing["company_name"] is None
        assert closing["powered_by"] is None

    def test_deterministic(self, assembler, inputs, trigger_event, market_data, review_analytics):
        """The same inputs compose the same document."""
        record = inputs.model_copy(update={"trigger_event": trigger_event})
        kwargs = {"market_data": market_data, "review_analytics": review_analytics}
        first = assembler.assemble(DocumentLevel.DECK, record, **kwargs)
        second = DocumentAssembler().assemble(DocumentLevel.DECK, record, **kwargs)
        assert first.model_dump_json() == second.model_dump_json()


class TestOnePagerAssembly:
    """Tests for one-pager documents."""

    def test_sections(self, assembler, inputs):
        """The one-pager has seven sections without a trigger."""
        document = assembler.assemble(DocumentLevel.ONE_PAGER, inputs)
        assert document.total == 7
        assert document.sections[0].data["title"] == "Joe's Garage - PathSynch Opportunity Brief"

    def test_trigger_excerpt_fitted(self, assembler, inputs, trigger_event):
        """The one-pager trims the trigger to an excerpt and two key points."""
        record = inputs.model_copy(update={"trigger_event": trigger_event})
        document = assembler.assemble(DocumentLevel.ONE_PAGER, record)
        section = document.get_section(SectionId.TRIGGER_EVENT)

        assert document.total == 8
        assert section.label == "2 / 8"
        assert len(section.data["summary"]) <= 150 + 1
        assert section.data["summary"].endswith("…")
        assert section.data["key_points"] == ["Eight new bays", "Weekend hours"]

    def test_review_and_market_do_not_add_sections(self, assembler, inputs, market_data, review_analytics):
        """Only the trigger is optional on the one-pager."""
        document = assembler.assemble(
            DocumentLevel.ONE_PAGER, inputs, market_data=market_data, review_analytics=review_analytics
        )
        assert document.total == 7

    def test_stats_row(self, assembler, inputs):
        """The stats row shows rating, customers, revenue and ROI."""
        stats = assembler.assemble(DocumentLevel.ONE_PAGER, inputs).get_section(SectionId.STATS_ROW).data["stats"]
        assert [stat["value"] for stat in stats] == ["4.7★", "+40", "$18,000", "10614%"]


class TestOutreachAssembly:
    """Tests for outreach documents."""

    def test_fixed_sections(self, assembler, inputs, trigger_event):
        """Outreach always has five sections."""
        record = inputs.model_copy(update={"trigger_event": trigger_event})
        assert assembler.assemble(DocumentLevel.OUTREACH, record).total == 5
        assert assembler.assemble(DocumentLevel.OUTREACH, inputs).total == 5

    def test_trigger_changes_first_email(self, assembler, inputs, trigger_event):
        """A trigger event rewrites the opening email around the news."""
        record = inputs.model_copy(update={"trigger_event": trigger_event})
        emails = assembler.assemble(DocumentLevel.OUTREACH, record).get_section(SectionId.EMAIL_SEQUENCE).data["emails"]

        assert emails[0]["label"] == "Initial Outreach (Trigger-Based)"
        assert emails[0]["subject"].startswith("Congrats on Joe's Garage opens a")
        assert emails[0]["subject"].endswith("... - quick idea")

    def test_plain_first_email(self, assembler, inputs):
        """Without a trigger the opener leads with the business's KPI."""
        document = assembler.assemble(DocumentLevel.OUTREACH, inputs)
        email = document.get_section(SectionId.EMAIL_SEQUENCE).data["emails"][0]

        assert email["subject"] == "Quick idea for Joe's Garage's Average repair order"
        assert document.get_section(SectionId.EMAIL_SEQUENCE).data["first_name"] == "Joe"

    def test_review_themes_from_analyzer(self, inputs):
        """A review analyzer feeds themes into the personalization notes."""
        record = inputs.model_copy(
            update={"google_reviews": [GoogleReview(text="Friendly and honest", rating=5)]}
        )
        assembler = DocumentAssembler(review_analyzer=KeywordReviewAnalyzer())
        notes = assembler.assemble(DocumentLevel.OUTREACH, record).get_section(SectionId.PERSONALIZATION_NOTES)
        assert notes.data["review_highlights"] == ["Friendly and helpful staff"]


class TestAssemblerCollaborators:
    """Tests for levels and injected collaborators."""

    @pytest.mark.parametrize("level", [3, "3", "deck", "DECK", DocumentLevel.DECK])
    def test_level_forms(self, assembler, inputs, level):
        """Levels may be given by enum, name or number."""
        assert assembler.assemble(level, inputs).level == DocumentLevel.DECK

    def test_unknown_level(self, assembler, inputs):
        """Unknown levels are rejected."""
        with pytest.raises(ValueError):
            assembler.assemble("brochure", inputs)

    def test_custom_catalog(self, inputs):
        """An injected industry catalog supplies the sales intelligence."""

        class FixedCatalog(IndustryCatalog):
            def lookup(self, industry, sub_industry=None):
                return SalesIntel(
                    decision_makers=["Fleet Manager"],
                    pain_points=["Downtime"],
                    primary_kpis=["Uptime"],
                    top_channels=["Trade shows"],
                )

        assembler = DocumentAssembler(industry_catalog=FixedCatalog())
        intel = assembler.assemble(DocumentLevel.OUTREACH, inputs).get_section(SectionId.SALES_INTELLIGENCE)
        assert intel.data["decision_makers"] == ["Fleet Manager"]

    def test_custom_composer(self, inputs):
        """An injected section composer is used for planning."""
        calls = []

        class RecordingComposer(SectionComposer):
            def plan(self, level, flags=None):
                calls.append((level, flags))
                return super().plan(level, flags)

        DocumentAssembler(composer=RecordingComposer()).assemble(DocumentLevel.ONE_PAGER, inputs)
        assert calls == [(DocumentLevel.ONE_PAGER, SectionFlags())]

    def test_render_sections(self, inputs):
        """Renderers receive every section in order, with its label."""

        class LabelRenderer(SectionRenderer):
            def render(self, section):
                return f"[{section.label}] {section.data['title']}"

        document = DocumentAssembler().assemble(DocumentLevel.OUTREACH, inputs)
        rendered = render_sections(document, LabelRenderer())

        assert len(rendered) == 5
        assert rendered[0] == "[1 / 5] Outreach Sequence: Joe's Garage"
        assert rendered[-1] == "[5 / 5] Personalization Notes"
