"""Section skeletons for each document level."""

from dataclasses import dataclass, field
from typing import Optional

from pitchkit.models.document import DocumentLevel, SectionFlag, SectionId


class CompositionError(Exception):
    """Raised when document structure configuration is inconsistent."""

    def __init__(self, message: str, level: Optional[DocumentLevel] = None):
        super().__init__(message)
        self.level = level


class SkeletonError(CompositionError):
    """Raised when a skeleton declares an impossible optional slot."""


@dataclass(frozen=True)
class SectionSpec:
    """A section's identity and its inclusion rule within a level."""

    section_id: SectionId
    name: str
    flag: Optional[SectionFlag] = None  # None for mandatory sections
    after: Optional[SectionId] = None  # Skeleton section an optional section follows

    @property
    def mandatory(self) -> bool:
        return self.flag is None


@dataclass
class LevelSkeleton:
    """Ordered mandatory sections plus optional sections slotted between them."""

    level: DocumentLevel
    sections: list[SectionSpec]
    optional: list[SectionSpec] = field(default_factory=list)

    def __post_init__(self) -> None:
        skeleton_ids = [spec.section_id for spec in self.sections]
        for spec in self.sections:
            if not spec.mandatory:
                raise SkeletonError(
                    f"{spec.section_id.value} is gated by a flag but listed as mandatory",
                    self.level,
                )
        seen = set(skeleton_ids)
        for spec in self.optional:
            if spec.mandatory or spec.after is None:
                raise SkeletonError(
                    f"Optional section {spec.section_id.value} needs a flag and an anchor",
                    self.level,
                )
            if spec.after not in skeleton_ids:
                raise SkeletonError(
                    f"Optional section {spec.section_id.value} anchors on "
                    f"{spec.after.value}, which is not in the {self.level.value} skeleton",
                    self.level,
                )
            if spec.section_id in seen:
                raise SkeletonError(f"Duplicate section {spec.section_id.value}", self.level)
            seen.add(spec.section_id)
        if len(seen) != len(skeleton_ids) + len(self.optional):
            raise SkeletonError(f"Duplicate section in {self.level.value} skeleton", self.level)

    def candidates(self) -> list[SectionSpec]:
        """Every section in document order, before flags are applied."""
        ordered: list[SectionSpec] = []
        for spec in self.sections:
            ordered.append(spec)
            ordered.extend(opt for opt in self.optional if opt.after == spec.section_id)
        return ordered

    def get_spec(self, section_id: SectionId) -> Optional[SectionSpec]:
        for spec in self.candidates():
            if spec.section_id == section_id:
                return spec
        return None


# ============================================================================
# Level Skeletons
# ============================================================================


OUTREACH_SKELETON = LevelSkeleton(
    level=DocumentLevel.OUTREACH,
    sections=[
        SectionSpec(SectionId.OUTREACH_HEADER, "Outreach Sequences"),
        SectionSpec(SectionId.EMAIL_SEQUENCE, "Email Sequence"),
        SectionSpec(SectionId.LINKEDIN_SEQUENCE, "LinkedIn Sequence"),
        SectionSpec(SectionId.SALES_INTELLIGENCE, "Sales Intelligence"),
        SectionSpec(SectionId.PERSONALIZATION_NOTES, "Personalization Notes"),
    ],
)

ONE_PAGER_SKELETON = LevelSkeleton(
    level=DocumentLevel.ONE_PAGER,
    sections=[
        SectionSpec(SectionId.BRIEF_HEADER, "Header"),
        SectionSpec(SectionId.STATS_ROW, "At a Glance"),
        SectionSpec(SectionId.OPPORTUNITY, "The Opportunity"),
        SectionSpec(SectionId.INDUSTRY_CHALLENGES, "Industry Challenges"),
        SectionSpec(SectionId.PRODUCTS, "Our Products"),
        SectionSpec(SectionId.SOLUTIONS, "How We Help"),
        SectionSpec(SectionId.CALL_TO_ACTION, "Next Step"),
    ],
    optional=[
        SectionSpec(
            SectionId.TRIGGER_EVENT,
            "Why Now",
            flag=SectionFlag.TRIGGER_EVENT,
            after=SectionId.BRIEF_HEADER,
        ),
    ],
)

DECK_SKELETON = LevelSkeleton(
    level=DocumentLevel.DECK,
    sections=[
        SectionSpec(SectionId.TITLE, "Title"),
        SectionSpec(SectionId.WHAT_MAKES_SPECIAL, "What Makes Them Special"),
        SectionSpec(SectionId.GROWTH_CHALLENGES, "Growth Challenges"),
        SectionSpec(SectionId.SOLUTION, "The Solution"),
        SectionSpec(SectionId.PROJECTED_ROI, "Projected ROI"),
        SectionSpec(SectionId.PRODUCT_STRATEGY, "Product Strategy"),
        SectionSpec(SectionId.ROLLOUT, "90-Day Rollout"),
        SectionSpec(SectionId.INVESTMENT, "Investment"),
        SectionSpec(SectionId.NEXT_STEPS, "Next Steps"),
        SectionSpec(SectionId.CLOSING, "Thank You"),
    ],
    optional=[
        SectionSpec(
            SectionId.TRIGGER_EVENT,
            "Why Now",
            flag=SectionFlag.TRIGGER_EVENT,
            after=SectionId.TITLE,
        ),
        SectionSpec(
            SectionId.REVIEW_HEALTH,
            "Review Health",
            flag=SectionFlag.REVIEW_ANALYTICS,
            after=SectionId.WHAT_MAKES_SPECIAL,
        ),
        SectionSpec(
            SectionId.MARKET_INTELLIGENCE,
            "Market Intelligence",
            flag=SectionFlag.MARKET_DATA,
            after=SectionId.PROJECTED_ROI,
        ),
    ],
)

LEVEL_SKELETONS: dict[DocumentLevel, LevelSkeleton] = {
    DocumentLevel.OUTREACH: OUTREACH_SKELETON,
    DocumentLevel.ONE_PAGER: ONE_PAGER_SKELETON,
    DocumentLevel.DECK: DECK_SKELETON,
}


def get_skeleton(level: DocumentLevel) -> LevelSkeleton:
    """Get the skeleton for a document level."""
    return LEVEL_SKELETONS[level]


def get_section_name(level: DocumentLevel, section_id: SectionId) -> str:
    """Display name of a section within a level, falling back to its id."""
    spec = LEVEL_SKELETONS[level].get_spec(section_id)
    return spec.name if spec else section_id.value.replace("_", " ").title()
