"""Plan the ordered, numbered section list of a document."""

import logging
from typing import Optional, Sequence

from pitchkit.composition.skeletons import (
    LEVEL_SKELETONS,
    CompositionError,
    LevelSkeleton,
)
from pitchkit.models.document import DocumentLevel, RenderedSection, SectionFlags

logger = logging.getLogger(__name__)


class SectionNumberingError(CompositionError):
    """Raised when section positions are not exactly 1..total."""

    def __init__(self, message: str, positions: Optional[list[int]] = None):
        super().__init__(message)
        self.positions = positions or []


def validate_numbering(sections: Sequence[RenderedSection]) -> None:
    """Check positions run 1..total without gaps and every total agrees."""
    positions = [section.position for section in sections]
    if not sections:
        return

    totals = {section.total for section in sections}
    if len(totals) != 1:
        raise SectionNumberingError(f"Inconsistent totals: {sorted(totals)}", positions)

    total = totals.pop()
    if total != len(sections):
        raise SectionNumberingError(
            f"Total {total} does not match {len(sections)} sections", positions
        )
    if positions != list(range(1, total + 1)):
        raise SectionNumberingError(f"Positions are not 1..{total}: {positions}", positions)


class SectionComposer:
    """
    Turns a level and its data-availability flags into numbered sections.

    Optional sections sit at fixed slots in the level's skeleton; those whose
    flag is off are dropped, and positions are assigned from the remaining
    order. Numbering is therefore the same for every caller given the same
    level and flags.

    Usage:
        composer = SectionComposer()
        sections = composer.plan(DocumentLevel.DECK, SectionFlags(has_market_data=True))
        for section in sections:
            print(section.label, section.id.value)
    """

    def __init__(self, skeletons: Optional[dict[DocumentLevel, LevelSkeleton]] = None):
        self.skeletons = skeletons or LEVEL_SKELETONS

    def plan(self, level: DocumentLevel, flags: Optional[SectionFlags] = None) -> list[RenderedSection]:
        """Plan the sections for a level. Each section's data is left empty."""
        flags = flags or SectionFlags()
        skeleton = self.skeletons.get(level)
        if skeleton is None:
            raise CompositionError(f"No skeleton configured for level {level.value}", level)

        included = [
            spec for spec in skeleton.candidates()
            if spec.mandatory or flags.is_set(spec.flag)
        ]
        total = len(included)
        sections = [
            RenderedSection(id=spec.section_id, position=index, total=total)
            for index, spec in enumerate(included, start=1)
        ]

        validate_numbering(sections)
        logger.debug(
            f"Planned {total} sections for {level.value}: "
            f"{', '.join(section.id.value for section in sections)}"
        )
        return sections
