"""Fit free-form text into fixed-size layout slots."""

import logging
from typing import Any, Iterable, Optional

from pitchkit.models.config import ContentLimits

logger = logging.getLogger(__name__)

# A word-boundary cut is only taken when it keeps at least this share of the slot
WORD_BOUNDARY_RATIO = 0.7


class ContentFitter:
    """
    Truncates text to a character budget, preferring word boundaries.

    Input contract:
        - None, "" and other falsy values fit to "".
        - Truthy values that are not strings are returned unchanged.
        - Strings within the budget are returned unchanged.

    Longer strings are cut at the budget, then pulled back to the last space
    when that space sits at or after 70% of the budget. The suffix is appended
    to any cut string, so the result never exceeds ``limit + len(suffix)``.

    Usage:
        fitter = ContentFitter()
        fitter.fit("Turn every happy customer into a five-star review", 30)
        fitter.fit_field(product.description, "product_desc")
    """

    def __init__(
        self,
        limits: Optional[ContentLimits] = None,
        suffix: str = "…",
        default_limit: int = 100,
    ):
        self.limits = limits or ContentLimits()
        self.suffix = suffix
        self.default_limit = default_limit

    def fit(self, text: Any, limit: Optional[int] = None, suffix: Optional[str] = None) -> Any:
        """Fit text to ``limit`` characters plus suffix."""
        if not text:
            return ""
        if not isinstance(text, str):
            return text

        limit = self._normalize_limit(limit)
        suffix = self.suffix if suffix is None else suffix

        if len(text) <= limit:
            return text

        cut = text[:limit]
        last_space = cut.rfind(" ")
        if last_space >= 0 and last_space >= limit * WORD_BOUNDARY_RATIO:
            cut = cut[:last_space]

        return cut + suffix

    def fit_field(self, text: Any, field: str) -> Any:
        """Fit text using the budget named ``field`` in the content-limit table."""
        limit = self.limits.get(field)
        if limit is None:
            logger.warning(f"No content limit named '{field}', using {self.default_limit}")
        return self.fit(text, limit)

    def fit_many(
        self,
        items: Optional[Iterable[Any]],
        limit: Optional[int] = None,
        max_items: Optional[int] = None,
    ) -> list[Any]:
        """Fit each item of a list, keeping at most ``max_items`` items."""
        if not items:
            return []
        fitted = [self.fit(item, limit) for item in items]
        return fitted[:max_items] if max_items is not None else fitted

    def _normalize_limit(self, limit: Any) -> int:
        if limit is None or isinstance(limit, bool):
            return self.default_limit
        try:
            return max(int(limit), 0)
        except (TypeError, ValueError, OverflowError):
            logger.debug(f"Invalid content limit {limit!r}, using {self.default_limit}")
            return self.default_limit
