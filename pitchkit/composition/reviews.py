"""Review sentiment and theme summaries."""

import logging
from dataclasses import dataclass, field
from typing import Optional, Sequence

from pitchkit.composition.collaborators import ReviewAnalyzer
from pitchkit.composition.projection import round_half_up
from pitchkit.models.inputs import GoogleReview, PitchInputs, ReviewAnalytics, Sentiment

logger = logging.getLogger(__name__)

DEFAULT_SENTIMENT = Sentiment(positive=65, neutral=25, negative=10)

# (minimum rating, sentiment) checked top-down
RATING_SENTIMENT: list[tuple[float, Sentiment]] = [
    (4.5, Sentiment(positive=85, neutral=12, negative=3)),
    (4.0, Sentiment(positive=75, neutral=18, negative=7)),
    (3.5, Sentiment(positive=60, neutral=25, negative=15)),
]

ASSUMED_RATING = 4.0

DEFAULT_THEMES = ["Quality products", "Excellent service", "Great atmosphere", "Good value"]
DEFAULT_DIFFERENTIATORS = ["Unique offerings", "Personal touch", "Community focus"]

# Theme -> keywords that signal it
THEME_KEYWORDS: list[tuple[str, tuple[str, ...]]] = [
    ("Friendly and helpful staff", ("friendly", "helpful")),
    ("Quick service", ("quick", "fast")),
    ("Clean environment", ("clean", "neat")),
    ("Quality products/service", ("quality", "great")),
    ("Good value for money", ("price", "value")),
    ("Highly recommended by customers", ("recommend",)),
]

MAX_THEMES = 4


@dataclass
class ReviewSummary:
    """Sentiment and themes of a business's reviews."""

    sentiment: Sentiment = field(default_factory=lambda: DEFAULT_SENTIMENT)
    top_themes: list[str] = field(default_factory=lambda: list(DEFAULT_THEMES))
    staff_mentions: list[str] = field(default_factory=list)
    differentiators: list[str] = field(default_factory=lambda: list(DEFAULT_DIFFERENTIATORS))


def sentiment_for_rating(rating: Optional[float]) -> Sentiment:
    """Estimate sentiment from a star rating when no review text is available."""
    if not rating:
        rating = ASSUMED_RATING
    for minimum, sentiment in RATING_SENTIMENT:
        if rating >= minimum:
            return sentiment
    return DEFAULT_SENTIMENT


class KeywordReviewAnalyzer(ReviewAnalyzer):
    """
    Extracts themes from review text by keyword and sentiment from star ratings.

    A review can count toward several themes; at most four themes are kept.
    """

    def analyze(self, raw_reviews: Sequence[GoogleReview]) -> ReviewSummary:
        text = " ".join(review.text for review in raw_reviews).lower()
        themes = [
            theme for theme, keywords in THEME_KEYWORDS
            if any(keyword in text for keyword in keywords)
        ]

        summary = ReviewSummary()
        if themes:
            summary.top_themes = themes[:MAX_THEMES]

        sentiment = self._sentiment_from_ratings(raw_reviews)
        if sentiment is not None:
            summary.sentiment = sentiment

        logger.debug(f"Analyzed {len(raw_reviews)} reviews: {len(themes)} themes found")
        return summary

    @staticmethod
    def _sentiment_from_ratings(raw_reviews: Sequence[GoogleReview]) -> Optional[Sentiment]:
        ratings = [review.rating for review in raw_reviews if review.rating]
        if not ratings:
            return None
        count = len(ratings)
        positive = sum(1 for rating in ratings if rating >= 4)
        negative = sum(1 for rating in ratings if rating < 3)
        positive_pct = round_half_up(positive / count * 100)
        negative_pct = round_half_up(negative / count * 100)
        return Sentiment(
            positive=positive_pct,
            neutral=max(100 - positive_pct - negative_pct, 0),
            negative=negative_pct,
        )


def summarize_reviews(
    inputs: PitchInputs,
    review_analytics: Optional[ReviewAnalytics] = None,
    analyzer: Optional[ReviewAnalyzer] = None,
) -> ReviewSummary:
    """
    Build the review summary a document uses.

    Supplied analytics win; otherwise the analyzer runs over raw reviews when
    both are present; otherwise sentiment is estimated from the rating.
    """
    if review_analytics is not None and (review_analytics.sentiment or review_analytics.themes):
        return ReviewSummary(
            sentiment=review_analytics.sentiment or sentiment_for_rating(inputs.google_rating),
            top_themes=review_analytics.themes[:MAX_THEMES] or list(DEFAULT_THEMES),
            staff_mentions=list(review_analytics.staff_mentions),
        )

    if analyzer is not None and inputs.google_reviews:
        return analyzer.analyze(inputs.google_reviews)

    return ReviewSummary(sentiment=sentiment_for_rating(inputs.google_rating))
