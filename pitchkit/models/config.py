"""Configuration models for document composition."""

import logging
import os
from typing import Optional

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

# Monthly pitches per plan tier; -1 means unlimited
PITCH_LIMITS: dict[str, int] = {
    "free": 5,
    "starter": 25,
    "growth": 100,
    "scale": -1,
    "enterprise": -1,
}


class ContentLimits(BaseModel):
    """Character budgets for fixed-size layout slots."""

    # Value proposition
    usp_item: int = 80
    benefit_item: int = 80
    differentiator: int = 150

    # Product catalog
    product_name: int = 30
    product_desc: int = 60

    # Slide copy
    slide_intro: int = 150
    strategy_tagline: int = 50
    solution_title: int = 25
    rollout_product_desc: int = 50
    phase_product_name: int = 20
    phase_product_desc: int = 40
    activated_product_name: int = 25

    # Trigger event
    trigger_subject: int = 40
    trigger_excerpt: int = 150

    def get(self, field: str) -> Optional[int]:
        """Look up a budget by field name."""
        return getattr(self, field, None) if field in type(self).model_fields else None


class ProjectionDefaults(BaseModel):
    """Conservative constants used when business metrics are missing."""

    monthly_visits: float = 200
    avg_ticket: float = 50
    repeat_rate: float = 25  # Percent
    growth_rate: float = 20  # Percent of monthly customers
    monthly_cost: float = 168  # Platform subscription, per month
    projection_months: int = 6


class DefaultProduct(BaseModel):
    """A product of the platform's own catalog."""

    name: str
    description: str
    icon: str


class PlatformProfile(BaseModel):
    """Seller context used when no seller profile is available."""

    company_name: str = "PathSynch"
    primary_color: str = "#3A6746"
    accent_color: str = "#D4A847"
    pricing: str = "$168"
    pricing_period: str = "per month"
    contact_email: str = "hello@pathsynch.com"
    footer_text: Optional[str] = None
    tone: str = "professional"
    products: list[DefaultProduct] = Field(
        default_factory=lambda: [
            DefaultProduct(name="PathConnect", description="Review capture & NFC cards", icon="⭐"),
            DefaultProduct(name="LocalSynch", description="Google optimization", icon="📍"),
            DefaultProduct(name="Forms", description="Surveys, Quizzes, NPS, Events", icon="📝"),
            DefaultProduct(name="QRSynch", description="QR & short-link campaigns", icon="🔗"),
            DefaultProduct(name="SynchMate", description="AI customer service chatbot", icon="🤖"),
            DefaultProduct(name="PathManager", description="Analytics dashboard", icon="📊"),
        ]
    )
    unique_selling_points: list[str] = Field(
        default_factory=lambda: [
            "Turn reviews into revenue",
            "Unified customer engagement platform",
            "NFC + QR technology for seamless experiences",
            "AI-powered automation",
        ]
    )
    key_benefits: list[str] = Field(
        default_factory=lambda: [
            "Increase Google reviews by 300%",
            "Boost local search visibility",
            "Automate customer follow-ups",
            "Track ROI in real-time",
        ]
    )
    pain_points: list[str] = Field(
        default_factory=lambda: [
            "Difficulty getting customer reviews",
            "Low Google visibility",
            "Manual customer follow-up processes",
            "No unified customer engagement system",
        ]
    )


class CompositionSettings(BaseModel):
    """Top-level settings for the composition pipeline."""

    content_limits: ContentLimits = Field(default_factory=ContentLimits)
    projection: ProjectionDefaults = Field(default_factory=ProjectionDefaults)
    platform: PlatformProfile = Field(default_factory=PlatformProfile)

    pitch_limits: dict[str, int] = Field(default_factory=lambda: dict(PITCH_LIMITS))

    truncation_suffix: str = "…"

    @classmethod
    def from_env(cls, prefix: str = "PITCHKIT_") -> "CompositionSettings":
        """Build settings, overriding projection and branding defaults from the environment.

        Recognized variables (with the default prefix):
            PITCHKIT_MONTHLY_COST, PITCHKIT_GROWTH_RATE, PITCHKIT_DEFAULT_VISITS,
            PITCHKIT_DEFAULT_TICKET, PITCHKIT_PRIMARY_COLOR, PITCHKIT_ACCENT_COLOR,
            PITCHKIT_CONTACT_EMAIL
        """
        projection_env = {
            "monthly_cost": f"{prefix}MONTHLY_COST",
            "growth_rate": f"{prefix}GROWTH_RATE",
            "monthly_visits": f"{prefix}DEFAULT_VISITS",
            "avg_ticket": f"{prefix}DEFAULT_TICKET",
        }
        platform_env = {
            "primary_color": f"{prefix}PRIMARY_COLOR",
            "accent_color": f"{prefix}ACCENT_COLOR",
            "contact_email": f"{prefix}CONTACT_EMAIL",
        }

        projection_overrides = {}
        for field, var in projection_env.items():
            raw = os.environ.get(var)
            if raw is None:
                continue
            try:
                projection_overrides[field] = float(raw)
            except ValueError:
                logger.warning(f"Ignoring non-numeric {var}={raw!r}")

        platform_overrides = {
            field: os.environ[var] for field, var in platform_env.items() if os.environ.get(var)
        }

        return cls(
            projection=ProjectionDefaults(**projection_overrides),
            platform=PlatformProfile(**platform_overrides),
        )
