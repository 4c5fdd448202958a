"""Monthly pitch quota policy."""

import logging
from dataclasses import dataclass
from typing import Optional

from pitchkit.composition.collaborators import PitchStore
from pitchkit.models.config import PITCH_LIMITS

logger = logging.getLogger(__name__)

UNLIMITED = -1

DEFAULT_TIER = "free"


@dataclass
class QuotaStatus:
    """Outcome of a quota check."""

    allowed: bool
    tier: str
    limit: int
    used: int

    @property
    def unlimited(self) -> bool:
        return self.limit == UNLIMITED

    @property
    def remaining(self) -> Optional[int]:
        """Pitches left this month, or None when unlimited."""
        if self.unlimited:
            return None
        return max(self.limit - self.used, 0)


def check_quota(
    tier: Optional[str], used: int, limits: Optional[dict[str, int]] = None
) -> QuotaStatus:
    """Decide whether another pitch fits in the tier's monthly quota."""
    limits = limits or PITCH_LIMITS
    tier_key = (tier or DEFAULT_TIER).lower()
    if tier_key not in limits:
        logger.warning(f"Unknown plan tier '{tier}', applying the {DEFAULT_TIER} limit")
        tier_key = DEFAULT_TIER

    limit = limits[tier_key]
    used = max(used, 0)
    allowed = limit == UNLIMITED or used < limit
    return QuotaStatus(allowed=allowed, tier=tier_key, limit=limit, used=used)


class QuotaGate:
    """
    Checks a user's monthly pitch usage against their plan.

    Usage:
        gate = QuotaGate(store)
        status = gate.check("user-123", "starter")
        if not status.allowed:
            ...
    """

    def __init__(self, store: PitchStore, limits: Optional[dict[str, int]] = None):
        self.store = store
        self.limits = limits or PITCH_LIMITS

    def check(self, user_id: str, tier: Optional[str]) -> QuotaStatus:
        used = self.store.count_this_month(user_id)
        status = check_quota(tier, used, self.limits)
        if not status.allowed:
            logger.info(f"User {user_id} reached the {status.tier} limit of {status.limit} pitches")
        return status
