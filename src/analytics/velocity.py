"""
Velocity classification.

FORMULA:
    hours_live = max((now - created_at) / 1h, 1)
    rate       = votes_count / hours_live

TIERS (strict):
    rate > 30 -> HOT
    rate > 15 -> RISING
    else      -> SLOW

created_at must be set and timezone-aware; classify_velocity() validates the
product before computing.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional

from src.data.data_models import Product

from .analytics_config import AnalyticsConfig, DEFAULT_CONFIG, VelocityConfig


class VelocityTier(Enum):
    """Upvote velocity tier."""
    HOT = "HOT"
    RISING = "RISING"
    SLOW = "SLOW"


@dataclass(frozen=True)
class VelocityReading:
    """Velocity of one product at a given instant."""
    product_id: str
    votes_count: int
    hours_live: float
    rate: float
    tier: VelocityTier

    def to_dict(self):
        return {
            "productId": self.product_id,
            "votesCount": self.votes_count,
            "hoursLive": round(self.hours_live, 2),
            "rate": round(self.rate, 2),
            "tier": self.tier.value,
        }


def hours_live(created_at: datetime, now: datetime, config: VelocityConfig = DEFAULT_CONFIG.velocity) -> float:
    """Hours since creation, floored at config.min_hours_live."""
    elapsed = (now - created_at).total_seconds() / 3600.0
    return max(elapsed, config.min_hours_live)


def classify_rate(rate: float, config: VelocityConfig = DEFAULT_CONFIG.velocity) -> VelocityTier:
    if rate > config.hot_rate:
        return VelocityTier.HOT
    if rate > config.rising_rate:
        return VelocityTier.RISING
    return VelocityTier.SLOW


def classify_velocity(
    product: Product,
    now: datetime,
    config: Optional[AnalyticsConfig] = None,
) -> VelocityReading:
    """
    Velocity reading for one product.

    Args:
        product: Product with an aware created_at.
        now: Current aware instant.
        config: Engine configuration. Defaults to DEFAULT_CONFIG.

    Raises:
        PreconditionViolation: If the product is malformed.
    """
    product.validate()
    cfg = (config or DEFAULT_CONFIG).velocity
    live = hours_live(product.created_at, now, cfg)
    rate = product.votes_count / live
    return VelocityReading(
        product_id=product.id,
        votes_count=product.votes_count,
        hours_live=live,
        rate=rate,
        tier=classify_rate(rate, cfg),
    )


def classify_all(
    products: Iterable[Product],
    now: datetime,
    config: Optional[AnalyticsConfig] = None,
) -> List[VelocityReading]:
    """Velocity readings in input order."""
    return [classify_velocity(p, now, config) for p in products]
