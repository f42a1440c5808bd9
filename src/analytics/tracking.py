"""
Live standing of a tracked launch.

Locates one launch (by slug) in the current ranked snapshot, reports its
velocity and its gap to the product above, and summarizes the snapshot
history the persistence layer keeps for it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from src.data.data_models import HuntSnapshot, Product, validate_products

from .analytics_config import AnalyticsConfig, DEFAULT_CONFIG
from .competitive_gap import GapEntry, analyze_gaps
from .velocity import VelocityReading, classify_velocity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchStanding:
    """Where a tracked launch stands right now."""
    product: Product
    velocity: VelocityReading
    gap: GapEntry

    @property
    def rank(self) -> int:
        return self.product.rank

    @property
    def ahead_name(self) -> Optional[str]:
        return self.gap.ahead_name

    @property
    def votes_to_next_rank(self) -> Optional[int]:
        return self.gap.votes_to_overtake

    def to_dict(self):
        return {
            "slug": self.product.slug,
            "name": self.product.name,
            "rank": self.rank,
            "upvotes": self.product.votes_count,
            "comments": self.product.comments_count,
            "velocity": self.velocity.to_dict(),
            "gap": self.gap.to_dict(),
            "aheadName": self.ahead_name,
            "votesToNextRank": self.votes_to_next_rank,
        }


@dataclass(frozen=True)
class StandingTrend:
    """Movement of a tracked launch over its snapshot history."""
    rank_change: int        # positive = climbed
    upvote_gain: int
    hours_covered: float
    average_velocity: float
    direction: str          # "climbing", "falling" or "holding"
    snapshots: int


def locate_standing(
    products: Sequence[Product],
    slug: str,
    now: datetime,
    config: Optional[AnalyticsConfig] = None,
) -> Optional[LaunchStanding]:
    """
    Standing of `slug` in a rank-ordered snapshot.

    Returns:
        LaunchStanding, or None when the launch is not in the snapshot.

    Raises:
        PreconditionViolation: If any product is malformed.
    """
    ordered = validate_products(products)
    for index, product in enumerate(ordered):
        if product.slug != slug:
            continue
        # Gap only needs the product and the one directly above it
        pair = ordered[max(index - 1, 0):index + 1]
        gap = analyze_gaps(pair, config)[-1]
        return LaunchStanding(
            product=product,
            velocity=classify_velocity(product, now, config),
            gap=gap,
        )
    logger.info("Tracked launch %s not found in snapshot of %d products", slug, len(ordered))
    return None


def take_snapshot(standing: LaunchStanding, now: datetime) -> HuntSnapshot:
    """Point-in-time record of a standing, for the persistence layer."""
    return HuntSnapshot(
        captured_at=now,
        rank=standing.rank,
        upvotes=standing.product.votes_count,
        comments=standing.product.comments_count,
        velocity=standing.velocity.rate,
    )


def summarize_history(
    snapshots: Sequence[HuntSnapshot],
    now: datetime,
    config: Optional[AnalyticsConfig] = None,
) -> Optional[StandingTrend]:
    """
    Trend over the snapshots of the last `history_days` days.

    Returns:
        StandingTrend, or None with too few snapshots in the window.
    """
    cfg = (config or DEFAULT_CONFIG).tracking
    cutoff = now - timedelta(days=cfg.history_days)
    window: List[HuntSnapshot] = sorted(
        (s for s in snapshots if cutoff <= s.captured_at <= now),
        key=lambda s: s.captured_at,
    )
    if len(window) < cfg.min_snapshots:
        return None

    first, last = window[0], window[-1]
    rank_change = first.rank - last.rank
    if rank_change > 0:
        direction = "climbing"
    elif rank_change < 0:
        direction = "falling"
    else:
        direction = "holding"

    return StandingTrend(
        rank_change=rank_change,
        upvote_gain=last.upvotes - first.upvotes,
        hours_covered=(last.captured_at - first.captured_at).total_seconds() / 3600.0,
        average_velocity=sum(s.velocity for s in window) / len(window),
        direction=direction,
        snapshots=len(window),
    )
