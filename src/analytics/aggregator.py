"""
Category / weekday / hour aggregation of a product snapshot.

For each grouping key we keep running sums of upvotes and counts:
    - category: every tag a product carries (not only the primary)
    - weekday and hour: the product's own created_at, once, in the
      reference zone

The snapshot also carries the global average, the top-quartile average
(ceil(n/4) highest vote counts) and the share of products created within
the recent window. These feed the launch scorer.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from src.data.data_models import PreconditionViolation, Product, validate_products

from .analytics_config import AnalyticsConfig, DEFAULT_CONFIG
from .time_context import REFERENCE_TIMEZONE, Weekday, ZoneLike, bucket_of

logger = logging.getLogger(__name__)


@dataclass
class BucketStats:
    """Running totals for one grouping key."""
    total_votes: int = 0
    count: int = 0
    recent_count: int = 0

    def add(self, votes: int, is_recent: bool = False) -> None:
        self.total_votes += votes
        self.count += 1
        if is_recent:
            self.recent_count += 1

    @property
    def average(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_votes / self.count

    @property
    def recent_ratio(self) -> float:
        if self.count == 0:
            return 0.0
        return self.recent_count / self.count


@dataclass
class AggregateSnapshot:
    """
    Aggregated view of a product set.

    Dict insertion order is first-seen order, which the category tie-break
    relies on.
    """
    sample_size: int
    average_votes: float
    top_quartile_average: float
    recent_count: int
    categories: Dict[str, BucketStats] = field(default_factory=dict)
    weekdays: Dict[Weekday, BucketStats] = field(default_factory=dict)
    hours: Dict[int, BucketStats] = field(default_factory=dict)

    @property
    def recent_ratio(self) -> float:
        if self.sample_size == 0:
            return 0.0
        return self.recent_count / self.sample_size

    @property
    def category_averages(self) -> Dict[str, float]:
        return {k: v.average for k, v in self.categories.items()}

    @property
    def weekday_averages(self) -> Dict[Weekday, float]:
        return {k: v.average for k, v in self.weekdays.items()}

    @property
    def hour_averages(self) -> Dict[int, float]:
        return {k: v.average for k, v in self.hours.items()}

    def best_weekday(self) -> Optional[Tuple[Weekday, float]]:
        """
        Observed weekday with the highest average upvotes.

        Ties go to the first weekday in Sun -> Sat order.
        """
        return _best_bucket(self.weekdays, list(Weekday))

    def best_hour(self) -> Optional[Tuple[int, float]]:
        """Observed hour with the highest average upvotes, ties to the earliest hour."""
        return _best_bucket(self.hours, list(range(24)))


def _best_bucket(buckets, order):
    best = None
    for key in order:
        stats = buckets.get(key)
        if stats is None or stats.count == 0:
            continue
        if best is None or stats.average > best[1]:
            best = (key, stats.average)
    return best


def top_quartile_average(votes: Sequence[int]) -> float:
    """Average of the ceil(n/4) highest values (0.0 for an empty sequence)."""
    if not votes:
        return 0.0
    size = math.ceil(len(votes) / 4)
    top = sorted(votes, reverse=True)[:size]
    return sum(top) / len(top)


def is_recent(product: Product, now: datetime, window_days: int) -> bool:
    return now - product.created_at <= timedelta(days=window_days)


def aggregate(
    products: Iterable[Product],
    now: datetime,
    reference_zone: ZoneLike = REFERENCE_TIMEZONE,
    config: Optional[AnalyticsConfig] = None,
) -> AggregateSnapshot:
    """
    Aggregate a non-empty product set.

    Args:
        products: Products of the snapshot (any order).
        now: Current aware instant, for the recent window.
        reference_zone: Zone used for weekday/hour buckets.
        config: Engine configuration. Defaults to DEFAULT_CONFIG.

    Raises:
        PreconditionViolation: If the set is empty or a product is malformed.
    """
    cfg = config or DEFAULT_CONFIG
    items: List[Product] = validate_products(products)
    if not items:
        raise PreconditionViolation("cannot aggregate an empty product set")

    window = cfg.category_heat.recent_window_days
    categories: Dict[str, BucketStats] = {}
    weekdays: Dict[Weekday, BucketStats] = {}
    hours: Dict[int, BucketStats] = {}
    recent_count = 0

    for product in items:
        recent = is_recent(product, now, window)
        if recent:
            recent_count += 1

        # A tag listed twice still counts once per product
        for tag in dict.fromkeys(product.categories):
            categories.setdefault(tag, BucketStats()).add(product.votes_count, recent)

        weekday, hour = bucket_of(product.created_at, reference_zone)
        weekdays.setdefault(weekday, BucketStats()).add(product.votes_count, recent)
        hours.setdefault(hour, BucketStats()).add(product.votes_count, recent)

    votes = [p.votes_count for p in items]
    snapshot = AggregateSnapshot(
        sample_size=len(items),
        average_votes=sum(votes) / len(votes),
        top_quartile_average=top_quartile_average(votes),
        recent_count=recent_count,
        categories=categories,
        weekdays=weekdays,
        hours=hours,
    )
    logger.debug(
        "Aggregated %d products: %d categories, %d weekdays, %d hours",
        snapshot.sample_size, len(categories), len(weekdays), len(hours),
    )
    return snapshot
