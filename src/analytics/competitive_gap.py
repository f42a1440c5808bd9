"""
Competitive gaps between adjacent ranks.

The input is already in rank order; nothing here sorts. Each entry reports
the vote deficit to the product directly above it. The first entry has
nothing above it and is reported as leading.

    gap       = votes(above) - votes(entry), clamped at 0
    catchable = gap <= 50
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from src.data.data_models import Product, validate_products

from .analytics_config import AnalyticsConfig, DEFAULT_CONFIG

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GapEntry:
    """Standing of one product against the product ranked just above it."""
    rank: int
    product_name: str
    votes_count: int
    gap_to_next: Optional[int]  # None for the leader
    catchable: bool
    is_leading: bool = False
    ahead_name: Optional[str] = None

    @property
    def votes_to_overtake(self) -> Optional[int]:
        if self.gap_to_next is None:
            return None
        return self.gap_to_next + 1

    @property
    def label(self) -> str:
        if self.is_leading:
            return "Leading"
        return "Catchable" if self.catchable else "Out of reach"

    def to_dict(self):
        return {
            "rank": self.rank,
            "productName": self.product_name,
            "votesCount": self.votes_count,
            "gapToNext": self.gap_to_next,
            "catchable": self.catchable,
            "label": self.label,
        }


def analyze_gaps(
    products: Sequence[Product],
    config: Optional[AnalyticsConfig] = None,
    window: Optional[int] = None,
) -> List[GapEntry]:
    """
    Gap entries for a rank-ordered product list.

    Args:
        products: Products in rank order (best first).
        config: Engine configuration. Defaults to DEFAULT_CONFIG.
        window: Examine only the first `window` products. None = all.

    Returns:
        One GapEntry per examined product, in input order.

    Raises:
        PreconditionViolation: If any product is malformed.
        ValueError: If window is below 1.
    """
    if window is not None and window < 1:
        raise ValueError(f"window must be at least 1, got {window}")
    threshold = (config or DEFAULT_CONFIG).gaps.catchable_votes
    ordered = validate_products(products)
    examined = ordered if window is None else ordered[:window]

    entries: List[GapEntry] = []
    for index, product in enumerate(examined):
        if index == 0:
            entries.append(GapEntry(
                rank=product.rank,
                product_name=product.name,
                votes_count=product.votes_count,
                gap_to_next=None,
                catchable=False,
                is_leading=True,
            ))
            continue

        above = examined[index - 1]
        deficit = above.votes_count - product.votes_count
        if deficit < 0:
            logger.debug(
                "%s has more votes than %s above it, gap clamped to 0",
                product.name, above.name,
            )
            deficit = 0
        entries.append(GapEntry(
            rank=product.rank,
            product_name=product.name,
            votes_count=product.votes_count,
            gap_to_next=deficit,
            catchable=deficit <= threshold,
            ahead_name=above.name,
        ))
    return entries


def gap_values(entries: Sequence[GapEntry]) -> List[int]:
    """Numeric gaps of every non-leading entry."""
    return [e.gap_to_next for e in entries if e.gap_to_next is not None]
