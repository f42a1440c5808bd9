"""
LaunchPulse Data Models
=======================

Dataclasses representing the records the analytics engine consumes.
These models are the intermediate representation between the ranking feed
payload and the analytics layer.

Models:
    - Product: One ranked launch of the current snapshot (read-only)
    - HuntSnapshot: Point-in-time standing of a tracked launch
    - PreconditionViolation: Raised for malformed input records
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple


class PreconditionViolation(ValueError):
    """A Product (or snapshot) does not satisfy the engine's input contract."""

    def __init__(self, message: str, product_id: Optional[str] = None, field_name: Optional[str] = None):
        self.message = message
        self.product_id = product_id
        self.field_name = field_name
        if product_id is not None:
            message = f"Product {product_id}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class Product:
    """
    One launched product as ranked by the feed.

    Immutable for the duration of a scoring pass. `rank` is 1-based and
    assigned by the caller from the sort order of the snapshot.
    """
    id: str
    name: str
    slug: str
    created_at: Optional[datetime]
    votes_count: int = 0
    comments_count: int = 0
    rank: int = 1
    url: str = ""
    tagline: str = ""
    category: str = "General"
    all_categories: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def categories(self) -> Tuple[str, ...]:
        """Every category tag the product carries, primary first."""
        if self.all_categories:
            return tuple(self.all_categories)
        return (self.category,)

    def validate(self) -> "Product":
        """
        Check the record against the engine's input contract.

        Returns:
            The product itself, for chaining.

        Raises:
            PreconditionViolation: On a missing/naive created_at, negative
                counts, or a rank below 1.
        """
        if self.created_at is None:
            raise PreconditionViolation("created_at is missing", self.id, "created_at")
        if self.created_at.tzinfo is None or self.created_at.utcoffset() is None:
            raise PreconditionViolation("created_at must be timezone-aware", self.id, "created_at")
        if self.votes_count is None or self.votes_count < 0:
            raise PreconditionViolation(
                f"votes_count must be >= 0, got {self.votes_count}", self.id, "votes_count"
            )
        if self.comments_count is None or self.comments_count < 0:
            raise PreconditionViolation(
                f"comments_count must be >= 0, got {self.comments_count}", self.id, "comments_count"
            )
        if self.rank is None or self.rank < 1:
            raise PreconditionViolation(f"rank must be >= 1, got {self.rank}", self.id, "rank")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Plain-data view using the feed's field names."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "url": self.url,
            "tagline": self.tagline,
            "category": self.category,
            "allCategories": list(self.categories),
            "votesCount": self.votes_count,
            "commentsCount": self.comments_count,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "rank": self.rank,
        }


def validate_products(products: Iterable[Product]) -> List[Product]:
    """
    Validate every product of a snapshot, in order.

    Raises:
        PreconditionViolation: On the first malformed product.
    """
    return [p.validate() for p in products]


@dataclass(frozen=True)
class HuntSnapshot:
    """
    Standing of a tracked launch at capture time.

    Maps directly to the hunt_snapshots table owned by the persistence layer.
    """
    captured_at: datetime
    rank: int
    upvotes: int
    comments: int = 0
    velocity: float = 0.0  # upvotes per hour at capture time

    def to_db_dict(self) -> Dict[str, Any]:
        """
        Convert to dictionary for database insertion.

        Returns:
            Dictionary matching hunt_snapshots table columns
        """
        return {
            "snapshot_at": self.captured_at,
            "rank": self.rank,
            "upvotes": self.upvotes,
            "comments": self.comments,
            "velocity": round(self.velocity, 2),
        }
