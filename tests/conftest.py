"""
Shared fixtures for the LaunchPulse test suite.

Every clock-dependent test runs against NOW, a Tuesday at noon Pacific
Time, far from any DST switch.
"""

import itertools
from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from src.data.data_models import Product

PT = ZoneInfo("America/Los_Angeles")

# Tuesday 2025-06-10 12:00 PDT
NOW = datetime(2025, 6, 10, 19, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_product():
    """
    Factory for valid products.

    created_at defaults to 3 hours before NOW; rank defaults to creation
    order.
    """
    counter = itertools.count(1)

    def _make(
        votes=0,
        created_at=None,
        categories=("AI",),
        rank=None,
        name=None,
        slug=None,
        comments=0,
    ):
        n = next(counter)
        return Product(
            id=f"p{n}",
            name=name or f"Product {n}",
            slug=slug or f"product-{n}",
            url=f"https://example.com/product-{n}",
            tagline="A launch",
            category=categories[0] if categories else "General",
            all_categories=tuple(categories),
            votes_count=votes,
            comments_count=comments,
            created_at=created_at or NOW - timedelta(hours=3),
            rank=rank if rank is not None else n,
        )

    return _make


@pytest.fixture
def ranked_products(make_product):
    """Four launches in rank order: 500, 480, 430, 100 upvotes."""
    return [
        make_product(votes=500, name="Alpha", slug="alpha"),
        make_product(votes=480, name="Bravo", slug="bravo"),
        make_product(votes=430, name="Charlie", slug="charlie"),
        make_product(votes=100, name="Delta", slug="delta"),
    ]
