"""
Tests for LaunchPulse data models.
"""

import pytest
from datetime import datetime, timedelta, timezone

from src.data.data_models import (
    Product,
    HuntSnapshot,
    PreconditionViolation,
)


class TestProduct:
    """Tests for the Product record."""

    def test_categories_prefers_all_categories(self, make_product):
        product = make_product(categories=("AI", "Productivity"))
        assert product.categories == ("AI", "Productivity")

    def test_categories_falls_back_to_primary(self, now):
        product = Product(
            id="p1", name="Solo", slug="solo", created_at=now, category="Design",
        )
        assert product.categories == ("Design",)

    def test_validate_returns_product(self, make_product):
        product = make_product(votes=10)
        assert product.validate() is product

    def test_missing_created_at(self):
        product = Product(id="p1", name="No date", slug="no-date", created_at=None)
        with pytest.raises(PreconditionViolation) as exc:
            product.validate()
        assert exc.value.field_name == "created_at"
        assert exc.value.product_id == "p1"

    def test_naive_created_at(self):
        product = Product(id="p1", name="Naive", slug="naive", created_at=datetime(2025, 6, 1, 12))
        with pytest.raises(PreconditionViolation, match="timezone-aware"):
            product.validate()

    def test_negative_votes(self, make_product):
        with pytest.raises(PreconditionViolation) as exc:
            make_product(votes=-1).validate()
        assert exc.value.field_name == "votes_count"

    def test_negative_comments(self, make_product):
        with pytest.raises(PreconditionViolation) as exc:
            make_product(comments=-3).validate()
        assert exc.value.field_name == "comments_count"

    def test_rank_below_one(self, make_product):
        with pytest.raises(PreconditionViolation) as exc:
            make_product(rank=0).validate()
        assert exc.value.field_name == "rank"

    def test_violation_is_value_error(self):
        assert issubclass(PreconditionViolation, ValueError)

    def test_to_dict_uses_feed_names(self, make_product):
        product = make_product(votes=42, categories=("AI", "Dev"), comments=7)
        data = product.to_dict()
        assert data["votesCount"] == 42
        assert data["commentsCount"] == 7
        assert data["allCategories"] == ["AI", "Dev"]
        assert data["createdAt"].endswith("+00:00")

    def test_product_is_immutable(self, make_product):
        product = make_product()
        with pytest.raises(Exception):
            product.votes_count = 99


class TestHuntSnapshot:
    """Tests for HuntSnapshot."""

    def test_to_db_dict(self):
        captured = datetime(2025, 6, 10, 19, 0, tzinfo=timezone.utc)
        snapshot = HuntSnapshot(captured_at=captured, rank=3, upvotes=120, comments=14, velocity=12.3456)
        row = snapshot.to_db_dict()
        assert row == {
            "snapshot_at": captured,
            "rank": 3,
            "upvotes": 120,
            "comments": 14,
            "velocity": 12.35,
        }
