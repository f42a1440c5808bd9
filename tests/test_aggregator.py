"""
Tests for category / weekday / hour aggregation.
"""

import pytest
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from src.analytics.aggregator import aggregate, top_quartile_average
from src.analytics.time_context import Weekday
from src.data.data_models import PreconditionViolation, Product

PT = ZoneInfo("America/Los_Angeles")


class TestTopQuartile:

    def test_ceil_of_quarter(self):
        # ceil(5 / 4) = 2 highest values: 50 and 40
        assert top_quartile_average([10, 20, 30, 40, 50]) == 45.0

    def test_single_value(self):
        assert top_quartile_average([7]) == 7.0

    def test_four_values_uses_one(self):
        assert top_quartile_average([100, 0, 0, 0]) == 100.0

    def test_empty(self):
        assert top_quartile_average([]) == 0.0


class TestAggregate:

    def test_empty_set_rejected(self, now):
        with pytest.raises(PreconditionViolation):
            aggregate([], now)

    def test_multi_category_counts_every_tag(self, make_product, now):
        products = [
            make_product(votes=100, categories=("AI", "Productivity")),
            make_product(votes=50, categories=("AI",)),
        ]
        snapshot = aggregate(products, now)

        assert snapshot.categories["AI"].count == 2
        assert snapshot.categories["Productivity"].count == 1
        assert snapshot.category_averages["AI"] == 75.0
        assert snapshot.category_averages["Productivity"] == 100.0

    def test_duplicate_tag_counts_once(self, make_product, now):
        snapshot = aggregate([make_product(votes=10, categories=("AI", "AI"))], now)
        assert snapshot.categories["AI"].count == 1

    def test_weekday_and_hour_counted_once_per_product(self, make_product, now):
        product = make_product(
            votes=80,
            categories=("AI", "Dev", "Design"),
            created_at=datetime(2025, 6, 9, 9, 15, tzinfo=PT),  # Monday
        )
        snapshot = aggregate([product], now)

        assert snapshot.weekdays[Weekday.MON].count == 1
        assert snapshot.hours[9].count == 1
        assert len(snapshot.categories) == 3

    def test_category_order_is_first_seen(self, make_product, now):
        products = [
            make_product(categories=("Dev",)),
            make_product(categories=("AI", "Dev")),
            make_product(categories=("Design",)),
        ]
        snapshot = aggregate(products, now)
        assert list(snapshot.categories) == ["Dev", "AI", "Design"]

    def test_global_averages(self, ranked_products, now):
        snapshot = aggregate(ranked_products, now)
        assert snapshot.sample_size == 4
        assert snapshot.average_votes == pytest.approx(377.5)
        assert snapshot.top_quartile_average == 500.0

    def test_recent_ratio(self, make_product, now):
        products = [
            make_product(created_at=now - timedelta(days=1)),
            make_product(created_at=now - timedelta(days=14)),  # boundary is inclusive
            make_product(created_at=now - timedelta(days=15)),
            make_product(created_at=now - timedelta(days=40)),
        ]
        snapshot = aggregate(products, now)
        assert snapshot.recent_count == 2
        assert snapshot.recent_ratio == 0.5
        assert snapshot.categories["AI"].recent_ratio == 0.5


class TestBestBuckets:

    def test_best_weekday_tie_goes_to_sunday_first_order(self, make_product, now):
        products = [
            # Saturday listed first, Monday second, same average
            make_product(votes=60, created_at=datetime(2025, 6, 7, 9, tzinfo=PT)),
            make_product(votes=60, created_at=datetime(2025, 6, 9, 9, tzinfo=PT)),
            make_product(votes=20, created_at=datetime(2025, 6, 10, 9, tzinfo=PT)),
        ]
        weekday, average = aggregate(products, now).best_weekday()
        assert weekday == Weekday.MON
        assert average == 60.0

    def test_best_hour_tie_goes_to_earliest(self, make_product, now):
        products = [
            make_product(votes=50, created_at=datetime(2025, 6, 9, 14, tzinfo=PT)),
            make_product(votes=50, created_at=datetime(2025, 6, 9, 8, tzinfo=PT)),
            make_product(votes=10, created_at=datetime(2025, 6, 9, 20, tzinfo=PT)),
        ]
        hour, average = aggregate(products, now).best_hour()
        assert hour == 8
        assert average == 50.0

    def test_best_weekday_uses_highest_average(self, make_product, now):
        products = [
            make_product(votes=10, created_at=datetime(2025, 6, 8, 9, tzinfo=PT)),   # Sun
            make_product(votes=90, created_at=datetime(2025, 6, 12, 9, tzinfo=PT)),  # Thu
        ]
        assert aggregate(products, now).best_weekday()[0] == Weekday.THU

    def test_malformed_product_rejected(self, make_product, now):
        undated = Product(id="x", name="Undated", slug="undated", created_at=None)
        with pytest.raises(PreconditionViolation) as exc:
            aggregate([make_product(votes=10), undated], now)
        assert exc.value.field_name == "created_at"
