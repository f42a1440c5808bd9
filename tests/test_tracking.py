"""
Tests for tracked-launch standing and history.
"""

import pytest
from datetime import timedelta

from src.analytics.tracking import locate_standing, summarize_history, take_snapshot
from src.analytics.velocity import VelocityTier
from src.data.data_models import HuntSnapshot, PreconditionViolation


class TestLocateStanding:

    def test_chasing_the_product_above(self, ranked_products, now):
        standing = locate_standing(ranked_products, "charlie", now)

        assert standing.rank == 3
        assert standing.ahead_name == "Bravo"
        assert standing.gap.gap_to_next == 50
        assert standing.gap.catchable
        assert standing.votes_to_next_rank == 51

    def test_leader(self, ranked_products, now):
        standing = locate_standing(ranked_products, "alpha", now)

        assert standing.gap.is_leading
        assert standing.ahead_name is None
        assert standing.votes_to_next_rank is None

    def test_velocity_attached(self, ranked_products, now):
        # 430 upvotes over 3 hours
        standing = locate_standing(ranked_products, "charlie", now)
        assert standing.velocity.rate == pytest.approx(143.33, abs=0.01)
        assert standing.velocity.tier == VelocityTier.HOT

    def test_unknown_slug(self, ranked_products, now):
        assert locate_standing(ranked_products, "missing", now) is None

    def test_to_dict(self, ranked_products, now):
        data = locate_standing(ranked_products, "bravo", now).to_dict()
        assert data["slug"] == "bravo"
        assert data["aheadName"] == "Alpha"
        assert data["votesToNextRank"] == 21


class TestSnapshots:

    def test_take_snapshot(self, ranked_products, now):
        standing = locate_standing(ranked_products, "delta", now)
        snapshot = take_snapshot(standing, now)

        assert snapshot.captured_at == now
        assert snapshot.rank == 4
        assert snapshot.upvotes == 100
        assert snapshot.velocity == pytest.approx(100 / 3)

    def test_climbing_trend(self, now):
        snapshots = [
            HuntSnapshot(captured_at=now, rank=3, upvotes=430, velocity=40.0),
            HuntSnapshot(captured_at=now - timedelta(days=2), rank=8, upvotes=50, velocity=10.0),
            HuntSnapshot(captured_at=now - timedelta(days=1), rank=5, upvotes=150, velocity=25.0),
            # Outside the 7-day window
            HuntSnapshot(captured_at=now - timedelta(days=10), rank=40, upvotes=1, velocity=1.0),
        ]
        trend = summarize_history(snapshots, now)

        assert trend.snapshots == 3
        assert trend.rank_change == 5
        assert trend.direction == "climbing"
        assert trend.upvote_gain == 380
        assert trend.hours_covered == pytest.approx(48.0)
        assert trend.average_velocity == pytest.approx(25.0)

    def test_falling_and_holding(self, now):
        earlier = now - timedelta(hours=6)
        falling = summarize_history(
            [HuntSnapshot(earlier, rank=2, upvotes=100), HuntSnapshot(now, rank=4, upvotes=120)], now,
        )
        holding = summarize_history(
            [HuntSnapshot(earlier, rank=2, upvotes=100), HuntSnapshot(now, rank=2, upvotes=160)], now,
        )
        assert falling.direction == "falling"
        assert falling.rank_change == -2
        assert holding.direction == "holding"

    def test_too_few_snapshots(self, now):
        assert summarize_history([HuntSnapshot(now, rank=1, upvotes=10)], now) is None
        assert summarize_history([], now) is None


class TestMalformedInput:

    def test_malformed_board_rejected(self, ranked_products, make_product, now):
        with pytest.raises(PreconditionViolation):
            locate_standing(ranked_products + [make_product(comments=-1)], "alpha", now)
