"""
LaunchPulse Analytics Engine
============================

Facade running one complete, stateless analysis pass over a snapshot:

    validate -> score -> momentum -> velocities -> gaps -> standing -> actions

Nothing is cached between calls; every pass recomputes from the snapshot
and the clock, so concurrent passes on different snapshots need no locking.

Usage:
    from src.analytics import LaunchAnalyticsEngine, FixedClock

    engine = LaunchAnalyticsEngine(clock=FixedClock(instant))
    analysis = engine.analyze(products, category="AI", tracked_slug="my-app")

    print(analysis.score.score)
    print(analysis.momentum)
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from src.data.data_models import Product, validate_products

from .analytics_config import AnalyticsConfig, DEFAULT_CONFIG
from .competitive_gap import GapEntry, analyze_gaps
from .launch_scorer import LaunchScorer, ScoreResult
from .momentum import MomentumState, momentum_for
from .recommendations import ActionSuggestion, AdvisoryContext, suggest_actions
from .time_context import (
    REFERENCE_TIMEZONE,
    Clock,
    SystemClock,
    TimeContext,
    Weekday,
    ZoneLike,
    context_at,
    format_slot,
    slot_in_zone,
)
from .tracking import LaunchStanding, locate_standing
from .velocity import VelocityReading, classify_all

logger = logging.getLogger(__name__)


@dataclass
class LaunchAnalysis:
    """Result of one analysis pass. Plain data, no formatting."""
    generated_at: datetime
    time_context: TimeContext
    score: ScoreResult
    momentum: Optional[MomentumState]
    velocities: List[VelocityReading] = field(default_factory=list)
    gaps: List[GapEntry] = field(default_factory=list)
    standing: Optional[LaunchStanding] = None
    actions: List[ActionSuggestion] = field(default_factory=list)
    local_best_time_label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "generatedAt": self.generated_at.isoformat(),
            "score": self.score.to_dict(),
            "momentum": self.momentum.value if self.momentum else None,
            "localBestTimeLabel": self.local_best_time_label,
            "velocities": [v.to_dict() for v in self.velocities],
            "gaps": [g.to_dict() for g in self.gaps],
            "standing": self.standing.to_dict() if self.standing else None,
            "actions": [a.to_dict() for a in self.actions],
        }


class LaunchAnalyticsEngine:
    """Stateless analytics over ranked product snapshots."""

    def __init__(
        self,
        config: Optional[AnalyticsConfig] = None,
        clock: Optional[Clock] = None,
        reference_zone: ZoneLike = REFERENCE_TIMEZONE,
        local_zone: Optional[ZoneLike] = None,
    ):
        self.config = config or DEFAULT_CONFIG
        self.clock = clock or SystemClock()
        self.reference_zone = reference_zone
        self.local_zone = local_zone
        self.scorer = LaunchScorer(self.config, reference_zone)

    def time_context(self) -> TimeContext:
        return context_at(self.clock.now(), self.reference_zone, self.local_zone)

    def analyze(
        self,
        products: Sequence[Product],
        category: Optional[str] = None,
        tracked_slug: Optional[str] = None,
        gap_window: Optional[int] = None,
    ) -> LaunchAnalysis:
        """
        Run a full analysis pass.

        Args:
            products: Snapshot in rank order.
            category: Category of the planned launch (filters the score's
                analysis set).
            tracked_slug: Slug of a live launch to report the standing of.
            gap_window: Number of top products examined by gap analysis.
                Defaults to config.gaps.default_window.

        Raises:
            PreconditionViolation: If any product is malformed.
        """
        products = validate_products(products)
        ctx = self.time_context()
        instant = ctx.instant

        score = self.scorer.score(products, instant, category)
        momentum = momentum_for(score, ctx, self.config)
        velocities = classify_all(products, instant, self.config)
        window = gap_window if gap_window is not None else self.config.gaps.default_window
        gaps = analyze_gaps(products, self.config, window=window)
        standing = (
            locate_standing(products, tracked_slug, instant, self.config)
            if tracked_slug else None
        )
        actions = suggest_actions(AdvisoryContext(score=score, momentum=momentum, standing=standing))

        logger.info(
            "Analyzed %d products: score=%d confidence=%s momentum=%s",
            len(products), score.score, score.confidence.value,
            momentum.value if momentum else "n/a",
            extra={
                "products": len(products),
                "score": score.score,
                "momentum": momentum.value if momentum else None,
                "category": category,
                "slug": tracked_slug,
            },
        )

        return LaunchAnalysis(
            generated_at=instant,
            time_context=ctx,
            score=score,
            momentum=momentum,
            velocities=velocities,
            gaps=gaps,
            standing=standing,
            actions=actions,
            local_best_time_label=self._local_label(score, ctx),
        )

    def _local_label(self, score: ScoreResult, ctx: TimeContext) -> Optional[str]:
        """Best slot expressed in the caller's zone, when one is configured."""
        if self.local_zone is None or score.best_day is None or score.best_hour is None:
            return None
        weekday, hour = slot_in_zone(
            score.best_day, score.best_hour, self.reference_zone, self.local_zone, ctx.instant,
        )
        return format_slot(Weekday(weekday), hour, self.local_zone)
