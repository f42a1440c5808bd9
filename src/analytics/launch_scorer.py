"""
LaunchPulse Launch Scorer - deterministic launch-opportunity scoring.

Turns a snapshot of ranked launches into one 0-100 opportunity score for a
planned launch, with a confidence tier and a trace of every factor.

PHILOSOPHY:
- No ML, no fitting
- Every score is REPRODUCIBLE from the same snapshot and instant
- Every score is EXPLAINABLE through its component trace

FACTORS (0-100 each, weighted):
    - CATEGORY heat      35%
    - BEST DAY fit       25%
    - BEST TIME fit      20%
    - COMPETITION        20% (inverted density)

CRITICAL RULE:
    Fewer than 3 products in the snapshot -> insufficient data sentinel
    (score 0, confidence Low, hotness "Low Data"). This is a result, not
    an exception.

TWO POOLS:
    The score is computed on the ANALYSIS set (products carrying the
    requested category, or the whole snapshot), while the recommended
    category is picked from EVERY category tag seen in the snapshot.

USAGE:
    from src.analytics.launch_scorer import LaunchScorer

    scorer = LaunchScorer()
    result = scorer.score(products, now, category="Developer Tools")

    print(result.score)
    print(result.best_time_label)
    print(result.get_explanation())
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from src.data.data_models import Product, validate_products

from .aggregator import AggregateSnapshot, aggregate
from .analytics_config import AnalyticsConfig, DEFAULT_CONFIG
from .time_context import REFERENCE_TIMEZONE, Weekday, ZoneLike, format_slot

logger = logging.getLogger(__name__)

INSUFFICIENT_SAMPLES = "Insufficient samples"


class CategoryHotness(Enum):
    """Heat label of the analyzed category."""
    HOT = "HOT"
    WARM = "WARM"
    COOL = "COOL"
    LOW_DATA = "Low Data"


class CompetitionLevel(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Confidence(Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


@dataclass
class ComponentScore:
    """
    One factor of the launch score.

    `score` is on a 0-100 scale; `points` is its weighted contribution.
    """
    name: str
    score: float
    weight: float
    details: Dict[str, Any] = field(default_factory=dict)
    explanation: str = ""

    @property
    def points(self) -> float:
        return self.score * self.weight


@dataclass
class ScoreResult:
    """
    Complete result of one scoring pass.

    Contains everything needed to:
    1. Show the recommendation (score, category, best_time_label)
    2. Understand it (component_scores, impacts)
    3. Persist it (to_dict)
    """
    score: int
    category: str
    category_hotness: CategoryHotness
    confidence: Confidence
    competition_level: Optional[CompetitionLevel]
    best_day: Optional[Weekday]
    best_hour: Optional[int]
    best_time_label: Optional[str]
    impacts: Dict[str, str] = field(default_factory=dict)
    sample_size: int = 0
    analyzed_category: Optional[str] = None
    component_scores: Dict[str, ComponentScore] = field(default_factory=dict)

    @property
    def is_insufficient_data(self) -> bool:
        return self.score == 0 and self.confidence == Confidence.LOW and \
            self.category_hotness == CategoryHotness.LOW_DATA

    @property
    def score_label(self) -> str:
        """Label stored next to the score by the persistence layer."""
        if self.is_insufficient_data:
            return CategoryHotness.LOW_DATA.value
        if self.score >= 70:
            return "Strong launch window"
        if self.score >= 50:
            return "Decent launch window"
        return "Weak launch window"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "score": self.score,
            "scoreLabel": self.score_label,
            "category": self.category,
            "analyzedCategory": self.analyzed_category,
            "categoryHotness": self.category_hotness.value,
            "bestDay": self.best_day.label if self.best_day is not None else None,
            "bestHour": self.best_hour,
            "bestTimeLabel": self.best_time_label,
            "competitionLevel": self.competition_level.value if self.competition_level else None,
            "confidence": self.confidence.value,
            "sampleSize": self.sample_size,
            "impacts": dict(self.impacts),
        }

    def get_explanation(self) -> str:
        """Full scoring trace."""
        lines = [
            "=== LAUNCH SCORE ===",
            f"Score: {self.score}/100 ({self.score_label})",
            f"Recommended category: {self.category} ({self.category_hotness.value})",
            f"Analyzed: {self.analyzed_category or 'all categories'} - {self.sample_size} samples",
            f"Confidence: {self.confidence.value}",
        ]
        if self.best_time_label:
            lines.append(f"Best slot: {self.best_time_label}")
        if self.competition_level:
            lines.append(f"Competition: {self.competition_level.value}")

        lines.append("")
        lines.append("--- FACTORS ---")
        for name, comp in self.component_scores.items():
            lines.append(f"\n{name.upper()} ({comp.score:.1f}/100 x {comp.weight:.2f} = {comp.points:.1f} pts):")
            lines.append(comp.explanation)

        if self.is_insufficient_data:
            for name, impact in self.impacts.items():
                lines.append(f"  {name}: {impact}")

        return "\n".join(lines)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class LaunchScorer:
    """
    Launch-opportunity scorer - 100% deterministic.

    Scores a planned launch against a snapshot of ranked products:
    - CATEGORY (35%): how hot the category is right now
    - BEST DAY (25%): strength of the best observed weekday
    - BEST TIME (20%): strength of the best observed hour
    - COMPETITION (20%): how flat the vote distribution is
    """

    def __init__(self, config: Optional[AnalyticsConfig] = None, reference_zone: ZoneLike = REFERENCE_TIMEZONE):
        """
        Args:
            config: Engine configuration. If None, uses DEFAULT_CONFIG.
            reference_zone: Zone for weekday/hour buckets.
        """
        self.config = config or DEFAULT_CONFIG
        self.config.validate()
        self.reference_zone = reference_zone

    # =========================================================================
    # MAIN ENTRY POINT
    # =========================================================================

    def score(self, products: Sequence[Product], now: datetime, category: Optional[str] = None) -> ScoreResult:
        """
        Score a planned launch against a snapshot.

        Args:
            products: Snapshot of products.
            now: Current aware instant.
            category: Category of the planned launch. None analyzes the whole
                snapshot.

        Returns:
            ScoreResult, or the insufficient-data sentinel with fewer than
            3 products.

        Raises:
            PreconditionViolation: If any product is malformed.
        """
        products = validate_products(products)
        minimum = self.config.confidence.minimum_products
        recommended = self.select_hottest_category(products, now) if products else None

        if len(products) < minimum:
            logger.debug("Insufficient data: %d products (< %d)", len(products), minimum)
            return self.insufficient_data(len(products), recommended or category or "Unknown", category)

        analysis_set, analyzed_category = self._analysis_set(products, category)
        snapshot = aggregate(analysis_set, now, self.reference_zone, self.config)

        components = {
            "category": self.score_category_heat(snapshot),
            "best_day": self.score_best_day(snapshot),
            "best_time": self.score_best_time(snapshot),
            "competition": self.score_competition(snapshot),
        }

        raw = sum(c.points for c in components.values())
        final = max(0, min(round_half_up(raw), self.config.max_score))

        best_day = components["best_day"].details["weekday"]
        best_hour = components["best_time"].details["hour"]

        return ScoreResult(
            score=final,
            category=recommended,
            category_hotness=self.hotness_for(components["category"].score),
            confidence=self.confidence_for(snapshot.sample_size),
            competition_level=self.competition_level_for(components["competition"].details["ratio"]),
            best_day=best_day,
            best_hour=best_hour,
            best_time_label=format_slot(best_day, best_hour, self.reference_zone),
            impacts={name: self._impact(comp) for name, comp in components.items()},
            sample_size=snapshot.sample_size,
            analyzed_category=analyzed_category,
            component_scores=components,
        )

    def insufficient_data(self, sample_size: int, category: str, analyzed_category: Optional[str] = None) -> ScoreResult:
        """Sentinel result for snapshots below the minimum size."""
        needed = self.config.confidence.minimum_products
        message = f"{INSUFFICIENT_SAMPLES} ({sample_size} of {needed} needed)"
        return ScoreResult(
            score=0,
            category=category,
            category_hotness=CategoryHotness.LOW_DATA,
            confidence=Confidence.LOW,
            competition_level=None,
            best_day=None,
            best_hour=None,
            best_time_label=None,
            impacts={name: message for name in self.config.weights},
            sample_size=sample_size,
            analyzed_category=analyzed_category,
        )

    # =========================================================================
    # CATEGORY HEAT (35%)
    # =========================================================================

    def score_category_heat(self, snapshot: AggregateSnapshot) -> ComponentScore:
        """
        FORMULA:
            (recent_ratio * 0.4 + min(avg_votes / 100, 1) * 0.6) * 100

        A category is hot when launches keep arriving (recent ratio) AND
        they collect votes (performance).
        """
        cfg = self.config.category_heat
        performance = min(snapshot.average_votes / cfg.vote_ceiling, 1.0)
        heat = (snapshot.recent_ratio * cfg.recent_weight + performance * cfg.performance_weight) * 100

        explanation = (
            f"  Recent launches ({cfg.recent_window_days}d): "
            f"{snapshot.recent_count}/{snapshot.sample_size} = {snapshot.recent_ratio:.2f}\n"
            f"  Average upvotes: {snapshot.average_votes:.1f} -> performance {performance:.2f}\n"
            f"  -> Heat: {heat:.1f}/100 ({self.hotness_for(heat).value})"
        )
        return ComponentScore(
            name="category",
            score=heat,
            weight=self.config.weights["category"],
            details={
                "recent_ratio": snapshot.recent_ratio,
                "average_votes": snapshot.average_votes,
                "performance": performance,
            },
            explanation=explanation,
        )

    # =========================================================================
    # BEST DAY (25%) / BEST TIME (20%)
    # =========================================================================

    def score_best_day(self, snapshot: AggregateSnapshot) -> ComponentScore:
        """Best observed weekday's average upvotes, capped at 100."""
        weekday, average = snapshot.best_weekday()
        value = min(average / self.config.timing.vote_ceiling * 100, 100.0)
        return ComponentScore(
            name="best_day",
            score=value,
            weight=self.config.weights["best_day"],
            details={"weekday": weekday, "average_votes": average},
            explanation=(
                f"  Best weekday: {weekday.full_name} ({average:.1f} avg upvotes, "
                f"{len(snapshot.weekdays)} weekdays observed)\n"
                f"  -> Fit: {value:.1f}/100"
            ),
        )

    def score_best_time(self, snapshot: AggregateSnapshot) -> ComponentScore:
        """Best observed hour's average upvotes, capped at 100."""
        hour, average = snapshot.best_hour()
        value = min(average / self.config.timing.vote_ceiling * 100, 100.0)
        return ComponentScore(
            name="best_time",
            score=value,
            weight=self.config.weights["best_time"],
            details={"hour": hour, "average_votes": average},
            explanation=(
                f"  Best hour: {hour:02d}:00 ({average:.1f} avg upvotes, "
                f"{len(snapshot.hours)} hours observed)\n"
                f"  -> Fit: {value:.1f}/100"
            ),
        )

    # =========================================================================
    # COMPETITION (20%, inverted)
    # =========================================================================

    def score_competition(self, snapshot: AggregateSnapshot) -> ComponentScore:
        """
        FORMULA:
            (avg_votes / top_quartile_avg) * 100

        The closer the average sits to the top quartile, the flatter the
        field and the less the leaders dominate.
        """
        if snapshot.top_quartile_average > 0:
            ratio = snapshot.average_votes / snapshot.top_quartile_average
        else:
            # Every product at zero votes: perfectly flat field
            ratio = 1.0
        value = ratio * 100
        level = self.competition_level_for(ratio)
        return ComponentScore(
            name="competition",
            score=value,
            weight=self.config.weights["competition"],
            details={
                "ratio": ratio,
                "average_votes": snapshot.average_votes,
                "top_quartile_average": snapshot.top_quartile_average,
            },
            explanation=(
                f"  Average upvotes: {snapshot.average_votes:.1f}\n"
                f"  Top quartile average: {snapshot.top_quartile_average:.1f}\n"
                f"  Ratio: {ratio:.2f} -> {level.value} competition\n"
                f"  -> Score: {value:.1f}/100"
            ),
        )

    # =========================================================================
    # RECOMMENDED CATEGORY (full pool)
    # =========================================================================

    def rank_categories(self, products: Sequence[Product], now: datetime) -> List[tuple]:
        """
        (category, category_score) for every tag of the snapshot, in
        first-seen order.

        category_score = avg_votes * 0.6 + recent_ratio * 40
        """
        if not products:
            return []
        cfg = self.config.hottest_category
        snapshot = aggregate(products, now, self.reference_zone, self.config)
        return [
            (name, stats.average * cfg.avg_weight + stats.recent_ratio * cfg.recent_points)
            for name, stats in snapshot.categories.items()
        ]

    def select_hottest_category(self, products: Sequence[Product], now: datetime) -> Optional[str]:
        """Highest category_score wins; ties go to the first-seen category."""
        best = None
        for name, value in self.rank_categories(products, now):
            if best is None or value > best[1]:
                best = (name, value)
        return best[0] if best else None

    # =========================================================================
    # LABELS
    # =========================================================================

    def hotness_for(self, heat: float) -> CategoryHotness:
        cfg = self.config.category_heat
        if heat < cfg.warm_threshold:
            return CategoryHotness.COOL
        if heat < cfg.hot_threshold:
            return CategoryHotness.WARM
        return CategoryHotness.HOT

    def competition_level_for(self, ratio: float) -> CompetitionLevel:
        cfg = self.config.competition
        if ratio > cfg.low_ratio:
            return CompetitionLevel.LOW
        if ratio > cfg.medium_ratio:
            return CompetitionLevel.MEDIUM
        return CompetitionLevel.HIGH

    def confidence_for(self, samples: int) -> Confidence:
        cfg = self.config.confidence
        if samples >= cfg.high_samples:
            return Confidence.HIGH
        if samples >= cfg.medium_samples:
            return Confidence.MEDIUM
        return Confidence.LOW

    # =========================================================================
    # UTILITIES
    # =========================================================================

    def _analysis_set(self, products: List[Product], category: Optional[str]):
        """
        Products carrying the requested category.

        Falls back to the whole snapshot when no category is requested or
        too few products carry it.
        """
        if not category:
            return products, None
        matching = [p for p in products if category in p.categories]
        if len(matching) < self.config.confidence.minimum_products:
            logger.debug(
                "Only %d products tagged %r, scoring against the full snapshot",
                len(matching), category,
            )
            return products, None
        return matching, category

    @staticmethod
    def _impact(component: ComponentScore) -> str:
        if component.name == "category":
            detail = f"category heat {component.score:.0f}/100"
        elif component.name == "best_day":
            detail = f"best day {component.details['weekday'].full_name}"
        elif component.name == "best_time":
            detail = f"best hour {component.details['hour']:02d}:00"
        else:
            detail = f"avg/top-quartile ratio {component.details['ratio']:.2f}"
        return f"{component.points:+.1f} pts ({detail})"
