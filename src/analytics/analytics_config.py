"""
Thresholds and weights for the LaunchPulse analytics engine.

This file centralizes EVERY calibration parameter used by the engine.
Calibrated for a daily-reset launch leaderboard whose activity is anchored
to Pacific Time.

PHILOSOPHY:
- Every threshold is explicit and documented
- No "magic number" in the scoring code
- Easy to tune without touching the scoring logic

LEADERBOARD CHARACTERISTICS:
- A typical day shows 20-50 ranked launches
- A strong launch collects 100+ upvotes on day one
- The ranking resets at midnight Pacific Time
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class VelocityConfig:
    """
    Upvotes-per-hour tiers.

    The hours-live floor keeps just-created launches from producing
    absurd rates (5 votes after 2 minutes is not 150 votes/hour).
    """
    min_hours_live: float = 1.0

    # Strictly greater than the threshold to reach the tier
    hot_rate: float = 30.0      # > 30 votes/h = HOT
    rising_rate: float = 15.0   # > 15 votes/h = RISING, else SLOW


@dataclass(frozen=True)
class CategoryHeatConfig:
    """
    Category heat (35% of the launch score).

    FORMULA:
        (recent_ratio * recent_weight + min(avg_votes / vote_ceiling, 1) * performance_weight) * 100

    recent_ratio = share of the analysis set created within recent_window_days.
    """
    recent_window_days: int = 14
    recent_weight: float = 0.4
    performance_weight: float = 0.6
    vote_ceiling: float = 100.0

    # Hotness labels on the 0-100 heat
    hot_threshold: float = 70.0   # >= 70 = HOT
    warm_threshold: float = 50.0  # >= 50 = WARM, else COOL


@dataclass(frozen=True)
class TimingConfig:
    """
    Best-day / best-time fit (25% and 20% of the launch score).

    The best bucket's average upvotes, capped at vote_ceiling, read as 0-100.
    """
    vote_ceiling: float = 100.0


@dataclass(frozen=True)
class CompetitionConfig:
    """
    Competition density (20% of the launch score, inverted).

    ratio = avg_votes / top_quartile_avg. A flat distribution (ratio near 1)
    means the top of the board is within reach.
    """
    low_ratio: float = 0.7     # > 0.7 = Low competition
    medium_ratio: float = 0.4  # > 0.4 = Medium, else High


@dataclass(frozen=True)
class ConfidenceConfig:
    """Sample-size driven confidence and the insufficient-data floor."""
    minimum_products: int = 3  # below = insufficient data sentinel
    high_samples: int = 10     # >= 10 = High
    medium_samples: int = 5    # >= 5 = Medium, else Low


@dataclass(frozen=True)
class HottestCategoryConfig:
    """
    Recommended category, picked from the FULL category universe.

    category_score = avg_votes * avg_weight + recent_ratio * recent_points
    """
    avg_weight: float = 0.6
    recent_points: float = 40.0


@dataclass(frozen=True)
class MomentumConfig:
    """
    Proximity of "now" to the best launch slot, in reference-zone hours.

    Rules are evaluated in order, first match wins:
        1. distance <= peak_distance and same day   -> PEAK_WINDOW
        2. approaching and distance <= approach_distance -> TRENDING_UP
        3. hours to midnight <= closing_hours and hour >= closing_start_hour -> CLOSING_SOON
        4. not approaching and distance >= decline_distance -> TRENDING_DOWN
        5. otherwise -> STABLE
    """
    peak_distance: int = 2
    approach_distance: int = 6
    closing_hours: int = 4
    closing_start_hour: int = 20
    decline_distance: int = 4


@dataclass(frozen=True)
class GapConfig:
    """
    Competitive gaps between adjacent ranks.

    A deficit of catchable_votes or fewer can plausibly be closed the same day.
    """
    catchable_votes: int = 50
    default_window: int = 10


@dataclass(frozen=True)
class TrackingConfig:
    """History window used when summarizing a tracked launch."""
    history_days: int = 7
    min_snapshots: int = 2


@dataclass
class AnalyticsConfig:
    """
    Global engine configuration.

    Aggregates every component configuration.
    Single entry point for calibration.
    """
    velocity: VelocityConfig = field(default_factory=VelocityConfig)
    category_heat: CategoryHeatConfig = field(default_factory=CategoryHeatConfig)
    timing: TimingConfig = field(default_factory=TimingConfig)
    competition: CompetitionConfig = field(default_factory=CompetitionConfig)
    confidence: ConfidenceConfig = field(default_factory=ConfidenceConfig)
    hottest_category: HottestCategoryConfig = field(default_factory=HottestCategoryConfig)
    momentum: MomentumConfig = field(default_factory=MomentumConfig)
    gaps: GapConfig = field(default_factory=GapConfig)
    tracking: TrackingConfig = field(default_factory=TrackingConfig)

    # Factor weights of the launch score (sum = 1.0)
    weights: dict = field(default_factory=lambda: {
        "category": 0.35,
        "best_day": 0.25,
        "best_time": 0.20,
        "competition": 0.20,
    })

    max_score: int = 100

    def validate(self) -> bool:
        """Checks the configuration is coherent."""
        total_weight = round(sum(self.weights.values()), 6)
        assert total_weight == 1.0, \
            f"Sum of weights ({total_weight}) != 1.0"
        assert self.velocity.hot_rate > self.velocity.rising_rate, \
            "hot_rate must exceed rising_rate"
        assert self.category_heat.hot_threshold > self.category_heat.warm_threshold, \
            "hot_threshold must exceed warm_threshold"
        assert self.competition.low_ratio > self.competition.medium_ratio, \
            "low_ratio must exceed medium_ratio"
        assert self.confidence.high_samples > self.confidence.medium_samples, \
            "high_samples must exceed medium_samples"
        assert self.velocity.min_hours_live > 0, "min_hours_live must be positive"
        return True


DEFAULT_CONFIG = AnalyticsConfig()
