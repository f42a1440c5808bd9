"""
LaunchPulse Analytics Module
============================

Deterministic launch analytics over a snapshot of ranked products.

Components:
    - time_context: reference-zone "now" with an injectable clock
    - velocity: upvotes/hour tiers (HOT, RISING, SLOW)
    - aggregator: category / weekday / hour averages
    - LaunchScorer: weighted 0-100 launch-opportunity score
    - momentum: proximity of "now" to the best launch slot
    - competitive_gap: catch-up gaps between adjacent ranks
    - tracking / recommendations: live standing and next actions
    - LaunchAnalyticsEngine: one call running all of the above

Usage:
    from src.analytics import LaunchAnalyticsEngine

    engine = LaunchAnalyticsEngine()
    analysis = engine.analyze(products, category="Productivity")

    print(analysis.score.score)
    print(analysis.score.best_time_label)
"""

from .analytics_config import AnalyticsConfig, DEFAULT_CONFIG
from .time_context import (
    REFERENCE_TIMEZONE,
    Clock,
    FixedClock,
    SystemClock,
    TimeContext,
    Weekday,
    now,
)
from .velocity import VelocityTier, VelocityReading, classify_velocity, classify_all
from .aggregator import AggregateSnapshot, BucketStats, aggregate
from .launch_scorer import (
    LaunchScorer,
    ScoreResult,
    ComponentScore,
    CategoryHotness,
    CompetitionLevel,
    Confidence,
)
from .momentum import MomentumState, evaluate_momentum, momentum_for
from .competitive_gap import GapEntry, analyze_gaps
from .tracking import LaunchStanding, StandingTrend, locate_standing, summarize_history, take_snapshot
from .recommendations import ActionKind, ActionSuggestion, AdvisoryContext, suggest_actions, primary_action
from .engine import LaunchAnalyticsEngine, LaunchAnalysis

__all__ = [
    # Configuration
    "AnalyticsConfig",
    "DEFAULT_CONFIG",
    # Time
    "REFERENCE_TIMEZONE",
    "Clock",
    "FixedClock",
    "SystemClock",
    "TimeContext",
    "Weekday",
    "now",
    # Velocity
    "VelocityTier",
    "VelocityReading",
    "classify_velocity",
    "classify_all",
    # Aggregation & scoring
    "AggregateSnapshot",
    "BucketStats",
    "aggregate",
    "LaunchScorer",
    "ScoreResult",
    "ComponentScore",
    "CategoryHotness",
    "CompetitionLevel",
    "Confidence",
    # Momentum & gaps
    "MomentumState",
    "evaluate_momentum",
    "momentum_for",
    "GapEntry",
    "analyze_gaps",
    # Tracking & actions
    "LaunchStanding",
    "StandingTrend",
    "locate_standing",
    "summarize_history",
    "take_snapshot",
    "ActionKind",
    "ActionSuggestion",
    "AdvisoryContext",
    "suggest_actions",
    "primary_action",
    # Facade
    "LaunchAnalyticsEngine",
    "LaunchAnalysis",
]
