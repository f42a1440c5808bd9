"""
Momentum of the current moment relative to the best launch slot.

Distances are in reference-zone hours, wrapped around midnight so they never
exceed 12. "Approaching" means the distance one hour from now is smaller
than the distance now.

Rules are evaluated top-down and the first match wins; the conditions
overlap (a peak-window hour may also be "approaching").
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .analytics_config import AnalyticsConfig, DEFAULT_CONFIG, MomentumConfig
from .launch_scorer import ScoreResult
from .rules import Rule, RuleList
from .time_context import TimeContext, Weekday

logger = logging.getLogger(__name__)


class MomentumState(Enum):
    PEAK_WINDOW = "PEAK_WINDOW"
    TRENDING_UP = "TRENDING_UP"
    TRENDING_DOWN = "TRENDING_DOWN"
    CLOSING_SOON = "CLOSING_SOON"
    STABLE = "STABLE"


def hour_distance(hour_a: int, hour_b: int) -> int:
    """Circular distance between two hours of day (0-12)."""
    distance = abs(hour_a - hour_b)
    if distance > 12:
        distance = 24 - distance
    return distance


@dataclass(frozen=True)
class MomentumInputs:
    """Everything the momentum rules look at."""
    current_hour: int
    current_day: Weekday
    best_hour: int
    best_day: Weekday
    config: MomentumConfig

    @property
    def hour_distance(self) -> int:
        return hour_distance(self.current_hour, self.best_hour)

    @property
    def next_hour_distance(self) -> int:
        return hour_distance((self.current_hour + 1) % 24, self.best_hour)

    @property
    def approaching(self) -> bool:
        return self.next_hour_distance < self.hour_distance

    @property
    def hours_until_midnight(self) -> int:
        return 24 - self.current_hour


MOMENTUM_RULES = RuleList(
    [
        Rule(
            "peak_window",
            lambda m: m.hour_distance <= m.config.peak_distance and m.current_day == m.best_day,
            MomentumState.PEAK_WINDOW,
        ),
        Rule(
            "trending_up",
            lambda m: m.approaching and m.hour_distance <= m.config.approach_distance,
            MomentumState.TRENDING_UP,
        ),
        Rule(
            "closing_soon",
            lambda m: m.hours_until_midnight <= m.config.closing_hours
            and m.current_hour >= m.config.closing_start_hour,
            MomentumState.CLOSING_SOON,
        ),
        Rule(
            "trending_down",
            lambda m: not m.approaching and m.hour_distance >= m.config.decline_distance,
            MomentumState.TRENDING_DOWN,
        ),
    ],
    default=MomentumState.STABLE,
)


def evaluate_momentum(
    best_hour: int,
    best_day: Weekday,
    time_context: TimeContext,
    config: Optional[AnalyticsConfig] = None,
) -> MomentumState:
    """
    Momentum state of `time_context` relative to the best slot.

    Pure function of (best_hour, best_day, reference-zone now).
    """
    inputs = MomentumInputs(
        current_hour=time_context.hour,
        current_day=time_context.weekday,
        best_hour=best_hour,
        best_day=Weekday(best_day),
        config=(config or DEFAULT_CONFIG).momentum,
    )
    rule, state = MOMENTUM_RULES.evaluate(inputs)
    logger.debug(
        "Momentum %s (rule=%s, distance=%d, approaching=%s)",
        state.value, rule or "default", inputs.hour_distance, inputs.approaching,
    )
    return state


def momentum_for(
    result: ScoreResult,
    time_context: TimeContext,
    config: Optional[AnalyticsConfig] = None,
) -> Optional[MomentumState]:
    """Momentum for a score result; None when the score is the insufficient-data sentinel."""
    if result.is_insufficient_data or result.best_hour is None or result.best_day is None:
        return None
    return evaluate_momentum(result.best_hour, result.best_day, time_context, config)
