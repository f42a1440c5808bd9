"""
Timing and competitive action suggestions.

One ordered rule list over (score, momentum, standing). Rules higher in the
list are more urgent; primary_action() returns the first match and
suggest_actions() every match in the same order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .launch_scorer import ScoreResult
from .momentum import MomentumState
from .rules import Rule, RuleList
from .time_context import format_hour
from .tracking import LaunchStanding
from .velocity import VelocityTier


class ActionKind(Enum):
    GATHER_DATA = "gather_data"
    LAUNCH_NOW = "launch_now"
    PUSH_FOR_RANK = "push_for_rank"
    DEFEND_LEAD = "defend_lead"
    ENGAGE = "engage"
    PREPARE = "prepare"
    RESCHEDULE = "reschedule"
    WAIT = "wait"
    HOLD = "hold"


@dataclass(frozen=True)
class ActionSuggestion:
    kind: ActionKind
    title: str
    detail: str

    def to_dict(self):
        return {"kind": self.kind.value, "title": self.title, "detail": self.detail}


@dataclass(frozen=True)
class AdvisoryContext:
    """Inputs of the action rules. `standing` is None for a planned launch."""
    score: ScoreResult
    momentum: Optional[MomentumState] = None
    standing: Optional[LaunchStanding] = None

    @property
    def best_slot(self) -> str:
        return self.score.best_time_label or "the best slot"


def _gather_data(ctx: AdvisoryContext) -> ActionSuggestion:
    return ActionSuggestion(
        ActionKind.GATHER_DATA,
        "Not enough launches to score",
        f"Only {ctx.score.sample_size} launches in the snapshot. Refresh the feed before deciding.",
    )


def _launch_now(ctx: AdvisoryContext) -> ActionSuggestion:
    return ActionSuggestion(
        ActionKind.LAUNCH_NOW,
        "Launch now",
        f"You are inside the peak window ({ctx.best_slot}).",
    )


def _push_for_rank(ctx: AdvisoryContext) -> ActionSuggestion:
    gap = ctx.standing.gap
    return ActionSuggestion(
        ActionKind.PUSH_FOR_RANK,
        f"Overtake {gap.ahead_name}",
        f"{gap.votes_to_overtake} more upvotes takes you to #{ctx.standing.rank - 1}.",
    )


def _defend_lead(ctx: AdvisoryContext) -> ActionSuggestion:
    return ActionSuggestion(
        ActionKind.DEFEND_LEAD,
        "Defend the #1 spot",
        "Keep replying to comments and share updates until the daily reset.",
    )


def _engage(ctx: AdvisoryContext) -> ActionSuggestion:
    return ActionSuggestion(
        ActionKind.ENGAGE,
        "Ride the momentum",
        f"{ctx.standing.velocity.rate:.0f} upvotes/hour. Answer every comment while it lasts.",
    )


def _prepare(ctx: AdvisoryContext) -> ActionSuggestion:
    return ActionSuggestion(
        ActionKind.PREPARE,
        "Get your assets ready",
        f"The best slot is approaching ({ctx.best_slot}).",
    )


def _reschedule(ctx: AdvisoryContext) -> ActionSuggestion:
    return ActionSuggestion(
        ActionKind.RESCHEDULE,
        "Today's board is closing",
        f"Schedule for the next {ctx.best_slot} instead of launching late.",
    )


def _wait(ctx: AdvisoryContext) -> ActionSuggestion:
    hour = ctx.score.best_hour
    when = format_hour(hour) if hour is not None else "the best hour"
    return ActionSuggestion(
        ActionKind.WAIT,
        "Wait for the next window",
        f"Launches around {when} perform best. Current timing is off-peak.",
    )


def _hold(ctx: AdvisoryContext) -> ActionSuggestion:
    return ActionSuggestion(
        ActionKind.HOLD,
        "Hold steady",
        "No strong timing or ranking signal right now.",
    )


ACTION_RULES = RuleList(
    [
        Rule("insufficient_data", lambda c: c.score.is_insufficient_data, _gather_data),
        Rule("peak_window", lambda c: c.momentum == MomentumState.PEAK_WINDOW, _launch_now),
        Rule(
            "catchable_gap",
            lambda c: c.standing is not None and not c.standing.gap.is_leading and c.standing.gap.catchable,
            _push_for_rank,
        ),
        Rule("leading", lambda c: c.standing is not None and c.standing.gap.is_leading, _defend_lead),
        Rule(
            "hot_velocity",
            lambda c: c.standing is not None and c.standing.velocity.tier == VelocityTier.HOT,
            _engage,
        ),
        Rule("trending_up", lambda c: c.momentum == MomentumState.TRENDING_UP, _prepare),
        Rule("closing_soon", lambda c: c.momentum == MomentumState.CLOSING_SOON, _reschedule),
        Rule("trending_down", lambda c: c.momentum == MomentumState.TRENDING_DOWN, _wait),
    ],
    default=_hold,
)


def primary_action(context: AdvisoryContext) -> ActionSuggestion:
    return ACTION_RULES.first_match(context)


def suggest_actions(context: AdvisoryContext, limit: Optional[int] = 3) -> List[ActionSuggestion]:
    """
    Every matching suggestion, most urgent first.

    Falls back to the default suggestion when nothing matches.
    """
    if context.score.is_insufficient_data:
        # Nothing else is meaningful without a score
        return [_gather_data(context)]
    matches = ACTION_RULES.all_matches(context) or [_hold(context)]
    return matches if limit is None else matches[:limit]
