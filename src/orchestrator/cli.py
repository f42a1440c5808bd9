"""
LaunchPulse CLI
===============

Command-line interface for the analytics engine, reading a ranking-feed
JSON file.

Commands:
    analyze     - Full analysis (score, momentum, gaps, actions)
    score       - Launch-opportunity score only
    gaps        - Competitive gaps between adjacent ranks
    track       - Live standing of one launch

Usage:
    python -m src.orchestrator.cli analyze --feed feed.json --category AI
    python -m src.orchestrator.cli score --feed feed.json --now 2025-03-04T09:00:00-08:00
    python -m src.orchestrator.cli gaps --feed feed.json --window 5
    python -m src.orchestrator.cli track --feed feed.json --slug my-launch --json
"""

import argparse
import json
import logging
import sys
from datetime import datetime, timezone
from typing import List, Optional

from src.analytics import FixedClock, LaunchAnalyticsEngine, SystemClock
from src.analytics.competitive_gap import analyze_gaps
from src.data.config import get_settings
from src.data.data_models import PreconditionViolation
from src.data.feed_models import load_feed

from .logging_config import setup_logging

logger = logging.getLogger(__name__)


def parse_instant(value: str) -> datetime:
    """ISO-8601 instant for --now; naive values are read as UTC."""
    try:
        instant = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO-8601 instant: {value}")
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant


def positive_int(value: str) -> int:
    """argparse type for --window."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got: {value}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got: {value}")
    return number


def build_engine(args) -> LaunchAnalyticsEngine:
    settings = get_settings().analytics
    clock = FixedClock(args.now) if args.now else SystemClock()
    return LaunchAnalyticsEngine(
        clock=clock,
        reference_zone=settings.reference_timezone,
        local_zone=settings.local_timezone,
    )


def _window(args) -> int:
    return args.window if args.window is not None else get_settings().analytics.gap_window


def _load(args):
    products = load_feed(args.feed, sort_by_votes=not args.keep_order)
    logger.info("Loaded %d products from %s", len(products), args.feed)
    return products


def cmd_analyze(args):
    """Full analysis pass."""
    products = _load(args)
    engine = build_engine(args)
    analysis = engine.analyze(
        products,
        category=args.category,
        tracked_slug=getattr(args, "slug", None),
        gap_window=_window(args),
    )

    if args.json:
        print(json.dumps(analysis.to_dict(), indent=2))
        return 0

    score = analysis.score
    print("=" * 60)
    print("LAUNCH ANALYSIS")
    print("=" * 60)
    print(f"Score: {score.score}/100 ({score.score_label})")
    print(f"Recommended category: {score.category} ({score.category_hotness.value})")
    print(f"Confidence: {score.confidence.value} ({score.sample_size} samples)")
    if score.best_time_label:
        print(f"Best slot: {score.best_time_label}")
    if analysis.local_best_time_label:
        print(f"Best slot (your time): {analysis.local_best_time_label}")
    if analysis.momentum:
        print(f"Momentum: {analysis.momentum.value}")
    print()

    print("Impacts:")
    for name, impact in score.impacts.items():
        print(f"  {name:12} {impact}")
    print()

    print("Next actions:")
    for action in analysis.actions:
        print(f"  - {action.title}: {action.detail}")
    return 0


def cmd_score(args):
    """Launch-opportunity score only."""
    products = _load(args)
    engine = build_engine(args)
    ctx = engine.time_context()
    result = engine.scorer.score(products, ctx.instant, args.category)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    print(result.get_explanation())
    return 0


def cmd_gaps(args):
    """Competitive gaps of the top of the board."""
    products = _load(args)
    window = _window(args)
    entries = analyze_gaps(products, window=window)

    if args.json:
        print(json.dumps([e.to_dict() for e in entries], indent=2))
        return 0

    print(f"{'#':>3}  {'Product':30} {'Votes':>6} {'Gap':>6}  Status")
    for entry in entries:
        gap = "-" if entry.gap_to_next is None else str(entry.gap_to_next)
        print(f"{entry.rank:>3}  {entry.product_name[:30]:30} {entry.votes_count:>6} {gap:>6}  {entry.label}")
    return 0


def cmd_track(args):
    """Live standing of one launch."""
    products = _load(args)
    engine = build_engine(args)
    analysis = engine.analyze(products, category=args.category, tracked_slug=args.slug)

    if analysis.standing is None:
        print(f"Launch '{args.slug}' is not on the board")
        return 1

    if args.json:
        print(json.dumps(analysis.standing.to_dict(), indent=2))
        return 0

    standing = analysis.standing
    print(f"{standing.product.name} - #{standing.rank} with {standing.product.votes_count} upvotes")
    print(f"Velocity: {standing.velocity.rate:.1f}/h ({standing.velocity.tier.value})")
    if standing.gap.is_leading:
        print("Leading the board")
    else:
        print(
            f"{standing.votes_to_next_rank} upvotes behind {standing.ahead_name} "
            f"({standing.gap.label})"
        )
    if analysis.actions:
        print(f"Next: {analysis.actions[0].title}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="launchpulse",
        description="LaunchPulse launch analytics CLI",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--feed", required=True, help="Path to a ranking-feed JSON file")
    common.add_argument("--now", type=parse_instant, help="Freeze the clock at this ISO-8601 instant")
    common.add_argument("--category", help="Category of the planned launch")
    common.add_argument(
        "--keep-order",
        action="store_true",
        help="Use the feed order as the ranking instead of sorting by votes",
    )
    common.add_argument("--json", action="store_true", help="Output as JSON")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    analyze_parser = subparsers.add_parser("analyze", parents=[common], help="Full analysis")
    analyze_parser.add_argument("--slug", help="Also report the standing of this launch")
    analyze_parser.add_argument("--window", type=positive_int, help="Products examined by gap analysis")

    subparsers.add_parser("score", parents=[common], help="Launch-opportunity score")

    gaps_parser = subparsers.add_parser("gaps", parents=[common], help="Competitive gaps")
    gaps_parser.add_argument("--window", type=positive_int, help="Products examined (default: settings)")

    track_parser = subparsers.add_parser("track", parents=[common], help="Standing of one launch")
    track_parser.add_argument("--slug", required=True, help="Slug of the tracked launch")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    log_settings = get_settings().logging
    setup_logging(
        level="DEBUG" if args.verbose else log_settings.level,
        json_output=log_settings.json_logs,
        log_file=log_settings.log_file,
    )

    if args.command is None:
        parser.print_help()
        return 1

    commands = {
        "analyze": cmd_analyze,
        "score": cmd_score,
        "gaps": cmd_gaps,
        "track": cmd_track,
    }

    try:
        return commands[args.command](args)
    except PreconditionViolation as e:
        logger.error("Invalid input: %s", e)
        return 1
    except (OSError, ValueError) as e:
        logger.error("Command %s failed: %s", args.command, e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
