"""
LaunchPulse Orchestrator Module
===============================

Entry points around the analytics engine.

Components:
    - CLI: Command-line interface over a ranking-feed file
    - setup_logging: Human-readable or JSON-lines logging

Usage:
    python -m src.orchestrator.cli analyze --feed feed.json
"""

from .logging_config import JSONFormatter, setup_logging

__all__ = [
    "JSONFormatter",
    "setup_logging",
]
