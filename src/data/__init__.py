"""
LaunchPulse Data Module
=======================

Input records and feed parsing for the analytics engine.

This module provides:
    - Product / HuntSnapshot: records consumed by the engine
    - parse_feed / load_feed: ranking-feed payload -> ranked Products
    - Settings: environment-driven configuration

Quick Start:
    from src.data import load_feed

    products = load_feed("feed.json")

Configuration:
    Set environment variables or create a .env file.
    See src/data/config.py for all available options.
"""

from .config import get_settings, load_settings, Settings
from .data_models import Product, HuntSnapshot, PreconditionViolation
from .feed_models import FeedPost, FeedResponse, parse_feed, load_feed

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "get_settings",
    "load_settings",
    "Settings",
    # Data models
    "Product",
    "HuntSnapshot",
    "PreconditionViolation",
    # Feed
    "FeedPost",
    "FeedResponse",
    "parse_feed",
    "load_feed",
]
