"""
LaunchPulse Feed Models
=======================

Pydantic models for the ranking-feed payload.
Parsing only: fetching the feed is the caller's job.

Two payload shapes are accepted:
    - GraphQL: {"data": {"posts": {"edges": [{"node": {...}}]}}}
    - Flat:    [{"id": ..., "votesCount": ..., "allCategories": [...]}, ...]
"""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .data_models import PreconditionViolation, Product

logger = logging.getLogger(__name__)

DEFAULT_CATEGORY = "General"


class TopicNode(BaseModel):
    name: str


class TopicEdge(BaseModel):
    node: TopicNode


class TopicConnection(BaseModel):
    edges: List[TopicEdge] = Field(default_factory=list)


class FeedPost(BaseModel):
    """
    One post of the ranking feed.

    Field names follow the feed (camelCase); snake_case is accepted too.
    """
    id: str
    name: str
    slug: str = ""
    url: str = ""
    tagline: str = ""
    votesCount: int = Field(alias="votes_count", ge=0)
    commentsCount: int = Field(default=0, alias="comments_count", ge=0)
    createdAt: datetime = Field(alias="created_at")
    topics: Optional[TopicConnection] = None
    category: Optional[str] = None
    allCategories: List[str] = Field(default_factory=list, alias="all_categories")

    class Config:
        populate_by_name = True

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return str(value) if isinstance(value, int) else value

    def category_names(self) -> List[str]:
        """
        Topic names (GraphQL) or explicit categories (flat), primary first.

        An explicit `category` is the primary: it is moved to the front, or
        prepended when the tag list does not carry it.
        """
        names = [e.node.name for e in self.topics.edges] if self.topics else []
        if not names:
            names = list(self.allCategories)
        if self.category:
            names = [self.category] + [n for n in names if n != self.category]
        return names

    def to_product(self, rank: int) -> Product:
        names = self.category_names()
        created = self.createdAt
        if created.tzinfo is None:
            created = created.replace(tzinfo=timezone.utc)
        return Product(
            id=self.id,
            name=self.name,
            slug=self.slug or self.id,
            url=self.url,
            tagline=self.tagline,
            category=names[0] if names else DEFAULT_CATEGORY,
            all_categories=tuple(names) or (DEFAULT_CATEGORY,),
            votes_count=self.votesCount,
            comments_count=self.commentsCount,
            created_at=created,
            rank=rank,
        )


class PostEdge(BaseModel):
    node: FeedPost


class PostConnection(BaseModel):
    edges: List[PostEdge] = Field(default_factory=list)


class FeedData(BaseModel):
    posts: PostConnection


class FeedResponse(BaseModel):
    """GraphQL response envelope."""
    data: FeedData


def _posts(payload: Union[dict, list]) -> List[FeedPost]:
    if isinstance(payload, list):
        return [FeedPost.model_validate(item) for item in payload]
    if isinstance(payload, dict) and "data" in payload:
        return [edge.node for edge in FeedResponse.model_validate(payload).data.posts.edges]
    raise PreconditionViolation("unrecognized feed payload: expected a list or a GraphQL envelope")


def parse_feed(payload: Union[dict, list], sort_by_votes: bool = True) -> List[Product]:
    """
    Convert a feed payload into ranked Products.

    Args:
        payload: Decoded JSON (GraphQL envelope or flat list).
        sort_by_votes: Rank by votes descending (stable). False keeps the
            feed order as the ranking.

    Returns:
        Products with ranks 1..n, in rank order.

    Raises:
        PreconditionViolation: If the payload does not validate.
    """
    try:
        posts = _posts(payload)
    except ValidationError as e:
        raise PreconditionViolation(f"invalid feed payload: {e.error_count()} error(s)\n{e}") from e

    if sort_by_votes:
        posts = sorted(posts, key=lambda p: p.votesCount, reverse=True)

    products = [post.to_product(rank) for rank, post in enumerate(posts, start=1)]
    logger.debug("Parsed %d products from feed", len(products))
    return products


def load_feed(path: Union[str, Path], sort_by_votes: bool = True) -> List[Product]:
    """Read a JSON feed file and parse it."""
    with open(path, "r", encoding="utf-8") as f:
        payload: Any = json.load(f)
    return parse_feed(payload, sort_by_votes=sort_by_votes)
