"""Shared fixtures: a simulated discussion feed and item factories."""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional

import pytest

from discuss_digest.models.item import DiscussItem, FeedPage
from discuss_digest.services.providers.base import FeedProvider
from discuss_digest.utils.timestamps import format_timestamp

BASE_TIME = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def at(minute: int) -> datetime:
    """Point in time ``minute`` minutes after BASE_TIME."""
    return BASE_TIME + timedelta(minutes=minute)


class FakeFeedProvider(FeedProvider):
    """In-memory newest-first feed.

    Serves ``items[skip:skip + page_size]`` unless a scripted page or an
    error is registered for that ``skip``.
    """

    def __init__(
        self,
        items: Optional[List[DiscussItem]] = None,
        pages: Optional[Dict[int, FeedPage]] = None,
        errors: Optional[Dict[int, Exception]] = None,
    ):
        self.items = list(items or [])
        self.pages = pages or {}
        self.errors = errors or {}
        self.calls: List[tuple] = []

    @property
    def name(self) -> str:
        return "fake"

    async def fetch_page(self, page_size: int, skip: int) -> FeedPage:
        self.calls.append((page_size, skip))
        if skip in self.errors:
            raise self.errors[skip]
        if skip in self.pages:
            return self.pages[skip]
        chunk = self.items[skip : skip + page_size]
        return FeedPage(
            items=chunk, skip=skip, page_size=page_size, received=len(chunk)
        )


def build_item(minute=None, uuid=None, created_at=None, **overrides) -> DiscussItem:
    if created_at is None:
        created_at = format_timestamp(at(minute))
    uuid = uuid or f"item-{minute if minute is not None else created_at}"
    data = {
        "uuid": uuid,
        "topicId": 1000 + (minute or 0),
        "title": f"Post {uuid}",
        "slug": f"post-{uuid}",
        "summary": "",
        "author": {"userName": "alice"},
        "articleType": "DISCUSSION",
        "createdAt": created_at,
        "updatedAt": created_at,
    }
    data.update(overrides)
    return DiscussItem.model_validate(data)


@pytest.fixture
def make_item():
    """Factory for DiscussItem; ``make_item(10)`` is created at minute 10."""
    return build_item


@pytest.fixture
def make_feed():
    """Factory for FakeFeedProvider from creation minutes, newest first."""

    def _make(minutes=(), **kwargs) -> FakeFeedProvider:
        items = [build_item(m) for m in minutes]
        return FakeFeedProvider(items=items, **kwargs)

    return _make


@pytest.fixture
def at_minute():
    """``at_minute(7)`` is the datetime seven minutes after BASE_TIME."""
    return at


@pytest.fixture
def feed_provider_cls():
    return FakeFeedProvider
