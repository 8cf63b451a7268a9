"""Incremental fetcher: everything in the feed newer than a cutoff.

The feed has no time-range filter, only "newest first, skip N, take M".
The fetcher pages through it from the top and stops as soon as it has
seen the cutoff, so a run costs one or two requests instead of the whole
feed history.

Stopping rule, evaluated after each page has been scanned:

1. empty page: nothing more exists
2. an item at or before the cutoff was seen: everything further down is
   older, stop (this wins over rule 3)
3. fewer entries than requested: end of feed
4. otherwise advance ``skip`` by ``page_size`` and fetch the next page

Usage:
    fetcher = IncrementalFetcher(provider, page_size=100)
    items = await fetcher.fetch_since(cutoff)
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

import structlog

from discuss_digest.models.item import DiscussItem
from discuss_digest.services.providers.base import FeedProvider
from discuss_digest.utils.exceptions import FetchError, ItemTimestampParseError
from discuss_digest.utils.timestamps import format_timestamp, parse_timestamp

logger = structlog.get_logger()


class StopReason(str, Enum):
    """Terminal success states of one fetch"""

    EMPTY_PAGE = "empty_page"
    SHORT_PAGE = "short_page"
    BOUNDARY_CROSSED = "boundary_crossed"


@dataclass
class FetchResult:
    """Items newer than the cutoff plus how paging ended."""

    cutoff: datetime
    items: List[DiscussItem] = field(default_factory=list)
    pages_fetched: int = 0
    stop_reason: Optional[StopReason] = None
    skipped_items: int = 0
    newest_created_at: Optional[datetime] = None

    @property
    def is_empty(self) -> bool:
        return not self.items


class IncrementalFetcher:
    """Fetch feed items published strictly after a cutoff.

    Stateless between calls: the result depends only on the cutoff and
    what the provider returns.

    Attributes:
        provider: Feed query collaborator
        page_size: Items requested per page
        scan_full_page_on_boundary: When True, finish scanning a page after
            the first item at/before the cutoff so newer items later in the
            same page are still collected. When False, stop scanning at
            that item.
    """

    def __init__(
        self,
        provider: FeedProvider,
        page_size: int = 100,
        scan_full_page_on_boundary: bool = True,
    ) -> None:
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.provider = provider
        self.page_size = page_size
        self.scan_full_page_on_boundary = scan_full_page_on_boundary

    async def fetch_since(self, cutoff: datetime) -> List[DiscussItem]:
        """Return items created after ``cutoff``, newest first.

        Raises:
            ValueError: If cutoff is naive
            TransportError: If a page request fails (partial results discarded)
            DecodeError: If a page response is malformed
        """
        result = await self.fetch_window(cutoff)
        return result.items

    async def fetch_window(self, cutoff: datetime) -> FetchResult:
        """Same as :meth:`fetch_since` with paging statistics attached."""
        if cutoff.tzinfo is None:
            raise ValueError("`cutoff` datetime must be timezone-aware")

        accumulated: List[DiscussItem] = []
        newest: Optional[datetime] = None
        skipped = 0
        pages = 0
        skip = 0

        log = logger.bind(
            provider=self.provider.name,
            cutoff=format_timestamp(cutoff),
            page_size=self.page_size,
        )

        while True:
            log.info("fetching_page", skip=skip)
            try:
                page = await self.provider.fetch_page(
                    page_size=self.page_size, skip=skip
                )
            except FetchError as e:
                log.error(
                    "fetch_failed",
                    skip=skip,
                    pages_fetched=pages,
                    discarded_items=len(accumulated),
                    error=str(e),
                )
                raise
            pages += 1

            if page.is_empty:
                stop_reason = StopReason.EMPTY_PAGE
                break

            boundary_crossed = False
            for item in page.items:
                try:
                    created = parse_timestamp(item.created_at)
                except ItemTimestampParseError:
                    skipped += 1
                    log.warning(
                        "item_timestamp_unparseable",
                        uuid=item.uuid,
                        created_at=item.created_at,
                    )
                    continue

                if created > cutoff:
                    accumulated.append(item)
                    if newest is None or created > newest:
                        newest = created
                else:
                    boundary_crossed = True
                    if not self.scan_full_page_on_boundary:
                        break

            if boundary_crossed:
                stop_reason = StopReason.BOUNDARY_CROSSED
                break

            if page.is_short:
                stop_reason = StopReason.SHORT_PAGE
                break

            skip += self.page_size

        log.info(
            "fetch_completed",
            items=len(accumulated),
            pages_fetched=pages,
            stop_reason=stop_reason.value,
            skipped_items=skipped,
        )

        return FetchResult(
            cutoff=cutoff,
            items=accumulated,
            pages_fetched=pages,
            stop_reason=stop_reason,
            skipped_items=skipped,
            newest_created_at=newest,
        )
