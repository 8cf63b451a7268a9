from abc import ABC, abstractmethod

from discuss_digest.models.item import FeedPage


class FeedProvider(ABC):
    """Abstract base class for paginated discussion feeds

    A provider answers one question: "give me ``page_size`` items starting
    at offset ``skip``, newest first". Paging, filtering and stopping are
    the fetcher's job.
    """

    @abstractmethod
    async def fetch_page(self, page_size: int, skip: int) -> FeedPage:
        """Request one page of the feed, ordered newest first

        Args:
            page_size: Maximum number of items to return
            skip: Offset of the first item

        Returns:
            FeedPage with the decoded items

        Raises:
            TransportError: If the request fails or times out
            DecodeError: If the response envelope is malformed
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging and identification"""
        pass
