import aiohttp
import asyncio
from typing import Any, Dict, List, Optional
import structlog
from pydantic import ValidationError

from discuss_digest.services.providers.base import FeedProvider
from discuss_digest.models.config import FeedSettings
from discuss_digest.models.item import DiscussItem, FeedPage
from discuss_digest.utils.exceptions import DecodeError, TransportError
from discuss_digest.utils.rate_limiter import RateLimiter

logger = structlog.get_logger()

DISCUSS_TOPICS_QUERY = """
query discussPostItems($orderBy: ArticleOrderByEnum, $keywords: [String]!, $tagSlugs: [String!], $skip: Int, $first: Int) {
  ugcArticleDiscussionArticles(
    orderBy: $orderBy
    keywords: $keywords
    tagSlugs: $tagSlugs
    skip: $skip
    first: $first
  ) {
    totalNum
    edges {
      node {
        uuid
        topicId
        title
        slug
        summary
        author {
          userName
        }
        createdAt
        updatedAt
        articleType
        tags {
          name
          slug
          tagType
        }
        reactions {
          count
          reactionType
        }
      }
    }
  }
}
"""


class LeetCodeDiscussProvider(FeedProvider):
    """Page through LeetCode Discuss posts via the public GraphQL API"""

    def __init__(
        self, settings: FeedSettings, rate_limiter: Optional[RateLimiter] = None
    ):
        self.settings = settings
        self.rate_limiter = rate_limiter or RateLimiter(
            requests_per_minute=settings.requests_per_minute
        )

    @property
    def name(self) -> str:
        """Provider name"""
        return "leetcode_discuss"

    async def fetch_page(self, page_size: int, skip: int) -> FeedPage:
        """Fetch one newest-first page; a single attempt, no retry"""
        payload = self._build_payload(page_size, skip)

        await self.rate_limiter.acquire()

        try:
            timeout = aiohttp.ClientTimeout(total=self.settings.timeout_seconds)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.post(
                    str(self.settings.endpoint),
                    json=payload,
                    headers=self._build_headers(),
                ) as response:

                    if response.status != 200:
                        text = await response.text()
                        logger.error(
                            "feed_api_error",
                            status=response.status,
                            skip=skip,
                            body=text[:500],
                        )
                        raise TransportError(
                            f"Feed API returned status {response.status}: {text[:200]}",
                            skip=skip,
                            status=response.status,
                        )

                    try:
                        data = await response.json(content_type=None)
                    except (aiohttp.ContentTypeError, ValueError) as e:
                        raise DecodeError(
                            f"Failed to decode feed response: {e}", skip=skip
                        ) from e

        except asyncio.TimeoutError as e:
            logger.error("feed_api_timeout", skip=skip)
            raise TransportError("Feed request timed out", skip=skip) from e
        except aiohttp.ClientError as e:
            logger.error("feed_api_request_failed", skip=skip, error=str(e))
            raise TransportError(f"Feed request failed: {e}", skip=skip) from e

        page = self._parse_response(data, page_size=page_size, skip=skip)

        logger.debug(
            "feed_page_received",
            provider=self.name,
            skip=skip,
            received=page.received,
            items=len(page.items),
        )

        return page

    def _build_payload(self, page_size: int, skip: int) -> Dict[str, Any]:
        """GraphQL request body for one page"""
        return {
            "query": DISCUSS_TOPICS_QUERY,
            "variables": {
                "orderBy": self.settings.order_by,
                "keywords": list(self.settings.keywords),
                "tagSlugs": list(self.settings.tag_slugs),
                "skip": skip,
                "first": page_size,
            },
        }

    def _build_headers(self) -> Dict[str, str]:
        return {
            "Content-Type": "application/json",
            "User-Agent": self.settings.user_agent,
            "Referer": "https://leetcode.com/discuss/",
            "Origin": "https://leetcode.com",
        }

    def _parse_response(self, data: Any, page_size: int, skip: int) -> FeedPage:
        """Unwrap the GraphQL envelope into a FeedPage"""
        if not isinstance(data, dict):
            raise DecodeError("Feed response is not a JSON object", skip=skip)

        errors = data.get("errors")
        if errors:
            if not isinstance(errors, list):
                raise DecodeError("Feed response errors is not a list", skip=skip)
            messages = [
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            ]
            raise DecodeError(f"GraphQL errors: {'; '.join(messages)}", skip=skip)

        payload = data.get("data")
        if not isinstance(payload, dict):
            raise DecodeError("Feed response data is not a JSON object", skip=skip)

        articles = payload.get("ugcArticleDiscussionArticles")
        if not isinstance(articles, dict):
            raise DecodeError(
                "Feed response is missing ugcArticleDiscussionArticles", skip=skip
            )

        if "edges" not in articles:
            raise DecodeError("Feed response is missing edges", skip=skip)

        edges = articles["edges"] or []
        if not isinstance(edges, list):
            raise DecodeError("Feed response edges is not a list", skip=skip)

        items: List[DiscussItem] = []
        for edge in edges:
            node = edge.get("node") if isinstance(edge, dict) else None
            try:
                items.append(DiscussItem.model_validate(node))
            except ValidationError as e:
                logger.warning(
                    "item_parsing_failed",
                    skip=skip,
                    uuid=node.get("uuid") if isinstance(node, dict) else None,
                    error=str(e),
                )
                continue

        total_num = articles.get("totalNum")
        return FeedPage(
            items=items,
            skip=skip,
            page_size=page_size,
            received=len(edges),
            total_num=total_num if isinstance(total_num, int) else None,
        )
