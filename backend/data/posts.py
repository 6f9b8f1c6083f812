from loguru import logger

from core.exceptions import MalformedResponse
from models.post import ListingRequest, Post, SearchRequest
from .base import CommunitySource


class PostsSource(CommunitySource):
    """Post listing, search and statistics endpoints"""

    LISTING_PATH = "/api/posts/with-summaries"
    SEARCH_PATH = "/api/posts/search/with-summaries"
    STATS_PATH = "/api/posts/stats/summary"

    async def list_posts(self, request: ListingRequest) -> list[Post]:
        logger.info(f"Listing posts: {request.model_dump(exclude_none=True)}")

        payload = await self._get_json(self.LISTING_PATH, params=request.model_dump(mode="json"))
        return self._parse_records(self._as_list(payload, "posts"), Post)

    async def search_posts(self, request: SearchRequest) -> list[Post]:
        logger.info(f"Searching posts for '{request.query}' (skip={request.skip})")

        payload = await self._get_json(self.SEARCH_PATH, params=request.model_dump(mode="json"))
        return self._parse_records(self._as_list(payload, "posts"), Post)

    async def fetch_total_posts(self) -> int:
        payload = await self._get_json(self.STATS_PATH)

        total = payload.get("total_posts") if isinstance(payload, dict) else None
        if not isinstance(total, int) or isinstance(total, bool) or total < 0:
            raise MalformedResponse("Post statistics lack a valid total_posts")

        return total
