"""
Post query engine: filter, search and pagination for the community post feed
"""

import math
from typing import Optional, Union

from loguru import logger

from core.config import settings
from core.exceptions import UpstreamError
from data.posts import PostsSource
from models.dashboard import PostOutcome
from models.post import (
    ActionRequired,
    ListingRequest,
    Post,
    PostPage,
    PostView,
    QueryState,
    SearchRequest,
)
from models.vocabulary import ALL, category_color, sentiment_color


KEY_POINT_LIMIT = 3
HASHTAG_LIMIT = 5
MISSING_SUMMARY = "AI summary unavailable"
ESTIMATED_TOTAL_MESSAGE = "Post statistics unavailable; page count is estimated"


def compute_skip(page: int, page_size: int) -> int:
    return (page - 1) * page_size


def total_pages(total_posts: int, page_size: int) -> int:
    return math.ceil(total_posts / page_size)


def build_request(state: QueryState) -> Union[SearchRequest, ListingRequest]:
    """
    Pick the endpoint for a query state.

    A non-blank search query always goes to the search endpoint, which does not
    accept category or sentiment filters; those only apply to the listing.
    """
    skip = compute_skip(state.page, state.page_size)
    query = state.search_query.strip()

    if query:
        return SearchRequest(query=query, limit=state.page_size, skip=skip)

    return ListingRequest(
        limit=state.page_size,
        skip=skip,
        category=None if state.category_filter == ALL else state.category_filter,
        sentiment=None if state.sentiment_filter == ALL else state.sentiment_filter,
    )


def display_title(post: Post) -> str:
    if post.title.strip():
        return post.title
    return f"Discussion in {post.category.upper()}"


def action_badge(action) -> Optional[str]:
    level = ActionRequired(action)
    if level == ActionRequired.none:
        return None
    return f"{level.value.upper()} PRIORITY"


def to_view(post: Post) -> PostView:
    return PostView(
        id=post.id,
        display_title=display_title(post),
        category=post.category,
        category_color=category_color(post.category),
        author=post.author,
        date=post.date,
        url=post.url,
        sentiment_label=post.sentiment_label,
        sentiment_color=sentiment_color(post.sentiment_label),
        summary=post.ai_summary or post.excerpt or MISSING_SUMMARY,
        ai_category=post.ai_category,
        key_points=post.ai_key_points[:KEY_POINT_LIMIT],
        hashtags=post.ai_hashtags[:HASHTAG_LIMIT],
        action_badge=action_badge(post.ai_action_required),
    )


class PostQueryEngine:
    """
    Owns the feed's query state and re-fetches whenever it changes.

    Every fetch is tagged with a generation number. When several fetches
    overlap, only the one issued last is applied; earlier responses are
    discarded even if they resolve later.
    """

    def __init__(
        self,
        source: PostsSource,
        state: Optional[QueryState] = None,
        page_size: int = settings.POSTS_PAGE_SIZE,
        stats_fallback_total: int = settings.STATS_FALLBACK_TOTAL,
    ):
        self.source = source
        self.state = state or QueryState(page_size=page_size)
        self.stats_fallback_total = stats_fallback_total
        self.result: Optional[PostOutcome] = None
        self._generation = 0

    def _update(self, **changes) -> QueryState:
        self.state = QueryState.model_validate({**self.state.model_dump(), **changes})
        return self.state

    async def search(self, query: str) -> Optional[PostOutcome]:
        """Submit a search; results start again from the first page"""
        self._update(search_query=query, page=1)
        return await self.refresh()

    async def set_category(self, category: str) -> Optional[PostOutcome]:
        self._update(category_filter=category)
        return await self.refresh()

    async def set_sentiment(self, sentiment: str) -> Optional[PostOutcome]:
        self._update(sentiment_filter=sentiment)
        return await self.refresh()

    async def set_page(self, page: int) -> Optional[PostOutcome]:
        self._update(page=page)
        return await self.refresh()

    async def refresh(self) -> Optional[PostOutcome]:
        """Fetch for the current state; returns None if a newer fetch superseded this one"""
        self._generation += 1
        generation = self._generation

        outcome = await self._fetch(self.state)

        if generation != self._generation:
            logger.debug(f"Discarding superseded post fetch {generation} (latest is {self._generation})")
            return None

        self.result = outcome
        return outcome

    async def _fetch(self, state: QueryState) -> PostOutcome:
        request = build_request(state)

        try:
            if isinstance(request, SearchRequest):
                posts = await self.source.search_posts(request)
            else:
                posts = await self.source.list_posts(request)
        except UpstreamError as e:
            logger.error(f"Failed to load posts: {e.detail}")
            return PostOutcome.failed(e.detail or "Failed to load posts")

        total_is_estimate = False
        try:
            total = await self.source.fetch_total_posts()
        except UpstreamError as e:
            total = self.stats_fallback_total if posts else 0
            total_is_estimate = True
            logger.warning(f"Failed to load post statistics, estimating {total} total: {e.detail}")

        page = PostPage(
            posts=[to_view(post) for post in posts],
            page=state.page,
            page_size=state.page_size,
            total_posts=total,
            total_pages=total_pages(total, state.page_size),
            total_is_estimate=total_is_estimate,
        )

        if total_is_estimate:
            return PostOutcome.degraded(page, ESTIMATED_TOTAL_MESSAGE)
        return PostOutcome.ok(page) if page.posts else PostOutcome.empty(page)
