import asyncio
from datetime import datetime, timezone
from typing import Awaitable, Optional, Type

import httpx
from loguru import logger

from core.config import Settings, settings
from data.business_intelligence import BusinessIntelligenceSource
from data.posts import PostsSource
from data.roadmap import RoadmapSource
from models.dashboard import (
    DashboardSnapshot,
    DiscoveryOutcome,
    IssueOutcome,
    PostOutcome,
    RoadmapOutcome,
)
from models.outcome import Outcome
from models.post import QueryState
from services.discovery_ranker import DiscoveryRanker, summarize_discoveries
from services.issue_classifier import IssueClassifier, validate_window
from services.post_query import PostQueryEngine
from services.roadmap_summarizer import RoadmapSummarizer


class DashboardService:
    """Main class that loads the four dashboard panels side by side"""

    def __init__(self, client: httpx.AsyncClient, config: Settings = settings):
        self.config = config

        source_options = dict(retry_attempts=config.RETRY_ATTEMPTS, retry_delay=config.RETRY_DELAY)
        business_intelligence = BusinessIntelligenceSource(client, **source_options)

        self.posts_source = PostsSource(client, **source_options)
        self.discovery_ranker = DiscoveryRanker(business_intelligence)
        self.issue_classifier = IssueClassifier(business_intelligence)
        self.roadmap_summarizer = RoadmapSummarizer(
            RoadmapSource(client, **source_options),
            recency_days=config.ROADMAP_RECENCY_DAYS,
        )

    def post_engine(self, state: Optional[QueryState] = None) -> PostQueryEngine:
        """A fresh query engine over the shared posts source"""
        return PostQueryEngine(
            self.posts_source,
            state=state,
            page_size=self.config.POSTS_PAGE_SIZE,
            stats_fallback_total=self.config.STATS_FALLBACK_TOTAL,
        )

    async def load_discoveries(self) -> DiscoveryOutcome:
        return await self._isolate("discoveries", self.discovery_ranker.load(), DiscoveryOutcome)

    async def load_critical_issues(self, days: Optional[int] = None) -> IssueOutcome:
        days = validate_window(self.config.DEFAULT_ISSUE_WINDOW if days is None else days)
        return await self._isolate("critical issues", self.issue_classifier.load(days), IssueOutcome)

    async def load_roadmap(self) -> RoadmapOutcome:
        return await self._isolate("roadmap", self.roadmap_summarizer.load(), RoadmapOutcome)

    async def load_posts(self, state: Optional[QueryState] = None) -> PostOutcome:
        engine = self.post_engine(state)
        return await self._isolate("posts", engine.refresh(), PostOutcome)

    async def load(self, days: Optional[int] = None, post_state: Optional[QueryState] = None) -> DashboardSnapshot:
        """Load every panel concurrently; one panel failing never blocks the others"""
        days = validate_window(self.config.DEFAULT_ISSUE_WINDOW if days is None else days)
        logger.info(f"Loading dashboard with a {days} day issue window")

        discoveries, issues, roadmap, posts = await asyncio.gather(
            self.load_discoveries(),
            self.load_critical_issues(days),
            self.load_roadmap(),
            self.load_posts(post_state),
        )

        digest = summarize_discoveries(discoveries.data) if discoveries.data is not None else None

        return DashboardSnapshot(
            generated_at=datetime.now(timezone.utc),
            issue_window=days,
            discoveries=discoveries,
            discovery_digest=digest,
            critical_issues=issues,
            roadmap=roadmap,
            posts=posts,
        )

    async def _isolate(self, panel: str, pending: Awaitable, outcome_type: Type[Outcome]) -> Outcome:
        """Await one panel, turning anything unexpected into a failed outcome for that panel alone"""
        try:
            return await pending
        except Exception as e:
            logger.exception(f"Error loading {panel} panel: {str(e)}")
            return outcome_type.failed(f"Failed to load {panel}")
