"""
Discovery ranker: classifies community discoveries for the dashboard
"""

from typing import List

from loguru import logger

from core.exceptions import UpstreamError
from data.business_intelligence import BusinessIntelligenceSource
from models.discovery import (
    Discovery,
    DiscoveryDigest,
    DiscoveryType,
    DiscoveryView,
    EngagementPotential,
    TechnicalLevel,
)
from models.dashboard import DiscoveryOutcome


HIGH_ENGAGEMENT_BADGE = "High engagement potential"
FETCH_FAILED_MESSAGE = "Failed to load discoveries"

# Shown when the API cannot be reached, so the panel never reads as "no discoveries"
FALLBACK_DISCOVERIES = (
    Discovery(
        title="How Netflix uses Jira for content pipeline management",
        summary=(
            "Detailed case study showing how Netflix manages their entire content production "
            "pipeline using Jira with custom workflows and integrations"
        ),
        author="netflix_engineer",
        url="#",
        products_used=["jira", "confluence"],
        technical_level=TechnicalLevel.expert,
        has_screenshots=True,
        engagement_potential=EngagementPotential.high,
        discovery_type=DiscoveryType.use_case,
    ),
    Discovery(
        title="Automated incident response with JSM + PagerDuty + Slack",
        summary="Complete guide to setting up automated incident management that reduced response time by 80%",
        author="devops_guru",
        url="#",
        products_used=["jsm"],
        technical_level=TechnicalLevel.advanced,
        has_screenshots=True,
        engagement_potential=EngagementPotential.high,
        discovery_type=DiscoveryType.integration,
    ),
)


def technical_level_icon(level) -> str:
    """Icon for a technical level; anything unrecognized is treated as basic"""
    return TechnicalLevel(level).icon


def engagement_badge(potential) -> str | None:
    """Only high engagement potential earns a badge"""
    if EngagementPotential(potential) == EngagementPotential.high:
        return HIGH_ENGAGEMENT_BADGE
    return None


def discovery_type_label(discovery_type) -> str:
    return DiscoveryType(discovery_type).label


def to_view(discovery: Discovery) -> DiscoveryView:
    return DiscoveryView(
        title=discovery.title,
        summary=discovery.summary,
        author=discovery.author,
        url=discovery.url,
        products=[product.upper() for product in discovery.products_used],
        technical_level=discovery.technical_level,
        level_icon=technical_level_icon(discovery.technical_level),
        type_label=discovery_type_label(discovery.discovery_type),
        engagement_badge=engagement_badge(discovery.engagement_potential),
        visual_guide=discovery.has_screenshots,
    )


def rank_discoveries(discoveries: List[Discovery]) -> List[DiscoveryView]:
    """Classify each discovery, keeping the upstream order"""
    return [to_view(discovery) for discovery in discoveries]


def summarize_discoveries(views: List[DiscoveryView]) -> DiscoveryDigest:
    return DiscoveryDigest(
        total=len(views),
        high_engagement=len([v for v in views if v.engagement_badge]),
    )


class DiscoveryRanker:
    """Loads discoveries and classifies them, substituting demo data on failure"""

    def __init__(self, source: BusinessIntelligenceSource):
        self.source = source

    async def load(self) -> DiscoveryOutcome:
        try:
            discoveries = await self.source.fetch_discoveries()
        except UpstreamError as e:
            logger.warning(f"Discoveries unavailable, showing fallback set: {e.detail}")
            return DiscoveryOutcome.degraded(rank_discoveries(list(FALLBACK_DISCOVERIES)), FETCH_FAILED_MESSAGE)

        logger.info(f"Ranked {len(discoveries)} discoveries")
        return DiscoveryOutcome.from_records(rank_discoveries(discoveries))
