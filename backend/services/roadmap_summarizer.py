"""
Roadmap summarizer

Turns the cloud and data center roadmap snapshots into four short narrative
summaries: released and upcoming features for each platform. Summaries are
templated from the feature data; nothing here calls a language model.
"""

import asyncio
import re
from datetime import date, datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from loguru import logger

from core.config import settings
from core.exceptions import PartialDegradation
from data.roadmap import RoadmapSource
from models.dashboard import RoadmapOutcome
from models.roadmap import (
    Platform,
    PlatformCounts,
    PlatformSummaries,
    ReleaseStatus,
    RoadmapFeature,
    RoadmapSnapshot,
    RoadmapSummary,
)


MAX_PRODUCT_HIGHLIGHTS = 3
MAX_TITLES_PER_PRODUCT = 2
MAX_THEMES = 3
FALLBACK_THEME = "Platform improvements"

# Keyword -> theme label, matched as case-insensitive substrings of the description
THEME_KEYWORDS = (
    ("ai", "AI capabilities"),
    ("security", "Security enhancements"),
    ("integration", "Integration improvements"),
    ("performance", "Performance optimization"),
    ("automation", "Automation features"),
)

QUARTER_PATTERN = re.compile(r"^\s*Q([1-4])\s+(\d{4})\s*$", re.IGNORECASE)


def parse_quarter(quarter: str) -> Optional[date]:
    """'Q3 2025' -> date(2025, 7, 1); None when the text is not a quarter"""
    match = QUARTER_PATTERN.match(quarter or "")
    if not match:
        return None

    q, year = int(match.group(1)), int(match.group(2))
    return date(year, (q - 1) * 3 + 1, 1)


def within_recency_window(feature: RoadmapFeature, window_days: int, today: date) -> bool:
    """Keep features whose quarter starts within ±window_days; unparseable quarters are kept"""
    starts = parse_quarter(feature.quarter)
    if starts is None:
        return True
    return abs((starts - today).days) <= window_days


def partition_features(
    features: List[RoadmapFeature],
) -> Tuple[List[RoadmapFeature], List[RoadmapFeature]]:
    """
    Split into (released, upcoming).

    The partitions are not exclusive: a status such as "Available in beta, GA
    planned" puts the feature in both. Uncategorized features are left out.
    """
    released, upcoming = [], []

    for feature in features:
        statuses = feature.release_statuses
        if ReleaseStatus.released in statuses:
            released.append(feature)
        if ReleaseStatus.upcoming in statuses:
            upcoming.append(feature)
        if not statuses:
            logger.debug(f"Roadmap feature '{feature.title}' has uncategorized status '{feature.status}'")

    return released, upcoming


def create_released_summary(features: List[RoadmapFeature], platform: str) -> str:
    if not features:
        return f"No major releases in the past 3 months for {platform}."

    # Titles grouped by product, in first-seen order
    product_groups: Dict[str, List[str]] = {}
    for feature in features:
        for product in feature.products:
            product_groups.setdefault(product, []).append(feature.title)

    highlights = [
        f"{product.upper()}: {', '.join(titles[:MAX_TITLES_PER_PRODUCT])}"
        for product, titles in list(product_groups.items())[:MAX_PRODUCT_HIGHLIGHTS]
    ]

    return (
        f"Recent {platform} releases include {len(features)} new features. "
        f"Key highlights: {'; '.join(highlights)}. "
        "Focus areas include enhanced automation, improved security, and better integration capabilities."
    )


def extract_themes(features: List[RoadmapFeature]) -> List[str]:
    """Distinct theme labels in scan order: by feature, then by position in the description"""
    themes: List[str] = []

    for feature in features:
        text = feature.description.lower()
        hits = []
        for keyword, label in THEME_KEYWORDS:
            position = text.find(keyword)
            if position >= 0:
                hits.append((position, label))

        for _, label in sorted(hits):
            if label not in themes:
                themes.append(label)

    return themes


def create_upcoming_summary(features: List[RoadmapFeature], platform: str) -> str:
    if not features:
        return f"No major features announced for the next 3 months on {platform}."

    theme_list = ", ".join(extract_themes(features)[:MAX_THEMES])

    return (
        f"{len(features)} features in development for {platform}. "
        f"Strategic focus: {theme_list or FALLBACK_THEME}. "
        "Expected to enhance workflow efficiency and team collaboration."
    )


def summarize_roadmaps(
    cloud: RoadmapSnapshot,
    datacenter: RoadmapSnapshot,
    recency_days: Optional[int] = None,
    today: Optional[date] = None,
) -> RoadmapSummary:
    """Four independent summaries from the two platform snapshots"""
    released: Dict[Platform, str] = {}
    upcoming: Dict[Platform, str] = {}
    stats: Dict[Platform, PlatformCounts] = {}

    for snapshot in (cloud, datacenter):
        features = snapshot.features
        if recency_days is not None:
            today = today or datetime.now(timezone.utc).date()
            features = [f for f in features if within_recency_window(f, recency_days, today)]

        released_features, upcoming_features = partition_features(features)
        label = snapshot.platform.label

        released[snapshot.platform] = create_released_summary(released_features, label)
        upcoming[snapshot.platform] = create_upcoming_summary(upcoming_features, label)
        stats[snapshot.platform] = PlatformCounts(
            released=len(released_features),
            upcoming=len(upcoming_features),
        )

    return RoadmapSummary(
        released=PlatformSummaries(cloud=released[Platform.cloud], datacenter=released[Platform.datacenter]),
        upcoming=PlatformSummaries(cloud=upcoming[Platform.cloud], datacenter=upcoming[Platform.datacenter]),
        stats=stats,
    )


class RoadmapSummarizer:
    """Fetches both roadmaps concurrently and summarizes them only when both arrive"""

    def __init__(self, source: RoadmapSource, recency_days: Optional[int] = settings.ROADMAP_RECENCY_DAYS):
        self.source = source
        self.recency_days = recency_days

    async def fetch_snapshots(self) -> Tuple[RoadmapSnapshot, RoadmapSnapshot]:
        results = await asyncio.gather(
            self.source.fetch_snapshot(Platform.cloud),
            self.source.fetch_snapshot(Platform.datacenter),
            return_exceptions=True,
        )

        for platform, result in zip((Platform.cloud, Platform.datacenter), results):
            if isinstance(result, Exception):
                raise PartialDegradation(
                    f"{platform.label} roadmap unavailable: {result}",
                    failed_part=platform.value,
                ) from result

        return results[0], results[1]

    async def load(self, today: Optional[date] = None) -> RoadmapOutcome:
        try:
            cloud, datacenter = await self.fetch_snapshots()
        except PartialDegradation as e:
            logger.error(f"Withholding roadmap summary, {e.failed_part} snapshot missing: {e.detail}")
            return RoadmapOutcome.failed(e.detail)

        summary = summarize_roadmaps(cloud, datacenter, self.recency_days, today)
        logger.info(
            f"Summarized roadmaps: {summary.stats[Platform.cloud].released} cloud and "
            f"{summary.stats[Platform.datacenter].released} data center releases"
        )
        return RoadmapOutcome.ok(summary)
