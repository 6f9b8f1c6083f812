from loguru import logger

from models.roadmap import Platform, RoadmapFeature, RoadmapSnapshot
from .base import CommunitySource


class RoadmapSource(CommunitySource):
    """Published product roadmaps, one snapshot per platform"""

    async def fetch_snapshot(self, platform: Platform) -> RoadmapSnapshot:
        logger.info(f"Fetching {platform.label} roadmap")

        payload = await self._get_json(platform.path)
        raw_features = payload.get("features") if isinstance(payload, dict) else payload
        items = self._as_list(raw_features, f"{platform.label} roadmap features")

        for item in items:
            if isinstance(item, dict) and item.get("description"):
                item["description"] = self._clean_html(item["description"])

        features = self._parse_records(items, RoadmapFeature)
        logger.info(f"Loaded {len(features)} {platform.label} roadmap features")

        return RoadmapSnapshot(platform=platform, features=features)
