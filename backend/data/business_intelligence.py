from loguru import logger

from models.discovery import Discovery
from models.issue import CriticalIssue
from .base import CommunitySource


class BusinessIntelligenceSource(CommunitySource):
    """Discoveries and critical issues from the business intelligence endpoints"""

    DISCOVERIES_PATH = "/api/business-intelligence/awesome-discoveries"
    CRITICAL_ISSUES_PATH = "/api/business-intelligence/critical-issues"

    async def fetch_discoveries(self) -> list[Discovery]:
        logger.info("Fetching awesome discoveries")

        payload = await self._get_json(self.DISCOVERIES_PATH)
        items = self._as_list(payload, "discoveries")
        for item in items:
            if isinstance(item, dict) and item.get("summary"):
                item["summary"] = self._clean_html(item["summary"])

        return self._parse_records(items, Discovery)

    async def fetch_critical_issues(self, days: int) -> list[CriticalIssue]:
        """Fetch issues reported within the window; the API does the date filtering"""
        logger.info(f"Fetching critical issues for the last {days} days")

        payload = await self._get_json(self.CRITICAL_ISSUES_PATH, params={"days": days})
        items = self._as_list(payload, "critical issues")

        return self._parse_records(items, CriticalIssue)
