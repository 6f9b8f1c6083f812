"""
Issue classifier: severity, impact and recency of critical community issues
"""

from datetime import datetime, timedelta, timezone
from typing import List

from loguru import logger

from core.config import ISSUE_WINDOWS
from core.exceptions import UpstreamError
from data.business_intelligence import BusinessIntelligenceSource
from models.issue import (
    BusinessImpact,
    CriticalIssue,
    IssueView,
    ResolutionUrgency,
    SamplePost,
    Severity,
)
from models.dashboard import IssueOutcome


ALLOWED_WINDOWS = ISSUE_WINDOWS
MS_PER_DAY = 86_400_000
EVIDENCE_LIMIT = 2
URGENCY_BANNER = "Immediate resolution required"
FETCH_FAILED_MESSAGE = "Failed to load critical issues"


def validate_window(days: int) -> int:
    if days not in ALLOWED_WINDOWS:
        raise ValueError(f"days must be one of {ALLOWED_WINDOWS}, got {days}")
    return days


def severity_style(severity) -> str:
    """Style token for a severity; unknown severities get the lowest tier"""
    return Severity(severity).style


def business_impact_icon(impact) -> str:
    return BusinessImpact(impact).icon


def _as_utc(moment: datetime) -> datetime:
    return moment if moment.tzinfo else moment.replace(tzinfo=timezone.utc)


def time_ago(timestamp: datetime, now: datetime | None = None) -> str:
    """Whole days elapsed, by floor division of milliseconds rather than calendar days"""
    now = _as_utc(now or datetime.now(timezone.utc))
    elapsed = now - _as_utc(timestamp)
    days = (elapsed // timedelta(milliseconds=1)) // MS_PER_DAY

    # Clock skew can put a report slightly in the future
    if days <= 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    return f"{days} days ago"


def urgency_banner(urgency) -> str | None:
    if ResolutionUrgency(urgency) == ResolutionUrgency.immediate:
        return URGENCY_BANNER
    return None


def to_view(issue: CriticalIssue, now: datetime | None = None) -> IssueView:
    return IssueView(
        issue_title=issue.issue_title,
        severity=issue.severity,
        severity_rank=issue.severity.rank,
        severity_style=severity_style(issue.severity),
        impact_icon=business_impact_icon(issue.business_impact),
        report_count=issue.report_count,
        affected_products=[product.upper() for product in issue.affected_products],
        first_reported=time_ago(issue.first_reported, now),
        latest_report=time_ago(issue.latest_report, now),
        evidence=issue.sample_posts[:EVIDENCE_LIMIT],
        urgency_banner=urgency_banner(issue.resolution_urgency),
    )


def classify_issues(issues: List[CriticalIssue], now: datetime | None = None) -> List[IssueView]:
    """Classify issues in upstream order"""
    return [to_view(issue, now) for issue in issues]


def demonstration_issue(now: datetime | None = None) -> CriticalIssue:
    """The single issue shown when the API cannot be reached"""
    now = _as_utc(now or datetime.now(timezone.utc))

    return CriticalIssue(
        issue_title="JSM Automation Failing After Update",
        severity=Severity.critical,
        report_count=12,
        affected_products=["jsm"],
        first_reported=now - timedelta(days=3),
        latest_report=now,
        business_impact=BusinessImpact.workflow_broken,
        sample_posts=[
            SamplePost(title="Automation rules not triggering", url="#", author="user123"),
            SamplePost(title="JSM 8.20 breaking automations", url="#", author="admin456"),
        ],
        resolution_urgency=ResolutionUrgency.immediate,
    )


class IssueClassifier:
    """Loads critical issues for a time window and classifies them"""

    def __init__(self, source: BusinessIntelligenceSource):
        self.source = source

    async def load(self, days: int, now: datetime | None = None) -> IssueOutcome:
        days = validate_window(days)

        try:
            issues = await self.source.fetch_critical_issues(days)
        except UpstreamError as e:
            logger.warning(f"Critical issues unavailable, showing demonstration issue: {e.detail}")
            return IssueOutcome.degraded(classify_issues([demonstration_issue(now)], now), FETCH_FAILED_MESSAGE)

        logger.info(f"Classified {len(issues)} critical issues for the last {days} days")
        return IssueOutcome.from_records(classify_issues(issues, now))
