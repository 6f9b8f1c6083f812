"""
Dashboard snapshot: every panel's outcome from one load
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from .discovery import DiscoveryDigest, DiscoveryView
from .issue import IssueView
from .outcome import Outcome
from .post import PostPage
from .roadmap import RoadmapSummary

DiscoveryOutcome = Outcome[List[DiscoveryView]]
IssueOutcome = Outcome[List[IssueView]]
RoadmapOutcome = Outcome[RoadmapSummary]
PostOutcome = Outcome[PostPage]


class DashboardSnapshot(BaseModel):
    """Panels are loaded independently; each carries its own status"""

    generated_at: datetime
    issue_window: int = Field(description="Critical issue window in days")
    discoveries: DiscoveryOutcome
    discovery_digest: Optional[DiscoveryDigest] = None
    critical_issues: IssueOutcome
    roadmap: RoadmapOutcome
    posts: PostOutcome
