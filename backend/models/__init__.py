# Shared vocabularies
from .vocabulary import (
    ALL,
    LenientEnum,
    PostCategory,
    SentimentLabel,
    category_color,
    sentiment_color,
)

# Panel results
from .outcome import (
    Outcome,
    OutcomeStatus,
)

# Discovery models
from .discovery import (
    Discovery,
    DiscoveryDigest,
    DiscoveryType,
    DiscoveryView,
    EngagementPotential,
    TechnicalLevel,
)

# Critical issue models
from .issue import (
    BusinessImpact,
    CriticalIssue,
    IssueView,
    ResolutionUrgency,
    SamplePost,
    Severity,
)

# Roadmap models
from .roadmap import (
    Platform,
    PlatformCounts,
    PlatformSummaries,
    ReleaseStatus,
    RoadmapFeature,
    RoadmapSnapshot,
    RoadmapSummary,
)

# Post feed models
from .post import (
    ActionRequired,
    ListingRequest,
    Post,
    PostPage,
    PostView,
    QueryState,
    SearchRequest,
)

# Dashboard snapshot
from .dashboard import (
    DashboardSnapshot,
    DiscoveryOutcome,
    IssueOutcome,
    PostOutcome,
    RoadmapOutcome,
)
