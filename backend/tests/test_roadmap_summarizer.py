"""Tests for services.roadmap_summarizer."""

from datetime import date

import pytest

from conftest import feature_payload
from core.exceptions import NetworkFailure, PartialDegradation
from data.roadmap import RoadmapSource
from models.outcome import OutcomeStatus
from models.roadmap import Platform, ReleaseStatus, RoadmapFeature, RoadmapSnapshot
from services.roadmap_summarizer import (
    FALLBACK_THEME,
    RoadmapSummarizer,
    create_released_summary,
    create_upcoming_summary,
    extract_themes,
    parse_quarter,
    partition_features,
    summarize_roadmaps,
    within_recency_window,
)

CLOUD = Platform.cloud.path
DATA_CENTER = Platform.datacenter.path


def _feature(**overrides) -> RoadmapFeature:
    return RoadmapFeature.model_validate(feature_payload(**overrides))


def _snapshot(platform, *features) -> RoadmapSnapshot:
    return RoadmapSnapshot(platform=platform, features=list(features))


@pytest.fixture
def summarizer(http_client, source_options):
    return RoadmapSummarizer(RoadmapSource(http_client, **source_options), recency_days=None)


# ---------------------------------------------------------------------------
# Status partition
# ---------------------------------------------------------------------------
class TestPartition:

    @pytest.mark.parametrize("status,expected", [
        ("Released", [ReleaseStatus.released]),
        ("Generally AVAILABLE", [ReleaseStatus.released]),
        ("In development", [ReleaseStatus.upcoming]),
        ("Planned", [ReleaseStatus.upcoming]),
        ("Upcoming", [ReleaseStatus.upcoming]),
        ("Under consideration", []),
        ("", []),
        (None, []),
    ])
    def test_classify(self, status, expected):
        assert ReleaseStatus.classify(status) == expected

    def test_status_matching_both_markers_lands_in_both_partitions(self):
        feature = _feature(title="Smart queues", status="Available in beta, GA planned", products=["jsm"])

        released, upcoming = partition_features([feature])

        assert [f.title for f in released] == ["Smart queues"]
        assert [f.title for f in upcoming] == ["Smart queues"]

    def test_both_markers_count_toward_both_summaries(self):
        cloud = _snapshot(Platform.cloud, _feature(status="Released, more planned", description="AI triage"))
        datacenter = _snapshot(Platform.datacenter)

        summary = summarize_roadmaps(cloud, datacenter)

        assert summary.stats[Platform.cloud].released == 1
        assert summary.stats[Platform.cloud].upcoming == 1
        assert "Strategic focus: AI capabilities." in summary.upcoming.cloud

    def test_uncategorized_features_left_out(self):
        released, upcoming = partition_features([
            _feature(title="Shipped", status="Released"),
            _feature(title="Soon", status="Planned"),
            _feature(title="Maybe", status="Exploring"),
        ])
        assert [f.title for f in released] == ["Shipped"]
        assert [f.title for f in upcoming] == ["Soon"]


# ---------------------------------------------------------------------------
# Released summary
# ---------------------------------------------------------------------------
class TestReleasedSummary:

    def test_empty_partition_names_platform(self):
        assert create_released_summary([], "Cloud") == "No major releases in the past 3 months for Cloud."

    def test_highlights_group_by_product(self):
        features = [
            _feature(title="A", products=["jira", "confluence"]),
            _feature(title="B", products=["jira"]),
            _feature(title="C", products=["jsm"]),
            _feature(title="D", products=["rovo"]),
            _feature(title="E", products=["jira"]),
        ]

        summary = create_released_summary(features, "Cloud")

        assert summary == (
            "Recent Cloud releases include 5 new features. "
            "Key highlights: JIRA: A, B; CONFLUENCE: A; JSM: C. "
            "Focus areas include enhanced automation, improved security, and better integration capabilities."
        )

    def test_count_equals_partition_size(self):
        features = [_feature(title=f"F{i}", products=[]) for i in range(7)]
        assert "include 7 new features" in create_released_summary(features, "Data Center")


# ---------------------------------------------------------------------------
# Upcoming summary
# ---------------------------------------------------------------------------
class TestUpcomingSummary:

    def test_empty_partition_names_platform(self):
        assert create_upcoming_summary([], "Data Center") == (
            "No major features announced for the next 3 months on Data Center."
        )

    def test_themes_follow_text_order(self):
        themes = extract_themes([_feature(description="Adds AI-driven automation with better performance")])
        assert themes == ["AI capabilities", "Automation features", "Performance optimization"]

    def test_themes_follow_feature_order_and_dedupe(self):
        themes = extract_themes([
            _feature(description="Faster performance"),
            _feature(description="New security controls and performance"),
        ])
        assert themes == ["Performance optimization", "Security enhancements"]

    def test_at_most_three_themes(self):
        features = [
            _feature(description="security"),
            _feature(description="integration"),
            _feature(description="performance"),
            _feature(description="automation"),
        ]

        summary = create_upcoming_summary(features, "Cloud")

        assert summary == (
            "4 features in development for Cloud. "
            "Strategic focus: Security enhancements, Integration improvements, Performance optimization. "
            "Expected to enhance workflow efficiency and team collaboration."
        )

    def test_fallback_theme(self):
        summary = create_upcoming_summary([_feature(description="Nicer buttons")], "Cloud")
        assert f"Strategic focus: {FALLBACK_THEME}." in summary


# ---------------------------------------------------------------------------
# Quarters and recency
# ---------------------------------------------------------------------------
class TestQuarters:

    @pytest.mark.parametrize("quarter,expected", [
        ("Q1 2025", date(2025, 1, 1)),
        ("Q2 2025", date(2025, 4, 1)),
        ("q3 2025", date(2025, 7, 1)),
        ("Q4 2024", date(2024, 10, 1)),
    ])
    def test_parse(self, quarter, expected):
        assert parse_quarter(quarter) == expected

    @pytest.mark.parametrize("quarter", ["", "Q5 2025", "2025", "Summer 2025"])
    def test_unparseable(self, quarter):
        assert parse_quarter(quarter) is None

    def test_recency_window(self):
        today = date(2025, 5, 1)
        assert within_recency_window(_feature(quarter="Q2 2025"), 90, today)
        assert not within_recency_window(_feature(quarter="Q1 2024"), 90, today)
        assert within_recency_window(_feature(quarter="TBD"), 90, today)

    def test_recency_filter_applies_only_when_enabled(self):
        cloud = _snapshot(
            Platform.cloud,
            _feature(title="Recent", quarter="Q2 2025"),
            _feature(title="Old", quarter="Q1 2023"),
        )
        datacenter = _snapshot(Platform.datacenter)

        unfiltered = summarize_roadmaps(cloud, datacenter)
        filtered = summarize_roadmaps(cloud, datacenter, recency_days=90, today=date(2025, 5, 1))

        assert unfiltered.stats[Platform.cloud].released == 2
        assert filtered.stats[Platform.cloud].released == 1


# ---------------------------------------------------------------------------
# Summaries for both platforms
# ---------------------------------------------------------------------------
class TestSummarize:

    def test_platforms_summarized_independently(self):
        cloud = _snapshot(Platform.cloud, _feature(status="Released"), _feature(status="Planned"))
        datacenter = _snapshot(Platform.datacenter)

        summary = summarize_roadmaps(cloud, datacenter)

        assert summary.released.cloud.startswith("Recent Cloud releases include 1 new features.")
        assert summary.upcoming.cloud.startswith("1 features in development for Cloud.")
        assert summary.released.datacenter == "No major releases in the past 3 months for Data Center."
        assert summary.upcoming.datacenter == (
            "No major features announced for the next 3 months on Data Center."
        )

    def test_idempotent(self):
        cloud = _snapshot(
            Platform.cloud,
            _feature(title="X", status="Available", products=["jira"]),
            _feature(title="Y", status="In development", description="AI search"),
        )
        datacenter = _snapshot(Platform.datacenter, _feature(title="Z", status="Planned"))

        assert summarize_roadmaps(cloud, datacenter) == summarize_roadmaps(cloud, datacenter)


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------
class TestLoad:

    async def test_both_platforms_loaded(self, stub_api, summarizer):
        stub_api.route(CLOUD, {"features": [feature_payload(description="<p>Better <i>integration</i></p>")]})
        stub_api.route(DATA_CENTER, [feature_payload(status="Planned", description="Security hardening")])

        outcome = await summarizer.load()

        assert outcome.status == OutcomeStatus.ok
        assert outcome.data.stats[Platform.cloud].released == 1
        assert outcome.data.stats[Platform.datacenter].upcoming == 1
        assert "Strategic focus: Security enhancements." in outcome.data.upcoming.datacenter

    async def test_one_platform_failing_withholds_everything(self, stub_api, summarizer):
        stub_api.route(CLOUD, [feature_payload()])
        stub_api.fail(DATA_CENTER, status=404)

        outcome = await summarizer.load()

        assert outcome.status == OutcomeStatus.failed
        assert outcome.data is None
        assert outcome.reason == "Data Center roadmap unavailable: Resource not found"

    async def test_both_fetched_concurrently_even_when_one_fails(self, stub_api, summarizer):
        stub_api.fail(CLOUD, status=404)
        stub_api.route(DATA_CENTER, [feature_payload()])

        await summarizer.load()

        assert len(stub_api.calls(CLOUD)) == 1
        assert len(stub_api.calls(DATA_CENTER)) == 1

    async def test_partial_failure_names_missing_platform(self, stub_api, summarizer):
        stub_api.route(CLOUD, [feature_payload()])
        stub_api.fail(DATA_CENTER, status=404)

        with pytest.raises(PartialDegradation) as exc_info:
            await summarizer.fetch_snapshots()

        assert exc_info.value.failed_part == "datacenter"
        assert isinstance(exc_info.value.__cause__, NetworkFailure)
