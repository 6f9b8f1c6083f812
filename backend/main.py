#!/usr/bin/env python3
"""
Community Pulse

Terminal rendering of the community intelligence dashboard: awesome
discoveries, critical issues, roadmap summaries and the post feed.
"""

import argparse
import asyncio
import sys
from datetime import datetime

from loguru import logger

from core.config import ISSUE_WINDOWS, settings
from data.base import create_http_client
from models.dashboard import (
    DashboardSnapshot,
    DiscoveryOutcome,
    IssueOutcome,
    PostOutcome,
    RoadmapOutcome,
)
from models.outcome import Outcome, OutcomeStatus
from models.post import QueryState
from services.dashboard import DashboardService

PANELS = ("all", "discoveries", "issues", "roadmap", "posts")


def configure_logging(verbose: bool = False):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else settings.LOG_LEVEL)


def print_status(outcome: Outcome) -> bool:
    """Print the advisory line for an outcome; False when there is nothing to render"""
    if outcome.status == OutcomeStatus.failed:
        print(f"❌ {outcome.status.description}: {outcome.reason}")
        return False
    if outcome.status == OutcomeStatus.degraded:
        print(f"⚠️  {outcome.status.description}: {outcome.reason}")
    if outcome.status == OutcomeStatus.empty:
        print("  Nothing to show")
        return False
    return True


def print_discoveries(outcome: DiscoveryOutcome):
    print("\n✨ AWESOME DISCOVERIES")
    print("=" * 60)
    if not print_status(outcome):
        return

    for view in outcome.data:
        print(f"  [{view.level_icon}] {view.title}")
        print(f"     {view.type_label} | {view.technical_level.value} | by {view.author}")
        if view.products:
            print(f"     Products: {', '.join(view.products)}")
        if view.engagement_badge:
            print(f"     🔥 {view.engagement_badge}")
        if view.visual_guide:
            print("     📸 Visual guide")


def print_issues(outcome: IssueOutcome, days: int):
    print(f"\n🚨 CRITICAL ISSUES (last {days} days)")
    print("=" * 60)
    if not print_status(outcome):
        return

    for view in outcome.data:
        print(f"  [{view.severity.value.upper()}] {view.issue_title}")
        print(f"     {view.report_count} reports | {', '.join(view.affected_products)} | impact: {view.impact_icon}")
        print(f"     First reported: {view.first_reported} | Latest: {view.latest_report}")
        for sample in view.evidence:
            print(f"     • {sample.title} ({sample.author})")
        if view.urgency_banner:
            print(f"     ⏰ {view.urgency_banner}")


def print_roadmap(outcome: RoadmapOutcome):
    print("\n🗺️  ROADMAP")
    print("=" * 60)
    if not print_status(outcome):
        return

    summary = outcome.data
    print("  Recently released")
    print(f"    Cloud: {summary.released.cloud}")
    print(f"    Data Center: {summary.released.datacenter}")
    print("  Coming next")
    print(f"    Cloud: {summary.upcoming.cloud}")
    print(f"    Data Center: {summary.upcoming.datacenter}")


def print_posts(outcome: PostOutcome):
    print("\n💬 COMMUNITY POSTS")
    print("=" * 60)
    if outcome.status == OutcomeStatus.empty:
        print("  No posts match the current search or filters")
        return
    if not print_status(outcome):
        return

    page = outcome.data
    for view in page.posts:
        print(f"  📄 {view.display_title}")
        print(f"     {view.category} | {view.author} | sentiment: {view.sentiment_label or 'n/a'}")
        print(f"     {view.summary}")
        if view.hashtags:
            print(f"     {' '.join('#' + tag.lstrip('#') for tag in view.hashtags)}")
        if view.action_badge:
            print(f"     🔔 {view.action_badge}")

    estimate = " (estimated)" if page.total_is_estimate else ""
    print(f"\n  Page {page.page} of {page.total_pages}{estimate} | {page.total_posts} posts")


def print_snapshot(snapshot: DashboardSnapshot):
    print_discoveries(snapshot.discoveries)
    if snapshot.discovery_digest:
        digest = snapshot.discovery_digest
        print(f"\n📊 {digest.total} discoveries, {digest.high_engagement} with high engagement potential")
    print_issues(snapshot.critical_issues, snapshot.issue_window)
    print_roadmap(snapshot.roadmap)
    print_posts(snapshot.posts)


async def run_dashboard(panel: str, days: int, state: QueryState, verbose: bool = False) -> int:
    """Load the requested panels and print them; returns the number of failed panels"""

    if verbose:
        print("🤖 COMMUNITY PULSE")
        print("=" * 60)
        print(f"Started at: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
        print(f"🔗 Upstream: {settings.API_BASE_URL}")

    async with create_http_client(settings) as client:
        service = DashboardService(client, settings)

        if panel == "discoveries":
            outcomes = [await service.load_discoveries()]
            print_discoveries(outcomes[0])
        elif panel == "issues":
            outcomes = [await service.load_critical_issues(days)]
            print_issues(outcomes[0], days)
        elif panel == "roadmap":
            outcomes = [await service.load_roadmap()]
            print_roadmap(outcomes[0])
        elif panel == "posts":
            outcomes = [await service.load_posts(state)]
            print_posts(outcomes[0])
        else:
            snapshot = await service.load(days=days, post_state=state)
            outcomes = [snapshot.discoveries, snapshot.critical_issues, snapshot.roadmap, snapshot.posts]
            print_snapshot(snapshot)

    return len([o for o in outcomes if o.is_failed])


def cli_main():
    """CLI interface"""
    parser = argparse.ArgumentParser(
        description="Render the community pulse dashboard",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py
  python main.py --panel issues --days 30
  python main.py --panel posts --search "automation" --page 2
  python main.py --panel posts --category jsm --sentiment negative --verbose
        """
    )

    parser.add_argument(
        "--panel",
        choices=PANELS,
        default="all",
        help="Panel to render (default: all)"
    )
    parser.add_argument(
        "--days",
        type=int,
        choices=ISSUE_WINDOWS,
        default=settings.DEFAULT_ISSUE_WINDOW,
        help=f"Critical issue window in days (default: {settings.DEFAULT_ISSUE_WINDOW})"
    )
    parser.add_argument("--search", default="", help="Search query for the post feed")
    parser.add_argument("--category", default="all", help="Post category filter")
    parser.add_argument("--sentiment", default="all", help="Post sentiment filter")
    parser.add_argument("--page", type=int, default=1, help="Post feed page (default: 1)")
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args()
    configure_logging(args.verbose)

    try:
        state = QueryState(
            search_query=args.search,
            category_filter=args.category,
            sentiment_filter=args.sentiment,
            page=args.page,
            page_size=settings.POSTS_PAGE_SIZE,
        )
    except ValueError as e:
        print(f"❌ Error: {str(e)}")
        return 1

    try:
        failures = asyncio.run(run_dashboard(args.panel, args.days, state, args.verbose))
    except Exception as e:
        print(f"\n❌ DASHBOARD FAILED: {str(e)}")
        return 1

    if failures:
        print(f"\n❌ {failures} panel(s) failed to load")
        return 1

    print("\n✅ Dashboard loaded")
    return 0


if __name__ == "__main__":
    sys.exit(cli_main())
