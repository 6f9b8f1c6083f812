from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from loguru import logger
from pydantic import BaseModel, ValidationError

from core.config import settings
from models.dashboard import (
    DashboardSnapshot,
    DiscoveryOutcome,
    IssueOutcome,
    PostOutcome,
    RoadmapOutcome,
)
from models.post import QueryState
from models.vocabulary import ALL
from services.dashboard import DashboardService
from services.issue_classifier import validate_window

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    service: str
    version: str


def get_dashboard_service(request: Request) -> DashboardService:
    """The service created by the app lifespan"""
    return request.app.state.dashboard


def _issue_window(days: Optional[int]) -> int:
    try:
        return validate_window(settings.DEFAULT_ISSUE_WINDOW if days is None else days)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.get("/dashboard", response_model=DashboardSnapshot)
async def get_dashboard(
    days: Optional[int] = Query(None, description="Critical issue window: 7, 14 or 30 days"),
    service: DashboardService = Depends(get_dashboard_service),
):
    """Every panel, loaded concurrently"""
    return await service.load(days=_issue_window(days))


@router.get("/discoveries", response_model=DiscoveryOutcome)
async def get_discoveries(service: DashboardService = Depends(get_dashboard_service)):
    return await service.load_discoveries()


@router.get("/critical-issues", response_model=IssueOutcome)
async def get_critical_issues(
    days: Optional[int] = Query(None, description="Critical issue window: 7, 14 or 30 days"),
    service: DashboardService = Depends(get_dashboard_service),
):
    return await service.load_critical_issues(_issue_window(days))


@router.get("/roadmap/summary", response_model=RoadmapOutcome)
async def get_roadmap_summary(service: DashboardService = Depends(get_dashboard_service)):
    """Released and upcoming summaries for both platforms, or nothing if either roadmap is missing"""
    return await service.load_roadmap()


@router.get("/posts", response_model=PostOutcome)
async def get_posts(
    q: str = "",
    category: str = ALL,
    sentiment: str = ALL,
    page: int = 1,
    service: DashboardService = Depends(get_dashboard_service),
):
    """One page of the post feed; a search query takes precedence over the filters"""
    try:
        state = QueryState(
            search_query=q,
            category_filter=category,
            sentiment_filter=sentiment,
            page=page,
            page_size=settings.POSTS_PAGE_SIZE,
        )
    except ValidationError as e:
        logger.warning(f"Rejected post query: {e.error_count()} validation errors")
        raise HTTPException(status_code=422, detail="Invalid post query")

    return await service.load_posts(state)


@router.get("/health", response_model=HealthResponse)
async def health():
    return HealthResponse(status="healthy", service="community-pulse", version="0.1.0")
