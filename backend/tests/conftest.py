"""Shared pytest fixtures: a stubbed community API and payload factories."""

from datetime import datetime, timedelta, timezone

import httpx
import pytest

BASE_URL = "http://community.test"
NOW = datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc)


# ---------------------------------------------------------------------------
# Stub community API
# ---------------------------------------------------------------------------
class StubAPI:
    """Routes by path to canned responses and records every request."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def route(self, path, payload=None, status=200, content=None):
        """Register a JSON payload, a raw body, or a callable taking the request."""
        if callable(payload):
            self.routes[path] = payload
        elif content is not None:
            self.routes[path] = lambda request: httpx.Response(status, content=content)
        else:
            self.routes[path] = lambda request: httpx.Response(status, json=payload)

    def fail(self, path, status=500):
        self.routes[path] = lambda request: httpx.Response(status, json={"detail": "boom"})

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.routes.get(request.url.path)
        if responder is None:
            return httpx.Response(404, json={"detail": "Not Found"})
        return responder(request)

    def calls(self, path):
        return [r for r in self.requests if r.url.path == path]

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle), base_url=BASE_URL)


@pytest.fixture
def stub_api():
    return StubAPI()


@pytest.fixture
async def http_client(stub_api):
    client = stub_api.client()
    yield client
    await client.aclose()


@pytest.fixture
def source_options():
    """No waiting between retries."""
    return {"retry_attempts": 3, "retry_delay": 0}


# ---------------------------------------------------------------------------
# Payload factories
# ---------------------------------------------------------------------------
def discovery_payload(**overrides):
    payload = {
        "title": "Sprint health dashboards in Confluence",
        "summary": "Embedding Jira sprint reports into team spaces",
        "author": "agile_coach",
        "url": "https://community.example.com/t/1",
        "products_used": ["jira", "confluence"],
        "technical_level": "intermediate",
        "has_screenshots": True,
        "engagement_potential": "normal",
        "discovery_type": "use_case",
    }
    payload.update(overrides)
    return payload


def issue_payload(**overrides):
    payload = {
        "issue_title": "Confluence pages fail to load",
        "severity": "high",
        "report_count": 5,
        "affected_products": ["confluence"],
        "first_reported": (NOW - timedelta(days=2)).isoformat(),
        "latest_report": (NOW - timedelta(hours=3)).isoformat(),
        "business_impact": "productivity_loss",
        "sample_posts": [
            {"title": "Blank page on open", "url": "https://community.example.com/t/10", "author": "a"},
            {"title": "Spinner forever", "url": "https://community.example.com/t/11", "author": "b"},
            {"title": "Pages time out", "url": "https://community.example.com/t/12", "author": "c"},
        ],
        "resolution_urgency": "normal",
    }
    payload.update(overrides)
    return payload


def feature_payload(**overrides):
    payload = {
        "title": "Smart queues",
        "description": "Route requests automatically",
        "status": "Released",
        "quarter": "Q2 2025",
        "products": ["jsm"],
    }
    payload.update(overrides)
    return payload


def post_payload(post_id=1, **overrides):
    payload = {
        "id": post_id,
        "title": f"Post {post_id}",
        "category": "jira",
        "author": "member",
        "date": "2025-06-14",
        "url": f"https://community.example.com/t/{post_id}",
        "excerpt": "Original excerpt",
        "sentiment_label": "neutral",
        "sentiment_score": 0.1,
        "ai_summary": "A short summary",
        "ai_key_points": ["one", "two"],
        "ai_hashtags": ["jira"],
        "ai_category": "question",
        "ai_action_required": "none",
    }
    payload.update(overrides)
    return payload
