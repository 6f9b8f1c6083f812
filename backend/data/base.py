import asyncio
from typing import Any, Type, TypeVar

import httpx
from bs4 import BeautifulSoup
from loguru import logger
from pydantic import BaseModel, ValidationError

from core.config import Settings, settings
from core.exceptions import (
    MalformedResponse,
    NetworkFailure,
    NON_RETRYABLE_STATUS,
    STATUS_MESSAGES,
)

M = TypeVar("M", bound=BaseModel)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "community-pulse/0.1 (+dashboard)",
}


def create_http_client(config: Settings = settings, **kwargs) -> httpx.AsyncClient:
    """Shared async client for every community API source"""
    return httpx.AsyncClient(
        base_url=config.API_BASE_URL,
        timeout=config.REQUEST_TIMEOUT,
        headers=DEFAULT_HEADERS,
        **kwargs,
    )


class CommunitySource:
    """Base class for sources backed by the community API"""

    def __init__(
        self,
        client: httpx.AsyncClient,
        retry_attempts: int = settings.RETRY_ATTEMPTS,
        retry_delay: float = settings.RETRY_DELAY,
    ):
        self.client = client
        self.retry_attempts = max(1, retry_attempts)
        self.retry_delay = retry_delay

    async def _get_json(self, path: str, params: dict | None = None) -> Any:
        """GET a JSON document, retrying transient failures with a linear delay"""
        params = {k: v for k, v in (params or {}).items() if v is not None and v != ""}

        for attempt in range(1, self.retry_attempts + 1):
            try:
                response = await self.client.get(path, params=params)
                response.raise_for_status()
                break
            except httpx.HTTPStatusError as e:
                status = e.response.status_code
                detail = STATUS_MESSAGES.get(status, f"Upstream returned HTTP {status}")
                if status in NON_RETRYABLE_STATUS or attempt == self.retry_attempts:
                    logger.error(f"GET {path} failed with {status}: {detail}")
                    raise NetworkFailure(detail, status_code=status) from e
                logger.warning(f"GET {path} returned {status}, retrying ({attempt}/{self.retry_attempts})")
            except httpx.TransportError as e:
                if attempt == self.retry_attempts:
                    logger.error(f"GET {path} failed after {attempt} attempts: {e}")
                    raise NetworkFailure(str(e) or type(e).__name__) from e
                logger.warning(f"GET {path} transport error, retrying ({attempt}/{self.retry_attempts}): {e}")

            await asyncio.sleep(self.retry_delay * attempt)

        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponse(f"GET {path} returned a body that is not JSON") from e

    def _as_list(self, payload: Any, what: str) -> list:
        """Treat any non-array payload as an empty result set"""
        if isinstance(payload, list):
            return payload

        logger.warning(f"Expected a list of {what}, got {type(payload).__name__}; treating as empty")
        return []

    def _parse_records(self, items: list, model: Type[M]) -> list[M]:
        """Validate each item, skipping the ones that do not fit the model"""
        records = []

        for item in items:
            try:
                records.append(model.model_validate(item))
            except ValidationError as e:
                logger.debug(f"Skipping malformed {model.__name__}: {e.error_count()} validation errors")
                continue

        if len(records) < len(items):
            logger.warning(f"Dropped {len(items) - len(records)} malformed {model.__name__} records")

        return records

    def _clean_html(self, html_text: str) -> str:
        """Remove HTML tags and clean text"""
        if not html_text:
            return ""

        if "<" in html_text:
            soup = BeautifulSoup(html_text, "html.parser")
            html_text = soup.get_text()

        # Clean up whitespace
        return " ".join(html_text.split())
