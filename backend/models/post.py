"""
Community post models and query state for the post feed
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator

from .vocabulary import ALL, LenientEnum, SentimentLabel


class ActionRequired(LenientEnum):
    """Follow-up priority assigned upstream"""

    none = "none"
    low = "low"
    medium = "medium"
    high = "high"

    @classmethod
    def fallback(cls):
        return cls.none


class Post(BaseModel):
    """Forum post, pre-annotated upstream with AI fields"""

    id: Union[int, str]
    title: str = ""
    category: str = ""
    author: str = ""
    date: Optional[str] = None
    url: str = ""
    excerpt: Optional[str] = None
    sentiment_label: Optional[SentimentLabel] = None
    sentiment_score: Optional[float] = Field(None, ge=0, le=1)
    ai_summary: Optional[str] = None
    ai_key_points: List[str] = Field(default_factory=list)
    ai_hashtags: List[str] = Field(default_factory=list)
    ai_category: Optional[str] = None
    ai_action_required: ActionRequired = ActionRequired.none

    @field_validator("title", "category", "author", "url", mode="before")
    @classmethod
    def default_text(cls, v):
        return v or ""

    @field_validator("sentiment_label", mode="before")
    @classmethod
    def coerce_sentiment(cls, v):
        return SentimentLabel.coerce(v)

    @field_validator("ai_action_required", mode="before")
    @classmethod
    def coerce_action(cls, v):
        return ActionRequired(v)

    @field_validator("ai_key_points", "ai_hashtags", mode="before")
    @classmethod
    def default_lists(cls, v):
        return v or []


class PostView(BaseModel):
    """Post with display fields derived from its annotations"""

    id: Union[int, str]
    display_title: str
    category: str
    category_color: str
    author: str
    date: Optional[str]
    url: str
    sentiment_label: Optional[SentimentLabel]
    sentiment_color: str
    summary: str
    ai_category: Optional[str]
    key_points: List[str]
    hashtags: List[str]
    action_badge: Optional[str] = None


class QueryState(BaseModel):
    """Filter, search and page state owned by the post query engine"""

    search_query: str = ""
    category_filter: str = ALL
    sentiment_filter: Union[SentimentLabel, str] = ALL
    page: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1)

    @field_validator("category_filter", mode="before")
    @classmethod
    def normalize_category(cls, v):
        if not v:
            return ALL
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("sentiment_filter", mode="before")
    @classmethod
    def validate_sentiment(cls, v):
        if not v or v == ALL:
            return ALL
        label = SentimentLabel.coerce(v)
        if label is None:
            raise ValueError(f"Unknown sentiment filter: {v}")
        return label


class SearchRequest(BaseModel):
    query: str
    limit: int
    skip: int


class ListingRequest(BaseModel):
    limit: int
    skip: int
    category: Optional[str] = None
    sentiment: Optional[SentimentLabel] = None


class PostPage(BaseModel):
    """One page of the post feed with pagination totals"""

    posts: List[PostView]
    page: int
    page_size: int
    total_posts: int
    total_pages: int
    total_is_estimate: bool = False
