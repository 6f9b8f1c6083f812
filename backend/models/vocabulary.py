"""
Closed vocabularies shared by the community pulse models
"""

from enum import Enum


class LenientEnum(str, Enum):
    """String enum that maps unknown upstream values onto a fallback member"""

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            normalized = value.strip().lower()
            for member in cls:
                if member.value == normalized:
                    return member
        return cls.fallback()

    @classmethod
    def fallback(cls):
        return None

    @classmethod
    def coerce(cls, value):
        """Like cls(value) but returns None when no member and no fallback apply"""
        try:
            return cls(value)
        except ValueError:
            return None


class SentimentLabel(LenientEnum):
    """Sentiment assigned upstream, with its display color"""

    def __new__(cls, value, color):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.color = color
        return obj

    positive = ("positive", "green")
    neutral = ("neutral", "gray")
    negative = ("negative", "red")


class PostCategory(LenientEnum):
    """Forums tracked by the dashboard, with their badge color"""

    def __new__(cls, value, color):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.color = color
        return obj

    jira = ("jira", "blue")
    jsm = ("jsm", "green")
    confluence = ("confluence", "purple")
    rovo = ("rovo", "orange")
    announcements = ("announcements", "red")


ALL = "all"
DEFAULT_COLOR = "gray"
MUTED_COLOR = "muted"


def category_color(category: str | None) -> str:
    """Badge color for a post category; unknown categories are gray"""
    member = PostCategory.coerce(category)
    return member.color if member else DEFAULT_COLOR


def sentiment_color(sentiment: str | None) -> str:
    """Text color for a sentiment label; missing labels are muted"""
    member = SentimentLabel.coerce(sentiment)
    return member.color if member else MUTED_COLOR
