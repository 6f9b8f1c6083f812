"""
Roadmap models for the cloud and data center product roadmaps
"""

from enum import Enum
from typing import Dict, List

from pydantic import BaseModel, Field, field_validator


class Platform(str, Enum):
    """Deployment platform a roadmap belongs to"""

    def __new__(cls, value, label, path):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.label = label
        obj.path = path
        return obj

    cloud = ("cloud", "Cloud", "/api/roadmap/cloud")
    datacenter = ("datacenter", "Data Center", "/api/roadmap/data-center")


class ReleaseStatus(str, Enum):
    """Roadmap partitions, each matched independently against the free-text status"""

    def __new__(cls, value, markers):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.markers = markers
        return obj

    released = ("released", ("released", "available"))
    upcoming = ("upcoming", ("development", "planned", "upcoming"))

    def matches(self, status: str | None) -> bool:
        text = (status or "").lower()
        return any(marker in text for marker in self.markers)

    @classmethod
    def classify(cls, status: str | None) -> List["ReleaseStatus"]:
        """Every partition the status text belongs to; empty when uncategorized"""
        return [member for member in cls if member.matches(status)]


class RoadmapFeature(BaseModel):
    """Planned or released product capability"""

    title: str = Field(description="Feature name")
    description: str = Field("", description="Plain-text feature description")
    status: str = Field("", description="Upstream status text, e.g. 'In development'")
    quarter: str = Field("", description="Target quarter, e.g. 'Q1 2025'")
    products: List[str] = Field(default_factory=list)

    @field_validator("description", "status", "quarter", mode="before")
    @classmethod
    def default_text(cls, v):
        return v or ""

    @field_validator("products", mode="before")
    @classmethod
    def default_products(cls, v):
        return v or []

    @property
    def release_statuses(self) -> List[ReleaseStatus]:
        return ReleaseStatus.classify(self.status)


class RoadmapSnapshot(BaseModel):
    """Features published for one platform at fetch time"""

    platform: Platform
    features: List[RoadmapFeature] = Field(default_factory=list)


class PlatformSummaries(BaseModel):
    cloud: str
    datacenter: str


class PlatformCounts(BaseModel):
    released: int
    upcoming: int


class RoadmapSummary(BaseModel):
    """Released and upcoming summaries for both platforms"""

    released: PlatformSummaries
    upcoming: PlatformSummaries
    stats: Dict[Platform, PlatformCounts]
