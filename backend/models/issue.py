"""
Critical issue models: clusters of community reports about one problem
"""

from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from .vocabulary import LenientEnum


class Severity(LenientEnum):
    """Severity tiers, ordered by rank, with their style token"""

    def __new__(cls, value, rank, style):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.rank = rank
        obj.style = style
        return obj

    critical = ("critical", 4, "red")
    high = ("high", 3, "orange")
    medium = ("medium", 2, "yellow")
    low = ("low", 1, "gray")

    @classmethod
    def fallback(cls):
        return cls.low


class BusinessImpact(LenientEnum):
    """Business consequence of an issue, with its icon"""

    def __new__(cls, value, icon):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.icon = icon
        return obj

    productivity_loss = ("productivity_loss", "warning")
    workflow_broken = ("workflow_broken", "siren")
    data_access_blocked = ("data_access_blocked", "lock")
    other = ("other", "alert")

    @classmethod
    def fallback(cls):
        return cls.other


class ResolutionUrgency(LenientEnum):
    immediate = "immediate"
    normal = "normal"

    @classmethod
    def fallback(cls):
        return cls.normal


class SamplePost(BaseModel):
    title: str = ""
    url: str = "#"
    author: str = ""


class CriticalIssue(BaseModel):
    """Aggregated cluster of reports describing a single underlying problem"""

    issue_title: str = Field(description="Short name of the problem")
    severity: Severity = Field(Severity.low)
    report_count: int = Field(0, ge=0, description="Number of community reports")
    affected_products: List[str] = Field(default_factory=list)
    first_reported: datetime
    latest_report: datetime
    business_impact: BusinessImpact = Field(BusinessImpact.other)
    sample_posts: List[SamplePost] = Field(default_factory=list)
    resolution_urgency: ResolutionUrgency = Field(ResolutionUrgency.normal)

    @field_validator("severity", "business_impact", "resolution_urgency", mode="before")
    @classmethod
    def coerce_vocabulary(cls, v, info: ValidationInfo):
        return cls.model_fields[info.field_name].annotation(v)

    @field_validator("affected_products", "sample_posts", mode="before")
    @classmethod
    def default_lists(cls, v):
        return v or []

    @field_validator("first_reported", "latest_report")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo else v.replace(tzinfo=timezone.utc)

    @model_validator(mode="after")
    def check_report_order(self):
        if self.first_reported > self.latest_report:
            raise ValueError("first_reported must not be after latest_report")
        return self


class IssueView(BaseModel):
    """Critical issue classified for display"""

    issue_title: str
    severity: Severity
    severity_rank: int
    severity_style: str
    impact_icon: str
    report_count: int
    affected_products: List[str]
    first_reported: str
    latest_report: str
    evidence: List[SamplePost]
    urgency_banner: Optional[str] = None
