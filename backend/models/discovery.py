"""
Community discovery models: use cases, integrations and success stories
"""

from typing import List, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

from .vocabulary import LenientEnum


class TechnicalLevel(LenientEnum):
    """Technical depth of a discovery, with the icon shown beside it"""

    def __new__(cls, value, icon):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.icon = icon
        return obj

    basic = ("basic", "lightbulb")
    intermediate = ("intermediate", "sparkles")
    advanced = ("advanced", "award")
    expert = ("expert", "zap")

    @classmethod
    def fallback(cls):
        return cls.basic


class EngagementPotential(LenientEnum):
    """Whether a discovery is likely to draw community engagement"""

    high = "high"
    normal = "normal"

    @classmethod
    def fallback(cls):
        return cls.normal


class DiscoveryType(LenientEnum):
    """Kind of write-up, with its display label"""

    def __new__(cls, value, label):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.label = label
        return obj

    use_case = ("use_case", "Use Case")
    integration = ("integration", "Integration")
    automation = ("automation", "Automation")
    success_story = ("success_story", "Success Story")
    other = ("other", "Discovery")

    @classmethod
    def fallback(cls):
        return cls.other


class Discovery(BaseModel):
    """Community-submitted write-up showcasing product usage"""

    title: str = Field(description="Write-up title")
    summary: str = Field("", description="Short description of the discovery")
    author: str = Field("", description="Community handle of the author")
    url: str = Field("#", description="Link to the original post")
    products_used: List[str] = Field(default_factory=list, description="Product tags featured")
    technical_level: TechnicalLevel = Field(TechnicalLevel.basic, description="Technical depth")
    has_screenshots: bool = Field(False, description="Whether the write-up includes screenshots")
    engagement_potential: EngagementPotential = Field(EngagementPotential.normal)
    discovery_type: DiscoveryType = Field(DiscoveryType.other)

    @field_validator("technical_level", "engagement_potential", "discovery_type", mode="before")
    @classmethod
    def coerce_vocabulary(cls, v, info: ValidationInfo):
        return cls.model_fields[info.field_name].annotation(v)

    @field_validator("products_used", mode="before")
    @classmethod
    def default_products(cls, v):
        return v or []


class DiscoveryView(BaseModel):
    """Discovery classified for display"""

    title: str
    summary: str
    author: str
    url: str
    products: List[str]
    technical_level: TechnicalLevel
    level_icon: str
    type_label: str
    engagement_badge: Optional[str] = None
    visual_guide: bool = False


class DiscoveryDigest(BaseModel):
    """Header line for the collapsed discoveries panel"""

    total: int
    high_engagement: int
