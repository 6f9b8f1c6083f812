"""
Tagged panel result: live data, fallback data, a genuine empty result, or nothing
"""

from enum import Enum
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class OutcomeStatus(str, Enum):
    """How a panel's data was obtained"""

    def __new__(cls, value, description):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.description = description
        return obj

    ok = ("ok", "Live data from the community API")
    degraded = ("degraded", "Fallback or estimated data after an upstream failure")
    empty = ("empty", "The community API returned no records")
    failed = ("failed", "Output withheld because required data is missing")


class Outcome(BaseModel, Generic[T]):
    """Result of loading one dashboard panel"""

    status: OutcomeStatus = Field(description="How the data was obtained")
    data: Optional[T] = Field(None, description="Panel payload, absent when failed")
    reason: Optional[str] = Field(None, description="Advisory message for degraded or failed panels")

    @classmethod
    def ok(cls, data: T) -> "Outcome[T]":
        return cls(status=OutcomeStatus.ok, data=data)

    @classmethod
    def degraded(cls, data: T, reason: str) -> "Outcome[T]":
        return cls(status=OutcomeStatus.degraded, data=data, reason=reason)

    @classmethod
    def empty(cls, data: T) -> "Outcome[T]":
        return cls(status=OutcomeStatus.empty, data=data)

    @classmethod
    def failed(cls, reason: str) -> "Outcome[T]":
        return cls(status=OutcomeStatus.failed, reason=reason)

    @classmethod
    def from_records(cls, data: T) -> "Outcome[T]":
        """ok for a non-empty collection, empty otherwise"""
        return cls.ok(data) if data else cls.empty(data)

    @property
    def is_failed(self) -> bool:
        return self.status == OutcomeStatus.failed
