"""Cow Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - BeckonCowsRequest.count is within [1, 5] — violations never reach the allocator
    - CowResponse mirrors the domain Cow field for field

Design Decisions:
    - Field(ge, le) over manual checks: Pydantic rejects with a structured 400 envelope
"""

from pydantic import BaseModel, Field

from cowchat.core.domain_types import (
    Cow, CowColor, MIN_BECKON_COUNT, MAX_BECKON_COUNT,
)


class BeckonCowsRequest(BaseModel):
    """Beckon request — how many new cows to call into the meadow."""
    count: int = Field(ge=MIN_BECKON_COUNT, le=MAX_BECKON_COUNT)


class CowResponse(BaseModel):
    """Public-facing cow data."""
    name: str
    id: int
    color: CowColor
    age: int
    weight: int

    @classmethod
    def from_domain(cls, cow: Cow) -> "CowResponse":
        return cls(**cow.to_dict())


class CowListResponse(BaseModel):
    """List of cows — shared by beckon and list."""
    cows: list[CowResponse]

    @classmethod
    def from_domain(cls, cows: list[Cow]) -> "CowListResponse":
        return cls(cows=[CowResponse.from_domain(c) for c in cows])
