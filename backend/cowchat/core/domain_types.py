"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CowName wraps str, CowId wraps int — never pass bare primitives in domain logic
    - CowColor values are the strings persisted in the cows.cow_color column
    - ChatPhase encodes every state of a chat session — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - Cow is a frozen dataclass: cows are immutable once created
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CowName = NewType("CowName", str)
CowId = NewType("CowId", int)


# ─── Value Ranges ────────────────────────────────────────────────

MIN_COW_AGE = 5
MAX_COW_AGE = 30
MIN_COW_WEIGHT = 1300
MAX_COW_WEIGHT = 1800

MIN_BECKON_COUNT = 1
MAX_BECKON_COUNT = 5


# ─── Enums ───────────────────────────────────────────────────────

class CowColor(str, Enum):
    """Coat colors — value is the human-readable form stored in the DB."""
    BLACK = "black"
    BROWN = "brown"
    TAN = "tan"
    BLACK_WITH_WHITE_PATCHES = "black and white patches"


class ChatPhase(str, Enum):
    """Chat session lifecycle: starting -> active -> closing -> closed."""
    STARTING = "starting"
    ACTIVE = "active"
    CLOSING = "closing"
    CLOSED = "closed"


# ─── Entities ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Cow:
    """One allocated cow. Immutable after creation."""
    name: CowName
    id: CowId
    color: CowColor
    age: int
    weight: int

    def __str__(self) -> str:
        return (
            f"a cow named {self.name} (id {self.id}), {self.color.value}, "
            f"{self.age} years old and weighs {self.weight} pounds"
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "id": self.id,
            "color": self.color.value,
            "age": self.age,
            "weight": self.weight,
        }


@dataclass(frozen=True)
class ChatSessionRecord:
    """Summary persisted when a chat session ends."""
    cow_name: CowName
    duration_seconds: int
