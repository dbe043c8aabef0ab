"""Cow ORM — persists every allocated cow.

Invariants:
    - cow_name is the primary key (one cow per catalog name)
    - cow_id is UNIQUE and non-nullable — last line of defense against racing allocations
    - Rows are never updated or deleted in normal operation

Design Decisions:
    - Natural key on name: the catalog name is the identity users chat with
    - Color stored as its display string: readable in ad-hoc SQL, mapped back via CowColor
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cowchat.core.domain_types import Cow, CowColor, CowId, CowName
from cowchat.db.base import Base


class CowRow(Base):
    """One cow in the meadow."""
    __tablename__ = "cows"

    cow_name: Mapped[str] = mapped_column(String(50), primary_key=True)
    cow_id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)
    cow_color: Mapped[str] = mapped_column(String(30), nullable=False)
    cow_age: Mapped[int] = mapped_column(Integer, nullable=False)
    cow_weight: Mapped[int] = mapped_column(Integer, nullable=False)

    @classmethod
    def from_domain(cls, cow: Cow) -> "CowRow":
        return cls(
            cow_name=cow.name,
            cow_id=cow.id,
            cow_color=cow.color.value,
            cow_age=cow.age,
            cow_weight=cow.weight,
        )

    def to_domain(self) -> Cow:
        return Cow(
            name=CowName(self.cow_name),
            id=CowId(self.cow_id),
            color=CowColor(self.cow_color),
            age=self.cow_age,
            weight=self.cow_weight,
        )
