"""
Value types owned by the rental card aggregate.

All of them are frozen: operations that "change" a value return a new one,
so several holders of the same snapshot never see each other's updates.
"""

import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum


class RentalStatus(Enum):
    """Whether a card may take on new rentals."""

    RENTAL_ABLE = "RENTAL_ABLE"
    RENTAL_UNABLE = "RENTAL_UNABLE"


@dataclass(frozen=True)
class RentalCardNo:
    """Identifier of a rental card, e.g. '2026-5f0c...'."""

    no: str

    @classmethod
    def create(cls) -> 'RentalCardNo':
        """Generate a fresh identifier prefixed with the current year."""
        return cls(no=f"{date.today().year}-{uuid.uuid4()}")

    def __str__(self) -> str:
        return self.no


@dataclass(frozen=True)
class MemberRef:
    """The member owning a card."""

    id: str
    name: str


@dataclass(frozen=True)
class Item:
    """Reference to a catalog item. Only compared for equality."""

    no: int
    title: str


@dataclass(frozen=True)
class LateFee:
    """Outstanding late-fee balance in points. Never negative."""

    point: int = 0

    def __post_init__(self):
        if self.point < 0:
            raise ValueError(f"Late fee cannot be negative: {self.point}")

    @classmethod
    def create(cls) -> 'LateFee':
        """An empty ledger."""
        return cls(point=0)

    def accumulate(self, points: int) -> 'LateFee':
        """Return a ledger with `points` added."""
        _require_non_negative(points)
        return LateFee(point=self.point + points)

    def deduct(self, points: int) -> 'LateFee':
        """Return a ledger with `points` removed, clamped at zero."""
        _require_non_negative(points)
        return LateFee(point=max(0, self.point - points))

    def remaining_after_deduction(self, points: int) -> int:
        """Portion of `points` exceeding the current balance (the overpayment)."""
        _require_non_negative(points)
        return max(0, points - self.point)

    def is_empty(self) -> bool:
        return self.point == 0


def _require_non_negative(points: int) -> None:
    if points < 0:
        raise ValueError(f"Points must be non-negative: {points}")
