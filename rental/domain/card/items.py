"""
Loan records held by a rental card: active rentals and their returned snapshots.
"""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from rental.domain.card.policy import FixedTermPolicy, RentalTermPolicy
from rental.domain.card.values import Item


@dataclass(frozen=True)
class RentalItem:
    """An active loan of one item."""

    item: Item
    rent_date: date
    overdue_date: date
    overdued: bool = False

    @classmethod
    def create(
        cls,
        item: Item,
        policy: Optional[RentalTermPolicy] = None,
        rented_on: Optional[date] = None
    ) -> 'RentalItem':
        """
        Start a loan of `item`.

        Args:
            item: The item being rented
            policy: Rental-term policy deciding the due date (14-day fixed term by default)
            rented_on: Rental date (defaults to today)

        Returns:
            RentalItem: The new loan, not yet overdue
        """
        rented_on = rented_on or date.today()
        policy = policy or FixedTermPolicy()
        return cls(
            item=item,
            rent_date=rented_on,
            overdue_date=policy.due_date_for(rented_on),
        )

    def mark_overdue(self) -> 'RentalItem':
        """Return a copy of this loan flagged as overdue."""
        return replace(self, overdued=True)

    def delayed_days(self, return_date: date) -> int:
        """Whole days between the due date and `return_date`; 0 when on time."""
        return max(0, (return_date - self.overdue_date).days)

    def copy(self) -> 'RentalItem':
        return replace(self)


@dataclass(frozen=True)
class ReturnedItem:
    """Snapshot of a loan at the moment it was returned."""

    rental_item: RentalItem
    return_date: date

    @classmethod
    def create(cls, rental_item: RentalItem, return_date: date) -> 'ReturnedItem':
        return cls(rental_item=rental_item.copy(), return_date=return_date)

    @property
    def item(self) -> Item:
        return self.rental_item.item
