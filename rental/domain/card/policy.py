"""
Rental-term policies: how the due date of a new loan is chosen.
"""

from abc import ABC, abstractmethod
from datetime import date, timedelta


class RentalTermPolicy(ABC):
    """Supplies the due date assigned to a new rental."""

    @abstractmethod
    def due_date_for(self, rented_on: date) -> date:
        """Return the due date for an item rented on `rented_on`."""
        pass


class FixedTermPolicy(RentalTermPolicy):
    """Due a fixed number of days after the rental date."""

    def __init__(self, days: int = 14):
        if days < 1:
            raise ValueError("Rental term must be at least 1 day")
        self.days = days

    def due_date_for(self, rented_on: date) -> date:
        return rented_on + timedelta(days=self.days)

    def __repr__(self) -> str:
        return f"FixedTermPolicy(days={self.days})"
