# tests/test_rental_items.py
from datetime import date, timedelta

import pytest

from rental.domain.card import (
    FixedTermPolicy,
    Item,
    RentalCardNo,
    RentalItem,
    RentalTermPolicy,
    ReturnedItem,
)

RENTED_ON = date(2026, 3, 1)
BOOK = Item(no=1, title="Domain-Driven Design")


class EndOfMonthPolicy(RentalTermPolicy):
    """Everything is due on the last day of the month it was rented in"""

    def due_date_for(self, rented_on):
        next_month = rented_on.replace(day=28) + timedelta(days=4)
        return next_month - timedelta(days=next_month.day)


def test_create_uses_fixed_term_by_default():
    """Without a policy the loan is due 14 days after rental"""
    rental_item = RentalItem.create(BOOK, rented_on=RENTED_ON)

    assert rental_item.item == BOOK
    assert rental_item.rent_date == RENTED_ON
    assert rental_item.overdue_date == date(2026, 3, 15)
    assert rental_item.overdued is False


def test_create_uses_given_policy():
    """The due date comes from the rental-term policy"""
    assert RentalItem.create(BOOK, FixedTermPolicy(7), RENTED_ON).overdue_date == date(2026, 3, 8)
    assert RentalItem.create(BOOK, EndOfMonthPolicy(), RENTED_ON).overdue_date == date(2026, 3, 31)


def test_fixed_term_must_be_positive():
    with pytest.raises(ValueError):
        FixedTermPolicy(0)


def test_mark_overdue_keeps_due_date():
    """Flagging a loan overdue returns a copy and leaves the due date alone"""
    rental_item = RentalItem.create(BOOK, rented_on=RENTED_ON)
    overdued = rental_item.mark_overdue()

    assert overdued.overdued is True
    assert overdued.overdue_date == rental_item.overdue_date
    assert rental_item.overdued is False


@pytest.mark.parametrize("return_date, expected", [
    (date(2026, 3, 10), 0),
    (date(2026, 3, 15), 0),
    (date(2026, 3, 16), 1),
    (date(2026, 4, 20), 36),
])
def test_delayed_days(return_date, expected):
    """Delay counts whole calendar days past the due date, across months"""
    rental_item = RentalItem.create(BOOK, rented_on=RENTED_ON)
    assert rental_item.delayed_days(return_date) == expected


def test_returned_item_snapshot():
    rental_item = RentalItem.create(BOOK, rented_on=RENTED_ON)
    returned = ReturnedItem.create(rental_item, date(2026, 3, 12))

    assert returned.item == BOOK
    assert returned.rental_item == rental_item
    assert returned.return_date == date(2026, 3, 12)


def test_rental_card_no_format():
    """Card numbers carry the issue year and are unique"""
    first = RentalCardNo.create()
    second = RentalCardNo.create()

    assert first.no.startswith(f"{date.today().year}-")
    assert str(first) == first.no
    assert first != second
