"""
Rental card aggregate.

A rental card tracks one member's active loans, the history of returned
loans and any outstanding late fee. It is the only place where rental rules
are decided:

- a blocked card (RENTAL_UNABLE) accepts no new rentals
- at most MAX_RENTAL_ITEMS loans may be active at once
- late returns accrue POINTS_PER_DELAYED_DAY points per day
- a card is unblocked only once its late fee is fully paid

Every operation validates before it mutates, so a raised error leaves the
card untouched. The aggregate is not thread-safe; callers serialize access
per card (see rental.data.memory_repository for the version check).
"""

from datetime import date
from typing import Iterable, List, Optional

from rental.config.logging_config import get_logger
from rental.domain.card.items import RentalItem, ReturnedItem
from rental.domain.card.policy import RentalTermPolicy
from rental.domain.card.values import Item, LateFee, MemberRef, RentalCardNo, RentalStatus
from rental.domain.errors import (
    ItemNotFoundError,
    LimitExceededError,
    OutstandingItemsRemainError,
    PaymentMismatchError,
    StatusConflictError,
)

logger = get_logger(__name__)

MAX_RENTAL_ITEMS = 5
POINTS_PER_DELAYED_DAY = 10


class RentalCard:
    """Aggregate root for one member's loans and late fee."""

    def __init__(
        self,
        rental_card_no: RentalCardNo,
        member: MemberRef,
        rental_status: RentalStatus,
        late_fee: LateFee,
        rental_items: Iterable[RentalItem] = (),
        returned_items: Iterable[ReturnedItem] = (),
        version: int = 0,
    ):
        self._rental_card_no = rental_card_no
        self._member = member
        self._rental_status = rental_status
        self._late_fee = late_fee
        self._rental_items: List[RentalItem] = list(rental_items)
        self._returned_items: List[ReturnedItem] = list(returned_items)
        # Optimistic-concurrency counter, owned by the repository
        self.version = version

    @classmethod
    def create(cls, member: MemberRef) -> 'RentalCard':
        """Issue a new, rentable card with no loans and no late fee."""
        return cls(
            rental_card_no=RentalCardNo.create(),
            member=member,
            rental_status=RentalStatus.RENTAL_ABLE,
            late_fee=LateFee.create(),
        )

    # -- accessors -----------------------------------------------------------

    @property
    def rental_card_no(self) -> RentalCardNo:
        return self._rental_card_no

    @property
    def id(self) -> str:
        return self._rental_card_no.no

    @property
    def member(self) -> MemberRef:
        return self._member

    @property
    def member_id(self) -> str:
        return self._member.id

    @property
    def rental_status(self) -> RentalStatus:
        return self._rental_status

    @property
    def late_fee(self) -> LateFee:
        return self._late_fee

    def active_items(self) -> List[RentalItem]:
        """Snapshot of the active loans; changing it does not affect the card."""
        return [item.copy() for item in self._rental_items]

    def returned_items(self) -> List[ReturnedItem]:
        """Snapshot of the returned-loan history, oldest first."""
        return list(self._returned_items)

    # -- rentals -------------------------------------------------------------

    def rent_item(
        self,
        item: Item,
        policy: Optional[RentalTermPolicy] = None,
        rented_on: Optional[date] = None
    ) -> RentalItem:
        """
        Rent `item` on this card.

        Args:
            item: Item to rent
            policy: Rental-term policy that assigns the due date
            rented_on: Rental date (defaults to today)

        Returns:
            RentalItem: The new active loan

        Raises:
            StatusConflictError: If the card is blocked
            LimitExceededError: If MAX_RENTAL_ITEMS loans are already active
        """
        self._validate_rental_available()

        rental_item = RentalItem.create(item, policy=policy, rented_on=rented_on)
        self._rental_items.append(rental_item)
        return rental_item.copy()

    def _validate_rental_available(self) -> None:
        if self._rental_status == RentalStatus.RENTAL_UNABLE:
            logger.debug(f"Rental refused on blocked card {self.id}")
            raise StatusConflictError(
                "Card is not rentable",
                rental_card_no=self.id,
                rental_status=self._rental_status.value,
            )

        if len(self._rental_items) >= MAX_RENTAL_ITEMS:
            logger.debug(f"Rental refused on card {self.id}: limit of {MAX_RENTAL_ITEMS} reached")
            raise LimitExceededError(
                f"Maximum of {MAX_RENTAL_ITEMS} active items reached",
                rental_card_no=self.id,
                active_items=len(self._rental_items),
            )

    def return_item(self, item: Item, return_date: date) -> ReturnedItem:
        """
        Return `item`, accruing a late fee if it is past due.

        Returns:
            ReturnedItem: The history record for the closed loan

        Raises:
            ItemNotFoundError: If `item` is not actively rented on this card
        """
        rental_item = self._find_rental_item(item)

        self._calculate_late_fee(rental_item, return_date)
        self._rental_items.remove(rental_item)
        returned_item = ReturnedItem.create(rental_item, return_date)
        self._returned_items.append(returned_item)
        return returned_item

    def _calculate_late_fee(self, rental_item: RentalItem, return_date: date) -> None:
        if return_date > rental_item.overdue_date:
            delayed_days = rental_item.delayed_days(return_date)
            self._late_fee = self._late_fee.accumulate(delayed_days * POINTS_PER_DELAYED_DAY)

    def _find_rental_item(self, item: Item) -> RentalItem:
        for rental_item in self._rental_items:
            if rental_item.item == item:
                return rental_item

        logger.debug(f"Item {item.no} is not rented on card {self.id}")
        raise ItemNotFoundError(
            "Item is not currently rented on this card",
            rental_card_no=self.id,
            item_no=item.no,
        )

    # -- late fee ------------------------------------------------------------

    def deduct_late_fee(self, points: int) -> int:
        """
        Pay down the late fee by `points`.

        Any non-negative amount is accepted. Paying off the whole fee makes
        the card rentable again.

        Returns:
            int: The part of `points` that exceeded the outstanding fee
        """
        overpayment = self._late_fee.remaining_after_deduction(points)

        self._late_fee = self._late_fee.deduct(points)
        if self._late_fee.is_empty():
            self._rental_status = RentalStatus.RENTAL_ABLE

        return overpayment

    def make_available_rental(self, points: int) -> int:
        """
        Unblock the card by settling its late fee in full.

        Returns:
            int: The remaining late fee (always 0)

        Raises:
            OutstandingItemsRemainError: If any item is still rented
            PaymentMismatchError: If `points` is not exactly the outstanding fee
        """
        if self._rental_items:
            raise OutstandingItemsRemainError(
                "Cannot unblock while items are outstanding",
                rental_card_no=self.id,
                active_items=len(self._rental_items),
            )

        if points != self._late_fee.point:
            raise PaymentMismatchError(
                "Payment does not match outstanding fee",
                rental_card_no=self.id,
                outstanding=self._late_fee.point,
                paid=points,
            )

        self._late_fee = self._late_fee.deduct(points)
        if self._late_fee.is_empty():
            self._rental_status = RentalStatus.RENTAL_ABLE

        return self._late_fee.point

    # -- overdue trigger -----------------------------------------------------

    def overdue_item(self, item: Item) -> RentalItem:
        """
        Flag an active loan as overdue and block the card.

        Called by the external overdue-detection process, which decides on
        its own that the loan is overdue.

        Raises:
            ItemNotFoundError: If `item` is not actively rented on this card
        """
        rental_item = self._find_rental_item(item)

        overdued = rental_item.mark_overdue()
        self._rental_items[self._rental_items.index(rental_item)] = overdued
        self._rental_status = RentalStatus.RENTAL_UNABLE
        return overdued.copy()

    # -- queries -------------------------------------------------------------

    def is_item_rented(self, item: Item) -> bool:
        return any(rental_item.item == item for rental_item in self._rental_items)

    def overdue_item_count(self) -> int:
        return sum(1 for rental_item in self._rental_items if rental_item.overdued)

    def __repr__(self) -> str:
        return (
            f"<RentalCard {self.id} member={self.member_id} "
            f"status={self._rental_status.value} items={len(self._rental_items)} "
            f"late_fee={self._late_fee.point}>"
        )
