"""
Rental card application service.

Each public method is one unit of work: load the card, apply exactly one
aggregate operation, commit it through the repository's version check, and
publish the matching event. Business-rule errors from the aggregate are
logged and re-raised unchanged, and nothing is saved or published for them.
"""

import time
import uuid
from datetime import date
from typing import Any, Callable, Dict, Optional

from rental.config import settings
from rental.config.logging_config import get_logger
from rental.data.base_repository import BaseRepository, RepositoryError
from rental.domain.card import FixedTermPolicy, Item, MemberRef, RentalCard, RentalTermPolicy
from rental.domain.errors import RentalCardError
from rental.events.event_interface import ErrorEvent, EventEmitter, EventType, RentalCardEvent, event_bus
from rental.utils.error_handling import AppError, ErrorSeverity

logger = get_logger(__name__)


class CardNotFoundError(AppError):
    """No rental card exists for the given card number."""

    def __init__(self, rental_card_no: str):
        super().__init__(
            f"Rental card {rental_card_no} not found",
            severity=ErrorSeverity.WARNING,
            details={"rental_card_no": rental_card_no}
        )


class CardAlreadyExistsError(AppError):
    """The member already owns a rental card."""

    def __init__(self, member_id: str, rental_card_no: str):
        super().__init__(
            f"Member {member_id} already has rental card {rental_card_no}",
            severity=ErrorSeverity.WARNING,
            details={"member_id": member_id, "rental_card_no": rental_card_no}
        )


class RentalCardService:
    """
    Coordinates rental card operations with persistence and events.

    The repository must already be connected.
    """

    def __init__(
        self,
        repository: BaseRepository[RentalCard],
        term_policy: Optional[RentalTermPolicy] = None,
        emitter: Optional[EventEmitter] = None,
    ):
        """
        Initialize the service.

        Args:
            repository: Rental card repository
            term_policy: Policy assigning due dates (defaults to the configured fixed term)
            emitter: Event emitter to publish on (defaults to the global event bus)
        """
        self._repository = repository
        self._term_policy = term_policy or FixedTermPolicy(settings.policy.rental_term_days)
        self._emitter = emitter or event_bus

    async def create_card(self, member: MemberRef) -> RentalCard:
        """Issue a rental card to a member who does not have one yet."""
        existing = await self.find_card_by_member(member.id)
        if existing is not None:
            raise CardAlreadyExistsError(member.id, existing.id)

        card = RentalCard.create(member)
        try:
            card = await self._repository.create(card)
        except RepositoryError as e:
            self._handle_repository_error(e, "create_card", card.id)
            raise

        logger.info(f"Issued rental card {card.id} to member {member.id}")
        self._publish(EventType.RENTAL_CARD_CREATED, card, {"member_name": member.name})
        return card

    async def get_card(self, rental_card_no: str) -> RentalCard:
        card = await self._repository.get_by_id(rental_card_no)
        if card is None:
            raise CardNotFoundError(rental_card_no)
        return card

    async def find_card_by_member(self, member_id: str) -> Optional[RentalCard]:
        cards = await self._repository.get_all({"member_id": member_id})
        return cards[0] if cards else None

    async def rent_item(self, rental_card_no: str, item: Item, rented_on: Optional[date] = None) -> RentalCard:
        """Rent an item on a card, with the due date set by the term policy."""
        def apply(card: RentalCard) -> Dict[str, Any]:
            rental_item = card.rent_item(item, policy=self._term_policy, rented_on=rented_on)
            return {
                "item_no": item.no,
                "item_title": item.title,
                "overdue_date": rental_item.overdue_date.isoformat()
            }

        return await self._execute(rental_card_no, "rent_item", EventType.ITEM_RENTED, apply)

    async def return_item(self, rental_card_no: str, item: Item, return_date: Optional[date] = None) -> RentalCard:
        """Return an item, accruing any late fee on the card."""
        return_date = return_date or date.today()

        def apply(card: RentalCard) -> Dict[str, Any]:
            fee_before = card.late_fee.point
            card.return_item(item, return_date)
            return {
                "item_no": item.no,
                "item_title": item.title,
                "return_date": return_date.isoformat(),
                "late_fee_accrued": card.late_fee.point - fee_before
            }

        return await self._execute(rental_card_no, "return_item", EventType.ITEM_RETURNED, apply)

    async def overdue_item(self, rental_card_no: str, item: Item) -> RentalCard:
        """Entry point for the overdue-detection batch: flag an item overdue and block the card."""
        def apply(card: RentalCard) -> Dict[str, Any]:
            card.overdue_item(item)
            return {"item_no": item.no, "item_title": item.title}

        return await self._execute(rental_card_no, "overdue_item", EventType.ITEM_OVERDUE, apply)

    async def deduct_late_fee(self, rental_card_no: str, points: int) -> int:
        """
        Pay down a card's late fee.

        Returns:
            int: The overpayment, for refund bookkeeping by the caller
        """
        result: Dict[str, Any] = {}

        def apply(card: RentalCard) -> Dict[str, Any]:
            result["overpayment"] = card.deduct_late_fee(points)
            return {
                "points": points,
                "overpayment": result["overpayment"],
                "remaining": card.late_fee.point
            }

        await self._execute(rental_card_no, "deduct_late_fee", EventType.LATE_FEE_DEDUCTED, apply)
        return result["overpayment"]

    async def make_available_rental(self, rental_card_no: str, points: int) -> RentalCard:
        """Unblock a card by settling its late fee exactly."""
        def apply(card: RentalCard) -> Dict[str, Any]:
            card.make_available_rental(points)
            return {"points": points}

        return await self._execute(rental_card_no, "make_available_rental", EventType.OVERDUE_CLEARED, apply)

    async def _execute(
        self,
        rental_card_no: str,
        operation: str,
        event_type: EventType,
        apply: Callable[[RentalCard], Dict[str, Any]],
    ) -> RentalCard:
        card = await self.get_card(rental_card_no)

        try:
            event_data = apply(card)
        except RentalCardError as e:
            logger.warning(f"{operation} rejected on card {rental_card_no}: {e.message}")
            raise

        try:
            card = await self._repository.update(card.id, card)
        except RepositoryError as e:
            self._handle_repository_error(e, operation, rental_card_no)
            raise

        logger.info(f"{operation} committed on card {rental_card_no} (version {card.version})")
        self._publish(event_type, card, event_data)
        return card

    def _handle_repository_error(self, error: RepositoryError, operation: str, rental_card_no: str) -> None:
        error_info = self._repository.handle_db_error(error, operation)
        self._emitter.emit(ErrorEvent(
            type=EventType.ERROR,
            data={"rental_card_no": rental_card_no},
            id=str(uuid.uuid4()),
            created_at=int(time.time()),
            error=error_info
        ))

    def _publish(self, event_type: EventType, card: RentalCard, data: Dict[str, Any]) -> None:
        self._emitter.emit(RentalCardEvent(
            type=event_type,
            data=dict(data, rental_status=card.rental_status.value, late_fee=card.late_fee.point),
            id=str(uuid.uuid4()),
            created_at=int(time.time()),
            rental_card_no=card.id,
            member_id=card.member_id
        ))
