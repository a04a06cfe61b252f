"""
Persistence models: how a rental card is stored and rebuilt.
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict

from rental.domain.card import (
    Item,
    LateFee,
    MemberRef,
    RentalCard,
    RentalCardNo,
    RentalItem,
    RentalStatus,
    ReturnedItem,
)


@dataclass
class RentalCardRecord:
    """Stored snapshot of one rental card."""

    id: str
    version: int = 0
    payload: Dict[str, Any] = field(default_factory=dict)
    updated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the record to a dictionary."""
        return {
            "id": self.id,
            "version": self.version,
            "payload": self.payload,
            "updated_at": self.updated_at.isoformat()
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RentalCardRecord':
        """Create a record from a dictionary."""
        updated_at = datetime.fromisoformat(data["updated_at"]) if isinstance(data.get("updated_at"), str) else data.get("updated_at")

        return cls(
            id=data["id"],
            version=data.get("version", 0),
            payload=data.get("payload", {}),
            updated_at=updated_at or datetime.now()
        )

    def to_card(self) -> RentalCard:
        """Rebuild the aggregate stored in this record."""
        return card_from_payload(self.payload, version=self.version)


def card_to_payload(card: RentalCard) -> Dict[str, Any]:
    """Serialize a rental card to plain data."""
    return {
        "rental_card_no": card.rental_card_no.no,
        "member": {"id": card.member.id, "name": card.member.name},
        "rental_status": card.rental_status.value,
        "late_fee": card.late_fee.point,
        "rental_items": [_rental_item_to_dict(it) for it in card.active_items()],
        "returned_items": [
            {
                "rental_item": _rental_item_to_dict(returned.rental_item),
                "return_date": returned.return_date.isoformat()
            }
            for returned in card.returned_items()
        ]
    }


def card_from_payload(payload: Dict[str, Any], version: int = 0) -> RentalCard:
    """Rebuild a rental card from data produced by card_to_payload."""
    return RentalCard(
        rental_card_no=RentalCardNo(payload["rental_card_no"]),
        member=MemberRef(**payload["member"]),
        rental_status=RentalStatus(payload["rental_status"]),
        late_fee=LateFee(payload.get("late_fee", 0)),
        rental_items=[_rental_item_from_dict(it) for it in payload.get("rental_items", [])],
        returned_items=[
            ReturnedItem(
                rental_item=_rental_item_from_dict(returned["rental_item"]),
                return_date=date.fromisoformat(returned["return_date"])
            )
            for returned in payload.get("returned_items", [])
        ],
        version=version
    )


def _rental_item_to_dict(rental_item: RentalItem) -> Dict[str, Any]:
    return {
        "item": {"no": rental_item.item.no, "title": rental_item.item.title},
        "rent_date": rental_item.rent_date.isoformat(),
        "overdue_date": rental_item.overdue_date.isoformat(),
        "overdued": rental_item.overdued
    }


def _rental_item_from_dict(data: Dict[str, Any]) -> RentalItem:
    return RentalItem(
        item=Item(**data["item"]),
        rent_date=date.fromisoformat(data["rent_date"]),
        overdue_date=date.fromisoformat(data["overdue_date"]),
        overdued=data.get("overdued", False)
    )
