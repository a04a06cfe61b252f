"""
Rental card aggregate and the value types it owns.
"""

from rental.domain.card.aggregate import MAX_RENTAL_ITEMS, POINTS_PER_DELAYED_DAY, RentalCard
from rental.domain.card.items import RentalItem, ReturnedItem
from rental.domain.card.policy import FixedTermPolicy, RentalTermPolicy
from rental.domain.card.values import Item, LateFee, MemberRef, RentalCardNo, RentalStatus

__all__ = [
    "MAX_RENTAL_ITEMS",
    "POINTS_PER_DELAYED_DAY",
    "RentalCard",
    "RentalItem",
    "ReturnedItem",
    "FixedTermPolicy",
    "RentalTermPolicy",
    "Item",
    "LateFee",
    "MemberRef",
    "RentalCardNo",
    "RentalStatus",
]
