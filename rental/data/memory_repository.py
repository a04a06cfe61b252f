"""
In-memory rental card repository.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional

from rental.config.logging_config import get_logger
from rental.data.base_repository import BaseRepository, ConcurrencyConflictError, RepositoryError
from rental.data.models import RentalCardRecord, card_to_payload
from rental.domain.card import RentalCard

logger = get_logger(__name__)


class InMemoryRentalCardRepository(BaseRepository[RentalCard]):
    """In-memory repository for rental cards.

    Cards are stored as serialized records, never as live objects, so every
    load returns an independent aggregate and a caller holding an old copy
    cannot change stored state without going through `update`.
    """

    def __init__(self, connection_config: Dict[str, Any] = None):
        """Initialize the repository with an empty store.

        Args:
            connection_config: Not used for in-memory repository
        """
        super().__init__(connection_config or {})
        self._store: Dict[str, RentalCardRecord] = {}
        self._is_connected = False

    async def connect(self) -> bool:
        """Simulate connecting to a database.

        Returns:
            bool: Always returns True
        """
        self._is_connected = True
        logger.info("Connected to in-memory rental card repository")
        return True

    async def disconnect(self) -> None:
        """Simulate disconnecting from a database."""
        self._is_connected = False
        logger.info("Disconnected from in-memory rental card repository")

    async def get_by_id(self, id: str) -> Optional[RentalCard]:
        """Load a rental card by its card number.

        Args:
            id: Rental card number

        Returns:
            Optional[RentalCard]: A fresh copy of the card if found, None otherwise
        """
        self._check_connection()

        record = self._store.get(id)
        return record.to_card() if record else None

    async def get_all(self, filter_params: Optional[Dict[str, Any]] = None) -> List[RentalCard]:
        """Load all rental cards matching the filter.

        Args:
            filter_params: Card attribute values to match, e.g. {"member_id": "m-1"}

        Returns:
            List[RentalCard]: List of matching cards
        """
        self._check_connection()

        cards = [record.to_card() for record in self._store.values()]
        if not filter_params:
            return cards

        result = []
        for card in cards:
            match = True
            for key, value in filter_params.items():
                if not hasattr(card, key) or getattr(card, key) != value:
                    match = False
                    break
            if match:
                result.append(card)

        return result

    async def find_by_member_id(self, member_id: str) -> Optional[RentalCard]:
        """Load the card owned by a member, if any."""
        cards = await self.get_all({"member_id": member_id})
        return cards[0] if cards else None

    async def create(self, entity: RentalCard) -> RentalCard:
        """Store a new rental card.

        Args:
            entity: Card to store

        Returns:
            RentalCard: The stored card, at version 1
        """
        self._check_connection()

        if entity.id in self._store:
            raise RepositoryError(f"Rental card {entity.id} already exists", id=entity.id)

        entity.version = 1
        self._store[entity.id] = RentalCardRecord(
            id=entity.id,
            version=entity.version,
            payload=card_to_payload(entity)
        )
        logger.debug(f"Created rental card {entity.id}")
        return entity

    async def update(self, id: str, entity: RentalCard) -> RentalCard:
        """Commit a modified rental card.

        Args:
            id: Rental card number
            entity: Card as loaded and modified by the caller

        Returns:
            RentalCard: The committed card with its version bumped
        """
        self._check_connection()

        record = self._store.get(id)
        if record is None:
            raise RepositoryError(f"Rental card {id} not found", id=id)

        if record.version != entity.version:
            logger.warning(
                f"Stale write to rental card {id}: loaded version {entity.version}, "
                f"stored version {record.version}"
            )
            raise ConcurrencyConflictError(
                f"Rental card {id} was modified concurrently",
                id=id,
                expected_version=entity.version,
                actual_version=record.version
            )

        entity.version = record.version + 1
        self._store[id] = RentalCardRecord(
            id=id,
            version=entity.version,
            payload=card_to_payload(entity),
            updated_at=datetime.now()
        )
        return entity

    async def delete(self, id: str) -> bool:
        """Delete a rental card by its card number.

        Args:
            id: Rental card number

        Returns:
            bool: True if deleted, False if not found
        """
        self._check_connection()

        if id not in self._store:
            logger.warning(f"Rental card {id} not found")
            return False

        del self._store[id]
        return True

    def _check_connection(self) -> None:
        """Check if the repository is connected.

        Raises:
            RepositoryError: If not connected
        """
        if not self._is_connected:
            raise RepositoryError("Repository is not connected")
