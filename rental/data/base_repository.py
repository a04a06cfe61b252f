"""
Base repository interface for rental card persistence.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, TypeVar

from rental.config.logging_config import get_logger
from rental.utils.error_handling import AppError, ErrorSeverity

T = TypeVar('T')
logger = get_logger(__name__)


class RepositoryError(AppError):
    """The repository could not carry out an operation."""

    def __init__(self, message: str, **details):
        super().__init__(message, severity=ErrorSeverity.ERROR, details=details)


class ConcurrencyConflictError(RepositoryError):
    """The entity was modified by someone else since it was loaded."""


class BaseRepository(Generic[T], ABC):
    """Base class for all repository implementations.

    Implementations load an entity, let the caller apply one change, and
    commit it with `update`, which must reject stale writes. That is the
    only serialization the rental card aggregate gets.

    Generic type T represents the entity model being managed.
    """

    def __init__(self, connection_config: Dict[str, Any]):
        """Initialize the repository with connection configuration.

        Args:
            connection_config: Storage connection parameters
        """
        self.connection_config = connection_config
        self._connection = None

    @abstractmethod
    async def connect(self) -> bool:
        """Establish connection to the storage.

        Returns:
            bool: True if connection successful, False otherwise
        """
        pass

    @abstractmethod
    async def disconnect(self) -> None:
        """Disconnect from the storage."""
        pass

    @abstractmethod
    async def get_by_id(self, id: str) -> Optional[T]:
        """Retrieve an entity by its ID.

        Args:
            id: Entity identifier

        Returns:
            Optional[T]: Entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_all(self, filter_params: Optional[Dict[str, Any]] = None) -> List[T]:
        """Retrieve all entities matching the filter.

        Args:
            filter_params: Attribute values the entities must have

        Returns:
            List[T]: List of matching entities
        """
        pass

    @abstractmethod
    async def create(self, entity: T) -> T:
        """Store a new entity.

        Raises:
            RepositoryError: If an entity with the same ID already exists
        """
        pass

    @abstractmethod
    async def update(self, id: str, entity: T) -> T:
        """Commit changes to an existing entity.

        Args:
            id: Entity identifier
            entity: Entity as loaded and modified by the caller

        Returns:
            T: The committed entity with its new version

        Raises:
            ConcurrencyConflictError: If the stored entity changed since it was loaded
        """
        pass

    @abstractmethod
    async def delete(self, id: str) -> bool:
        """Delete an entity by its ID.

        Returns:
            bool: True if deleted, False otherwise
        """
        pass

    def handle_db_error(self, error: Exception, operation: str) -> Dict[str, Any]:
        """Describe a storage error in a consistent way.

        Args:
            error: The exception that occurred
            operation: Name of the repository operation that failed

        Returns:
            Dict[str, Any]: Error information
        """
        error_info = {
            "repository": self.__class__.__name__,
            "operation": operation,
            "error_type": type(error).__name__,
            "error_message": str(error)
        }

        logger.error(f"Repository error: {error_info}")
        return error_info
