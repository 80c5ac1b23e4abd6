"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import TypeVar, List, Optional, Any, Protocol

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic read/create operations."""

    def get_by_id(self, id: int) -> Optional[T]:
        """Get a single entity by primary key."""
        ...

    def list_all(self) -> List[T]:
        """List every entity."""
        ...

    def create(self, obj_in: Any) -> T:
        """Create a new entity."""
        ...
