"""Repository port - Abstraction for itinerary storage.

Stores must be swappable and return domain models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Itinerary


class ItineraryRepositoryPort(Protocol):
    """Port for itinerary persistence.

    Implementation: adapters/repository/memory_repository.py

    Implementations must be safe to call from several threads.
    """

    def create(self, itinerary: Itinerary) -> None:
        """Store a new itinerary.

        Raises:
            DuplicateItineraryError: If the id is already taken.
        """
        ...

    def get(self, itinerary_id: str) -> Itinerary:
        """Return the itinerary stored under itinerary_id.

        Raises:
            ItineraryNotFoundError: If nothing is stored under the id.
        """
        ...

    def list_all(self) -> Sequence[Itinerary]:
        """Return every stored itinerary."""
        ...

    def list_by_user(self, user_id: str) -> Sequence[Itinerary]:
        """Return the itineraries owned by user_id (possibly empty)."""
        ...

    def update(self, itinerary_id: str, itinerary: Itinerary) -> None:
        """Replace the stored itinerary.

        Raises:
            ItineraryNotFoundError: If nothing is stored under the id.
        """
        ...

    def update_with(
        self,
        itinerary_id: str,
        change: Callable[[Itinerary], Itinerary],
    ) -> Itinerary:
        """Replace the stored itinerary with change(current), atomically.

        No other write to the same id may interleave between reading the
        current value and storing the result. If change raises, nothing is
        stored and the exception propagates.

        Raises:
            ItineraryNotFoundError: If nothing is stored under the id.
        """
        ...

    def delete(self, itinerary_id: str) -> None:
        """Remove an itinerary.

        Raises:
            ItineraryNotFoundError: If nothing is stored under the id.
        """
        ...
