"""Thread-safe in-memory itinerary store.

Itineraries are immutable, so the store hands out the stored objects
directly. All reads and writes go through a single RLock, which keeps
concurrent create/update/delete calls on the same id consistent.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, Dict, List

from ...domain.errors import DuplicateItineraryError, ItineraryNotFoundError
from ...domain.models import Itinerary


@dataclass
class InMemoryItineraryRepository:
    """Itinerary repository backed by a dict.

    This adapter implements ItineraryRepositoryPort. Iteration order is
    insertion order, so list_all() returns itineraries in the order
    they were created.

    Attributes:
        name: Repository name for logging
    """

    name: str = "itineraries"

    _store: Dict[str, Itinerary] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def create(self, itinerary: Itinerary) -> None:
        with self._lock:
            if itinerary.id in self._store:
                raise DuplicateItineraryError(
                    "itinerary already exists",
                    itinerary_id=itinerary.id,
                )
            self._store[itinerary.id] = itinerary
            self._logger.debug(
                "Itinerary stored",
                extra={"repository": self.name, "itinerary_id": itinerary.id},
            )

    def get(self, itinerary_id: str) -> Itinerary:
        with self._lock:
            itinerary = self._store.get(itinerary_id)
        if itinerary is None:
            raise ItineraryNotFoundError(
                "itinerary not found",
                itinerary_id=itinerary_id,
            )
        return itinerary

    def list_all(self) -> List[Itinerary]:
        with self._lock:
            return list(self._store.values())

    def list_by_user(self, user_id: str) -> List[Itinerary]:
        with self._lock:
            return [it for it in self._store.values() if it.user_id == user_id]

    def update(self, itinerary_id: str, itinerary: Itinerary) -> None:
        with self._lock:
            if itinerary_id not in self._store:
                raise ItineraryNotFoundError(
                    "itinerary not found",
                    itinerary_id=itinerary_id,
                )
            self._store[itinerary_id] = itinerary
            self._logger.debug(
                "Itinerary replaced",
                extra={"repository": self.name, "itinerary_id": itinerary_id},
            )

    def update_with(
        self,
        itinerary_id: str,
        change: Callable[[Itinerary], Itinerary],
    ) -> Itinerary:
        with self._lock:
            current = self._store.get(itinerary_id)
            if current is None:
                raise ItineraryNotFoundError(
                    "itinerary not found",
                    itinerary_id=itinerary_id,
                )
            updated = change(current)
            self._store[itinerary_id] = updated
            self._logger.debug(
                "Itinerary replaced",
                extra={"repository": self.name, "itinerary_id": itinerary_id},
            )
            return updated

    def delete(self, itinerary_id: str) -> None:
        with self._lock:
            if itinerary_id not in self._store:
                raise ItineraryNotFoundError(
                    "itinerary not found",
                    itinerary_id=itinerary_id,
                )
            del self._store[itinerary_id]
            self._logger.debug(
                "Itinerary deleted",
                extra={"repository": self.name, "itinerary_id": itinerary_id},
            )
