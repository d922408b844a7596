"""Itinerary service - Main orchestrator.

Validates itineraries before they reach the repository, applies
partial updates, and hands stored itineraries to the report assembler.
Callers translate the typed errors into their own responses:
ValidationError means bad input, ItineraryNotFoundError a missing
resource, RenderingError an infrastructure fault.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..domain.errors import ValidationError
from ..domain.models import Itinerary, ItineraryDraft, ItineraryPatch
from ..ports.canvas import CanvasPort
from ..ports.repository import ItineraryRepositoryPort
from . import validator
from .report_assembler import ReportAssembler


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class ItineraryService:
    """Service for itinerary lifecycle and report generation.

    Attributes:
        repository: Itinerary storage
        assembler: Builds report documents
        canvas_factory: Creates a fresh canvas for every report
        clock: Source of created_at/updated_at timestamps
        id_factory: Source of new itinerary ids
    """

    repository: ItineraryRepositoryPort
    assembler: ReportAssembler
    canvas_factory: Callable[[], CanvasPort]
    clock: Callable[[], datetime] = _utc_now
    id_factory: Callable[[], str] = _new_id

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def create_itinerary(self, draft: ItineraryDraft) -> Itinerary:
        """Validate a draft and store it under a new id.

        Raises:
            ValidationError: If the draft breaks a consistency rule.
            DuplicateItineraryError: If the generated id is already taken.
        """
        try:
            validator.validate(draft)
        except ValidationError as e:
            self._logger.info(
                "Itinerary rejected",
                extra={"user_id": draft.user_id, "reason": e.message},
            )
            raise

        itinerary = draft.to_itinerary(self.id_factory(), self.clock())
        self.repository.create(itinerary)

        self._logger.info(
            "Itinerary created",
            extra={"itinerary_id": itinerary.id, "user_id": itinerary.user_id},
        )
        return itinerary

    def get_itinerary(self, itinerary_id: str) -> Itinerary:
        """Return a stored itinerary.

        Raises:
            ItineraryNotFoundError: If the id is unknown.
        """
        return self.repository.get(itinerary_id)

    def list_itineraries(self, user_id: Optional[str] = None) -> Sequence[Itinerary]:
        """Return all itineraries, or only those owned by user_id."""
        if user_id:
            return self.repository.list_by_user(user_id)
        return self.repository.list_all()

    def update_itinerary(self, itinerary_id: str, patch: ItineraryPatch) -> Itinerary:
        """Merge a partial update into a stored itinerary.

        The merge and validation run inside the repository's atomic
        update, so concurrent patches to one id apply one after the other.
        The merged itinerary is validated before it is stored; on failure
        the stored version is left untouched.

        Raises:
            ItineraryNotFoundError: If the id is unknown.
            ValidationError: If the merged itinerary is inconsistent.
        """

        def merge(existing: Itinerary) -> Itinerary:
            merged = patch.apply_to(existing, self.clock())
            try:
                validator.validate_update(merged, patch)
            except ValidationError as e:
                self._logger.info(
                    "Itinerary update rejected",
                    extra={"itinerary_id": itinerary_id, "reason": e.message},
                )
                raise
            return merged

        updated = self.repository.update_with(itinerary_id, merge)
        self._logger.info("Itinerary updated", extra={"itinerary_id": itinerary_id})
        return updated

    def delete_itinerary(self, itinerary_id: str) -> None:
        """Delete a stored itinerary.

        Raises:
            ItineraryNotFoundError: If the id is unknown.
        """
        self.repository.delete(itinerary_id)
        self._logger.info("Itinerary deleted", extra={"itinerary_id": itinerary_id})

    def generate_report(self, itinerary_id: str) -> Path:
        """Render a stored itinerary to a new document.

        Every call writes a new file; rendering the same itinerary twice
        yields two documents with identical content.

        Raises:
            ItineraryNotFoundError: If the id is unknown.
            RenderingError: If the document cannot be written.
        """
        itinerary = self.repository.get(itinerary_id)
        return self.assembler.assemble(itinerary, self.canvas_factory())
