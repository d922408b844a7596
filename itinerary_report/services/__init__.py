"""Services layer - Application orchestration.

This module contains the services that fulfil the use cases:

Available services:
- ItineraryService: Itinerary lifecycle and report generation
- ReportAssembler: Lays out an itinerary report onto a canvas
- validator: Pure consistency checks
"""

from . import validator
from .itinerary_service import ItineraryService
from .report_assembler import ReportAssembler

__all__ = ["ItineraryService", "ReportAssembler", "validator"]
