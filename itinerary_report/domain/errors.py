"""Typed domain errors for the itinerary report system.

All errors inherit from ItineraryReportError and can optionally
wrap a root cause exception for debugging.

Business-rule failures derive from ValidationError so callers can
tell "bad input" apart from "missing resource" (ItineraryNotFoundError)
and from infrastructure faults (RenderingError).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional


@dataclass
class ItineraryReportError(Exception):
    """Base error for the itinerary report domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class ValidationError(ItineraryReportError):
    """An itinerary breaks one of its consistency rules."""


@dataclass
class InvalidDateRangeError(ValidationError):
    """End date is not strictly after the start date.

    Attributes:
        start_date: The offending start date
        end_date: The offending end date
    """

    start_date: Optional[date] = None
    end_date: Optional[date] = None


@dataclass
class InvalidDayCountError(ValidationError):
    """Number of days does not match the inclusive date span.

    Attributes:
        expected: Day count implied by the date range
        actual: Number of days supplied
    """

    expected: int = 0
    actual: int = 0


class PaymentPlanViolation(Enum):
    """Which payment plan rule was broken."""

    NON_POSITIVE_TOTAL = "non_positive_total"
    NO_INSTALLMENTS = "no_installments"
    AMOUNT_MISMATCH = "amount_mismatch"


@dataclass
class InvalidPaymentPlanError(ValidationError):
    """Payment plan arithmetic is inconsistent.

    Attributes:
        reason: The rule that failed
        expected_sum: Amount due (set for AMOUNT_MISMATCH)
        actual_sum: Sum of installments (set for AMOUNT_MISMATCH)
    """

    reason: PaymentPlanViolation = PaymentPlanViolation.AMOUNT_MISMATCH
    expected_sum: Optional[float] = None
    actual_sum: Optional[float] = None


@dataclass
class ItineraryNotFoundError(ItineraryReportError):
    """No itinerary is stored under the given id."""

    itinerary_id: str = ""


@dataclass
class DuplicateItineraryError(ItineraryReportError):
    """An itinerary with the same id already exists."""

    itinerary_id: str = ""


@dataclass
class RenderingError(ItineraryReportError):
    """Report output could not be written.

    Wraps output directory creation and canvas persist failures.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of canvas that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""


@dataclass
class ConfigurationError(ItineraryReportError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
