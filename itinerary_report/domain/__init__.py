"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DuplicateItineraryError,
    InvalidDateRangeError,
    InvalidDayCountError,
    InvalidPaymentPlanError,
    ItineraryNotFoundError,
    ItineraryReportError,
    PaymentPlanViolation,
    RenderingError,
    ValidationError,
)
from .models import (
    Activities,
    Activity,
    Day,
    Flight,
    Hotel,
    Installment,
    Itinerary,
    ItineraryDraft,
    ItineraryPatch,
    PaymentPlan,
    Transfer,
    inclusive_day_span,
)

__all__ = [
    # Models
    "Activity",
    "Activities",
    "Day",
    "Hotel",
    "Flight",
    "Transfer",
    "Installment",
    "PaymentPlan",
    "Itinerary",
    "ItineraryDraft",
    "ItineraryPatch",
    "inclusive_day_span",
    # Errors
    "ItineraryReportError",
    "ValidationError",
    "InvalidDateRangeError",
    "InvalidDayCountError",
    "InvalidPaymentPlanError",
    "PaymentPlanViolation",
    "ItineraryNotFoundError",
    "DuplicateItineraryError",
    "RenderingError",
    "ConfigurationError",
]
