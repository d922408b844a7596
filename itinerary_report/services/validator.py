"""Consistency checks for itineraries.

Every check is a pure function that raises a ValidationError subclass
on the first violation it finds. validate() runs them in a fixed
order (date range, day count, payment plan), so callers always see
the same first failure for the same input.
"""

from __future__ import annotations

import math
from datetime import date
from typing import Sequence, Union

from ..domain.errors import (
    InvalidDateRangeError,
    InvalidDayCountError,
    InvalidPaymentPlanError,
    PaymentPlanViolation,
)
from ..domain.models import (
    Day,
    Itinerary,
    ItineraryDraft,
    ItineraryPatch,
    PaymentPlan,
    inclusive_day_span,
)

# Absolute tolerance for comparing currency sums
PAYMENT_TOLERANCE = 0.01

Validatable = Union[Itinerary, ItineraryDraft]


def check_date_range(start: date, end: date) -> None:
    """Reject ranges where end is not strictly after start.

    Raises:
        InvalidDateRangeError: If end <= start.
    """
    if end <= start:
        raise InvalidDateRangeError(
            "end date must be after start date",
            start_date=start,
            end_date=end,
        )


def check_day_count(days: Sequence[Day], start: date, end: date) -> None:
    """Ensure there is exactly one day entry per calendar day.

    Day numbers and ordering are not inspected.

    Raises:
        InvalidDayCountError: If len(days) differs from the inclusive span.
    """
    expected = inclusive_day_span(start, end)
    actual = len(days)
    if actual != expected:
        raise InvalidDayCountError(
            f"number of days doesn't match date range: expected {expected} days, got {actual}",
            expected=expected,
            actual=actual,
        )


def check_payment_plan(plan: PaymentPlan) -> None:
    """Validate payment plan arithmetic.

    Raises:
        InvalidPaymentPlanError: If the total is not positive, there are
            no installments, or installments do not add up to the total.
    """
    # Negated comparisons so NaN and infinite amounts fail too
    if not plan.amount_due > 0 or math.isinf(plan.amount_due):
        raise InvalidPaymentPlanError(
            "total amount must be a positive, finite number",
            reason=PaymentPlanViolation.NON_POSITIVE_TOTAL,
        )

    if not plan.installments:
        raise InvalidPaymentPlanError(
            "at least one installment is required",
            reason=PaymentPlanViolation.NO_INSTALLMENTS,
        )

    total = plan.installments_total
    if not abs(total - plan.amount_due) <= PAYMENT_TOLERANCE:
        raise InvalidPaymentPlanError(
            f"installment amounts ({total:.2f}) don't match total amount ({plan.amount_due:.2f})",
            reason=PaymentPlanViolation.AMOUNT_MISMATCH,
            expected_sum=plan.amount_due,
            actual_sum=total,
        )


def validate(subject: Validatable) -> None:
    """Run every consistency check, stopping at the first failure."""
    check_date_range(subject.start_date, subject.end_date)
    check_day_count(subject.days, subject.start_date, subject.end_date)
    check_payment_plan(subject.payment_plan)


def validate_update(merged: Itinerary, patch: ItineraryPatch) -> None:
    """Re-check a merged itinerary after a partial update.

    The day count is only re-checked when the patch changes the start
    date, the end date or the day list.
    """
    check_date_range(merged.start_date, merged.end_date)
    if patch.touches_schedule:
        check_day_count(merged.days, merged.start_date, merged.end_date)
    check_payment_plan(merged.payment_plan)
