"""Immutable domain models for the itinerary report system.

All models are frozen dataclasses with slots. Collections are stored
as tuples so an itinerary handed to the validator or the report
assembler cannot be mutated behind their back.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Iterator, Optional


def inclusive_day_span(start: date, end: date) -> int:
    """Number of calendar days from start to end, counting both ends."""
    return (end - start).days + 1


@dataclass(frozen=True, slots=True)
class Activity:
    """A single scheduled activity within a time slot.

    Attributes:
        name: Short activity name
        description: Free-text description
        location: Where the activity takes place
        duration: Optional human-readable duration (e.g. '2 hours')
    """

    name: str
    description: str
    location: str
    duration: str = ""


@dataclass(frozen=True, slots=True)
class Activities:
    """Activities of a day split into morning, afternoon and evening."""

    morning: tuple[Activity, ...] = field(default_factory=tuple)
    afternoon: tuple[Activity, ...] = field(default_factory=tuple)
    evening: tuple[Activity, ...] = field(default_factory=tuple)

    def slots(self) -> Iterator[tuple[str, tuple[Activity, ...]]]:
        """Yield (label, activities) pairs in chronological order."""
        yield "Morning", self.morning
        yield "Afternoon", self.afternoon
        yield "Evening", self.evening


@dataclass(frozen=True, slots=True)
class Day:
    """One day of the trip.

    Attributes:
        day_number: 1-based position within the trip
        date: Calendar date of the day
        title: Headline for the day
        activities: Morning/afternoon/evening activity lists
    """

    day_number: int
    date: date
    title: str
    activities: Activities = field(default_factory=Activities)


@dataclass(frozen=True, slots=True)
class Hotel:
    """A hotel stay."""

    name: str
    city: str
    check_in_date: date
    check_out_date: date
    nights: int
    address: str = ""


@dataclass(frozen=True, slots=True)
class Flight:
    """A booked flight.

    Attributes:
        flight_number: Carrier flight number, unique within an itinerary
        airline: Operating airline
        origin: Departure airport or city
        destination: Arrival airport or city
        departure: Scheduled departure time
        arrival: Scheduled arrival time
    """

    flight_number: str
    airline: str
    origin: str
    destination: str
    departure: datetime
    arrival: datetime


@dataclass(frozen=True, slots=True)
class Transfer:
    """Ground transfer between two places."""

    origin: str
    destination: str
    mode: str
    timing: datetime


@dataclass(frozen=True, slots=True)
class Installment:
    """One scheduled partial payment.

    Attributes:
        number: Installment sequence number
        amount: Amount due for this installment
        due_date: When the installment is due
        status: Free-form status (e.g. 'paid', 'pending')
    """

    number: int
    amount: float
    due_date: date
    status: str


@dataclass(frozen=True, slots=True)
class PaymentPlan:
    """Total amount due and how it is split into installments."""

    amount_due: float
    due_date: date
    installments: tuple[Installment, ...] = field(default_factory=tuple)

    @property
    def installments_total(self) -> float:
        """Sum of all installment amounts."""
        return sum(inst.amount for inst in self.installments)


@dataclass(frozen=True, slots=True)
class ItineraryDraft:
    """Itinerary content before it has been given an identity.

    This is the shape accepted on creation: everything an itinerary
    holds except its id and timestamps.
    """

    user_id: str
    title: str
    destination: str
    start_date: date
    end_date: date
    days: tuple[Day, ...]
    payment_plan: PaymentPlan
    hotels: tuple[Hotel, ...] = field(default_factory=tuple)
    flights: tuple[Flight, ...] = field(default_factory=tuple)
    transfers: tuple[Transfer, ...] = field(default_factory=tuple)
    inclusions: tuple[str, ...] = field(default_factory=tuple)
    exclusions: tuple[str, ...] = field(default_factory=tuple)

    def to_itinerary(self, itinerary_id: str, now: datetime) -> Itinerary:
        """Materialize the draft into a stored itinerary."""
        return Itinerary(
            id=itinerary_id,
            user_id=self.user_id,
            title=self.title,
            destination=self.destination,
            start_date=self.start_date,
            end_date=self.end_date,
            days=self.days,
            hotels=self.hotels,
            flights=self.flights,
            transfers=self.transfers,
            payment_plan=self.payment_plan,
            inclusions=self.inclusions,
            exclusions=self.exclusions,
            created_at=now,
            updated_at=now,
        )


@dataclass(frozen=True, slots=True)
class Itinerary:
    """The full travel-plan aggregate.

    Attributes:
        id: Opaque unique identifier
        user_id: Owner reference
        title: Trip title
        destination: Main destination
        start_date: First day of the trip (inclusive)
        end_date: Last day of the trip (inclusive)
        days: Day-by-day plan, in stored order
        hotels: Hotel stays
        flights: Booked flights
        transfers: Ground transfers (may be empty)
        payment_plan: Amount due and installments
        inclusions: What the package includes
        exclusions: What the package does not include
        created_at: Creation instant
        updated_at: Last modification instant
    """

    id: str
    user_id: str
    title: str
    destination: str
    start_date: date
    end_date: date
    days: tuple[Day, ...]
    hotels: tuple[Hotel, ...]
    flights: tuple[Flight, ...]
    transfers: tuple[Transfer, ...]
    payment_plan: PaymentPlan
    inclusions: tuple[str, ...]
    exclusions: tuple[str, ...]
    created_at: datetime
    updated_at: datetime

    @property
    def duration_days(self) -> int:
        return inclusive_day_span(self.start_date, self.end_date)

    @property
    def duration_nights(self) -> int:
        return self.duration_days - 1


@dataclass(frozen=True, slots=True)
class ItineraryPatch:
    """Partial update of an itinerary.

    Every field is optional; None means "leave unchanged". Collections
    that are supplied replace the stored collection wholesale.
    """

    title: Optional[str] = None
    destination: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    days: Optional[tuple[Day, ...]] = None
    hotels: Optional[tuple[Hotel, ...]] = None
    flights: Optional[tuple[Flight, ...]] = None
    transfers: Optional[tuple[Transfer, ...]] = None
    payment_plan: Optional[PaymentPlan] = None
    inclusions: Optional[tuple[str, ...]] = None
    exclusions: Optional[tuple[str, ...]] = None

    @property
    def touches_schedule(self) -> bool:
        """True when the patch changes the date range or the day list."""
        return (
            self.start_date is not None
            or self.end_date is not None
            or self.days is not None
        )

    def _changes(self) -> dict[str, object]:
        names = (
            "title",
            "destination",
            "start_date",
            "end_date",
            "days",
            "hotels",
            "flights",
            "transfers",
            "payment_plan",
            "inclusions",
            "exclusions",
        )
        changes = {}
        for name in names:
            value = getattr(self, name)
            if value is not None:
                changes[name] = value
        return changes

    def apply_to(self, itinerary: Itinerary, now: datetime) -> Itinerary:
        """Return a copy of the itinerary with the supplied fields replaced."""
        return replace(itinerary, updated_at=now, **self._changes())
