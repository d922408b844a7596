"""Request schemas for itinerary payloads.

These pydantic models describe the JSON shapes accepted on creation
and update, and the stored-itinerary document read by the CLI. They
check shape and types only; business rules live in the validator.
Each model converts itself into the matching domain value.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .domain.models import (
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
)


def _coerce_date(value: Any) -> Any:
    """Accept full ISO timestamps where a calendar date is expected."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and "T" in value:
        return datetime.fromisoformat(value).date()
    return value


CalendarDate = Annotated[date, BeforeValidator(_coerce_date)]


class ActivitySchema(BaseModel):
    """Single activity within a time slot."""

    name: str
    description: str
    location: str
    duration: str = ""

    def to_domain(self) -> Activity:
        return Activity(
            name=self.name,
            description=self.description,
            location=self.location,
            duration=self.duration,
        )


class ActivitiesSchema(BaseModel):
    morning: list[ActivitySchema] = Field(default_factory=list)
    afternoon: list[ActivitySchema] = Field(default_factory=list)
    evening: list[ActivitySchema] = Field(default_factory=list)

    def to_domain(self) -> Activities:
        return Activities(
            morning=tuple(a.to_domain() for a in self.morning),
            afternoon=tuple(a.to_domain() for a in self.afternoon),
            evening=tuple(a.to_domain() for a in self.evening),
        )


class DaySchema(BaseModel):
    """One day of the trip."""

    day_number: int = Field(..., ge=1)
    date: CalendarDate
    title: str
    activities: ActivitiesSchema = Field(default_factory=ActivitiesSchema)

    def to_domain(self) -> Day:
        return Day(
            day_number=self.day_number,
            date=self.date,
            title=self.title,
            activities=self.activities.to_domain(),
        )


class HotelSchema(BaseModel):
    name: str
    city: str
    check_in_date: CalendarDate
    check_out_date: CalendarDate
    nights: int = Field(..., ge=1)
    address: str = ""

    def to_domain(self) -> Hotel:
        return Hotel(
            name=self.name,
            city=self.city,
            check_in_date=self.check_in_date,
            check_out_date=self.check_out_date,
            nights=self.nights,
            address=self.address,
        )


class FlightSchema(BaseModel):
    """Flight leg; 'from' and 'to' are accepted as JSON keys."""

    model_config = ConfigDict(populate_by_name=True)

    flight_number: str
    airline: str
    origin: str = Field(..., alias="from")
    destination: str = Field(..., alias="to")
    departure: datetime
    arrival: datetime

    def to_domain(self) -> Flight:
        return Flight(
            flight_number=self.flight_number,
            airline=self.airline,
            origin=self.origin,
            destination=self.destination,
            departure=self.departure,
            arrival=self.arrival,
        )


class TransferSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    origin: str = Field(..., alias="from")
    destination: str = Field(..., alias="to")
    mode: str
    timing: datetime = Field(..., alias="time")

    def to_domain(self) -> Transfer:
        return Transfer(
            origin=self.origin,
            destination=self.destination,
            mode=self.mode,
            timing=self.timing,
        )


class InstallmentSchema(BaseModel):
    installment_number: int = Field(..., ge=1)
    amount: float = Field(..., allow_inf_nan=False)
    due_date: CalendarDate
    status: str

    def to_domain(self) -> Installment:
        return Installment(
            number=self.installment_number,
            amount=self.amount,
            due_date=self.due_date,
            status=self.status,
        )


class PaymentPlanSchema(BaseModel):
    amount_due: float = Field(..., allow_inf_nan=False)
    due_date: CalendarDate
    installments: list[InstallmentSchema] = Field(default_factory=list)

    def to_domain(self) -> PaymentPlan:
        return PaymentPlan(
            amount_due=self.amount_due,
            due_date=self.due_date,
            installments=tuple(i.to_domain() for i in self.installments),
        )


class CreateItineraryRequest(BaseModel):
    """Payload for creating an itinerary."""

    user_id: str
    title: str
    destination: str
    start_date: CalendarDate
    end_date: CalendarDate
    days: list[DaySchema]
    hotels: list[HotelSchema] = Field(default_factory=list)
    flights: list[FlightSchema] = Field(default_factory=list)
    transfers: list[TransferSchema] = Field(default_factory=list)
    payment_plan: PaymentPlanSchema
    inclusions: list[str] = Field(default_factory=list)
    exclusions: list[str] = Field(default_factory=list)

    def to_draft(self) -> ItineraryDraft:
        return ItineraryDraft(
            user_id=self.user_id,
            title=self.title,
            destination=self.destination,
            start_date=self.start_date,
            end_date=self.end_date,
            days=tuple(d.to_domain() for d in self.days),
            hotels=tuple(h.to_domain() for h in self.hotels),
            flights=tuple(f.to_domain() for f in self.flights),
            transfers=tuple(t.to_domain() for t in self.transfers),
            payment_plan=self.payment_plan.to_domain(),
            inclusions=tuple(self.inclusions),
            exclusions=tuple(self.exclusions),
        )


class ItineraryDocument(CreateItineraryRequest):
    """A stored itinerary, including its identity and timestamps."""

    id: str
    created_at: datetime
    updated_at: datetime

    def to_itinerary(self) -> Itinerary:
        itinerary = self.to_draft().to_itinerary(self.id, self.created_at)
        return replace(itinerary, updated_at=self.updated_at)


class UpdateItineraryRequest(BaseModel):
    """Payload for a partial update; omitted fields stay unchanged."""

    title: Optional[str] = None
    destination: Optional[str] = None
    start_date: Optional[CalendarDate] = None
    end_date: Optional[CalendarDate] = None
    days: Optional[list[DaySchema]] = None
    hotels: Optional[list[HotelSchema]] = None
    flights: Optional[list[FlightSchema]] = None
    transfers: Optional[list[TransferSchema]] = None
    payment_plan: Optional[PaymentPlanSchema] = None
    inclusions: Optional[list[str]] = None
    exclusions: Optional[list[str]] = None

    def to_patch(self) -> ItineraryPatch:
        def convert(items: Optional[list[Any]]) -> Optional[tuple[Any, ...]]:
            if items is None:
                return None
            return tuple(item.to_domain() for item in items)

        return ItineraryPatch(
            title=self.title,
            destination=self.destination,
            start_date=self.start_date,
            end_date=self.end_date,
            days=convert(self.days),
            hotels=convert(self.hotels),
            flights=convert(self.flights),
            transfers=convert(self.transfers),
            payment_plan=self.payment_plan.to_domain() if self.payment_plan else None,
            inclusions=tuple(self.inclusions) if self.inclusions is not None else None,
            exclusions=tuple(self.exclusions) if self.exclusions is not None else None,
        )
