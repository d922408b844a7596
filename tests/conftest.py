"""Shared fixtures and builders for itinerary tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence

import pytest

from itinerary_report.config import ReportConfig, reset_config
from itinerary_report.domain.models import (
    Activities,
    Activity,
    Day,
    Flight,
    Hotel,
    Installment,
    Itinerary,
    ItineraryDraft,
    PaymentPlan,
    Transfer,
)

CREATED_AT = datetime(2024, 1, 1, 9, 30, tzinfo=timezone.utc)


def build_days(start: date, count: int) -> tuple[Day, ...]:
    """One day per calendar date starting at start, with a morning activity."""
    return tuple(
        Day(
            day_number=i + 1,
            date=start + timedelta(days=i),
            title=f"Exploring day {i + 1}",
            activities=Activities(
                morning=(
                    Activity(
                        name="Walking tour",
                        description="Old town walking tour",
                        location="Old Town",
                        duration="2 hours",
                    ),
                ),
            ),
        )
        for i in range(count)
    )


def build_plan(amount_due: float = 1000.0, amounts: Sequence[float] = (400.0, 600.0)) -> PaymentPlan:
    return PaymentPlan(
        amount_due=amount_due,
        due_date=date(2023, 12, 15),
        installments=tuple(
            Installment(
                number=i + 1,
                amount=amount,
                due_date=date(2023, 11, 1) + timedelta(days=30 * i),
                status="pending",
            )
            for i, amount in enumerate(amounts)
        ),
    )


def build_draft(
    start: date = date(2024, 1, 1),
    end: date = date(2024, 1, 3),
    days: Optional[Sequence[Day]] = None,
    plan: Optional[PaymentPlan] = None,
    transfers: Sequence[Transfer] = (),
) -> ItineraryDraft:
    if days is None:
        days = build_days(start, (end - start).days + 1)
    return ItineraryDraft(
        user_id="user-42",
        title="Lisbon Getaway",
        destination="Lisbon, Portugal",
        start_date=start,
        end_date=end,
        days=tuple(days),
        payment_plan=plan or build_plan(),
        hotels=(
            Hotel(
                name="Hotel Avenida",
                city="Lisbon",
                check_in_date=start,
                check_out_date=end,
                nights=(end - start).days,
                address="Av. da Liberdade 1",
            ),
        ),
        flights=(
            Flight(
                flight_number="TP1351",
                airline="TAP Air Portugal",
                origin="LHR",
                destination="LIS",
                departure=datetime(2024, 1, 1, 7, 5),
                arrival=datetime(2024, 1, 1, 9, 50),
            ),
        ),
        transfers=tuple(transfers),
        inclusions=("Breakfast", "Airport pickup"),
        exclusions=("Travel insurance",),
    )


def build_itinerary(itinerary_id: str = "itin-1", **kwargs) -> Itinerary:
    return build_draft(**kwargs).to_itinerary(itinerary_id, CREATED_AT)


def build_transfer() -> Transfer:
    return Transfer(
        origin="LIS Airport",
        destination="Hotel Avenida",
        mode="Private car",
        timing=datetime(2024, 1, 1, 10, 15),
    )


def build_payload() -> dict:
    """A valid creation payload using the JSON field names."""
    return {
        "user_id": "user-7",
        "title": "Kyoto in Autumn",
        "destination": "Kyoto, Japan",
        "start_date": "2024-11-01T00:00:00Z",
        "end_date": "2024-11-02",
        "days": [
            {
                "day_number": 1,
                "date": "2024-11-01",
                "title": "Arrival",
                "activities": {
                    "morning": [],
                    "afternoon": [
                        {
                            "name": "Fushimi Inari",
                            "description": "Torii gate hike",
                            "location": "Fushimi",
                            "duration": "3 hours",
                        }
                    ],
                    "evening": [],
                },
            },
            {"day_number": 2, "date": "2024-11-02", "title": "Departure"},
        ],
        "hotels": [
            {
                "name": "Ryokan Sakura",
                "city": "Kyoto",
                "check_in_date": "2024-11-01",
                "check_out_date": "2024-11-02",
                "nights": 1,
            }
        ],
        "flights": [
            {
                "flight_number": "JL1",
                "airline": "JAL",
                "from": "SFO",
                "to": "KIX",
                "departure": "2024-10-31T11:00:00",
                "arrival": "2024-11-01T15:30:00",
            }
        ],
        "transfers": [
            {
                "from": "KIX",
                "to": "Ryokan Sakura",
                "mode": "Train",
                "time": "2024-11-01T17:00:00",
            }
        ],
        "payment_plan": {
            "amount_due": 2400.0,
            "due_date": "2024-10-01",
            "installments": [
                {
                    "installment_number": 1,
                    "amount": 1200.0,
                    "due_date": "2024-09-01",
                    "status": "paid",
                },
                {
                    "installment_number": 2,
                    "amount": 1200.0,
                    "due_date": "2024-10-01",
                    "status": "pending",
                },
            ],
        },
        "inclusions": ["Rail pass"],
        "exclusions": [],
    }


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def itinerary() -> Itinerary:
    return build_itinerary()


@pytest.fixture
def report_config(tmp_path) -> ReportConfig:
    return ReportConfig(output_dir=tmp_path / "reports")
