"""Report assembler - turns an itinerary into a paginated document.

The assembler decides what goes on which page and in what order; the
canvas it is given does the drawing. Sections are emitted in a fixed
order, each after exactly one explicit page break:

    title, trip overview, one page per day, hotels, flights,
    transfers (only when there are any), payment plan,
    inclusions/exclusions

Overflow inside a section is left to the canvas.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..config import ReportConfig, get_config
from ..domain.errors import RenderingError
from ..domain.models import (
    Activity,
    Day,
    Flight,
    Hotel,
    Itinerary,
    PaymentPlan,
    Transfer,
)
from ..ports.canvas import CanvasPort, TextStyle

NAVY = (25, 25, 112)
STEEL_BLUE = (70, 130, 180)
CRIMSON = (220, 20, 60)
BLACK = (0, 0, 0)
DARK_GREY = (60, 60, 60)
GREY = (100, 100, 100)
GREEN = (0, 100, 0)
RED = (200, 0, 0)

TITLE = TextStyle(28, "B", NAVY)
SUBTITLE = TextStyle(18, "I", STEEL_BLUE)
DATE_RANGE = TextStyle(14, "", BLACK)
IDENTIFIER = TextStyle(12, "", GREY)
HIGHLIGHT = TextStyle(16, "B", CRIMSON)
SECTION_TITLE = TextStyle(16, "B", NAVY)
BODY = TextStyle(11, "", BLACK)
TOTAL = TextStyle(12, "B", CRIMSON)
DAY_DATE = TextStyle(10, "I", GREY)
TIME_SLOT = TextStyle(12, "B", STEEL_BLUE)
ACTIVITY_NAME = TextStyle(11, "B", BLACK)
DETAIL = TextStyle(10, "", DARK_GREY)
FOOTNOTE = TextStyle(9, "I", GREY)
ENTRY_HEADING = TextStyle(12, "B", BLACK)
TRANSFER_HEADING = TextStyle(11, "B", BLACK)
PAYMENT_TOTAL = TextStyle(14, "B", CRIMSON)
INSTALLMENTS_LABEL = TextStyle(11, "B", BLACK)
INSTALLMENT_HEADING = TextStyle(10, "B", BLACK)
INSTALLMENT_DETAIL = TextStyle(9, "", DARK_GREY)
INCLUDED = TextStyle(10, "", GREEN)
EXCLUDED = TextStyle(10, "", RED)

INCLUDED_MARKER = "✓"
EXCLUDED_MARKER = "✗"
BULLET = "•"


def format_date(value: date) -> str:
    """'January 2, 2006'"""
    return f"{value:%B} {value.day}, {value.year}"


def format_long_date(value: date) -> str:
    """'Monday, January 2, 2006'"""
    return f"{value:%A}, {format_date(value)}"


def format_datetime(value: datetime) -> str:
    """'January 2, 2006 at 3:04 PM'"""
    hour = value.hour % 12 or 12
    meridiem = "AM" if value.hour < 12 else "PM"
    return f"{format_date(value)} at {hour}:{value:%M} {meridiem}"


def planned_page_count(itinerary: Itinerary) -> int:
    """Number of explicit page breaks assemble() issues for an itinerary."""
    fixed = 6  # title, overview, hotels, flights, payment, inclusions
    transfers = 1 if itinerary.transfers else 0
    return fixed + len(itinerary.days) + transfers


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _short_token() -> str:
    return uuid.uuid4().hex[:8]


@dataclass
class ReportAssembler:
    """Document assembly pipeline for itinerary reports.

    Holds no per-report state; each call to assemble() works only on
    the canvas it is given, so one assembler can serve concurrent
    requests as long as each has its own canvas.

    Attributes:
        config: Report configuration (output directory, margins)
        output_dir: Overrides config.output_dir when set
        clock: Source of the render timestamp used in file names
        token_factory: Source of the random suffix used in file names
    """

    config: ReportConfig = field(default_factory=lambda: get_config().report)
    output_dir: Optional[Path] = None
    clock: Callable[[], datetime] = _utc_now
    token_factory: Callable[[], str] = _short_token

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def target_dir(self) -> Path:
        return self.output_dir if self.output_dir is not None else self.config.output_dir

    def assemble(self, itinerary: Itinerary, canvas: CanvasPort) -> Path:
        """Draw the full report and write it under the output directory.

        Args:
            itinerary: A validated itinerary. It is only read.
            canvas: A fresh canvas, used for this report only.

        Returns:
            Path to the written document.

        Raises:
            RenderingError: If the output directory cannot be created or
                the canvas fails to persist the document.
        """
        self._logger.info(
            "Assembling itinerary report",
            extra={
                "itinerary_id": itinerary.id,
                "days": len(itinerary.days),
                "planned_pages": planned_page_count(itinerary),
            },
        )

        self.render(itinerary, canvas)

        output_path = self.target_dir / self.build_filename(itinerary.id)
        renderer_type = type(canvas).__name__

        try:
            self.target_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._logger.error(
                "Output directory creation failed",
                extra={"error": str(e), "output_dir": str(self.target_dir)},
            )
            raise RenderingError(
                "failed to create output directory",
                output_path=str(output_path),
                renderer_type=renderer_type,
                cause=e,
            )

        try:
            canvas.persist(output_path)
        except Exception as e:
            self._logger.error(
                "Report persist failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                "failed to save PDF",
                output_path=str(output_path),
                renderer_type=renderer_type,
                cause=e,
            )

        self._logger.info(
            "Itinerary report written",
            extra={
                "itinerary_id": itinerary.id,
                "output_path": str(output_path),
                "pages": canvas.page_count,
            },
        )
        return output_path

    def render(self, itinerary: Itinerary, canvas: CanvasPort) -> None:
        """Emit every section onto the canvas without persisting it."""
        canvas.new_page()
        self._add_title_page(canvas, itinerary)

        canvas.new_page()
        self._add_trip_overview(canvas, itinerary)

        for day in itinerary.days:
            canvas.new_page()
            self._add_day(canvas, day)

        canvas.new_page()
        self._add_hotels(canvas, itinerary.hotels)

        canvas.new_page()
        self._add_flights(canvas, itinerary.flights)

        if itinerary.transfers:
            canvas.new_page()
            self._add_transfers(canvas, itinerary.transfers)

        canvas.new_page()
        self._add_payment_plan(canvas, itinerary.payment_plan)

        canvas.new_page()
        self._add_inclusions_exclusions(canvas, itinerary.inclusions, itinerary.exclusions)

    def build_filename(self, itinerary_id: str) -> str:
        """itinerary_<id>_<YYYYMMDD_HHMMSS_ffffff>_<token>.pdf"""
        stamp = self.clock().strftime("%Y%m%d_%H%M%S_%f")
        return f"itinerary_{itinerary_id}_{stamp}_{self.token_factory()}.pdf"

    def _add_title_page(self, canvas: CanvasPort, itinerary: Itinerary) -> None:
        canvas.set_style(TITLE)
        canvas.write_cell(itinerary.title, 20, "C")
        canvas.line_break(10)

        canvas.set_style(SUBTITLE)
        canvas.write_cell(itinerary.destination, 10, "C")
        canvas.line_break(20)

        canvas.set_style(DATE_RANGE)
        dates = f"{format_date(itinerary.start_date)} to {format_date(itinerary.end_date)}"
        canvas.write_cell(dates, 10, "C")
        canvas.line_break(10)

        canvas.set_style(IDENTIFIER)
        canvas.write_cell(f"Itinerary ID: {itinerary.id}", 8, "C")
        canvas.write_cell(f"User ID: {itinerary.user_id}", 8, "C")
        canvas.line_break(20)

        canvas.set_style(HIGHLIGHT)
        length = f"{itinerary.duration_days} Days / {itinerary.duration_nights} Nights"
        canvas.write_cell(length, 10, "C")

    def _add_trip_overview(self, canvas: CanvasPort, itinerary: Itinerary) -> None:
        self._add_section_title(canvas, "Trip Overview")

        canvas.set_style(BODY)
        canvas.write_block(f"Duration: {len(itinerary.days)} days", 6)
        canvas.write_block(f"Hotels: {len(itinerary.hotels)} accommodations", 6)
        canvas.write_block(f"Flights: {len(itinerary.flights)} flights booked", 6)
        canvas.write_block(f"Transfers: {len(itinerary.transfers)} transfers arranged", 6)
        canvas.line_break(5)

        canvas.set_style(TOTAL)
        canvas.write_block(f"Total Package Cost: {itinerary.payment_plan.amount_due:.2f}", 8)

    def _add_day(self, canvas: CanvasPort, day: Day) -> None:
        canvas.set_style(SECTION_TITLE)
        canvas.write_cell(f"Day {day.day_number} - {day.title}", 10)

        canvas.set_style(DAY_DATE)
        canvas.write_cell(format_long_date(day.date), 6)
        canvas.line_break(5)

        for label, activities in day.activities.slots():
            if activities:
                self._add_time_slot(canvas, label, activities)

    def _add_time_slot(
        self,
        canvas: CanvasPort,
        label: str,
        activities: Sequence[Activity],
    ) -> None:
        canvas.set_style(TIME_SLOT)
        canvas.write_cell(label, 8)

        for activity in activities:
            canvas.set_style(ACTIVITY_NAME)
            canvas.write_block(f"{BULLET} {activity.name}", 6)

            canvas.set_style(DETAIL)
            canvas.set_left_margin(self.config.activity_indent_mm)
            canvas.write_block(activity.description, 5)

            canvas.set_style(FOOTNOTE)
            canvas.write_block(f"Location: {activity.location}", 5)
            if activity.duration.strip():
                canvas.write_block(f"Duration: {activity.duration}", 5)

            canvas.set_left_margin(self.config.left_margin_mm)
            canvas.line_break(3)

        canvas.line_break(2)

    def _add_hotels(self, canvas: CanvasPort, hotels: Sequence[Hotel]) -> None:
        self._add_section_title(canvas, "Accommodation Details")

        for i, hotel in enumerate(hotels, start=1):
            canvas.set_style(ENTRY_HEADING)
            canvas.write_cell(f"{i}. {hotel.name}", 8)

            canvas.set_style(DETAIL)
            canvas.write_block(f"City: {hotel.city}", 5)
            canvas.write_block(f"Check-in: {format_date(hotel.check_in_date)}", 5)
            canvas.write_block(f"Check-out: {format_date(hotel.check_out_date)}", 5)
            canvas.write_block(f"Nights: {hotel.nights}", 5)

            if hotel.address.strip():
                canvas.set_style(FOOTNOTE)
                canvas.write_block(f"Address: {hotel.address}", 5)

            canvas.line_break(5)

    def _add_flights(self, canvas: CanvasPort, flights: Sequence[Flight]) -> None:
        self._add_section_title(canvas, "Flight Details")

        for i, flight in enumerate(flights, start=1):
            canvas.set_style(ENTRY_HEADING)
            canvas.write_cell(f"{i}. {flight.flight_number} - {flight.airline}", 8)

            canvas.set_style(DETAIL)
            canvas.write_block(f"From: {flight.origin}", 5)
            canvas.write_block(f"To: {flight.destination}", 5)
            canvas.write_block(f"Departure: {format_datetime(flight.departure)}", 5)
            canvas.write_block(f"Arrival: {format_datetime(flight.arrival)}", 5)

            canvas.line_break(5)

    def _add_transfers(self, canvas: CanvasPort, transfers: Sequence[Transfer]) -> None:
        self._add_section_title(canvas, "Transfer Details")

        for i, transfer in enumerate(transfers, start=1):
            canvas.set_style(TRANSFER_HEADING)
            canvas.write_cell(f"{i}. {transfer.origin} to {transfer.destination}", 8)

            canvas.set_style(DETAIL)
            canvas.write_block(f"Mode: {transfer.mode}", 5)
            canvas.write_block(f"Timing: {format_datetime(transfer.timing)}", 5)

            canvas.line_break(4)

    def _add_payment_plan(self, canvas: CanvasPort, plan: PaymentPlan) -> None:
        self._add_section_title(canvas, "Payment Plan")

        canvas.set_style(PAYMENT_TOTAL)
        canvas.write_cell(f"Total Amount: {plan.amount_due:.2f}", 10)
        canvas.line_break(5)

        canvas.set_style(INSTALLMENTS_LABEL)
        canvas.write_cell("Installments:", 8)

        for inst in plan.installments:
            canvas.set_style(INSTALLMENT_HEADING)
            canvas.write_cell(f"Installment {inst.number} - {inst.amount:.2f}", 7)

            canvas.set_style(INSTALLMENT_DETAIL)
            canvas.write_block(f"Due Date: {format_date(inst.due_date)}", 5)
            canvas.write_block(f"Status: {inst.status}", 5)

            canvas.line_break(3)

    def _add_inclusions_exclusions(
        self,
        canvas: CanvasPort,
        inclusions: Sequence[str],
        exclusions: Sequence[str],
    ) -> None:
        self._add_section_title(canvas, "Inclusions")

        canvas.set_style(INCLUDED)
        for item in inclusions:
            canvas.write_block(f"{INCLUDED_MARKER} {item}", 6)

        canvas.line_break(10)

        self._add_section_title(canvas, "Exclusions")

        canvas.set_style(EXCLUDED)
        for item in exclusions:
            canvas.write_block(f"{EXCLUDED_MARKER} {item}", 6)

    def _add_section_title(self, canvas: CanvasPort, title: str) -> None:
        canvas.set_style(SECTION_TITLE)
        canvas.write_cell(title, 12)
        canvas.line_break(3)
