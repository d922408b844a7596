"""Command-line entry point.

    python -m itinerary_report validate trip.json
    python -m itinerary_report render trip.json --output-dir ./reports

The input file holds either a creation payload (an id and timestamps
are assigned) or a stored itinerary document with its own id.

Exit codes: 0 success, 1 inconsistent itinerary, 2 unreadable input or
bad configuration, 3 the report could not be produced.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

import pydantic

from .config import get_config
from .container import Container
from .domain.errors import ConfigurationError, RenderingError, ValidationError
from .domain.models import Itinerary
from .logging_config import configure_logging
from .ports.repository import ItineraryRepositoryPort
from .schemas import CreateItineraryRequest, ItineraryDocument
from .services import ItineraryService, ReportAssembler, validator

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_BAD_INPUT = 2
EXIT_RENDER_FAILED = 3

logger = logging.getLogger("itinerary_report")


def _load_payload(path: Path) -> dict:
    with path.open(encoding="utf-8") as f:
        payload = json.load(f)
    if not isinstance(payload, dict):
        raise ValueError("expected a JSON object at the top level")
    return payload


def _store(service: ItineraryService, container: Container, payload: dict) -> Itinerary:
    """Validate the payload and put it in the repository."""
    if "id" in payload:
        itinerary = ItineraryDocument.model_validate(payload).to_itinerary()
        validator.validate(itinerary)
        container.resolve(ItineraryRepositoryPort).create(itinerary)
        return itinerary
    draft = CreateItineraryRequest.model_validate(payload).to_draft()
    return service.create_itinerary(draft)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="itinerary_report",
        description="Validate travel itineraries and render them as PDF reports.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("validate", help="check an itinerary for consistency")
    check.add_argument("file", type=Path)

    render = sub.add_parser("render", help="validate and render an itinerary to PDF")
    render.add_argument("file", type=Path)
    render.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="directory for the PDF (default: ITR_REPORT_OUTPUT_DIR or ./output)",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = get_config()
        configure_logging(config.observability)
    except (ConfigurationError, pydantic.ValidationError) as e:
        print(f"invalid configuration: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT

    container = Container.create_default(config)
    if getattr(args, "output_dir", None) is not None:
        output_dir = args.output_dir
        container.register(
            ReportAssembler,
            lambda: ReportAssembler(config=config.report, output_dir=output_dir),
        )
    service: ItineraryService = container.resolve(ItineraryService)

    try:
        payload = _load_payload(args.file)
        itinerary = _store(service, container, payload)
    except (OSError, ValueError) as e:
        # pydantic.ValidationError subclasses ValueError
        kind = "invalid payload" if isinstance(e, pydantic.ValidationError) else "cannot read"
        print(f"{kind} {args.file}: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except ValidationError as e:
        print(f"invalid itinerary: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.command == "validate":
        print(f"itinerary {itinerary.id} is valid ({itinerary.duration_days} days)")
        return EXIT_OK

    try:
        path = service.generate_report(itinerary.id)
    except (RenderingError, ConfigurationError) as e:
        logger.debug("Render failure detail", exc_info=True)
        print(f"rendering failed: {e}", file=sys.stderr)
        return EXIT_RENDER_FAILED

    print(path)
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
