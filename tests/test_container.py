"""Tests for dependency wiring."""

import pytest

from conftest import build_draft
from itinerary_report.adapters.canvas import RecordingCanvas, ReportLabCanvas
from itinerary_report.config import AppConfig, ReportConfig
from itinerary_report.container import CANVAS_FACTORY, Container
from itinerary_report.ports.repository import ItineraryRepositoryPort
from itinerary_report.services import ItineraryService, ReportAssembler


@pytest.fixture
def container(tmp_path) -> Container:
    config = AppConfig(report=ReportConfig(output_dir=tmp_path / "out"))
    return Container.create_default(config)


def test_service_shares_repository(container):
    service = container.resolve(ItineraryService)
    created = service.create_itinerary(build_draft())

    assert container.resolve(ItineraryRepositoryPort).get(created.id) == created
    assert container.resolve(ItineraryService) is service


def test_canvas_factory_makes_fresh_canvases(container):
    factory = container.resolve(CANVAS_FACTORY)
    first, second = factory(), factory()

    assert isinstance(first, ReportLabCanvas)
    assert first is not second


def test_assembler_uses_configured_output_dir(container, tmp_path):
    assert container.resolve(ReportAssembler).target_dir == tmp_path / "out"


def test_override_before_resolve(container):
    canvases = []

    def make_canvas():
        canvases.append(RecordingCanvas())
        return canvases[-1]

    container.register(CANVAS_FACTORY, lambda: make_canvas)
    service = container.resolve(ItineraryService)
    created = service.create_itinerary(build_draft())

    service.generate_report(created.id)

    assert len(canvases) == 1
    assert canvases[0].persisted_paths


def test_re_registering_drops_cached_instance(container):
    first = container.resolve(ReportAssembler)
    container.register(ReportAssembler, lambda: ReportAssembler(config=first.config))
    assert container.resolve(ReportAssembler) is not first


def test_unknown_key(container):
    with pytest.raises(KeyError):
        container.resolve("nothing")

