"""Tests for the ReportLab canvas adapter."""

from pathlib import Path

import pytest
import reportlab

from conftest import build_itinerary, build_transfer
from itinerary_report.adapters.canvas import ReportLabCanvas
from itinerary_report.adapters.canvas.reportlab_canvas import _to_winansi, unicode_font_name
from itinerary_report.config import ReportConfig
from itinerary_report.domain.errors import ConfigurationError
from itinerary_report.ports.canvas import TextStyle
from itinerary_report.services.report_assembler import ReportAssembler, planned_page_count


@pytest.fixture
def canvas(report_config) -> ReportLabCanvas:
    return ReportLabCanvas(config=report_config, document_title="Test")


class TestTransliteration:
    def test_markers_replaced(self):
        assert _to_winansi("✓ Breakfast") == "+ Breakfast"
        assert _to_winansi("✗ Insurance") == "x Insurance"

    def test_winansi_text_kept(self):
        assert _to_winansi("• Café 10€") == "• Café 10€"

    def test_unknown_glyph(self):
        assert _to_winansi("京都") == "??"


class TestPages:
    def test_no_pages_until_asked(self, canvas):
        assert canvas.page_count == 0

    def test_new_page_counts(self, canvas):
        canvas.new_page()
        canvas.new_page()
        assert canvas.page_count == 2

    def test_write_opens_first_page(self, canvas):
        canvas.write_cell("hello", 10)
        assert canvas.page_count == 1

    def test_overflow_breaks_page(self, canvas):
        canvas.new_page()
        canvas.set_style(TextStyle(11))
        for i in range(60):
            canvas.write_cell(f"line {i}", 10)
        # 297mm page, 10mm top and 15mm bottom margin: 27 lines fit
        assert canvas.page_count == 3

    def test_long_block_wraps(self, canvas):
        canvas.new_page()
        canvas.write_block("word " * 2000, 5)
        assert canvas.page_count > 1


class TestPersist:
    def test_writes_pdf(self, canvas, tmp_path):
        canvas.new_page()
        canvas.write_cell("✓ included", 8, "C")
        path = tmp_path / "out.pdf"

        canvas.persist(path)

        assert path.read_bytes().startswith(b"%PDF")

    def test_empty_document_gets_one_page(self, canvas, tmp_path):
        canvas.persist(tmp_path / "empty.pdf")
        assert canvas.page_count == 1

    def test_persist_twice_writes_same_bytes(self, canvas, tmp_path):
        canvas.write_cell("x", 8)
        canvas.persist(tmp_path / "a.pdf")
        canvas.persist(tmp_path / "b.pdf")
        assert (tmp_path / "a.pdf").read_bytes() == (tmp_path / "b.pdf").read_bytes()

    def test_missing_directory_raises_oserror(self, canvas, tmp_path):
        canvas.write_cell("x", 8)
        with pytest.raises(OSError):
            canvas.persist(tmp_path / "nope" / "out.pdf")


def test_full_report_page_count(report_config):
    """A short itinerary fills exactly its planned pages."""
    itinerary = build_itinerary(transfers=(build_transfer(),))
    canvas = ReportLabCanvas(config=report_config)

    path = ReportAssembler(config=report_config).assemble(itinerary, canvas)

    assert canvas.page_count == planned_page_count(itinerary)
    assert path.stat().st_size > 0


def test_letter_page_size(tmp_path):
    canvas = ReportLabCanvas(config=ReportConfig(output_dir=tmp_path, page_size="LETTER"))
    canvas.write_cell("x", 8)
    canvas.persist(tmp_path / "letter.pdf")
    assert b"612" in (tmp_path / "letter.pdf").read_bytes()


def test_unloadable_font(tmp_path):
    config = ReportConfig(output_dir=tmp_path, unicode_font_path=tmp_path / "missing.ttf")
    with pytest.raises(ConfigurationError) as exc:
        ReportLabCanvas(config=config)
    assert exc.value.setting_name == "ITR_REPORT_UNICODE_FONT_PATH"


class TestUnicodeFonts:
    """Fonts registered from ITR_REPORT_UNICODE_FONT_PATH."""

    @pytest.fixture
    def bundled_fonts(self) -> Path:
        # Vera TrueType fonts ship inside the reportlab package
        return Path(reportlab.__file__).parent / "fonts"

    def test_name_depends_on_path(self, tmp_path):
        assert unicode_font_name(tmp_path / "a.ttf") != unicode_font_name(tmp_path / "b.ttf")
        assert unicode_font_name(tmp_path / "a.ttf") == unicode_font_name(tmp_path / "x" / ".." / "a.ttf")

    def test_each_path_gets_its_own_font(self, bundled_fonts, tmp_path):
        regular = ReportLabCanvas(
            config=ReportConfig(output_dir=tmp_path, unicode_font_path=bundled_fonts / "Vera.ttf")
        )
        bold = ReportLabCanvas(
            config=ReportConfig(output_dir=tmp_path, unicode_font_path=bundled_fonts / "VeraBd.ttf")
        )

        assert regular.unicode_enabled and bold.unicode_enabled
        assert regular._font_name == unicode_font_name(bundled_fonts / "Vera.ttf")
        assert bold._font_name == unicode_font_name(bundled_fonts / "VeraBd.ttf")
        assert regular._font_name != bold._font_name

    def test_renders_with_registered_font(self, bundled_fonts, tmp_path):
        canvas = ReportLabCanvas(
            config=ReportConfig(output_dir=tmp_path, unicode_font_path=bundled_fonts / "Vera.ttf")
        )
        canvas.write_cell("Café", 8)
        canvas.persist(tmp_path / "vera.pdf")

        assert (tmp_path / "vera.pdf").read_bytes().startswith(b"%PDF")
