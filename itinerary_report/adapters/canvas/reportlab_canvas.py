"""ReportLab canvas adapter.

This adapter implements CanvasPort on top of reportlab.pdfgen with:
- Top-to-bottom text flow measured in millimetres
- Automatic page breaks when content reaches the bottom margin
- Word wrapping for multi-line blocks
- Configuration injection (page size, margins, fonts)

The document is drawn into an in-memory buffer and only written to
disk by persist().
"""

from __future__ import annotations

import hashlib
import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional

from reportlab.lib.pagesizes import A4, LETTER
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont, TTFError
from reportlab.pdfgen import canvas as rl_canvas

from ...config import ReportConfig, get_config
from ...domain.errors import ConfigurationError
from ...ports.canvas import Alignment, TextStyle

_PAGE_SIZES = {"A4": A4, "LETTER": LETTER}

_BASE_FONTS: Dict[str, str] = {
    "": "Helvetica",
    "B": "Helvetica-Bold",
    "I": "Helvetica-Oblique",
}

_UNICODE_FONT_PREFIX = "ItineraryUnicode"

# Stand-ins for glyphs the base-14 fonts cannot encode
_GLYPH_FALLBACKS = {
    "✓": "+",  # check mark
    "✗": "x",  # ballot x
}

_DEFAULT_STYLE = TextStyle(size=11)


def _to_winansi(text: str) -> str:
    """Replace characters outside WinAnsi with printable stand-ins."""
    out = []
    for ch in text:
        try:
            ch.encode("cp1252")
            out.append(ch)
        except UnicodeEncodeError:
            out.append(_GLYPH_FALLBACKS.get(ch, "?"))
    return "".join(out)


def unicode_font_name(font_path: Path) -> str:
    """Registered font name for a TTF file, one per distinct path."""
    digest = hashlib.sha1(str(Path(font_path).resolve()).encode("utf-8")).hexdigest()
    return f"{_UNICODE_FONT_PREFIX}-{digest[:12]}"


@dataclass
class ReportLabCanvas:
    """PDF canvas backed by ReportLab.

    Attributes:
        config: Report configuration (page size, margins, fonts)
        document_title: Optional PDF metadata title
    """

    config: ReportConfig = field(default_factory=lambda: get_config().report)
    document_title: str = ""

    _buffer: io.BytesIO = field(default_factory=io.BytesIO, repr=False)
    _canvas: rl_canvas.Canvas = field(init=False, repr=False)
    _pdf_bytes: Optional[bytes] = field(default=None, repr=False)
    _fonts: Dict[str, str] = field(init=False, repr=False)
    _style: TextStyle = field(default=_DEFAULT_STYLE, repr=False)
    _page_count: int = field(default=0, repr=False)
    _page_width: float = field(init=False, repr=False)
    _page_height: float = field(init=False, repr=False)
    _left: float = field(init=False, repr=False)
    _y: float = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self._page_width, self._page_height = _PAGE_SIZES[self.config.page_size]
        self._fonts = self._resolve_fonts()
        self._canvas = rl_canvas.Canvas(self._buffer, pagesize=(self._page_width, self._page_height))
        if self.document_title:
            self._canvas.setTitle(self.document_title)
        self._left = self.config.left_margin_mm * mm
        self._y = self._top

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def unicode_enabled(self) -> bool:
        return self.config.unicode_font_path is not None

    @property
    def _top(self) -> float:
        return self._page_height - self.config.top_margin_mm * mm

    @property
    def _right(self) -> float:
        # Right margin mirrors the configured left margin
        return self._page_width - self.config.left_margin_mm * mm

    def new_page(self) -> None:
        if self._page_count > 0:
            self._canvas.showPage()
        self._page_count += 1
        self._y = self._top
        self._apply_style()

    def set_style(self, style: TextStyle) -> None:
        self._style = style
        self._apply_style()

    def set_left_margin(self, margin_mm: float) -> None:
        self._left = margin_mm * mm

    def write_cell(self, text: str, height: float, align: Alignment = "L") -> None:
        self._draw_line(text, height * mm, align)

    def write_block(self, text: str, height: float, align: Alignment = "L") -> None:
        text = self._prepare(text)
        lines = simpleSplit(
            text,
            self._font_name,
            self._style.size,
            self._right - self._left,
        )
        for line in lines or [""]:
            self._draw_line(line, height * mm, align, prepared=True)

    def line_break(self, height: float) -> None:
        self._y -= height * mm

    def persist(self, path: Path) -> None:
        if self._pdf_bytes is None:
            if self._page_count == 0:
                self.new_page()
            self._canvas.save()
            self._pdf_bytes = self._buffer.getvalue()

        path.write_bytes(self._pdf_bytes)
        self._logger.debug(
            "PDF written",
            extra={"output_path": str(path), "pages": self._page_count},
        )

    @property
    def _font_name(self) -> str:
        return self._fonts[self._style.weight]

    def _apply_style(self) -> None:
        r, g, b = self._style.color
        self._canvas.setFont(self._font_name, self._style.size)
        self._canvas.setFillColorRGB(r / 255, g / 255, b / 255)

    def _prepare(self, text: str) -> str:
        return text if self.unicode_enabled else _to_winansi(text)

    def _draw_line(
        self,
        text: str,
        height: float,
        align: Alignment,
        prepared: bool = False,
    ) -> None:
        if self._page_count == 0:
            self.new_page()
        if self._y - height < self.config.bottom_margin_mm * mm:
            self.new_page()

        if not prepared:
            text = self._prepare(text)

        # Centre the glyphs vertically within the line box
        font_height = self._style.size * 0.7
        baseline = self._y - (height + font_height) / 2

        if align == "C":
            self._canvas.drawCentredString((self._left + self._right) / 2, baseline, text)
        elif align == "R":
            self._canvas.drawRightString(self._right, baseline, text)
        else:
            self._canvas.drawString(self._left, baseline, text)

        self._y -= height

    def _resolve_fonts(self) -> Dict[str, str]:
        font_path = self.config.unicode_font_path
        if font_path is None:
            return dict(_BASE_FONTS)

        font_name = unicode_font_name(font_path)
        if font_name not in pdfmetrics.getRegisteredFontNames():
            try:
                pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
            except (TTFError, OSError) as e:
                raise ConfigurationError(
                    f"Cannot load font {font_path}",
                    setting_name="ITR_REPORT_UNICODE_FONT_PATH",
                    expected_type="path to a TrueType font",
                    cause=e,
                )
            self._logger.info(
                "Registered unicode font",
                extra={"font_path": str(font_path)},
            )
        return {weight: font_name for weight in _BASE_FONTS}
