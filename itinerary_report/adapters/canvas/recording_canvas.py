"""In-memory canvas for testing.

This canvas draws nothing. It records every call made on it and keeps
the text written on each page, so tests can assert on document
structure (section order, page count, omitted blocks) without parsing
a PDF.

Example:
    canvas = RecordingCanvas()
    assembler.assemble(itinerary, canvas)
    assert canvas.page_count == 8
    assert "Transfer Details" not in canvas.all_text()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Tuple

from ...ports.canvas import Alignment, TextStyle


@dataclass(frozen=True, slots=True)
class CanvasOperation:
    """One recorded canvas call."""

    name: str
    args: Tuple[Any, ...] = ()


@dataclass
class RecordingCanvas:
    """Canvas that records calls instead of drawing.

    Implements CanvasPort.

    Attributes:
        write_files: If True, persist() writes a plain-text dump of the
            pages to the given path; otherwise it only records the path.
    """

    write_files: bool = False

    operations: List[CanvasOperation] = field(default_factory=list)
    pages: List[List[str]] = field(default_factory=list)
    persisted_paths: List[Path] = field(default_factory=list)
    style: Optional[TextStyle] = None
    left_margin_mm: float = 10.0

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def new_page(self) -> None:
        self._record("new_page")
        self.pages.append([])

    def set_style(self, style: TextStyle) -> None:
        self._record("set_style", style)
        self.style = style

    def set_left_margin(self, margin_mm: float) -> None:
        self._record("set_left_margin", margin_mm)
        self.left_margin_mm = margin_mm

    def write_cell(self, text: str, height: float, align: Alignment = "L") -> None:
        self._record("write_cell", text, height, align)
        self._current_page().append(text)

    def write_block(self, text: str, height: float, align: Alignment = "L") -> None:
        self._record("write_block", text, height, align)
        self._current_page().append(text)

    def line_break(self, height: float) -> None:
        self._record("line_break", height)

    def persist(self, path: Path) -> None:
        self._record("persist", path)
        if self.write_files:
            dump = "\f".join("\n".join(lines) for lines in self.pages)
            path.write_text(dump, encoding="utf-8")
        self.persisted_paths.append(path)

    def page_text(self, index: int) -> List[str]:
        """Return the lines written on the page at index (0-based)."""
        return list(self.pages[index])

    def all_text(self) -> List[str]:
        """Return every written line, across all pages, in order."""
        return [line for lines in self.pages for line in lines]

    def operations_named(self, name: str) -> List[CanvasOperation]:
        return [op for op in self.operations if op.name == name]

    def _current_page(self) -> List[str]:
        # Writing before any new_page() implicitly opens the first page
        if not self.pages:
            self.pages.append([])
        return self.pages[-1]

    def _record(self, name: str, *args: Any) -> None:
        self.operations.append(CanvasOperation(name=name, args=args))
