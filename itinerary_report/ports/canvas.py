"""Canvas port - Abstraction for paginated document drawing.

This protocol defines the drawing primitives the report assembler
relies on, allowing different backends (ReportLab, an in-memory
recorder, etc.) to be used.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Protocol

Alignment = Literal["L", "C", "R"]

# Font weight: regular, bold or italic
Weight = Literal["", "B", "I"]


@dataclass(frozen=True, slots=True)
class TextStyle:
    """Font and colour applied to subsequently written text.

    Attributes:
        size: Font size in points
        weight: '' for regular, 'B' for bold, 'I' for italic
        color: RGB triple, each component 0-255
    """

    size: float
    weight: Weight = ""
    color: tuple[int, int, int] = (0, 0, 0)


class CanvasPort(Protocol):
    """Port for document drawing.

    Implementations:
    - adapters/canvas/reportlab_canvas.py (ReportLabCanvas) - Production
    - adapters/canvas/recording_canvas.py (RecordingCanvas) - Testing

    Text is laid out top to bottom. A canvas breaks pages on its own
    when content overflows; explicit page breaks come from new_page().
    """

    @property
    def page_count(self) -> int:
        """Number of pages started so far."""
        ...

    def new_page(self) -> None:
        """Start a new page and move the cursor to its top margin."""
        ...

    def set_style(self, style: TextStyle) -> None:
        """Apply a font and colour to text written afterwards."""
        ...

    def set_left_margin(self, margin_mm: float) -> None:
        """Move the left edge used by subsequent lines."""
        ...

    def write_cell(self, text: str, height: float, align: Alignment = "L") -> None:
        """Write a single line of text and move to the next line.

        Args:
            text: Text to place on one line.
            height: Line height in millimetres.
            align: Horizontal alignment.
        """
        ...

    def write_block(self, text: str, height: float, align: Alignment = "L") -> None:
        """Write text wrapped to the available width.

        Args:
            text: Text to wrap.
            height: Height of each wrapped line in millimetres.
            align: Horizontal alignment.
        """
        ...

    def line_break(self, height: float) -> None:
        """Move the cursor down by height millimetres."""
        ...

    def persist(self, path: Path) -> None:
        """Write the document to path.

        Raises:
            OSError: If the file cannot be written.
        """
        ...
