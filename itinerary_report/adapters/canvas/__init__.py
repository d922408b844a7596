"""Canvas adapters - Implementations of CanvasPort.

Available implementations:
- ReportLabCanvas: PDF output through ReportLab
- RecordingCanvas: In-memory recorder for testing (draws nothing)
"""

from .recording_canvas import CanvasOperation, RecordingCanvas
from .reportlab_canvas import ReportLabCanvas

__all__ = ["ReportLabCanvas", "RecordingCanvas", "CanvasOperation"]
