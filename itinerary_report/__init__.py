"""Top-level package for the itinerary report service.

Validates travel itineraries for internal consistency and renders
them as paginated PDF reports. The layers follow a ports-and-adapters
layout: domain models and errors, ports (canvas, repository),
adapters (ReportLab, in-memory) and services that tie them together.
"""

__version__ = "0.1.0"
