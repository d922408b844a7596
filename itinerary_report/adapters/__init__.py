"""Adapters layer - Concrete implementations of ports.

This module contains implementations of the port interfaces,
connecting the application to external systems like:
- Document backends (ReportLab, in-memory recorder)
- Itinerary storage (in-memory)
"""
