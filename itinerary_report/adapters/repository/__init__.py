"""Repository adapters - Implementations of ItineraryRepositoryPort.

Available implementations:
- InMemoryItineraryRepository: Thread-safe dict-backed store
"""

from .memory_repository import InMemoryItineraryRepository

__all__ = ["InMemoryItineraryRepository"]
