"""Dependency wiring for the itinerary report application.

Bindings are plain factories keyed by port type (or a string key for
things that have no type of their own, such as the canvas factory).
Nothing is built until it is first resolved, so tests can override a
binding right after create_default().
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default()
        service = container.resolve(ItineraryService)

        # Testing
        container = Container.create_default(config)
        container.register(CANVAS_FACTORY, lambda: RecordingCanvas)
        service = container.resolve(ItineraryService)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[Any, Callable[[], Any]] = field(default_factory=dict, repr=False)
    _singletons: Dict[Any, Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[Any] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: Any,
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) or key to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: Any) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.

        Returns:
            A configured Container instance.
        """
        from .adapters.canvas import ReportLabCanvas
        from .adapters.repository import InMemoryItineraryRepository
        from .ports.repository import ItineraryRepositoryPort
        from .services import ItineraryService, ReportAssembler

        config = config or get_config()
        container = cls(config=config)

        # Storage
        container.register(
            ItineraryRepositoryPort,
            lambda: InMemoryItineraryRepository(),
        )

        # Rendering: the factory itself is shared, each call makes a new canvas
        container.register(
            CANVAS_FACTORY,
            lambda: lambda: ReportLabCanvas(config=config.report),
        )
        container.register(
            ReportAssembler,
            lambda: ReportAssembler(config=config.report),
        )

        # Main service
        def create_itinerary_service() -> ItineraryService:
            return ItineraryService(
                repository=container.resolve(ItineraryRepositoryPort),
                assembler=container.resolve(ReportAssembler),
                canvas_factory=container.resolve(CANVAS_FACTORY),
            )

        container.register(ItineraryService, create_itinerary_service)

        return container


# Registration key for the callable that builds a fresh canvas per report
CANVAS_FACTORY = "canvas_factory"
