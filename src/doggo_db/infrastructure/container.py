"""Dependency injection container."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from doggo_db.infrastructure.config import Config, get_config
from doggo_db.infrastructure.logging import get_logger, setup_logging
from doggo_db.infrastructure.metrics import MetricsRegistry, get_metrics, setup_metrics
from doggo_db.infrastructure.tracing import setup_tracing
from doggo_db.ports.outbound.storage_backend import StorageBackend

T = TypeVar("T")


class Container:
    """
    Simple dependency injection container.

    Supports singleton and factory registrations with lazy initialization.
    """

    def __init__(self) -> None:
        """Initialize the container."""
        self._singletons: dict[type, Any] = {}
        self._factories: dict[type, Callable[[Container], Any]] = {}
        self._instances: dict[type, Any] = {}

    def register_singleton(self, interface: type[T], instance: T) -> None:
        """
        Register a singleton instance.

        Args:
            interface: The interface/type to register
            instance: The singleton instance
        """
        self._singletons[interface] = instance
        self._instances[interface] = instance

    def register_factory(
        self,
        interface: type[T],
        factory: Callable[[Container], T],
    ) -> None:
        """
        Register a factory function for lazy instantiation.

        Args:
            interface: The interface/type to register
            factory: Factory function that takes the container and returns an instance
        """
        self._factories[interface] = factory
        self._instances.pop(interface, None)

    def resolve(self, interface: type[T]) -> T:
        """
        Resolve a dependency.

        Args:
            interface: The interface/type to resolve

        Returns:
            The resolved instance

        Raises:
            KeyError: If no registration exists for the interface
        """
        if interface in self._instances:
            return self._instances[interface]

        if interface in self._singletons:
            return self._singletons[interface]

        if interface in self._factories:
            instance = self._factories[interface](self)
            self._instances[interface] = instance
            return instance

        raise KeyError(f"No registration found for {interface}")

    def has(self, interface: type) -> bool:
        """Check if an interface is registered."""
        return (
            interface in self._singletons
            or interface in self._factories
            or interface in self._instances
        )

    def clear(self) -> None:
        """Clear all registrations and instances."""
        self._singletons.clear()
        self._factories.clear()
        self._instances.clear()


def build_storage_backend(config: Config) -> StorageBackend:
    """
    Build the storage backend selected by configuration.

    Args:
        config: The configuration to read ``storage`` settings from

    Returns:
        A FileStorageBackend or InMemoryStorageBackend
    """
    from doggo_db.adapters.outbound import FileStorageBackend, InMemoryStorageBackend

    if config.storage.backend == "memory":
        return InMemoryStorageBackend()
    return FileStorageBackend(
        data_dir=config.storage.data_dir,
        extension=config.storage.file_extension,
        sync=config.storage.sync,
    )


def configure_container(container: Container, config: Config | None = None) -> Container:
    """
    Register the default components.

    Args:
        container: The container to populate
        config: Configuration to use (global configuration if None)

    Returns:
        The same container
    """
    container.register_singleton(Config, config or get_config())
    container.register_factory(
        StorageBackend, lambda c: build_storage_backend(c.resolve(Config))
    )
    container.register_factory(MetricsRegistry, lambda c: get_metrics())
    return container


# Global container instance
_container: Container | None = None


def get_container() -> Container:
    """Get the global container instance, configured on first use."""
    global _container
    if _container is None:
        _container = configure_container(Container())
    return _container


def reset_container() -> None:
    """Reset the global container (useful for testing)."""
    global _container
    if _container is not None:
        _container.clear()
    _container = None


def configure_observability(config: Config | None = None) -> None:
    """
    Set up logging, tracing and the metrics endpoint from configuration.

    Tracing is exported only when ``observability.otel_endpoint`` is set and
    the metrics endpoint is started only when ``observability.metrics_port``
    is set.

    Args:
        config: Configuration to use (global configuration if None)
    """
    config = config or get_config()
    obs = config.observability

    setup_logging(level=obs.log_level, log_format=obs.log_format)
    if obs.otel_endpoint:
        setup_tracing(service_name=obs.otel_service_name, otlp_endpoint=obs.otel_endpoint)
    if obs.metrics_port is not None:
        setup_metrics(port=obs.metrics_port)

    get_logger(__name__).info(
        "doggo_db_observability_configured",
        storage_backend=config.storage.backend,
        log_level=obs.log_level,
        tracing=bool(obs.otel_endpoint),
    )
