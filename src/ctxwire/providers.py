from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING

from ctxwire.exceptions import ProviderAlreadyRegisteredError, describe_key

if TYPE_CHECKING:
    from ctxwire.container import Container

logger = logging.getLogger(__name__)


class ContainerProvider(ABC):
    """Group bindings that belong together and set them up in two phases.

    ``register`` runs as soon as the provider is passed to
    ``Container.register`` and should only bind keys. ``boot`` runs from
    ``Container.boot`` once every provider is registered, so it may resolve
    bindings contributed by other providers.

    Example:
        class LoggingProvider(ContainerProvider):
            def register(self, container: Container) -> None:
                container.bind_singleton(Logger, lambda c: FileLogger("app.log"))

            def boot(self, container: Container) -> None:
                container.get(Logger).info("booted")

    """

    @abstractmethod
    def register(self, container: Container) -> None:
        """Attach bindings to the container."""

    def boot(self, container: Container) -> None:  # noqa: B027
        """Run post-registration setup. Does nothing by default."""


class ProviderRegistry:
    """Registered providers in registration order, keyed by provider class."""

    def __init__(self) -> None:
        self._providers: dict[type[ContainerProvider], ContainerProvider] = {}

    def add(self, provider: ContainerProvider) -> None:
        """Record a provider.

        Raises:
            ProviderAlreadyRegisteredError: A provider of the same class is
                already registered.

        """
        provider_type = type(provider)
        if provider_type in self._providers:
            msg = (
                f"can't register container provider {describe_key(provider_type)} "
                "because it's already registered"
            )
            raise ProviderAlreadyRegisteredError(msg)
        self._providers[provider_type] = provider
        logger.info("Registered container provider %s", describe_key(provider_type))

    def __contains__(self, provider_type: object) -> bool:
        return provider_type in self._providers

    def __iter__(self) -> Iterator[ContainerProvider]:
        return iter(list(self._providers.values()))

    def __len__(self) -> int:
        return len(self._providers)


__all__ = ["ContainerProvider", "ProviderRegistry"]
