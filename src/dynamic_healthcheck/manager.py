"""Configuration manager for dynamically configured health checks.

This module provides the composition-level facade that owns the context
registry and the root section name, plus a process-wide default instance
for hosts that do not wire their own.
"""

import dataclasses
import logging
import threading
from typing import List, Optional, Type, TypeVar

from dynamic_healthcheck.configuration.section import ConfigurationSection
from dynamic_healthcheck.models import DynamicHealthCheckConfig, DynamicHealthCheckRoot
from dynamic_healthcheck.registry import ContextTypeRegistry
from dynamic_healthcheck.resolver import ConfigResolver, ContextResolver
from dynamic_healthcheck.settings import ResolverSettings

# Singleton instance
_configuration_manager: Optional["ConfigurationManager"] = None
_lock = threading.Lock()

logger = logging.getLogger(__name__)

TContext = TypeVar("TContext")


class ConfigurationManager:
    """Facade over the context registry and the resolvers.

    The manager is meant to be created by the bootstrap code, which
    registers every health-check kind once and then hands the manager to
    the health checks that resolve their settings.

    Example:
        >>> manager = ConfigurationManager()
        >>> manager.set_health_check_context(DatabasePing, DatabasePingContext)
        >>>
        >>> tree = ConfigurationSection.from_yaml(open("appsettings.yaml"))
        >>> ctx = manager.get_health_check_context(
        ...     DatabasePing, DatabasePingContext, tree, "orders-db"
        ... )
        >>> for ctx in manager.get_health_check_contexts(DatabasePing, DatabasePingContext, tree):
        ...     print(ctx.connection_string)
    """

    def __init__(
        self,
        settings: Optional[ResolverSettings] = None,
        registry: Optional[ContextTypeRegistry] = None,
    ) -> None:
        """Initialize the manager.

        Args:
            settings: Resolver settings. If None, loads from environment.
            registry: Context registry to share. If None, a new one is created.

        Raises:
            ValueError: If settings are invalid.
        """
        self._settings = settings if settings is not None else ResolverSettings.from_env()
        self._settings.validate()
        self._registry = registry if registry is not None else ContextTypeRegistry()
        self._contexts = ContextResolver(self._registry)
        self._configs = ConfigResolver()
        self._lookups_started = False

    @property
    def registry(self) -> ContextTypeRegistry:
        """Get the context registry."""
        return self._registry

    @property
    def config_section(self) -> str:
        """Get the root section name."""
        return self._settings.config_section

    @config_section.setter
    def config_section(self, value: str) -> None:
        """Set the root section name.

        Meant to be set once during bootstrap, before the first lookup.

        Raises:
            ValueError: If the name is invalid.
            RuntimeError: If lookups have begun and strict_section is set.
        """
        settings = dataclasses.replace(self._settings, config_section=value)
        settings.validate()

        if self._lookups_started and value != self._settings.config_section:
            if self._settings.strict_section:
                raise RuntimeError(
                    f"Cannot change config section to {value!r} after lookups have begun"
                )
            logger.warning(
                f"Config section changed from {self._settings.config_section!r} "
                f"to {value!r} after lookups have begun"
            )

        self._settings = settings

    def set_health_check_context(self, kind: type, shape: type) -> bool:
        """Register the context shape of a health-check kind.

        Returns:
            True if newly registered, False if the kind was already registered.
        """
        return self._registry.register(kind, shape)

    def get_health_check_context(
        self,
        kind: type,
        shape: Type[TContext],
        configuration: ConfigurationSection,
        service_name: Optional[str] = None,
    ) -> TContext:
        """Get the context of one service (first entry if no service name).

        Raises:
            ConfigurationMismatchError: If the kind is not well configured.
        """
        self._lookups_started = True
        return self._contexts.get_context(
            kind, shape, configuration, service_name, root_name=self.config_section
        )

    def get_health_check_contexts(
        self,
        kind: type,
        shape: Type[TContext],
        configuration: ConfigurationSection,
    ) -> List[TContext]:
        """Get the contexts of all configured services.

        Raises:
            ConfigurationMismatchError: If ``shape`` is not registered for ``kind``.
        """
        self._lookups_started = True
        return self._contexts.get_contexts(
            kind, shape, configuration, root_name=self.config_section
        )

    def get(self, configuration: ConfigurationSection) -> Optional[DynamicHealthCheckRoot]:
        """Get the whole health-check configuration, or None if absent."""
        self._lookups_started = True
        return self._configs.get_raw(configuration, self.config_section)

    def get_health_check_config(
        self,
        kind: type,
        configuration: ConfigurationSection,
        service_name: str,
    ) -> DynamicHealthCheckConfig:
        """Get the configuration record of a kind for one service.

        Raises:
            ConfigurationMismatchError: If no entry matches.
        """
        self._lookups_started = True
        return self._configs.get_config(
            kind, service_name, configuration, self.config_section
        )


def get_configuration_manager() -> ConfigurationManager:
    """Get the process-wide ConfigurationManager instance.

    Returns:
        Singleton ConfigurationManager instance.

    Example:
        >>> manager = get_configuration_manager()
        >>> manager.set_health_check_context(DatabasePing, DatabasePingContext)
    """
    global _configuration_manager

    if _configuration_manager is None:
        with _lock:
            if _configuration_manager is None:
                _configuration_manager = ConfigurationManager()

    return _configuration_manager


def reset_configuration_manager() -> None:
    """Reset the singleton instance (mainly for testing).

    Warning:
        Registrations made on the previous instance are lost.
    """
    global _configuration_manager

    with _lock:
        _configuration_manager = None
