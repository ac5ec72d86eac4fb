"""Resolution of health-check configuration from the configuration tree.

Two resolvers are provided:

- ContextResolver binds the kind-specific ``Context`` of per-service
  entries into the shape registered for a health-check kind.
- ConfigResolver reads the raw configuration records, independent of the
  registry.

Nothing is cached: every call reads the tree as it is at call time, so a
reloaded tree is picked up on the next lookup.
"""

import logging
from typing import List, Optional, Type, TypeVar

from dynamic_healthcheck.configuration.section import ConfigurationSection
from dynamic_healthcheck.constants import (
    DEFAULT_CONFIG_SECTION_NAME,
    PROPERTY_NAME_CONTEXT,
    PROPERTY_NAME_SERVICENAME,
)
from dynamic_healthcheck.exceptions import ConfigurationBindingError, ConfigurationMismatchError
from dynamic_healthcheck.models import DynamicHealthCheckConfig, DynamicHealthCheckRoot
from dynamic_healthcheck.navigator import root_section, service_entries
from dynamic_healthcheck.registry import ContextTypeRegistry

logger = logging.getLogger(__name__)

TContext = TypeVar("TContext")


class ContextResolver:
    """Resolves typed contexts for registered health-check kinds.

    Every lookup first checks that the requested shape is the one
    registered for the kind, so a context is never bound into the wrong
    dataclass.

    Example:
        >>> registry = ContextTypeRegistry()
        >>> registry.register(DatabasePing, DatabasePingContext)
        >>> resolver = ContextResolver(registry)
        >>> ctx = resolver.get_context(DatabasePing, DatabasePingContext, tree, "orders-db")
    """

    def __init__(self, registry: ContextTypeRegistry) -> None:
        """Initialize the resolver.

        Args:
            registry: Registry of kinds and their context shapes.
        """
        self.registry = registry

    def get_context(
        self,
        kind: type,
        shape: Type[TContext],
        tree: ConfigurationSection,
        service_name: Optional[str] = None,
        root_name: str = DEFAULT_CONFIG_SECTION_NAME,
    ) -> TContext:
        """Get the context of one configured service.

        With an empty ``service_name`` the first entry is used as the
        default. Otherwise the first entry whose ServiceName equals
        ``service_name`` wins; duplicates further down are never reached.

        Args:
            kind: Health-check implementation class.
            shape: Context dataclass registered for ``kind``.
            tree: Configuration root.
            service_name: Service to select, or None/"" for the first entry.
            root_name: Name of the top-level health-check section.

        Returns:
            The bound context.

        Raises:
            ConfigurationMismatchError: If ``shape`` is not the registered
                shape, no entry matches, or the entry has no bindable context.
        """
        self.registry.ensure(kind, shape)

        entry = self._find_entry(service_entries(tree, root_name), service_name)
        if entry is None:
            raise ConfigurationMismatchError(kind.__name__, {"service_name": service_name})

        context_section = entry.get_section(PROPERTY_NAME_CONTEXT)
        try:
            context = context_section.get(shape)
        except ConfigurationBindingError as e:
            raise ConfigurationMismatchError(
                kind.__name__, {"service_name": service_name}, path=context_section.path
            ) from e

        if context is None:
            raise ConfigurationMismatchError(
                kind.__name__, {"service_name": service_name}, path=context_section.path
            )

        logger.debug(f"Resolved {kind.__name__} context from {context_section.path}")
        return context

    def get_contexts(
        self,
        kind: type,
        shape: Type[TContext],
        tree: ConfigurationSection,
        root_name: str = DEFAULT_CONFIG_SECTION_NAME,
    ) -> List[TContext]:
        """Get the contexts of all configured services, in document order.

        Entries without a Context section, or whose Context cannot be
        bound, are skipped.

        Raises:
            ConfigurationMismatchError: If ``shape`` is not the registered shape.
        """
        self.registry.ensure(kind, shape)

        contexts: List[TContext] = []
        for entry in service_entries(tree, root_name):
            context_section = entry.get_section(PROPERTY_NAME_CONTEXT)
            try:
                context = context_section.get(shape)
            except ConfigurationBindingError as e:
                logger.debug(f"Skipping {context_section.path}: {e}")
                continue
            if context is not None:
                contexts.append(context)

        return contexts

    @staticmethod
    def _find_entry(
        entries: List[ConfigurationSection], service_name: Optional[str]
    ) -> Optional[ConfigurationSection]:
        for entry in entries:
            if not entry.get_children():
                continue
            if not service_name:
                return entry
            if entry.get_section(PROPERTY_NAME_SERVICENAME).value == service_name:
                return entry
        return None


class ConfigResolver:
    """Reads raw health-check configuration records.

    Unlike ContextResolver this does not consult the registry; the
    kind's class name is matched against each entry's HealthCheckName.

    Example:
        >>> resolver = ConfigResolver()
        >>> config = resolver.get_config(DatabasePing, "orders-db", tree)
        >>> config.enabled
        True
    """

    def get_raw(
        self,
        tree: ConfigurationSection,
        root_name: str = DEFAULT_CONFIG_SECTION_NAME,
    ) -> Optional[DynamicHealthCheckRoot]:
        """Bind the whole root section.

        Returns:
            The root configuration, or None if the section is missing or
            cannot be bound.
        """
        section = root_section(tree, root_name)
        try:
            return section.get(DynamicHealthCheckRoot)
        except ConfigurationBindingError as e:
            logger.warning(f"Cannot bind health check configuration at {section.path}: {e}")
            return None

    def get_configs(
        self,
        kind: type,
        tree: ConfigurationSection,
        root_name: str = DEFAULT_CONFIG_SECTION_NAME,
    ) -> List[DynamicHealthCheckConfig]:
        """Get all configuration records of a kind, in document order.

        Entries that cannot be bound are skipped with a warning.
        """
        configs: List[DynamicHealthCheckConfig] = []
        for entry in service_entries(tree, root_name):
            try:
                config = entry.get(DynamicHealthCheckConfig)
            except ConfigurationBindingError as e:
                logger.warning(f"Skipping malformed health check entry {entry.path}: {e}")
                continue
            if config is not None and config.health_check_name == kind.__name__:
                configs.append(config)
        return configs

    def get_config(
        self,
        kind: type,
        service_name: str,
        tree: ConfigurationSection,
        root_name: str = DEFAULT_CONFIG_SECTION_NAME,
    ) -> DynamicHealthCheckConfig:
        """Get the configuration record of one kind for one service.

        Raises:
            ConfigurationMismatchError: If no entry matches both the kind
                name and ``service_name``.
        """
        for config in self.get_configs(kind, tree, root_name):
            if config.service_name is not None and config.service_name == service_name:
                return config

        raise ConfigurationMismatchError(kind.__name__, {"service_name": service_name})
