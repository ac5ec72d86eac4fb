"""Typed configuration resolution for dynamically configured health checks.

Example:
    >>> from dynamic_healthcheck import ConfigurationManager, ConfigurationSection
    >>>
    >>> manager = ConfigurationManager()
    >>> manager.set_health_check_context(DatabasePing, DatabasePingContext)
    >>>
    >>> tree = ConfigurationSection.from_yaml(yaml_text)
    >>> ctx = manager.get_health_check_context(
    ...     DatabasePing, DatabasePingContext, tree, "orders-db"
    ... )
"""

from dynamic_healthcheck.configuration import ConfigurationSection, bind
from dynamic_healthcheck.constants import DEFAULT_CONFIG_SECTION_NAME
from dynamic_healthcheck.exceptions import (
    ConfigurationBindingError,
    ConfigurationMismatchError,
    DynamicHealthCheckError,
)
from dynamic_healthcheck.manager import (
    ConfigurationManager,
    get_configuration_manager,
    reset_configuration_manager,
)
from dynamic_healthcheck.models import DynamicHealthCheckConfig, DynamicHealthCheckRoot
from dynamic_healthcheck.registry import ContextTypeRegistry
from dynamic_healthcheck.resolver import ConfigResolver, ContextResolver
from dynamic_healthcheck.settings import ResolverSettings

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_CONFIG_SECTION_NAME",
    "ConfigResolver",
    "ConfigurationBindingError",
    "ConfigurationManager",
    "ConfigurationMismatchError",
    "ConfigurationSection",
    "ContextResolver",
    "ContextTypeRegistry",
    "DynamicHealthCheckConfig",
    "DynamicHealthCheckError",
    "DynamicHealthCheckRoot",
    "ResolverSettings",
    "bind",
    "get_configuration_manager",
    "reset_configuration_manager",
]
