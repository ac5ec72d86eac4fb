"""Pytest fixtures for health-check configuration tests.

This module provides configuration trees in the layout consumed by the
resolvers, built from YAML documents, plus isolated registries.
"""

import textwrap
from typing import Generator

import pytest

from dynamic_healthcheck.configuration.section import ConfigurationSection
from dynamic_healthcheck.manager import ConfigurationManager, reset_configuration_manager
from dynamic_healthcheck.registry import ContextTypeRegistry
from dynamic_healthcheck.settings import ResolverSettings


def load_tree(document: str) -> ConfigurationSection:
    """Build a configuration tree from an indented YAML snippet."""
    return ConfigurationSection.from_yaml(textwrap.dedent(document))


# =============================================================================
# Configuration Tree Fixtures
# =============================================================================


@pytest.fixture
def three_services_tree() -> ConfigurationSection:
    """Create a tree with three DatabasePing entries.

    Returns:
        Tree with svcA, svcB and svcC, each with its own context.
    """
    return load_tree(
        """
        DynamicHealthCheck:
          HealthChecks:
            - HealthCheckName: DatabasePing
              ServiceName: svcA
              Enabled: true
              Context:
                Host: db-a.internal
                Port: 5432
            - HealthCheckName: DatabasePing
              ServiceName: svcB
              Enabled: false
              Tags: [db, critical]
              Timeout: 2.5
              Context:
                Host: db-b.internal
                Port: "5433"
            - HealthCheckName: DatabasePing
              ServiceName: svcC
              Context:
                Host: db-c.internal
                Port: 5434
        """
    )


@pytest.fixture
def missing_context_tree() -> ConfigurationSection:
    """Create a tree where the middle entry has no Context section.

    Returns:
        Tree with svcA, svcB (no context) and svcC.
    """
    return load_tree(
        """
        DynamicHealthCheck:
          HealthChecks:
            - HealthCheckName: DatabasePing
              ServiceName: svcA
              Context:
                Host: db-a.internal
            - HealthCheckName: DatabasePing
              ServiceName: svcB
            - HealthCheckName: DatabasePing
              ServiceName: svcC
              Context:
                Host: db-c.internal
        """
    )


@pytest.fixture
def mixed_kinds_tree() -> ConfigurationSection:
    """Create a tree mixing two health-check kinds.

    Returns:
        Tree with DatabasePing and HttpProbe entries sharing a service name.
    """
    return load_tree(
        """
        DynamicHealthCheck:
          HealthChecks:
            - HealthCheckName: HttpProbe
              ServiceName: orders
              Context:
                Url: http://orders/health
            - HealthCheckName: DatabasePing
              ServiceName: orders
              FailureStatus: degraded
              Context:
                Host: orders-db
            - HealthCheckName: DatabasePing
              ServiceName: billing
              Context:
                Host: billing-db
        """
    )


@pytest.fixture
def empty_health_checks_tree() -> ConfigurationSection:
    """Create a tree with an empty HealthChecks list."""
    return load_tree(
        """
        DynamicHealthCheck:
          HealthChecks: []
        """
    )


@pytest.fixture
def yaml_tree():
    """Provide a helper that builds a tree from a YAML snippet."""
    return load_tree


# =============================================================================
# Component Fixtures
# =============================================================================


@pytest.fixture
def registry() -> ContextTypeRegistry:
    """Create an isolated context registry."""
    return ContextTypeRegistry()


@pytest.fixture
def settings() -> ResolverSettings:
    """Create default resolver settings, independent of the environment."""
    return ResolverSettings()


@pytest.fixture
def manager(settings: ResolverSettings) -> ConfigurationManager:
    """Create a ConfigurationManager with its own registry."""
    return ConfigurationManager(settings)


@pytest.fixture
def clean_manager() -> Generator[None, None, None]:
    """Reset the process-wide manager before and after a test."""
    reset_configuration_manager()
    yield
    reset_configuration_manager()
