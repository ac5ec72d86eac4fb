"""Navigation helpers for the health-check configuration tree.

These functions only locate sections; binding happens in the resolvers.
"""

from typing import List

from dynamic_healthcheck.configuration.section import ConfigurationSection
from dynamic_healthcheck.constants import PROPERTY_NAME_HEALTHCHECKS


def root_section(tree: ConfigurationSection, root_name: str) -> ConfigurationSection:
    """Get the section holding all health-check configuration.

    Args:
        tree: Configuration root.
        root_name: Name of the top-level section.

    Returns:
        The root section (non-existing if absent).
    """
    return tree.get_section(root_name)


def health_checks_section(tree: ConfigurationSection, root_name: str) -> ConfigurationSection:
    """Get the section holding the ordered per-service entries."""
    return root_section(tree, root_name).get_section(PROPERTY_NAME_HEALTHCHECKS)


def service_entries(tree: ConfigurationSection, root_name: str) -> List[ConfigurationSection]:
    """Get the per-service entries in document order."""
    return health_checks_section(tree, root_name).get_children()
