"""Configuration tree access and typed binding.

This package provides the hierarchical configuration view consumed by the
resolvers, together with the binder that turns sections into dataclasses.
"""

from dynamic_healthcheck.configuration.binder import bind
from dynamic_healthcheck.configuration.section import ConfigurationSection, combine_path

__all__ = ["ConfigurationSection", "bind", "combine_path"]
