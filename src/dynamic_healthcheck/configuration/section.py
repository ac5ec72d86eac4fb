"""Hierarchical configuration tree.

This module provides a read-only view over already-parsed configuration
data (nested mappings and sequences). Sections are addressed by
colon-delimited paths and keys are matched case-insensitively.

Example:
    >>> root = ConfigurationSection.from_mapping({
    ...     "DynamicHealthCheck": {
    ...         "HealthChecks": [{"ServiceName": "orders", "Context": {"Port": 5432}}],
    ...     }
    ... })
    >>> root["DynamicHealthCheck:HealthChecks:0:ServiceName"]
    'orders'
"""

import copy
from collections.abc import Mapping, Sequence
from typing import IO, Any, List, Optional, Type, TypeVar, Union

import yaml

from dynamic_healthcheck.constants import KEY_DELIMITER

T = TypeVar("T")

_MISSING = object()


def combine_path(*segments: str) -> str:
    """Join path segments with the key delimiter, skipping empty ones."""
    return KEY_DELIMITER.join(s for s in segments if s)


def _is_sequence(data: Any) -> bool:
    return isinstance(data, Sequence) and not isinstance(data, (str, bytes))


class ConfigurationSection:
    """A node in the configuration tree.

    A section either wraps a scalar value, a container (mapping or
    sequence) or nothing at all. Asking for a child that does not exist
    returns a non-existing section rather than raising, so navigation can
    be chained freely and checked once with ``exists()``.

    Attributes:
        key: Last segment of the section path.
        path: Full colon-delimited path from the root.
    """

    def __init__(self, key: str = "", path: str = "", data: Any = _MISSING) -> None:
        """Initialize a section.

        Args:
            key: Section key.
            path: Full path of the section.
            data: Underlying data, omitted for a non-existing section.
        """
        self.key = key
        self.path = path
        self._data = data

    @classmethod
    def from_mapping(cls, data: Optional[Mapping]) -> "ConfigurationSection":
        """Create a root section from a mapping.

        Args:
            data: Configuration data, typically decoded from a file.

        Returns:
            Root ConfigurationSection.
        """
        if data is None:
            data = {}
        if not isinstance(data, Mapping):
            raise ValueError(
                f"Configuration root must be a mapping, got {type(data).__name__}"
            )
        return cls(data=data)

    @classmethod
    def from_yaml(cls, source: Union[str, IO]) -> "ConfigurationSection":
        """Create a root section from a YAML document.

        Args:
            source: YAML text or an open stream.

        Returns:
            Root ConfigurationSection.

        Example:
            >>> with open("healthchecks.yaml") as f:
            ...     root = ConfigurationSection.from_yaml(f)
        """
        return cls.from_mapping(yaml.safe_load(source))

    @property
    def raw(self) -> Any:
        """Scalar value as decoded, or None for containers and missing sections."""
        if self._data is _MISSING or isinstance(self._data, Mapping) or _is_sequence(
            self._data
        ):
            return None
        return self._data

    @property
    def value(self) -> Optional[str]:
        """Scalar value as a string, or None for containers and missing sections."""
        raw = self.raw
        if raw is None:
            return None
        if isinstance(raw, bool):
            return "true" if raw else "false"
        return str(raw)

    def exists(self) -> bool:
        """Check whether the section holds a value or any children."""
        if self._data is _MISSING or self._data is None:
            return False
        if isinstance(self._data, Mapping) or _is_sequence(self._data):
            return len(self._data) > 0
        return True

    def get_section(self, key: str) -> "ConfigurationSection":
        """Get a descendant section.

        Args:
            key: Child key or colon-delimited path of keys.

        Returns:
            The matching section, or a non-existing section.
        """
        section = self
        for part in key.split(KEY_DELIMITER):
            section = section._child(part)
        return section

    def _child(self, key: str) -> "ConfigurationSection":
        path = combine_path(self.path, key)
        data = self._data

        if isinstance(data, Mapping):
            wanted = key.lower()
            for child_key, child_data in data.items():
                if str(child_key).lower() == wanted:
                    return ConfigurationSection(str(child_key), path, child_data)
        elif _is_sequence(data) and key.isdigit():
            index = int(key)
            if index < len(data):
                return ConfigurationSection(key, path, data[index])

        return ConfigurationSection(key, path)

    def get_children(self) -> List["ConfigurationSection"]:
        """Get the immediate children in document order.

        Sequence items are keyed by their index ("0", "1", ...).
        """
        data = self._data
        if isinstance(data, Mapping):
            items = [(str(k), v) for k, v in data.items()]
        elif _is_sequence(data):
            items = [(str(i), v) for i, v in enumerate(data)]
        else:
            return []
        return [
            ConfigurationSection(key, combine_path(self.path, key), child)
            for key, child in items
        ]

    def get(self, shape: Type[T]) -> Optional[T]:
        """Bind this section into ``shape``.

        Returns:
            Bound value, or None if the section does not exist.

        Raises:
            ConfigurationBindingError: If the section cannot be bound.
        """
        from dynamic_healthcheck.configuration.binder import bind

        return bind(self, shape)

    def to_python(self) -> Any:
        """Return a deep copy of the underlying data (None if missing)."""
        if self._data is _MISSING:
            return None
        return copy.deepcopy(self._data)

    def __getitem__(self, key: str) -> Optional[str]:
        return self.get_section(key).value

    def __repr__(self) -> str:
        return f"ConfigurationSection(path={self.path!r}, exists={self.exists()})"
