"""Binding of configuration sections into typed values.

Supported target types:
    - dataclasses (field names matched case-insensitively, ignoring ``_`` and ``-``)
    - str, int, float, bool
    - Enum subclasses (by value, then by member name)
    - List[T], Dict[str, T], Optional[T]
    - Any (raw Python data)
"""

import dataclasses
import sys
from enum import Enum
from typing import (
    Any,
    Dict,
    List,
    Optional,
    Type,
    TypeVar,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from dynamic_healthcheck.configuration.section import ConfigurationSection, combine_path
from dynamic_healthcheck.exceptions import ConfigurationBindingError

if sys.version_info >= (3, 10):
    from types import UnionType

    _UNION_TYPES = (Union, UnionType)
else:
    _UNION_TYPES = (Union,)

T = TypeVar("T")

_TRUE_VALUES = {"true", "yes", "on", "1"}
_FALSE_VALUES = {"false", "no", "off", "0"}


def bind(section: ConfigurationSection, shape: Type[T]) -> Optional[T]:
    """Bind a configuration section into ``shape``.

    Args:
        section: Section to bind.
        shape: Target type.

    Returns:
        The bound value, or None when the section does not exist.

    Raises:
        ConfigurationBindingError: If the section cannot be converted.

    Example:
        >>> @dataclass
        ... class PingContext:
        ...     host: str
        ...     port: int = 80
        >>> section = ConfigurationSection.from_mapping({"Host": "db", "Port": "5432"})
        >>> bind(section, PingContext)
        PingContext(host='db', port=5432)
    """
    if not section.exists():
        return None
    return _convert(section, shape)


def _type_name(target: Any) -> str:
    return getattr(target, "__name__", repr(target))


def _normalize(name: str) -> str:
    return name.replace("_", "").replace("-", "").lower()


def _convert(section: ConfigurationSection, target: Any) -> Any:
    if target is Any or target is object:
        return section.to_python()

    origin = get_origin(target)

    if origin in _UNION_TYPES:
        args = [a for a in get_args(target) if a is not type(None)]
        if len(args) != 1:
            raise ConfigurationBindingError(
                f"Unsupported union type {target!r}", section.path, _type_name(target)
            )
        return _convert(section, args[0]) if section.exists() else None

    if origin is list or target is list:
        args = get_args(target)
        return _convert_list(section, args[0] if args else Any)

    if origin is dict or target is dict:
        args = get_args(target)
        return _convert_dict(section, args[1] if len(args) == 2 else Any)

    if dataclasses.is_dataclass(target) and isinstance(target, type):
        return _bind_dataclass(section, target)

    if isinstance(target, type) and issubclass(target, Enum):
        return _convert_enum(section, target)

    if target in (str, int, float, bool):
        return _convert_scalar(section, target)

    raise ConfigurationBindingError(
        f"Unsupported target type {_type_name(target)}", section.path, _type_name(target)
    )


def _require_container(section: ConfigurationSection, target: Any) -> None:
    if section.raw is not None:
        raise ConfigurationBindingError(
            f"Expected a section, got value {section.value!r}",
            section.path,
            _type_name(target),
        )


def _convert_list(section: ConfigurationSection, item_type: Any) -> List[Any]:
    _require_container(section, list)
    return [
        _convert(child, item_type) for child in section.get_children() if child.exists()
    ]


def _convert_dict(section: ConfigurationSection, value_type: Any) -> Dict[str, Any]:
    _require_container(section, dict)
    return {
        child.key: _convert(child, value_type)
        for child in section.get_children()
        if child.exists()
    }


def _bind_dataclass(section: ConfigurationSection, shape: type) -> Any:
    _require_container(section, shape)

    try:
        hints = get_type_hints(shape)
    except (NameError, TypeError) as e:
        raise ConfigurationBindingError(
            f"Cannot resolve type hints: {e}", section.path, shape.__name__
        ) from e

    children: Dict[str, ConfigurationSection] = {}
    for child in section.get_children():
        children.setdefault(_normalize(child.key), child)

    kwargs: Dict[str, Any] = {}
    for f in dataclasses.fields(shape):
        if not f.init:
            continue

        child = children.get(_normalize(f.name))
        if child is None or not child.exists():
            if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
                raise ConfigurationBindingError(
                    f"Missing required value '{f.name}'",
                    combine_path(section.path, f.name),
                    shape.__name__,
                )
            continue

        kwargs[f.name] = _convert(child, hints.get(f.name, Any))

    try:
        return shape(**kwargs)
    except (TypeError, ValueError) as e:
        # __post_init__ validation failures surface here
        raise ConfigurationBindingError(str(e), section.path, shape.__name__) from e


def _convert_enum(section: ConfigurationSection, target: Type[Enum]) -> Enum:
    raw = section.raw
    if raw is None:
        raise ConfigurationBindingError(
            f"Expected a {target.__name__} value, got a section",
            section.path,
            target.__name__,
        )

    try:
        return target(raw)
    except ValueError:
        pass

    wanted = str(raw).lower()
    for member in target:
        if member.name.lower() == wanted or str(member.value).lower() == wanted:
            return member

    raise ConfigurationBindingError(
        f"Invalid {target.__name__} value {raw!r}", section.path, target.__name__
    )


def _convert_scalar(section: ConfigurationSection, target: type) -> Any:
    raw = section.raw
    if raw is None:
        raise ConfigurationBindingError(
            f"Expected a {target.__name__} value, got a section",
            section.path,
            target.__name__,
        )

    try:
        if target is str:
            return section.value
        if target is bool:
            return _to_bool(raw)
        if target is int:
            return _to_int(raw)
        return _to_float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationBindingError(
            f"Invalid {target.__name__} value {raw!r}", section.path, target.__name__
        ) from e


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ValueError(f"not a boolean: {raw!r}")


def _to_float(raw: Any) -> float:
    if isinstance(raw, bool):
        raise ValueError(f"not a number: {raw!r}")
    if isinstance(raw, str):
        return float(raw.strip())
    return float(raw)


def _to_int(raw: Any) -> int:
    if isinstance(raw, bool):
        raise ValueError(f"not an integer: {raw!r}")
    if isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"not an integer: {raw!r}")
        return int(raw)
    if isinstance(raw, int):
        return raw
    return int(str(raw).strip())
