"""Exception hierarchy for health-check configuration resolution.

Exception Hierarchy:
    DynamicHealthCheckError (base)
    ├── ConfigurationMismatchError - Kind/shape disagreement or no matching entry
    └── ConfigurationBindingError - A section cannot be bound into a typed value

Every error may carry the colon-delimited path of the configuration
section it refers to, so a failure can be traced back to the document
(``DynamicHealthCheck:HealthChecks:1:Context:Port``).
"""

from typing import Any, Optional


class DynamicHealthCheckError(Exception):
    """Base exception for all health-check configuration errors.

    Attributes:
        message: Human-readable error message.
        path: Configuration path the error refers to, if any.
        details: Additional lookup context (service name, shapes, ...).

    Example:
        >>> error = DynamicHealthCheckError(
        ...     "Lookup failed", path="DynamicHealthCheck:HealthChecks", details={"entries": 0}
        ... )
        >>> str(error)
        'Lookup failed at DynamicHealthCheck:HealthChecks (entries=0)'
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path or None
        self.details = dict(details) if details else {}

    def __str__(self) -> str:
        text = self.message
        if self.path:
            text = f"{text} at {self.path}"
        if self.details:
            # None values mean "not given" (e.g. no service name) and are noise here
            shown = {k: v for k, v in self.details.items() if v is not None}
            if shown:
                text += " (" + ", ".join(f"{k}={v}" for k, v in shown.items()) + ")"
        return text

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self.message!r}, "
            f"path={self.path!r}, details={self.details!r})"
        )


class ConfigurationMismatchError(DynamicHealthCheckError):
    """Exception raised when a health check has not been well configured.

    This exception is raised for:
    - A context shape that differs from the one registered for the kind
    - A kind that was never registered
    - No per-service entry matching the requested service name
    - A matched entry without a bindable context

    Attributes:
        health_check: Name of the health-check kind.
        service_name: Service the lookup was made for, if any.

    Example:
        >>> raise ConfigurationMismatchError("DatabasePing", {"service_name": "orders"})
    """

    def __init__(
        self,
        health_check: str,
        details: Optional[dict[str, Any]] = None,
        path: Optional[str] = None,
    ) -> None:
        super().__init__(f"The type {health_check} has not been well configured.", path, details)
        self.health_check = health_check
        self.service_name = self.details.get("service_name")


class ConfigurationBindingError(DynamicHealthCheckError):
    """Exception raised when a configuration section cannot be bound.

    Attributes:
        target: Name of the type the section was bound into.

    Example:
        >>> raise ConfigurationBindingError(
        ...     "Invalid int value 'abc'",
        ...     path="DynamicHealthCheck:HealthChecks:0:Context:Port",
        ...     target="int",
        ... )
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        target: Optional[str] = None,
    ) -> None:
        super().__init__(message, path, {"target": target} if target else None)
        self.target = target
