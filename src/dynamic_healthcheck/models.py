"""Configuration records for dynamically configured health checks.

These dataclasses mirror the expected configuration layout:

    DynamicHealthCheck:
      HealthChecks:
        - HealthCheckName: DatabasePing
          ServiceName: orders-db
          Enabled: true
          Tags: [db, critical]
          Timeout: 2.5
          Context:
            ConnectionString: ...
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


@dataclass
class DynamicHealthCheckConfig:
    """Configuration of one health-check instance for one service.

    Attributes:
        health_check_name: Name of the health-check kind (its class name).
        service_name: Logical service the instance checks, None when unset.
        enabled: Whether the instance should be registered.
        failure_status: Status to report on failure (e.g. "unhealthy", "degraded").
        tags: Free-form tags used to filter checks.
        timeout: Probe timeout in seconds.
        context: Kind-specific settings as raw data, bound separately.
    """

    health_check_name: str = ""
    service_name: Optional[str] = None
    enabled: bool = True
    failure_status: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    timeout: Optional[float] = None
    context: Any = None


@dataclass
class DynamicHealthCheckRoot:
    """Root of the health-check configuration section."""

    health_checks: List[DynamicHealthCheckConfig] = field(default_factory=list)
