"""Well-known names used when navigating the health-check configuration."""

# Top-level section holding all health-check configuration
DEFAULT_CONFIG_SECTION_NAME = "DynamicHealthCheck"

# Property names inside the root section and each per-service entry
PROPERTY_NAME_HEALTHCHECKS = "HealthChecks"
PROPERTY_NAME_HEALTHCHECKNAME = "HealthCheckName"
PROPERTY_NAME_SERVICENAME = "ServiceName"
PROPERTY_NAME_CONTEXT = "Context"

# Separator used in configuration paths, e.g. "DynamicHealthCheck:HealthChecks:0"
KEY_DELIMITER = ":"
