"""Settings for health-check configuration resolution."""

import os
from dataclasses import dataclass

from dynamic_healthcheck.constants import DEFAULT_CONFIG_SECTION_NAME, KEY_DELIMITER


@dataclass
class ResolverSettings:
    """Settings for the configuration manager.

    Attributes:
        config_section: Top-level section holding all health-check configuration.
        strict_section: Refuse to change config_section once lookups have begun.

    Example:
        >>> settings = ResolverSettings(config_section="Monitoring:HealthChecks")
        >>> settings.validate()
    """

    config_section: str = DEFAULT_CONFIG_SECTION_NAME
    strict_section: bool = False

    @classmethod
    def from_env(cls) -> "ResolverSettings":
        """Create settings from environment variables.

        Environment Variables:
            DHC_CONFIG_SECTION: Root section name (default: DynamicHealthCheck)
            DHC_STRICT_SECTION: Reject late root section changes (default: false)
        """
        return cls(
            config_section=os.getenv("DHC_CONFIG_SECTION", DEFAULT_CONFIG_SECTION_NAME),
            strict_section=os.getenv("DHC_STRICT_SECTION", "false").lower() == "true",
        )

    def validate(self) -> None:
        """Validate settings values.

        Raises:
            ValueError: If settings are invalid.
        """
        if not self.config_section or not self.config_section.strip():
            raise ValueError("config_section cannot be empty")

        parts = self.config_section.split(KEY_DELIMITER)
        if any(not part for part in parts):
            raise ValueError(f"Invalid config_section path: {self.config_section!r}")
