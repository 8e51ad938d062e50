"""
Harness configuration.

Values come from environment variables so CI runs can turn on verbose
logging without touching test code.
"""

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class HarnessConfig:
    """Configuration for the consumer test harness."""
    log_level: str = "WARNING"
    log_json: bool = True
    configure_logging: bool = False

    @classmethod
    def from_env(cls, prefix: str = "HARNESS_") -> "HarnessConfig":
        """
        Load configuration from environment variables.

        Args:
            prefix: Prefix for every variable, e.g. HARNESS_LOG_LEVEL

        Returns:
            HarnessConfig with defaults for anything unset
        """
        defaults = cls()
        return cls(
            log_level=os.getenv(f"{prefix}LOG_LEVEL", defaults.log_level).upper(),
            log_json=_env_bool(f"{prefix}LOG_JSON", defaults.log_json),
            configure_logging=_env_bool(f"{prefix}CONFIGURE_LOGGING", defaults.configure_logging),
        )
