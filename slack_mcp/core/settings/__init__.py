"""Settings and credential loading."""
from .loader import ConfigError, load_credentials, load_settings
from .models import Settings, SlackCredentials

__all__ = [
    "ConfigError",
    "Settings",
    "SlackCredentials",
    "load_credentials",
    "load_settings",
]
