"""Slack Web API client."""
from .client import SlackClient
from .errors import SlackApiError, SlackError, SlackTransportError

__all__ = ["SlackClient", "SlackError", "SlackApiError", "SlackTransportError"]
