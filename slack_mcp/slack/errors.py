from __future__ import annotations

from typing import Any


class SlackError(Exception):
    """Base class for failures talking to the Slack Web API."""

    def __init__(self, message: str, *, method: str | None = None, data: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.method = method
        self.data = data


class SlackTransportError(SlackError):
    """Network failure, timeout, or a body that is not JSON."""


class SlackApiError(SlackError):
    """Non-success HTTP status, or a lookup the API could not satisfy."""

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        status_code: int | None = None,
        data: Any | None = None,
    ) -> None:
        super().__init__(message, method=method, data=data)
        self.status_code = status_code
