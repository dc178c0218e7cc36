from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping


CLIENT_LEVELS = {"L0", "L1", "L2"}


def _as_path(v: Any, default: Path) -> Path:
    if v is None:
        return default
    if isinstance(v, Path):
        return v
    if isinstance(v, str):
        return Path(v)
    raise TypeError(f"expected path-like value, got {type(v).__name__}")


def _as_float(v: Any, default: float) -> float:
    if v is None:
        return default
    if isinstance(v, bool):
        raise TypeError("expected number, got bool")
    if isinstance(v, (int, float)):
        return float(v)
    if isinstance(v, str):
        try:
            return float(v.strip())
        except ValueError as e:
            raise TypeError(f"expected number-like value, got {v!r}") from e
    raise TypeError(f"expected number-like value, got {type(v).__name__}")


def _as_str(key: str, v: Any, default: str) -> str:
    if v is None:
        return default
    if not isinstance(v, str):
        raise TypeError(f"{key} must be str, got {type(v).__name__}")
    return v


def _section(raw: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    v = raw.get(key)
    if v is not None and not isinstance(v, Mapping):
        raise TypeError(f"{key} must be mapping, got {type(v).__name__}")
    return v


@dataclass
class PathsSettings:
    logs_dir: Path = Path("logs")

    @classmethod
    def from_dict(cls, d: Mapping[str, Any] | None) -> "PathsSettings":
        d = d or {}
        return cls(logs_dir=_as_path(d.get("logs_dir"), cls.logs_dir))


@dataclass
class SlackSettings:
    api_base_url: str = "https://slack.com/api"
    timeout_s: float = 30.0
    team_id: str = ""

    @classmethod
    def from_dict(cls, d: Mapping[str, Any] | None) -> "SlackSettings":
        d = d or {}
        timeout_s = _as_float(d.get("timeout_s"), cls.timeout_s)
        if timeout_s <= 0:
            raise ValueError("slack.timeout_s must be positive")
        return cls(
            api_base_url=_as_str("api_base_url", d.get("api_base_url"), cls.api_base_url).rstrip("/"),
            timeout_s=timeout_s,
            team_id=_as_str("team_id", d.get("team_id"), cls.team_id),
        )


@dataclass
class ServerSettings:
    name: str = "slack-mcp-server"
    version: str = "1.0.0"
    client_level: str = "L1"
    log_level: str = "INFO"

    @classmethod
    def from_dict(cls, d: Mapping[str, Any] | None) -> "ServerSettings":
        d = d or {}
        level = _as_str("client_level", d.get("client_level"), cls.client_level)
        if level not in CLIENT_LEVELS:
            raise ValueError(f"server.client_level must be one of {sorted(CLIENT_LEVELS)}, got {level!r}")
        return cls(
            name=_as_str("name", d.get("name"), cls.name),
            version=str(d.get("version", cls.version)),
            client_level=level,
            log_level=_as_str("log_level", d.get("log_level"), cls.log_level).upper(),
        )


@dataclass
class Settings:
    paths: PathsSettings = field(default_factory=PathsSettings)
    slack: SlackSettings = field(default_factory=SlackSettings)
    server: ServerSettings = field(default_factory=ServerSettings)

    # Keep the raw mapping for debugging; must be JSON-serializable.
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any] | None) -> "Settings":
        raw = dict(raw or {})
        return cls(
            paths=PathsSettings.from_dict(_section(raw, "paths")),
            slack=SlackSettings.from_dict(_section(raw, "slack")),
            server=ServerSettings.from_dict(_section(raw, "server")),
            raw=raw,
        )


@dataclass(frozen=True)
class SlackCredentials:
    token: str
    team_id: str

    @property
    def is_user_token(self) -> bool:
        return self.token.startswith("xoxp-")
