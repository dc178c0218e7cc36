from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from .models import Settings, SlackCredentials


DEFAULT_SETTINGS_PATH = "config/settings.yaml"
SETTINGS_PATH_ENV = "SLACK_MCP_SETTINGS_PATH"


class ConfigError(RuntimeError):
    pass


def _resolve_path(root: Path, p: Path) -> Path:
    return p if p.is_absolute() else (root / p).resolve()


def _load_yaml_mapping(p: Path) -> dict[str, Any]:
    with p.open("r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise TypeError("settings root must be a mapping")
    return raw


def load_settings(path: str | Path | None = None) -> Settings:
    """
    Load `config/settings.yaml`.

    A missing file yields defaults. Relative paths resolve against the
    directory that holds `config/` (or the working directory when the file
    does not exist).
    """
    if path is None:
        path = os.environ.get(SETTINGS_PATH_ENV, DEFAULT_SETTINGS_PATH)
    p = Path(path).expanduser().resolve()

    if p.exists():
        root = p.parent.parent  # .../config/settings.yaml -> repo root
        s = Settings.from_dict(_load_yaml_mapping(p))
    else:
        root = Path.cwd()
        s = Settings()

    s.paths.logs_dir = _resolve_path(root, s.paths.logs_dir)
    return s


def load_credentials(settings: Settings, environ: Mapping[str, str] | None = None) -> SlackCredentials:
    """Read the Slack token and team id from the environment.

    `SLACK_TOKEN` wins over `SLACK_BOT_TOKEN`; `SLACK_TEAM_ID` overrides
    `slack.team_id` from settings.
    """
    env = os.environ if environ is None else environ
    token = env.get("SLACK_TOKEN") or env.get("SLACK_BOT_TOKEN") or ""
    team_id = env.get("SLACK_TEAM_ID") or settings.slack.team_id

    if not token or not team_id:
        raise ConfigError("set SLACK_TOKEN (or SLACK_BOT_TOKEN) and SLACK_TEAM_ID environment variables")
    return SlackCredentials(token=token, team_id=team_id)
