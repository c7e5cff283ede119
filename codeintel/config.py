import logging
import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, SecretStr

from codeintel.vcs.git import GitDiffSource
from codeintel.vcs.http import HttpDiffSource
from codeintel.vcs.source import RawDiffSource

logger = logging.getLogger(__name__)

ENV_PREFIX = "CODEINTEL_"


class AdjusterSettings(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
    )

    git_binary: str = "git"
    repos_root: Path | None = None
    gitserver_url: str | None = None
    gitserver_token: SecretStr | None = None
    diff_timeout_sec: float = Field(default=30, gt=0)
    log_level: str = "WARNING"


def _env(name: str) -> str | None:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or value == "":
        return None
    return value


def _env_float(name: str, default: float) -> float:
    value = _env(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring invalid %s%s=%r", ENV_PREFIX, name, value)
        return default


def load_settings(path: Path | None = None) -> AdjusterSettings:
    """
    Build settings from an optional YAML file, then apply environment
    overrides (`CODEINTEL_GIT_BINARY`, `CODEINTEL_REPOS_ROOT`,
    `CODEINTEL_GITSERVER_URL`, `CODEINTEL_GITSERVER_TOKEN`,
    `CODEINTEL_DIFF_TIMEOUT_SEC`, `CODEINTEL_LOG_LEVEL`).
    """

    data: dict = {}
    if path is not None:
        with open(path) as f:
            loaded = yaml.safe_load(f)
        if loaded is not None and not isinstance(loaded, dict):
            raise ValueError(f"Invalid settings file ({path}): root must be a mapping")
        data = loaded or {}

    for key in ("git_binary", "repos_root", "gitserver_url", "gitserver_token", "log_level"):
        value = _env(key.upper())
        if value is not None:
            data[key] = value

    default_timeout = data.get("diff_timeout_sec", AdjusterSettings.model_fields["diff_timeout_sec"].default)
    data["diff_timeout_sec"] = _env_float("DIFF_TIMEOUT_SEC", default_timeout)

    return AdjusterSettings.model_validate(data)


def build_diff_source(settings: AdjusterSettings) -> RawDiffSource:
    if settings.gitserver_url:
        return HttpDiffSource(settings.gitserver_url, token=settings.gitserver_token)
    return GitDiffSource(git_binary=settings.git_binary, repos_root=settings.repos_root)
