from __future__ import annotations
import os
import sys
from pathlib import Path
from typing import Dict, Optional

from pydantic import BaseModel, Field, ValidationError

from .exceptions import ConfigurationError

# stdlib TOML in 3.11+
try:
    import tomllib  # type: ignore[attr-defined]
except ImportError:  # pragma: no cover
    tomllib = None  # we'll just skip reading if unavailable

USER_CFG = Path.home() / ".config" / "doc2test" / "config.toml"
PROJECT_CFG = Path("doc2test.toml")

DEFAULTS: Dict[str, object] = {
    "lightweight_max_chars": 1000,
    "keyword_limit": 10,
    "log_level": "INFO",
}

ENV_VARS = {
    "lightweight_max_chars": "DOC2TEST_LIGHTWEIGHT_MAX_CHARS",
    "keyword_limit": "DOC2TEST_KEYWORD_LIMIT",
    "log_level": "DOC2TEST_LOG_LEVEL",
}


class PipelineSettings(BaseModel):
    """Tunable pipeline settings."""
    lightweight_max_chars: int = Field(1000, ge=0, description="Documents up to this length use the lightweight extractor")
    keyword_limit: int = Field(10, ge=0, description="Maximum number of metadata keywords")
    log_level: str = Field("INFO", description="Root log level for the CLI")


def _read_toml(path: Path) -> Dict:
    if not path.exists():
        return {}
    if tomllib is None:
        print(f"Warning: tomllib not available; ignoring {path}", file=sys.stderr)
        return {}
    with path.open("rb") as f:
        try:
            return tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid config file {path}: {e}") from e


def _coerce(name: str, v):
    if v is None:
        return None
    if name in {"lightweight_max_chars", "keyword_limit"}:
        try:
            return int(v)
        except (TypeError, ValueError):
            return None
    if name == "log_level":
        return str(v).upper()
    return v


def merged_config(project_cfg: Optional[Path] = None) -> Dict:
    cfg_user = _read_toml(USER_CFG)
    cfg_proj = _read_toml(project_cfg or PROJECT_CFG)

    # environment overrides
    env = {k: _coerce(k, os.getenv(var)) for k, var in ENV_VARS.items()}

    # merge: defaults -> user -> project -> env
    settings = DEFAULTS.copy()
    def overlay(d: Dict):
        if not isinstance(d, dict): return
        for k in settings.keys():
            if k in d and d[k] is not None:
                settings[k] = d[k]
    overlay(cfg_user)
    overlay(cfg_proj)
    overlay(env)

    return settings


def load_settings(project_cfg: Optional[Path] = None) -> PipelineSettings:
    try:
        return PipelineSettings(**merged_config(project_cfg))
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
