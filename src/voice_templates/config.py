"""Configuration management for voice-templates projects."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

CONFIG_DIR = ".voice-templates"
CONFIG_FILE = "config.json"
VOCAB_ENV_VAR = "VOICE_TEMPLATES_VOCAB"


class ConfigError(Exception):
    """Raised when the project config file cannot be read."""


@dataclass
class MatcherConfig:
    """Project settings for compiling and matching templates."""

    vocabulary_path: str | None = None
    ignore_case: bool = True


def _config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_FILE


def save_config(config: MatcherConfig, project_root: Path) -> Path:
    """Save config to .voice-templates/config.json. Returns the config path."""
    path = _config_path(project_root)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "vocabulary_path": config.vocabulary_path,
        "ignore_case": config.ignore_case,
    }
    path.write_text(json.dumps(data, indent=2) + "\n")
    return path


def load_config(project_root: Path) -> MatcherConfig:
    """Load config from .voice-templates/config.json."""
    path = _config_path(project_root)
    if not path.exists():
        raise FileNotFoundError(f"No config found at {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config format in {path}: expected object")

    vocabulary_path = data.get("vocabulary_path")
    if vocabulary_path is not None and not isinstance(vocabulary_path, str):
        raise ConfigError(f"'vocabulary_path' must be a string in {path}")
    ignore_case = data.get("ignore_case", True)
    if not isinstance(ignore_case, bool):
        raise ConfigError(f"'ignore_case' must be true or false in {path}")
    return MatcherConfig(vocabulary_path=vocabulary_path, ignore_case=ignore_case)


def is_configured(project_root: Path) -> bool:
    return _config_path(project_root).exists()


def resolve_vocabulary_path(project_root: Path, explicit: str | None = None) -> Path | None:
    """Pick the vocabulary file to use, or None for the bundled default.

    Precedence: explicit path, then $VOICE_TEMPLATES_VOCAB, then the project
    config. Relative paths from the config resolve against the project root.
    """
    if explicit:
        return Path(explicit)
    env_path = os.environ.get(VOCAB_ENV_VAR)
    if env_path:
        return Path(env_path)
    if is_configured(project_root):
        configured = load_config(project_root).vocabulary_path
        if configured:
            path = Path(configured)
            return path if path.is_absolute() else project_root / path
    return None
