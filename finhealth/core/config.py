"""Application configuration.

Settings come from a JSON file (an explicit path, or finhealth.json in
the working directory) and fall back to defaults. CLI options override
individual values.
"""

import json
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, ValidationError

from finhealth.core.exceptions import ConfigError

CONFIG_FILENAME = "finhealth.json"


class AppConfig(BaseModel):
    """FinHealth settings.

    Attributes:
        data_dir: Directory holding session snapshots.
        session: Default session key.
        currency: Display currency code.
        autosave: Persist a snapshot after every mutation.
        log_level: Logging level name for the CLI.
    """

    data_dir: Path = Field(default_factory=lambda: Path.home() / ".finhealth")
    session: str = Field(default="default", min_length=1, pattern=r"^[\w.-]+$")
    currency: str = Field(default="USD", min_length=3, max_length=3, pattern=r"^[A-Z]{3}$")
    autosave: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration.

    Args:
        path: Config file. If None, finhealth.json in the current
            directory is used when present.

    Returns:
        AppConfig, defaults when no file is found.

    Raises:
        ConfigError: If an explicit path is missing or any file is invalid.
    """
    if path is None:
        candidate = Path.cwd() / CONFIG_FILENAME
        if not candidate.exists():
            return AppConfig()
        path = candidate
    elif not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        return AppConfig.model_validate(data)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Cannot read config {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e
