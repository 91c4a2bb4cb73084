"""Configuration management for TaskFlow."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from .persistence import STORAGE_KEY
from .undo import DEFAULT_UNDO_SECONDS

logger = logging.getLogger(__name__)

TASKFLOW_HOME = Path(os.environ.get("TASKFLOW_HOME", Path.home() / "taskflow"))
CONFIG_FILE = TASKFLOW_HOME / "config" / "taskflow.conf"
DATA_DIR = TASKFLOW_HOME / "data"

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class Config:
    """TaskFlow configuration."""

    data_dir: Path = field(default_factory=lambda: DATA_DIR)
    storage_key: str = STORAGE_KEY
    undo_seconds: float = DEFAULT_UNDO_SECONDS
    seed_on_first_run: bool = True


def _unquote(value: str) -> str:
    """Strip surrounding quotes, or an inline comment from an unquoted value."""
    for quote in ('"', "'"):
        if value.startswith(quote):
            end_quote = value.find(quote, 1)
            return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        value = value.split("#")[0].strip()
    return value


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from taskflow.conf. Bad values are logged and skipped."""
    config = Config()
    config_file = Path(path) if path else CONFIG_FILE

    if not config_file.exists():
        return config

    for line in config_file.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = _unquote(value.strip())

        match key:
            case "data_dir":
                if value:
                    config.data_dir = Path(value).expanduser()
            case "storage_key":
                if value:
                    config.storage_key = value
            case "undo_seconds":
                try:
                    seconds = float(value)
                except ValueError:
                    logger.warning(f"Invalid UNDO_SECONDS value: {value!r}")
                    continue
                if seconds < 0:
                    logger.warning(f"UNDO_SECONDS must not be negative: {value!r}")
                    continue
                config.undo_seconds = seconds
            case "seed_on_first_run":
                if value.lower() in _TRUE:
                    config.seed_on_first_run = True
                elif value.lower() in _FALSE:
                    config.seed_on_first_run = False
                else:
                    logger.warning(f"Invalid SEED_ON_FIRST_RUN value: {value!r}")
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
