import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from connect_five.core.errors import SettingsError
from connect_five.engine.constants import (
    COLS,
    MAX_ROLLOUT_PLIES,
    MAX_ROLLOUT_SIMULATIONS,
    MAX_SIMULATIONS_PER_COLUMN,
    ROWS,
    SEARCH_DEPTH,
    WIN_LENGTH,
)

load_dotenv()

# Shipped config next to the package (the project root for a source checkout or editable install)
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "engine.yaml"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class BoardSettings(BaseModel):
    rows: int = Field(default=ROWS, ge=5)
    columns: int = Field(default=COLS, ge=5)
    win_length: int = Field(default=WIN_LENGTH, ge=3)


class SearchSettings(BaseModel):
    depth: int = Field(default=SEARCH_DEPTH, ge=1)


class RolloutSettings(BaseModel):
    max_simulations: int = Field(default=MAX_ROLLOUT_SIMULATIONS, ge=1)
    max_per_column: int = Field(default=MAX_SIMULATIONS_PER_COLUMN, ge=1)
    max_plies: int = Field(default=MAX_ROLLOUT_PLIES, ge=1)


class EngineSettings(BaseModel):
    board: BoardSettings = BoardSettings()
    search: SearchSettings = SearchSettings()
    rollout: RolloutSettings = RolloutSettings()
    log_level: str = "INFO"
    seed: Optional[int] = None  # None = unseeded randomness


def load_settings(config_path: Optional[str] = None) -> EngineSettings:
    """
    Reads the YAML config, then applies environment overrides.
    The path is config_path, else CONNECT_FIVE_CONFIG, else DEFAULT_CONFIG_PATH;
    relative paths resolve against the working directory. A missing file
    yields the defaults.
    """
    path = Path(config_path or os.getenv("CONNECT_FIVE_CONFIG", DEFAULT_CONFIG_PATH))

    data = {}
    if path.exists():
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise SettingsError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"Expected a mapping at the top of {path}")

    # Environment overrides
    if os.getenv("CONNECT_FIVE_LOG_LEVEL"):
        data["log_level"] = os.getenv("CONNECT_FIVE_LOG_LEVEL")
    if os.getenv("CONNECT_FIVE_SEED"):
        data["seed"] = os.getenv("CONNECT_FIVE_SEED")

    try:
        return EngineSettings(**data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {path}: {e}") from e


_settings: Optional[EngineSettings] = None


def get_settings() -> EngineSettings:
    """Cached singleton, loaded on first use."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(level=(level or get_settings().log_level).upper(), format=LOG_FORMAT)
