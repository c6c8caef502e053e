"""Planner configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

from .constants import DEFAULT_MAX_MONTHS, STRATEGY_NAMES

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Configuration shared by the library and the command line."""

    APP_NAME = "debtplanner"
    LOG_FILENAME = "debtplanner.log"

    def __init__(self) -> None:
        self.DEV_MODE = _env_bool("DEBTPLANNER_DEV_MODE", default=True)
        self.DATA_DIR = self._resolve_data_dir()
        self.MAX_MONTHS = _env_int("DEBTPLANNER_MAX_MONTHS", DEFAULT_MAX_MONTHS)
        self.DEFAULT_STRATEGY = (
            os.getenv("DEBTPLANNER_DEFAULT_STRATEGY", "avalanche").strip().lower()
        )
        if self.MAX_MONTHS <= 0:
            raise ValueError("DEBTPLANNER_MAX_MONTHS must be positive.")
        if self.DEFAULT_STRATEGY not in STRATEGY_NAMES:
            raise ValueError(
                f"DEBTPLANNER_DEFAULT_STRATEGY must be one of {', '.join(STRATEGY_NAMES)}."
            )

    def _resolve_data_dir(self) -> Path:
        """Return the directory where logs and exports are written."""

        data_root = os.getenv("DEBTPLANNER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


class DevConfig(BaseConfig):
    """Interactive use: verbose console logging regardless of the environment."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True

