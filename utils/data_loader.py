"""
utils/data_loader.py
────────────────────
Loads and caches the user and session tables backing the partner service.

Files (under settings.data_dir):
  - users.json     — one record per player (profile + onboarding state)
  - sessions.json  — session token → user id, with optional expiry
"""

from functools import lru_cache
from pathlib import Path

import pandas as pd

from config.settings import get_settings
from utils.logger import logger

USER_COLUMNS = [
    "id", "name", "email", "role", "rating", "skillLevel", "primaryGoals",
    "coachingStylePreference", "preferredDays", "location", "playingStyle",
    "onboardingCompleted", "lastActiveAt",
]
SESSION_COLUMNS = ["token", "userId", "expiresAt"]


class DataLoadError(RuntimeError):
    """Raised when a backing data file is missing or unreadable."""


def read_table(path: Path, columns: list[str]) -> pd.DataFrame:
    """
    Read a JSON array of records into a DataFrame with at least `columns`.
    Columns absent from the file are added as all-missing so callers can
    rely on them existing.
    """
    if not path.exists():
        raise DataLoadError(f"Data file not found at {path}")

    try:
        df = pd.read_json(path, orient="records", dtype=False, convert_dates=False)
    except ValueError as exc:
        raise DataLoadError(f"Could not parse {path}: {exc}") from exc

    for col in columns:
        if col not in df.columns:
            df[col] = None

    logger.info(f"Loaded {path.name}: {len(df)} rows × {len(df.columns)} columns")
    return df


@lru_cache(maxsize=1)
def load_all_tables() -> dict[str, pd.DataFrame]:
    """
    Read both tables and return them as a dict.
    Results are cached so the files are only read once per process.
    """
    settings = get_settings()
    return {
        "users":    read_table(settings.users_path, USER_COLUMNS),
        "sessions": read_table(settings.sessions_path, SESSION_COLUMNS),
    }


def get_users() -> pd.DataFrame:
    return load_all_tables()["users"]


def get_sessions() -> pd.DataFrame:
    return load_all_tables()["sessions"]
