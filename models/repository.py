"""
models/repository.py
────────────────────
Read-only access to players and sessions.

Wraps the pandas tables from utils.data_loader and hands out plain dict
records. Everything that needs a user (auth, matching, requests) goes
through a UserRepository so tests can build one from in-memory rows.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

import pandas as pd

from utils.data_loader import (
    SESSION_COLUMNS,
    USER_COLUMNS,
    DataLoadError,
    get_sessions,
    get_users,
)
from utils.logger import logger


class RepositoryError(RuntimeError):
    """Backing store could not be read."""


def _clean_value(value: Any) -> Any:
    # pandas hands back NaN / NaT for holes; callers expect None
    if isinstance(value, (list, tuple, dict, set)):
        return value
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        pass
    return value


def _to_record(row: pd.Series) -> dict:
    return {k: _clean_value(v) for k, v in row.items()}


def _truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes")
    value = _clean_value(value)
    return bool(value) if value is not None else False


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO timestamp to an aware UTC datetime; None if unusable."""
    value = _clean_value(value)
    if value is None or value == "":
        return None
    ts = pd.to_datetime(value, errors="coerce", utc=True)
    if pd.isna(ts):
        return None
    return ts.to_pydatetime()


class UserRepository:
    """
    Parameters
    ----------
    users_df    : one row per player, columns as in data_loader.USER_COLUMNS
    sessions_df : token → userId rows, optional expiresAt
    """

    def __init__(self, users_df: pd.DataFrame, sessions_df: pd.DataFrame | None = None) -> None:
        self.users = users_df.reset_index(drop=True).copy()
        for col in USER_COLUMNS:
            if col not in self.users.columns:
                self.users[col] = None
        self.users["id"] = self.users["id"].astype(str)

        sessions = sessions_df if sessions_df is not None else pd.DataFrame(columns=SESSION_COLUMNS)
        self.sessions = sessions.reset_index(drop=True).copy()
        for col in SESSION_COLUMNS:
            if col not in self.sessions.columns:
                self.sessions[col] = None
        self.sessions["token"] = self.sessions["token"].astype(str)

    @classmethod
    def from_records(cls, users: list[dict], sessions: list[dict] | None = None) -> "UserRepository":
        return cls(pd.DataFrame(users), pd.DataFrame(sessions or []))

    @classmethod
    def from_data_files(cls) -> "UserRepository":
        try:
            return cls(get_users(), get_sessions())
        except DataLoadError as exc:
            raise RepositoryError(str(exc)) from exc

    # ── users ─────────────────────────────────────────────────────────────────

    def __len__(self) -> int:
        return len(self.users)

    def get_user(self, user_id: str) -> Optional[dict]:
        rows = self.users[self.users["id"] == str(user_id)]
        if rows.empty:
            return None
        return _to_record(rows.iloc[0])

    def onboarded_mask(self) -> pd.Series:
        return self.users["onboardingCompleted"].map(_truthy).astype(bool)

    def count_onboarded(self) -> int:
        return int(self.onboarded_mask().sum())

    def find_candidates(self, user_id: str, limit: int = 50) -> list[dict]:
        """
        Other onboarded players, in store order, capped at `limit`.
        The cap keeps per-request scoring work bounded.
        """
        mask = self.onboarded_mask() & (self.users["id"] != str(user_id))
        rows = self.users[mask].head(limit)
        logger.debug(f"find_candidates({user_id}): {len(rows)} of {int(mask.sum())} eligible")
        return [_to_record(row) for _, row in rows.iterrows()]

    # ── sessions ──────────────────────────────────────────────────────────────

    def resolve_session(self, token: str | None, now: datetime | None = None) -> Optional[str]:
        """Return the user id behind a live session token, else None."""
        if not token:
            return None
        rows = self.sessions[self.sessions["token"] == token]
        if rows.empty:
            return None
        session = _to_record(rows.iloc[0])
        expires_at = parse_timestamp(session.get("expiresAt"))
        now = now or datetime.now(timezone.utc)
        if expires_at is not None and expires_at <= now:
            return None
        user_id = session.get("userId")
        return str(user_id) if user_id is not None else None
