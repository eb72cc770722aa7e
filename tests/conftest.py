"""Shared fixtures: in-memory users, sessions and an app wired to them."""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path

# Must be set before config.settings / utils.logger are imported anywhere.
_LOG_DIR = Path(tempfile.mkdtemp(prefix="partnermatch-logs-"))
os.environ.setdefault("LOG_FILE", str(_LOG_DIR / "test.log"))
os.environ.setdefault("DATA_DIR", str(Path(__file__).resolve().parent.parent / "data"))

import pytest
from fastapi.testclient import TestClient

from backend import main as backend_main
from backend.dependencies import get_matchmaker, get_repository, get_request_store
from config.settings import Settings
from models.matchmaker import PartnerMatchmaker
from models.partner_requests import PartnerRequestStore
from models.repository import UserRepository

NOW = datetime(2026, 10, 17, 12, 0, tzinfo=timezone.utc)


def make_user(user_id: str, **overrides) -> dict:
    user = {
        "id": user_id,
        "name": f"Player {user_id}",
        "email": f"{user_id}@example.com",
        "role": "USER",
        "rating": "3.0",
        "skillLevel": "INTERMEDIATE",
        "primaryGoals": [],
        "coachingStylePreference": None,
        "preferredDays": [],
        "location": None,
        "playingStyle": None,
        "onboardingCompleted": True,
        "lastActiveAt": "2026-10-16T12:00:00Z",
    }
    user.update(overrides)
    return user


@pytest.fixture
def users() -> list[dict]:
    return [
        make_user(
            "me", name="Maya", role="ADMIN",
            primaryGoals=["serve", "strategy"], coachingStylePreference="BALANCED",
            preferredDays=["Mon", "Wed"], location="Austin",
        ),
        make_user(
            "jordan", name="Jordan",
            primaryGoals=["serve"], coachingStylePreference="BALANCED",
            preferredDays=["Mon"], location="Austin, TX",
        ),
        make_user(
            "sam", name="Sam", skillLevel="PRO", rating=None,
            primaryGoals=["tournament prep"], location="Dallas",
            lastActiveAt="2026-09-01T12:00:00Z",
        ),
        make_user("riley", name="Riley", skillLevel="BEGINNER", location="Round Rock"),
        make_user("alex", name="Alex", onboardingCompleted=False),
    ]


@pytest.fixture
def sessions() -> list[dict]:
    return [
        {"token": "tok-me", "userId": "me", "expiresAt": "2099-01-01T00:00:00Z"},
        {"token": "tok-jordan", "userId": "jordan", "expiresAt": None},
        {"token": "tok-sam-expired", "userId": "sam", "expiresAt": "2025-01-01T00:00:00Z"},
        {"token": "tok-ghost", "userId": "nobody", "expiresAt": None},
    ]


@pytest.fixture
def repo(users, sessions) -> UserRepository:
    return UserRepository.from_records(users, sessions)


@pytest.fixture
def settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def matchmaker(settings) -> PartnerMatchmaker:
    return PartnerMatchmaker(settings, now=NOW)


@pytest.fixture
def store() -> PartnerRequestStore:
    return PartnerRequestStore()


@pytest.fixture
def client(repo, store, settings, monkeypatch):
    app = backend_main.app
    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_request_store] = lambda: store
    app.dependency_overrides[get_matchmaker] = lambda: PartnerMatchmaker(settings, now=NOW)
    # /health resolves the repository itself, outside Depends
    monkeypatch.setattr(backend_main, "get_repository", lambda: repo)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}
