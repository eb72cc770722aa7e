"""
backend/dependencies.py
───────────────────────
Process-wide singletons handed to routes through FastAPI Depends.
Tests swap them out with app.dependency_overrides.
"""

from functools import lru_cache

from config.settings import Settings, get_settings
from models.matchmaker import PartnerMatchmaker
from models.partner_requests import PartnerRequestStore
from models.repository import UserRepository
from utils.logger import logger


@lru_cache(maxsize=1)
def _get_repository() -> UserRepository:
    logger.info("Loading user repository …")
    repo = UserRepository.from_data_files()
    logger.info(f"User repository ready — {len(repo)} users, {repo.count_onboarded()} onboarded")
    return repo


@lru_cache(maxsize=1)
def _get_request_store() -> PartnerRequestStore:
    return PartnerRequestStore()


def get_repository() -> UserRepository:
    return _get_repository()


def get_request_store() -> PartnerRequestStore:
    return _get_request_store()


def get_app_settings() -> Settings:
    return get_settings()


def get_matchmaker() -> PartnerMatchmaker:
    # fresh per request so the distance placeholder sequence restarts from its seed
    return PartnerMatchmaker(get_app_settings())
