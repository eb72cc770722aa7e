"""
backend/auth.py
───────────────
Session-token authentication for the partner routes.

The token is read from the session cookie (settings.session_cookie_name)
or from an `Authorization: Bearer <token>` header, then resolved through
the user repository. Anything that does not lead to a known user is 401.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from backend.dependencies import get_app_settings, get_repository
from config.settings import Settings
from models.repository import UserRepository

ADMIN_ROLE = "ADMIN"


def _extract_token(request: Request, cookie_name: str) -> Optional[str]:
    token = request.cookies.get(cookie_name)
    if token:
        return token
    header = request.headers.get("authorization", "")
    scheme, _, credentials = header.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None


def get_current_user(
    request: Request,
    repo: UserRepository = Depends(get_repository),
    settings: Settings = Depends(get_app_settings),
) -> dict:
    token = _extract_token(request, settings.session_cookie_name)
    user_id = repo.resolve_session(token)
    user = repo.get_user(user_id) if user_id else None
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return user


def require_admin(user: dict = Depends(get_current_user)) -> dict:
    if str(user.get("role") or "").upper() != ADMIN_ROLE:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin access required")
    return user
