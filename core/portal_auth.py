# core/portal_auth.py

"""
Player portal sessions.

Players are not Supabase Auth users. After a successful name/password match
the API issues its own HS256 token and keeps it in the `player_session`
cookie. The token is the whole session: there is no server-side store, so
verification has no side effects and logout is just deleting the cookie.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response
from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.config import settings
from core.errors import RedirectRequired
from core.logging_config import logger


ALGORITHM = "HS256"
PORTAL_LOGIN_PATH = "/portal/login"
PORTAL_DASHBOARD_PATH = "/portal/dashboard"


class PlayerSession(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    player_id: str = Field(alias="playerId")
    name: str
    division: str = ""


def session_max_age() -> int:
    return settings.PLAYER_SESSION_DAYS * 24 * 60 * 60


# ============================================================
# TOKEN ENCODE / DECODE
# ============================================================
def encode_player_token(session: PlayerSession, issued_at: Optional[datetime] = None) -> str:
    issued_at = issued_at or datetime.now(timezone.utc)

    claims = session.model_dump(by_alias=True)
    claims["iat"] = issued_at
    claims["exp"] = issued_at + timedelta(days=settings.PLAYER_SESSION_DAYS)

    return jwt.encode(claims, settings.PLAYER_PORTAL_SECRET, algorithm=ALGORITHM)


def decode_player_token(token: Optional[str]) -> Optional[PlayerSession]:
    """
    Returns the session inside `token`, or None if it is missing, malformed,
    tampered with or expired.
    """
    if not token:
        return None

    try:
        payload = jwt.decode(token, settings.PLAYER_PORTAL_SECRET, algorithms=[ALGORITHM])
        return PlayerSession.model_validate(payload)
    except (JWTError, ValidationError) as e:
        logger.info(f"Rejected player session token: {type(e).__name__}")
        return None


# ============================================================
# COOKIE HANDLING
# ============================================================
def create_player_session(response: Response, session: PlayerSession) -> str:
    token = encode_player_token(session)

    response.set_cookie(
        key=settings.PLAYER_SESSION_COOKIE,
        value=token,
        max_age=session_max_age(),
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return token


def get_player_session(request: Request) -> Optional[PlayerSession]:
    return decode_player_token(request.cookies.get(settings.PLAYER_SESSION_COOKIE))


def require_player_session(request: Request) -> PlayerSession:
    """
    FastAPI dependency. Without a valid session the request is redirected to
    the portal login and the handler never runs.
    """
    session = getattr(request.state, "player_session", None) or get_player_session(request)
    if session is None:
        raise RedirectRequired(PORTAL_LOGIN_PATH)
    return session


def logout_player(response: Response):
    response.delete_cookie(
        key=settings.PLAYER_SESSION_COOKIE,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
