from typing import Optional
from fastapi import Depends, Request
from pydantic import BaseModel, ValidationError

from core.config import settings
from core.errors import RedirectRequired, extract_supabase_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client


STAFF_LOGIN_PATH = "/login"


# ============================================================
# Staff User Model (identity resolved from Supabase Auth)
# ============================================================
class StaffUser(BaseModel):
    id: str
    email: str
    name: str = "Usuario"
    role: str = ""                  # raw metadata value; unknown roles get no capabilities
    photo: Optional[str] = None


# ============================================================
# TOKEN EXTRACTION (Bearer header, then session cookie)
# ============================================================
def extract_staff_token(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        token = auth_header[len("Bearer "):].strip()
        if token:
            return token

    return request.cookies.get(settings.STAFF_SESSION_COOKIE) or None


def _metadata_text(metadata: dict, *keys: str) -> Optional[str]:
    # user_metadata is writable by the user; anything but a non-empty string is ignored
    for key in keys:
        value = metadata.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def staff_user_from_auth_user(auth_user) -> Optional[StaffUser]:
    """
    Maps a GoTrue user onto the local StaffUser shape.
    """
    if not auth_user or not getattr(auth_user, "email", None):
        return None

    metadata = auth_user.user_metadata or {}
    if not isinstance(metadata, dict):
        metadata = {}

    return StaffUser(
        id=str(auth_user.id),
        email=auth_user.email,
        name=_metadata_text(metadata, "name", "full_name") or "Usuario",
        role=_metadata_text(metadata, "role") or "",
        photo=_metadata_text(metadata, "photo", "avatar_url"),
    )


# ============================================================
# SESSION RESOLUTION (Supabase: validates JWT + reads metadata)
# ============================================================
def resolve_staff_user(token: Optional[str]) -> Optional[StaffUser]:
    """
    Returns the staff identity behind `token`, or None.

    "Not logged in" and provider failures both come back as None;
    nothing here raises.
    """
    if not token:
        return None

    client = get_supabase_client()
    if client is None:
        logger.error("Supabase client not configured, treating request as anonymous")
        return None

    try:
        auth_resp = client.auth.get_user(token)
    except Exception as e:
        logger.warning(f"Staff session lookup failed: {extract_supabase_error(e)}")
        return None

    if not auth_resp or not getattr(auth_resp, "user", None):
        return None

    try:
        return staff_user_from_auth_user(auth_resp.user)
    except ValidationError as e:
        logger.warning(f"Unusable staff identity from Supabase: {e.error_count()} invalid field(s)")
        return None


# ============================================================
# REQUEST-SCOPED CURRENT USER
# ============================================================
def get_current_user(request: Request) -> Optional[StaffUser]:
    """
    Identity for this request. The route guard usually resolved it already
    and left it on request.state; otherwise it is resolved here, once.
    """
    if getattr(request.state, "staff_resolved", False):
        return request.state.staff_user

    user = resolve_staff_user(extract_staff_token(request))
    request.state.staff_user = user
    request.state.staff_resolved = True
    return user


def require_staff_user(
    user: Optional[StaffUser] = Depends(get_current_user),
) -> StaffUser:
    if user is None:
        raise RedirectRequired(STAFF_LOGIN_PATH)
    return user
