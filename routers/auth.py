from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request, Response
from fastapi.responses import RedirectResponse

from core.config import settings
from core.errors import extract_supabase_error
from core.logging_config import logger
from core.permission_helpers import capabilities_for
from core.rate_limiter import require_rate_limit
from core.roles import get_role_label
from core.supabase_client import get_supabase_client
from dependencies.auth import STAFF_LOGIN_PATH, StaffUser, extract_staff_token, get_current_user
from models.auth import LoginRequest, TokenResponse
from models.user import StaffProfile


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


def set_staff_cookie(response: Response, token: str, max_age: int):
    response.set_cookie(
        key=settings.STAFF_SESSION_COOKIE,
        value=token,
        max_age=max_age,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate staff user")
def login(payload: LoginRequest, request: Request, response: Response):

    require_rate_limit(
        request,
        scope="staff-login",
        max_requests=settings.LOGIN_MAX_ATTEMPTS,
        window_seconds=settings.LOGIN_WINDOW_SECONDS,
    )

    email = payload.email.strip().lower()

    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")

    try:
        auth_resp = client.auth.sign_in_with_password(
            {"email": email, "password": payload.password}
        )
    except Exception as e:
        # Details stay in the log, never in the response
        logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
        raise HTTPException(status_code=401, detail="Invalid email or password")

    session = getattr(auth_resp, "session", None)
    if not session or not session.access_token:
        raise HTTPException(401, "Invalid email or password")

    expires_in = getattr(session, "expires_in", None) or 3600
    set_staff_cookie(response, session.access_token, expires_in)

    logger.info(f"Staff login: {email}")
    return TokenResponse(access_token=session.access_token, expires_in=expires_in)


# ============================================================
# LOGOUT
# ============================================================
@router.post("/logout", summary="End the staff session")
def logout(request: Request):
    token = extract_staff_token(request)

    client = get_supabase_client()
    if token and client:
        try:
            client.auth.admin.sign_out(token)
        except Exception as e:
            logger.warning(f"Supabase sign-out failed: {extract_supabase_error(e)}")

    response = RedirectResponse(STAFF_LOGIN_PATH, status_code=303)
    response.delete_cookie(
        key=settings.STAFF_SESSION_COOKIE,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )
    return response


# ============================================================
# CURRENT USER
# ============================================================
def build_staff_profile(user: StaffUser) -> StaffProfile:
    return StaffProfile(
        id=user.id,
        email=user.email,
        name=user.name,
        role=user.role,
        role_label=get_role_label(user.role),
        photo=user.photo,
        capabilities=capabilities_for(user.role),
    )


@router.get("/me", response_model=StaffProfile, summary="Current authenticated staff user")
def read_me(current_user: Optional[StaffUser] = Depends(get_current_user)):
    if current_user is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return build_staff_profile(current_user)
