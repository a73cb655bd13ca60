# routers/portal.py

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import JSONResponse, RedirectResponse

from core.config import settings
from core.errors import PortalLoginError, extract_supabase_error
from core.logging_config import logger
from core.portal_auth import (
    PORTAL_DASHBOARD_PATH,
    PORTAL_LOGIN_PATH,
    PlayerSession,
    create_player_session,
    logout_player,
    require_player_session,
)
from core.rate_limiter import require_rate_limit
from core.supabase_client import get_supabase_client
from models.portal import LastSeenRequest, PortalProfileUpdate
from services.player_profile import build_profile_update
from services.portal_login import authenticate_player, touch_last_seen


router = APIRouter(
    prefix="/portal",
    tags=["Player Portal"],
)


LOGIN_ERROR_STATUS = {
    "invalid": 400,
    "wrong_password": 401,
    "not_found": 404,
    "ambiguous": 409,
    "unavailable": 503,
}

PROFILE_SAVE_ERROR = "Ocurrió un error al guardar los cambios."


# ============================================================
# LOGIN
# ============================================================
@router.get("/login", summary="Portal login view")
def login_page():
    return {"page": "portal-login", "fields": ["name", "password"]}


@router.post("/login", summary="Log a player into the portal")
def login_player(
    request: Request,
    name: str = Form(""),
    password: str = Form(""),
):
    require_rate_limit(
        request,
        scope="portal-login",
        max_requests=settings.LOGIN_MAX_ATTEMPTS,
        window_seconds=settings.LOGIN_WINDOW_SECONDS,
    )

    try:
        session = authenticate_player(name, password)
    except PortalLoginError as e:
        return JSONResponse(
            status_code=LOGIN_ERROR_STATUS.get(e.kind, 400),
            content={"error": e.message},
        )

    touch_last_seen(session.player_id)
    logger.info(f"Portal login: player {session.player_id} ({session.division})")

    response = RedirectResponse(PORTAL_DASHBOARD_PATH, status_code=303)
    create_player_session(response, session)
    return response


@router.post("/logout", summary="End the portal session")
def logout():
    response = RedirectResponse(PORTAL_LOGIN_PATH, status_code=303)
    logout_player(response)
    return response


# ============================================================
# DASHBOARD
# ============================================================
@router.get("/dashboard", summary="Portal dashboard view")
def dashboard(session: PlayerSession = Depends(require_player_session)):
    player = None

    client = get_supabase_client()
    if client:
        try:
            result = (
                client.table("players")
                .select("*")
                .eq("id", session.player_id)
                .limit(1)
                .execute()
            )
            player = (result.data or [None])[0]
        except Exception as e:
            logger.error(f"Failed to load portal player {session.player_id}: {extract_supabase_error(e)}")

    return {
        "session": session.model_dump(by_alias=True),
        "player": player,
    }


# ============================================================
# SELF-SERVICE PROFILE
# ============================================================
@router.patch("/profile", summary="Update the player's own personal data")
def update_profile(
    payload: PortalProfileUpdate,
    session: PlayerSession = Depends(require_player_session),
):
    error, update_data = build_profile_update(payload)
    if error:
        return JSONResponse(status_code=400, content={"error": error})

    # Nothing editable was sent
    if not update_data:
        return {"success": True}

    client = get_supabase_client()
    if not client:
        return JSONResponse(status_code=500, content={"error": PROFILE_SAVE_ERROR})

    try:
        client.table("players").update(update_data).eq("id", session.player_id).execute()
    except Exception as e:
        logger.error(f"Error updating portal profile for {session.player_id}: {extract_supabase_error(e)}")
        return JSONResponse(status_code=500, content={"error": PROFILE_SAVE_ERROR})

    return {"success": True}


# ============================================================
# PRESENCE
# ============================================================
@router.post("/status", summary="Mark the logged-in player as seen")
def update_last_seen(
    payload: LastSeenRequest,
    session: PlayerSession = Depends(require_player_session),
):
    if payload.player_id != session.player_id:
        return JSONResponse(status_code=403, content={"success": False, "error": "Unauthorized"})

    if not touch_last_seen(session.player_id):
        return JSONResponse(status_code=500, content={"success": False, "error": "Could not update last seen"})

    return {"success": True}
