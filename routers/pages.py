# routers/pages.py

"""
Staff page endpoints. Each one returns the view context for its page and
receives the staff user the route guard resolved for the request.
"""

from typing import Optional
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse, RedirectResponse

from core.errors import extract_supabase_error
from core.logging_config import logger
from core.permission_helpers import (
    can_edit_medical_records,
    can_manage_injury_evolutions,
    requires_permission,
)
from core.supabase_client import get_supabase_client
from dependencies.auth import STAFF_LOGIN_PATH, StaffUser, get_current_user, require_staff_user
from models.enums import Capability
from models.medical_record import MedicalRecordPayload
from routers.auth import build_staff_profile


router = APIRouter(tags=["Pages"])


def _client_or_500():
    client = get_supabase_client()
    if not client:
        raise HTTPException(500, "Supabase client not configured")
    return client


# ============================================================
# ENTRY
# ============================================================
@router.get("/", include_in_schema=False)
def root():
    return RedirectResponse(STAFF_LOGIN_PATH)


@router.get("/login", summary="Staff login view")
def login_page():
    return {"page": "login", "fields": ["email", "password"], "action": "/auth/login"}


@router.get("/dashboard", summary="Staff dashboard view")
def dashboard(user: StaffUser = Depends(require_staff_user)):
    return {"page": "dashboard", "user": build_staff_profile(user)}


@router.get("/manager", summary="Manager panel view")
def manager_panel(
    user: StaffUser = Depends(requires_permission(Capability.access_manager_panel)),
):
    return {"page": "manager", "user": build_staff_profile(user)}


# ============================================================
# MEDICAL RECORDS
# ============================================================
@router.get("/player/{player_id}/medical-record", summary="Player medical record view")
def medical_record_page(
    player_id: str,
    user: StaffUser = Depends(requires_permission(Capability.view_medical_records)),
):
    client = _client_or_500()

    try:
        result = (
            client.table("medical_records")
            .select("*")
            .eq("player_id", player_id)
            .limit(1)
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to load medical record for {player_id}: {extract_supabase_error(e)}")
        raise HTTPException(500, "Failed to load medical record")

    return {
        "page": "medical-record",
        "player_id": player_id,
        "record": (result.data or [None])[0],
        "can_edit": can_edit_medical_records(user.role),
    }


@router.post("/api/medical-records/{player_id}", summary="Create or update a medical record")
def save_medical_record(
    player_id: str,
    payload: MedicalRecordPayload,
    user: Optional[StaffUser] = Depends(get_current_user),
):
    if user is None or not can_edit_medical_records(user.role):
        return JSONResponse(status_code=403, content={"error": "No autorizado"})

    record = {
        **payload.model_dump(),
        "player_id": player_id,
        "updated_by": user.id,
    }

    try:
        client = _client_or_500()
        existing = (
            client.table("medical_records")
            .select("id")
            .eq("player_id", player_id)
            .limit(1)
            .execute()
        )
        if existing.data:
            result = client.table("medical_records").update(record).eq("player_id", player_id).execute()
        else:
            result = client.table("medical_records").insert(record).execute()
    except Exception as e:
        detail = e.detail if isinstance(e, HTTPException) else extract_supabase_error(e)
        logger.error(f"Error saving medical record for {player_id}: {detail}")
        return JSONResponse(status_code=500, content={"error": "Error al guardar la ficha médica"})

    return (result.data or [record])[0]


# ============================================================
# INJURED PLAYERS
# ============================================================
@router.get("/injured-players", summary="Active injuries view")
def injured_players(
    user: StaffUser = Depends(requires_permission(Capability.view_injured_players)),
):
    client = _client_or_500()

    try:
        result = (
            client.table("injuries")
            .select("*, players:player_id (name, division, position, is_injured, dominant_foot)")
            .eq("is_discharged", False)
            .order("injury_date", desc=True)
            .execute()
        )
    except Exception as e:
        logger.error(f"Failed to load active injuries: {extract_supabase_error(e)}")
        raise HTTPException(500, "Failed to load injuries")

    # Only players still flagged as injured
    injuries = [
        row for row in (result.data or [])
        if (row.get("players") or {}).get("is_injured") is True
    ]

    return {
        "page": "injured-players",
        "injuries": injuries,
        "can_manage_evolutions": can_manage_injury_evolutions(user.role),
    }
