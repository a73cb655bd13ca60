from typing import List, Union
from fastapi import Depends, HTTPException

from core.permissions import ROLE_PERMISSIONS
from core.roles import parse_role
from dependencies.auth import StaffUser, require_staff_user
from models.enums import Area, Capability, Role


RoleLike = Union[Role, str, None]
CapabilityLike = Union[Capability, str]


# -----------------------------------------------------
# Permission evaluation (pure, fail-closed)
# -----------------------------------------------------
def has_permission(role: RoleLike, capability: CapabilityLike) -> bool:
    parsed_role = parse_role(role)
    if parsed_role is None:
        return False

    try:
        parsed_capability = Capability(capability)
    except ValueError:
        return False

    return parsed_capability in ROLE_PERMISSIONS[parsed_role]


def capabilities_for(role: RoleLike) -> List[str]:
    parsed = parse_role(role)
    if parsed is None:
        return []
    return sorted(c.value for c in ROLE_PERMISSIONS[parsed])


# -----------------------------------------------------
# Report / area rules
# -----------------------------------------------------
AREA_CAPABILITIES = {
    Area.medica: Capability.edit_medical_area,
    Area.psicologica: Capability.edit_psych_area,
    Area.nutricional: Capability.edit_nutrition_area,
    Area.entrenamiento: Capability.edit_training_area,
    Area.fisioterapia: Capability.edit_physio_area,
    Area.arqueros: Capability.edit_goalkeepers_area,
    Area.psicosocial: Capability.edit_psicosocial_area,
    Area.odontologia: Capability.edit_dental_area,
    Area.videoanalisis: Capability.edit_videoanalysis_area,
}


def can_create_report(role: RoleLike, report_type: RoleLike) -> bool:
    """
    Reports are typed by the author role. The executive may write any of
    them, the administrator none, everyone else only their own kind.
    """
    parsed = parse_role(role)
    if parsed is None or parsed == Role.administrador:
        return False
    if parsed == Role.dirigente:
        return True
    return parsed == parse_role(report_type)


def can_edit_area(role: RoleLike, area: Union[Area, str]) -> bool:
    parsed = parse_role(role)
    if parsed is None or parsed == Role.administrador:
        return False
    if parsed == Role.dirigente:
        return True

    try:
        required = AREA_CAPABILITIES[Area(area)]
    except ValueError:
        return False
    return has_permission(parsed, required)


def can_view_all_areas(role: RoleLike) -> bool:
    return has_permission(role, Capability.view_all_areas)


def can_view_medical_records(role: RoleLike) -> bool:
    return has_permission(role, Capability.view_medical_records)


def can_edit_medical_records(role: RoleLike) -> bool:
    return has_permission(role, Capability.edit_medical_records)


def can_view_injured_players(role: RoleLike) -> bool:
    return has_permission(role, Capability.view_injured_players)


def can_manage_injury_evolutions(role: RoleLike) -> bool:
    return has_permission(role, Capability.manage_injury_evolutions)


def can_view_psychosocial_data(role: RoleLike) -> bool:
    # No dedicated capability; anyone who sees all areas sees this one
    return has_permission(role, Capability.view_all_areas)


# -----------------------------------------------------
# FastAPI dependency wrapper
# -----------------------------------------------------
def requires_permission(capability: Capability):
    """
    Usage:
        @router.get("/manager")
        def manager(user: StaffUser = Depends(requires_permission(Capability.access_manager_panel))):
    """

    def dependency(current_user: StaffUser = Depends(require_staff_user)) -> StaffUser:
        if not has_permission(current_user.role, capability):
            raise HTTPException(
                status_code=403,
                detail=f"Missing capability: {capability}",
            )
        return current_user

    return dependency
