# tests/test_permissions.py

"""
Tests for the role → capability table and permission checks.
"""

import pytest

from core.permissions import ROLE_PERMISSIONS
from core.permission_helpers import (
    can_create_report,
    can_edit_area,
    can_edit_medical_records,
    can_view_medical_records,
    can_view_psychosocial_data,
    capabilities_for,
    has_permission,
)
from core.roles import get_role_label
from models.enums import Area, Capability, Role


@pytest.mark.parametrize("role", ["", "guest", "super_admin", "MEDICO", None, "jugador"])
def test_unknown_roles_have_no_capabilities(role):
    for capability in Capability:
        assert has_permission(role, capability) is False
    assert capabilities_for(role) == []


def test_every_role_has_an_explicit_non_empty_set():
    assert set(ROLE_PERMISSIONS) == set(Role)
    for role, capabilities in ROLE_PERMISSIONS.items():
        assert capabilities, role


_COACH = {
    "view_reports", "view_all_data", "view_all_areas", "view_indices", "manage_matches",
    "manage_trainings", "create_technical_report", "edit_training_area", "view_injured_players",
}
_PHYSIO = {
    "create_physio_report", "edit_physio_area", "view_reports", "view_all_areas", "view_indices",
    "view_injured_players", "manage_injury_evolutions",
}

# Literal copy of the club's role table, independent of core/permissions.py
EXPECTED_CAPABILITIES = {
    "dirigente": {
        "manage_players", "manage_tactics", "manage_matches", "manage_trainings", "view_all_data",
        "view_reports", "view_all_areas", "view_indices", "create_medical_report", "create_psych_report",
        "create_nutrition_report", "create_physio_report", "create_technical_report",
        "create_psicosocial_report", "create_dental_report", "edit_medical_area", "edit_psych_area",
        "edit_nutrition_area", "edit_physio_area", "edit_training_area", "edit_goalkeepers_area",
        "edit_psicosocial_area", "edit_dental_area", "access_manager_panel", "edit_player_physical_data",
        "view_medical_records", "edit_medical_records", "view_injured_players", "manage_injury_evolutions",
    },
    "entrenador": _COACH,
    "entrenador_arqueros": _COACH | {"edit_goalkeepers_area"},
    "medico": {
        "create_medical_report", "edit_medical_area", "view_reports", "view_all_areas", "view_indices",
        "view_medical_records", "edit_medical_records", "view_injured_players", "manage_injury_evolutions",
    },
    "psicologo": {
        "create_psych_report", "edit_psych_area", "view_reports", "view_all_areas", "view_indices",
        "view_injured_players",
    },
    "nutricionista": {
        "create_nutrition_report", "edit_nutrition_area", "view_reports", "view_all_areas", "view_indices",
        "edit_player_physical_data", "view_injured_players",
    },
    "fisioterapeuta": _PHYSIO,
    "kinesiologo": _PHYSIO,
    "psicosocial": {
        "create_psicosocial_report", "edit_psicosocial_area", "view_reports", "view_all_areas",
        "view_indices", "view_injured_players",
    },
    "odontologo": {
        "create_dental_report", "edit_dental_area", "view_reports", "view_all_areas", "view_indices",
        "view_injured_players", "view_medical_records",
    },
    "videoanalisis": {
        "create_videoanalysis_report", "edit_videoanalysis_area", "view_reports", "view_all_areas",
        "view_indices", "view_injured_players",
    },
    "captacion": {"view_reports", "view_all_data", "view_all_areas", "view_indices"},
    "administrador": {
        "manage_players", "view_all_data", "view_reports", "manage_tactics", "access_manager_panel",
    },
}


def test_expected_table_covers_every_role():
    assert set(EXPECTED_CAPABILITIES) == {role.value for role in Role}


@pytest.mark.parametrize("role", sorted(EXPECTED_CAPABILITIES))
def test_role_capabilities_match_written_table(role):
    expected = EXPECTED_CAPABILITIES[role]
    assert capabilities_for(role) == sorted(expected)
    for capability in Capability:
        assert has_permission(role, capability.value) is (capability.value in expected)


def test_has_permission_matches_table():
    for role in Role:
        for capability in Capability:
            expected = capability in ROLE_PERMISSIONS[role]
            assert has_permission(role, capability) is expected
            # Raw metadata strings behave the same as enum members
            assert has_permission(role.value, capability.value) is expected


def test_role_table_is_read_only():
    with pytest.raises(TypeError):
        ROLE_PERMISSIONS[Role.medico] = frozenset()


def test_unknown_capability_is_denied():
    assert has_permission("dirigente", "delete_club") is False


def test_clinical_access_by_role():
    assert can_edit_medical_records("medico")
    assert can_view_medical_records("odontologo")
    assert not can_edit_medical_records("odontologo")
    assert not can_view_medical_records("administrador")
    assert not can_view_medical_records("entrenador")


def test_administrador_limited_to_roster_and_manager_panel():
    assert has_permission("administrador", Capability.access_manager_panel)
    assert has_permission("administrador", Capability.manage_players)
    assert not has_permission("administrador", Capability.view_all_areas)
    assert not can_view_psychosocial_data("administrador")


def test_can_create_report():
    assert can_create_report("dirigente", "medico")
    assert can_create_report("medico", "medico")
    assert not can_create_report("medico", "psicologo")
    assert not can_create_report("administrador", "administrador")
    assert not can_create_report("guest", "guest")


def test_can_edit_area():
    assert can_edit_area("medico", Area.medica)
    assert not can_edit_area("medico", "psicologica")
    assert can_edit_area("entrenador_arqueros", "arqueros")
    assert not can_edit_area("entrenador", "arqueros")
    assert not can_edit_area("medico", "cocina")
    assert can_edit_area("dirigente", "videoanalisis")
    assert not can_edit_area("administrador", "medica")


def test_role_labels():
    assert get_role_label("medico") == "Médico"
    assert get_role_label(Role.dirigente) == "Dirigente"
    assert get_role_label("otro") == "otro"
