# ============================================
# CENTRALIZED ROLE → CAPABILITIES MAP
# ============================================
from types import MappingProxyType

from models.enums import Capability as C, Role


_ROLE_PERMISSIONS = {

    # =====================================================
    # DIRIGENTE: club executive, everything but video analysis
    # =====================================================
    Role.dirigente: [
        C.manage_players, C.manage_tactics, C.manage_matches, C.manage_trainings,
        C.view_all_data, C.view_reports, C.view_all_areas, C.view_indices,

        C.create_medical_report, C.create_psych_report, C.create_nutrition_report,
        C.create_physio_report, C.create_technical_report,
        C.create_psicosocial_report, C.create_dental_report,

        C.edit_medical_area, C.edit_psych_area, C.edit_nutrition_area,
        C.edit_physio_area, C.edit_training_area, C.edit_goalkeepers_area,
        C.edit_psicosocial_area, C.edit_dental_area,

        C.access_manager_panel,
        C.edit_player_physical_data,
        C.view_medical_records, C.edit_medical_records,
        C.view_injured_players, C.manage_injury_evolutions,
    ],

    # =====================================================
    # ENTRENADOR: coach
    # =====================================================
    Role.entrenador: [
        C.view_reports, C.view_all_data, C.view_all_areas, C.view_indices,
        C.manage_matches, C.manage_trainings,
        C.create_technical_report, C.edit_training_area,
        C.view_injured_players,
    ],

    # =====================================================
    # ENTRENADOR DE ARQUEROS: coach + goalkeepers area
    # =====================================================
    Role.entrenador_arqueros: [
        C.view_reports, C.view_all_data, C.view_all_areas, C.view_indices,
        C.manage_matches, C.manage_trainings,
        C.create_technical_report, C.edit_training_area, C.edit_goalkeepers_area,
        C.view_injured_players,
    ],

    # =====================================================
    # MEDICO: only role besides dirigente editing medical records
    # =====================================================
    Role.medico: [
        C.create_medical_report, C.edit_medical_area,
        C.view_reports, C.view_all_areas, C.view_indices,
        C.view_medical_records, C.edit_medical_records,
        C.view_injured_players, C.manage_injury_evolutions,
    ],

    # =====================================================
    # PSICOLOGO
    # =====================================================
    Role.psicologo: [
        C.create_psych_report, C.edit_psych_area,
        C.view_reports, C.view_all_areas, C.view_indices,
        C.view_injured_players,
    ],

    # =====================================================
    # NUTRICIONISTA: may edit height/weight
    # =====================================================
    Role.nutricionista: [
        C.create_nutrition_report, C.edit_nutrition_area,
        C.view_reports, C.view_all_areas, C.view_indices,
        C.edit_player_physical_data,
        C.view_injured_players,
    ],

    # =====================================================
    # FISIOTERAPEUTA / KINESIOLOGO: same physio scope
    # =====================================================
    Role.fisioterapeuta: [
        C.create_physio_report, C.edit_physio_area,
        C.view_reports, C.view_all_areas, C.view_indices,
        C.view_injured_players, C.manage_injury_evolutions,
    ],
    Role.kinesiologo: [
        C.create_physio_report, C.edit_physio_area,
        C.view_reports, C.view_all_areas, C.view_indices,
        C.view_injured_players, C.manage_injury_evolutions,
    ],

    # =====================================================
    # PSICOSOCIAL
    # =====================================================
    Role.psicosocial: [
        C.create_psicosocial_report, C.edit_psicosocial_area,
        C.view_reports, C.view_all_areas, C.view_indices,
        C.view_injured_players,
    ],

    # =====================================================
    # ODONTOLOGO: reads medical records, never edits them
    # =====================================================
    Role.odontologo: [
        C.create_dental_report, C.edit_dental_area,
        C.view_reports, C.view_all_areas, C.view_indices,
        C.view_injured_players, C.view_medical_records,
    ],

    # =====================================================
    # VIDEOANALISIS
    # =====================================================
    Role.videoanalisis: [
        C.create_videoanalysis_report, C.edit_videoanalysis_area,
        C.view_reports, C.view_all_areas, C.view_indices,
        C.view_injured_players,
    ],

    # =====================================================
    # CAPTACION: scouting, read-only
    # =====================================================
    Role.captacion: [
        C.view_reports, C.view_all_data, C.view_all_areas, C.view_indices,
    ],

    # =====================================================
    # ADMINISTRADOR: roster & manager panel, no clinical data
    # =====================================================
    Role.administrador: [
        C.manage_players, C.view_all_data, C.view_reports,
        C.manage_tactics, C.access_manager_panel,
    ],
}


def _freeze(table: dict) -> MappingProxyType:
    missing = [role.value for role in Role if not table.get(role)]
    if missing:
        raise RuntimeError(f"Roles without capabilities: {', '.join(missing)}")
    return MappingProxyType({role: frozenset(caps) for role, caps in table.items()})


ROLE_PERMISSIONS = _freeze(_ROLE_PERMISSIONS)
