from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# STAFF ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Staff role, stored in Supabase user_metadata["role"]."""

    dirigente = "dirigente"                        # club executive
    entrenador = "entrenador"                      # coach
    entrenador_arqueros = "entrenador_arqueros"    # goalkeeping coach
    medico = "medico"                              # physician
    psicologo = "psicologo"
    nutricionista = "nutricionista"
    fisioterapeuta = "fisioterapeuta"
    kinesiologo = "kinesiologo"
    psicosocial = "psicosocial"
    odontologo = "odontologo"
    videoanalisis = "videoanalisis"
    captacion = "captacion"                        # scouting
    administrador = "administrador"


# -----------------------------------------------------
# CAPABILITY
# -----------------------------------------------------
class Capability(BaseStrEnum):
    """Protected action checked before privileged reads/writes."""

    manage_players = "manage_players"
    manage_tactics = "manage_tactics"
    manage_matches = "manage_matches"
    manage_trainings = "manage_trainings"
    view_all_data = "view_all_data"
    view_reports = "view_reports"
    view_all_areas = "view_all_areas"
    view_indices = "view_indices"

    # Reports
    create_medical_report = "create_medical_report"
    create_psych_report = "create_psych_report"
    create_nutrition_report = "create_nutrition_report"
    create_physio_report = "create_physio_report"
    create_technical_report = "create_technical_report"
    create_psicosocial_report = "create_psicosocial_report"
    create_dental_report = "create_dental_report"
    create_videoanalysis_report = "create_videoanalysis_report"

    # Areas
    edit_medical_area = "edit_medical_area"
    edit_psych_area = "edit_psych_area"
    edit_nutrition_area = "edit_nutrition_area"
    edit_physio_area = "edit_physio_area"
    edit_training_area = "edit_training_area"
    edit_goalkeepers_area = "edit_goalkeepers_area"
    edit_psicosocial_area = "edit_psicosocial_area"
    edit_dental_area = "edit_dental_area"
    edit_videoanalysis_area = "edit_videoanalysis_area"

    access_manager_panel = "access_manager_panel"
    edit_player_physical_data = "edit_player_physical_data"

    # Medical records & injuries
    view_medical_records = "view_medical_records"
    edit_medical_records = "edit_medical_records"
    view_injured_players = "view_injured_players"
    manage_injury_evolutions = "manage_injury_evolutions"


# -----------------------------------------------------
# AREA (staff working areas on the player profile)
# -----------------------------------------------------
class Area(BaseStrEnum):
    medica = "medica"
    psicologica = "psicologica"
    nutricional = "nutricional"
    entrenamiento = "entrenamiento"
    fisioterapia = "fisioterapia"
    arqueros = "arqueros"
    psicosocial = "psicosocial"
    odontologia = "odontologia"
    videoanalisis = "videoanalisis"
