# core/roles.py

from typing import Union

from models.enums import Role


ROLE_LABELS = {
    Role.medico: "Médico",
    Role.psicologo: "Psicólogo",
    Role.entrenador: "Entrenador",
    Role.entrenador_arqueros: "Entrenador de Arqueros",
    Role.nutricionista: "Nutricionista",
    Role.fisioterapeuta: "Fisioterapeuta",
    Role.kinesiologo: "Kinesiólogo",
    Role.psicosocial: "Psicosocial",
    Role.odontologo: "Odontólogo",
    Role.videoanalisis: "Videoanálisis",
    Role.captacion: "Captación",
    Role.dirigente: "Dirigente",
    Role.administrador: "Administrador",
}


def parse_role(role: Union[Role, str, None]) -> Union[Role, None]:
    """Return the Role for a raw metadata value, or None if it isn't one."""
    if isinstance(role, Role):
        return role
    try:
        return Role(role)
    except ValueError:
        return None


def get_role_label(role: Union[Role, str, None]) -> str:
    parsed = parse_role(role)
    if parsed is None:
        return str(role or "")
    return ROLE_LABELS[parsed]
