# services/player_profile.py

import re
from datetime import date
from typing import Dict, Optional, Tuple

from models.portal import PortalProfileUpdate


MAX_LENGTHS = {
    "document": (20, "El documento es demasiado largo."),
    "province": (100, "La provincia excede el límite de caracteres."),
    "address": (150, "La dirección excede el límite de caracteres."),
    "nationality": (50, "La nacionalidad excede el límite de caracteres."),
    "emergency_contact_name": (100, "El nombre de contacto de emergencia es demasiado largo."),
    "medical_insurance": (100, "La obra social excede el límite de caracteres."),
}

PHONE_FIELDS = {
    "phone": "Personal",
    "emergency_contact_phone": "Emergencia",
}

_PHONE_PATTERN = re.compile(r"^[0-9+\-\s()]*$")

INVALID_BIRTH_DATE = "La fecha de nacimiento no es válida."
FUTURE_BIRTH_DATE = "La fecha de nacimiento no puede ser futura."


def _validate_phone(value: str, label: str) -> Optional[str]:
    if not _PHONE_PATTERN.match(value):
        return f"El formato del teléfono ({label}) no es válido."
    if len(value) < 6 or len(value) > 25:
        return f"El teléfono ({label}) debe tener entre 6 y 25 caracteres."
    return None


def _validate_birth_date(value: str, today: date) -> Optional[str]:
    try:
        born = date.fromisoformat(value[:10])
    except ValueError:
        return INVALID_BIRTH_DATE

    if born > today:
        return FUTURE_BIRTH_DATE

    try:
        oldest = today.replace(year=today.year - 100)
    except ValueError:
        # Feb 29 → Feb 28
        oldest = today.replace(year=today.year - 100, day=28)
    if born < oldest:
        return INVALID_BIRTH_DATE

    return None


def build_profile_update(
    payload: PortalProfileUpdate,
    today: Optional[date] = None,
) -> Tuple[Optional[str], Dict[str, str]]:
    """
    Trims and validates a self-service profile edit.
    Returns (error_message, columns_to_update); blank fields are left alone.
    """
    today = today or date.today()
    values = {
        field: (raw or "").strip()
        for field, raw in payload.model_dump().items()
    }

    for field, (limit, message) in MAX_LENGTHS.items():
        if len(values[field]) > limit:
            return message, {}

    for field, label in PHONE_FIELDS.items():
        if values[field]:
            error = _validate_phone(values[field], label)
            if error:
                return error, {}

    if values["birth_date"]:
        error = _validate_birth_date(values["birth_date"], today)
        if error:
            return error, {}

    return None, {field: value for field, value in values.items() if value}
