# -------------------------
# Enums
# -------------------------
from .enums import (
    Area,
    Capability,
    Role,
)

# -------------------------
# Staff Auth Models
# -------------------------
from .auth import LoginRequest, TokenResponse
from .user import StaffProfile

# -------------------------
# Player Portal Models
# -------------------------
from .portal import LastSeenRequest, PortalProfileUpdate

# -------------------------
# Medical Records
# -------------------------
from .medical_record import MedicalRecordPayload

__all__ = [
    # enums
    "Area",
    "Capability",
    "Role",

    # staff auth
    "LoginRequest",
    "TokenResponse",
    "StaffProfile",

    # portal
    "LastSeenRequest",
    "PortalProfileUpdate",

    # medical records
    "MedicalRecordPayload",
]
