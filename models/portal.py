# models/portal.py

from typing import Optional
from pydantic import BaseModel


class PortalProfileUpdate(BaseModel):
    """
    Fields a player may edit on their own profile.
    Height/weight are owned by the nutrition staff and are not here.
    """
    document: Optional[str] = None
    birth_date: Optional[str] = None
    province: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    nationality: Optional[str] = None
    emergency_contact_name: Optional[str] = None
    emergency_contact_phone: Optional[str] = None
    medical_insurance: Optional[str] = None


class LastSeenRequest(BaseModel):
    player_id: str
