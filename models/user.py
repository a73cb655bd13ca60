# models/user.py

from typing import List, Optional
from pydantic import BaseModel


class StaffProfile(BaseModel):
    """
    What the frontend needs to render navigation for a staff user:
    identity, role label and the capabilities the role grants.
    """
    id: str
    email: str
    name: str
    role: str
    role_label: str
    photo: Optional[str] = None
    capabilities: List[str] = []
