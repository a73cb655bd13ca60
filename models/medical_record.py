# models/medical_record.py

from pydantic import BaseModel, ConfigDict


class MedicalRecordPayload(BaseModel):
    """
    Medical record form body. Columns are owned by the database schema,
    so unknown keys pass through untouched.
    """
    model_config = ConfigDict(extra="allow")
