# medicare/db/models/patients/patient.py
from typing import Optional
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field
from datetime import datetime

from ..enums import PatientStatus
from ..timestamps import utc_now

class Patient(SQLModel, table=True):
    __tablename__ = "patients"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=50)
    surname: str = Field(max_length=50)
    email: Optional[str] = Field(default=None, max_length=255)
    status: str = Field(default=PatientStatus.ACTIVE.value, max_length=20)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
