# medicare/db/models/staff/doctor.py
from typing import Optional, List
from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field, Relationship
from datetime import datetime, time

from .doctor_specialization import DoctorSpecialization
from ..timestamps import utc_now

class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=50)
    surname: str = Field(max_length=50)
    email: str = Field(max_length=255, unique=True)
    phone_number: Optional[str] = Field(default=None, max_length=255)
    # Working hours window [start_hour, end_hour)
    start_hour: time = Field(default=time(8, 0))
    end_hour: time = Field(default=time(16, 0))
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))

    # Relationships
    specializations: List["Specialization"] = Relationship(
        back_populates="doctors", link_model=DoctorSpecialization
    )
