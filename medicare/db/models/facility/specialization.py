# medicare/db/models/facility/specialization.py
from typing import Optional, List
from sqlmodel import SQLModel, Field, Relationship

from .specialization_room import SpecializationRoom
from ..staff.doctor_specialization import DoctorSpecialization

class Specialization(SQLModel, table=True):
    __tablename__ = "specializations"
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=255, unique=True)
    description: str = ""
    highlight: Optional[str] = None
    link: Optional[str] = None

    # Relationships
    doctors: List["Doctor"] = Relationship(
        back_populates="specializations", link_model=DoctorSpecialization
    )
    rooms: List["Room"] = Relationship(
        back_populates="specializations", link_model=SpecializationRoom
    )
