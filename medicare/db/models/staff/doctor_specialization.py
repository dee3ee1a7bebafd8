# medicare/db/models/staff/doctor_specialization.py
from sqlmodel import SQLModel, Field

class DoctorSpecialization(SQLModel, table=True):
    __tablename__ = "doctor_specializations"
    doctor_id: int = Field(foreign_key="doctors.id", primary_key=True)
    specialization_id: int = Field(foreign_key="specializations.id", primary_key=True)
