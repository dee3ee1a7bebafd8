# medicare/db/models/facility/specialization_room.py
from sqlmodel import SQLModel, Field

class SpecializationRoom(SQLModel, table=True):
    """Rooms eligible for visits of a specialization."""
    __tablename__ = "specialization_rooms"
    specialization_id: int = Field(foreign_key="specializations.id", primary_key=True)
    room_id: int = Field(foreign_key="rooms.id", primary_key=True)
