# medicare/db/models/facility/room.py
from typing import Optional, List
from sqlmodel import SQLModel, Field, Relationship

from .specialization_room import SpecializationRoom

class Room(SQLModel, table=True):
    __tablename__ = "rooms"
    id: Optional[int] = Field(default=None, primary_key=True)
    room_number: int = Field(unique=True, index=True)
    room_type: str = Field(max_length=255)

    # Relationships
    specializations: List["Specialization"] = Relationship(
        back_populates="rooms", link_model=SpecializationRoom
    )
