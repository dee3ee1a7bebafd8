# medicare/db/models/enums.py
from enum import Enum, IntEnum
from typing import Union


class VisitStatus(str, Enum):
    SCHEDULED = "Scheduled"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (VisitStatus.COMPLETED, VisitStatus.CANCELLED)

    @classmethod
    def parse(cls, value: Union[str, "VisitStatus"]) -> "VisitStatus":
        """Parse a status by name, case-insensitively. Raises ValueError."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value.lower() == value.strip().lower():
                    return member
        raise ValueError(f"{value!r} is not a valid visit status")


class VisitReason(IntEnum):
    CONSULTATION = 1
    FOLLOW_UP = 2
    PRESCRIPTION = 3
    CHECKUP = 4

    @property
    def label(self) -> str:
        return _REASON_LABELS[self]

    @classmethod
    def parse(cls, value: Union[int, str, "VisitReason"]) -> "VisitReason":
        """Parse a reason from its code or its label ("FollowUp"). Raises ValueError."""
        if isinstance(value, bool):
            raise ValueError(f"{value!r} is not a valid visit reason")
        if isinstance(value, int):
            return cls(value)
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                return cls(int(text))
            for member, label in _REASON_LABELS.items():
                if label.lower() == text.lower():
                    return member
        raise ValueError(f"{value!r} is not a valid visit reason")


_REASON_LABELS = {
    VisitReason.CONSULTATION: "Consultation",
    VisitReason.FOLLOW_UP: "FollowUp",
    VisitReason.PRESCRIPTION: "Prescription",
    VisitReason.CHECKUP: "Checkup",
}


class PatientStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
