from .scheduling_service import SchedulingService, VisitEdit, VisitTime, generate_slots

__all__ = ["SchedulingService", "VisitEdit", "VisitTime", "generate_slots"]
