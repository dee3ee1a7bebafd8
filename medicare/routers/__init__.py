# Routers package
from . import visits_router
from . import doctors_router

__all__ = [
    "visits_router",
    "doctors_router",
]
