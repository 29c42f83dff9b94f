# Routers package
from . import auth_router
from . import profile_router
from . import doctors_router
from . import appointments_router
from . import consultations_router
from . import lab_reports_router
from . import dashboard_router

__all__ = [
    "auth_router",
    "profile_router",
    "doctors_router",
    "appointments_router",
    "consultations_router",
    "lab_reports_router",
    "dashboard_router",
]
