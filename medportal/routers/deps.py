import logging

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from ..database import get_session
from ..domain.roles import SessionContext
from ..application.services.auth_service import AuthService
from ..application.services.appointments_service import AppointmentsService
from ..application.services.consultations_service import ConsultationsService
from ..application.services.dashboard_service import DashboardService
from ..application.services.lab_reports_service import LabReportsService
from ..application.services.profile_service import ProfileService
from ..infrastructure.identity.local_provider import LocalIdentityProvider
from ..infrastructure.identity.tokens import decode_access_token
from ..infrastructure.persistence.sqlalchemy.repositories.appointments_repository_sql import SqlAppointmentsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.consultations_repository_sql import SqlConsultationsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.lab_reports_repository_sql import SqlLabReportsRepository
from ..infrastructure.persistence.sqlalchemy.repositories.profile_repository_sql import SqlProfileRepository
from ..infrastructure.persistence.sqlalchemy.repositories.user_repository_sql import SqlUserRepository
from ..infrastructure.storage.local_storage import LocalMediaStore

logger = logging.getLogger(__name__)

oauth2_scheme = HTTPBearer(auto_error=False)


def get_media_store() -> LocalMediaStore:
    return LocalMediaStore()


def get_auth_service(session: Session = Depends(get_session)) -> AuthService:
    users = SqlUserRepository(session)
    return AuthService(
        user_repo=users,
        profile_repo=SqlProfileRepository(session),
        identity_provider=LocalIdentityProvider(users),
    )


def get_current_context(
    request: Request,
    credentials: HTTPAuthorizationCredentials = Depends(oauth2_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> SessionContext:
    token = credentials.credentials if credentials and credentials.credentials else request.cookies.get("access_token")
    if not token:
        raise HTTPException(status_code=401, detail="Authentication required")
    payload = decode_access_token(token)
    if not payload:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Invalid token: missing user ID")
    return auth_service.resolve_context(user_id)


def get_profile_service(
    session: Session = Depends(get_session),
    media_store: LocalMediaStore = Depends(get_media_store),
) -> ProfileService:
    return ProfileService(
        user_repo=SqlUserRepository(session),
        profile_repo=SqlProfileRepository(session),
        media_store=media_store,
    )


def get_appointments_service(session: Session = Depends(get_session)) -> AppointmentsService:
    return AppointmentsService(
        repo=SqlAppointmentsRepository(session),
        profile_repo=SqlProfileRepository(session),
        user_repo=SqlUserRepository(session),
    )


def get_consultations_service(session: Session = Depends(get_session)) -> ConsultationsService:
    return ConsultationsService(
        repo=SqlConsultationsRepository(session),
        profile_repo=SqlProfileRepository(session),
    )


def get_lab_reports_service(
    session: Session = Depends(get_session),
    media_store: LocalMediaStore = Depends(get_media_store),
) -> LabReportsService:
    return LabReportsService(
        repo=SqlLabReportsRepository(session),
        profile_repo=SqlProfileRepository(session),
        media_store=media_store,
    )


def get_dashboard_service(
    session: Session = Depends(get_session),
    appointments: AppointmentsService = Depends(get_appointments_service),
    consultations: ConsultationsService = Depends(get_consultations_service),
    lab_reports: LabReportsService = Depends(get_lab_reports_service),
) -> DashboardService:
    return DashboardService(
        profile_repo=SqlProfileRepository(session),
        appointments=appointments,
        consultations=consultations,
        lab_reports=lab_reports,
    )
