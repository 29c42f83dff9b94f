from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlmodel import Session
import logging

from .deps import get_current_context
from ..database import get_session
from ..domain.roles import SessionContext
from ..infrastructure.persistence.sqlalchemy.repositories.profile_repository_sql import SqlProfileRepository
from ..schemas.profiles.profile import DoctorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/doctors", tags=["Doctors"])


@router.get("/", response_model=List[DoctorResponse])
def get_doctors(
    search: Optional[str] = Query(None, description="Filter by doctor name"),
    ctx: SessionContext = Depends(get_current_context),
    session: Session = Depends(get_session),
):
    try:
        return SqlProfileRepository(session).list_doctors(search)
    except Exception as e:
        logger.error(f"Error retrieving doctors: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve doctors")


@router.get("/{doctor_id}", response_model=DoctorResponse)
def get_doctor(
    doctor_id: int,
    ctx: SessionContext = Depends(get_current_context),
    session: Session = Depends(get_session),
):
    try:
        doctor = SqlProfileRepository(session).get_doctor(doctor_id)
        if not doctor:
            raise HTTPException(status_code=404, detail="Doctor not found")
        return doctor
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving doctor {doctor_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve doctor")
