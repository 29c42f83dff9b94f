from typing import List
from fastapi import APIRouter, Depends, HTTPException
import logging

from .deps import get_consultations_service, get_current_context
from ..application.services.consultations_service import ConsultationsService
from ..domain.roles import SessionContext
from ..schemas.common.common import MessageResponse
from ..schemas.consultations.consultation import (
    ConsultationCreate,
    ConsultationResponse,
    PrescriptionUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/consultations", tags=["Consultations"])


@router.post("/", response_model=ConsultationResponse, status_code=201)
def create_consultation(
    data: ConsultationCreate,
    ctx: SessionContext = Depends(get_current_context),
    service: ConsultationsService = Depends(get_consultations_service),
):
    try:
        return service.create(ctx, data.doctor_id, data.disease, data.access_allowed)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating consultation: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to create consultation")


@router.get("/", response_model=List[ConsultationResponse])
def get_consultations(
    ctx: SessionContext = Depends(get_current_context),
    service: ConsultationsService = Depends(get_consultations_service),
):
    try:
        return service.list_for(ctx)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving consultations: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve consultations")


@router.get("/{consultation_id}/history", response_model=List[ConsultationResponse])
def get_patient_history(
    consultation_id: int,
    ctx: SessionContext = Depends(get_current_context),
    service: ConsultationsService = Depends(get_consultations_service),
):
    try:
        return service.patient_history(ctx, consultation_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving history for consultation {consultation_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve medical history")


@router.put("/{consultation_id}/prescription", response_model=ConsultationResponse)
def update_prescription(
    consultation_id: int,
    data: PrescriptionUpdate,
    ctx: SessionContext = Depends(get_current_context),
    service: ConsultationsService = Depends(get_consultations_service),
):
    try:
        return service.update_prescription(ctx, consultation_id, data.prescription)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating prescription for consultation {consultation_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update prescription")


@router.delete("/{consultation_id}", response_model=MessageResponse)
def delete_consultation(
    consultation_id: int,
    ctx: SessionContext = Depends(get_current_context),
    service: ConsultationsService = Depends(get_consultations_service),
):
    try:
        service.delete(ctx, consultation_id)
        return MessageResponse(message="Consultation deleted successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting consultation {consultation_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to delete consultation")
