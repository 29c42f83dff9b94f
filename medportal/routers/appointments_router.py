from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
import logging

from .deps import get_appointments_service, get_current_context
from ..application.services.appointments_service import AppointmentsService
from ..domain.roles import SessionContext
from ..domain.scheduling import BookingRejected
from ..schemas.appointments.appointment import (
    AppointmentCreate,
    AppointmentLists,
    AppointmentResponse,
    TakenTimesResponse,
)
from ..schemas.common.common import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.post("/", response_model=AppointmentResponse, status_code=201)
def book_appointment(
    appointment_data: AppointmentCreate,
    ctx: SessionContext = Depends(get_current_context),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return appt_service.book(
            ctx,
            appointment_data.doctor_id,
            appointment_data.appointment_date,
            appointment_data.appointment_time,
            appointment_data.symptoms,
        )
    except (HTTPException, BookingRejected):
        raise
    except Exception as e:
        logger.error(f"Error booking appointment: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to book appointment")


@router.get("/", response_model=AppointmentLists)
def get_appointments(
    ctx: SessionContext = Depends(get_current_context),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return appt_service.list_for(ctx)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointments: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve appointments")


@router.get("/requests", response_model=List[AppointmentResponse])
def get_appointment_requests(
    ctx: SessionContext = Depends(get_current_context),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return appt_service.list_unaccepted(ctx)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointment requests: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve appointment requests")


@router.get("/taken", response_model=TakenTimesResponse)
def get_taken_times(
    doctor_id: int = Query(...),
    appointment_date: str = Query(..., description="YYYY-MM-DD"),
    ctx: SessionContext = Depends(get_current_context),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        times = appt_service.taken_times(doctor_id, appointment_date)
        return TakenTimesResponse(doctor_id=doctor_id, appointment_date=appointment_date, taken_times=times)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving taken times for doctor {doctor_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve taken times")


@router.get("/{appointment_id}", response_model=AppointmentResponse)
def get_appointment(
    appointment_id: int,
    ctx: SessionContext = Depends(get_current_context),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return appt_service.get(ctx, appointment_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve appointment")


@router.put("/{appointment_id}/accept", response_model=AppointmentResponse)
def accept_appointment(
    appointment_id: int,
    ctx: SessionContext = Depends(get_current_context),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        return appt_service.accept(ctx, appointment_id)
    except (HTTPException, BookingRejected):
        raise
    except Exception as e:
        logger.error(f"Error accepting appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to accept appointment")


@router.delete("/{appointment_id}", response_model=MessageResponse)
def cancel_appointment(
    appointment_id: int,
    ctx: SessionContext = Depends(get_current_context),
    appt_service: AppointmentsService = Depends(get_appointments_service),
):
    try:
        appt_service.cancel(ctx, appointment_id)
        return MessageResponse(message="Appointment cancelled successfully")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error cancelling appointment {appointment_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to cancel appointment")
