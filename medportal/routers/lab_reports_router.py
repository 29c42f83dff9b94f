from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
import logging

from .deps import get_current_context, get_lab_reports_service
from ..application.services.lab_reports_service import LabReportsService
from ..domain.roles import SessionContext
from ..schemas.lab_reports.lab_report import LabReportBase64Create, LabReportResponse
from ..schemas.profiles.profile import PatientResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lab-reports", tags=["Lab Reports"])


@router.get("/patients", response_model=List[PatientResponse])
def list_patients(
    search: Optional[str] = Query(None, description="Filter by patient name"),
    ctx: SessionContext = Depends(get_current_context),
    service: LabReportsService = Depends(get_lab_reports_service),
):
    try:
        return service.list_patients(ctx, search)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving patients: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve patients")


@router.post("/", response_model=LabReportResponse, status_code=201)
def upload_report(
    patient_id: int = Form(...),
    title: str = Form(...),
    file: UploadFile = File(...),
    ctx: SessionContext = Depends(get_current_context),
    service: LabReportsService = Depends(get_lab_reports_service),
):
    try:
        data = file.file.read()
        return service.upload(ctx, patient_id, title, data, file.filename or "report.jpg", file.content_type or "image/jpeg")
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error uploading lab report: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to send report. Please try again.")


@router.post("/base64", response_model=LabReportResponse, status_code=201)
def upload_report_base64(
    data: LabReportBase64Create,
    ctx: SessionContext = Depends(get_current_context),
    service: LabReportsService = Depends(get_lab_reports_service),
):
    try:
        return service.upload_base64(ctx, data.patient_id, data.title, data.image_base64)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error uploading lab report: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to send report. Please try again.")


@router.get("/", response_model=List[LabReportResponse])
def get_reports(
    ctx: SessionContext = Depends(get_current_context),
    service: LabReportsService = Depends(get_lab_reports_service),
):
    try:
        return service.list_for(ctx)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error retrieving lab reports: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to retrieve lab reports")
