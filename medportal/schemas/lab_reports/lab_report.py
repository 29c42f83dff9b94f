# medportal/schemas/lab_reports/lab_report.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime


class LabReportBase64Create(BaseModel):
    patient_id: int
    title: str = Field(..., max_length=200)
    image_base64: str = Field(..., description="Base64 image data or data URL")


class LabReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    patient_id: int
    lab_user_id: int
    title: str
    report_url: str
    send_time: datetime
    patient_name: Optional[str] = None
    lab_user_name: Optional[str] = None
