from dataclasses import dataclass
from typing import List, Optional
from datetime import datetime


@dataclass
class LabReportDto:
    id: int
    patient_id: int
    lab_user_id: int
    title: str
    report_url: str
    send_time: datetime
    patient_name: Optional[str] = None
    lab_user_name: Optional[str] = None


class LabReportsRepository:
    def create(self, patient_id: int, lab_user_id: int, title: str, report_url: str) -> LabReportDto:
        ...

    def list_for_lab_user(self, lab_user_id: int) -> List[LabReportDto]:
        ...

    def list_for_patient(self, patient_id: int) -> List[LabReportDto]:
        ...
