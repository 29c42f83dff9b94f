from dataclasses import dataclass
from typing import List, Optional
import logging

from fastapi import HTTPException

from ..ports.lab_reports_repo import LabReportsRepository, LabReportDto
from ..ports.media_store import MediaStore
from ..ports.profile_repo import ProfileRepository, PatientDto
from .guards import require_lab_user
from ...domain.roles import SessionContext, PatientRole, LabUserRole

logger = logging.getLogger(__name__)

LAB_REPORTS_FOLDER = "lab_reports"


@dataclass
class LabReportsService:
    repo: LabReportsRepository
    profile_repo: ProfileRepository
    media_store: MediaStore

    def list_patients(self, ctx: SessionContext, search: Optional[str] = None) -> List[PatientDto]:
        require_lab_user(ctx)
        return self.profile_repo.list_patients(search)

    def _check_upload(self, ctx: SessionContext, patient_id: int, title: str) -> LabUserRole:
        lab_user = require_lab_user(ctx)
        if not title or not title.strip():
            raise HTTPException(status_code=400, detail="Please fill in all the details and select an image.")
        if not self.profile_repo.get_patient(patient_id):
            raise HTTPException(status_code=404, detail="Patient not found")
        return lab_user

    def upload(self, ctx: SessionContext, patient_id: int, title: str, data: bytes, filename: str, content_type: str) -> LabReportDto:
        lab_user = self._check_upload(ctx, patient_id, title)
        if not data:
            raise HTTPException(status_code=400, detail="Please fill in all the details and select an image.")
        url = self.media_store.save_bytes(LAB_REPORTS_FOLDER, data, filename, content_type)
        return self._record(lab_user, patient_id, title, url)

    def upload_base64(self, ctx: SessionContext, patient_id: int, title: str, base64_data: str) -> LabReportDto:
        lab_user = self._check_upload(ctx, patient_id, title)
        if not base64_data:
            raise HTTPException(status_code=400, detail="Please fill in all the details and select an image.")
        url = self.media_store.save_base64(LAB_REPORTS_FOLDER, base64_data)
        return self._record(lab_user, patient_id, title, url)

    def _record(self, lab_user: LabUserRole, patient_id: int, title: str, url: str) -> LabReportDto:
        report = self.repo.create(patient_id, lab_user.lab_user_id, title.strip(), url)
        logger.info(f"Lab report {report.id} sent to patient {patient_id} by lab user {lab_user.lab_user_id}")
        return report

    def list_for(self, ctx: SessionContext) -> List[LabReportDto]:
        if isinstance(ctx.role, LabUserRole):
            return self.repo.list_for_lab_user(ctx.role.lab_user_id)
        if isinstance(ctx.role, PatientRole):
            return self.repo.list_for_patient(ctx.role.patient_id)
        raise HTTPException(status_code=403, detail="Only lab users and patients have lab reports")
