from typing import List
from sqlmodel import Session, select

from .....db.models import LabReport, LabUser, Patient
from .....application.ports.lab_reports_repo import LabReportsRepository, LabReportDto


class SqlLabReportsRepository(LabReportsRepository):
    def __init__(self, session: Session):
        self.session = session

    def _to_dto(self, r: LabReport) -> LabReportDto:
        patient = self.session.get(Patient, r.patient_id)
        lab_user = self.session.get(LabUser, r.lab_user_id)
        return LabReportDto(
            id=r.id,
            patient_id=r.patient_id,
            lab_user_id=r.lab_user_id,
            title=r.title,
            report_url=r.report_url,
            send_time=r.send_time,
            patient_name=patient.username if patient else None,
            lab_user_name=lab_user.username if lab_user else None,
        )

    def create(self, patient_id: int, lab_user_id: int, title: str, report_url: str) -> LabReportDto:
        r = LabReport(patient_id=patient_id, lab_user_id=lab_user_id, title=title, report_url=report_url)
        self.session.add(r)
        self.session.commit()
        self.session.refresh(r)
        return self._to_dto(r)

    def list_for_lab_user(self, lab_user_id: int) -> List[LabReportDto]:
        rows = self.session.exec(
            select(LabReport)
            .where(LabReport.lab_user_id == lab_user_id)
            .order_by(LabReport.send_time.desc())
        ).all()
        return [self._to_dto(r) for r in rows]

    def list_for_patient(self, patient_id: int) -> List[LabReportDto]:
        rows = self.session.exec(
            select(LabReport)
            .where(LabReport.patient_id == patient_id)
            .order_by(LabReport.send_time.desc())
        ).all()
        return [self._to_dto(r) for r in rows]
