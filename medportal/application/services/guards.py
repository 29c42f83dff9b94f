from fastapi import HTTPException

from ...domain.roles import SessionContext, PatientRole, DoctorRole, LabUserRole


def require_patient(ctx: SessionContext) -> PatientRole:
    if not isinstance(ctx.role, PatientRole):
        raise HTTPException(status_code=403, detail="Only patients can perform this action")
    return ctx.role


def require_doctor(ctx: SessionContext) -> DoctorRole:
    if not isinstance(ctx.role, DoctorRole):
        raise HTTPException(status_code=403, detail="Only doctors can perform this action")
    return ctx.role


def require_lab_user(ctx: SessionContext) -> LabUserRole:
    if not isinstance(ctx.role, LabUserRole):
        raise HTTPException(status_code=403, detail="Only lab users can perform this action")
    return ctx.role
