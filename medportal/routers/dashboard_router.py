from fastapi import APIRouter, Depends, HTTPException
import logging

from .deps import get_current_context, get_dashboard_service
from ..application.services.dashboard_service import DashboardService
from ..domain.roles import SessionContext

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("/")
def get_dashboard(
    ctx: SessionContext = Depends(get_current_context),
    service: DashboardService = Depends(get_dashboard_service),
):
    try:
        return service.for_context(ctx)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error building dashboard for {ctx.user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to load dashboard")
