from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
import logging

from .deps import get_current_context, get_profile_service
from ..application.services.profile_service import ProfileService
from ..domain.roles import SessionContext
from ..schemas.profiles.profile import ProfileUpdate, ProfileResponse, PictureResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("/", response_model=ProfileResponse)
def get_profile(
    ctx: SessionContext = Depends(get_current_context),
    profile_service: ProfileService = Depends(get_profile_service),
):
    try:
        return profile_service.get_profile(ctx)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error fetching profile for {ctx.user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to fetch profile")


@router.put("/", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    ctx: SessionContext = Depends(get_current_context),
    profile_service: ProfileService = Depends(get_profile_service),
):
    try:
        return profile_service.update_profile(ctx, data.model_dump(exclude_none=True))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating profile for {ctx.user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to update profile")


@router.post("/picture", response_model=PictureResponse)
def upload_profile_picture(
    file: UploadFile = File(...),
    ctx: SessionContext = Depends(get_current_context),
    profile_service: ProfileService = Depends(get_profile_service),
):
    try:
        data = file.file.read()
        url = profile_service.upload_profile_picture(
            ctx, data, file.filename or "upload.jpg", file.content_type or "image/jpeg"
        )
        return PictureResponse(profile=url)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error uploading profile picture for {ctx.user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to upload profile picture")
