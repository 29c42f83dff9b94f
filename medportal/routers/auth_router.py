from fastapi import APIRouter, Depends, HTTPException
import logging

from .deps import get_auth_service, get_current_context, get_profile_service
from ..application.services.auth_service import AuthService
from ..application.services.profile_service import ProfileService
from ..domain.roles import SessionContext
from ..infrastructure.identity.tokens import create_access_token
from ..schemas.auth.auth import RegisterRequest, LoginRequest, UserResponse, TokenResponse
from ..schemas.profiles.profile import PersonalInfoCreate, ProfileResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=UserResponse, status_code=201)
def register(data: RegisterRequest, auth_service: AuthService = Depends(get_auth_service)):
    try:
        user = auth_service.register(data.email, data.password, data.role)
        return UserResponse(id=user.id, email=user.email, role=user.role, created_at=user.created_at)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error registering user: {str(e)}")
        raise HTTPException(status_code=500, detail="Registration failed")


@router.post("/login", response_model=TokenResponse)
def login(data: LoginRequest, auth_service: AuthService = Depends(get_auth_service)):
    try:
        identity = auth_service.login(data.email, data.password)
        ctx = auth_service.resolve_context(identity.id)
        return TokenResponse(
            access_token=create_access_token(identity),
            user_id=identity.id,
            email=identity.email,
            role=identity.role,
            has_personal_info=ctx.has_profile,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error during login: {str(e)}")
        raise HTTPException(status_code=500, detail="Login failed")


@router.get("/me")
def me(ctx: SessionContext = Depends(get_current_context)):
    return {
        "id": ctx.user_id,
        "email": ctx.email,
        "role": ctx.role_name,
        "has_personal_info": ctx.has_profile,
    }


@router.post("/personal-info", response_model=ProfileResponse, status_code=201)
def submit_personal_info(
    data: PersonalInfoCreate,
    ctx: SessionContext = Depends(get_current_context),
    profile_service: ProfileService = Depends(get_profile_service),
):
    try:
        profile_service.create_personal_info(ctx, data.model_dump(exclude_none=True))
        return profile_service.get_profile(ctx)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error saving personal info for {ctx.user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Failed to save personal info")
