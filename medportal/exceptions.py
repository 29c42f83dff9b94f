from fastapi import Request
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.responses import JSONResponse

from .domain.scheduling import BookingRejected

def create_error_response(error_message: str, status_code: int = 400, **extra) -> dict:
    """Create a standardized error response"""
    body = {
        "success": False,
        "data": None,
        "error": error_message
    }
    body.update(extra)
    return body

def create_success_response(data) -> dict:
    """Create a standardized success response"""
    return {
        "success": True,
        "data": data,
        "error": None
    }

async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Custom exception handler for HTTPException"""
    # Convert 403 from HTTPBearer to 401 for missing authentication
    if exc.status_code == 403 and "Not authenticated" in str(exc.detail):
        return JSONResponse(
            status_code=401,
            content=create_error_response("Authentication required", 401)
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=create_error_response(exc.detail, exc.status_code),
        headers=getattr(exc, "headers", None),
    )

async def booking_rejected_handler(request: Request, exc: BookingRejected) -> JSONResponse:
    """Booking rule violations are shown to the user as a blocking message"""
    return JSONResponse(
        status_code=400,
        content=create_error_response(exc.message, 400, reason=exc.reason.value)
    )
