from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from phoneverify.core.exceptions import VerificationError
from phoneverify.core.logging import get_logger
from phoneverify.schemas.response import MessageResponse
from phoneverify.core.config import settings
from phoneverify.utils.constants import INTERNAL_ERROR_MESSAGE, INVALID_REQUEST_BODY_MESSAGE

logger = get_logger(__name__)


def add_exception_handlers(app: FastAPI):
    """
    Registers exception handlers with the FastAPI app.
    Every error reaches the client as {"message": ...}.
    """
    @app.exception_handler(VerificationError)
    async def verification_exception_handler(request: Request, exc: VerificationError):
        logger.debug(
            f"{request.method} {request.url.path} -> {exc.status_code}",
            extra={"error_code": exc.code}
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=MessageResponse(message=exc.message).model_dump()
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """
        Handles standard HTTP exceptions (404, 405, etc.)
        """
        return JSONResponse(
            status_code=exc.status_code,
            content=MessageResponse(message=str(exc.detail)).model_dump(),
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handles malformed request bodies (not JSON, wrong field types).
        """
        logger.info(
            f"Invalid request body on {request.url.path}",
            extra={"error_code": "INVALID_BODY"}
        )
        return JSONResponse(
            status_code=400,
            content=MessageResponse(message=INVALID_REQUEST_BODY_MESSAGE).model_dump()
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """
        Catch-all for unhandled exceptions.
        """
        logger.error(
            f"Unhandled exception: {str(exc)}",
            extra={
                "method": request.method,
                "url": str(request.url),
                "client": request.client.host if request.client else "unknown"
            },
            exc_info=True
        )

        message = INTERNAL_ERROR_MESSAGE if settings.is_production else str(exc)

        return JSONResponse(
            status_code=500,
            content=MessageResponse(message=message).model_dump()
        )
