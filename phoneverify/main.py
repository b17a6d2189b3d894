"""
phoneverify/main.py

Purpose: Application entry point

- Initializes FastAPI app
- Loads configuration and logging
- Registers API routes and exception handlers
- No business logic should be written here
- Manages application lifecycle (expiry sweeper startup/shutdown)
"""

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import time

from phoneverify.core.config import settings, validate_settings
from phoneverify.core.errors import add_exception_handlers
from phoneverify.core.logging import setup_logging, get_logger
from phoneverify.services.expiry_sweeper import start_expiry_sweeper, stop_expiry_sweeper
from phoneverify.services.verification_service import VerificationService, get_verification_service
from phoneverify.api import verification

APP_VERSION = "1.0.0"

# Initialize logging first
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Startup
    logger.info("🚀 Starting phone verification service...")

    try:
        logger.info("Validating configuration...")
        validate_settings()
        logger.info("✅ Configuration validated")

        service = get_verification_service()
        if not service.sender.is_configured():
            logger.warning("⚠️ SMS sender is not configured; code requests will fail")

        app.state.sweeper = start_expiry_sweeper(service, settings.CODE_SWEEP_INTERVAL_SECONDS)

        logger.info("🎉 Phone verification service started successfully!")
        logger.info(f"Environment: {settings.ENVIRONMENT}")
        logger.info(f"SMS backend: {settings.SMS_BACKEND}")

    except Exception as e:
        logger.critical(f"Failed to start application: {str(e)}", exc_info=True)
        raise

    yield  # Application runs here

    # Shutdown
    logger.info("🛑 Shutting down phone verification service...")
    stop_expiry_sweeper(getattr(app.state, "sweeper", None))
    logger.info("👋 Phone verification service shut down successfully")


app = FastAPI(
    title="Phone Verify",
    description="One-time SMS code phone number verification",
    version=APP_VERSION,
    lifespan=lifespan,
    debug=settings.DEBUG,
    docs_url="/docs" if settings.is_development else None,  # Disable docs in production
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request timing middleware
@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    """Add processing time header to all responses."""
    start_time = time.time()
    response = await call_next(request)
    process_time = time.time() - start_time
    response.headers["X-Process-Time"] = str(process_time)

    # SMS sends are the only slow path
    if process_time > 5.0:
        logger.warning(
            f"Slow request detected: {request.method} {request.url.path}",
            extra={"process_time": process_time}
        )

    return response


add_exception_handlers(app)

app.include_router(verification.router, tags=["Verification"])


@app.get("/health", tags=["Health"])
async def health_check(service: VerificationService = Depends(get_verification_service)):
    """
    Health check endpoint with basic service status.
    """
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": APP_VERSION,
        "pending_codes": len(service.store),
        "sms_backend": settings.SMS_BACKEND,
        "sms_configured": service.sender.is_configured(),
    }


# Liveness probe (for Kubernetes/orchestration)
@app.get("/live", tags=["Health"])
async def liveness_check():
    """
    Liveness probe - indicates if app is alive.
    """
    return {"status": "alive"}


def run():
    """Runs the server with uvicorn on the configured host and port."""
    import uvicorn

    uvicorn.run(
        "phoneverify.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.is_development,
        log_level=settings.LOG_LEVEL.lower()
    )


if __name__ == "__main__":
    run()
