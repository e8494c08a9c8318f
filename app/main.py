# Plant Image Diagnosis API v1.0.0
import logging
import uvicorn
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.cors import CORSMiddleware

# Import config
from app.config import (
    APP_VERSION,
    CORS_ORIGINS,
    DIAGNOSIS_MODEL,
    LOG_LEVEL,
    PORT,
)
from app.routers import diagnosis, health
from app.services.diagnosis import (
    ANALYSIS_FAILED_MESSAGE,
    AnalysisFailedError,
    ImageValidationError,
    create_diagnosis_service,
)

# Configure logging
logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ============================================================================#
# Lifespan Events
# ============================================================================#

@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    # Startup: raises ConfigurationError when the credential is missing
    service = create_diagnosis_service()
    app_instance.state.diagnosis_service = service

    logger.info("=" * 60)
    logger.info("Starting Plant Image Diagnosis API")
    logger.info(f"Model: {service.model}")
    logger.info(f"Profile: {service.profile.name} (language={service.profile.language}, "
                f"strict_schema={service.profile.strict_schema})")
    logger.info("=" * 60)

    yield

    # Shutdown
    logger.info("Shutting down gracefully...")
    await service.close()


# ============================================================================#
# Exception Handlers
# ============================================================================#

async def image_validation_error_handler(request: Request, exc: ImageValidationError):
    logger.warning(f"Rejected upload: {exc}")
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


async def analysis_failed_error_handler(request: Request, exc: AnalysisFailedError):
    # Underlying reason was already logged by the service
    return JSONResponse(status_code=500, content={"detail": ANALYSIS_FAILED_MESSAGE})


# Initialize FastAPI app
app = FastAPI(
    title="Plant Image Diagnosis API",
    description=f"Plant disease diagnosis from a single image via {DIAGNOSIS_MODEL}",
    version=APP_VERSION,
    lifespan=lifespan
)

app.add_exception_handler(ImageValidationError, image_validation_error_handler)
app.add_exception_handler(AnalysisFailedError, analysis_failed_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(diagnosis.router)


if __name__ == "__main__":
    uvicorn.run('app.main:app', host='0.0.0.0', port=PORT, reload=True)
