import logging
from typing import Optional
from fastapi import APIRouter, Depends

from app.config import APP_VERSION, DIAGNOSIS_MODEL
from app.dependencies import get_diagnosis_service
from app.services.diagnosis import ImageDiagnosisService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
async def root(service: Optional[ImageDiagnosisService] = Depends(get_diagnosis_service)):
    return {
        "status": "online",
        "service": "Plant Image Diagnosis",
        "version": APP_VERSION,
        "model": service.model if service else DIAGNOSIS_MODEL,
        "profile": service.profile.name if service else None,
    }


@router.get("/health")
async def health_check(service: Optional[ImageDiagnosisService] = Depends(get_diagnosis_service)):
    return {
        "status": "healthy" if service else "degraded",
        "version": APP_VERSION,
        "model": service.model if service else DIAGNOSIS_MODEL,
        "profile": service.profile.name if service else None,
        "services": {
            "openrouter": bool(service),
        }
    }
