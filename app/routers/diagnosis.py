import logging
from typing import Optional
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile

from app.dependencies import get_diagnosis_service
from app.models import ErrorResponse, PlantDiagnosis, UploadedImage
from app.services.diagnosis import ImageDiagnosisService

logger = logging.getLogger(__name__)

router = APIRouter()


async def read_upload(file: UploadFile) -> UploadedImage:
    data = await file.read()
    return UploadedImage(
        buffer=data,
        mimetype=file.content_type or "",
        originalname=file.filename or "",
        size=len(data),
    )


@router.post(
    "/analyze",
    response_model=PlantDiagnosis,
    responses={
        413: {"model": ErrorResponse},
        415: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def analyze_image(
    file: UploadFile = File(...),
    service: Optional[ImageDiagnosisService] = Depends(get_diagnosis_service),
):
    if service is None:
        logger.error("Diagnosis service not initialized")
        raise HTTPException(status_code=500, detail="Diagnosis service not configured")

    image = await read_upload(file)
    # Diagnosis errors are mapped to responses by the handlers in app.main
    return await service.analyze_image(image)
