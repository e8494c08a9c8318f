from typing import Optional
from fastapi import Request

from app.services.diagnosis import ImageDiagnosisService


def get_diagnosis_service(request: Request) -> Optional[ImageDiagnosisService]:
    """Service built once in the app lifespan (None until startup has run)"""
    return getattr(request.app.state, "diagnosis_service", None)
