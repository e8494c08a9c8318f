"""
Plant image diagnosis

Validate upload → build multimodal request → Gemini Flash (OpenRouter) → strip fences → PlantDiagnosis
"""

from app.services.diagnosis.errors import (
    ANALYSIS_FAILED_MESSAGE,
    DiagnosisError,
    ConfigurationError,
    ImageValidationError,
    FileTooLargeError,
    UnsupportedImageTypeError,
    AnalysisFailedError,
    UpstreamError,
    ResponseFormatError,
)
from app.services.diagnosis.mime import resolve_mime_type
from app.services.diagnosis.normalize import strip_code_fences
from app.services.diagnosis.profiles import ConfidenceFormat, DiagnosisProfile, PROFILES, get_profile
from app.services.diagnosis.service import (
    ImageDiagnosisService,
    create_diagnosis_service,
    parse_diagnosis,
)

__all__ = [
    "ANALYSIS_FAILED_MESSAGE",
    "DiagnosisError",
    "ConfigurationError",
    "ImageValidationError",
    "FileTooLargeError",
    "UnsupportedImageTypeError",
    "AnalysisFailedError",
    "UpstreamError",
    "ResponseFormatError",
    "resolve_mime_type",
    "strip_code_fences",
    "ConfidenceFormat",
    "DiagnosisProfile",
    "PROFILES",
    "get_profile",
    "ImageDiagnosisService",
    "create_diagnosis_service",
    "parse_diagnosis",
]
