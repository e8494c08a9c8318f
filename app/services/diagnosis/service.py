import base64
import json
import logging
import re
from typing import Any, Dict, Optional

from openai import AsyncOpenAI
from pydantic import ValidationError

from app.config import (
    OPENROUTER_API_KEY,
    DIAGNOSIS_MODEL,
    DIAGNOSIS_PROFILE,
    DIAGNOSIS_LANGUAGE,
    MAX_IMAGE_SIZE,
    APP_REFERER,
    APP_TITLE,
)
from app.models import PlantDiagnosis, UploadedImage
from app.services.client import build_openrouter_client
from app.services.diagnosis.errors import (
    AnalysisFailedError,
    ConfigurationError,
    FileTooLargeError,
    ResponseFormatError,
    UnsupportedImageTypeError,
    UpstreamError,
)
from app.services.diagnosis.mime import resolve_mime_type
from app.services.diagnosis.normalize import strip_code_fences
from app.services.diagnosis.profiles import ConfidenceFormat, DiagnosisProfile, get_profile
from app.services.diagnosis.schema import build_response_format, validate_schema_fields

logger = logging.getLogger(__name__)

_PERCENT_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*%\s*$")


def build_image_part(buffer: bytes, mime_type: str) -> Dict[str, Any]:
    """Inline image part: base64 payload tagged with its MIME type"""
    base64_image = base64.b64encode(buffer).decode("utf-8")
    return {
        "type": "image_url",
        "image_url": {"url": f"data:{mime_type};base64,{base64_image}"},
    }


def _check_against_profile(diagnosis: PlantDiagnosis, profile: DiagnosisProfile) -> None:
    if diagnosis.severity not in profile.severity_levels:
        raise ResponseFormatError(
            f"Severity '{diagnosis.severity}' not in {list(profile.severity_levels)}"
        )

    score = diagnosis.confidence_score
    if profile.confidence_format == ConfidenceFormat.FLOAT:
        if isinstance(score, str) or not 0.0 <= score <= 1.0:
            raise ResponseFormatError(f"confidenceScore must be a number in [0, 1], got {score!r}")
    else:
        match = _PERCENT_RE.match(score) if isinstance(score, str) else None
        if not match or float(match.group(1)) > 100:
            raise ResponseFormatError(f"confidenceScore must be a percentage string, got {score!r}")


def parse_diagnosis(raw_text: Optional[str], profile: DiagnosisProfile) -> PlantDiagnosis:
    """Turn the model's raw text into a PlantDiagnosis, or raise ResponseFormatError."""
    json_str = strip_code_fences(raw_text or "")
    if not json_str:
        raise ResponseFormatError("Gemini returned an empty response.")

    try:
        data = json.loads(json_str)
    except (ValueError, RecursionError) as e:
        # JSONDecodeError is a ValueError; deeply nested input raises RecursionError
        raise ResponseFormatError(
            f"Invalid JSON from model: {type(e).__name__}: {str(e)[:200]}", is_syntax_error=True
        ) from e

    try:
        diagnosis = PlantDiagnosis.model_validate(data)
    except ValidationError as e:
        raise ResponseFormatError(f"Response does not match diagnosis shape: {e}") from e

    _check_against_profile(diagnosis, profile)
    return diagnosis


class ImageDiagnosisService:
    """Validates an uploaded plant image, asks the model for a diagnosis and parses it.

    Holds only immutable collaborators (client, model name, profile); every call to
    ``analyze_image`` is independent.
    """

    def __init__(
        self,
        client: AsyncOpenAI,
        profile: DiagnosisProfile,
        model: str = DIAGNOSIS_MODEL,
        max_image_size: int = MAX_IMAGE_SIZE,
    ):
        validate_schema_fields()
        self._client = client
        self._model = model
        self._profile = profile
        self._max_image_size = max_image_size
        self._prompt = profile.build_prompt()
        self._response_format = build_response_format(profile)

    @property
    def model(self) -> str:
        return self._model

    @property
    def profile(self) -> DiagnosisProfile:
        return self._profile

    async def close(self) -> None:
        await self._client.close()

    def validate_image(self, file: UploadedImage) -> str:
        """Check size and type; return the MIME type to send. Never calls the model."""
        if file.size > self._max_image_size:
            limit_mb = self._max_image_size // (1024 * 1024)
            raise FileTooLargeError(
                f"Image file is too large. Please use an image smaller than {limit_mb}MB."
            )

        mime_type = resolve_mime_type(file.mimetype, file.originalname)
        if not mime_type:
            raise UnsupportedImageTypeError(
                f"Invalid file type: {file.mimetype}. Only JPEG/PNG/GIF images are supported."
            )
        return mime_type

    def build_request(self, file: UploadedImage, mime_type: str) -> Dict[str, Any]:
        request: Dict[str, Any] = {
            "model": self._model,
            "messages": [
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": self._prompt},
                        build_image_part(file.buffer, mime_type),
                    ],
                }
            ],
            "extra_headers": {
                "HTTP-Referer": APP_REFERER,
                "X-Title": APP_TITLE,
            },
        }
        if self._response_format:
            request["response_format"] = self._response_format
        return request

    async def _generate(self, request: Dict[str, Any]) -> str:
        try:
            response = await self._client.chat.completions.create(**request)
        except Exception as e:
            raise UpstreamError(f"{type(e).__name__}: {e}") from e

        # First candidate, first text part
        choices = getattr(response, "choices", None) or []
        if not choices:
            return ""
        return choices[0].message.content or ""

    async def analyze_image(self, file: UploadedImage) -> PlantDiagnosis:
        mime_type = self.validate_image(file)
        logger.info(f"Analyzing file: {file.originalname}, Final MimeType used: {mime_type}")

        try:
            raw_text = await self._generate(self.build_request(file, mime_type))
            logger.debug(f"Gemini raw response: {raw_text[:500]}")
            diagnosis = parse_diagnosis(raw_text, self._profile)
        except AnalysisFailedError as e:
            logger.error(f"Gemini diagnosis failed ({type(e).__name__}): {e.reason}",
                         exc_info=isinstance(e, UpstreamError))
            if isinstance(e, ResponseFormatError) and e.is_syntax_error:
                logger.error("JSON Parsing Error: The model may not have returned valid JSON.")
            raise
        except Exception as e:
            logger.error(f"Gemini diagnosis failed (unexpected {type(e).__name__}): {e}", exc_info=True)
            raise AnalysisFailedError(f"{type(e).__name__}: {e}") from e

        logger.info(f"Diagnosis: {diagnosis.disease_name} (severity={diagnosis.severity}, "
                    f"confidence={diagnosis.confidence_score})")
        return diagnosis


def create_diagnosis_service(
    api_key: Optional[str] = OPENROUTER_API_KEY,
    profile_name: str = DIAGNOSIS_PROFILE,
    language: Optional[str] = DIAGNOSIS_LANGUAGE,
) -> ImageDiagnosisService:
    """Build the process-wide service; fails fast when the credential is missing."""
    if not api_key or not api_key.strip():
        raise ConfigurationError("OPENROUTER_API_KEY is not defined in environment variables.")

    profile = get_profile(profile_name, language)
    client = build_openrouter_client(api_key.strip())
    return ImageDiagnosisService(client=client, profile=profile)
