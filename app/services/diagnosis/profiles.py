"""
Diagnosis profiles.

A profile fixes how the model is asked to answer and how its answer is checked:
target language of the text fields, severity vocabulary, confidence representation,
and whether the structured output schema is attached to the request.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Optional, Tuple

from app.services.diagnosis.errors import ConfigurationError

logger = logging.getLogger(__name__)


class ConfidenceFormat(str, Enum):
    FLOAT = "float"      # 0.0 - 1.0
    PERCENT = "percent"  # "85%"


@dataclass(frozen=True)
class DiagnosisProfile:
    name: str
    language: str
    severity_levels: Tuple[str, ...]
    confidence_format: ConfidenceFormat
    strict_schema: bool

    @property
    def severity_choices(self) -> str:
        return ", ".join(self.severity_levels)

    def build_prompt(self) -> str:
        if self.strict_schema:
            return STRUCTURED_PROMPT.format(
                language=self.language.upper(),
                severities=self.severity_choices,
            )
        return FREEFORM_PROMPT.format(
            language=self.language,
            severities=self.severity_choices,
            no_severity=self.severity_levels[-1],
        )


STRUCTURED_PROMPT = (
    "Analyze this plant image. Provide the diagnosis and treatment advice as structured JSON "
    "according to the provided schema. Diagnose the disease, determine severity "
    "(strictly one of: {severities}), provide comprehensive treatment advice, and estimate "
    "confidence (0.0 to 1.0). The output for diseaseName and treatmentAdvice MUST be in {language}."
)

FREEFORM_PROMPT = """You are a plant pathologist. Examine the plant in this image and diagnose it.

Reply with JSON only, no markdown, in exactly this shape:
{{
  "diseaseName": "name of the disease or main problem",
  "severity": "exactly one of: {severities}",
  "treatmentAdvice": "one detailed paragraph of actionable treatment and recovery steps",
  "confidenceScore": "your confidence as a percentage, e.g. 85%"
}}

Write diseaseName and treatmentAdvice in {language}.
Copy severity verbatim from this list, never translated: {severities}.
If the plant looks healthy, say so in diseaseName and use the last severity value ({no_severity})."""


PROFILES: Dict[str, DiagnosisProfile] = {
    "structured": DiagnosisProfile(
        name="structured",
        language="Arabic",
        severity_levels=("Low", "Medium", "High", "None"),
        confidence_format=ConfidenceFormat.FLOAT,
        strict_schema=True,
    ),
    "freeform": DiagnosisProfile(
        name="freeform",
        language="Arabic",
        severity_levels=("منخفضة", "متوسطة", "عالية", "لا يوجد"),
        confidence_format=ConfidenceFormat.PERCENT,
        strict_schema=False,
    ),
}


def get_profile(name: str, language: Optional[str] = None) -> DiagnosisProfile:
    """Look up a built-in profile, optionally overriding its target language."""
    profile = PROFILES.get((name or "").strip().lower())
    if profile is None:
        raise ConfigurationError(
            f"Unknown diagnosis profile '{name}'. Expected one of: {', '.join(sorted(PROFILES))}"
        )
    if language:
        profile = replace(profile, language=language.strip())
    logger.debug(f"Using diagnosis profile {profile.name} ({profile.language})")
    return profile
