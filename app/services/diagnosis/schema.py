"""
Structured output schema sent with strict-profile requests.

The fields are declared as typed data and checked against ``PlantDiagnosis``
when the service is built, so the schema can't drift from the result model.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from app.models import PlantDiagnosis
from app.services.diagnosis.errors import ConfigurationError
from app.services.diagnosis.profiles import DiagnosisProfile

SCHEMA_NAME = "plant_diagnosis"


@dataclass(frozen=True)
class SchemaField:
    name: str
    kind: str  # JSON schema type
    description: str
    required: bool = True


DIAGNOSIS_FIELDS: Tuple[SchemaField, ...] = (
    SchemaField(
        name="diseaseName",
        kind="string",
        description='The name of the disease or primary problem diagnosed in the plant, '
                    'e.g., "Root Rot" or "Nutrient Deficiency".',
    ),
    SchemaField(
        name="severity",
        kind="string",
        description="The severity level of the issue, strictly one of: {severities}.",
    ),
    SchemaField(
        name="treatmentAdvice",
        kind="string",
        description="A detailed, actionable, and comprehensive summary of the steps required to "
                    "treat and recover the plant. This should be a single, detailed paragraph.",
    ),
    SchemaField(
        name="confidenceScore",
        kind="number",
        description="A numeric score from 0.0 to 1.0 indicating the model's confidence in the diagnosis.",
    ),
)


def validate_schema_fields(fields: Tuple[SchemaField, ...] = DIAGNOSIS_FIELDS) -> None:
    """Raise ConfigurationError unless ``fields`` match PlantDiagnosis one-to-one, all required."""
    model_keys = {info.alias or name for name, info in PlantDiagnosis.model_fields.items()}
    schema_keys = {f.name for f in fields}

    if len(schema_keys) != len(fields):
        raise ConfigurationError("Diagnosis schema declares a field more than once")
    if schema_keys != model_keys:
        missing = sorted(model_keys - schema_keys)
        extra = sorted(schema_keys - model_keys)
        raise ConfigurationError(f"Diagnosis schema out of sync (missing={missing}, extra={extra})")
    not_required = [f.name for f in fields if not f.required]
    if not_required:
        raise ConfigurationError(f"Diagnosis schema fields must be required: {not_required}")


def build_response_schema(
    profile: DiagnosisProfile,
    fields: Tuple[SchemaField, ...] = DIAGNOSIS_FIELDS,
) -> Dict[str, Any]:
    properties: Dict[str, Dict[str, Any]] = {}
    for f in fields:
        prop: Dict[str, Any] = {
            "type": f.kind,
            "description": f.description.format(severities=profile.severity_choices),
        }
        if f.name == "severity":
            prop["enum"] = list(profile.severity_levels)
        properties[f.name] = prop

    return {
        "type": "object",
        "properties": properties,
        "required": [f.name for f in fields if f.required],
        "additionalProperties": False,
    }


def build_response_format(profile: DiagnosisProfile) -> Optional[Dict[str, Any]]:
    """OpenAI-style ``response_format`` for the profile, or None when it has no strict schema."""
    if not profile.strict_schema:
        return None
    return {
        "type": "json_schema",
        "json_schema": {
            "name": SCHEMA_NAME,
            "strict": True,
            "schema": build_response_schema(profile),
        },
    }
