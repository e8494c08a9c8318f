from dataclasses import dataclass
from typing import Union
from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr


@dataclass(frozen=True)
class UploadedImage:
    """Single uploaded file as handed over by the HTTP layer."""
    buffer: bytes
    mimetype: str
    originalname: str
    size: int


class PlantDiagnosis(BaseModel):
    # Whitespace-only text fails min_length after stripping
    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    disease_name: str = Field(alias="diseaseName", min_length=1)
    severity: str
    treatment_advice: str = Field(alias="treatmentAdvice", min_length=1)
    # number 0.0-1.0, or a percentage string such as "85%" (freeform profile); booleans rejected
    confidence_score: Union[StrictFloat, StrictInt, StrictStr] = Field(alias="confidenceScore")


class ErrorResponse(BaseModel):
    detail: str
