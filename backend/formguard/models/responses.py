"""API response models."""

from pydantic import BaseModel, Field
from typing import Optional, Literal

from formguard.validators.models import FormReport


class ValidateDocumentResponse(BaseModel):
    """Validation verdict plus the annotated markup."""

    valid: bool
    report: FormReport
    html: str = Field(description="The form re-serialized with error classes and error lists")


class ValidatorInfo(BaseModel):
    """A registered validator as exposed by the API."""

    name: str
    default_message: str
    selector: Optional[str] = None


class HealthResponse(BaseModel):
    """System health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str = "1.0.0"
    uptime_seconds: float
    validators: int = 0
