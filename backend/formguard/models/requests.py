"""API request models."""

from pydantic import BaseModel, Field
from typing import Optional


class ValidateDocumentRequest(BaseModel):
    """Request to validate a form inside an HTML document."""

    html: str = Field(
        ...,
        min_length=1,
        description="HTML document or fragment containing the form",
        examples=['<form><input type="email" name="email" value="not-an-email"></form>'],
    )
    form_selector: Optional[str] = Field(
        default=None,
        description="CSS selector of the form to validate; the first <form> if omitted",
    )
