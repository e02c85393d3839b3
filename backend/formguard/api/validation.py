"""Validation API — validate a form in submitted markup, list validators."""

from fastapi import APIRouter, HTTPException

import structlog

from formguard.config import get_settings
from formguard.dom import find_form, parse_document, serialize
from formguard.models.requests import ValidateDocumentRequest
from formguard.models.responses import ValidateDocumentResponse, ValidatorInfo
from formguard.validators import FieldValidator, FormValidator, get_registry

logger = structlog.get_logger()

router = APIRouter()


@router.post("/validate", response_model=ValidateDocumentResponse)
async def validate_document(request: ValidateDocumentRequest):
    """Validate one form of an HTML document and return the annotated form."""
    settings = get_settings()
    size = len(request.html.encode("utf-8"))
    if size > settings.MAX_DOCUMENT_BYTES:
        logger.warning("document_too_large", size=size, limit=settings.MAX_DOCUMENT_BYTES)
        raise HTTPException(
            status_code=413,
            detail=f"Document is {size} bytes; the limit is {settings.MAX_DOCUMENT_BYTES}",
        )

    root = parse_document(request.html)
    form = find_form(root, request.form_selector)

    # Each request owns its tree, so it gets its own error-list side-table
    form_validator = FormValidator(FieldValidator(get_registry(), settings=settings))
    report = form_validator.check_form(form)

    return ValidateDocumentResponse(
        valid=report.valid,
        report=report,
        html=serialize(form),
    )


@router.get("/validators", response_model=list[ValidatorInfo])
async def list_validators():
    """List registered validators in execution order."""
    return [
        ValidatorInfo(
            name=validator.name,
            default_message=validator.default_message,
            selector=validator.selector,
        )
        for validator in get_registry()
    ]
