"""Form validation engine — named validators applied to form fields.

Usage:
    from formguard.validators import validate_form, register_validator

    register_validator("zip", is_zip_code, "Enter a valid ZIP code.", 'input[name="zip"]')
    if not validate_form(form_element):
        # Invalid fields carry the error class and an inline error list
"""

from formguard.validators.builtin import register_builtin_validators
from formguard.validators.engine import (
    FieldValidator,
    FormValidator,
    get_form_validator,
    validate_field,
    validate_form,
)
from formguard.validators.matching import MatchEngine
from formguard.validators.models import FieldResult, FormReport, Scope, ScopeKind, Validator
from formguard.validators.registry import ValidatorRegistry, get_registry, register_validator

__all__ = [
    "FieldValidator",
    "FormValidator",
    "MatchEngine",
    "ValidatorRegistry",
    "Validator",
    "Scope",
    "ScopeKind",
    "FieldResult",
    "FormReport",
    "get_registry",
    "get_form_validator",
    "register_validator",
    "register_builtin_validators",
    "validate_field",
    "validate_form",
]
