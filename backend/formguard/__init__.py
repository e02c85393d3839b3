"""FormGuard — declarative form validation for HTML documents."""

from formguard.exceptions import (
    ConfigurationError,
    DetachedElementError,
    DocumentError,
    DuplicateValidatorError,
    FormGuardError,
    InvalidScopeError,
)
from formguard.validators import register_validator, validate_field, validate_form

__version__ = "1.0.0"

__all__ = [
    "ConfigurationError",
    "DetachedElementError",
    "DocumentError",
    "DuplicateValidatorError",
    "FormGuardError",
    "InvalidScopeError",
    "register_validator",
    "validate_field",
    "validate_form",
]
