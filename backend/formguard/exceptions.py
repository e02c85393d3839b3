"""Engine exception hierarchy."""

from typing import Optional


class FormGuardError(Exception):
    """Base class for all errors raised by the engine."""


class ConfigurationError(FormGuardError):
    """A validator definition is unusable. Raised at registration time."""


class DuplicateValidatorError(ConfigurationError):
    """A validator with the same name is already registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f'Validator "{name}" already exists')


class InvalidScopeError(ConfigurationError):
    """A scope selector could not be compiled."""

    def __init__(self, selector: str, reason: str = ""):
        self.selector = selector
        self.reason = reason
        message = f'Invalid scope selector "{selector}"'
        if reason:
            message += f": {reason}"
        super().__init__(message)


class DetachedElementError(FormGuardError):
    """An element without a parent cannot be matched or annotated."""

    def __init__(self, selector: Optional[str] = None):
        self.selector = selector
        if selector is None:
            message = "Element needs to have a parent to render its error list"
        else:
            message = f'Element needs to have a parent to test if selector "{selector}" matches'
        super().__init__(message)


class DocumentError(FormGuardError):
    """Markup could not be parsed, or the requested form is missing."""
