"""Validator registry — named validation rules with unique names.

Validators run in registration order, which also fixes the order of the
error messages rendered for a field.
"""

from functools import lru_cache
from types import MappingProxyType
from typing import Iterator, Mapping, Optional

import structlog

from formguard.dom import compile_selector
from formguard.exceptions import DuplicateValidatorError, InvalidScopeError
from formguard.validators.models import Predicate, Scope, ScopeValue, Validator

logger = structlog.get_logger()


class ValidatorRegistry:
    """Mapping from validator name to Validator.

    Entries are never replaced or removed; registering a name twice is a
    configuration error.
    """

    def __init__(self):
        self._validators: dict[str, Validator] = {}

    def register(
        self,
        name: str,
        predicate: Predicate,
        default_message: str,
        scope: ScopeValue = None,
    ) -> Validator:
        """Register a new validator.

        Args:
            name: Unique validator name, also used by ``data-selector`` and
                ``data-error-<name>`` on fields
            predicate: Called with the field element, returns True if valid
            default_message: Message shown when no per-field override exists
            scope: CSS selector, or list of selectors, of fields to validate

        Raises:
            DuplicateValidatorError: ``name`` is already registered
            InvalidScopeError: the scope selector cannot be compiled
        """
        if name in self._validators:
            logger.error("validator_registration_rejected", validator=name, reason="duplicate")
            raise DuplicateValidatorError(name)

        normalized = Scope.from_value(scope)
        matcher = None
        if normalized is not None:
            try:
                matcher = compile_selector(normalized.selector)
            except InvalidScopeError as e:
                logger.error(
                    "validator_registration_rejected",
                    validator=name,
                    reason="invalid_scope",
                    selector=e.selector,
                    error=e.reason,
                )
                raise

        validator = Validator(
            name=name,
            predicate=predicate,
            default_message=default_message,
            scope=normalized,
            matcher=matcher,
        )
        self._validators[name] = validator
        logger.debug("validator_registered", validator=name, selector=validator.selector)
        return validator

    def all(self) -> Mapping[str, Validator]:
        """Read-only view of the registered validators."""
        return MappingProxyType(self._validators)

    def get(self, name: str) -> Optional[Validator]:
        return self._validators.get(name)

    def names(self) -> list[str]:
        return list(self._validators)

    def __contains__(self, name: object) -> bool:
        return name in self._validators

    def __iter__(self) -> Iterator[Validator]:
        return iter(list(self._validators.values()))

    def __len__(self) -> int:
        return len(self._validators)


@lru_cache
def get_registry() -> ValidatorRegistry:
    """Process-wide registry, created on first access with the built-ins loaded."""
    from formguard.validators.builtin import register_builtin_validators

    registry = ValidatorRegistry()
    register_builtin_validators(registry)
    return registry


def register_validator(
    name: str,
    predicate: Predicate,
    message: str,
    scope: ScopeValue = None,
) -> Validator:
    """Register a validator on the process-wide registry."""
    return get_registry().register(name, predicate, message, scope)
