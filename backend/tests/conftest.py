"""Shared fixtures: fresh registries and validators per test."""

from __future__ import annotations

import pytest

from formguard.validators import (
    FieldValidator,
    FormValidator,
    ValidatorRegistry,
    register_builtin_validators,
)


@pytest.fixture
def registry() -> ValidatorRegistry:
    """Registry with the built-in validators, independent of the process-wide one."""
    return register_builtin_validators(ValidatorRegistry())


@pytest.fixture
def empty_registry() -> ValidatorRegistry:
    return ValidatorRegistry()


@pytest.fixture
def field_validator(registry) -> FieldValidator:
    return FieldValidator(registry)


@pytest.fixture
def form_validator(field_validator) -> FormValidator:
    return FormValidator(field_validator)
