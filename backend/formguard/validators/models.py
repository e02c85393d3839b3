"""Validation models — validator definitions, scopes and result structures."""

from enum import Enum
from typing import Any, Callable, Optional, Union

from lxml.html import HtmlElement
from pydantic import BaseModel, ConfigDict, Field

Predicate = Callable[[HtmlElement], bool]

ScopeValue = Union[str, list[str], tuple[str, ...], None]


class ScopeKind(str, Enum):
    """How a scope was declared."""

    SINGLE = "single"
    MULTIPLE = "multiple"


class Scope(BaseModel):
    """Selector scope of a validator.

    A validator either has no scope (``None``), a single selector, or several
    selectors. Several selectors are joined into one selector list.
    """

    model_config = ConfigDict(frozen=True)

    kind: ScopeKind
    selectors: tuple[str, ...]

    @property
    def selector(self) -> str:
        return ", ".join(self.selectors)

    @classmethod
    def from_value(cls, value: ScopeValue) -> Optional["Scope"]:
        """Normalize a raw scope argument. Blank selectors are dropped."""
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip()
            return cls(kind=ScopeKind.SINGLE, selectors=(value,)) if value else None
        selectors = tuple(s.strip() for s in value if s and s.strip())
        if not selectors:
            return None
        return cls(kind=ScopeKind.MULTIPLE, selectors=selectors)


class Validator(BaseModel):
    """A registered validation rule. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    name: str
    predicate: Predicate
    default_message: str
    scope: Optional[Scope] = None
    matcher: Any = Field(default=None, exclude=True, repr=False)  # compiled scope selector

    @property
    def selector(self) -> Optional[str]:
        return self.scope.selector if self.scope else None


class FieldResult(BaseModel):
    """Outcome of validating one field."""

    name: Optional[str] = None      # The field's name attribute
    error_ref: str                  # Id of the field's error list
    valid: bool
    messages: list[str] = Field(default_factory=list)
    failed: list[str] = Field(default_factory=list)  # Names of failing validators


class FormReport(BaseModel):
    """Outcome of validating a whole form."""

    valid: bool
    fields: list[FieldResult] = Field(default_factory=list)
    total_fields: int = 0
    invalid_fields: int = 0
    duration_ms: float = 0.0

    @classmethod
    def build(cls, results: list[FieldResult], duration_ms: float = 0.0) -> "FormReport":
        invalid = sum(1 for r in results if not r.valid)
        return cls(
            valid=invalid == 0,
            fields=results,
            total_fields=len(results),
            invalid_fields=invalid,
            duration_ms=round(duration_ms, 2),
        )
