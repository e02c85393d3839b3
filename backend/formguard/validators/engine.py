"""Validation engine — validates fields and forms and keeps their error markup in sync.

Usage:
    registry = ValidatorRegistry()
    register_builtin_validators(registry)
    form_validator = FormValidator(FieldValidator(registry))
    if not form_validator.validate_form(form):
        # Invalid fields now carry the error class and an error list
"""

import time
import uuid
from typing import Callable, Optional

import structlog
from lxml.html import HtmlElement

from formguard import dom
from formguard.config import Settings, get_settings
from formguard.exceptions import DetachedElementError
from formguard.validators.matching import MatchEngine
from formguard.validators.models import FieldResult, FormReport
from formguard.validators.registry import ValidatorRegistry, get_registry

logger = structlog.get_logger()


class FieldValidator:
    """Runs every applicable validator against one field.

    Each call recomputes the verdict from scratch. The only state carried
    between calls is the field's error-ref attribute and the handle to the
    error list rendered for it, kept in a side-table keyed by that ref.
    """

    def __init__(
        self,
        registry: Optional[ValidatorRegistry] = None,
        match_engine: Optional[MatchEngine] = None,
        settings: Optional[Settings] = None,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self.registry = registry if registry is not None else get_registry()
        self.settings = settings or get_settings()
        self.match_engine = match_engine or MatchEngine(self.settings.SELECTOR_ATTRIBUTE)
        self._id_factory = id_factory or self._generate_error_ref
        self._fragments: dict[str, HtmlElement] = {}

    def validate_field(self, field: HtmlElement) -> bool:
        """Validate an input, select or textarea element.

        Returns:
            True if the value is valid, False if not
        """
        return self.check_field(field).valid

    def check_field(self, field: HtmlElement) -> FieldResult:
        """Validate a field and return the full result."""
        messages: list[str] = []
        failed: list[str] = []

        for validator in self.registry:
            if not self.match_engine.applies(field, validator):
                continue
            # Predicate exceptions propagate; a raising predicate is a bug in the validator
            if validator.predicate(field):
                continue
            failed.append(validator.name)
            message = self._message_for(field, validator.name, validator.default_message)
            if self.settings.DEDUPLICATE_ERRORS and message in messages:
                continue
            messages.append(message)

        if messages and field.getparent() is None:
            raise DetachedElementError()

        valid = not failed
        dom.set_class(field, self.settings.ERROR_CLASS, not valid)
        error_ref = self._reconcile(field, messages)

        logger.debug(
            "field_validated",
            field=field.get("name"),
            valid=valid,
            failed=failed,
            error_ref=error_ref,
        )

        return FieldResult(
            name=field.get("name"),
            error_ref=error_ref,
            valid=valid,
            messages=messages,
            failed=failed,
        )

    # ── Helper Methods ──

    def _message_for(self, field: HtmlElement, name: str, default: str) -> str:
        """Per-field override from data-error-<name>, else the default message."""
        override = field.get(self.settings.ERROR_MESSAGE_PREFIX + name)
        return override if override else default

    def _reconcile(self, field: HtmlElement, messages: list[str]) -> str:
        """Replace the field's error list with one for ``messages``.

        The previous list is always removed; a new one is rendered only if
        there are messages. Returns the field's error ref.
        """
        ref_attribute = self.settings.ERROR_REF_ATTRIBUTE
        error_ref = field.get(ref_attribute)

        if error_ref:
            previous = self._owned_fragment(field, error_ref)
            if previous is not None:
                dom.remove_node(previous)
        else:
            error_ref = self._id_factory()
            field.set(ref_attribute, error_ref)

        if messages:
            fragment = dom.render_error_list(
                messages,
                error_ref,
                list_class=self.settings.ERROR_LIST_CLASS,
                item_class=self.settings.ERROR_ITEM_CLASS,
            )
            dom.insert_after(fragment, field)
            self._fragments[error_ref] = fragment

        return error_ref

    def _owned_fragment(self, field: HtmlElement, error_ref: str) -> Optional[HtmlElement]:
        """The error list currently rendered for ``field``, if any.

        Falls back to the field's next sibling for markup annotated by another
        validator instance (e.g. a document parsed from an earlier response).
        """
        fragment = self._fragments.pop(error_ref, None)
        parent = field.getparent()
        if fragment is not None and parent is not None and fragment.getparent() is parent:
            return fragment
        sibling = field.getnext()
        if sibling is not None and sibling.get("id") == error_ref:
            return sibling
        return None

    def _generate_error_ref(self) -> str:
        return f"{self.settings.ERROR_REF_PREFIX}{uuid.uuid4().hex}"


class FormValidator:
    """Validates every field of a form.

    All fields are visited even after an invalid one, so that each gets its
    error markup updated.
    """

    def __init__(self, field_validator: Optional[FieldValidator] = None):
        self.field_validator = field_validator or FieldValidator()

    def validate_form(self, form: HtmlElement) -> bool:
        """Validate a whole form.

        Returns:
            True if every field is valid, False if not
        """
        return self.check_form(form).valid

    def check_form(self, form: HtmlElement) -> FormReport:
        start_time = time.perf_counter()

        results = [self.field_validator.check_field(field) for field in dom.form_fields(form)]

        duration = (time.perf_counter() - start_time) * 1000
        report = FormReport.build(results, duration)

        logger.info(
            "form_validated",
            form=form.get("id") or form.get("name"),
            valid=report.valid,
            total_fields=report.total_fields,
            invalid_fields=report.invalid_fields,
            duration_ms=report.duration_ms,
        )

        return report


def get_form_validator() -> FormValidator:
    """Form validator bound to the process-wide registry.

    A new instance per call, so no error-list handles outlive the caller's
    tree; re-validation finds earlier lists through the field's next sibling.
    """
    return FormValidator(FieldValidator(get_registry()))


def validate_field(field: HtmlElement) -> bool:
    """Validate one field against the process-wide registry."""
    return get_form_validator().field_validator.validate_field(field)


def validate_form(form: HtmlElement) -> bool:
    """Validate a form against the process-wide registry."""
    return get_form_validator().validate_form(form)
