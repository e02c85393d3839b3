"""Tests for field and form validation, including error-list reconciliation."""

from __future__ import annotations

import lxml.html
import pytest
from lxml.html import builder as E

from formguard.config import Settings
from formguard.exceptions import DetachedElementError
from formguard.validators import FieldValidator, FormValidator, ValidatorRegistry
from formguard.validators.builtin import EMAIL_MESSAGE, NUMBER_MESSAGE, REQUIRED_MESSAGE
from tests.helpers import error_lists, field_named, messages_of, parse_form


# ── Field verdicts ──

def test_required_empty_field_fails(field_validator: FieldValidator) -> None:
    form = parse_form('<input name="name" required>')
    field = field_named(form, "name")

    assert field_validator.validate_field(field) is False
    assert "error" in field.classes
    [error_list] = error_lists(form)
    assert messages_of(error_list) == [REQUIRED_MESSAGE]
    assert error_list.get("id") == field.get("data-error-ref")
    assert field.getnext() is error_list


def test_filled_required_field_passes(field_validator: FieldValidator) -> None:
    form = parse_form('<input name="name" value="Ada" required class="wide">')
    field = field_named(form, "name")

    assert field_validator.validate_field(field) is True
    assert "error" not in field.classes
    assert "wide" in field.classes
    assert error_lists(form) == []


def test_email_field(field_validator: FieldValidator) -> None:
    form = parse_form(
        '<input type="email" name="good" value="a@b.com">'
        '<input type="email" name="bad" value="not-an-email">'
    )
    assert field_validator.validate_field(field_named(form, "good")) is True

    result = field_validator.check_field(field_named(form, "bad"))
    assert result.valid is False
    assert result.messages == [EMAIL_MESSAGE]
    assert result.failed == ["email"]


def test_selector_override_applies_number(field_validator: FieldValidator) -> None:
    form = parse_form('<input type="text" name="age" value="twelve" data-selector="number">')
    result = field_validator.check_field(field_named(form, "age"))
    assert result.valid is False
    assert result.messages == [NUMBER_MESSAGE]


def test_message_override(field_validator: FieldValidator) -> None:
    form = parse_form('<input name="name" required data-error-required="Please fill this in">')
    field_validator.validate_field(field_named(form, "name"))
    [error_list] = error_lists(form)
    assert messages_of(error_list) == ["Please fill this in"]


def test_empty_message_override_falls_back(field_validator: FieldValidator) -> None:
    form = parse_form('<input name="name" required data-error-required="">')
    assert field_validator.check_field(field_named(form, "name")).messages == [REQUIRED_MESSAGE]


def test_messages_follow_registration_order(field_validator: FieldValidator) -> None:
    form = parse_form('<input type="email" name="mail" required>')
    result = field_validator.check_field(field_named(form, "mail"))
    assert result.failed == ["required", "email"]
    assert result.messages == [REQUIRED_MESSAGE, EMAIL_MESSAGE]


@pytest.mark.parametrize(
    "markup, valid",
    [
        ('<input type="checkbox" name="f" required>', False),
        ('<input type="checkbox" name="f" required checked>', True),
        ('<input type="radio" name="f" value="a" required>', False),
        ('<textarea name="f" required></textarea>', False),
        ('<textarea name="f" required>Hello</textarea>', True),
        ('<select name="f" required><option value="">Pick</option><option value="x">X</option></select>', False),
        ('<select name="f" required><option value="">Pick</option><option value="x" selected>X</option></select>', True),
        ('<input type="number" name="f" value="1.5e3">', True),
        ('<input type="number" name="f" value="abc">', False),
    ],
)
def test_builtin_field_kinds(field_validator: FieldValidator, markup: str, valid: bool) -> None:
    form = parse_form(markup)
    field = field_named(form, "f")
    assert field_validator.validate_field(field) is valid
    assert ("error" in field.classes) is (not valid)


# ── Reconciliation ──

def test_revalidation_replaces_error_list(field_validator: FieldValidator) -> None:
    form = parse_form('<input name="name" required>')
    field = field_named(form, "name")

    field_validator.validate_field(field)
    first_ref = field.get("data-error-ref")
    first_markup = lxml.html.tostring(form)

    assert field_validator.validate_field(field) is False
    assert len(error_lists(form)) == 1
    assert field.get("data-error-ref") == first_ref
    assert lxml.html.tostring(form) == first_markup


def test_fixed_field_loses_error_list_but_keeps_ref(field_validator: FieldValidator) -> None:
    form = parse_form('<input name="name" required>')
    field = field_named(form, "name")
    field_validator.validate_field(field)
    ref = field.get("data-error-ref")

    field.set("value", "Ada")
    assert field_validator.validate_field(field) is True
    assert error_lists(form) == []
    assert "error" not in field.classes
    assert field.get("data-error-ref") == ref


def test_error_ref_is_set_even_when_valid(field_validator: FieldValidator) -> None:
    form = parse_form('<input name="name" value="Ada">')
    field = field_named(form, "name")
    result = field_validator.check_field(field)
    assert result.error_ref.startswith("error-")
    assert field.get("data-error-ref") == result.error_ref


def test_error_refs_are_unique(field_validator: FieldValidator) -> None:
    form = parse_form("".join(f'<input name="f{i}" required>' for i in range(50)))
    refs = {field_validator.check_field(field_named(form, f"f{i}")).error_ref for i in range(50)}
    assert len(refs) == 50


def test_markup_from_earlier_run_is_replaced(registry: ValidatorRegistry) -> None:
    form = parse_form(
        '<input name="name" required data-error-ref="error-old" class="error">'
        '<ul class="error_list" id="error-old"><li class="error_list__item">Stale</li></ul>'
    )
    field = field_named(form, "name")

    assert FieldValidator(registry).validate_field(field) is False
    [error_list] = error_lists(form)
    assert error_list.get("id") == "error-old"
    assert messages_of(error_list) == [REQUIRED_MESSAGE]


def test_unrelated_sibling_is_left_alone(field_validator: FieldValidator) -> None:
    form = parse_form('<input name="name" value="Ada" data-error-ref="error-x"><ul id="menu"></ul>')
    field_validator.validate_field(field_named(form, "name"))
    assert form.xpath('.//ul[@id="menu"]')


def test_tail_text_survives_reconciliation(field_validator: FieldValidator) -> None:
    form = parse_form('<label>Name <input name="name" required> (required)</label>')
    field = field_named(form, "name")
    field_validator.validate_field(field)
    field.set("value", "Ada")
    field_validator.validate_field(field)
    assert form.text_content() == "Name  (required)"


def test_messages_are_escaped(empty_registry: ValidatorRegistry) -> None:
    empty_registry.register("strict", lambda field: False, "<b>Nope</b> & more", "input")
    form = parse_form('<input name="name">')
    FieldValidator(empty_registry).validate_field(field_named(form, "name"))

    markup = lxml.html.tostring(form, encoding="unicode")
    assert "&lt;b" in markup
    assert "&amp; more" in markup
    assert "<b>" not in markup


# ── Duplicate messages ──

def _register_twins(registry: ValidatorRegistry) -> None:
    registry.register("first", lambda field: False, "Same message.", "input")
    registry.register("second", lambda field: False, "Same message.", "input")


def test_duplicate_messages_are_collapsed(empty_registry: ValidatorRegistry) -> None:
    _register_twins(empty_registry)
    form = parse_form('<input name="name">')
    result = FieldValidator(empty_registry).check_field(field_named(form, "name"))
    assert result.failed == ["first", "second"]
    assert result.messages == ["Same message."]


def test_duplicate_messages_can_be_kept(empty_registry: ValidatorRegistry) -> None:
    _register_twins(empty_registry)
    form = parse_form('<input name="name">')
    validator = FieldValidator(empty_registry, settings=Settings(DEDUPLICATE_ERRORS=False))
    validator.validate_field(field_named(form, "name"))
    [error_list] = error_lists(form)
    assert messages_of(error_list) == ["Same message.", "Same message."]


# ── Errors ──

def test_predicate_errors_propagate(empty_registry: ValidatorRegistry) -> None:
    def broken(field) -> bool:
        raise RuntimeError("boom")

    empty_registry.register("broken", broken, "Broken.", "input")
    form = parse_form('<input name="name">')
    with pytest.raises(RuntimeError, match="boom"):
        FieldValidator(empty_registry).validate_field(field_named(form, "name"))


# ── Forms ──

def test_form_visits_every_field(form_validator: FormValidator) -> None:
    form = parse_form(
        '<input name="missing" required>'
        '<input name="present" value="here" required>'
    )
    assert form_validator.validate_form(form) is False

    missing = field_named(form, "missing")
    present = field_named(form, "present")
    assert "error" in missing.classes
    assert "error" not in present.classes
    assert present.get("data-error-ref")
    assert len(error_lists(form)) == 1


def test_form_report(form_validator: FormValidator) -> None:
    form = parse_form(
        '<input type="email" name="mail" value="x">'
        '<input type="number" name="count" value="3">'
        '<textarea name="note" required></textarea>'
    )
    report = form_validator.check_form(form)
    assert report.valid is False
    assert report.total_fields == 3
    assert report.invalid_fields == 2
    assert [r.name for r in report.fields] == ["mail", "count", "note"]
    assert [r.valid for r in report.fields] == [False, True, False]


def test_valid_form(form_validator: FormValidator) -> None:
    form = parse_form('<input type="email" name="mail" value="a@b.com" required>')
    assert form_validator.validate_form(form) is True
    assert error_lists(form) == []


def test_detached_invalid_field_is_left_untouched(empty_registry: ValidatorRegistry) -> None:
    empty_registry.register("manual", lambda field: False, "Nope.")
    field = E.INPUT(name="loose", **{"data-selector": "manual"})

    with pytest.raises(DetachedElementError):
        FieldValidator(empty_registry).validate_field(field)

    assert field.get("class") is None
    assert field.get("data-error-ref") is None
