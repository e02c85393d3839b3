"""Built-in validators — required, number and email.

Registered on the process-wide registry when it is first created.
"""

import re

from lxml.html import HtmlElement

from formguard import dom
from formguard.validators.registry import ValidatorRegistry

NUMBER_PATTERN = re.compile(r"-?(\d*\.)?\d+(e[-+]?\d+)?", re.IGNORECASE | re.ASCII)

# Address part of RFC 2822 (dot-atom or quoted local part, dotted domain).
# Labels may contain dots, so label "." tld covers every (label ".")+ tld.
_UCS = r"\u00A0-\uD7FF\uF900-\uFDCF\uFDF0-\uFFEF"
_ATEXT = r"[a-z\d!#$%&'*+\-/=?^_`{|}~" + _UCS + "]"
_DOT_ATOM = _ATEXT + r"+(?:\." + _ATEXT + r"+)*"
_WSP = r"[\x20\x09]"
_FWS = r"(?:(?:" + _WSP + r"*\x0d\x0a)?" + _WSP + r"+)"
_QTEXT = r"[\x01-\x08\x0b\x0c\x0e-\x1f\x7f\x21\x23-\x5b\x5d-\x7e" + _UCS + "]"
_QUOTED_PAIR = r"\\[\x01-\x09\x0b\x0c\x0d-\x7f" + _UCS + "]"
_QUOTED_STRING = r"\x22(?:" + _FWS + "?(?:" + _QTEXT + "|" + _QUOTED_PAIR + "))*" + _FWS + r"?\x22"
_ALNUM = r"[a-z\d" + _UCS + "]"
_ALPHA = r"[a-z" + _UCS + "]"
_INNER = r"[a-z\d\-._~" + _UCS + "]"
_LABEL = "(?:" + _ALNUM + "(?:" + _INNER + "*" + _ALNUM + ")?)"
_TLD = "(?:" + _ALPHA + "(?:" + _INNER + "*" + _ALPHA + ")?)"

EMAIL_PATTERN = re.compile(
    "(?:" + _DOT_ATOM + "|" + _QUOTED_STRING + ")@" + _LABEL + r"\." + _TLD,
    re.IGNORECASE | re.ASCII,
)

REQUIRED_MESSAGE = "This value is required."
NUMBER_MESSAGE = "This value should be a valid number."
EMAIL_MESSAGE = "This value should be a valid email."


def validate_required(field: HtmlElement) -> bool:
    """Valid if not required, or required and filled in (checked for checkboxes/radios)."""
    if not dom.is_required(field):
        return True
    if dom.is_checkable(field):
        return dom.is_checked(field)
    return len(dom.field_value(field)) > 0


def validate_number(field: HtmlElement) -> bool:
    return NUMBER_PATTERN.fullmatch(dom.field_value(field)) is not None


def validate_email(field: HtmlElement) -> bool:
    return EMAIL_PATTERN.fullmatch(dom.field_value(field)) is not None


def register_builtin_validators(registry: ValidatorRegistry) -> ValidatorRegistry:
    """Register required, number and email, in that order."""
    registry.register("required", validate_required, REQUIRED_MESSAGE, ["input", "textarea", "select"])
    registry.register("number", validate_number, NUMBER_MESSAGE, ['input[type="number"]'])
    registry.register("email", validate_email, EMAIL_MESSAGE, ['input[type="email"]'])
    return registry
