"""Match engine — decides whether a validator applies to a field."""

from typing import Optional

import structlog
from lxml.html import HtmlElement

from formguard import dom
from formguard.config import get_settings
from formguard.exceptions import DetachedElementError
from formguard.validators.models import Validator

logger = structlog.get_logger()


class MatchEngine:
    """Scope-selector and ``data-selector`` matching.

    A validator applies to a field when its scope selector, searched from the
    field's parent, finds the field, or when the field names the validator in
    its selector override attribute.
    """

    def __init__(self, selector_attribute: Optional[str] = None):
        self.selector_attribute = selector_attribute or get_settings().SELECTOR_ATTRIBUTE

    def selector_tokens(self, field: HtmlElement) -> list[str]:
        """Validator names the field explicitly opts into."""
        return dom.attribute_tokens(field, self.selector_attribute)

    def applies(self, field: HtmlElement, validator: Validator) -> bool:
        """Check if ``validator`` should run against ``field``.

        Raises:
            DetachedElementError: the validator has a scope and the field has
                no parent to search from
        """
        if validator.matcher is not None:
            try:
                if dom.matches_within_parent(field, validator.matcher):
                    return True
            except DetachedElementError:
                logger.warning(
                    "detached_field",
                    validator=validator.name,
                    selector=validator.selector,
                    field=field.get("name"),
                )
                raise
        return validator.name in self.selector_tokens(field)
