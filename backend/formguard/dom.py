"""DOM helpers — the small set of tree operations the engine needs.

Everything here works on ``lxml.html`` elements. CSS selectors are compiled
with ``lxml.cssselect`` (backed by the ``cssselect`` package).
"""

from typing import Optional

import lxml.html
from lxml.cssselect import CSSSelector, SelectorError
from lxml.etree import ParserError
from lxml.html import HtmlElement
from lxml.html import builder as E

from formguard.exceptions import DetachedElementError, DocumentError, InvalidScopeError

FORM_ELEMENTS = ("input", "select", "textarea")

CHECKABLE_TYPES = {"checkbox", "radio"}


# ── Parsing / serialization ──

def parse_document(markup: str) -> HtmlElement:
    """Parse an HTML document or fragment into an element tree."""
    if not markup or not markup.strip():
        raise DocumentError("Cannot parse empty markup")
    try:
        return lxml.html.fromstring(markup)
    except (ParserError, ValueError) as e:
        raise DocumentError(f"Cannot parse markup: {e}") from e


def serialize(element: HtmlElement) -> str:
    """Serialize an element (and its subtree) back to HTML."""
    return lxml.html.tostring(element, encoding="unicode")


def find_form(root: HtmlElement, selector: Optional[str] = None) -> HtmlElement:
    """Locate a form inside ``root``.

    Without a selector the first ``<form>`` wins; ``root`` itself counts.
    """
    if selector:
        compiled = compile_selector(selector)
        matches = compiled(root)
    else:
        matches = list(root.iter("form"))
    if not matches:
        raise DocumentError(f"No form found for selector '{selector or 'form'}'")
    return matches[0]


def form_fields(form: HtmlElement) -> list[HtmlElement]:
    """All input/select/textarea descendants of ``form`` in document order."""
    return [el for el in form.iterdescendants(*FORM_ELEMENTS)]


# ── Selectors ──

def compile_selector(selector: str) -> CSSSelector:
    try:
        return CSSSelector(selector, translator="html")
    except SelectorError as e:
        raise InvalidScopeError(selector, str(e)) from e


def matches_within_parent(element: HtmlElement, selector: CSSSelector) -> bool:
    """Check if ``element`` is among the parent subtree elements matched by ``selector``.

    Selector parts are matched against the whole tree, so ancestors above the
    parent may satisfy them, as with ``querySelectorAll`` on the parent.

    Raises:
        DetachedElementError: the element has no parent to search from
    """
    parent = element.getparent()
    if parent is None:
        raise DetachedElementError(selector.css)
    root = element.getroottree().getroot()
    return any(found is element for found in selector(root))


# ── Attributes / classes ──

def attribute_tokens(element: HtmlElement, attribute: str) -> list[str]:
    """Whitespace-separated tokens of an attribute (empty if absent)."""
    return (element.get(attribute) or "").split()


def set_class(element: HtmlElement, name: str, present: bool) -> None:
    """Add or remove a single CSS class, leaving the others alone."""
    if present:
        element.classes.add(name)
    else:
        element.classes.discard(name)


# ── Field state ──

def is_required(field: HtmlElement) -> bool:
    return field.get("required") is not None


def is_checkable(field: HtmlElement) -> bool:
    return field.tag == "input" and (field.get("type") or "").lower() in CHECKABLE_TYPES


def is_checked(field: HtmlElement) -> bool:
    return field.get("checked") is not None


def field_value(field: HtmlElement) -> str:
    """Current value of a field as the browser would submit it."""
    if field.tag == "textarea":
        return field.text_content()
    if field.tag == "select":
        options = list(field.iter("option"))
        selected = [opt for opt in options if opt.get("selected") is not None]
        if not selected and field.get("multiple") is None:
            # A single select without an explicit choice shows its first enabled option
            selected = [opt for opt in options if opt.get("disabled") is None][:1]
        values = []
        for opt in selected:
            value = opt.get("value")
            values.append(value if value is not None else opt.text_content().strip())
        return ",".join(values)
    return field.get("value") or ""


# ── Insertion / removal ──

def insert_after(node: HtmlElement, reference: HtmlElement) -> None:
    """Insert ``node`` as the next element sibling of ``reference``."""
    reference.addnext(node)


def remove_node(node: HtmlElement) -> None:
    """Detach ``node`` from its tree, keeping any text that followed it."""
    if node.getparent() is not None:
        node.drop_tree()


def render_error_list(
    messages: list[str],
    ref: str,
    list_class: str = "error_list",
    item_class: str = "error_list__item",
) -> HtmlElement:
    """Build the ``<ul>`` fragment listing a field's error messages.

    Messages are set as element text, so serialization escapes them.
    """
    items = [E.LI(E.CLASS(item_class), message) for message in messages]
    return E.UL(E.CLASS(list_class), *items, id=ref)
