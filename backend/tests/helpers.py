"""Markup helpers for engine tests."""

from __future__ import annotations

import lxml.html


def parse_form(markup: str):
    """Parse markup wrapped in a <form> and return the form element."""
    return lxml.html.fromstring(f"<form>{markup}</form>")


def field_named(form, name: str):
    return form.xpath(f'.//*[@name="{name}"]')[0]


def error_lists(form) -> list:
    return form.xpath('.//ul[contains(concat(" ", @class, " "), " error_list ")]')


def messages_of(error_list) -> list[str]:
    return [li.text for li in error_list.findall("li")]
