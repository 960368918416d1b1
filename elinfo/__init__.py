"""
elinfo -- element descriptors for browser automation.

Given an element of a captured page, compute a serializable descriptor:
a full XPath and CSS selector to relocate it, plus its accessible label,
value, placeholder, text and markup.  Nothing is clicked or focused.

Quick start::

    import elinfo

    # Describe the first element matching a selector in static HTML
    info = elinfo.describe_html(markup, selector="input[name=q]")
    print(info.to_json())

    # Snapshot a live browser tab (CDP on localhost:9222), then describe
    session = elinfo.Session("web")
    print(session.capture())
    info = session.describe("e14")
"""

from __future__ import annotations

from elinfo._base import DomAdapter, PlatformAdapter
from elinfo._router import detect_platform, get_adapter
from elinfo.descriptor import ElementDescriptor, describe_element
from elinfo.errors import CDPError, ElementInfoError, RefNotFoundError
from elinfo.format import format_element_info, serialize_snapshot
from elinfo.selectors import build_identifiers, css_selector, full_xpath
from elinfo.semantics import LABEL_RULES, resolve_label
from elinfo.session import Session

__all__ = [
    "describe_html",
    "Session",
    "ElementDescriptor",
    "describe_element",
    # Errors
    "ElementInfoError",
    "RefNotFoundError",
    "CDPError",
    # Advanced / building blocks
    "DomAdapter",
    "PlatformAdapter",
    "get_adapter",
    "detect_platform",
    "build_identifiers",
    "full_xpath",
    "css_selector",
    "resolve_label",
    "LABEL_RULES",
    "serialize_snapshot",
    "format_element_info",
]


def describe_html(
    markup: str,
    *,
    selector: str | None = None,
    ref: str | None = None,
    url: str | None = None,
) -> ElementDescriptor:
    """Describe one element of an HTML string, by CSS selector or snapshot ref."""
    session = Session("html", markup=markup, url=url)
    session.capture()
    return session.describe(ref, selector=selector)
