"""
Static HTML platform: documents parsed with lxml.

Form values follow what a freshly loaded page reports through the DOM
``value`` property, computed from markup alone.
"""

from __future__ import annotations

import logging
import math
import re
from pathlib import Path
from typing import Any

import lxml.etree
import lxml.html
from cssselect import SelectorError
from lxml.cssselect import CSSSelector

from elinfo._base import DomAdapter, PlatformAdapter
from elinfo.errors import ElementInfoError

logger = logging.getLogger(__name__)

PLACEHOLDER_TAGS = frozenset({"input", "textarea"})


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _parse_number(text: str | None) -> float | None:
    """Parse a floating-point attribute; None when absent or invalid."""
    if text is None:
        return None
    try:
        number = float(text.strip())
    except ValueError:
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def _number_str(number: float) -> str:
    # Numbers read back through the DOM print without a trailing ".0"
    if number == int(number):
        return str(int(number))
    return repr(number)


def _disabled_option(option: Any) -> bool:
    if option.get("disabled") is not None:
        return True
    parent = option.getparent()
    return (parent is not None and parent.tag == "optgroup"
            and parent.get("disabled") is not None)


def _option_value(option: Any) -> str:
    value = option.get("value")
    if value is not None:
        return value
    return _collapse(option.text_content())


def _select_value(select: Any) -> str:
    options = list(select.iter("option"))
    selected = [opt for opt in options if opt.get("selected") is not None]
    multiple = select.get("multiple") is not None
    if selected:
        # A single-choice select keeps only the last option marked selected
        return _option_value(selected[0] if multiple else selected[-1])
    # A single-choice dropdown shows its first enabled option when nothing is selected
    size = select.get("size", "")
    dropdown = not size.isdigit() or int(size) <= 1
    if not multiple and dropdown:
        for option in options:
            if not _disabled_option(option):
                return _option_value(option)
    return ""


def _range_value(element: Any) -> str:
    low = _parse_number(element.get("min"))
    high = _parse_number(element.get("max"))
    low = 0.0 if low is None else low
    high = 100.0 if high is None else high
    if high < low:
        high = low
    value = _parse_number(element.get("value"))
    if value is None:
        value = low + (high - low) / 2
    value = min(max(value, low), high)

    step_attr = (element.get("step") or "").strip().lower()
    if step_attr != "any":
        step = _parse_number(step_attr) or 1.0
        if step < 0:
            step = 1.0
        snapped = low + math.floor((value - low) / step + 0.5) * step
        if snapped > high:
            snapped -= step
        value = max(snapped, low)
    return _number_str(value)


def _color_value(element: Any) -> str:
    value = (element.get("value") or "").strip()
    if re.fullmatch(r"#[0-9a-fA-F]{6}", value):
        return value.lower()
    return "#000000"


def _input_value(element: Any) -> str:
    input_type = (element.get("type") or "text").lower()
    if input_type == "file":
        return ""
    if input_type == "range":
        return _range_value(element)
    if input_type == "color":
        return _color_value(element)
    value = element.get("value")
    if value is None and input_type in ("checkbox", "radio"):
        return "on"
    return value or ""


def _textarea_value(element: Any) -> str:
    # The parser drops a newline right after the start tag
    text = element.text_content()
    if text.startswith("\r\n"):
        return text[2:]
    if text.startswith("\n"):
        return text[1:]
    return text


def _list_item_value(element: Any) -> str:
    match = re.match(r"\s*([-+]?\d+)", element.get("value") or "")
    number = int(match.group(1)) if match else 0
    return str(number) if number else ""


def _meter_value(element: Any) -> str:
    low = _parse_number(element.get("min"))
    high = _parse_number(element.get("max"))
    low = 0.0 if low is None else low
    high = 1.0 if high is None else high
    if high < low:
        high = low
    value = _parse_number(element.get("value"))
    value = min(max(0.0 if value is None else value, low), high)
    return _number_str(value) if value else ""


def _progress_value(element: Any) -> str:
    high = _parse_number(element.get("max"))
    if high is None or high <= 0:
        high = 1.0
    value = _parse_number(element.get("value"))
    value = min(max(0.0 if value is None else value, 0.0), high)
    return _number_str(value) if value else ""


_VALUE_GETTERS = {
    "input": _input_value,
    "textarea": _textarea_value,
    "select": _select_value,
    "option": _option_value,
    "button": lambda el: el.get("value") or "",
    "output": lambda el: el.text_content(),
    "data": lambda el: el.get("value") or "",
    "param": lambda el: el.get("value") or "",
    "li": _list_item_value,
    "meter": _meter_value,
    "progress": _progress_value,
}


class HtmlDocument(DomAdapter):
    """DomAdapter over an lxml element tree."""

    def __init__(self, root: Any, url: str = "about:blank") -> None:
        self._root = root
        self._url = url

    @classmethod
    def from_string(cls, markup: str | bytes, url: str = "about:blank") -> HtmlDocument:
        parser = None
        if isinstance(markup, bytes):
            parser = lxml.html.HTMLParser(encoding="utf-8")
        return cls(lxml.html.document_fromstring(markup, parser=parser), url=url)

    @property
    def url(self) -> str:
        return self._url

    def document_element(self) -> Any:
        return self._root

    def parent(self, node: Any) -> Any | None:
        return node.getparent()

    def children(self, node: Any) -> list[Any]:
        # Comments and processing instructions have a non-string tag
        return [child for child in node if isinstance(child.tag, str)]

    def previous_siblings(self, node: Any) -> list[Any]:
        return [sib for sib in node.itersiblings(preceding=True)
                if isinstance(sib.tag, str)]

    def tag_name(self, node: Any) -> str:
        return node.tag

    def attribute(self, node: Any, name: str) -> str | None:
        return node.get(name)

    def text_content(self, node: Any) -> str:
        return str(node.text_content())

    def outer_html(self, node: Any) -> str:
        return lxml.html.tostring(node, encoding="unicode", with_tail=False)

    def value(self, node: Any) -> str | None:
        getter = _VALUE_GETTERS.get(node.tag.lower())
        if getter is None:
            return None
        return str(getter(node))

    def placeholder(self, node: Any) -> str | None:
        if node.tag.lower() not in PLACEHOLDER_TAGS:
            return None
        return node.get("placeholder")

    def query_selector(self, selector: str) -> Any | None:
        try:
            matcher = CSSSelector(selector, translator="html")
        except SelectorError as e:
            raise ElementInfoError(f"Invalid selector '{selector}': {e}") from e
        matches = matcher(self._root)
        return matches[0] if matches else None

    def get_element_by_id(self, element_id: str) -> Any | None:
        return self._root.get_element_by_id(element_id, None)

    def iter_elements(self, root: Any | None = None):
        start = root if root is not None else self._root
        return (el for el in start.iter() if isinstance(el.tag, str))


class HtmlAdapter(PlatformAdapter):
    """Loads a document from a file path or a markup string."""

    def __init__(
        self,
        *,
        path: str | None = None,
        markup: str | None = None,
        url: str | None = None,
    ) -> None:
        if (path is None) == (markup is None):
            raise ValueError("Provide exactly one of 'path' or 'markup'")
        self._path = path
        self._markup = markup
        self._url = url
        self._document: HtmlDocument | None = None

    @property
    def platform_name(self) -> str:
        return "html"

    def initialize(self) -> None:
        if self._document is not None:
            return
        if self._path is not None:
            markup = Path(self._path).read_bytes()
            url = self._url or Path(self._path).resolve().as_uri()
        else:
            markup = self._markup
            url = self._url or "about:blank"
        try:
            self._document = HtmlDocument.from_string(markup, url=url)
        except (lxml.etree.ParserError, ValueError) as e:
            raise ElementInfoError(f"Cannot parse HTML from {url}: {e}") from e
        logger.debug("parsed HTML document %s", url)

    def capture_document(self) -> HtmlDocument:
        self.initialize()
        return self._document
