"""ElementDescriptor record and its assembly from a document element."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any

from elinfo._base import DomAdapter
from elinfo.selectors import build_identifiers
from elinfo.semantics import (
    extract_text,
    extract_value,
    extract_value_label,
    resolve_label,
)


@dataclass(frozen=True)
class ElementDescriptor:
    """Snapshot-time description of one element.

    ``id``, ``value`` and ``text`` are None when absent; ``value_label`` and
    ``label`` are always strings.
    """

    url: str
    tag_name: str
    id: str | None
    full_xpath: str
    css_selector: str
    outer_html: str
    value: str | None
    value_label: str
    text: str | None
    label: str
    timestamp: int

    def to_dict(self) -> dict:
        """Return the serialized form, keyed as callers expect."""
        return {
            "url": self.url,
            "tagName": self.tag_name,
            "id": self.id,
            "fullXPath": self.full_xpath,
            "cssSelector": self.css_selector,
            "outerHTML": self.outer_html,
            "value": self.value,
            "valueLabel": self.value_label,
            "text": self.text,
            "label": self.label,
            "timeStamp": self.timestamp,
        }

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


def describe_element(doc: DomAdapter, node: Any) -> ElementDescriptor:
    """Build the descriptor of *node* from the document it belongs to."""
    xpath, selector = build_identifiers(doc, node)
    return ElementDescriptor(
        url=doc.url,
        tag_name=doc.tag_name(node).lower(),
        id=doc.attribute(node, "id") or None,
        full_xpath=xpath,
        css_selector=selector,
        outer_html=doc.outer_html(node),
        value=extract_value(doc, node),
        value_label=extract_value_label(doc, node),
        text=extract_text(doc, node),
        label=resolve_label(doc, node),
        timestamp=int(time.time() * 1000),
    )
