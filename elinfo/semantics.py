"""
Semantic attributes: accessible label, value, placeholder and visible text.

The label is resolved by an ordered table of rules.  Each rule returns a
string when it matches (possibly empty) or None to pass to the next rule.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from elinfo._base import DomAdapter

logger = logging.getLogger(__name__)

LabelRule = Callable[[DomAdapter, Any], "str | None"]


def _trimmed_text(doc: DomAdapter, node: Any) -> str:
    return doc.text_content(node).strip()


def _from_aria_label(doc: DomAdapter, node: Any) -> str | None:
    return doc.attribute(node, "aria-label") or None


def _from_aria_labelledby(doc: DomAdapter, node: Any) -> str | None:
    labelled_by = doc.attribute(node, "aria-labelledby")
    if not labelled_by:
        return None
    target = doc.get_element_by_id(labelled_by)
    if target is None:
        return None
    return _trimmed_text(doc, target)


def _from_label_for(doc: DomAdapter, node: Any) -> str | None:
    element_id = doc.attribute(node, "id")
    if not element_id:
        return None
    for candidate in doc.iter_elements():
        if (doc.tag_name(candidate).lower() == "label"
                and doc.attribute(candidate, "for") == element_id):
            return _trimmed_text(doc, candidate)
    return None


def _from_enclosing_label(doc: DomAdapter, node: Any) -> str | None:
    label = doc.closest(node, "label")
    if label is None:
        return None
    return _trimmed_text(doc, label)


def _from_title(doc: DomAdapter, node: Any) -> str | None:
    return doc.attribute(node, "title") or None


LABEL_RULES: tuple[tuple[str, LabelRule], ...] = (
    ("aria-label", _from_aria_label),
    ("aria-labelledby", _from_aria_labelledby),
    ("label-for", _from_label_for),
    ("enclosing-label", _from_enclosing_label),
    ("title", _from_title),
)


def resolve_label_source(doc: DomAdapter, node: Any) -> tuple[str | None, str]:
    """Return ``(rule_name, label)``; rule_name is None when nothing matched."""
    for rule_name, rule in LABEL_RULES:
        label = rule(doc, node)
        if label is not None:
            return rule_name, label
    return None, ""


def resolve_label(doc: DomAdapter, node: Any) -> str:
    """Return the best-effort accessible label of *node*, or ``""``."""
    rule_name, label = resolve_label_source(doc, node)
    logger.debug("label for <%s> from %s: %r",
                 doc.tag_name(node).lower(), rule_name or "nothing", label)
    return label


def extract_value(doc: DomAdapter, node: Any) -> str | None:
    """Current form value; empty values and non-controls yield None."""
    return doc.value(node) or None


def extract_value_label(doc: DomAdapter, node: Any) -> str:
    """Placeholder text, ``""`` when absent or unsupported."""
    return doc.placeholder(node) or ""


def extract_text(doc: DomAdapter, node: Any) -> str | None:
    """Trimmed text content; blank text yields None."""
    return _trimmed_text(doc, node) or None
