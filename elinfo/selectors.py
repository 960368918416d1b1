"""
Structural identifiers: a full XPath and a CSS selector for an element.

Both walks start at the element and climb towards the document root.  A
walk ends at the root element, or earlier at the nearest ancestor carrying an
``id``, which then anchors the expression (``//*[@id="..."]`` / ``#...``).
Ids are trusted to be unique; they are not re-validated.  An ancestor anchor
is escaped for CSS; an element's own id is emitted as written.
"""

from __future__ import annotations

from typing import Any

from elinfo._base import DomAdapter


def _element_id(doc: DomAdapter, node: Any) -> str:
    return doc.attribute(node, "id") or ""


def _xpath_anchor(element_id: str) -> str:
    return f'//*[@id="{element_id}"]'


def _class_tokens(doc: DomAdapter, node: Any) -> list[str]:
    return (doc.attribute(node, "class") or "").split()


def _css_escape(ident: str) -> str:
    """Escape *ident* for use after ``#`` the way ``CSS.escape`` does."""
    out: list[str] = []
    for i, ch in enumerate(ident):
        code = ord(ch)
        if code == 0:
            out.append("\ufffd")
        elif 0x01 <= code <= 0x1F or code == 0x7F:
            out.append(f"\\{code:x} ")
        elif ch.isdigit() and ch.isascii() and (
                i == 0 or (i == 1 and ident[0] == "-")):
            out.append(f"\\{code:x} ")
        elif ch == "-" and i == 0 and len(ident) == 1:
            out.append("\\-")
        elif code >= 0x80 or ch in "-_" or (ch.isascii() and ch.isalnum()):
            out.append(ch)
        else:
            out.append("\\" + ch)
    return "".join(out)


# ---------------------------------------------------------------------------
# XPath
# ---------------------------------------------------------------------------

def _xpath_segment(doc: DomAdapter, node: Any) -> str:
    """Return ``name`` or ``name[index]`` for one level of the path."""
    name = doc.tag_name(node)
    index = 1 + sum(
        1 for sib in doc.previous_siblings(node) if doc.tag_name(sib) == name
    )

    parent = doc.parent(node)
    same_name = 1
    if parent is not None:
        same_name = sum(
            1 for sib in doc.children(parent) if doc.tag_name(sib) == name
        )

    if same_name > 1:
        return f"{name.lower()}[{index}]"
    return name.lower()


def full_xpath(doc: DomAdapter, node: Any) -> str:
    """Return an XPath that selects *node* in its document."""
    element_id = _element_id(doc, node)
    if element_id:
        return _xpath_anchor(element_id)

    parts: list[str] = []
    current = node
    while current is not None:
        element_id = _element_id(doc, current)
        if element_id:
            return _xpath_anchor(element_id) + "/" + "/".join(parts)
        parts.insert(0, _xpath_segment(doc, current))
        current = doc.parent(current)

    return "/" + "/".join(parts)


# ---------------------------------------------------------------------------
# CSS selector
# ---------------------------------------------------------------------------

def _css_segment(doc: DomAdapter, node: Any) -> str:
    """Return ``tag.class1.class2:nth-child(n)`` for one level of the path."""
    name = doc.tag_name(node)
    segment = name.lower()

    classes = _class_tokens(doc, node)
    if classes:
        segment += "." + ".".join(classes)

    parent = doc.parent(node)
    if parent is not None:
        siblings = doc.children(parent)
        same_name = [sib for sib in siblings if doc.tag_name(sib) == name]
        if len(same_name) > 1:
            # nth-child counts every element child, not just same-tag ones
            segment += f":nth-child({siblings.index(node) + 1})"

    return segment


def css_selector(doc: DomAdapter, node: Any) -> str:
    """Return a CSS selector that selects *node* in its document."""
    element_id = _element_id(doc, node)
    if element_id:
        return f"#{element_id}"

    path: list[str] = []
    current = node
    while current is not None:
        element_id = _element_id(doc, current)
        if element_id:
            path.insert(0, f"#{_css_escape(element_id)}")
            break
        path.insert(0, _css_segment(doc, current))
        current = doc.parent(current)

    return " > ".join(path)


def build_identifiers(doc: DomAdapter, node: Any) -> tuple[str, str]:
    """Return ``(full_xpath, css_selector)`` for *node*."""
    return full_xpath(doc, node), css_selector(doc, node)
