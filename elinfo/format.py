"""
elinfo format utilities: compact snapshot text and element-info results.
"""

from __future__ import annotations

import json
from typing import Any, Literal

from elinfo._base import DomAdapter
from elinfo.descriptor import ElementDescriptor
from elinfo.semantics import extract_value_label, resolve_label

Detail = Literal["standard", "minimal", "full"]

# Subtrees that never render
HIDDEN_TAGS = frozenset({"head", "script", "style", "noscript", "template"})

INTERACTIVE_TAGS = frozenset({
    "a", "button", "details", "input", "label", "option", "select",
    "summary", "textarea",
})


# ---------------------------------------------------------------------------
# Snapshot pruning
# ---------------------------------------------------------------------------

def _is_interactive(doc: DomAdapter, node: Any) -> bool:
    """Check if an element can be acted on or carries an explicit role."""
    if doc.tag_name(node).lower() in INTERACTIVE_TAGS:
        return True
    return any(
        doc.attribute(node, attr) is not None
        for attr in ("role", "onclick", "tabindex", "contenteditable")
    )


def _visible_nodes(doc: DomAdapter, node: Any, depth: int, detail: Detail,
                   out: list[tuple[int, Any]]) -> bool:
    """Collect ``(depth, node)`` pairs to show; return True if any was kept."""
    if detail != "full" and doc.tag_name(node).lower() in HIDDEN_TAGS:
        return False

    position = len(out)
    out.append((depth, node))
    kept_child = False
    for child in doc.children(node):
        kept_child |= _visible_nodes(doc, child, depth + 1, detail, out)

    if detail == "minimal" and not kept_child and not _is_interactive(doc, node):
        # Nothing actionable below: drop this node (its subtree was dropped)
        del out[position:]
        return False
    return True


# ---------------------------------------------------------------------------
# Compact text serializer
# ---------------------------------------------------------------------------

def _quote(text: str, limit: int) -> str:
    truncated = text[:limit] + ("..." if len(text) > limit else "")
    truncated = truncated.replace("\\", "\\\\").replace('"', '\\"').replace("\n", " ")
    return f'"{truncated}"'


def _own_text(doc: DomAdapter, node: Any) -> str:
    """Text of leaf elements only, so parents don't repeat their children."""
    if doc.children(node):
        return ""
    return " ".join(doc.text_content(node).split())


def _format_line(doc: DomAdapter, ref: str, node: Any) -> str:
    """Format a single element as a compact one-liner."""
    parts = [f"[{ref}]"]

    head = doc.tag_name(node).lower()
    element_id = doc.attribute(node, "id")
    if element_id:
        head += f"#{element_id}"
    classes = (doc.attribute(node, "class") or "").split()
    if classes:
        head += "." + ".".join(classes)
    parts.append(head)

    name = resolve_label(doc, node) or _own_text(doc, node)
    if name:
        parts.append(_quote(name, 80))

    value = doc.snapshot_value(node)
    if value:
        parts.append(f"val={_quote(value, 120)}")

    placeholder = extract_value_label(doc, node)
    if placeholder:
        parts.append(f"(ph={_quote(placeholder, 30)})")

    return " ".join(parts)


def serialize_snapshot(
    doc: DomAdapter,
    refs: dict[str, Any],
    *,
    detail: Detail = "standard",
) -> str:
    """Serialize a captured document to compact ref-annotated text.

    Refs come from the full tree, so pruning never renumbers elements.

    Args:
        doc: The captured document.
        refs: Mapping of ref -> element, as assigned at capture.
        detail: Pruning level:
            "standard" — Hide head, script, style, noscript and template
                         subtrees. (default)
            "minimal"  — Additionally keep only interactive elements and
                         their ancestors.
            "full"     — Every element.
    """
    ref_of = {id(node): ref for ref, node in refs.items()}

    shown: list[tuple[int, Any]] = []
    _visible_nodes(doc, doc.document_element(), 0, detail, shown)

    lines = [
        f"# elinfo | {doc.url}",
        f"# {len(shown)} elements ({len(refs)} before pruning)",
        "",
    ]
    for depth, node in shown:
        lines.append("  " * depth + _format_line(doc, ref_of[id(node)], node))

    return "\n".join(lines) + "\n"


# ---------------------------------------------------------------------------
# Element info result
# ---------------------------------------------------------------------------

def build_example_code(descriptor: ElementDescriptor, element: str) -> list[str]:
    """Return illustrative Playwright code that reproduces the lookup."""
    return [
        f"# Extract element information for: {element}",
        f"element_info = await page.locator({json.dumps(descriptor.css_selector)})"
        ".evaluate(\"(element) => ({ /* element details */ })\")",
    ]


def format_element_info(descriptor: ElementDescriptor, element: str) -> str:
    """Render a descriptor as the text returned to tool callers."""
    code = "\n".join(build_example_code(descriptor, element))
    return "\n".join([
        "### Ran Playwright code",
        "```python",
        code,
        "```",
        "",
        "### Result",
        descriptor.to_json(indent=2),
        "",
    ])
