"""elinfo MCP Server — element descriptor tools for browser automation agents.

Exposes a page snapshot tool that assigns element refs, and an element-info
tool that describes one ref without interacting with the page.
"""

from __future__ import annotations

import json
from typing import Literal

from mcp.server.fastmcp import FastMCP

from elinfo.errors import ElementInfoError
from elinfo.format import format_element_info
from elinfo.session import Session

mcp = FastMCP(
    name="elinfo",
    instructions=(
        "elinfo describes elements of the browser page without interacting "
        "with them. Call browser_snapshot to see the page elements with their "
        "refs (e.g., 'e14'), then browser_get_element_info with a ref to get "
        "its XPath, CSS selector, accessible label, value, text and markup.\n\n"
        "Refs are ephemeral — they are only valid for the most recent "
        "snapshot. Take a new snapshot after the page changes."
    ),
)

# ---------------------------------------------------------------------------
# Session state (one per MCP server process)
# ---------------------------------------------------------------------------

_session: Session | None = None


def _get_session() -> Session:
    global _session
    if _session is None:
        _session = Session("web")
    return _session


def _error(message: str) -> str:
    return json.dumps({
        "success": False,
        "message": "",
        "error": message,
    })


# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

@mcp.tool()
def browser_snapshot(
    detail: Literal["standard", "minimal", "full"] = "standard",
) -> str:
    """Capture the current page and list its elements with refs.

    Each line shows one element:

        [ref] tag#id.class "label or text" val="value" (ph="placeholder")

    Indentation shows the element hierarchy.

    Detail levels:

        standard — (default) Hide head, script, style and template content.
        minimal  — Keep only interactive elements and their ancestors.
        full     — Every element of the document.

    Args:
        detail: Pruning level (see above).
    """
    try:
        return _get_session().capture(detail=detail)
    except ElementInfoError as e:
        return _error(str(e))


@mcp.tool()
def browser_get_element_info(element: str, ref: str) -> str:
    """Extract detailed element information without performing a click.

    Returns the element's CSS selector, full XPath, outerHTML, accessible
    label, current value, placeholder and text as JSON.

    Args:
        element: Human-readable element description used to obtain
                 permission to interact with the element.
        ref: Exact target element reference from the page snapshot.
    """
    if not element.strip():
        return _error("An element description is required.")
    if not ref.strip():
        return _error("A ref from the page snapshot is required.")

    try:
        descriptor = _get_session().describe(ref)
    except ElementInfoError as e:
        return _error(str(e))

    return format_element_info(descriptor, element)


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
