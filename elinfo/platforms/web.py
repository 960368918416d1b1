"""
Web platform: live Chromium tabs over the Chrome DevTools Protocol.

A capture is a single ``DOM.getDocument`` call with unlimited depth, so the
whole tree is read at one instant and walked in memory afterwards.  Only the
element being described is queried again, for its markup and live value.

Connection settings come from the environment unless passed explicitly:

    ELINFO_CDP_HOST     (default: localhost)
    ELINFO_CDP_PORT     (default: 9222)
    ELINFO_CDP_TIMEOUT  seconds (default: 15)
"""

from __future__ import annotations

import json
import logging
import os
import time
import urllib.error
import urllib.request
from dataclasses import dataclass, field
from typing import Any

import websocket

from elinfo._base import DomAdapter, PlatformAdapter
from elinfo.errors import CDPError

logger = logging.getLogger(__name__)

ELEMENT_NODE = 1
TEXT_NODE = 3
CDATA_SECTION_NODE = 4

PLACEHOLDER_TAGS = frozenset({"input", "textarea"})

# Mirrors `element.value || null` evaluated in the page
_VALUE_FUNCTION = (
    "function() { return ('value' in this && this.value) "
    "? String(this.value) : null; }"
)


# ---------------------------------------------------------------------------
# Connection
# ---------------------------------------------------------------------------

def discover_targets(host: str, port: int, timeout: float = 5.0) -> list[dict]:
    """Return the DevTools target list from ``http://host:port/json``."""
    url = f"http://{host}:{port}/json"
    try:
        with urllib.request.urlopen(url, timeout=timeout) as resp:
            return json.loads(resp.read().decode("utf-8"))
    except (urllib.error.URLError, OSError) as e:
        raise CDPError(
            f"Cannot reach DevTools at {host}:{port} ({e}). "
            f"Start the browser with --remote-debugging-port={port}"
        ) from e


class CDPConnection:
    """Blocking request/response channel to a single CDP target."""

    def __init__(self, ws_url: str, timeout: float = 15.0) -> None:
        self._ws_url = ws_url
        self._timeout = timeout
        self._ws: websocket.WebSocket | None = None
        self._msg_id = 0

    def connect(self) -> None:
        if self._ws is not None:
            return
        try:
            self._ws = websocket.create_connection(
                self._ws_url, timeout=self._timeout, suppress_origin=True,
            )
        except (websocket.WebSocketException, OSError) as e:
            raise CDPError(f"CDP connection to {self._ws_url} failed: {e}") from e
        logger.info("CDP connected to %s", self._ws_url[:80])

    def close(self) -> None:
        if self._ws is not None:
            try:
                self._ws.close()
            except (websocket.WebSocketException, OSError) as e:
                logger.debug("CDP close failed: %s", e)
        self._ws = None

    @property
    def connected(self) -> bool:
        return self._ws is not None

    def send(self, method: str, params: dict | None = None) -> dict:
        """Send a CDP command and return its ``result`` dict.

        Events received while waiting are dropped.
        """
        if self._ws is None:
            raise CDPError("Not connected")

        self._msg_id += 1
        msg_id = self._msg_id
        message: dict = {"id": msg_id, "method": method}
        if params:
            message["params"] = params

        logger.debug("CDP -> %s", method)
        deadline = time.monotonic() + self._timeout
        try:
            self._ws.send(json.dumps(message))
            while time.monotonic() < deadline:
                data = json.loads(self._ws.recv())
                if data.get("id") != msg_id:
                    continue
                if "error" in data:
                    error = data["error"]
                    raise CDPError(f"{method} failed: {error.get('message', error)}")
                return data.get("result", {})
        except websocket.WebSocketTimeoutException as e:
            self.close()
            raise CDPError(f"Timeout waiting for response to {method}") from e
        except (websocket.WebSocketException, OSError) as e:
            self.close()
            raise CDPError(f"{method} failed: {e}") from e
        raise CDPError(f"Timeout waiting for response to {method}")


# ---------------------------------------------------------------------------
# Captured tree
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class CDPNode:
    """One node of a ``DOM.getDocument`` result."""

    node_id: int
    backend_node_id: int
    node_type: int
    node_name: str
    node_value: str = ""
    attributes: dict[str, str] = field(default_factory=dict)
    children: list[CDPNode] = field(default_factory=list)
    parent: CDPNode | None = None
    # Filled in by CDPDocument.prepare()
    outer_html: str | None = None
    live_value: str | None = None
    prepared: bool = False

    @property
    def is_element(self) -> bool:
        return self.node_type == ELEMENT_NODE


def _build_node(raw: dict, parent: CDPNode | None,
                index: dict[int, CDPNode]) -> CDPNode:
    flat = raw.get("attributes", [])
    node = CDPNode(
        node_id=raw["nodeId"],
        backend_node_id=raw.get("backendNodeId", 0),
        node_type=raw["nodeType"],
        node_name=raw.get("nodeName", ""),
        node_value=raw.get("nodeValue", ""),
        attributes=dict(zip(flat[::2], flat[1::2])),
        parent=parent,
    )
    index[node.node_id] = node
    node.children = [_build_node(child, node, index)
                     for child in raw.get("children", [])]
    return node


class CDPDocument(DomAdapter):
    """DomAdapter over an in-memory ``DOM.getDocument`` tree."""

    def __init__(self, raw_root: dict, connection: CDPConnection | None = None) -> None:
        self._conn = connection
        self._index: dict[int, CDPNode] = {}
        self._document = _build_node(raw_root, None, self._index)
        self._url = raw_root.get("documentURL", "")
        self._root = next(
            (child for child in self._document.children if child.is_element),
            None,
        )
        if self._root is None:
            raise CDPError("Captured document has no root element")

    @property
    def url(self) -> str:
        return self._url

    @property
    def node_count(self) -> int:
        return len(self._index)

    def node_by_id(self, node_id: int) -> CDPNode | None:
        return self._index.get(node_id)

    def document_element(self) -> CDPNode:
        return self._root

    def parent(self, node: CDPNode) -> CDPNode | None:
        parent = node.parent
        if parent is None or not parent.is_element:
            return None
        return parent

    def children(self, node: CDPNode) -> list[CDPNode]:
        return [child for child in node.children if child.is_element]

    def tag_name(self, node: CDPNode) -> str:
        return node.node_name

    def attribute(self, node: CDPNode, name: str) -> str | None:
        return node.attributes.get(name)

    def text_content(self, node: CDPNode) -> str:
        parts: list[str] = []
        stack = [node]
        while stack:
            current = stack.pop()
            if current.node_type in (TEXT_NODE, CDATA_SECTION_NODE):
                parts.append(current.node_value)
            stack.extend(reversed(current.children))
        return "".join(parts)

    def outer_html(self, node: CDPNode) -> str:
        self.prepare(node)
        return node.outer_html or ""

    def value(self, node: CDPNode) -> str | None:
        self.prepare(node)
        return node.live_value

    def placeholder(self, node: CDPNode) -> str | None:
        if node.node_name.lower() not in PLACEHOLDER_TAGS:
            return None
        return node.attributes.get("placeholder")

    def query_selector(self, selector: str) -> CDPNode | None:
        if self._conn is None:
            raise CDPError("query_selector needs a live connection")
        result = self._conn.send("DOM.querySelector", {
            "nodeId": self._document.node_id,
            "selector": selector,
        })
        return self._index.get(result.get("nodeId", 0))

    def snapshot_value(self, node: CDPNode) -> str | None:
        # The value attribute is in the captured tree; the live value is not
        return node.attributes.get("value")

    def prepare(self, node: CDPNode, *, refresh: bool = False) -> None:
        """Fetch the outer HTML and live ``value`` of *node*.

        Fetched once unless *refresh* is set.
        """
        if node.prepared and not refresh:
            return
        if self._conn is None:
            raise CDPError("Element state needs a live connection")

        node.outer_html = self._conn.send(
            "DOM.getOuterHTML", {"nodeId": node.node_id},
        ).get("outerHTML", "")

        remote = self._conn.send(
            "DOM.resolveNode", {"nodeId": node.node_id},
        ).get("object", {})
        object_id = remote.get("objectId")
        if object_id:
            result = self._conn.send("Runtime.callFunctionOn", {
                "objectId": object_id,
                "functionDeclaration": _VALUE_FUNCTION,
                "returnByValue": True,
            })
            node.live_value = result.get("result", {}).get("value")
            self._conn.send("Runtime.releaseObject", {"objectId": object_id})
        node.prepared = True


# ---------------------------------------------------------------------------
# Platform
# ---------------------------------------------------------------------------

class WebAdapter(PlatformAdapter):
    """Captures the DOM of a page target in a running Chromium browser."""

    def __init__(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        ws_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self._host = host or os.environ.get("ELINFO_CDP_HOST", "localhost")
        self._port = port or int(os.environ.get("ELINFO_CDP_PORT", "9222"))
        self._timeout = timeout or float(os.environ.get("ELINFO_CDP_TIMEOUT", "15"))
        self._ws_url = ws_url
        self._conn: CDPConnection | None = None

    @property
    def platform_name(self) -> str:
        return "web"

    def _page_ws_url(self) -> str:
        pages = [t for t in discover_targets(self._host, self._port)
                 if t.get("type") == "page" and t.get("webSocketDebuggerUrl")]
        if not pages:
            raise CDPError(f"No page targets found at {self._host}:{self._port}")
        logger.debug("using target %s (%s)", pages[0].get("id"), pages[0].get("url"))
        return pages[0]["webSocketDebuggerUrl"]

    def initialize(self) -> None:
        if self._conn is not None and self._conn.connected:
            return
        ws_url = self._ws_url or self._page_ws_url()
        self._conn = CDPConnection(ws_url, timeout=self._timeout)
        self._conn.connect()
        self._conn.send("DOM.enable")

    def capture_document(self) -> CDPDocument:
        self.initialize()
        result = self._conn.send("DOM.getDocument", {"depth": -1, "pierce": False})
        document = CDPDocument(result["root"], connection=self._conn)
        logger.debug("captured %d nodes from %s", document.node_count, document.url)
        return document

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
        self._conn = None
