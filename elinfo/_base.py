"""Abstract bases for document backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Iterator


class DomAdapter(ABC):
    """Tree navigation over one captured document.

    Nodes are opaque handles owned by the backend (lxml elements, CDP node
    records, ...).  The descriptor core only ever touches nodes through the
    methods defined here, so any in-memory tree can stand in for a live page.
    """

    # ---- document --------------------------------------------------------

    @property
    @abstractmethod
    def url(self) -> str:
        """Return the document URL at capture time."""
        ...

    @abstractmethod
    def document_element(self) -> Any:
        """Return the root element (``<html>`` for HTML documents)."""
        ...

    # ---- structure -------------------------------------------------------

    @abstractmethod
    def parent(self, node: Any) -> Any | None:
        """Return the parent element, or None at the top of the tree.

        Document and fragment nodes are not elements: the root element has
        no parent.
        """
        ...

    @abstractmethod
    def children(self, node: Any) -> list[Any]:
        """Return the element children of *node* in document order."""
        ...

    # ---- node data -------------------------------------------------------

    @abstractmethod
    def tag_name(self, node: Any) -> str:
        """Return the node name as the document reports it."""
        ...

    @abstractmethod
    def attribute(self, node: Any, name: str) -> str | None:
        """Return the attribute value, or None when it is not set."""
        ...

    @abstractmethod
    def text_content(self, node: Any) -> str:
        """Return the concatenated text of *node* and its descendants."""
        ...

    @abstractmethod
    def outer_html(self, node: Any) -> str:
        """Return the serialized markup of *node* and its subtree."""
        ...

    @abstractmethod
    def value(self, node: Any) -> str | None:
        """Return the DOM ``value`` property for value-bearing controls.

        Elements without a value property return None.
        """
        ...

    @abstractmethod
    def placeholder(self, node: Any) -> str | None:
        """Return the placeholder for elements that support one."""
        ...

    @abstractmethod
    def query_selector(self, selector: str) -> Any | None:
        """Return the first element matching a CSS selector, or None."""
        ...

    def prepare(self, node: Any, *, refresh: bool = False) -> None:
        """Fetch any live state *node* needs before it is described.

        With *refresh*, state fetched earlier is fetched again.  Static
        documents have nothing to fetch.
        """

    def snapshot_value(self, node: Any) -> str | None:
        """Return a value for listing *node* in a snapshot.

        Backends whose ``value`` needs a round trip override this with what
        the captured tree already holds.
        """
        return self.value(node)

    # ---- derived helpers -------------------------------------------------

    def previous_siblings(self, node: Any) -> list[Any]:
        """Return the element siblings before *node*, nearest first."""
        parent = self.parent(node)
        if parent is None:
            return []
        siblings = self.children(parent)
        index = siblings.index(node)
        return siblings[:index][::-1]

    def iter_elements(self, root: Any | None = None) -> Iterator[Any]:
        """Yield *root* and its descendant elements in document order."""
        stack = [root if root is not None else self.document_element()]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(self.children(node)))

    def get_element_by_id(self, element_id: str) -> Any | None:
        for node in self.iter_elements():
            if self.attribute(node, "id") == element_id:
                return node
        return None

    def closest(self, node: Any, tag: str) -> Any | None:
        """Return *node* or its nearest ancestor with the given tag name."""
        current = node
        while current is not None:
            if self.tag_name(current).lower() == tag:
                return current
            current = self.parent(current)
        return None


class PlatformAdapter(ABC):
    """A source of documents (a static HTML file, a live browser tab, ...)."""

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Return the platform identifier: 'html' or 'web'."""
        ...

    @abstractmethod
    def initialize(self) -> None:
        """Perform any one-time setup (parsing, connecting, ...).

        Implementations should be idempotent (safe to call multiple times).
        """
        ...

    @abstractmethod
    def capture_document(self) -> DomAdapter:
        """Capture the current document as a navigable tree."""
        ...
