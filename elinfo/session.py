"""Snapshot session: ref assignment, ref resolution and element description."""

from __future__ import annotations

import logging
from typing import Any

from elinfo._base import DomAdapter, PlatformAdapter
from elinfo._router import get_adapter
from elinfo.descriptor import ElementDescriptor, describe_element
from elinfo.errors import RefNotFoundError
from elinfo.format import Detail, serialize_snapshot

logger = logging.getLogger(__name__)


class Session:
    """Holds the latest document snapshot and its ref table.

    Refs (``e0``, ``e1``, ...) number every element of the snapshot in
    document order.  They are only valid for the snapshot that produced
    them: capturing again replaces the table.

    Not thread-safe; use one session per caller.
    """

    def __init__(
        self,
        platform: str | None = None,
        *,
        adapter: PlatformAdapter | None = None,
        **options,
    ) -> None:
        self._adapter = adapter or get_adapter(platform, **options)
        self._document: DomAdapter | None = None
        self._refs: dict[str, Any] = {}

    @property
    def platform_name(self) -> str:
        return self._adapter.platform_name

    @property
    def document(self) -> DomAdapter | None:
        return self._document

    def capture(self, *, detail: Detail = "standard") -> str:
        """Capture a fresh snapshot and return it as compact text."""
        document = self._adapter.capture_document()
        self._document = document
        self._refs = {
            f"e{i}": node for i, node in enumerate(document.iter_elements())
        }
        logger.debug("snapshot of %s: %d refs", document.url, len(self._refs))
        return serialize_snapshot(document, self._refs, detail=detail)

    def _require_document(self) -> DomAdapter:
        if self._document is None:
            raise RefNotFoundError(
                "No snapshot captured yet. Capture a snapshot first."
            )
        return self._document

    def resolve(self, ref: str) -> Any:
        """Return the element for *ref* from the latest snapshot."""
        self._require_document()
        node = self._refs.get(ref)
        if node is None:
            raise RefNotFoundError(
                f"Ref '{ref}' not found in the current snapshot. "
                f"Capture a new snapshot to get fresh refs."
            )
        return node

    def locate(self, selector: str) -> Any:
        """Return the first element of the latest snapshot matching *selector*."""
        document = self._require_document()
        node = document.query_selector(selector)
        if node is None:
            raise RefNotFoundError(f"No element matches selector '{selector}'")
        return node

    def describe(
        self,
        ref: str | None = None,
        *,
        selector: str | None = None,
    ) -> ElementDescriptor:
        """Describe the element behind *ref* (or the first *selector* match).

        Raises:
            ValueError: If neither or both of ref and selector are given.
            RefNotFoundError: If the element cannot be resolved.
        """
        if (ref is None) == (selector is None):
            raise ValueError("Provide exactly one of 'ref' or 'selector'")

        node = self.resolve(ref) if ref is not None else self.locate(selector)
        document = self._document
        document.prepare(node, refresh=True)
        return describe_element(document, node)
