"""Platform detection and adapter dispatch."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from elinfo._base import PlatformAdapter

_web_adapter: PlatformAdapter | None = None


def detect_platform(source: str | None = None) -> str:
    """Return the platform that can load *source*.

    A file path or a markup string is static HTML; no source means the live
    browser.
    """
    if source is None:
        return "web"
    return "html"


def get_adapter(platform: str | None = None, **options) -> PlatformAdapter:
    """Return an initialized platform adapter.

    Args:
        platform: 'html' or 'web'.  If None, detected from ``options``
                  (a ``path`` or ``markup`` option means 'html').
        **options: Passed to the adapter constructor.  'html' takes
                   ``path``/``markup``/``url``; 'web' takes
                   ``host``/``port``/``ws_url``/``timeout``.

    The web adapter holds a browser connection and is reused across calls
    when no options are given.

    Raises:
        RuntimeError: If the platform is unsupported.
    """
    global _web_adapter

    if platform is None:
        platform = detect_platform(options.get("path") or options.get("markup"))

    if platform == "html":
        from elinfo.platforms.html import HtmlAdapter
        adapter = HtmlAdapter(**options)
    elif platform == "web":
        if _web_adapter is not None and not options:
            _web_adapter.initialize()
            return _web_adapter
        from elinfo.platforms.web import WebAdapter
        adapter = WebAdapter(**options)
        adapter.initialize()
        if not options:
            _web_adapter = adapter
        return adapter
    else:
        raise RuntimeError(
            f"No adapter available for platform '{platform}'. "
            f"Currently supported: html, web."
        )

    adapter.initialize()
    return adapter
