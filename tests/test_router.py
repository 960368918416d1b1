"""Tests for platform detection and adapter routing."""

from __future__ import annotations

import pytest

from elinfo._router import detect_platform, get_adapter
from elinfo.errors import ElementInfoError
from elinfo.platforms.html import HtmlAdapter


class TestDetectPlatform:
    def test_no_source_is_live_browser(self):
        assert detect_platform() == "web"
        assert detect_platform(None) == "web"

    def test_file_is_html(self):
        assert detect_platform("page.html") == "html"


class TestGetAdapter:
    def test_html_from_markup(self):
        adapter = get_adapter("html", markup="<p>x</p>")
        assert isinstance(adapter, HtmlAdapter)
        assert adapter.platform_name == "html"

    def test_platform_detected_from_options(self):
        adapter = get_adapter(markup="<p>x</p>")
        assert adapter.platform_name == "html"

    def test_html_from_file(self, tmp_path):
        page = tmp_path / "page.html"
        page.write_text("<html><body><p>x</p></body></html>", encoding="utf-8")
        doc = get_adapter("html", path=str(page)).capture_document()
        assert doc.url == page.resolve().as_uri()

    def test_html_needs_one_source(self):
        with pytest.raises(ValueError):
            get_adapter("html")

    def test_unsupported_platform(self):
        with pytest.raises(RuntimeError, match="No adapter available"):
            get_adapter("android")

    def test_empty_markup_is_an_element_info_error(self):
        with pytest.raises(ElementInfoError, match="Cannot parse HTML"):
            HtmlAdapter(markup="").initialize()

    def test_empty_file_is_an_element_info_error(self, tmp_path):
        page = tmp_path / "empty.html"
        page.write_bytes(b"")
        with pytest.raises(ElementInfoError):
            get_adapter("html", path=str(page)).capture_document()
