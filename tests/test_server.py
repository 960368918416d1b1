"""Tests for the MCP tool functions."""

from __future__ import annotations

import json

import pytest

from elinfo.mcp import server
from elinfo.session import Session

_PAGE = (
    "<html><head></head><body>"
    '<div id="root"><span>one</span><span>two</span><span>Hello</span></div>'
    "</body></html>"
)


@pytest.fixture
def html_session(monkeypatch):
    session = Session("html", markup=_PAGE, url="https://example.test/")
    monkeypatch.setattr(server, "_session", session)
    return session


class TestBrowserSnapshot:
    def test_lists_refs(self, html_session):
        text = server.browser_snapshot()
        assert text.startswith("# elinfo | https://example.test/")
        assert '[e6] span "Hello"' in text


class TestBrowserGetElementInfo:
    def test_describes_ref(self, html_session):
        server.browser_snapshot()
        text = server.browser_get_element_info("Hello text", "e6")
        assert "# Extract element information for: Hello text" in text
        result = json.loads(text.split("### Result\n", 1)[1])
        assert result["cssSelector"] == "#root > span:nth-child(3)"
        assert result["fullXPath"] == '//*[@id="root"]/span[3]'
        assert result["text"] == "Hello"
        assert result["label"] == ""
        assert result["id"] is None

    def test_unknown_ref(self, html_session):
        server.browser_snapshot()
        result = json.loads(server.browser_get_element_info("ghost", "e99"))
        assert result["success"] is False
        assert "e99" in result["error"]

    def test_without_snapshot(self, html_session):
        result = json.loads(server.browser_get_element_info("span", "e6"))
        assert result["success"] is False
        assert "No snapshot" in result["error"]

    def test_element_description_required(self, html_session):
        result = json.loads(server.browser_get_element_info("  ", "e6"))
        assert result["success"] is False
        assert "description" in result["error"]

    def test_ref_required(self, html_session):
        result = json.loads(server.browser_get_element_info("span", ""))
        assert result["success"] is False
        assert "ref" in result["error"]
