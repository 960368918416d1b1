"""Tests for snapshot sessions: ref assignment and resolution."""

from __future__ import annotations

import pytest

import elinfo
from elinfo.errors import RefNotFoundError
from elinfo.platforms.html import HtmlAdapter
from elinfo.session import Session


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_PAGE = (
    "<html><head></head><body>"
    '<div id="root"><span>one</span><span>two</span><span>Hello</span></div>'
    "</body></html>"
)


def _make_session(markup: str = _PAGE) -> Session:
    return Session("html", markup=markup, url="https://example.test/")


class _CountingAdapter(HtmlAdapter):
    """HtmlAdapter that reparses on every capture."""

    def __init__(self, markups: list[str]):
        super().__init__(markup=markups[0])
        self._markups = list(markups)
        self.captures = 0

    def capture_document(self):
        self._markup = self._markups[min(self.captures, len(self._markups) - 1)]
        self._document = None
        self.captures += 1
        return super().capture_document()


# ---------------------------------------------------------------------------
# Capture and resolve
# ---------------------------------------------------------------------------

class TestCapture:
    def test_platform(self):
        assert _make_session().platform_name == "html"

    def test_refs_in_document_order(self):
        session = _make_session()
        session.capture()
        doc = session.document
        assert doc.tag_name(session.resolve("e0")) == "html"
        assert doc.tag_name(session.resolve("e1")) == "head"
        assert doc.tag_name(session.resolve("e2")) == "body"
        assert doc.attribute(session.resolve("e3"), "id") == "root"
        assert doc.text_content(session.resolve("e6")) == "Hello"

    def test_capture_returns_snapshot_text(self):
        text = _make_session().capture()
        assert text.startswith("# elinfo | https://example.test/\n")
        assert '[e6] span "Hello"' in text

    def test_recapture_replaces_refs(self):
        adapter = _CountingAdapter([
            _PAGE,
            "<html><head></head><body><p>only</p></body></html>",
        ])
        session = Session(adapter=adapter)
        session.capture()
        session.resolve("e6")
        session.capture()
        assert adapter.captures == 2
        with pytest.raises(RefNotFoundError):
            session.resolve("e6")


class TestResolve:
    def test_before_capture(self):
        with pytest.raises(RefNotFoundError, match="No snapshot"):
            _make_session().resolve("e0")

    def test_unknown_ref(self):
        session = _make_session()
        session.capture()
        with pytest.raises(RefNotFoundError, match="'e99' not found"):
            session.resolve("e99")

    def test_ref_error_is_lookup_error(self):
        session = _make_session()
        session.capture()
        with pytest.raises(LookupError):
            session.resolve("bogus")

    def test_locate(self):
        session = _make_session()
        session.capture()
        node = session.locate("#root > span:nth-child(2)")
        assert session.document.text_content(node) == "two"

    def test_locate_no_match(self):
        session = _make_session()
        session.capture()
        with pytest.raises(RefNotFoundError, match="No element matches"):
            session.locate("table")


# ---------------------------------------------------------------------------
# Describe
# ---------------------------------------------------------------------------

class TestDescribe:
    def test_by_ref(self):
        session = _make_session()
        session.capture()
        info = session.describe("e6")
        assert info.css_selector == "#root > span:nth-child(3)"
        assert info.full_xpath == '//*[@id="root"]/span[3]'
        assert info.text == "Hello"
        assert info.label == ""

    def test_by_selector(self):
        session = _make_session()
        session.capture()
        assert session.describe(selector="#root").id == "root"

    def test_needs_exactly_one_target(self):
        session = _make_session()
        session.capture()
        with pytest.raises(ValueError):
            session.describe()
        with pytest.raises(ValueError):
            session.describe("e6", selector="span")

    def test_describe_html(self):
        info = elinfo.describe_html(_PAGE, selector="span", url="https://example.test/")
        assert info.url == "https://example.test/"
        assert info.full_xpath == '//*[@id="root"]/span[1]'
        assert info.css_selector == "#root > span:nth-child(1)"
        assert info.text == "one"
