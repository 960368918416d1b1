"""Tests for ElementDescriptor assembly and serialization."""

from __future__ import annotations

import dataclasses
import json
import time

import pytest

from elinfo.descriptor import ElementDescriptor, describe_element
from elinfo.platforms.html import HtmlDocument


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

_SCENARIO = """<html><head></head><body>
<div id="root"><span>one</span><span>two</span><span>Hello</span></div>
<form><input id="q" class="search" placeholder="Search" value=""></form>
</body></html>"""


def _make_doc(markup: str = _SCENARIO) -> HtmlDocument:
    return HtmlDocument.from_string(markup, url="https://example.test/page")


def _describe(css: str, markup: str = _SCENARIO) -> ElementDescriptor:
    doc = _make_doc(markup)
    return describe_element(doc, doc.query_selector(css))


# ---------------------------------------------------------------------------
# describe_element
# ---------------------------------------------------------------------------

class TestDescribeElement:
    def test_span_scenario(self):
        info = _describe("#root > span:nth-child(3)")
        assert info.url == "https://example.test/page"
        assert info.tag_name == "span"
        assert info.id is None
        assert info.full_xpath == '//*[@id="root"]/span[3]'
        assert info.css_selector == "#root > span:nth-child(3)"
        assert info.outer_html == "<span>Hello</span>"
        assert info.value is None
        assert info.value_label == ""
        assert info.text == "Hello"
        assert info.label == ""

    def test_input_with_placeholder(self):
        info = _describe("input")
        assert info.tag_name == "input"
        assert info.id == "q"
        assert info.full_xpath == '//*[@id="q"]'
        assert info.css_selector == "#q"
        assert info.value is None
        assert info.value_label == "Search"
        assert info.text is None

    def test_element_without_any_label(self):
        info = _describe("img", '<html><head></head><body><div><img src="a.png"></div></body></html>')
        assert info.label == ""
        assert info.text is None
        assert info.value is None
        assert info.value_label == ""

    def test_timestamp_is_capture_time(self):
        before = int(time.time() * 1000)
        info = _describe("span")
        after = int(time.time() * 1000)
        assert before <= info.timestamp <= after

    def test_descriptor_is_immutable(self):
        info = _describe("span")
        with pytest.raises(dataclasses.FrozenInstanceError):
            info.label = "changed"


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------

class TestSerialization:
    def test_keys_in_order(self):
        info = _describe("span")
        assert list(info.to_dict()) == [
            "url", "tagName", "id", "fullXPath", "cssSelector", "outerHTML",
            "value", "valueLabel", "text", "label", "timeStamp",
        ]

    def test_absent_fields_are_null(self):
        data = json.loads(_describe("#root > span:nth-child(3)").to_json())
        assert data["id"] is None
        assert data["value"] is None
        assert data["valueLabel"] == ""
        assert data["label"] == ""
        assert data["text"] == "Hello"

    def test_json_indent(self):
        text = _describe("span").to_json()
        assert text.startswith('{\n  "url": ')

    def test_non_ascii_kept(self):
        info = _describe("p", "<html><head></head><body><p>café</p></body></html>")
        assert "café" in info.to_json()
