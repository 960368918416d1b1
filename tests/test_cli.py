"""Tests for the command-line entry point."""

from __future__ import annotations

import json

from elinfo.__main__ import main

_PAGE = (
    "<html><head></head><body>"
    '<form><label>Name <input name="n" placeholder="Jane" value="Ann"></label></form>'
    "</body></html>"
)


def _write_page(tmp_path):
    page = tmp_path / "page.html"
    page.write_text(_PAGE, encoding="utf-8")
    return str(page)


class TestCli:
    def test_prints_snapshot(self, tmp_path, capsys):
        assert main([_write_page(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert out.startswith("# elinfo | file://")
        assert '[e5] input "Name" val="Ann" (ph="Jane")' in out

    def test_describe_by_selector(self, tmp_path, capsys):
        assert main([_write_page(tmp_path), "--selector", "input"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["tagName"] == "input"
        assert data["fullXPath"] == "/html/body/form/label/input"
        assert data["cssSelector"] == "html > body > form > label > input"
        assert data["label"] == "Name"
        assert data["value"] == "Ann"
        assert data["valueLabel"] == "Jane"

    def test_describe_by_ref_with_url(self, tmp_path, capsys):
        args = [_write_page(tmp_path), "--ref", "e4", "--url", "https://example.test/"]
        assert main(args) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["tagName"] == "label"
        assert data["url"] == "https://example.test/"

    def test_json_out(self, tmp_path, capsys):
        out_file = tmp_path / "info.json"
        args = [_write_page(tmp_path), "--selector", "form", "--json-out", str(out_file)]
        assert main(args) == 0
        assert json.loads(out_file.read_text(encoding="utf-8"))["tagName"] == "form"

    def test_unknown_ref_fails(self, tmp_path, capsys):
        assert main([_write_page(tmp_path), "--ref", "e42"]) == 1
        assert "e42" in capsys.readouterr().err

    def test_missing_file_fails(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.html")]) == 1
        assert capsys.readouterr().err.startswith("error:")

    def test_empty_file_fails(self, tmp_path, capsys):
        page = tmp_path / "empty.html"
        page.write_text("", encoding="utf-8")
        assert main([str(page)]) == 1
        assert capsys.readouterr().err.startswith("error:")
