"""Unit tests for the export generator (app.core.exporter)."""

import base64
import io
import json
import zipfile

import pytest

from app.core.exporter import (
    DEFAULT_CSS,
    DEFAULT_HTML,
    DEFAULT_JS,
    build_zip_archive,
    extract_dependencies,
    extract_text,
    extract_title,
    find_entry_html,
    generate_css_export,
    generate_elementor_export,
    generate_exports,
    generate_html_export,
    generate_js_export,
    minify,
)
from app.schemas.export import ExportOptions


HTML = "<html><head><title>Shop</title></head><body><h1>Hello</h1><p>World</p></body></html>"


# ---------------------------------------------------------------------------
# HTML
# ---------------------------------------------------------------------------

class TestHtmlExport:
    @pytest.mark.unit
    def test_placeholder_when_no_html_file(self, record):
        files = [record("1", "style.css", content="body{}")]
        assert generate_html_export(files, ExportOptions()) == DEFAULT_HTML

    @pytest.mark.unit
    def test_prefers_index_html(self, record):
        files = [
            record("1", "about.html", content="<p>about</p>"),
            record("2", "index.html", content="<p>index</p>"),
        ]
        assert generate_html_export(files, ExportOptions()) == "<p>index</p>"

    @pytest.mark.unit
    def test_falls_back_to_first_html_file(self, record):
        files = [
            record("1", "about.html", content="<p>about</p>"),
            record("2", "contact.html", content="<p>contact</p>"),
        ]
        assert find_entry_html(files).name == "about.html"
        assert generate_html_export(files, ExportOptions()) == "<p>about</p>"

    @pytest.mark.unit
    def test_ignores_directories_named_like_html(self, record):
        files = [record("1", "index.html", type="directory", content=None)]
        assert generate_html_export(files, ExportOptions()) == DEFAULT_HTML

    @pytest.mark.unit
    def test_inline_assets(self, record):
        files = [
            record("1", "index.html", content="<html><head></head><body></body></html>"),
            record("2", "a.css", content="h1{}"),
            record("3", "b.css", content="p{}"),
            record("4", "app.js", content="run();"),
        ]
        html = generate_html_export(files, ExportOptions(inline_assets=True))
        assert html == (
            "<html><head>  <style>\nh1{}\np{}\n  </style>\n</head>"
            "<body>  <script>\nrun();\n  </script>\n</body></html>"
        )

    @pytest.mark.unit
    def test_inline_only_replaces_first_closing_tag(self, record):
        files = [
            record("1", "index.html", content="</head></head>"),
            record("2", "a.css", content="x"),
        ]
        html = generate_html_export(files, ExportOptions(inline_assets=True))
        assert html.count("<style>") == 1
        assert html.endswith("</head></head>")

    @pytest.mark.unit
    def test_no_inlining_without_option(self, record):
        files = [record("1", "index.html", content=HTML), record("2", "a.css", content="x")]
        assert generate_html_export(files, ExportOptions()) == HTML


# ---------------------------------------------------------------------------
# CSS / JS
# ---------------------------------------------------------------------------

class TestCssJsExport:
    @pytest.mark.unit
    def test_css_placeholder(self, record):
        assert generate_css_export([record("1", "index.html")], ExportOptions()) == DEFAULT_CSS

    @pytest.mark.unit
    def test_js_placeholder(self, record):
        assert generate_js_export([], ExportOptions()) == DEFAULT_JS

    @pytest.mark.unit
    def test_css_concatenated_in_input_order(self, record):
        files = [
            record("1", "b.css", content="b{}"),
            record("2", "a.css", content="a{}"),
            record("3", "c.js", content="c()"),
        ]
        assert generate_css_export(files, ExportOptions()) == "b{}\na{}"

    @pytest.mark.unit
    def test_js_concatenated_in_input_order(self, record):
        files = [
            record("1", "one.js", content="one();"),
            record("2", "two.js", content="two();"),
        ]
        assert generate_js_export(files, ExportOptions()) == "one();\ntwo();"

    @pytest.mark.unit
    def test_css_minified(self, record):
        files = [record("1", "a.css", content="/* header */\nbody {\n    margin: 0;\n}\n")]
        assert generate_css_export(files, ExportOptions(minify=True)) == "body { margin: 0}"

    @pytest.mark.unit
    def test_minify_collapses_whitespace_and_comments(self):
        assert minify("a  =  1;\n\n/* note */\nfunction f() { return 1; }") == "a = 1; function f() { return 1}"


# ---------------------------------------------------------------------------
# Elementor
# ---------------------------------------------------------------------------

class TestElementorExport:
    @pytest.mark.unit
    def test_uses_title_and_text_from_html(self, record):
        document = json.loads(generate_elementor_export([record("1", "index.html", content=HTML)], ExportOptions()))
        assert document["version"] == "0.4"
        assert document["type"] == "page"
        heading, text_editor = document["content"][0]["elements"]
        assert heading["settings"]["title"] == "Shop"
        assert text_editor["settings"]["editor"] == "ShopHelloWorld"

    @pytest.mark.unit
    def test_defaults_without_html(self, record):
        document = json.loads(generate_elementor_export([], ExportOptions()))
        heading, text_editor = document["content"][0]["elements"]
        assert heading["settings"]["title"] == "Generated Page"
        assert text_editor["settings"]["editor"] == "Your content here..."

    @pytest.mark.unit
    def test_extractors(self):
        assert extract_title("<TITLE lang='en'>Hi</TITLE>") == "Hi"
        assert extract_title("<p>no title</p>") == "Generated Page"
        assert extract_text("  <div><b>bold</b> text</div>  ") == "bold text"


# ---------------------------------------------------------------------------
# ZIP
# ---------------------------------------------------------------------------

class TestZipExport:
    @pytest.mark.unit
    def test_archive_keeps_structure(self, record):
        files = [
            record("d", "src", type="directory", content=None, path="src"),
            record("f", "app.js", parent_id="d", path="src/app.js", content="run();"),
        ]
        with zipfile.ZipFile(io.BytesIO(build_zip_archive(files))) as archive:
            assert sorted(archive.namelist()) == ["src/", "src/app.js"]
            assert archive.read("src/app.js") == b"run();"

    @pytest.mark.unit
    def test_files_only_skips_directories(self, record):
        files = [
            record("d", "src", type="directory", content=None, path="src"),
            record("f", "app.js", parent_id="d", path="src/app.js", content="run();"),
        ]
        with zipfile.ZipFile(io.BytesIO(build_zip_archive(files, files_only=True))) as archive:
            assert archive.namelist() == ["src/app.js"]

    @pytest.mark.unit
    def test_dependency_manifest(self, record):
        package = json.dumps({"dependencies": {"react": "^18", "lodash": "^4"}})
        files = [
            record("1", "package.json", content=package),
            record("4", "package.json", path="app/package.json", content='{"dependencies": {"vue": "^3"}}'),
            record("2", "package.json", path="web/package.json", content='{"dependencies": {"react": "^18"}}'),
            record("3", "broken/package.json", content="{not json"),
        ]
        encoded = generate_exports(files, ["zip"], ExportOptions(include_dependencies=True))["zip"]
        with zipfile.ZipFile(io.BytesIO(base64.b64decode(encoded))) as archive:
            manifest = json.loads(archive.read("package.json"))
        assert manifest == {"name": "exported-project", "version": "1.0.0", "dependencies": ["react", "lodash", "vue"]}

    @pytest.mark.unit
    def test_unparsable_package_json_is_skipped(self, record):
        files = [record("1", "package.json", content="{oops")]
        assert extract_dependencies(files) == []


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

class TestGenerateExports:
    @pytest.mark.unit
    def test_only_requested_formats(self, record):
        exports = generate_exports([record("1", "index.html", content=HTML)], ["html", "css"])
        assert set(exports) == {"html", "css"}
        assert exports["html"] == HTML

    @pytest.mark.unit
    def test_failing_format_does_not_block_others(self, record, monkeypatch):
        from app.core import exporter

        def boom(files, options):
            raise RuntimeError("broken")

        monkeypatch.setitem(exporter.GENERATORS, "css", boom)
        exports = generate_exports([record("1", "index.html", content=HTML)], ["css", "html"])
        assert set(exports) == {"html"}
