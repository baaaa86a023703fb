# app/core/exporter.py
"""
Project export generator.

Every export is derived from the project's current file records:

- zip:       the whole tree as a zip archive (base64 in JSON responses)
- html:      the entry HTML document, optionally with CSS/JS inlined
- css / js:  all stylesheets / scripts concatenated, optionally minified
- elementor: a page-builder JSON document built from the entry HTML

Missing inputs never raise; each format falls back to a built-in default.
The minifier is a best-effort regex pass, not a parser: it can corrupt string
literals that contain "/*" or ";}" sequences.
"""
import base64
import io
import json
import logging
import re
import zipfile
from typing import Any, Callable, Dict, Iterable, List, Optional

from app.models.file import DIRECTORY_TYPE
from app.schemas.export import ExportOptions

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("zip", "html", "css", "js", "elementor")

DEFAULT_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>Generated Website</title>
    <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="bg-gray-50">
    <main class="container mx-auto px-4 py-8">
        <h1 class="text-3xl font-bold text-center mb-8">Generated Website</h1>
        <p class="text-center text-gray-600">Your website content will appear here.</p>
    </main>
</body>
</html>"""

DEFAULT_CSS = """/* Generated CSS */
body {
    font-family: Arial, sans-serif;
    line-height: 1.6;
    margin: 0;
    padding: 0;
}

.container {
    max-width: 1200px;
    margin: 0 auto;
    padding: 0 20px;
}

/* Add more generated styles based on content */"""

DEFAULT_JS = """// Generated JavaScript
document.addEventListener('DOMContentLoaded', function() {
    console.log('Generated website loaded');

    // Add basic interactions
    const buttons = document.querySelectorAll('button');
    buttons.forEach(button => {
        button.addEventListener('click', function(e) {
            console.log('Button clicked:', e.target);
        });
    });
});"""

DEFAULT_PAGE_TITLE = "Generated Page"
DEFAULT_PAGE_TEXT = "Your content here..."

_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")
_WHITESPACE_RE = re.compile(r"\s+")
_SEMI_BRACE_RE = re.compile(r";\s*}")
_TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE)
_TAG_RE = re.compile(r"<[^>]*>")


# ---------------------------------------------------------------------------
# File selection helpers
# ---------------------------------------------------------------------------

def _regular_files(files: Iterable[Any]) -> List[Any]:
    return [f for f in files if f.type != DIRECTORY_TYPE]


def files_with_extension(files: Iterable[Any], extension: str) -> List[Any]:
    return [f for f in _regular_files(files) if f.name.endswith(extension)]


def find_entry_html(files: Iterable[Any]) -> Optional[Any]:
    """index.html if present, otherwise the first *.html file, otherwise None."""
    html_files = files_with_extension(files, ".html")
    for f in html_files:
        if f.name == "index.html":
            return f
    return html_files[0] if html_files else None


def _join_contents(files: Iterable[Any]) -> str:
    return "\n".join(f.content or "" for f in files)


def minify(source: str) -> str:
    """Strip block comments, collapse whitespace, drop ';' before '}'."""
    source = _COMMENT_RE.sub("", source)
    source = _WHITESPACE_RE.sub(" ", source)
    source = _SEMI_BRACE_RE.sub("}", source)
    return source.strip()


def extract_title(html: str) -> str:
    match = _TITLE_RE.search(html or "")
    return match.group(1) if match else DEFAULT_PAGE_TITLE


def extract_text(html: str) -> str:
    return _TAG_RE.sub("", html or "").strip()


def extract_dependencies(files: Iterable[Any]) -> List[str]:
    """Unique dependency names from every file literally named package.json."""
    deps: List[str] = []
    for f in _regular_files(files):
        if f.name != "package.json":
            continue
        try:
            package_data = json.loads(f.content or "")
        except ValueError:
            logger.warning("Skipping unparsable package.json at %s", f.path)
            continue
        dependencies = package_data.get("dependencies") if isinstance(package_data, dict) else None
        for name in (dependencies or {}):
            if name not in deps:
                deps.append(name)
    return deps


# ---------------------------------------------------------------------------
# Per-format generators
# ---------------------------------------------------------------------------

def build_zip_archive(files: Iterable[Any], include_dependencies: bool = False, files_only: bool = False) -> bytes:
    """
    Zip the project tree. Directories become empty "path/" entries unless
    files_only is set; files are written at their stored path. The synthesized
    dependency manifest replaces a root-level package.json.
    """
    files = list(files)
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for f in files:
            if f.type == DIRECTORY_TYPE:
                if not files_only:
                    archive.writestr(f.path.rstrip("/") + "/", "")
            elif include_dependencies and f.path == "package.json":
                continue
            else:
                archive.writestr(f.path, f.content or "")
        if include_dependencies:
            package_json = {
                "name": "exported-project",
                "version": "1.0.0",
                "dependencies": extract_dependencies(files),
            }
            archive.writestr("package.json", json.dumps(package_json, indent=2))
    return buffer.getvalue()


def generate_zip_export(files: List[Any], options: ExportOptions) -> str:
    archive = build_zip_archive(files, include_dependencies=options.include_dependencies)
    return base64.b64encode(archive).decode("ascii")


def generate_html_export(files: List[Any], options: ExportOptions) -> str:
    entry = find_entry_html(files)
    html = entry.content if entry is not None and entry.content else DEFAULT_HTML

    if options.inline_assets:
        css_files = files_with_extension(files, ".css")
        if css_files:
            style_block = f"  <style>\n{_join_contents(css_files)}\n  </style>\n</head>"
            html = html.replace("</head>", style_block, 1)
        js_files = files_with_extension(files, ".js")
        if js_files:
            script_block = f"  <script>\n{_join_contents(js_files)}\n  </script>\n</body>"
            html = html.replace("</body>", script_block, 1)
    return html


def generate_css_export(files: List[Any], options: ExportOptions) -> str:
    css_files = files_with_extension(files, ".css")
    if not css_files:
        return DEFAULT_CSS
    css = _join_contents(css_files)
    return minify(css) if options.minify else css


def generate_js_export(files: List[Any], options: ExportOptions) -> str:
    js_files = files_with_extension(files, ".js")
    if not js_files:
        return DEFAULT_JS
    js = _join_contents(js_files)
    return minify(js) if options.minify else js


def _spacing(size: int) -> Dict[str, Any]:
    return {"unit": "px", "size": size, "sizes": []}


def generate_elementor_export(files: List[Any], options: ExportOptions) -> str:
    entry = find_entry_html(files)
    title = extract_title(entry.content) if entry is not None else DEFAULT_PAGE_TITLE
    text = extract_text(entry.content) if entry is not None else DEFAULT_PAGE_TEXT

    padding = {
        "padding_mobile": _spacing(20),
        "padding_tablet": _spacing(30),
        "padding": _spacing(40),
        "padding_unit": {"unit": "px", "desktop": "px", "tablet": "px", "mobile": "px"},
    }
    document = {
        "version": "0.4",
        "title": "Exported Project",
        "type": "page",
        "content": [
            {
                "id": "main-content",
                "elType": "section",
                "settings": {
                    "structure": "20",
                    "background_background": "classic",
                    "background_color": "#FFFFFF",
                    **padding,
                },
                "elements": [
                    {
                        "id": "heading",
                        "elType": "heading",
                        "settings": {
                            "title": title,
                            "header_size": "h1",
                            "align": "center",
                            "title_color": "#333333",
                            "typography_typography": "Arial",
                            "typography_font_size": _spacing(32),
                        },
                    },
                    {
                        "id": "text-editor",
                        "elType": "text-editor",
                        "settings": {
                            "editor": text,
                            "text_color": "#333333",
                            "typography_typography": "Arial",
                            "typography_font_size": _spacing(16),
                        },
                    },
                ],
            }
        ],
        "page_settings": {
            "html_tag": "section",
            "background_background": "classic",
            "background_color": "#FFFFFF",
            **padding,
        },
    }
    return json.dumps(document, indent=2)


GENERATORS: Dict[str, Callable[[List[Any], ExportOptions], str]] = {
    "zip": generate_zip_export,
    "html": generate_html_export,
    "css": generate_css_export,
    "js": generate_js_export,
    "elementor": generate_elementor_export,
}


def generate_exports(files: Iterable[Any], formats: Iterable[str], options: Optional[ExportOptions] = None) -> Dict[str, str]:
    """
    Produce one export per requested format.

    A format whose generator fails is logged and left out of the result; the
    other formats are still returned. Unknown formats are ignored here and
    rejected at the request layer.
    """
    files = list(files)
    options = options or ExportOptions()
    exports: Dict[str, str] = {}
    for fmt in formats:
        generator = GENERATORS.get(fmt)
        if generator is None or fmt in exports:
            continue
        try:
            exports[fmt] = generator(files, options)
        except Exception:
            logger.exception("Failed to generate %s export", fmt)
    return exports
