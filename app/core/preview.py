# app/core/preview.py
from html import escape
from typing import Any, Iterable

from app.core.exporter import files_with_extension

PREVIEW_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} - Preview</title>
    <style>
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            margin: 0;
            padding: 20px;
            background: #f5f5f5;
        }}
        .container {{
            max-width: 800px;
            margin: 0 auto;
            background: white;
            padding: 40px;
            border-radius: 8px;
            box-shadow: 0 2px 10px rgba(0,0,0,0.1);
        }}
    </style>
    {styles}
</head>
<body>
    <div class="container">
        <h1>{title}</h1>
        <p>Project preview for {title}</p>
        <div id="app"></div>
    </div>
    {scripts}
</body>
</html>"""


def render_preview(project_name: str, files: Iterable[Any]) -> str:
    """
    HTML shown in the studio's preview iframe.

    A project's own index.html wins verbatim; otherwise a placeholder page is
    synthesized with every stylesheet and script inlined.
    """
    files = list(files)
    for f in files_with_extension(files, ".html"):
        if f.name == "index.html" and f.content:
            return f.content

    styles = "\n".join(f"<style>{f.content or ''}</style>" for f in files_with_extension(files, ".css"))
    scripts = "\n".join(f"<script>{f.content or ''}</script>" for f in files_with_extension(files, ".js"))
    return PREVIEW_TEMPLATE.format(title=escape(project_name), styles=styles, scripts=scripts)
