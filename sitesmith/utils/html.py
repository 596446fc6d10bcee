from __future__ import annotations

import html as html_lib
import re
from typing import List, Mapping, Optional, Tuple

PLACEHOLDER_ATTR = "data-ai-image"
IMAGE_STYLE = "width: 100%; height: auto; object-fit: cover;"

_PLACEHOLDER_ATTR_PATTERN = (
    r"(?<![\w-])data-ai-image\s*=\s*(?:\"(?P<dq>\d+)\"|'(?P<sq>\d+)'|(?P<bare>\d+)(?=[\s/>]))"
)
_PLACEHOLDER_INDEX_RE = re.compile(_PLACEHOLDER_ATTR_PATTERN, re.IGNORECASE)
# A whole placeholder tag plus an empty closing tag right after it.
_PLACEHOLDER_TAG_RE = re.compile(
    rf"<(?P<tag>[a-zA-Z][a-zA-Z0-9-]*)(?P<attrs>\s[^>]*?{_PLACEHOLDER_ATTR_PATTERN}[^>]*)>"
    r"(?:\s*</(?P=tag)\s*>)?",
    re.IGNORECASE,
)
_CLASS_ATTR_RE = re.compile(r"(?<![\w-])class\s*=\s*(?P<quote>[\"'])(?P<value>.*?)(?P=quote)", re.IGNORECASE | re.DOTALL)


def _placeholder_index(match: re.Match[str]) -> Optional[int]:
    raw = match.group("dq") or match.group("sq") or match.group("bare")
    index = int(raw)
    # "01" is not placeholder 1
    return index if raw == str(index) else None


def find_placeholder_indices(html: str) -> List[int]:
    """Return the distinct placeholder indices in order of first appearance."""
    if not html:
        return []
    seen: List[int] = []
    for match in _PLACEHOLDER_INDEX_RE.finditer(html):
        index = int(match.group("dq") or match.group("sq") or match.group("bare"))
        if index not in seen:
            seen.append(index)
    return seen


def build_img_tag(src: str, alt: str, *, css_class: Optional[str] = None) -> str:
    attrs = [
        f'src="{html_lib.escape(src, quote=True)}"',
        f'alt="{html_lib.escape(alt, quote=True)}"',
    ]
    if css_class:
        attrs.append(f'class="{html_lib.escape(css_class, quote=True)}"')
    attrs.append(f'style="{IMAGE_STYLE}"')
    return f"<img {' '.join(attrs)}>"


def replace_image_placeholders(html: str, sources: Mapping[int, Tuple[str, str]]) -> tuple[str, int]:
    """Replace placeholder tags with concrete <img> tags in a single pass.

    ``sources`` maps a placeholder index to ``(src, alt)``. The index must
    match exactly, so index 1 never touches a ``"10"`` placeholder, and
    inserted tags are never scanned again. An empty closing tag right after
    the placeholder is consumed as well. Placeholders with no source are left
    untouched. Returns the new HTML and the number of replaced tags.
    """
    if not html or not sources:
        return html, 0

    replaced = 0

    def _replace(match: re.Match[str]) -> str:
        nonlocal replaced
        index = _placeholder_index(match)
        if index is None or index not in sources:
            return match.group(0)
        src, alt = sources[index]
        class_match = _CLASS_ATTR_RE.search(match.group("attrs") or "")
        css_class = html_lib.unescape(class_match.group("value")) if class_match else None
        replaced += 1
        return build_img_tag(src, alt, css_class=css_class)

    return _PLACEHOLDER_TAG_RE.sub(_replace, html), replaced


def replace_image_placeholder(html: str, index: int, src: str, alt: str) -> tuple[str, int]:
    """Replace every tag carrying ``data-ai-image="<index>"`` with a concrete <img>."""
    return replace_image_placeholders(html, {index: (src, alt)})


_BODY_RE = re.compile(r"<body\b[^>]*>(?P<body>.*)</body\s*>", re.IGNORECASE | re.DOTALL)

DOCUMENT_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<link rel="stylesheet" href="{stylesheet}">
</head>
<body>
{body}
<script src="{script}"></script>
</body>
</html>
"""


def wrap_document(
    body: str,
    *,
    title: str = "Generated site",
    stylesheet: str = "styles.css",
    script: str = "script.js",
) -> str:
    """Wrap body markup in a standalone page that links the css and js files."""
    return DOCUMENT_TEMPLATE.format(
        title=html_lib.escape(title),
        stylesheet=html_lib.escape(stylesheet, quote=True),
        script=html_lib.escape(script, quote=True),
        body=body.strip(),
    )


def extract_body(document: str) -> str:
    """Return the markup inside <body>, minus the trailing script include.

    Input without a <body> element is returned stripped.
    """
    match = _BODY_RE.search(document or "")
    if not match:
        return (document or "").strip()
    body = match.group("body")
    body = re.sub(r"<script\s+src=[\"'][^\"']*[\"']\s*>\s*</script>\s*$", "", body.strip(), flags=re.IGNORECASE)
    return body.strip()


__all__ = [
    "IMAGE_STYLE",
    "PLACEHOLDER_ATTR",
    "build_img_tag",
    "extract_body",
    "find_placeholder_indices",
    "replace_image_placeholder",
    "replace_image_placeholders",
    "wrap_document",
]
