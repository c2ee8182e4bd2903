from __future__ import annotations

from typing import Dict, Optional, Tuple

from .config import (
    FRONTMATTER_FENCE,
    HTML_BODY,
    HTML_META_COMMENT,
    HTML_TITLE,
)
from .utils import unquote


def split_frontmatter(text: str) -> Tuple[Optional[str], str]:
    """
    Find the first `---` ... `---` block, line by line.

    Returns (frontmatter, rest). `rest` is the text with the block removed.
    Without both fences the frontmatter is None and the text comes back as is.
    """
    lines = text.splitlines(keepends=True)
    start = None
    for i, line in enumerate(lines):
        if line.strip() != FRONTMATTER_FENCE:
            continue
        if start is None:
            start = i
            continue
        fm = "".join(lines[start + 1 : i])
        rest = "".join(lines[:start]) + "".join(lines[i + 1 :])
        return fm, rest
    return None, text


def scan_fields(frontmatter: str, keys) -> Dict[str, str]:
    """
    `key: value` lines; the first line for a key wins.

    An empty first value still claims the key, so a later line cannot
    override it; empty values are left out of the result.
    """
    wanted = {k.lower() for k in keys}
    found: Dict[str, str] = {}
    for line in frontmatter.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        key = key.strip().lower()
        if key not in wanted or key in found:
            continue
        found[key] = unquote(value.strip()).strip()
    return {k: v for k, v in found.items() if v}


def scan_html(text: str) -> Dict[str, Optional[str]]:
    """
    Documented subset only: first <title>, first `<!-- key: value -->`
    comment per key, and the raw text of the first <body> element.
    """
    out: Dict[str, Optional[str]] = {
        "title": None,
        "image": None,
        "link": None,
        "description": None,
        "body": None,
    }
    m = HTML_TITLE.search(text)
    if m and m.group("text").strip():
        out["title"] = m.group("text").strip()
    for m in HTML_META_COMMENT.finditer(text):
        key = m.group("key")
        if out[key] is None and m.group("value").strip():
            out[key] = m.group("value").strip()
    m = HTML_BODY.search(text)
    if m:
        out["body"] = m.group("inner")
    return out
