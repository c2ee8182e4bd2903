from __future__ import annotations

import enum
import json
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

import markdown

from .config import (
    MARKDOWN_EXTENSIONS,
    NO_DESCRIPTION,
    PLACEHOLDER_IMAGE,
)
from .scanning import scan_fields, scan_html, split_frontmatter
from .utils import _norm_text, title_from_filename

FIELDS = ("title", "image", "link", "description")


class ProjectFormat(enum.Enum):
    JSON = ".json"
    MARKDOWN = ".md"
    HTML = ".html"

    @classmethod
    def from_filename(cls, filename: str) -> Optional["ProjectFormat"]:
        lower = filename.lower()
        for fmt in cls:
            if lower.endswith(fmt.value):
                return fmt
        return None


@dataclass(frozen=True)
class ProjectRecord:
    filename: str
    title: Optional[str]
    image: str = PLACEHOLDER_IMAGE
    link: str = "#"
    description: str = NO_DESCRIPTION
    content: Optional[str] = None

    @property
    def is_valid(self) -> bool:
        return bool(self.title)

    def with_link(self, link: str) -> "ProjectRecord":
        return replace(self, link=link)


def _text(v: Any) -> Optional[str]:
    if v is None or isinstance(v, (dict, list)):
        return None
    s = str(v).strip()
    return s or None


def _with_defaults(
    found: Dict[str, Optional[str]],
    filename: str,
    link_fallback: str,
    content: Optional[str] = None,
) -> ProjectRecord:
    return ProjectRecord(
        filename=filename,
        title=found.get("title") or title_from_filename(filename),
        image=found.get("image") or PLACEHOLDER_IMAGE,
        link=found.get("link") or link_fallback,
        description=found.get("description") or NO_DESCRIPTION,
        content=content,
    )


def _items(v: Any) -> list:
    if isinstance(v, list):
        return [str(x) for x in v if _text(x)]
    if _text(v):
        return [str(v)]
    return []


def details_html(description: str, details: Dict[str, Any]) -> str:
    parts = [f"<p>{description}</p>"]

    technologies = _items(details.get("technologies"))
    if technologies:
        parts.append("<h3>Technologies</h3><ul>")
        parts.extend(f"<li>{t}</li>" for t in technologies)
        parts.append("</ul>")

    features = _items(details.get("keyFeatures"))
    if features:
        parts.append("<h3>Key Features</h3><ul>")
        parts.extend(f"<li>{f}</li>" for f in features)
        parts.append("</ul>")

    impact = _text(details.get("impact"))
    if impact:
        parts.append(f"<h3>Impact</h3><p>{impact}</p>")

    return "".join(parts)


def _from_json(text: str, filename: str, link_fallback: str) -> ProjectRecord:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        print(f"! {filename}: invalid JSON ({e})")
        return ProjectRecord(filename=filename, title=None)
    if not isinstance(data, dict):
        print(f"! {filename}: expected a JSON object, got {type(data).__name__}")
        return ProjectRecord(filename=filename, title=None)

    found = {k: _text(data.get(k)) for k in FIELDS}
    # JSON has no filename title fallback: a titleless object is skipped
    record = replace(
        _with_defaults(found, filename, link_fallback), title=found["title"]
    )
    details = data.get("details")
    if isinstance(details, dict):
        record = replace(record, content=details_html(record.description, details))
    return record


def markdown_to_html(md: str) -> str:
    return markdown.markdown(md, extensions=MARKDOWN_EXTENSIONS)


def _from_markdown(text: str, filename: str, link_fallback: str) -> ProjectRecord:
    fm, body = split_frontmatter(text)
    if fm is None:
        return _with_defaults({}, filename, link_fallback)

    body = body.strip()
    content = markdown_to_html(body) if body else None
    return _with_defaults(scan_fields(fm, FIELDS), filename, link_fallback, content)


def _from_html(text: str, filename: str, link_fallback: str) -> ProjectRecord:
    found = scan_html(text)
    return _with_defaults(found, filename, link_fallback, found["body"])


_EXTRACTORS = {
    ProjectFormat.JSON: _from_json,
    ProjectFormat.MARKDOWN: _from_markdown,
    ProjectFormat.HTML: _from_html,
}


def extract_record(
    text: str,
    fmt: ProjectFormat,
    filename: str,
    link_fallback: str = "#",
) -> ProjectRecord:
    """
    Normalize one project source into a ProjectRecord.

    Missing fields take the shared defaults (title from the filename,
    placeholder image, `link_fallback`, the no-description text). JSON
    sources are the exception for the title: one that does not parse to an
    object, or has no non-blank `title`, comes back without a title and
    callers treat it as unparsable.
    """
    return _EXTRACTORS[fmt](_norm_text(text), filename, link_fallback)
