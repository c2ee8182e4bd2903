#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

from .errors import BuildError

# ---------- Paths

# This assumes config.py sits in tools/portfolio/ at the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
SITE_DIR = ROOT / "html5up-read-only"
PROJECTS_DIR = SITE_DIR / "projects"
PAGES_OUT = SITE_DIR / "project-pages"
TEMPLATE_PATH = SITE_DIR / "project-template.html"
INDEX_PAGE = SITE_DIR / "index.html"
SETTINGS_PATH = ROOT / "portfolio.yml"

MANIFEST_NAME = "project_list.json"
PAGES_URL_DIR = "project-pages"
PROJECTS_URL_DIR = "projects"
CONTAINER_ID = "project-container"

# ---------- Defaults

PLACEHOLDER_IMAGE = "images/placeholder.jpg"
NO_DESCRIPTION = "No description available"
NO_PROJECTS_HTML = "<p>No projects found.</p>"
MAX_WORKERS = 8
HTTP_TIMEOUT = 10

TITLE_TOKEN = "{{PROJECT_TITLE}}"
IMAGE_TOKEN = "{{PROJECT_IMAGE}}"
CONTENT_TOKEN = "{{PROJECT_CONTENT}}"
PLACEHOLDER_TOKENS = (TITLE_TOKEN, IMAGE_TOKEN, CONTENT_TOKEN)

MARKDOWN_EXTENSIONS = ["fenced_code", "tables"]

# Some shared regexes

SOURCE_EXT = re.compile(r"\.(json|md|html)$", re.IGNORECASE)
FRONTMATTER_FENCE = "---"
HTML_TITLE = re.compile(r"<title\b[^>]*>(?P<text>.*?)</title>",
                        re.IGNORECASE | re.DOTALL)
HTML_META_COMMENT = re.compile(
    r"<!-- (?P<key>image|link|description): (?P<value>.*?) -->"
)
HTML_BODY = re.compile(r"<body\b[^>]*>(?P<inner>[\s\S]*?)</body>",
                       re.IGNORECASE)
URL_SCHEME = re.compile(r"^https?://", re.IGNORECASE)
LEFTOVER_TOKEN = re.compile(r"\{\{[A-Z_]+\}\}")


# ---------- Settings


@dataclass(frozen=True)
class Settings:
    projects_dir: pathlib.Path = PROJECTS_DIR
    output_dir: pathlib.Path = PAGES_OUT
    template: pathlib.Path = TEMPLATE_PATH
    index_page: pathlib.Path = INDEX_PAGE
    container_id: str = CONTAINER_ID
    source: Optional[str] = None
    report_skipped: bool = True
    max_workers: int = MAX_WORKERS

    @property
    def listing_source(self) -> str:
        return self.source or str(self.projects_dir)


_PATH_KEYS = ("projects_dir", "output_dir", "template", "index_page")


def _resolve(base: pathlib.Path, value: Any) -> pathlib.Path:
    p = pathlib.Path(str(value))
    return p if p.is_absolute() else (base / p)


def load_settings(path: pathlib.Path = SETTINGS_PATH) -> Settings:
    """
    Read optional overrides from `portfolio.yml`.

    `site_dir` moves every site-relative default at once; the other path
    keys are resolved against the directory holding the settings file.
    """
    from .utils import read_yaml

    try:
        raw = read_yaml(path)
    except yaml.YAMLError as e:
        raise BuildError(f"cannot parse {path}: {e}") from e
    if not isinstance(raw, dict):
        raise BuildError(f"{path.name} must be a mapping of settings")
    base = path.parent
    known = set(Settings.__dataclass_fields__) | {"site_dir"}
    for key in raw:
        if key not in known:
            print(f"! ignoring unknown setting {key!r} in {path.name}")

    site = _resolve(base, raw["site_dir"]) if raw.get("site_dir") else SITE_DIR
    values: Dict[str, Any] = {
        "projects_dir": site / PROJECTS_DIR.name,
        "output_dir": site / PAGES_OUT.name,
        "template": site / TEMPLATE_PATH.name,
        "index_page": site / INDEX_PAGE.name,
    }
    for key in _PATH_KEYS:
        if raw.get(key):
            values[key] = _resolve(base, raw[key])
    if raw.get("container_id"):
        values["container_id"] = str(raw["container_id"])
    if raw.get("source"):
        values["source"] = str(raw["source"])
    if "report_skipped" in raw:
        values["report_skipped"] = bool(raw["report_skipped"])
    if raw.get("max_workers") is not None:
        mw = raw["max_workers"]
        if isinstance(mw, bool) or not isinstance(mw, int):
            raise BuildError(f"max_workers must be an integer, got {mw!r}")
        values["max_workers"] = max(1, mw)
    return Settings(**values)
