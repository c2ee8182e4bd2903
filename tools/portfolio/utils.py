from __future__ import annotations

import pathlib
from typing import Any, Dict

import yaml

from .config import SOURCE_EXT


def read_yaml(path: pathlib.Path) -> Dict[str, Any]:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def strip_source_ext(filename: str) -> str:
    return SOURCE_EXT.sub("", filename)


def title_from_filename(filename: str) -> str:
    return strip_source_ext(pathlib.PurePosixPath(filename).name).replace("-", " ")


def output_name(filename: str) -> str:
    """`demo.md` -> `demo.html`; the source's directory part is kept."""
    return strip_source_ext(filename) + ".html"


def unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value
