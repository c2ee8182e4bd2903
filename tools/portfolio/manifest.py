from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List, Optional

from .errors import ManifestError


@dataclass(frozen=True)
class ManifestEntry:
    filename: str
    order: Optional[float] = None


def parse_manifest(text: str) -> List[ManifestEntry]:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ManifestError(f"manifest is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ManifestError("manifest must be a JSON array")

    entries: List[ManifestEntry] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict) or not isinstance(item.get("filename"), str):
            raise ManifestError(f"manifest entry {i} has no filename")
        order = item.get("order")
        if order is not None and (
            isinstance(order, bool) or not isinstance(order, (int, float))
        ):
            raise ManifestError(
                f"manifest entry {item['filename']!r}: order must be a number"
            )
        entries.append(ManifestEntry(item["filename"], order))
    return entries


def _sort_key(entry: ManifestEntry):
    # explicit orders first, ascending; the rest by filename
    if entry.order is not None:
        return (0, entry.order, "")
    return (1, 0, entry.filename)


def sort_entries(entries: List[ManifestEntry]) -> List[ManifestEntry]:
    return sorted(entries, key=_sort_key)
