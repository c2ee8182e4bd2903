from __future__ import annotations

import pathlib
import sys
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from bs4 import BeautifulSoup

from .config import (
    CONTAINER_ID,
    MANIFEST_NAME,
    MAX_WORKERS,
    NO_PROJECTS_HTML,
    PAGES_URL_DIR,
    PROJECTS_URL_DIR,
)
from .errors import FetchError, PortfolioError
from .manifest import parse_manifest, sort_entries
from .records import ProjectFormat, ProjectRecord, extract_record
from .sources import Source
from .utils import output_name


def render_card(record: ProjectRecord) -> str:
    return (
        '<article class="project-item">\n'
        f'    <a href="{record.link}" class="image">\n'
        f'        <img src="{record.image}" alt="{record.title}" />\n'
        "    </a>\n"
        '    <div class="inner">\n'
        f"        <h4>{record.title}</h4>\n"
        f"        <p>{record.description}</p>\n"
        "    </div>\n"
        "</article>"
    )


def render_listing(records: Sequence[ProjectRecord]) -> str:
    if not records:
        return NO_PROJECTS_HTML
    return "\n".join(render_card(r) for r in records)


def load_project(source: Source, filename: str) -> Optional[ProjectRecord]:
    fmt = ProjectFormat.from_filename(filename)
    if fmt is None:
        print(f"! unsupported project file format: {filename}")
        return None
    try:
        text = source.fetch(filename)
    except FetchError as e:
        print(f"! failed to load project file {filename}: {e}")
        return None

    record = extract_record(
        text, fmt, filename, link_fallback=f"{PROJECTS_URL_DIR}/{filename}"
    )
    if not record.is_valid:
        print(f"! could not parse project info in {filename}")
        return None
    # cards point at the generated page, not the raw source
    return record.with_link(f"{PAGES_URL_DIR}/{output_name(filename)}")


def load_projects(
    source: Source, max_workers: int = MAX_WORKERS
) -> List[ProjectRecord]:
    """
    Fetch the manifest, then every project concurrently.

    The result follows manifest order regardless of which fetch finished
    first; projects that failed to load are left out.
    """
    entries = sort_entries(parse_manifest(source.fetch(MANIFEST_NAME)))
    if not entries:
        return []
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        loaded = list(
            pool.map(lambda e: load_project(source, e.filename), entries)
        )
    return [r for r in loaded if r is not None]


def inject_listing(
    page_html: str, listing_html: str, container_id: str = CONTAINER_ID
) -> Optional[str]:
    """
    Replace the children of the element with `id=container_id`.

    Returns the re-serialized page, or None when the page has no such element.
    """
    soup = BeautifulSoup(page_html, "html.parser")
    container = soup.find(id=container_id)
    if container is None:
        print(
            f"ERROR: project container #{container_id} not found in the page",
            file=sys.stderr,
        )
        return None
    container.clear()
    fragment = BeautifulSoup(listing_html, "html.parser")
    for node in list(fragment.contents):
        container.append(node)
    return str(soup)


def build_listing(
    source: Source,
    index_path: pathlib.Path,
    container_id: str = CONTAINER_ID,
    max_workers: int = MAX_WORKERS,
) -> bool:
    page_html = index_path.read_text(encoding="utf-8")
    if BeautifulSoup(page_html, "html.parser").find(id=container_id) is None:
        print(
            f"ERROR: project container #{container_id} not found in {index_path}",
            file=sys.stderr,
        )
        return False

    try:
        records = load_projects(source, max_workers=max_workers)
    except PortfolioError as e:
        print(f"ERROR: loading projects from {source!r}: {e}", file=sys.stderr)
        listing_html = f"<p>Error loading projects: {e}</p>"
    else:
        listing_html = render_listing(records)
        print(f"✓ listed {len(records)} projects in {index_path.name}")

    index_path.write_text(
        inject_listing(page_html, listing_html, container_id), encoding="utf-8"
    )
    return True
