from __future__ import annotations

import pathlib
from dataclasses import dataclass, field
from typing import List, Tuple

from .config import (
    CONTENT_TOKEN,
    IMAGE_TOKEN,
    MANIFEST_NAME,
    PLACEHOLDER_TOKENS,
    TITLE_TOKEN,
)
from .errors import BuildError, FetchError
from .manifest import parse_manifest, sort_entries
from .records import ProjectFormat, ProjectRecord, extract_record
from .sources import LocalSource
from .utils import output_name


@dataclass
class BuildResult:
    generated: List[pathlib.Path] = field(default_factory=list)
    skipped: List[Tuple[str, str]] = field(default_factory=list)


def render_page(template: str, record: ProjectRecord) -> str:
    if not record.is_valid:
        raise ValueError(f"{record.filename}: cannot render a record without a title")
    content = record.content or f"<p>{record.description}</p>"
    return (
        template.replace(TITLE_TOKEN, record.title)
        .replace(IMAGE_TOKEN, record.image)
        .replace(CONTENT_TOKEN, content)
    )


def read_template(path: pathlib.Path) -> str:
    try:
        template = path.read_text(encoding="utf-8")
    except OSError as e:
        raise BuildError(f"cannot read template {path}: {e}") from e
    for token in PLACEHOLDER_TOKENS:
        if token not in template:
            print(f"! template {path.name} has no {token} placeholder")
    return template


def generate_project_pages(
    projects_dir: pathlib.Path,
    output_dir: pathlib.Path,
    template_path: pathlib.Path,
    report_skipped: bool = True,
) -> BuildResult:
    output_dir.mkdir(parents=True, exist_ok=True)
    template = read_template(template_path)

    source = LocalSource(projects_dir)
    try:
        entries = parse_manifest(source.fetch(MANIFEST_NAME))
    except FetchError as e:
        raise BuildError(str(e)) from e

    result = BuildResult()

    def skip(filename: str, reason: str) -> None:
        print(f"- skipping {filename}: {reason}")
        result.skipped.append((filename, reason))

    for entry in sort_entries(entries):
        filename = entry.filename
        fmt = ProjectFormat.from_filename(filename)
        if fmt is None:
            skip(filename, "unsupported project file format")
            continue
        try:
            text = source.fetch(filename)
        except FetchError as e:
            skip(filename, str(e))
            continue

        record = extract_record(text, fmt, filename)
        if not record.is_valid:
            skip(filename, "could not parse project info")
            continue

        out_path = output_dir / output_name(filename)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(render_page(template, record), encoding="utf-8")
        result.generated.append(out_path)
        print(f"✓ page for {record.title}: {out_path}")

    print(f"✓ generated {len(result.generated)} project pages")
    if report_skipped and result.skipped:
        print(f"! {len(result.skipped)} projects skipped:")
        for filename, reason in result.skipped:
            print(f"!   {filename}: {reason}")
    return result
