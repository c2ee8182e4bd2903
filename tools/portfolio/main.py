#!/usr/bin/env python3
"""
Project page generator and listing for the portfolio site.

- Pages -> html5up-read-only/project-pages/<name>.html
  one per manifest entry, from project-template.html
  ({{PROJECT_TITLE}}, {{PROJECT_IMAGE}}, {{PROJECT_CONTENT}})
- Listing -> summary cards inside #project-container of index.html

Sources are listed in html5up-read-only/projects/project_list.json and may be
JSON, Markdown with frontmatter, or HTML with `<!-- key: value -->` comments.
Optional overrides are read from portfolio.yml at the repo root.
"""

from __future__ import annotations

import sys

from .config import SETTINGS_PATH, load_settings
from .errors import BuildError
from .listing import build_listing
from .pages import generate_project_pages
from .sources import open_source


def main() -> int:
    try:
        settings = load_settings(SETTINGS_PATH)
        generate_project_pages(
            settings.projects_dir,
            settings.output_dir,
            settings.template,
            report_skipped=settings.report_skipped,
        )
    except BuildError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if not settings.index_page.exists():
        print(f"- no index page at {settings.index_page}, listing skipped")
        return 0

    ok = build_listing(
        open_source(settings.listing_source),
        settings.index_page,
        container_id=settings.container_id,
        max_workers=settings.max_workers,
    )
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
