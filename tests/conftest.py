import json

import pytest

TEMPLATE = """<!DOCTYPE HTML>
<html>
<head><title>{{PROJECT_TITLE}} | Portfolio</title></head>
<body>
<h2>{{PROJECT_TITLE}}</h2>
<span class="image main"><img src="../{{PROJECT_IMAGE}}" alt="" /></span>
<div class="content">{{PROJECT_CONTENT}}</div>
</body>
</html>
"""


@pytest.fixture
def site(tmp_path):
    """A minimal theme checkout: projects/, a template and an index page."""
    projects = tmp_path / "projects"
    projects.mkdir()
    (tmp_path / "project-template.html").write_text(TEMPLATE, encoding="utf-8")
    (tmp_path / "index.html").write_text(
        '<html><body><section id="project-container">'
        "<p>Loading projects...</p></section></body></html>",
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def write_project(site):
    def _write(name, content):
        path = site / "projects" / name
        if not isinstance(content, str):
            content = json.dumps(content)
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def write_manifest(write_project):
    def _write(entries):
        return write_project("project_list.json", entries)

    return _write
