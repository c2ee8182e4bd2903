import re

import pytest

from portfolio.errors import BuildError
from portfolio.pages import generate_project_pages, render_page
from portfolio.records import ProjectRecord
from portfolio.utils import output_name

from conftest import TEMPLATE


def _build(site, **kw):
    return generate_project_pages(
        site / "projects",
        site / "project-pages",
        site / "project-template.html",
        **kw,
    )


def test_render_page_replaces_every_token():
    record = ProjectRecord("a.json", "Alpha & <Beta>", image="img/a.png",
                           content="<ul><li>x</li></ul>")
    page = render_page(TEMPLATE, record)
    assert not re.search(r"\{\{[A-Z_]+\}\}", page)
    assert page.count("Alpha & <Beta>") == 2
    assert "../img/a.png" in page
    assert "<ul><li>x</li></ul>" in page


def test_render_page_falls_back_to_description():
    page = render_page("{{PROJECT_CONTENT}}", ProjectRecord("a.md", "A", description="d"))
    assert page == "<p>d</p>"


def test_render_page_rejects_untitled_record():
    with pytest.raises(ValueError):
        render_page(TEMPLATE, ProjectRecord("bad.json", None))


@pytest.mark.parametrize(
    "name,expected",
    [("a.json", "a.html"), ("b.md", "b.html"), ("c.html", "c.html"), ("d.v2.md", "d.v2.html")],
)
def test_output_name(name, expected):
    assert output_name(name) == expected


def test_end_to_end_json_without_details(site, write_manifest, write_project):
    write_manifest([{"filename": "a.json"}])
    write_project("a.json", {"title": "A", "description": "d"})
    (site / "project-template.html").write_text(
        "<main>{{PROJECT_CONTENT}}</main>", encoding="utf-8"
    )

    result = _build(site)

    out = site / "project-pages" / "a.html"
    assert result.generated == [out]
    assert out.read_text(encoding="utf-8") == "<main><p>d</p></main>"


def test_build_skips_bad_projects_and_continues(site, write_manifest, write_project, capsys):
    write_manifest([
        {"filename": "broken.json", "order": 1},
        {"filename": "missing.md", "order": 2},
        {"filename": "notes.txt", "order": 3},
        {"filename": "good.md", "order": 4},
    ])
    write_project("broken.json", "{oops")
    write_project("good.md", "---\ntitle: Good\n---\nBody\n")

    result = _build(site)

    assert [p.name for p in result.generated] == ["good.html"]
    assert [name for name, _ in result.skipped] == ["broken.json", "missing.md", "notes.txt"]
    out = capsys.readouterr().out
    assert "3 projects skipped" in out


def test_build_can_stay_quiet_about_skips(site, write_manifest, capsys):
    write_manifest([{"filename": "missing.json"}])
    result = _build(site, report_skipped=False)
    assert len(result.skipped) == 1
    assert "projects skipped" not in capsys.readouterr().out


def test_build_follows_manifest_order(site, write_manifest, write_project, capsys):
    write_manifest([{"filename": "b.json"}, {"filename": "c.json", "order": 1}, {"filename": "a.json"}])
    for name in ("a", "b", "c"):
        write_project(f"{name}.json", {"title": name.upper()})
    result = _build(site)
    assert [p.name for p in result.generated] == ["c.html", "a.html", "b.html"]


def test_build_aborts_without_manifest(site):
    with pytest.raises(BuildError):
        _build(site)


def test_build_aborts_without_template(site, write_manifest):
    write_manifest([])
    (site / "project-template.html").unlink()
    with pytest.raises(BuildError):
        _build(site)


def test_template_missing_token_warns(site, write_manifest, capsys):
    write_manifest([])
    (site / "project-template.html").write_text("{{PROJECT_TITLE}}", encoding="utf-8")
    _build(site)
    out = capsys.readouterr().out
    assert "{{PROJECT_IMAGE}}" in out
    assert "{{PROJECT_CONTENT}}" in out


def test_build_skips_json_without_title(site, write_manifest, write_project):
    write_manifest([{"filename": "untitled.json"}, {"filename": "titled.json"}])
    write_project("untitled.json", {"description": "d"})
    write_project("titled.json", {"title": "T"})

    result = _build(site)

    assert [p.name for p in result.generated] == ["titled.html"]
    assert result.skipped == [("untitled.json", "could not parse project info")]
    assert not (site / "project-pages" / "untitled.html").exists()
