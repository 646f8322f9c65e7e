import asyncio

import pytest

from sitebuild import Build, BuildIOError, TemplateError
from sitebuild.core.models import TemplateJob


def run(coro):
    return asyncio.run(coro)


class TestRenderTemplate:
    """Rendering of a single template into the dist root."""

    def test_renders_and_writes_target(self, build, src_root, dist_root):
        (src_root / "index.html").write_text("<h1>{{ title }}</h1>", encoding="utf-8")

        result = run(build.render_template("index.html", "index.html", {"title": "Home"}))

        assert result.target_body == "<h1>Home</h1>"
        assert result.target_path == dist_root / "index.html"
        assert (dist_root / "index.html").read_text(encoding="utf-8") == "<h1>Home</h1>"

    def test_accepts_already_rooted_paths(self, build, src_root, dist_root):
        (src_root / "page.html").write_text("ok", encoding="utf-8")

        result = run(build.render_template(src_root / "page.html", dist_root / "pages" / "page.html"))

        assert result.target_path == dist_root / "pages" / "page.html"
        assert result.target_path.read_text(encoding="utf-8") == "ok"

    def test_absolute_target_outside_dist_is_rerooted(self, build, src_root, dist_root, tmp_path):
        (src_root / "t.html").write_text("ok", encoding="utf-8")
        elsewhere = tmp_path / "elsewhere" / "t.html"

        result = run(build.render_template("t.html", elsewhere))

        assert result.target_path == dist_root.joinpath(*elsewhere.parts[1:])
        assert result.target_path.read_text(encoding="utf-8") == "ok"
        assert not elsewhere.exists()

    def test_file_name_added_without_mutating_data(self, build, src_root):
        (src_root / "about.html").write_text("{{ fileName }}|{{ title }}", encoding="utf-8")
        data = {"title": "About"}

        result = run(build.render_template("about.html", "nested/about-us.html", data))

        assert result.target_body == "about-us.html|About"
        assert data == {"title": "About"}

    def test_creates_parent_directories(self, build, src_root, dist_root):
        (src_root / "a.txt").write_text("a", encoding="utf-8")

        run(build.render_template("a.txt", "deep/er/a.txt"))

        assert (dist_root / "deep" / "er" / "a.txt").is_file()

    def test_includes_resolve_from_source_root(self, build, src_root):
        (src_root / "header.html").write_text("<header/>", encoding="utf-8")
        (src_root / "page.html").write_text('{% include "header.html" %}body', encoding="utf-8")

        result = run(build.render_template("page.html", "page.html"))

        assert result.target_body == "<header/>body"

    def test_missing_source_raises_io_error(self, build, dist_root):
        with pytest.raises(BuildIOError):
            run(build.render_template("missing.html", "missing.html"))
        assert not (dist_root / "missing.html").exists()

    def test_syntax_error_raises_template_error(self, build, src_root, dist_root):
        (src_root / "bad.html").write_text("{% if %}", encoding="utf-8")

        with pytest.raises(TemplateError):
            run(build.render_template("bad.html", "bad.html"))
        assert not (dist_root / "bad.html").exists()

    def test_undefined_renders_empty_by_default(self, build, src_root):
        (src_root / "x.html").write_text("[{{ nope }}]", encoding="utf-8")

        assert run(build.render_template("x.html", "x.html")).target_body == "[]"

    def test_strict_templates_reject_undefined(self, src_root, dist_root):
        strict = Build(src=src_root, dist=dist_root, strict_templates=True)
        (src_root / "x.html").write_text("[{{ nope }}]", encoding="utf-8")

        with pytest.raises(TemplateError):
            run(strict.render_template("x.html", "x.html"))

    def test_configured_encoding_is_used(self, src_root, dist_root):
        latin = Build(src=src_root, dist=dist_root, file_encoding="latin-1")
        (src_root / "e.txt").write_bytes("café {{ x }}".encode("latin-1"))

        run(latin.render_template("e.txt", "e.txt", {"x": "é"}))

        assert (dist_root / "e.txt").read_bytes() == "café é".encode("latin-1")


class TestRenderTemplates:
    """Sequential, fail-fast batch rendering."""

    def test_results_follow_job_order(self, build, src_root, dist_root):
        for name in ("a", "b", "c"):
            (src_root / f"{name}.txt").write_text(f"{name}{{{{ n }}}}", encoding="utf-8")
        jobs = [{"source": f"{name}.txt", "target": f"{name}.txt"} for name in ("c", "a", "b")]

        results = run(build.render_templates(jobs, {"n": 1}))

        assert [r.target_body for r in results] == ["c1", "a1", "b1"]
        assert [r.target_path.name for r in results] == ["c.txt", "a.txt", "b.txt"]

    def test_job_data_overrides_shared_data(self, build, src_root):
        (src_root / "t.txt").write_text("{{ who }}", encoding="utf-8")
        jobs = [TemplateJob(source="t.txt", target="t.txt", data={"who": "job"})]

        results = run(build.render_templates(jobs, {"who": "shared"}))

        assert results[0].target_body == "job"

    def test_first_failure_stops_batch(self, build, src_root, dist_root):
        (src_root / "second.txt").write_text("second", encoding="utf-8")
        jobs = [
            TemplateJob(source="first.txt", target="first.txt"),
            TemplateJob(source="second.txt", target="second.txt"),
        ]

        with pytest.raises(BuildIOError):
            run(build.render_templates(jobs))
        assert not (dist_root / "second.txt").exists()

    def test_earlier_writes_are_kept(self, build, src_root, dist_root):
        (src_root / "ok.txt").write_text("ok", encoding="utf-8")
        (src_root / "bad.txt").write_text("{% endfor %}", encoding="utf-8")
        jobs = [
            TemplateJob(source="ok.txt", target="ok.txt"),
            TemplateJob(source="bad.txt", target="bad.txt"),
        ]

        with pytest.raises(TemplateError):
            run(build.render_templates(jobs))
        assert (dist_root / "ok.txt").read_text(encoding="utf-8") == "ok"
