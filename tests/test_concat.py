import asyncio

import pytest

from sitebuild import BuildIOError


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def parts(tmp_path):
    paths = []
    for name, text in (("a.css", "A"), ("b.css", "B"), ("c.css", "C")):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        paths.append(path)
    return paths


class TestConcatFiles:
    def test_joins_in_order_with_newlines(self, build, parts):
        assert run(build.concat_files(parts)) == "A\nB\nC"

    def test_order_is_preserved(self, build, parts):
        a, b, c = parts
        assert run(build.concat_files([c, a, b])) == "C\nA\nB"

    def test_writes_dist_path_creating_parents(self, build, parts, tmp_path):
        out = tmp_path / "out" / "bundle" / "app.css"

        content = run(build.concat_files(parts, out))

        assert out.read_text(encoding="utf-8") == content == "A\nB\nC"

    def test_accepts_string_paths(self, build, parts):
        assert run(build.concat_files([str(p) for p in parts])) == "A\nB\nC"

    def test_missing_file_fails_without_writing(self, build, parts, tmp_path):
        out = tmp_path / "out" / "app.css"

        with pytest.raises(BuildIOError):
            run(build.concat_files([parts[0], tmp_path / "missing.css", parts[1]], out))
        assert not out.exists()

    def test_missing_file_is_an_os_error(self, build, tmp_path):
        with pytest.raises(OSError):
            run(build.concat_files([tmp_path / "missing.css"]))

    def test_empty_list(self, build):
        assert run(build.concat_files([])) == ""

    def test_bootstrap_token_without_bootstrap_is_empty(self, build, parts):
        assert run(build.concat_files(["bootstrap3", parts[0]])) == "\nA"
