import pytest

from sitebuild import BuildIOError


@pytest.fixture
def assets(tmp_path):
    file_a = tmp_path / "assets" / "logo.svg"
    dir_b = tmp_path / "assets" / "fonts"
    (dir_b / "woff").mkdir(parents=True)
    file_a.write_text("<svg/>", encoding="utf-8")
    (dir_b / "font.css").write_text("@font-face{}", encoding="utf-8")
    (dir_b / "woff" / "a.woff").write_bytes(b"\x00\x01")
    return file_a, dir_b


class TestCopyAssets:
    def test_copies_files_and_trees(self, build, assets, tmp_path):
        file_a, dir_b = assets
        dest = tmp_path / "dist" / "static"

        copied = build.copy_assets([file_a, dir_b], dest)

        assert copied == [dest / "logo.svg", dest / "fonts"]
        assert (dest / "logo.svg").read_text(encoding="utf-8") == "<svg/>"
        assert (dest / "fonts" / "font.css").read_text(encoding="utf-8") == "@font-face{}"
        assert (dest / "fonts" / "woff" / "a.woff").read_bytes() == b"\x00\x01"

    def test_single_source(self, build, assets, tmp_path):
        file_a, _ = assets
        dest = tmp_path / "out"

        build.copy_assets(str(file_a), dest)

        assert (dest / "logo.svg").is_file()

    def test_copy_into_existing_tree(self, build, assets, tmp_path):
        _, dir_b = assets
        dest = tmp_path / "out"
        build.copy_assets(dir_b, dest)

        build.copy_assets(dir_b, dest)

        assert (dest / "fonts" / "font.css").is_file()

    def test_missing_source_stops_batch(self, build, assets, tmp_path):
        file_a, dir_b = assets
        dest = tmp_path / "out"

        with pytest.raises(BuildIOError):
            build.copy_assets([file_a, tmp_path / "missing", dir_b], dest)

        assert (dest / "logo.svg").is_file()
        assert not (dest / "fonts").exists()
