import pytest

from sitebuild import Build


class FakeLessCompiler:
    """Records compiled sources and returns a canned result."""

    def __init__(self, result="compiled-css", error=None):
        self.result = result
        self.error = error
        self.calls = []

    def compile(self, source, filename):
        self.calls.append((source, filename))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def src_root(tmp_path):
    root = tmp_path / "src"
    root.mkdir()
    return root


@pytest.fixture
def dist_root(tmp_path):
    return tmp_path / "dist"


@pytest.fixture
def vendor_root(tmp_path):
    return tmp_path / "vendor"


@pytest.fixture
def build(src_root, dist_root, vendor_root):
    return Build(src=src_root, dist=dist_root, vendor_root=vendor_root, scss_delay=0)


@pytest.fixture
def fake_less():
    return FakeLessCompiler()
