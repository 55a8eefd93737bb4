# tests/test_paths.py

import pytest

from asset_pruner.errors import RootError
from asset_pruner.paths import check_root, parent_exists, resolve_parent
from asset_pruner.profiles import ESP32_PROFILE


def test_resolve_parent_substitutes_toolchain_root(tmp_path):
    toolchains = ESP32_PROFILE.categories[0]
    assert resolve_parent(tmp_path, toolchains) == tmp_path / "tools" / "Arduino" / "packages"
    assert (
        resolve_parent(tmp_path, toolchains, toolchain_root="Arduino15")
        == tmp_path / "tools" / "Arduino15" / "packages"
    )


def test_resolve_parent_fixed_segments(tmp_path):
    firmwares = ESP32_PROFILE.categories[-1]
    assert resolve_parent(tmp_path, firmwares) == tmp_path / "firmwares"


def test_parent_exists(tmp_path):
    assert not parent_exists(tmp_path / "firmwares")

    (tmp_path / "firmwares").write_text("not a directory")
    assert not parent_exists(tmp_path / "firmwares")

    (tmp_path / "tools").mkdir()
    assert parent_exists(tmp_path / "tools")


def test_check_root(tmp_path):
    assert check_root(tmp_path) == tmp_path.resolve()

    with pytest.raises(RootError, match="does not exist"):
        check_root(tmp_path / "nowhere")

    not_a_dir = tmp_path / "file.txt"
    not_a_dir.write_text("x")
    with pytest.raises(RootError):
        check_root(not_a_dir)
