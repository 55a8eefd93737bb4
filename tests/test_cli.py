# tests/test_cli.py

import json
from unittest.mock import patch

import pytest

from asset_pruner import cli
from asset_pruner.cli import build_parser, main


@pytest.fixture
def project(tmp_path):
    for name in ("arduino", "esp32", "rp2040"):
        (tmp_path / "tools" / "Arduino" / "packages" / name).mkdir(parents=True)
    for name in ("k210", "esp32"):
        (tmp_path / "firmwares" / name).mkdir(parents=True)
    return tmp_path


def test_default_run_prunes_and_prints_summary(project, capsys):
    code = main(["--root", str(project)])

    out = capsys.readouterr().out
    assert code == 0
    assert "=== esp32 cleanup ===" in out
    assert "Removed: 3;" in out
    assert "Failed: 0" in out
    assert "Skipped categories: esp32-tools, esp32-libs, libraries" in out
    assert sorted(p.name for p in (project / "firmwares").iterdir()) == ["esp32"]


def test_selects_profile_at_invocation(project):
    assert main(["--root", str(project), "--profile", "rp2040"]) == 0

    packages = project / "tools" / "Arduino" / "packages"
    assert sorted(p.name for p in packages.iterdir()) == ["rp2040"]


def test_strict_mode_reports_partial_failure(project, capsys):
    with patch("asset_pruner.pruner._rmtree", side_effect=OSError("Device or resource busy")):
        assert main(["--root", str(project)]) == 0
        assert main(["--root", str(project), "--strict"]) == 3

    out = capsys.readouterr().out
    assert "Device or resource busy" in out


def test_strict_default_comes_from_environment(project):
    with patch.object(cli.config, "STRICT", True):
        args = build_parser().parse_args(["--root", str(project)])
    assert args.strict is True


def test_unknown_profile_is_a_usage_error(project, capsys):
    code = main(["--root", str(project), "--profile", "avr"])

    err = capsys.readouterr().err
    assert code == 2
    assert "Unknown profile 'avr'" in err
    assert (project / "firmwares" / "k210").exists()


def test_missing_root_is_fatal(tmp_path, capsys):
    code = main(["--root", str(tmp_path / "nowhere")])

    assert code == 1
    assert "ERROR: Cleanup failed" in capsys.readouterr().err


def test_unexpected_fault_is_fatal(project, capsys):
    with patch("asset_pruner.cli.run", side_effect=RuntimeError("boom")):
        code = main(["--root", str(project)])

    assert code == 1
    assert "boom" in capsys.readouterr().err


def test_list_profiles(capsys):
    assert main(["--list-profiles"]) == 0
    out = capsys.readouterr().out
    assert "esp32: " in out
    assert "rp2040: " in out


def test_profile_file_adds_profiles(project, tmp_path, capsys):
    profile_file = tmp_path / "profiles.json"
    profile_file.write_text(
        json.dumps(
            {
                "name": "firmware-only",
                "categories": [
                    {
                        "category_id": "firmwares",
                        "label": "firmwares",
                        "parent": ["firmwares"],
                        "exclusions": ["k210"],
                    }
                ],
            }
        )
    )

    code = main(
        ["--root", str(project), "--profile-file", str(profile_file), "--profile", "firmware-only"]
    )

    assert code == 0
    assert not (project / "firmwares" / "k210").exists()
    assert (project / "tools" / "Arduino" / "packages" / "arduino").exists()


def test_invalid_profile_file_stops_before_deleting(project, tmp_path, capsys):
    profile_file = tmp_path / "profiles.json"
    profile_file.write_text("[{]")

    code = main(["--root", str(project), "--profile-file", str(profile_file)])

    assert code == 2
    assert "not valid JSON" in capsys.readouterr().err
    assert (project / "firmwares" / "k210").exists()


@pytest.mark.parametrize("bad", ["..", "a/b"])
def test_toolchain_root_must_be_a_name(bad):
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--toolchain-root", bad])


def test_partial_failure_and_usage_error_exit_differently(project):
    with patch("asset_pruner.pruner._rmtree", side_effect=OSError("busy")):
        partial = main(["--root", str(project), "--strict"])
    usage = main(["--root", str(project), "--profile", "avr", "--strict"])

    assert (partial, usage) == (3, 2)
