from __future__ import annotations

import json
from pathlib import Path

import pytest

from infrastructure.settings import JsonPreferences, JsonSettings


def test_settings_dotted_access(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"swipe": {"threshold": 300}, "thumbnail_size": 512}))

    settings = JsonSettings(path)

    assert settings.get("swipe.threshold") == 300
    assert settings.get("thumbnail_size") == 512
    assert settings.get("swipe.missing", "x") == "x"
    assert settings.get("thumbnail_size.deeper") is None


def test_settings_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        JsonSettings(tmp_path / "settings.json")


def test_preferences_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "data" / "prefs.json"
    prefs = JsonPreferences(path)
    assert prefs.get_bool("first_launch", True) is True

    prefs.set_bool("first_launch", False)

    assert json.loads(path.read_text(encoding="utf-8")) == {"first_launch": False}
    assert JsonPreferences(path).get_bool("first_launch", True) is False


def test_preferences_corrupt_file_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")

    prefs = JsonPreferences(path)

    assert prefs.get_bool("first_launch", True) is True
    prefs.set_bool("first_launch", False)
    assert JsonPreferences(path).get_bool("first_launch", True) is False


def test_preferences_ignore_non_bool_values(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"first_launch": "no"}), encoding="utf-8")
    assert JsonPreferences(path).get_bool("first_launch", True) is True


PROJECT_ROOT = Path(__file__).resolve().parents[1]


def test_checkout_settings_file_loads() -> None:
    settings = JsonSettings(PROJECT_ROOT / "settings.json")

    assert settings.get("swipe.threshold") == 250
    assert settings.get("library.extensions")
    assert settings.get("logging.level")


def test_packaging_installs_only_library_packages() -> None:
    tomllib = pytest.importorskip("tomllib")
    with (PROJECT_ROOT / "pyproject.toml").open("rb") as fh:
        project = tomllib.load(fh)

    # main.py reads settings.json beside itself, so it only runs from a checkout
    assert "gui-scripts" not in project["project"]
    assert "scripts" not in project["project"]
    assert "py-modules" not in project["tool"].get("setuptools", {})
