from __future__ import annotations

from pathlib import Path

import pytest

from frametype.config import FrameSettings
from frametype.core.validate import ValidationMode

ENV_KEYS = ["FRAMETYPE_MODE", "FRAMETYPE_TIME_UNIT", "FRAMETYPE_ENUM_CHECK"]


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write(tmp: Path, name: str, content: str) -> Path:
    p = tmp / name
    p.write_text(content)
    return p


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "frametype.toml",
        """
        [frames]
        mode = "standard"
        time_unit = "ms"
        enum_check = "collect"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FRAMETYPE_MODE", "STRICT")
    monkeypatch.setenv("FRAMETYPE_TIME_UNIT", "ns")

    s = FrameSettings.load()

    assert s.mode is ValidationMode.STRICT  # env override
    assert s.time_unit == "ns"  # env override
    assert s.enum_check == "collect"  # from TOML


def test_settings_from_toml_top_level_keys(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "frametype.toml", 'strict = true\nenum_check = "fail_fast"\n')
    monkeypatch.chdir(tmp_path)

    s = FrameSettings.load()

    assert s.mode is ValidationMode.STRICT
    assert s.enum_check == "fail_fast"
    assert s.time_unit == "us"


def test_settings_from_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    _write(
        tmp_path,
        "pyproject.toml",
        """
        [project]
        name = "demo"

        [tool.frametype]
        time_unit = "ms"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)

    assert FrameSettings.load().time_unit == "ms"


def test_settings_explicit_path(tmp_path: Path) -> None:
    p = _write(tmp_path, "custom.toml", '[frames]\nmode = "strict"\n')
    assert FrameSettings.from_toml(p).mode is ValidationMode.STRICT


def test_settings_defaults_when_no_config(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = FrameSettings.load()

    assert s == FrameSettings()
    assert s.mode is ValidationMode.STANDARD
    assert s.time_unit == "us"
    assert s.enum_check == "off"


def test_invalid_values_are_ignored(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "frametype.toml", '[frames]\nmode = "lenient"\ntime_unit = 5\n')
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FRAMETYPE_ENUM_CHECK", "sometimes")

    assert FrameSettings.load() == FrameSettings()


def test_malformed_toml_falls_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "frametype.toml", "[frames\nmode = ")
    monkeypatch.chdir(tmp_path)

    assert FrameSettings.load() == FrameSettings()


def test_empty_frametype_toml_falls_through_to_pyproject(tmp_path: Path, monkeypatch) -> None:
    _write(tmp_path, "frametype.toml", "# no settings yet\n")
    _write(tmp_path, "pyproject.toml", '[tool.frametype]\nenum_check = "collect"\n')
    monkeypatch.chdir(tmp_path)

    assert FrameSettings.load().enum_check == "collect"
