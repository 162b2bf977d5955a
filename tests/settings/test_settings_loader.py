from pathlib import Path

import pytest
from pydantic import ValidationError

from unipatch.settings import LogLevel, Settings, load_settings


def _write_tmp(tmp_path: Path, name: str, text: str) -> Path:
    p = tmp_path / name
    p.write_text(text, encoding="utf-8")
    return p


def test_defaults() -> None:
    settings = Settings()
    assert settings.parse.stop_at_declared_counts is False
    assert settings.render.omit_unit_counts is False
    assert settings.display.add_style == "green"
    assert settings.log_level == LogLevel.warning


def test_load_yaml(tmp_path: Path) -> None:
    cfg = """
parse:
  stop_at_declared_counts: true
render:
  omit_unit_counts: true
display:
  show_line_numbers: true
  add_style: bold green
log_level: debug
"""
    settings = load_settings(_write_tmp(tmp_path, "unipatch.yaml", cfg))
    assert settings.parse.stop_at_declared_counts is True
    assert settings.render.omit_unit_counts is True
    assert settings.display.show_line_numbers is True
    assert settings.display.add_style == "bold green"
    assert settings.log_level == LogLevel.debug


def test_load_json5_with_comments(tmp_path: Path) -> None:
    cfg = """
{
  // GNU diff style ranges
  render: { omit_unit_counts: true },
}
"""
    settings = load_settings(str(_write_tmp(tmp_path, "unipatch.json5", cfg)))
    assert settings.render.omit_unit_counts is True


def test_empty_yaml_gives_defaults(tmp_path: Path) -> None:
    settings = load_settings(_write_tmp(tmp_path, "unipatch.yaml", ""))
    assert settings == Settings()


def test_root_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="mapping"):
        load_settings(_write_tmp(tmp_path, "unipatch.yaml", "- a\n- b\n"))


def test_unsupported_extension(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Unsupported"):
        load_settings(_write_tmp(tmp_path, "unipatch.toml", "a = 1\n"))


def test_invalid_style_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings.model_validate({"display": {"add_style": "not-a-colour-xyz"}})


def test_placeholders_are_not_expanded(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("UNIPATCH_STYLE", "green")
    cfg = """
display:
  add_style: "${env:UNIPATCH_STYLE}"
"""
    with pytest.raises(ValidationError):
        load_settings(_write_tmp(tmp_path, "unipatch.yaml", cfg))
