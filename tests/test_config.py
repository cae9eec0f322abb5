"""Tests for TOML configuration loading."""

from pathlib import Path

from autoimport_cli import config
from autoimport_cli.config_manager import load_index_config, save_index_config


def test_defaults_without_file():
    """Test defaults without file."""
    settings = config.load_settings()
    assert settings.extensions == [".py"]
    assert ".venv" in settings.skip_dirs
    assert settings.root_markers == config.DEFAULT_ROOT_MARKERS


def test_overrides_from_file(_isolated_config: Path):
    """Test overrides from file."""
    (_isolated_config / "config.toml").write_text(
        '[index]\nextensions = [".py", ".pyi"]\nskip_dirs = ["vendor"]\n',
        encoding="utf-8",
    )
    settings = config.load_settings()
    assert settings.extensions == [".py", ".pyi"]
    assert settings.skip_dirs == ["vendor"]
    assert settings.root_markers == config.DEFAULT_ROOT_MARKERS


def test_malformed_file_falls_back(_isolated_config: Path, caplog):
    """Test malformed file falls back."""
    (_isolated_config / "config.toml").write_text("[index\nbroken", encoding="utf-8")
    with caplog.at_level("WARNING"):
        assert load_index_config()["extensions"] == [".py"]
    assert "config" in caplog.text.lower()


def test_bad_values_ignored(_isolated_config: Path):
    """Test bad values ignored."""
    (_isolated_config / "config.toml").write_text(
        '[index]\nextensions = ".py"\nunknown = ["x"]\n', encoding="utf-8"
    )
    assert load_index_config()["extensions"] == [".py"]


def test_save_preserves_other_sections(_isolated_config: Path):
    """Test save preserves other sections."""
    path = _isolated_config / "config.toml"
    path.write_text('[editor]\nname = "vim"\n', encoding="utf-8")
    save_index_config({"extensions": [".py"]})
    text = path.read_text(encoding="utf-8")
    assert "[editor]" in text
    assert "[index]" in text
