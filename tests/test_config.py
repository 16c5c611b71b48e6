from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from lockdiff.config import (
    LockDiffConfig,
    _parse_section,
    _pyproject_has_lockdiff_section,
    _read_toml,
    discover_config_file,
    load_config,
)
from lockdiff.exceptions import ConfigError


@pytest.mark.unit
class TestLockDiffConfig:
    """Tests for LockDiffConfig dataclass."""

    def test_default_initialization(self) -> None:
        """Test LockDiffConfig initializes with correct defaults."""
        config = LockDiffConfig()

        assert config.ref == "HEAD"
        assert config.include_develop is False
        assert config.strict_versions is False
        assert config.source_path is None

    def test_to_log_dict(self) -> None:
        """Test to_log_dict returns configuration without metadata."""
        config = LockDiffConfig(
            ref="origin/main",
            include_develop=True,
            source_path=Path("/test/path.toml"),
        )

        assert config.to_log_dict() == {
            "ref": "origin/main",
            "include_develop": True,
            "strict_versions": False,
        }


@pytest.mark.unit
class TestDiscoverConfigFile:
    """Tests for discover_config_file function."""

    def test_explicit_path_priority(self, tmp_path: Path) -> None:
        """Test explicit path is used when provided and exists."""
        config_file = tmp_path / "custom.toml"
        config_file.write_text("[lockdiff]\n", encoding="utf-8")
        (tmp_path / "lockdiff.toml").write_text("[lockdiff]\n", encoding="utf-8")

        with patch("lockdiff.config.Path.cwd", return_value=tmp_path):
            result = discover_config_file(config_file)

        assert result == config_file.resolve()

    def test_explicit_path_not_found_raises_error(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            discover_config_file(tmp_path / "nonexistent.toml")

        assert "not found" in str(exc_info.value).lower()

    def test_discovers_lockdiff_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / "lockdiff.toml"
        config_file.write_text("[lockdiff]\n", encoding="utf-8")

        with patch("lockdiff.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    def test_lockdiff_toml_beats_pyproject(self, tmp_path: Path) -> None:
        (tmp_path / "lockdiff.toml").write_text("[lockdiff]\n", encoding="utf-8")
        (tmp_path / "pyproject.toml").write_text("[tool.lockdiff]\n", encoding="utf-8")

        with patch("lockdiff.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file().name == "lockdiff.toml"

    def test_discovers_pyproject_toml_with_section(self, tmp_path: Path) -> None:
        config_file = tmp_path / "pyproject.toml"
        config_file.write_text('[tool.lockdiff]\nref = "main"\n', encoding="utf-8")

        with patch("lockdiff.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() == config_file

    def test_ignores_pyproject_toml_without_section(self, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text("[tool.other]\nkey = 'value'\n", encoding="utf-8")

        with patch("lockdiff.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None

    def test_nothing_found(self, tmp_path: Path) -> None:
        with patch("lockdiff.config.Path.cwd", return_value=tmp_path):
            assert discover_config_file() is None


@pytest.mark.unit
class TestPyprojectHasLockdiffSection:
    """Tests for _pyproject_has_lockdiff_section."""

    def test_with_section(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.lockdiff]\ninclude_develop = true\n", encoding="utf-8")

        assert _pyproject_has_lockdiff_section(path) is True

    def test_invalid_toml_is_treated_as_missing(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.lockdiff\n", encoding="utf-8")

        assert _pyproject_has_lockdiff_section(path) is False


@pytest.mark.unit
class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_when_no_file(self, tmp_path: Path) -> None:
        with patch("lockdiff.config.Path.cwd", return_value=tmp_path):
            config = load_config()

        assert config == LockDiffConfig()

    def test_loads_lockdiff_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "lockdiff.toml"
        path.write_text(
            '[lockdiff]\nref = "origin/main"\ninclude_develop = true\nstrict_versions = true\n',
            encoding="utf-8",
        )

        config = load_config(path)

        assert config.ref == "origin/main"
        assert config.include_develop is True
        assert config.strict_versions is True
        assert config.source_path == path.resolve()

    def test_loads_pyproject_section(self, tmp_path: Path) -> None:
        path = tmp_path / "pyproject.toml"
        path.write_text('[project]\nname = "x"\n\n[tool.lockdiff]\nref = "v1.0"\n', encoding="utf-8")

        assert load_config(path).ref == "v1.0"

    def test_empty_section_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "lockdiff.toml"
        path.write_text("# nothing here\n", encoding="utf-8")

        config = load_config(path)

        assert config.ref == "HEAD"
        assert config.source_path == path.resolve()


@pytest.mark.unit
class TestReadToml:
    """Tests for _read_toml."""

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "lockdiff.toml"
        path.write_text("ref = \n", encoding="utf-8")

        with pytest.raises(ConfigError, match="Invalid TOML"):
            _read_toml(path)

    def test_unreadable(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            _read_toml(tmp_path)


@pytest.mark.unit
class TestParseSection:
    """Tests for _parse_section validation."""

    def test_unknown_keys(self) -> None:
        with pytest.raises(ConfigError, match="Unknown configuration keys: colour, foo"):
            _parse_section({"foo": 1, "colour": True}, config_path="x.toml")

    @pytest.mark.parametrize(
        "section,option",
        [
            ({"ref": 1}, "ref"),
            ({"include_develop": "yes"}, "include_develop"),
            ({"strict_versions": 0}, "strict_versions"),
        ],
    )
    def test_wrong_types(self, section: dict, option: str) -> None:
        with pytest.raises(ConfigError) as exc_info:
            _parse_section(section, config_path="x.toml")

        assert exc_info.value.option == option

    def test_empty_ref(self) -> None:
        with pytest.raises(ConfigError, match="ref must not be empty"):
            _parse_section({"ref": "  "}, config_path="x.toml")

    def test_not_a_table(self) -> None:
        with pytest.raises(ConfigError, match="must be a table"):
            _parse_section("HEAD", config_path="x.toml")  # type: ignore[arg-type]
