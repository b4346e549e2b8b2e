"""設定ソースの列挙と読み込みのテスト。"""

from __future__ import annotations

import tomllib
from pathlib import Path
from unittest.mock import patch

import pytest

from sigtrap.config._sources import ConfigSource, discover_sources, user_config_path

PATCH_USER_CONFIG = "sigtrap.config._sources.user_config_path"


def _write(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


# =============================================================================
# ConfigSource.read
# =============================================================================


class TestConfigSourceRead:
    """ConfigSource.read のテスト。"""

    def test_whole_file(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "config.toml", 'force_threshold = 5\nlog_level = "debug"\n')
        assert ConfigSource(path).read() == {"force_threshold": 5, "log_level": "debug"}

    def test_missing_file_is_empty(self, tmp_path: Path) -> None:
        assert ConfigSource(tmp_path / "missing.toml").read() == {}

    def test_nested_table(self, tmp_path: Path) -> None:
        path = _write(
            tmp_path / "pyproject.toml",
            "[project]\nname = 'x'\n\n[tool.sigtrap]\nforce_threshold = 2\n",
        )
        assert ConfigSource(path, ("tool", "sigtrap")).read() == {"force_threshold": 2}

    @pytest.mark.parametrize(
        "content",
        [
            "[project]\nname = 'x'\n",
            "[tool.ruff]\nline-length = 88\n",
            "[tool]\nsigtrap = 1\n",
            "tool = 'x'\n",
        ],
    )
    def test_missing_or_non_table_section_is_empty(
        self, tmp_path: Path, content: str
    ) -> None:
        path = _write(tmp_path / "pyproject.toml", content)
        assert ConfigSource(path, ("tool", "sigtrap")).read() == {}

    def test_syntax_error_raises(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "config.toml", "force_threshold = = 1\n")
        with pytest.raises(tomllib.TOMLDecodeError):
            ConfigSource(path).read()


# =============================================================================
# discover_sources
# =============================================================================


class TestDiscoverSources:
    """discover_sources のテスト。"""

    def test_user_config_only(self, tmp_path: Path) -> None:
        user = tmp_path / "home" / "config.toml"
        project = tmp_path / "project"
        project.mkdir()
        with patch(PATCH_USER_CONFIG, return_value=user):
            assert discover_sources(project) == [ConfigSource(user)]

    def test_order_is_user_pyproject_project(self, tmp_path: Path) -> None:
        user = tmp_path / "home" / "config.toml"
        project = tmp_path / "project"
        pyproject = _write(project / "pyproject.toml", "")
        (project / ".sigtrap").mkdir()

        with patch(PATCH_USER_CONFIG, return_value=user):
            sources = discover_sources(project)

        assert sources == [
            ConfigSource(user),
            ConfigSource(pyproject.resolve(), ("tool", "sigtrap")),
            ConfigSource(project.resolve() / ".sigtrap" / "config.toml"),
        ]

    def test_nearest_ancestor_used(self, tmp_path: Path) -> None:
        """サブディレクトリからでも親の pyproject.toml と .sigtrap/ を見つける。"""
        _write(tmp_path / "pyproject.toml", "")
        (tmp_path / ".sigtrap").mkdir()
        nested = tmp_path / "src" / "pkg"
        nested.mkdir(parents=True)

        with patch(PATCH_USER_CONFIG, return_value=tmp_path / "user.toml"):
            paths = [s.path for s in discover_sources(nested)]

        assert paths[1:] == [
            tmp_path.resolve() / "pyproject.toml",
            tmp_path.resolve() / ".sigtrap" / "config.toml",
        ]

    def test_wrong_kinds_ignored(self, tmp_path: Path) -> None:
        """.sigtrap がファイル、pyproject.toml がディレクトリの場合は無視する。"""
        (tmp_path / "pyproject.toml").mkdir()
        _write(tmp_path / ".sigtrap", "")
        with patch(PATCH_USER_CONFIG, return_value=tmp_path / "user.toml"):
            assert len(discover_sources(tmp_path)) == 1


class TestUserConfigPath:
    """user_config_path のテスト。"""

    def test_under_home_config(self, tmp_path: Path) -> None:
        with patch("sigtrap.config._sources.Path.home", return_value=tmp_path):
            assert user_config_path() == tmp_path / ".config" / "sigtrap" / "config.toml"
