"""設定ソースの列挙と読み込み。

sigtrap の設定ファイルは優先度の低い順に次のとおり:

1. ユーザー設定 ``~/.config/sigtrap/config.toml``
2. 最寄りの ``pyproject.toml`` の ``[tool.sigtrap]`` テーブル
3. 最寄りの ``.sigtrap/config.toml``

どのファイルも省略できる。存在しないソースは空の設定として扱う。
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

_APP_NAME = "sigtrap"
_CONFIG_FILE_NAME = "config.toml"


@dataclass(frozen=True)
class ConfigSource:
    """TOML ファイル内の設定テーブル 1 つ。

    Attributes:
        path: TOML ファイルのパス。
        table: 設定テーブルに至るキー列。空ならファイル全体が設定。
    """

    path: Path
    table: tuple[str, ...] = ()

    def read(self) -> dict[str, object]:
        """設定テーブルを返す。ファイルやテーブルがなければ空の辞書。

        Raises:
            tomllib.TOMLDecodeError: TOML 構文エラーの場合。
            PermissionError: 読み取り権限がない場合。
        """
        try:
            with self.path.open("rb") as f:
                data: object = tomllib.load(f)
        except FileNotFoundError:
            return {}
        for key in self.table:
            data = data.get(key) if isinstance(data, dict) else None
        return data if isinstance(data, dict) else {}


def user_config_path() -> Path:
    """ユーザー設定ファイルのパスを返す（存在チェックは行わない）。"""
    return Path.home() / ".config" / _APP_NAME / _CONFIG_FILE_NAME


def _nearest(start: Path, name: str, *, want_dir: bool) -> Path | None:
    for directory in (start, *start.parents):
        candidate = directory / name
        if candidate.is_dir() if want_dir else candidate.is_file():
            return candidate
    return None


def discover_sources(start: Path) -> list[ConfigSource]:
    """start から見える設定ソースを優先度の低い順に返す。

    pyproject.toml と .sigtrap/ はそれぞれ start から親方向に探索し、
    最初に見つかったものだけを使う。
    """
    start = start.resolve()
    sources = [ConfigSource(user_config_path())]

    pyproject = _nearest(start, "pyproject.toml", want_dir=False)
    if pyproject is not None:
        sources.append(ConfigSource(pyproject, ("tool", _APP_NAME)))

    project_dir = _nearest(start, f".{_APP_NAME}", want_dir=True)
    if project_dir is not None:
        sources.append(ConfigSource(project_dir / _CONFIG_FILE_NAME))

    return sources
