"""設定の解決。ファイルの設定に CLI の指定を重ねて SigtrapConfig を作る。"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path

from sigtrap.config._sources import discover_sources
from sigtrap.models.config import SigtrapConfig

logger = logging.getLogger(__name__)


def resolve_config(
    start_dir: Path | None = None,
    cli_overrides: Mapping[str, object] | None = None,
) -> SigtrapConfig:
    """設定ソースを順に重ね、最後に CLI の指定で上書きする。

    Args:
        start_dir: 設定ファイルの探索開始ディレクトリ。None ならカレント。
        cli_overrides: CLI オプション。値が None の項目は未指定として無視する。

    Raises:
        pydantic.ValidationError: 重ねた結果が不正な場合。
        tomllib.TOMLDecodeError: 設定ファイルの TOML 構文が不正な場合。
        PermissionError: 設定ファイルを読めない場合。
    """
    merged: dict[str, object] = {}
    for source in discover_sources(start_dir if start_dir is not None else Path.cwd()):
        values = source.read()
        if values:
            logger.debug("Loaded %s from %s", sorted(values), source.path)
        merged.update(values)

    if cli_overrides is not None:
        merged.update({k: v for k, v in cli_overrides.items() if v is not None})

    return SigtrapConfig.model_validate(merged)
