"""設定管理モジュール。"""

from sigtrap.config._resolver import resolve_config
from sigtrap.config._sources import ConfigSource, discover_sources

__all__ = [
    "ConfigSource",
    "discover_sources",
    "resolve_config",
]
