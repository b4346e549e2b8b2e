"""設定管理モデル。

デフォルト値のみで有効なインスタンスを構築可能。
"""

from __future__ import annotations

from enum import StrEnum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_FORCE_THRESHOLD: Final[int] = 3
"""強制終了に移行するまでに数えるシグナル数。この値を超えた次のシグナルで強制終了する。"""


class LogLevel(StrEnum):
    """ログ出力レベル。"""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class SigtrapConfig(BaseModel):
    """全設定項目を統合した不変モデル。未知のキーは拒否する。"""

    model_config = ConfigDict(extra="forbid", frozen=True)

    force_threshold: int = Field(default=DEFAULT_FORCE_THRESHOLD, gt=0)
    log_level: LogLevel = LogLevel.INFO

    @field_validator("log_level", mode="before")
    @classmethod
    def _lowercase_log_level(cls, v: object) -> object:
        # "INFO" のような大文字表記も受け付ける
        return v.lower() if isinstance(v, str) else v
