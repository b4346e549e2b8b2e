"""ログ出力設定。

ログは stderr に出力する。TTY 時は Rich、非 TTY 時はプレーンテキスト。
"""

from __future__ import annotations

import logging
import sys

from sigtrap.models.config import LogLevel

_PLAIN_FORMAT: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def create_log_handler() -> logging.Handler:
    """stderr の TTY 状態に基づいてログハンドラを生成する。"""
    if sys.stderr.isatty():
        from rich.console import Console
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=Console(file=sys.stderr), show_path=False
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        return handler
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_PLAIN_FORMAT))
    return handler


def configure_logging(level: LogLevel) -> None:
    """ルートロガーを level で再設定する。既存ハンドラは置き換える。"""
    logging.basicConfig(
        level=level.value.upper(),
        handlers=[create_log_handler()],
        force=True,
    )
