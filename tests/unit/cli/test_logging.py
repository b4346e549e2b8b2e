"""ログ出力設定のテスト。"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from unittest.mock import patch

import pytest
from rich.logging import RichHandler

from sigtrap.cli._logging import configure_logging, create_log_handler
from sigtrap.models.config import LogLevel


@pytest.fixture
def _restore_root_logger() -> Iterator[None]:
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestCreateLogHandler:
    """TTY 判定によるハンドラ切り替え。"""

    def test_non_tty_uses_stream_handler(self) -> None:
        with patch("sigtrap.cli._logging.sys.stderr") as stderr:
            stderr.isatty.return_value = False
            handler = create_log_handler()
        assert type(handler) is logging.StreamHandler
        assert handler.stream is stderr  # type: ignore[attr-defined]

    def test_tty_uses_rich_handler(self) -> None:
        with patch("sigtrap.cli._logging.sys.stderr") as stderr:
            stderr.isatty.return_value = True
            handler = create_log_handler()
        assert isinstance(handler, RichHandler)


@pytest.mark.usefixtures("_restore_root_logger")
class TestConfigureLogging:
    """ルートロガーの再設定。"""

    @pytest.mark.parametrize(
        ("level", "expected"),
        [
            (LogLevel.DEBUG, logging.DEBUG),
            (LogLevel.INFO, logging.INFO),
            (LogLevel.WARNING, logging.WARNING),
            (LogLevel.ERROR, logging.ERROR),
        ],
    )
    def test_sets_root_level(self, level: LogLevel, expected: int) -> None:
        configure_logging(level)
        assert logging.getLogger().level == expected

    def test_replaces_existing_handlers(self) -> None:
        configure_logging(LogLevel.INFO)
        configure_logging(LogLevel.INFO)
        assert len(logging.getLogger().handlers) == 1
