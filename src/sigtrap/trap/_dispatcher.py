"""ExitDispatcher — シグナル 1 件ごとのエスカレーション判定。

受信数に応じて応答を段階的に強める:

1 件目: クリーンアップを実行し、完了後に終了コード 0 で終了する。
2 件目〜force_threshold 件目: 何もしない（実行中のクリーンアップを妨げない）。
それ以降: クリーンアップを省略し、128 + シグナル番号で即座に終了する。
"""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable
from typing import Protocol

from sigtrap.models.config import DEFAULT_FORCE_THRESHOLD
from sigtrap.models.exit_code import ExitCode, signal_exit_code
from sigtrap.trap._counter import EscalationCounter


class InfoLogger(Protocol):
    """情報メッセージを受け付けるロガー。logging.Logger が適合する。"""

    def info(self, msg: str, *args: object) -> None: ...


Terminator = Callable[[int], object]
"""終了コードを受け取りプロセスを終了する関数。"""


class ExitDispatcher:
    """受信シグナルに対して終了ポリシーを適用する。

    Attributes:
        force_threshold: 強制終了に移行するまでに数えるシグナル数。
    """

    def __init__(
        self,
        cleanup: Callable[[], None],
        logger: InfoLogger,
        counter: EscalationCounter,
        terminate: Terminator,
        force_threshold: int = DEFAULT_FORCE_THRESHOLD,
    ) -> None:
        self._cleanup = cleanup
        self._logger = logger
        self._counter = counter
        self._terminate = terminate
        self.force_threshold = force_threshold

    async def dispatch(self, sig: signal.Signals) -> None:
        """シグナル 1 件を処理する。

        クリーンアップはワーカースレッドで実行するため、実行中も後続シグナルの
        処理は妨げられない。クリーンアップの例外は捕捉しない。

        Args:
            sig: 受信したシグナル（SIGINT または SIGTERM）。
        """
        self._logger.info("Processing signal '%s'", sig.name)

        if self._counter.load() < self.force_threshold:
            # クリーンアップは最初の 1 件だけが実行する
            if self._counter.increment_and_load() == 1:
                await asyncio.to_thread(self._cleanup)
                self._terminate(ExitCode.SUCCESS)
            return

        self._logger.info(
            "Forcing shutdown without cleanup; %d interrupts received",
            self.force_threshold,
        )
        self._terminate(signal_exit_code(sig))
