"""SignalListener — SIGINT/SIGTERM を非同期イベント列に変換する。

受信スロットの容量は 1。前のシグナルが読み出される前に届いたシグナルは
キューイングされず破棄される（ベストエフォート配送）。
"""

from __future__ import annotations

import asyncio
import logging
import signal
from collections.abc import AsyncIterator
from typing import Final

logger = logging.getLogger(__name__)

MONITORED_SIGNALS: Final[tuple[signal.Signals, ...]] = (
    signal.SIGINT,
    signal.SIGTERM,
)
"""監視対象のシグナル。これ以外のシグナルは観測しない。"""


class SignalListener:
    """イベントループにシグナルハンドラを登録し、受信シグナルを順に返す。

    登録はプロセス（イベントループ）の寿命の間有効で、解除経路は持たない。
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._slot: asyncio.Queue[signal.Signals] = asyncio.Queue(maxsize=1)

    def install(self) -> None:
        """SIGINT/SIGTERM のハンドラを登録する。

        Raises:
            ValueError: メインスレッド以外から呼ばれた場合。
            RuntimeError: イベントループがクローズ済みの場合。
            NotImplementedError: プラットフォームが未対応の場合。
        """
        for sig in MONITORED_SIGNALS:
            self._loop.add_signal_handler(sig, self._deliver, sig)

    def _deliver(self, sig: signal.Signals) -> None:
        try:
            self._slot.put_nowait(sig)
        except asyncio.QueueFull:
            logger.debug("Dropped signal '%s': previous signal not yet consumed", sig.name)

    async def events(self) -> AsyncIterator[signal.Signals]:
        """受信したシグナルを到着順に無限に返す。"""
        while True:
            yield await self._slot.get()
