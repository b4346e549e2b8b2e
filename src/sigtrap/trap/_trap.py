"""install_trap — シグナルトラップの組み立てと起動。"""

from __future__ import annotations

import asyncio
import inspect
import logging
import signal
from collections.abc import Callable

from sigtrap.models.config import DEFAULT_FORCE_THRESHOLD
from sigtrap.models.exit_code import ExitCode
from sigtrap.trap._counter import EscalationCounter
from sigtrap.trap._dispatcher import ExitDispatcher, InfoLogger, Terminator
from sigtrap.trap._listener import SignalListener
from sigtrap.trap._terminate import exit_process

logger = logging.getLogger(__name__)


class TrapInstallError(RuntimeError):
    """シグナルハンドラを登録できなかった場合のエラー。"""


class SignalTrap:
    """リスナーから受け取ったシグナルごとにディスパッチタスクを起動する。

    リスナーのループはタスクを起動するだけで完了を待たないため、
    クリーンアップが停止していても後続シグナルの読み出しは継続する。
    """

    def __init__(
        self,
        listener: SignalListener,
        dispatcher: ExitDispatcher,
        counter: EscalationCounter,
        loop: asyncio.AbstractEventLoop,
        terminate: Terminator,
    ) -> None:
        self._listener = listener
        self._dispatcher = dispatcher
        self._loop = loop
        self._terminate = terminate
        self._listen_task: asyncio.Task[None] | None = None
        # 起動したタスクが GC で消えないよう完了まで参照を保持する
        self._tasks: set[asyncio.Task[None]] = set()
        self.counter = counter

    @property
    def shutdown_started(self) -> bool:
        """シグナルを 1 件以上受け付けたかどうか。"""
        return self.counter.load() > 0

    def start(self) -> None:
        """シグナルハンドラを登録し、リスナーループを開始する。"""
        self._listener.install()
        self._listen_task = self._loop.create_task(self._listen())

    async def _listen(self) -> None:
        async for sig in self._listener.events():
            self._spawn(sig)

    def _spawn(self, sig: signal.Signals) -> None:
        task = self._loop.create_task(self._dispatcher.dispatch(sig))
        self._tasks.add(task)
        task.add_done_callback(self._on_dispatch_done)

    def _on_dispatch_done(self, task: asyncio.Task[None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        logger.critical("Cleanup handler failed; terminating", exc_info=exc)
        self._terminate(ExitCode.CLEANUP_FAILURE)


def install_trap(
    cleanup: Callable[[], None],
    logger: InfoLogger | None = None,
    *,
    loop: asyncio.AbstractEventLoop | None = None,
    terminate: Terminator = exit_process,
    force_threshold: int = DEFAULT_FORCE_THRESHOLD,
) -> SignalTrap:
    """SIGINT/SIGTERM のトラップを設定し、即座に返る。

    最初のシグナルで cleanup を 1 度だけ実行して終了コード 0 で終了する。
    cleanup の完了前に force_threshold 件を超えるシグナルを受信した場合、
    cleanup を待たずに 128 + シグナル番号で終了する。

    Args:
        cleanup: 終了前に 1 度だけ呼ばれる引数なしの関数。
        logger: 受信シグナルを記録するロガー。None の場合はモジュールロガー。
        loop: シグナルを受け付けるイベントループ。None の場合は実行中のループ。
        terminate: プロセス終了関数。テストでは終了しないスタブに差し替える。
        force_threshold: 強制終了に移行するまでに数えるシグナル数。

    Returns:
        起動済みの SignalTrap。

    Raises:
        ValueError: force_threshold が 1 未満の場合。
        TypeError: cleanup がコルーチン関数の場合。ワーカースレッドでは実行できない。
        TrapInstallError: 実行中のループがない、またはハンドラ登録に失敗した場合。
    """
    if force_threshold < 1:
        msg = f"force_threshold must be at least 1, got {force_threshold}"
        raise ValueError(msg)
    if inspect.iscoroutinefunction(cleanup):
        msg = f"cleanup must be a synchronous callable, got coroutine function {cleanup!r}"
        raise TypeError(msg)

    if loop is None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            raise TrapInstallError(
                "install_trap() requires a running event loop"
            ) from None

    counter = EscalationCounter()
    dispatcher = ExitDispatcher(
        cleanup=cleanup,
        logger=logger if logger is not None else logging.getLogger(__name__),
        counter=counter,
        terminate=terminate,
        force_threshold=force_threshold,
    )
    trap = SignalTrap(SignalListener(loop), dispatcher, counter, loop, terminate)
    try:
        trap.start()
    except (ValueError, RuntimeError, NotImplementedError) as exc:
        raise TrapInstallError(f"Cannot register signal handlers: {exc}") from exc
    return trap
