"""子プロセスの起動と監視。

シグナルトラップのクリーンアップとして子プロセスに SIGTERM を送り、
終了を待つ。
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
from collections.abc import Sequence
from functools import partial

from sigtrap.models.config import SigtrapConfig
from sigtrap.models.exit_code import ExitCode, signal_exit_code
from sigtrap.trap import Terminator, exit_process, install_trap

logger = logging.getLogger(__name__)


class CommandError(Exception):
    """子プロセスを起動できなかった場合のエラー。

    Attributes:
        exit_code: CLI が返す終了コード。
    """

    def __init__(self, message: str, exit_code: ExitCode) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def start_child(command: Sequence[str]) -> subprocess.Popen[bytes]:
    """command を子プロセスとして起動する。

    Raises:
        CommandError: コマンドが見つからない、または実行権限がない場合。
    """
    try:
        return subprocess.Popen(list(command))
    except FileNotFoundError:
        raise CommandError(
            f"Command not found: {command[0]}", ExitCode.COMMAND_NOT_FOUND
        ) from None
    except PermissionError:
        raise CommandError(
            f"Command is not executable: {command[0]}",
            ExitCode.COMMAND_NOT_EXECUTABLE,
        ) from None


def stop_child(child: subprocess.Popen[bytes]) -> None:
    """子プロセスに SIGTERM を送り、終了を待つ。終了済みなら何もしない。"""
    if child.poll() is not None:
        return
    logger.info("Stopping child process %d", child.pid)
    child.terminate()
    child.wait()


def child_exit_code(returncode: int) -> int:
    """Popen.returncode をシェル慣例の終了コードに変換する。

    シグナル N で終了した場合（returncode == -N）は 128 + N を返す。
    """
    if returncode < 0:
        return signal_exit_code(-returncode)
    return returncode


async def supervise(
    child: subprocess.Popen[bytes],
    config: SigtrapConfig,
    terminate: Terminator = exit_process,
) -> int:
    """シグナルトラップを設定し、子プロセスの終了を待つ。

    子プロセスが自発的に終了した場合はその終了コードを返す。
    シグナル受信後はプロセス終了をトラップに委ね、この関数は戻らない。

    Args:
        child: 監視対象の子プロセス。
        config: 解決済みの設定。
        terminate: プロセス終了関数。

    Returns:
        子プロセスの終了コード（シェル慣例）。
    """
    trap = install_trap(
        partial(stop_child, child),
        logger,
        terminate=terminate,
        force_threshold=config.force_threshold,
    )
    returncode = await asyncio.to_thread(child.wait)
    if trap.shutdown_started:
        # 終了コードはトラップ側が決める
        await asyncio.Event().wait()
    return child_exit_code(returncode)
