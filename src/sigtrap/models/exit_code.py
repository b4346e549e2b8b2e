"""ExitCode — 終了コードの定義。

シグナルによる強制終了は慣例どおり 128 + シグナル番号を返す。
"""

import signal
from enum import IntEnum
from typing import Final

SIGNAL_EXIT_BASE: Final[int] = 128
"""シグナル番号に加算する基準値。"""


class ExitCode(IntEnum):
    """プロセス終了コード。

    SUCCESS はクリーンアップ完了後の正常終了。
    INPUT_ERROR 以降は CLI 層固有（126/127 はシェルの慣例に従う）。
    """

    SUCCESS = 0
    CLEANUP_FAILURE = 1
    INPUT_ERROR = 2
    COMMAND_NOT_EXECUTABLE = 126
    COMMAND_NOT_FOUND = 127


def signal_exit_code(sig: signal.Signals | int) -> int:
    """シグナル N で終了したプロセスの終了コード（128 + N）を返す。"""
    return SIGNAL_EXIT_BASE + int(sig)
