"""プロセスの即時終了。"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import suppress
from typing import NoReturn


def exit_process(code: int) -> NoReturn:
    """ログと標準出力をフラッシュし、プロセスを即座に終了する。

    ``sys.exit()`` と異なり、呼び出し元スレッドやイベントループの状態に関わらず
    終了する。atexit ハンドラや finally 節は実行されない。

    Args:
        code: プロセス終了コード。
    """
    logging.shutdown()
    for stream in (sys.stdout, sys.stderr):
        with suppress(OSError, ValueError):
            stream.flush()
    os._exit(int(code))
