"""シグナルトラップ。

SIGINT/SIGTERM を以下のパイプラインで処理する:

1. SignalListener: イベントループ経由でシグナルを受信（容量 1 のスロット）
2. SignalTrap: シグナルごとにディスパッチタスクを起動（完了は待たない）
3. ExitDispatcher: EscalationCounter を参照し、クリーンアップ・無視・強制終了を判定
"""

from sigtrap.trap._counter import EscalationCounter
from sigtrap.trap._dispatcher import ExitDispatcher, InfoLogger, Terminator
from sigtrap.trap._listener import MONITORED_SIGNALS, SignalListener
from sigtrap.trap._terminate import exit_process
from sigtrap.trap._trap import SignalTrap, TrapInstallError, install_trap

__all__ = [
    "EscalationCounter",
    "ExitDispatcher",
    "InfoLogger",
    "MONITORED_SIGNALS",
    "SignalListener",
    "SignalTrap",
    "Terminator",
    "TrapInstallError",
    "exit_process",
    "install_trap",
]
