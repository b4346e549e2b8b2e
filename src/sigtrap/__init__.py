"""sigtrap — SIGINT/SIGTERM を段階的シャットダウンに変換するシグナルトラップ。"""

from sigtrap.trap import SignalTrap, install_trap

__all__ = ["SignalTrap", "install_trap"]
