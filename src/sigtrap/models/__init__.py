"""ドメインモデル。"""

from sigtrap.models.config import LogLevel, SigtrapConfig
from sigtrap.models.exit_code import SIGNAL_EXIT_BASE, ExitCode, signal_exit_code

__all__ = [
    "ExitCode",
    "LogLevel",
    "SIGNAL_EXIT_BASE",
    "SigtrapConfig",
    "signal_exit_code",
]
