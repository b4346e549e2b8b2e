"""StatusReporter — 子プロセスの状態を stderr に表示する。

TTY 時は Rich Console、非 TTY 時はプレーンテキストで自動切替。
"""

from __future__ import annotations

import shlex
import sys
from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from rich.console import Console
from rich.markup import escape


@runtime_checkable
class StatusReporter(Protocol):
    """子プロセスの起動と終了を報告するプロトコル。"""

    def on_child_started(self, pid: int, command: Sequence[str]) -> None:
        """子プロセスの起動を通知する。"""
        ...

    def on_child_exited(self, exit_code: int) -> None:
        """子プロセスの終了を通知する。"""
        ...


class PlainStatusReporter:
    """非 TTY 環境向けプレーンテキストレポーター。

    出力フォーマット:
        "Started: {command} (pid {pid})"
        "Exited: {command} (exit code {exit_code})"
    """

    def __init__(self) -> None:
        self._command = ""

    def on_child_started(self, pid: int, command: Sequence[str]) -> None:
        self._command = shlex.join(command)
        print(f"Started: {self._command} (pid {pid})", file=sys.stderr)

    def on_child_exited(self, exit_code: int) -> None:
        print(f"Exited: {self._command} (exit code {exit_code})", file=sys.stderr)


class RichStatusReporter:
    """TTY 環境向け Rich レポーター。"""

    def __init__(self, console: Console | None = None) -> None:
        self._console: Console = console or Console(file=sys.stderr)
        self._command = ""

    def on_child_started(self, pid: int, command: Sequence[str]) -> None:
        self._command = escape(shlex.join(command))
        self._console.print(
            f"[bold green]Started[/] {self._command} [dim](pid {pid})[/]"
        )

    def on_child_exited(self, exit_code: int) -> None:
        style = "green" if exit_code == 0 else "red"
        self._console.print(
            f"[bold {style}]Exited[/] {self._command} [dim](exit code {exit_code})[/]"
        )


def create_status_reporter() -> StatusReporter:
    """stderr の TTY 状態に基づいて適切な StatusReporter を生成する。"""
    if sys.stderr.isatty():
        return RichStatusReporter()
    return PlainStatusReporter()
