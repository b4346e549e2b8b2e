"""EscalationCounter — 受信シグナル数を数える共有カウンタ。"""

from __future__ import annotations

import threading


class EscalationCounter:
    """読み取りと加算を互いに原子的に行う単調増加カウンタ。

    イベントループのスレッドとクリーンアップ用ワーカースレッドの双方から
    参照されるため、ロックで保護する。減算・リセット操作は持たない。
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = 0

    def load(self) -> int:
        """現在値を返す。"""
        with self._lock:
            return self._value

    def increment_and_load(self) -> int:
        """1 加算し、加算後の値を返す。"""
        with self._lock:
            self._value += 1
            return self._value
