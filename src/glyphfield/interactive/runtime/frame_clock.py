# どこで: `src/glyphfield/interactive/runtime/frame_clock.py`。
# 何を: フレーム描画に渡す経過時刻（ミリ秒/秒）の生成規則を提供する。
# なぜ: 軌跡の寿命判定と field effect の時間項を同じ単調時計から取るため。

from __future__ import annotations

import time


class RealTimeClock:
    """実時間ベースのフレーム時計。

    Notes
    -----
    `perf_counter()` の差分なので単調増加する。
    """

    def __init__(self, *, start_time: float) -> None:
        self._start_time = float(start_time)

    def t(self) -> float:
        """開始からの経過秒を返す。"""

        return float(time.perf_counter() - self._start_time)

    def millis(self) -> float:
        """開始からの経過ミリ秒を返す。"""

        return self.t() * 1000.0
