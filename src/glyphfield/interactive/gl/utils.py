from __future__ import annotations

# どこで: `src/glyphfield/interactive/gl/utils.py`。
# 何を: 描画で使う小さなユーティリティ（投影行列生成）を提供する。
# なぜ: Surface の初期化とリサイズで共有し、座標系の定義を一箇所に集約するため。

import numpy as np


def build_projection(canvas_width: float, canvas_height: float) -> "np.ndarray":
    """キャンバス px（左上原点・y 下向き）を基準とする正射影行列（ModernGL 用の転置済み）を返す。"""
    w = max(1.0, float(canvas_width))
    h = max(1.0, float(canvas_height))
    proj = np.array(
        [
            [2 / w, 0, 0, -1],
            [0, -2 / h, 0, 1],
            [0, 0, -1, 0],
            [0, 0, 0, 1],
        ],
        dtype="f4",
    ).T
    return proj
