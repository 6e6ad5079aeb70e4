"""キャンバス中心まわりに点をねじる field effect（座標を置換する）。"""

from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import map_range

MAX_STRENGTH = 0.1


@field_effect(index=4, name="Spiral", absolute=True)
def spiral(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """中心からの距離に比例した角度で中心まわりに回転させた座標を返す。

    回転の強さはポインタの縦位置を [-0.1, 0.1] rad/px に写像したもの。
    ポインタが縦中央なら角度 0 で座標は変わらない。
    戻り値はオフセットではなく置換後の座標。
    """
    _w, h = field.size
    cx, cy = field.center
    strength = float(map_range(field.pointer[1], 0.0, h, -MAX_STRENGTH, MAX_STRENGTH))
    dx = points[:, 0] - float(cx)
    dy = points[:, 1] - float(cy)
    angle = strength * np.hypot(dx, dy)
    c = np.cos(angle)
    s = np.sin(angle)
    return np.stack([cx + dx * c - dy * s, cy + dx * s + dy * c], axis=1)


__all__ = ["spiral"]
