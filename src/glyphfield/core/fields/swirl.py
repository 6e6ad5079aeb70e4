"""ポインタまわりに点を渦状に回す field effect。"""

from __future__ import annotations

import math

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import map_range, pointer_polar

RADIUS = 200.0


@field_effect(index=7, name="Swirl")
def swirl(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """ポインタ→点ベクトルを、距離 0 で 90°・200px で 0° の角度だけ回す。

    回転後も長さ d は保つ。オフセットは「回転後ベクトル − 元ベクトル」。
    """
    dx, dy, d, angle = pointer_polar(points, field)
    inside = d < RADIUS
    swirl_angle = map_range(d, 0.0, RADIUS, math.pi / 2.0, 0.0)
    rotated = angle + swirl_angle
    ox = np.where(inside, np.cos(rotated) * d - dx, 0.0)
    oy = np.where(inside, np.sin(rotated) * d - dy, 0.0)
    return np.stack([ox, oy], axis=1)


__all__ = ["swirl"]
