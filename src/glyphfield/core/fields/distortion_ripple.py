"""距離で減衰する正弦波紋で文字を歪ませる field effect。"""

from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import map_range, pointer_polar, radial_offsets

FALLOFF = 200.0
MAX_AMPLITUDE = 15.0


@field_effect(index=6, name="Distortion Ripple")
def distortion_ripple(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """sin(d/15 - 5t) * map(d, 0, 200, 15, 0) をポインタ→点の向きへ与える。

    振幅はクランプしないので、200px より遠い点では符号が反転する。
    """
    _dx, _dy, d, angle = pointer_polar(points, field)
    amount = np.sin(d / 15.0 - field.t * 5.0) * map_range(d, 0.0, FALLOFF, MAX_AMPLITUDE, 0.0)
    return radial_offsets(angle, amount)


__all__ = ["distortion_ripple"]
