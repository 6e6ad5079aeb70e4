"""Perlin ノイズで点を揺らす field effect（振幅はポインタ座標に比例）。"""

from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import map_range
from glyphfield.core.noise import noise2

SPATIAL_FREQ = 0.01
AMPLITUDE_PER_PX = 0.05


@field_effect(index=2, name="Perlin Noise")
def perlin_noise(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """noise(0.01x+t, 0.01y+t) を x は ±0.05·px、y は ±0.05·py へ写像する。"""
    px, py = field.pointer
    t = float(field.t)
    n = noise2(points[:, 0] * SPATIAL_FREQ + t, points[:, 1] * SPATIAL_FREQ + t)
    ax = AMPLITUDE_PER_PX * float(px)
    ay = AMPLITUDE_PER_PX * float(py)
    ox = map_range(n, 0.0, 1.0, -ax, ax)
    oy = map_range(n, 0.0, 1.0, -ay, ay)
    return np.stack([ox, oy], axis=1)


__all__ = ["perlin_noise"]
