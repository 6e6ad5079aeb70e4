"""ポインタ周辺を泡のように膨らませる field effect。"""

from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import map_range, pointer_polar, radial_offsets

RADIUS = 150.0
MAX_PUSH = 30.0


@field_effect(index=8, name="Bubble Expansion")
def bubble_expansion(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """距離 0 で 30px、150px で 0 の量だけ外向きに押し出す。"""
    _dx, _dy, d, angle = pointer_polar(points, field)
    factor = np.where(d < RADIUS, map_range(d, 0.0, RADIUS, MAX_PUSH, 0.0), 0.0)
    return radial_offsets(angle, factor)


__all__ = ["bubble_expansion"]
