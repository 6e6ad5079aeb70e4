"""ポインタから点を押し退ける field effect。"""

from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import map_range, pointer_polar, radial_offsets

RADIUS = 100.0
MAX_PUSH = 50.0


@field_effect(index=0, name="Repulsion")
def repulsion(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """距離 0 で 50px、距離 100px で 0 になる押し退け量を、ポインタから離れる向きに与える。"""
    _dx, _dy, d, angle = pointer_polar(points, field)
    factor = np.where(d < RADIUS, map_range(d, 0.0, RADIUS, MAX_PUSH, 0.0), 0.0)
    return radial_offsets(angle, factor)


__all__ = ["repulsion"]
