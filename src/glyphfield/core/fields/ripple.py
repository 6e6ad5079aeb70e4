"""ポインタから広がる波紋で点を半径方向に揺らす field effect。"""

from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import pointer_polar, radial_offsets


@field_effect(index=3, name="Ripple")
def ripple(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """sin(10t - 0.1d) * 10 をポインタ→点の向きへ与える。"""
    _dx, _dy, d, angle = pointer_polar(points, field)
    amount = np.sin(field.t * 10.0 - d * 0.1) * 10.0
    return radial_offsets(angle, amount)


__all__ = ["ripple"]
