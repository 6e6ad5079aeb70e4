"""ポインタへ点を引き寄せる field effect。"""

from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import map_range, pointer_polar

RADIUS = 150.0
MAX_PULL = 0.8


@field_effect(index=5, name="Magnetic Pull")
def magnetic_pull(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """(pointer − point) に、距離 0 で 0.8・150px で 0 の係数を掛けたオフセットを返す。"""
    dx, dy, d, _angle = pointer_polar(points, field)
    factor = np.where(d < RADIUS, map_range(d, 0.0, RADIUS, MAX_PULL, 0.0), 0.0)
    return np.stack([-dx * factor, -dy * factor], axis=1)


__all__ = ["magnetic_pull"]
