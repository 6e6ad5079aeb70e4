"""ポインタ位置による平行移動と正弦波の揺れを重ねる field effect。"""

from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput, field_effect
from glyphfield.core.fields.util import map_range

SHIFT = 20.0
WAVE_AMPLITUDE = 10.0
WAVE_SPEED = 2.0
WAVE_FREQ = 0.05


@field_effect(index=1, name="Wavy")
def wavy(points: np.ndarray, field: FieldInput) -> np.ndarray:
    """ポインタを ±20px の一様シフトへ写像し、x/y 共通の sin 波を加える。"""
    w, h = field.size
    px, py = field.pointer
    shift_x = float(map_range(px, 0.0, w, -SHIFT, SHIFT))
    shift_y = float(map_range(py, 0.0, h, -SHIFT, SHIFT))
    wave = (
        np.sin(field.t * WAVE_SPEED + points[:, 0] * WAVE_FREQ + points[:, 1] * WAVE_FREQ)
        * WAVE_AMPLITUDE
    )
    return np.stack([shift_x + wave, shift_y + wave], axis=1)


__all__ = ["wavy"]
