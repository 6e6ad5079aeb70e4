from __future__ import annotations

import numpy as np

from glyphfield.core.field_registry import FieldInput


def map_range(value, in_lo: float, in_hi: float, out_lo, out_hi):
    """`value` を [in_lo, in_hi] → [out_lo, out_hi] へ線形写像する（クランプしない）。

    入力幅が 0 のときは `out_lo` を返す（0 除算しない）。
    """
    span = float(in_hi) - float(in_lo)
    if span == 0.0:
        return out_lo + np.zeros_like(np.asarray(value, dtype=np.float64))
    return out_lo + (np.asarray(value, dtype=np.float64) - float(in_lo)) * (
        (out_hi - out_lo) / span
    )


def pointer_polar(points: np.ndarray, field: FieldInput) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """ポインタ基準の (dx, dy, 距離, 角度) を返す。dx/dy は point − pointer。

    Notes
    -----
    一致点の角度は atan2(0, 0) = 0 になる。
    """
    px, py = field.pointer
    dx = points[:, 0] - float(px)
    dy = points[:, 1] - float(py)
    d = np.hypot(dx, dy)
    angle = np.arctan2(dy, dx)
    return dx, dy, d, angle


def radial_offsets(angle: np.ndarray, magnitude: np.ndarray) -> np.ndarray:
    """角度方向へ大きさ `magnitude` のオフセット列 (N, 2) を返す。"""
    return np.stack([np.cos(angle) * magnitude, np.sin(angle) * magnitude], axis=1)
