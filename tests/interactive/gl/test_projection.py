"""キャンバス px → クリップ座標の正射影行列のテスト。"""

from __future__ import annotations

import numpy as np

from glyphfield.interactive.gl.utils import build_projection


def _to_clip(proj: np.ndarray, x: float, y: float) -> np.ndarray:
    # ModernGL へ渡す行列は転置済みなので、数式上の行列は proj.T。
    v = proj.T.astype(np.float64) @ np.array([x, y, 0.0, 1.0])
    return v[:2]


def test_build_projection_maps_corners_with_y_down() -> None:
    proj = build_projection(800, 600)
    assert proj.dtype == np.float32
    assert proj.shape == (4, 4)
    np.testing.assert_allclose(_to_clip(proj, 0.0, 0.0), [-1.0, 1.0], atol=1e-6)
    np.testing.assert_allclose(_to_clip(proj, 800.0, 600.0), [1.0, -1.0], atol=1e-6)
    np.testing.assert_allclose(_to_clip(proj, 400.0, 300.0), [0.0, 0.0], atol=1e-6)


def test_build_projection_guards_zero_size() -> None:
    proj = build_projection(0, 0)
    assert np.all(np.isfinite(proj))
