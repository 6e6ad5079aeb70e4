"""点群生成（generate_point_cloud）のテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from glyphfield.core.point_cloud import PointCloud, clamp_density, generate_point_cloud
from glyphfield.core.text_shaper import ShapingError


def _cloud(shaper, text: str, *, density: float = 0.1, size=(400, 300)) -> PointCloud:
    return generate_point_cloud(
        text, "Type Anything", shaper, 100.0, density, size[0], size[1]
    )


def test_generate_point_cloud_centers_tight_bounds(box_shaper) -> None:
    cloud = _cloud(box_shaper, "AB")
    pts = cloud.points
    np.testing.assert_allclose(pts.min(axis=0), [150.0, 115.0], atol=1e-6)
    np.testing.assert_allclose(pts.max(axis=0), [250.0, 185.0], atol=1e-6)
    assert cloud.text == "AB"
    assert cloud.is_placeholder is False
    assert cloud.canvas_size == (400, 300)


def test_generate_point_cloud_is_idempotent(box_shaper) -> None:
    a = _cloud(box_shaper, "Hello")
    b = _cloud(box_shaper, "Hello")
    np.testing.assert_array_equal(a.points, b.points)


def test_empty_text_uses_placeholder(box_shaper) -> None:
    cloud = _cloud(box_shaper, "")
    assert cloud.is_placeholder is True
    assert cloud.text == "Type Anything"
    assert len(cloud) > 0


def test_density_is_clamped(box_shaper) -> None:
    low = _cloud(box_shaper, "A", density=0.001)
    high = _cloud(box_shaper, "A", density=5.0)
    assert low.density == pytest.approx(0.05)
    assert high.density == pytest.approx(0.2)
    assert len(low) > len(high)


def test_lower_density_means_more_points(box_shaper) -> None:
    assert len(_cloud(box_shaper, "A", density=0.05)) > len(_cloud(box_shaper, "A", density=0.1))


def test_points_are_read_only(box_shaper) -> None:
    cloud = _cloud(box_shaper, "A")
    with pytest.raises(ValueError):
        cloud.points[0, 0] = 1.0


def test_unshapeable_text_propagates_shaping_error(box_shaper) -> None:
    with pytest.raises(ShapingError):
        _cloud(box_shaper, "€")


def test_point_cloud_rejects_bad_shape() -> None:
    with pytest.raises(ValueError):
        PointCloud(
            points=np.zeros((3, 3)),
            text="x",
            is_placeholder=False,
            density=0.1,
            font_size=10.0,
            canvas_size=(1, 1),
        )


def test_clamp_density() -> None:
    assert clamp_density(0.01) == 0.05
    assert clamp_density(0.3) == 0.2
    assert clamp_density(0.12) == 0.12
    assert clamp_density(0.5, lo=0.1, hi=0.4) == 0.4
