"""Magnetic Pull / Swirl / Wavy / Perlin Noise field effect のテスト群。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from glyphfield.core.field_registry import FieldInput
from glyphfield.core.fields.magnetic_pull import magnetic_pull
from glyphfield.core.fields.perlin import perlin_noise
from glyphfield.core.fields.swirl import swirl
from glyphfield.core.fields.wavy import wavy

CANVAS = (400.0, 300.0)


def _field(pointer=(100.0, 100.0), t=0.0) -> FieldInput:
    return FieldInput.for_canvas(pointer=pointer, t=t, canvas_size=CANVAS)


def test_magnetic_pull_moves_toward_pointer() -> None:
    pts = np.array([[100.0, 175.0]], dtype=np.float64)
    out = magnetic_pull(pts, _field())
    # d=75 → factor 0.4、(pointer - point) = (0, -75)
    np.testing.assert_allclose(out[0], [0.0, -30.0], atol=1e-9)


def test_magnetic_pull_outside_radius_is_zero() -> None:
    pts = np.array([[100.0, 250.0], [300.0, 100.0]], dtype=np.float64)
    assert magnetic_pull(pts, _field()).tolist() == [[0.0, 0.0], [0.0, 0.0]]


def test_swirl_rotates_by_quarter_turn_near_pointer() -> None:
    pts = np.array([[100.0 + 1e-9, 100.0]], dtype=np.float64)
    out = swirl(pts, _field())
    np.testing.assert_allclose(out[0], [0.0, 0.0], atol=1e-6)

    pts = np.array([[110.0, 100.0]], dtype=np.float64)
    out = swirl(pts, _field())
    angle = math.pi / 2.0 * (1.0 - 10.0 / 200.0)
    expected = [math.cos(angle) * 10.0 - 10.0, math.sin(angle) * 10.0]
    np.testing.assert_allclose(out[0], expected, atol=1e-9)


def test_swirl_preserves_distance_to_pointer() -> None:
    rng = np.random.default_rng(2)
    pts = rng.uniform(0.0, 200.0, size=(40, 2))
    field = _field()
    moved = pts + swirl(pts, field)
    before = np.hypot(pts[:, 0] - 100.0, pts[:, 1] - 100.0)
    after = np.hypot(moved[:, 0] - 100.0, moved[:, 1] - 100.0)
    np.testing.assert_allclose(after, before, atol=1e-9)


def test_swirl_outside_radius_is_zero() -> None:
    pts = np.array([[100.0, 300.0]], dtype=np.float64)
    assert swirl(pts, _field()).tolist() == [[0.0, 0.0]]


def test_wavy_shift_follows_pointer_and_shared_wave() -> None:
    pts = np.array([[10.0, 20.0]], dtype=np.float64)
    t = 0.5
    out = wavy(pts, _field(pointer=(400.0, 0.0), t=t))
    wave = math.sin(t * 2.0 + 0.05 * 10.0 + 0.05 * 20.0) * 10.0
    np.testing.assert_allclose(out[0], [20.0 + wave, -20.0 + wave], atol=1e-9)


def test_perlin_noise_is_bounded_by_pointer_scale() -> None:
    rng = np.random.default_rng(3)
    pts = rng.uniform(0.0, 400.0, size=(200, 2))
    out = perlin_noise(pts, _field(pointer=(200.0, 100.0), t=0.7))
    assert np.all(np.abs(out[:, 0]) <= 10.0 + 1e-9)
    assert np.all(np.abs(out[:, 1]) <= 5.0 + 1e-9)


def test_perlin_noise_zero_pointer_gives_zero_offset() -> None:
    pts = np.array([[12.0, 34.0], [56.0, 78.0]], dtype=np.float64)
    out = perlin_noise(pts, _field(pointer=(0.0, 0.0), t=2.0))
    np.testing.assert_allclose(out, 0.0, atol=1e-12)


def test_perlin_noise_x_and_y_share_the_noise_sample() -> None:
    pts = np.array([[12.0, 34.0]], dtype=np.float64)
    out = perlin_noise(pts, _field(pointer=(100.0, 100.0), t=0.3))
    assert out[0, 0] == pytest.approx(out[0, 1])
