"""Perlin ノイズ（noise2）のテスト群。"""

from __future__ import annotations

import numpy as np
import pytest

from glyphfield.core.noise import PERMUTATION_TABLE, noise2


def test_permutation_table_is_doubled_permutation() -> None:
    assert PERMUTATION_TABLE.shape == (512,)
    assert sorted(PERMUTATION_TABLE[:256].tolist()) == list(range(256))
    np.testing.assert_array_equal(PERMUTATION_TABLE[:256], PERMUTATION_TABLE[256:])


def test_noise2_is_in_unit_range() -> None:
    rng = np.random.default_rng(0)
    x = rng.uniform(-50.0, 50.0, size=2000)
    y = rng.uniform(-50.0, 50.0, size=2000)
    n = noise2(x, y)
    assert n.shape == (2000,)
    assert float(n.min()) >= 0.0
    assert float(n.max()) <= 1.0
    # 一定値ではなく揺らいでいる。
    assert float(n.std()) > 0.01


def test_noise2_is_deterministic() -> None:
    x = np.linspace(0.0, 7.3, 50)
    y = np.linspace(-2.0, 4.1, 50)
    np.testing.assert_array_equal(noise2(x, y), noise2(x.copy(), y.copy()))


def test_noise2_is_mid_gray_on_lattice_points() -> None:
    x = np.array([0.0, 1.0, 5.0, -3.0])
    y = np.array([0.0, 2.0, 7.0, 4.0])
    np.testing.assert_allclose(noise2(x, y), 0.5, atol=1e-12)


def test_noise2_is_continuous() -> None:
    x = np.array([1.3, 1.3 + 1e-6])
    y = np.array([2.7, 2.7])
    n = noise2(x, y)
    assert abs(float(n[1] - n[0])) < 1e-4


def test_noise2_preserves_input_shape() -> None:
    x = np.zeros((3, 4)) + 0.25
    y = np.zeros((3, 4)) + 0.75
    assert noise2(x, y).shape == (3, 4)


def test_noise2_z_slice_changes_values() -> None:
    x = np.array([0.3, 1.7])
    y = np.array([0.6, 2.2])
    assert not np.allclose(noise2(x, y, z=0.0), noise2(x, y, z=0.5))


def test_noise2_rejects_mismatched_lengths() -> None:
    with pytest.raises(ValueError):
        noise2(np.zeros(3), np.zeros(4))
