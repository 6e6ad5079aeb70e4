"""GLSurface.text の Label 再利用（リサイズ追従）のテスト。GL コンテキストは作らない。"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

gl_surface = pytest.importorskip("glyphfield.interactive.gl.surface")


class _Label:
    def __init__(self) -> None:
        self.text = "old"
        self.x = 10
        self.y = 0
        self.width = 1
        self.color = (0, 0, 0, 0)
        self.draws = 0

    def draw(self) -> None:
        self.draws += 1


def _surface(width: int, height: int, label: _Label):
    s = gl_surface.GLSurface.__new__(gl_surface.GLSurface)
    s._window = SimpleNamespace(width=width, height=height)
    s._height = float(height)
    s._pending = []
    s._labels = {(10.0, 10.0, 16.0): label}
    return s


def test_cached_label_follows_window_size() -> None:
    label = _Label()
    surface = _surface(1280, 800, label)
    surface.text("Effect: Wavy", 10.0, 10.0, 16.0, (1.0, 1.0, 1.0, 1.0))
    assert label.width == 1270
    assert label.y == 790
    assert label.text == "Effect: Wavy"
    assert label.color == (255, 255, 255, 255)

    # リサイズ後は折り返し幅と y を新しい寸法へ合わせる。
    surface._window.width = 640
    surface._window.height = 480
    surface._height = 480.0
    surface.text("Effect: Wavy", 10.0, 10.0, 16.0, (1.0, 1.0, 1.0, 1.0))
    assert label.width == 630
    assert label.y == 470
    assert label.draws == 2
