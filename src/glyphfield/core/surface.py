# どこで: `src/glyphfield/core/surface.py`。
# 何を: フレーム描画が依存する描画面（Surface）の契約と色ヘルパを定義する。
# なぜ: core を pyglet/moderngl から切り離し、描画手順をヘッドレスに検証できるようにするため。

from __future__ import annotations

from typing import Protocol

RGB01 = tuple[float, float, float]
RGBA01 = tuple[float, float, float, float]


class Surface(Protocol):
    """塗り円とテキストを描ける 2D 描画面。

    座標は全てキャンバスのピクセル（左上原点、y 下向き）。
    呼び出し順に重ね描きされる（後に描いたものが上）。
    """

    def background(self, color: RGB01) -> None:
        """全面を単色でクリアする。"""
        ...

    def ellipse(self, x: float, y: float, diameter: float, color: RGBA01) -> None:
        """中心 (x, y)・直径 `diameter` の塗り円を描く。"""
        ...

    def text(self, content: str, x: float, y: float, size: float, color: RGBA01) -> None:
        """左上揃えでテキストを描く（`\\n` で改行）。"""
        ...


def gray(level: float, alpha: float = 255.0) -> RGBA01:
    """0..255 のグレー値を RGBA01 にする。"""
    v = float(level) / 255.0
    return (v, v, v, float(alpha) / 255.0)


def rgba255(r: float, g: float, b: float, a: float = 255.0) -> RGBA01:
    """0..255 の RGBA を RGBA01 にする。"""
    return (float(r) / 255.0, float(g) / 255.0, float(b) / 255.0, float(a) / 255.0)


def lerp_color(c1: RGBA01, c2: RGBA01, amount: float) -> RGBA01:
    """2 色を成分ごとに線形補間する（amount は [0, 1] にクランプ）。"""
    t = min(max(float(amount), 0.0), 1.0)
    return (
        c1[0] + (c2[0] - c1[0]) * t,
        c1[1] + (c2[1] - c1[1]) * t,
        c1[2] + (c2[2] - c1[2]) * t,
        c1[3] + (c2[3] - c1[3]) * t,
    )


__all__ = ["RGB01", "RGBA01", "Surface", "gray", "lerp_color", "rgba255"]
