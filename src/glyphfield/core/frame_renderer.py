# どこで: `src/glyphfield/core/frame_renderer.py`。
# 何を: 1 フレーム分の描画手順（背景 → 軌跡 → 変位した点群 → 案内テキスト → カーソル）を組み立てる。
# なぜ: 描画順と可視判定を Surface 実装から切り離し、GL 無しで検証できるようにするため。

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from glyphfield.core.field_registry import FieldInput
from glyphfield.core.session import Session
from glyphfield.core.surface import Surface, gray


@dataclass(frozen=True, slots=True)
class FrameStyle:
    """描画の見た目（0..255 のグレー値と px 寸法）。"""

    active_background: float = 30.0
    idle_background: float = 255.0
    point_fill: float = 255.0
    placeholder_fill: float = 100.0
    point_diameter: float = 3.0
    overlay_fill: float = 200.0
    overlay_size: float = 16.0
    overlay_pos: tuple[float, float] = (10.0, 10.0)
    cursor_fill: float = 255.0
    cursor_diameter: float = 10.0


def overlay_text(effect_name: str, max_length: int) -> str:
    """左上に出す案内テキストを返す。"""
    return (
        f"Effect: {effect_name}"
        "\nPress ENTER to change effect"
        "\n\nUp/Down arrows adjust density"
        f"\nType (max {int(max_length)} letters) / BACKSPACE to delete"
    )


class FrameRenderer:
    """Session を読み、Surface へ 1 フレーム描く。"""

    def __init__(self, session: Session, *, style: FrameStyle | None = None) -> None:
        self.session = session
        self.style = style if style is not None else FrameStyle()

    def displaced_points(self, now_ms: float) -> np.ndarray:
        """現在の effect を全点へ適用した座標 (N, 2) を返す。"""
        session = self.session
        field = FieldInput.for_canvas(
            pointer=session.pointer,
            t=float(now_ms) / 1000.0,
            canvas_size=session.canvas_size,
        )
        return session.active_effect.apply(session.cloud.points, field)

    def render(self, surface: Surface, now_ms: float) -> bool:
        """1 フレーム描く。操作領域が見えていて全描画したら True。

        操作領域がスクロールで隠れている間は明るい背景だけを描く
        （軌跡・点群・カーソルは省略し、軌跡も進めない）。
        """
        session = self.session
        style = self.style
        if not session.interactive:
            surface.background(gray(style.idle_background)[:3])
            return False

        surface.background(gray(style.active_background)[:3])

        px, py = session.pointer
        session.trail.tick(px, py, now_ms)
        session.trail.render(surface, now_ms)

        cloud = session.cloud
        fill = gray(style.placeholder_fill if cloud.is_placeholder else style.point_fill)
        d = style.point_diameter
        for x, y in self.displaced_points(now_ms).tolist():
            surface.ellipse(x, y, d, fill)

        ox, oy = style.overlay_pos
        surface.text(
            overlay_text(session.active_effect.name, session.text.max_length),
            ox,
            oy,
            style.overlay_size,
            gray(style.overlay_fill),
        )

        surface.ellipse(px, py, style.cursor_diameter, gray(style.cursor_fill))
        return True


__all__ = ["FrameRenderer", "FrameStyle", "overlay_text"]
