# どこで: `src/glyphfield/interactive/gl/surface.py`。
# 何を: core の Surface 契約を ModernGL（塗り円）と pyglet Label（テキスト）で実装する。
# なぜ: 1 フレームに数百〜数千個ある円をまとめて 1 draw call にしつつ、重ね順は呼び出し順のまま保つため。

from __future__ import annotations

import moderngl
import numpy as np
import pyglet
from pyglet.window import Window

from glyphfield.core.surface import RGB01, RGBA01
from glyphfield.interactive.gl import utils as render_utils
from glyphfield.interactive.gl.disc_mesh import DiscMesh
from glyphfield.interactive.gl.shader import Shader


def _color255(color: RGBA01) -> tuple[int, int, int, int]:
    return tuple(int(round(min(max(c, 0.0), 1.0) * 255.0)) for c in color)  # type: ignore[return-value]


class GLSurface:
    """ウィンドウの back buffer へ描く Surface。

    `ellipse()` は溜めておき、`text()` の直前と `present()` でまとめて描く。
    """

    def __init__(self, window: Window) -> None:
        window.switch_to()
        self._window = window
        self.ctx = moderngl.create_context(require=330)
        self.program = Shader.create_shader(self.ctx)
        self._mesh = DiscMesh(self.ctx, self.program)
        self._pending: list[tuple[float, float, float, float, float, float, float]] = []
        # テキストは (x, y, size) ごとに Label を使い回す（毎フレーム生成は重い）。
        self._labels: dict[tuple[float, float, float], pyglet.text.Label] = {}
        self._height = float(window.height)
        self.resize(window.width, window.height)

    def resize(self, width: int, height: int) -> None:
        """キャンバス寸法（論理 px）の変更を射影行列へ反映する。"""
        self._height = float(height)
        projection = render_utils.build_projection(float(width), float(height))
        self.program["projection"].write(projection.tobytes())

    def viewport(self, width: int, height: int) -> None:
        """ビューポートをフレームバッファサイズに合わせて更新する。"""
        self.ctx.screen.use()
        self.ctx.viewport = (0, 0, int(width), int(height))

    def background(self, color: RGB01) -> None:
        self._pending.clear()
        self.ctx.clear(float(color[0]), float(color[1]), float(color[2]), 1.0)

    def ellipse(self, x: float, y: float, diameter: float, color: RGBA01) -> None:
        self._pending.append(
            (
                float(x),
                float(y),
                float(diameter),
                float(color[0]),
                float(color[1]),
                float(color[2]),
                float(color[3]),
            )
        )

    def text(self, content: str, x: float, y: float, size: float, color: RGBA01) -> None:
        self.flush()
        key = (float(x), float(y), float(size))
        label = self._labels.get(key)
        if label is None:
            # dpi=72 で font_size（pt）を px と一致させる。
            label = pyglet.text.Label(
                content,
                x=int(x),
                y=int(self._height - y),
                width=max(1, int(self._window.width - x)),
                anchor_x="left",
                anchor_y="top",
                multiline=True,
                dpi=72,
                font_size=float(size),
                color=_color255(color),
            )
            self._labels[key] = label
        else:
            if label.text != content:
                label.text = content
            label.y = int(self._height - y)
            label.width = max(1, int(self._window.width - x))
            label.color = _color255(color)
        label.draw()

    def flush(self) -> None:
        """溜めた円を 1 回のインスタンス描画で出す。"""
        if not self._pending:
            return
        instances = np.asarray(self._pending, dtype=np.float32)
        self._pending.clear()
        # pyglet の描画が blend を切ることがあるので毎回張り直す。
        self.ctx.enable(moderngl.BLEND)
        self.ctx.blend_func = moderngl.SRC_ALPHA, moderngl.ONE_MINUS_SRC_ALPHA
        self._mesh.upload(instances)
        self._mesh.render(moderngl.TRIANGLE_STRIP)

    def present(self) -> None:
        """フレーム末尾で未描画の円を出し切る（`flip()` は呼ばない）。"""
        self.flush()

    def release(self) -> None:
        """GPU リソースを解放する。"""
        for label in self._labels.values():
            label.delete()
        self._labels.clear()
        self._mesh.release()
        self.program.release()
        self.ctx.release()


__all__ = ["GLSurface"]
