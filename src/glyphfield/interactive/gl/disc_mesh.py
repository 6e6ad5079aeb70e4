"""
どこで: `src/glyphfield/interactive/gl/disc_mesh.py`。
何を: 単位四角形 VBO とインスタンス VBO/VAO の確保・更新・解放を担当する。
なぜ: GPU 転送の詳細を Surface から切り離し、再確保や VAO の張り直しを一元化するため。
"""

from __future__ import annotations

from typing import Any

import numpy as np

# 1 インスタンス = center(2) + diameter(1) + rgba(4) の float32。
INSTANCE_FLOATS = 7
INSTANCE_FORMAT = "2f 1f 4f/i"

_QUAD = np.array([[-1.0, -1.0], [1.0, -1.0], [-1.0, 1.0], [1.0, 1.0]], dtype=np.float32)


class DiscMesh:
    """塗り円のインスタンス描画データを GPU へ送る。"""

    def __init__(
        self,
        ctx: Any,
        program: Any,
        # 初期確保量（既定: 256KB）。必要に応じて自動拡張。
        initial_reserve: int = 256 * 1024,
    ) -> None:
        self.ctx = ctx
        self.program = program
        self.initial_reserve = int(initial_reserve)
        self.quad_vbo = ctx.buffer(_QUAD.tobytes())
        self.instance_vbo = ctx.buffer(reserve=self.initial_reserve, dynamic=True)
        self.vao = self._build_vao()
        self.instance_count: int = 0

    def _build_vao(self) -> Any:
        return self.ctx.vertex_array(
            self.program,
            [
                (self.quad_vbo, "2f", "in_corner"),
                (self.instance_vbo, INSTANCE_FORMAT, "in_center", "in_diameter", "in_color"),
            ],
        )

    def _ensure_capacity(self, nbytes: int) -> None:
        """データが大きくなったらインスタンスバッファを再確保し、VAO を張り直す。"""
        if nbytes <= self.instance_vbo.size:
            return
        self.instance_vbo.release()
        self.instance_vbo = self.ctx.buffer(
            reserve=max(int(nbytes) * 2, self.initial_reserve), dynamic=True
        )
        self.vao.release()
        self.vao = self._build_vao()

    def upload(self, instances: np.ndarray) -> None:
        """shape (N, 7) のインスタンス列を GPU へ送る。"""
        data = np.ascontiguousarray(instances, dtype=np.float32).reshape(-1, INSTANCE_FLOATS)
        self._ensure_capacity(data.nbytes)
        self.instance_vbo.orphan()
        self.instance_vbo.write(data)
        self.instance_count = int(data.shape[0])

    def render(self, mode: int) -> None:
        if self.instance_count == 0:
            return
        self.vao.render(mode=mode, vertices=4, instances=self.instance_count)

    def release(self) -> None:
        """GPU のメモリを解放する（終了時に使う）。"""
        self.vao.release()
        self.instance_vbo.release()
        self.quad_vbo.release()
