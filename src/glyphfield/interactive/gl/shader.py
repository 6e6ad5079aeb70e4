"""
どこで: `src/glyphfield/interactive/gl/shader.py`。
何を: 塗り円をインスタンス描画するシェーダを生成する。
なぜ: 点・軌跡リング・カーソルを 1 種類の draw call にまとめるため。
"""

from __future__ import annotations

from typing import Any

VERTEX_SHADER = """
#version 330

uniform mat4 projection;

in vec2 in_corner;
in vec2 in_center;
in float in_diameter;
in vec4 in_color;

out vec2 v_local;
out vec4 v_color;

void main() {
    v_local = in_corner;
    v_color = in_color;
    vec2 pos = in_center + in_corner * (in_diameter * 0.5);
    gl_Position = projection * vec4(pos, 0.0, 1.0);
}
"""

FRAGMENT_SHADER = """
#version 330

in vec2 v_local;
in vec4 v_color;

out vec4 f_color;

void main() {
    if (dot(v_local, v_local) > 1.0) {
        discard;
    }
    f_color = v_color;
}
"""


class Shader:
    """円描画用シェーダの生成窓口。"""

    @staticmethod
    def create_shader(ctx: Any) -> Any:
        """ModernGL の Program を返す。"""
        return ctx.program(vertex_shader=VERTEX_SHADER, fragment_shader=FRAGMENT_SHADER)
