# どこで: `src/glyphfield/interactive/draw_window.py`。
# 何を: ライブ描画用の pyglet ウィンドウ生成を行う。
# なぜ: interactive 依存をこの層に閉じ込め、core をヘッドレスに保つため。

from __future__ import annotations

import pyglet
from pyglet.gl import Config
from pyglet.window import Window

from glyphfield.interactive.render_settings import RenderSettings


def create_draw_window(settings: RenderSettings) -> Window:
    """設定に基づき描画ウィンドウを生成する。"""
    # 点の縁を滑らかにするために MSAA を有効化
    config = Config(double_buffer=True, sample_buffers=1, samples=4)  # type: ignore[abstract]
    canvas_w, canvas_h = settings.canvas_size
    try:
        window = pyglet.window.Window(  # type: ignore[abstract]
            width=int(canvas_w),
            height=int(canvas_h),
            resizable=True,
            caption=settings.caption,
            config=config,
        )
    except pyglet.window.NoSuchConfigException:
        # MSAA 非対応環境では既定 config で作り直す。
        window = pyglet.window.Window(  # type: ignore[abstract]
            width=int(canvas_w),
            height=int(canvas_h),
            resizable=True,
            caption=settings.caption,
        )
    # OS カーソルは隠し、描画側のカーソル円だけを見せる。
    window.set_mouse_visible(False)
    return window
