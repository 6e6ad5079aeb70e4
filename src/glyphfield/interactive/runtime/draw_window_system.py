# どこで: `src/glyphfield/interactive/runtime/draw_window_system.py`。
# 何を: pyglet のイベントを Session / InputController へ配線し、毎フレーム FrameRenderer で描画する。
# なぜ: `src/glyphfield/api/runner.py` の `run()` を「配線」に寄せ、イベント処理と描画の責務を独立させるため。

from __future__ import annotations

import logging
import time

import pyglet
from pyglet.window import key

from glyphfield.core.frame_renderer import FrameRenderer
from glyphfield.core.input_controller import KEY_BINDINGS, InputController, KeyAction
from glyphfield.core.session import Session
from glyphfield.interactive.draw_window import create_draw_window
from glyphfield.interactive.gl.surface import GLSurface
from glyphfield.interactive.render_settings import RenderSettings
from glyphfield.interactive.runtime.frame_clock import RealTimeClock

_logger = logging.getLogger(__name__)

KEY_ACTIONS: dict[int, KeyAction] = {
    getattr(key, name): action for name, action in KEY_BINDINGS.items()
}


class DrawWindowSystem:
    """描画ウィンドウのサブシステム。"""

    def __init__(self, session: Session, *, settings: RenderSettings) -> None:
        """描画用の window/surface を初期化し、入力ハンドラを登録する。"""

        self._session = session
        self._settings = settings
        self._controller = InputController(session)
        self._renderer = FrameRenderer(session)

        # 描画用の pyglet window を作成し、その window の OpenGL コンテキストに紐づく surface を作る。
        self.window = create_draw_window(settings)
        self._surface = GLSurface(self.window)
        session.resize(self.window.width, self.window.height)

        self.window.push_handlers(
            on_text=self._on_text,
            on_key_press=self._on_key_press,
            on_mouse_motion=self._on_mouse_motion,
            on_mouse_drag=self._on_mouse_drag,
            on_mouse_scroll=self._on_mouse_scroll,
            on_resize=self._on_resize,
        )

        self._clock = RealTimeClock(start_time=time.perf_counter())

    def _on_text(self, text: str) -> bool | None:
        if self._controller.on_text(text):
            return pyglet.event.EVENT_HANDLED
        return None

    def _on_key_press(self, symbol: int, _modifiers: int) -> bool | None:
        action = KEY_ACTIONS.get(symbol)
        if action is None:
            return None
        if self._controller.on_key(action):
            return pyglet.event.EVENT_HANDLED
        return None

    def _set_pointer(self, x: int, y: int) -> None:
        # pyglet は左下原点なので、キャンバス座標（左上原点）へ反転する。
        self._session.set_pointer(float(x), float(self.window.height - y))

    def _on_mouse_motion(self, x: int, y: int, _dx: int, _dy: int) -> None:
        self._set_pointer(x, y)

    def _on_mouse_drag(
        self, x: int, y: int, _dx: int, _dy: int, _buttons: int, _modifiers: int
    ) -> None:
        self._set_pointer(x, y)

    def _on_mouse_scroll(self, _x: int, _y: int, _scroll_x: float, scroll_y: float) -> None:
        # ホイール上（scroll_y > 0）でページ上端へ戻る向き。
        self._session.scroll.scroll_by(-float(scroll_y) * float(self._settings.scroll_step))

    def _on_resize(self, width: int, height: int) -> None:
        # EVENT_HANDLED を返さず、pyglet 既定の on_resize も走らせる。
        self._surface.resize(width, height)
        self._session.resize(width, height)

    def _framebuffer_size(self) -> tuple[int, int]:
        getter = getattr(self.window, "get_framebuffer_size", None)
        if callable(getter):
            w, h = getter()
            return int(w), int(h)
        return int(self.window.width), int(self.window.height)

    def draw_frame(self) -> None:
        """1 フレーム分の描画を行う（`flip()` は呼ばない）。"""

        # 注: 呼び出し側（pyglet.window.Window.draw）が事前に self.window.switch_to() 済みである前提。
        fb_w, fb_h = self._framebuffer_size()
        self._surface.viewport(fb_w, fb_h)
        self._renderer.render(self._surface, self._clock.millis())
        self._surface.present()

    def close(self) -> None:
        """GPU / window 資源を解放する。"""

        try:
            self._surface.release()
        except Exception:
            _logger.exception("Failed to release GL surface")
        self.window.close()
