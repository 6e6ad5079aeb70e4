# どこで: `src/glyphfield/interactive/render_settings.py`。
# 何を: interactive 描画設定の束を表すデータクラスを定義する。
# なぜ: `run` の引数を簡潔に保ちつつ、ウィンドウ側の設定を一元管理するため。

from __future__ import annotations

from dataclasses import dataclass

from glyphfield.core.runtime_config import RuntimeConfig


@dataclass(frozen=True, slots=True)
class RenderSettings:
    """リアルタイム描画に用いる設定値の集合。"""

    canvas_size: tuple[int, int] = (1280, 800)
    fps: float = 60.0
    scroll_step: float = 40.0
    caption: str = "glyphfield"

    @classmethod
    def from_config(cls, cfg: RuntimeConfig) -> "RenderSettings":
        return cls(
            canvas_size=(int(cfg.window_size[0]), int(cfg.window_size[1])),
            fps=float(cfg.fps),
            scroll_step=float(cfg.scroll_step),
        )
