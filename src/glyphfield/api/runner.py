"""
どこで: `src/glyphfield/api/runner.py`。公開 API のランナー実装。
何を: 設定ロード → フォント解決 → Session 生成 → pyglet ウィンドウ起動までを配線する。
なぜ: フォントや設定の不備をウィンドウを開く前に検出し、明確なエラーで止めるため。
"""

from __future__ import annotations

from pathlib import Path

import pyglet

from glyphfield.core.font_resolver import resolve_font_path
from glyphfield.core.runtime_config import runtime_config, set_config_path
from glyphfield.core.session import Session, SessionSettings
from glyphfield.core.text_shaper import TextShaper
from glyphfield.interactive.render_settings import RenderSettings
from glyphfield.interactive.runtime.draw_window_system import DrawWindowSystem
from glyphfield.interactive.runtime.window_loop import WindowLoop, WindowTask


def run(
    *,
    config_path: str | Path | None = None,
    font: str | None = None,
    fps: float | None = None,
) -> None:
    """変形テキストのウィンドウを開き、閉じられるまで描画する。

    Parameters
    ----------
    config_path : str | Path | None
        設定ファイル（config.yaml）のパス。指定した場合は探索より優先する。
    font : str | None
        フォント指定（実在パス / ファイル名 / ステム / 部分一致）。None なら config の `text.font`。
    fps : float | None
        目標フレームレート。None なら config の `window.fps`。

    Raises
    ------
    FontLoadError
        フォントを解決・ロードできない場合（ウィンドウを開く前に送出する）。
    ShapingError
        プレースホルダ文字列をフォントで形にできない場合。

    Returns
    -------
    None
        ウィンドウを閉じると制御を返す。
    """

    set_config_path(config_path)
    cfg = runtime_config()

    # --- 起動前検証（ここで失敗したらウィンドウは作らない） ---
    font_path = resolve_font_path(cfg.font if font is None else font)
    shaper = TextShaper(font_path, font_index=cfg.font_index)
    settings = RenderSettings.from_config(cfg)
    if fps is not None:
        settings = RenderSettings(
            canvas_size=settings.canvas_size,
            fps=float(fps),
            scroll_step=settings.scroll_step,
            caption=settings.caption,
        )
    session = Session(
        shaper,
        canvas_size=settings.canvas_size,
        settings=SessionSettings.from_config(cfg),
    )

    # pyglet の Window 作成前にオプションを設定する。
    pyglet.options["vsync"] = False

    draw_window = DrawWindowSystem(session, settings=settings)
    draw_window.window.set_location(*cfg.window_pos)

    loop = WindowLoop(
        WindowTask(window=draw_window.window, draw_frame=draw_window.draw_frame),
        fps=settings.fps,
    )
    try:
        loop.run()
    finally:
        draw_window.close()
