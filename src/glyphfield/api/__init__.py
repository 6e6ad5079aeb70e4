# どこで: `src/glyphfield/api/__init__.py`。
# 何を: 公開 API（run）を再エクスポートする。
# なぜ: GUI 依存（pyglet/moderngl）の import を run 呼び出し時まで遅らせるため。

from __future__ import annotations

__all__ = ["run"]


def run(*args, **kwargs):
    """公開 run API へのラッパ（遅延インポートで GUI 依存を後回しにする）。"""

    from .runner import run as _run

    return _run(*args, **kwargs)
