# どこで: `src/glyphfield/interactive/runtime/__init__.py`。
# 何を: interactive 実行時の「ループ/サブシステム」実装をまとめるパッケージ定義。
# なぜ: `src/glyphfield/api/runner.py` を配線だけに保ち、イベント処理と描画の実装を分けるため。

from __future__ import annotations

__all__ = []
