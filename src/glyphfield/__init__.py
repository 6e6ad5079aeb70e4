# どこで: `src/glyphfield/__init__.py`。
# 何を: ルート `glyphfield` パッケージを定義する。
# なぜ: import 起点を `glyphfield` に統一するため。

from __future__ import annotations

from glyphfield.api import run

__all__ = ["run"]
