# どこで: `src/glyphfield/core/fields/__init__.py`。
# 何を: 組み込み field effect を import してレジストリへ登録し、巡回順の列を公開する。
# なぜ: import 1 回で 9 種すべてが揃っていることを保証するため。

from __future__ import annotations

from glyphfield.core.field_registry import FieldEffect, field_registry
from glyphfield.core.fields import (  # noqa: F401
    bubble,
    distortion_ripple,
    magnetic_pull,
    perlin,
    repulsion,
    ripple,
    spiral,
    swirl,
    wavy,
)

FIELD_EFFECTS: tuple[FieldEffect, ...] = field_registry.ordered()
N_EFFECTS = len(FIELD_EFFECTS)

__all__ = ["FIELD_EFFECTS", "N_EFFECTS"]
