# src/glyphfield/core/field_registry.py
# 点ごとの変位場（field effect）を順序付きで保持するレジストリ。
# effect index から実体関数を引き、Enter キーでの巡回順もここで決める。

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

import numpy as np


@dataclass(frozen=True, slots=True)
class FieldInput:
    """1 フレーム分の場の入力（全点で共有）。

    Parameters
    ----------
    pointer : tuple[float, float]
        ポインタ位置 [px]（左上原点、y 下向き）。
    t : float
        経過秒。
    center : tuple[float, float]
        キャンバス中心 [px]。
    size : tuple[float, float]
        キャンバス寸法 (width, height) [px]。
    """

    pointer: tuple[float, float]
    t: float
    center: tuple[float, float]
    size: tuple[float, float]

    @classmethod
    def for_canvas(
        cls,
        *,
        pointer: tuple[float, float],
        t: float,
        canvas_size: tuple[float, float],
    ) -> "FieldInput":
        """キャンバス寸法から center を導出して生成する。"""
        w, h = float(canvas_size[0]), float(canvas_size[1])
        return cls(
            pointer=(float(pointer[0]), float(pointer[1])),
            t=float(t),
            center=(w / 2.0, h / 2.0),
            size=(w, h),
        )


FieldFunc = Callable[[np.ndarray, FieldInput], np.ndarray]


@dataclass(frozen=True, slots=True)
class FieldEffect:
    """名前付きの変位場。

    Notes
    -----
    `func(points, field)` は shape (N, 2) を返す。
    `absolute=False` なら元座標へ加えるオフセット、`absolute=True` なら置換後の座標そのもの。
    呼び出し側は `apply()` を使えばどちらでも最終座標を得られる。
    """

    name: str
    func: FieldFunc
    absolute: bool = False

    def evaluate(self, points: np.ndarray, field: FieldInput) -> np.ndarray:
        """生の戻り値（オフセット or 置換座標）を返す。"""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        return np.asarray(self.func(pts, field), dtype=np.float64).reshape(-1, 2)

    def apply(self, points: np.ndarray, field: FieldInput) -> np.ndarray:
        """変位後の最終座標 (N, 2) を返す。"""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        if pts.shape[0] == 0:
            return np.zeros((0, 2), dtype=np.float64)
        out = self.evaluate(pts, field)
        if self.absolute:
            return out
        return pts + out

    def displace_point(
        self, point: tuple[float, float], field: FieldInput
    ) -> tuple[float, float]:
        """1 点版の `apply`。"""
        out = self.apply(np.array([point], dtype=np.float64), field)
        return float(out[0, 0]), float(out[0, 1])


class FieldRegistry:
    """index 順に並んだ FieldEffect の列。"""

    def __init__(self) -> None:
        """空のレジストリを初期化する。"""
        self._by_index: dict[int, FieldEffect] = {}

    def _register(self, index: int, entry: FieldEffect) -> None:
        """effect を登録する（`@field_effect` デコレータからのみ呼ぶ）。"""
        i = int(index)
        if i < 0:
            raise ValueError(f"field effect の index は 0 以上: {i}")
        existing = self._by_index.get(i)
        if existing is not None and existing.name != entry.name:
            raise ValueError(
                f"field effect index {i} は既に '{existing.name}' に使われている"
            )
        self._by_index[i] = entry

    def ordered(self) -> tuple[FieldEffect, ...]:
        """index 昇順の effect 列を返す。

        Raises
        ------
        RuntimeError
            index が 0 から連続していない場合。
        """
        keys = sorted(self._by_index)
        if keys != list(range(len(keys))):
            raise RuntimeError(f"field effect の index が連続していない: {keys}")
        return tuple(self._by_index[k] for k in keys)

    def __len__(self) -> int:
        return len(self._by_index)


field_registry = FieldRegistry()
"""グローバルな field effect レジストリインスタンス。"""


def field_effect(*, index: int, name: str, absolute: bool = False):
    """グローバル field レジストリ用デコレータ。

    Examples
    --------
    @field_effect(index=0, name="Repulsion")
    def repulsion(points, field):
        ...
    """

    def decorator(f: FieldFunc) -> FieldFunc:
        field_registry._register(index, FieldEffect(name=str(name), func=f, absolute=bool(absolute)))
        return f

    return decorator


__all__ = [
    "FieldEffect",
    "FieldFunc",
    "FieldInput",
    "FieldRegistry",
    "field_effect",
    "field_registry",
]
