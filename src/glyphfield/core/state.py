# どこで: `src/glyphfield/core/state.py`。
# 何を: 入力で変化する小さな状態（文字列・effect/密度・スクロール位置）を定義する。
# なぜ: 値域の制約（長さ上限・密度のクランプ・巡回）を状態自身に持たせ、入力側を薄く保つため。

from __future__ import annotations

from dataclasses import dataclass

from glyphfield.core.point_cloud import DENSITY_MAX, DENSITY_MIN, clamp_density

DEFAULT_MAX_LENGTH = 10
DEFAULT_DENSITY = 0.1
DENSITY_STEP = 0.01


@dataclass(slots=True)
class TextState:
    """入力中の文字列。長さは `max_length` を超えない。"""

    content: str = ""
    max_length: int = DEFAULT_MAX_LENGTH

    def append(self, char: str) -> bool:
        """1 文字追加する。上限に達していれば何もしない。"""
        if len(self.content) >= int(self.max_length):
            return False
        self.content += char
        return True

    def delete_last(self) -> bool:
        """末尾 1 文字を削除する。空なら何もしない。"""
        if not self.content:
            return False
        self.content = self.content[:-1]
        return True


@dataclass(slots=True)
class EffectState:
    """選択中の effect と点のサンプリング密度。"""

    n_effects: int
    effect_index: int = 0
    density: float = DEFAULT_DENSITY
    density_min: float = DENSITY_MIN
    density_max: float = DENSITY_MAX

    def __post_init__(self) -> None:
        if int(self.n_effects) < 1:
            raise ValueError("n_effects は 1 以上である必要がある")
        self.effect_index = int(self.effect_index) % int(self.n_effects)
        self.density = clamp_density(self.density, lo=self.density_min, hi=self.density_max)

    def cycle(self) -> int:
        """次の effect へ進める（末尾の次は 0）。"""
        self.effect_index = (self.effect_index + 1) % int(self.n_effects)
        return self.effect_index

    def adjust_density(self, delta: float) -> bool:
        """density を `delta` だけ動かし、範囲にクランプする。値が変わったら True。"""
        # 0.01 刻みの加減算で誤差が積もらないよう丸めてからクランプする。
        value = round(self.density + float(delta), 6)
        value = clamp_density(value, lo=self.density_min, hi=self.density_max)
        changed = value != self.density
        self.density = value
        return changed


@dataclass(slots=True)
class ScrollGate:
    """縦長ページの上半分だけを操作領域とする可視判定。

    ページ高さは `viewport_height * page_height_ratio`。
    `scroll_y < viewport_height * threshold_ratio` の間だけ操作・描画が有効。
    """

    viewport_height: float
    scroll_y: float = 0.0
    page_height_ratio: float = 2.0
    threshold_ratio: float = 0.5

    @property
    def max_scroll(self) -> float:
        return max(0.0, float(self.viewport_height) * (float(self.page_height_ratio) - 1.0))

    @property
    def interactive(self) -> bool:
        return float(self.scroll_y) < float(self.viewport_height) * float(self.threshold_ratio)

    def scroll_by(self, dy: float) -> None:
        """ページを `dy` px スクロールする（正で下へ）。"""
        self.scroll_y = min(max(float(self.scroll_y) + float(dy), 0.0), self.max_scroll)

    def resize(self, viewport_height: float) -> None:
        self.viewport_height = float(viewport_height)
        self.scroll_y = min(float(self.scroll_y), self.max_scroll)


__all__ = ["DENSITY_STEP", "EffectState", "ScrollGate", "TextState"]
