# どこで: `src/glyphfield/core/trail.py`。
# 何を: ポインタ軌跡の短命なリングバッファと、その放射グラデーション描画を提供する。
# なぜ: 寿命判定を「毎フレームの経過時間比較」だけに閉じ込め、メモリを寿命窓の分に抑えるため。

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator

from glyphfield.core.surface import RGBA01, Surface, lerp_color, rgba255

DEFAULT_LIFETIME_MS = 100.0
DEFAULT_DIAMETER = 40.0

# 内側は半透明の薄紫（alpha は寿命で減衰）、外側は完全透明の青。
INNER_RGB255 = (200.0, 150.0, 255.0)
INNER_ALPHA255 = 200.0
OUTER_RGBA = rgba255(50.0, 100.0, 255.0, 0.0)


@dataclass(frozen=True, slots=True)
class TrailSample:
    """時刻付きのポインタ位置。"""

    x: float
    y: float
    captured_at_ms: float


def gradient_rings(diameter: float, alpha_factor: float) -> list[tuple[float, RGBA01]]:
    """1 サンプル分の同心円 (直径, 色) を外側から順に返す。

    半径 r から 1px ずつ 0 の手前まで、色は内側色→外側色を i/r で補間する。
    """
    r = float(diameter) / 2.0
    a = min(max(float(alpha_factor), 0.0), 1.0)
    inner = rgba255(*INNER_RGB255, INNER_ALPHA255 * a)
    rings: list[tuple[float, RGBA01]] = []
    i = r
    while i > 0.0:
        rings.append((i * 2.0, lerp_color(inner, OUTER_RGBA, i / r)))
        i -= 1.0
    return rings


class TrailBuffer:
    """寿命 `lifetime_ms` のポインタ軌跡バッファ。

    Notes
    -----
    サンプルは常に時刻の昇順で、寿命窓内のものだけを保持する。
    時刻が巻き戻った tick は直前サンプルの時刻に揃えて積む。
    """

    def __init__(
        self,
        *,
        lifetime_ms: float = DEFAULT_LIFETIME_MS,
        diameter: float = DEFAULT_DIAMETER,
    ) -> None:
        if float(lifetime_ms) <= 0.0:
            raise ValueError("lifetime_ms は正の値である必要がある")
        self.lifetime_ms = float(lifetime_ms)
        self.diameter = float(diameter)
        self._samples: deque[TrailSample] = deque()

    def __len__(self) -> int:
        return len(self._samples)

    def __iter__(self) -> Iterator[TrailSample]:
        return iter(self._samples)

    def tick(self, x: float, y: float, now_ms: float) -> None:
        """現在位置を積み、寿命切れのサンプルを先頭から捨てる。"""
        now = float(now_ms)
        if self._samples and now < self._samples[-1].captured_at_ms:
            now = self._samples[-1].captured_at_ms
        self._samples.append(TrailSample(x=float(x), y=float(y), captured_at_ms=now))
        self.evict(now)

    def evict(self, now_ms: float) -> None:
        """`now - captured_at > lifetime` のサンプルを捨てる。"""
        samples = self._samples
        while samples and float(now_ms) - samples[0].captured_at_ms > self.lifetime_ms:
            samples.popleft()

    def alpha_factor(self, sample: TrailSample, now_ms: float) -> float:
        """経過時間から 1 → 0 へ線形に落ちる不透明度係数を返す。"""
        age = (float(now_ms) - sample.captured_at_ms) / self.lifetime_ms
        return min(max(1.0 - age, 0.0), 1.0)

    def clear(self) -> None:
        self._samples.clear()

    def render(self, surface: Surface, now_ms: float) -> None:
        """生存中の各サンプルを放射グラデーション円として描く（古い順）。"""
        for sample in self._samples:
            for d, color in gradient_rings(self.diameter, self.alpha_factor(sample, now_ms)):
                surface.ellipse(sample.x, sample.y, d, color)


__all__ = ["TrailBuffer", "TrailSample", "gradient_rings"]
