# どこで: `src/glyphfield/core/point_cloud.py`。
# 何を: 表示文字列から点群（PointCloud）を丸ごと生成する。
# なぜ: 点群を (text, density, font_size, canvas_size) の組だけから決まる不変値として扱うため。

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import numpy as np

from glyphfield.core.text_shaper import TextBounds

DENSITY_MIN = 0.05
DENSITY_MAX = 0.2


class Shaper(Protocol):
    """点群生成が依存するフォント側の契約。"""

    def measure_bounds(self, text: str, font_size_px: float) -> TextBounds: ...

    def shape_to_points(
        self,
        text: str,
        x: float,
        y: float,
        font_size_px: float,
        *,
        density: float,
    ) -> np.ndarray: ...


@dataclass(frozen=True, slots=True)
class PointCloud:
    """1 世代分の表示点群。

    Parameters
    ----------
    points : np.ndarray
        float64 shape (N, 2) の画面座標。writeable=False に固定する。
    text : str
        実際に形にした文字列（プレースホルダを含む）。
    is_placeholder : bool
        入力が空（またはシェーピング失敗）でプレースホルダを表示しているか。
    """

    points: np.ndarray
    text: str
    is_placeholder: bool
    density: float
    font_size: float
    canvas_size: tuple[int, int]

    def __post_init__(self) -> None:
        pts = np.array(self.points, dtype=np.float64, copy=True)
        if pts.size == 0:
            pts = np.zeros((0, 2), dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError("points は shape (N,2) の 2 次元配列である必要がある")
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)

    def __len__(self) -> int:
        return int(self.points.shape[0])


def clamp_density(density: float, *, lo: float = DENSITY_MIN, hi: float = DENSITY_MAX) -> float:
    """density を [lo, hi] に収める。"""
    return min(max(float(density), float(lo)), float(hi))


def generate_point_cloud(
    text: str,
    placeholder: str,
    shaper: Shaper,
    font_size_px: float,
    density: float,
    canvas_width: int,
    canvas_height: int,
    *,
    density_range: tuple[float, float] = (DENSITY_MIN, DENSITY_MAX),
) -> PointCloud:
    """文字列の輪郭点群をキャンバス中央に配置して生成する。

    空文字列なら `placeholder` を形にし、`is_placeholder=True` を立てる。

    Raises
    ------
    ShapingError
        フォントが文字列を形にできない場合（呼び出し側でプレースホルダへフォールバックする）。
    """

    is_placeholder = str(text) == ""
    word = str(placeholder) if is_placeholder else str(text)
    d = clamp_density(density, lo=density_range[0], hi=density_range[1])
    font_size = float(font_size_px)

    # 外接矩形の左端を W/2 - w/2 に、矩形の縦中心を H/2 に合わせるペン原点を求める。
    bounds = shaper.measure_bounds(word, font_size)
    x = float(canvas_width) / 2.0 - bounds.w / 2.0 - bounds.x
    y = float(canvas_height) / 2.0 - bounds.h / 2.0 - bounds.y
    points = shaper.shape_to_points(word, x, y, font_size, density=d)

    return PointCloud(
        points=points,
        text=word,
        is_placeholder=is_placeholder,
        density=d,
        font_size=font_size,
        canvas_size=(int(canvas_width), int(canvas_height)),
    )


__all__ = [
    "DENSITY_MAX",
    "DENSITY_MIN",
    "PointCloud",
    "Shaper",
    "clamp_density",
    "generate_point_cloud",
]
