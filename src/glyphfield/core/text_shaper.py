"""
どこで: `src/glyphfield/core/text_shaper.py`。フォント → 点列の変換（シェーピング）。
何を: fontTools でグリフアウトラインを平坦化し、文字列の外形寸法の計測と、輪郭に沿った等間隔サンプリングを行う。
なぜ: 点群生成をフォント実装から切り離し、ピクセル座標の点列だけを受け渡すため。
"""

from __future__ import annotations

import logging
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

import numpy as np

from glyphfield.core.font_resolver import FontLoadError

logger = logging.getLogger(__name__)

# density 1.0 あたりのサンプル間隔（em 比）。density=0.1, 250px で 10px 間隔になる。
SPACING_EM_PER_DENSITY = 0.4

# 平坦化の目標セグメント長（em 比）。サンプル間隔より十分細かくしておく。
FLATTEN_SEGMENT_EM = 0.005


class ShapingError(ValueError):
    """フォントが文字列を形にできない（グリフ欠落など）。"""


@dataclass(frozen=True, slots=True)
class TextBounds:
    """原点（ペン位置・ベースライン）基準のタイトな外接矩形 [px]。y は下向き正。"""

    x: float
    y: float
    w: float
    h: float


class _LRU:
    """単純な上限付き LRU キャッシュ（キー: str）。"""

    def __init__(self, maxsize: int = 1024) -> None:
        self.maxsize = int(maxsize)
        self._od: "OrderedDict[str, Any]" = OrderedDict()

    def get(self, key: str) -> Any | None:
        value = self._od.get(key)
        if value is not None:
            self._od.move_to_end(key)
        return value

    def set(self, key: str, value: Any) -> None:
        self._od[key] = value
        self._od.move_to_end(key)
        if len(self._od) > self.maxsize:
            self._od.popitem(last=False)


def _load_tt_font(path: Path, font_index: int) -> Any:
    from fontTools.ttLib import TTFont, TTLibError  # type: ignore[import-untyped]

    idx = max(0, int(font_index))
    try:
        if path.suffix.lower() == ".ttc":
            font = TTFont(path, fontNumber=idx)
        else:
            font = TTFont(path)
        # 遅延ロードのテーブル破損をここで検出する。
        _ = font["head"].unitsPerEm  # type: ignore[index]
        _ = font["hmtx"]  # type: ignore[index]
    except (OSError, TTLibError, KeyError, AssertionError) as exc:
        raise FontLoadError(f"フォントを読み込めません: path={path}, index={idx}") from exc
    return font


def _resample_polyline(polyline: np.ndarray, spacing: float) -> np.ndarray:
    """ポリラインを弧長 `spacing` 間隔で再サンプリングする（始点を含む）。"""

    seg = np.diff(polyline, axis=0)
    seg_len = np.hypot(seg[:, 0], seg[:, 1])
    keep = np.concatenate([[True], seg_len > 0.0])
    polyline = polyline[keep]
    seg_len = seg_len[seg_len > 0.0]
    if polyline.shape[0] < 2:
        return polyline[:1].copy()

    cum = np.concatenate([[0.0], np.cumsum(seg_len)])
    total = float(cum[-1])
    s = np.arange(0.0, total, float(spacing))
    x = np.interp(s, cum, polyline[:, 0])
    y = np.interp(s, cum, polyline[:, 1])
    return np.stack([x, y], axis=1)


class TextShaper:
    """1 つのフォントファイルに束縛されたシェーパー。

    座標は全てピクセル単位、y 軸は下向き（画面座標）で返す。
    """

    def __init__(self, font_path: Path, *, font_index: int = 0) -> None:
        self.font_path = Path(font_path)
        self.font_index = max(0, int(font_index))
        self._tt_font = _load_tt_font(self.font_path, self.font_index)
        self.units_per_em = float(self._tt_font["head"].unitsPerEm)  # type: ignore[index]
        self._cmap = self._tt_font.getBestCmap()
        self._glyph_set = self._tt_font.getGlyphSet()
        self._glyph_cache = _LRU(maxsize=1024)
        self._seg_len_units = max(1.0, FLATTEN_SEGMENT_EM * self.units_per_em)
        logger.info("Loaded font %s (unitsPerEm=%d)", self.font_path, int(self.units_per_em))

    def _glyph_name(self, char: str) -> str:
        if self._cmap is None:
            raise ShapingError(f"フォントに cmap がありません: {self.font_path}")
        glyph_name = self._cmap.get(ord(char))
        if glyph_name is None or glyph_name not in self._glyph_set:
            raise ShapingError(
                f"Character {char!r} (U+{ord(char):04X}) not found in font '{self.font_path}'"
            )
        return glyph_name

    def _advance_units(self, char: str) -> float:
        if char == " " and (self._cmap is None or ord(char) not in self._cmap):
            return 0.25 * self.units_per_em
        glyph_name = self._glyph_name(char)
        return float(self._tt_font["hmtx"].metrics[glyph_name][0])  # type: ignore[index]

    def _glyph_commands(self, char: str) -> tuple:
        """平坦化済みのグリフコマンド（`RecordingPen.value` 互換タプル）を返す。"""
        from fontPens.flattenPen import FlattenPen  # type: ignore[import-untyped]
        from fontTools.pens.recordingPen import (  # type: ignore[import-untyped]
            DecomposingRecordingPen,
            RecordingPen,
        )

        cached = self._glyph_cache.get(char)
        if cached is not None:
            return cached

        glyph_name = self._glyph_name(char)
        glyph = self._glyph_set[glyph_name]

        rec = DecomposingRecordingPen(self._glyph_set, reverseFlipped=True)
        try:
            glyph.draw(rec)
        except rec.MissingComponentError as exc:  # type: ignore[attr-defined]
            raise ShapingError(
                f"Glyph '{glyph_name}' has missing components in font '{self.font_path}'"
            ) from exc

        flat = RecordingPen()
        flatten_pen = FlattenPen(
            flat,
            approximateSegmentLength=self._seg_len_units,
            segmentLines=True,
        )
        rec.replay(flatten_pen)

        result = tuple(flat.value)
        self._glyph_cache.set(char, result)
        return result

    def outline_polylines(self, text: str, font_size_px: float) -> list[np.ndarray]:
        """原点基準の輪郭ポリライン列（閉曲線は始点で閉じる）を返す。

        Raises
        ------
        ShapingError
            グリフを持たない文字が含まれる場合。
        """

        scale = float(font_size_px) / self.units_per_em
        polylines: list[np.ndarray] = []
        pen_x = 0.0
        for ch in str(text):
            if not ch.isspace():
                polylines.extend(
                    _commands_to_polylines(self._glyph_commands(ch), x_units=pen_x, scale=scale)
                )
            pen_x += self._advance_units(ch)
        return polylines

    def advance_px(self, text: str, font_size_px: float) -> float:
        """文字列の送り幅の合計 [px] を返す。"""

        scale = float(font_size_px) / self.units_per_em
        return sum(self._advance_units(ch) for ch in str(text)) * scale

    def measure_bounds(self, text: str, font_size_px: float) -> TextBounds:
        """`font_size_px` で描いたときのタイトな外接矩形を返す。"""

        polylines = self.outline_polylines(text, font_size_px)
        if not polylines:
            return TextBounds(x=0.0, y=0.0, w=self.advance_px(text, font_size_px), h=0.0)
        coords = np.concatenate(polylines, axis=0)
        mins = coords.min(axis=0)
        maxs = coords.max(axis=0)
        return TextBounds(
            x=float(mins[0]),
            y=float(mins[1]),
            w=float(maxs[0] - mins[0]),
            h=float(maxs[1] - mins[1]),
        )

    def shape_to_points(
        self,
        text: str,
        x: float,
        y: float,
        font_size_px: float,
        *,
        density: float,
    ) -> np.ndarray:
        """ペン原点 (x, y)（y はベースライン）に置いた文字列の輪郭点列を返す。

        Parameters
        ----------
        density : float
            サンプル間隔の係数。小さいほど点が増える（間隔 = density * font_size * 0.4 px）。

        Returns
        -------
        np.ndarray
            float64 shape (N, 2)。輪郭の出現順・各輪郭内は弧長順。
        """

        spacing = max(1e-3, float(density) * float(font_size_px) * SPACING_EM_PER_DENSITY)
        origin = np.array([float(x), float(y)], dtype=np.float64)
        chunks = [
            _resample_polyline(p, spacing) + origin
            for p in self.outline_polylines(text, font_size_px)
        ]
        if not chunks:
            return np.zeros((0, 2), dtype=np.float64)
        return np.concatenate(chunks, axis=0)


def _commands_to_polylines(
    glyph_commands: Iterable,
    *,
    x_units: float,
    scale: float,
) -> list[np.ndarray]:
    """RecordingPen.value からピクセル座標（y 下向き）のポリライン列へ変換して返す。"""

    polylines: list[np.ndarray] = []
    current: list[list[float]] = []

    def flush(*, close: bool) -> None:
        nonlocal current
        if not current:
            return
        if close and len(current) > 1 and current[0] != current[-1]:
            current.append(list(current[0]))
        arr = np.asarray(current, dtype=np.float64)
        arr[:, 0] = (arr[:, 0] + x_units) * scale
        # フォント座標（Y+上）を画面座標（Y+下）へ反転
        arr[:, 1] = -arr[:, 1] * scale
        if arr.shape[0] >= 2:
            polylines.append(arr)
        current = []

    for cmd_type, cmd_values in glyph_commands:
        if cmd_type == "moveTo":
            flush(close=False)
            px, py = cmd_values[0]
            current.append([float(px), float(py)])
        elif cmd_type == "lineTo":
            px, py = cmd_values[0]
            current.append([float(px), float(py)])
        elif cmd_type == "closePath":
            flush(close=True)
        elif cmd_type == "endPath":
            flush(close=False)

    flush(close=False)
    return polylines


__all__ = ["ShapingError", "TextBounds", "TextShaper"]
