# どこで: `src/glyphfield/core/session.py`。
# 何を: 入力・描画が共有する状態（文字列・effect・密度・点群・軌跡・ポインタ）を 1 つに束ねる。
# なぜ: モジュールグローバルを避け、点群の差し替えを「完成後に参照 1 つを入れ替える」だけにするため。

from __future__ import annotations

import logging
from dataclasses import dataclass

from glyphfield.core.field_registry import FieldEffect
from glyphfield.core.fields import FIELD_EFFECTS, N_EFFECTS
from glyphfield.core.point_cloud import PointCloud, Shaper, generate_point_cloud
from glyphfield.core.runtime_config import RuntimeConfig
from glyphfield.core.state import EffectState, ScrollGate, TextState
from glyphfield.core.text_shaper import ShapingError
from glyphfield.core.trail import TrailBuffer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionSettings:
    """Session の初期値と制約。"""

    placeholder: str = "Type Anything"
    font_size: float = 250.0
    max_length: int = 10
    density_initial: float = 0.1
    density_min: float = 0.05
    density_max: float = 0.2
    density_step: float = 0.01
    trail_lifetime_ms: float = 100.0
    trail_diameter: float = 40.0
    page_height_ratio: float = 2.0
    visibility_threshold: float = 0.5

    @classmethod
    def from_config(cls, cfg: RuntimeConfig) -> "SessionSettings":
        """RuntimeConfig から設定を組み立てる。"""
        return cls(
            placeholder=cfg.placeholder,
            font_size=cfg.font_size,
            max_length=cfg.max_length,
            density_initial=cfg.density_initial,
            density_min=cfg.density_min,
            density_max=cfg.density_max,
            density_step=cfg.density_step,
            trail_lifetime_ms=cfg.trail_lifetime_ms,
            trail_diameter=cfg.trail_diameter,
            page_height_ratio=cfg.page_height_ratio,
            visibility_threshold=cfg.visibility_threshold,
        )


class Session:
    """1 プロセス分の対話状態。

    入力ハンドラと毎フレームの描画は同じスレッドから呼ぶ前提で、ロックは持たない。
    """

    def __init__(
        self,
        shaper: Shaper,
        *,
        canvas_size: tuple[int, int],
        settings: SessionSettings | None = None,
    ) -> None:
        """初期状態（空文字列 → プレースホルダ）の点群まで生成する。

        Raises
        ------
        ShapingError
            プレースホルダ自体を形にできない場合（起動を中断させる）。
        """
        self.settings = settings if settings is not None else SessionSettings()
        s = self.settings
        self.shaper = shaper
        self.canvas_size = (int(canvas_size[0]), int(canvas_size[1]))
        self.text = TextState(max_length=int(s.max_length))
        self.effect = EffectState(
            n_effects=N_EFFECTS,
            density=s.density_initial,
            density_min=s.density_min,
            density_max=s.density_max,
        )
        self.trail = TrailBuffer(lifetime_ms=s.trail_lifetime_ms, diameter=s.trail_diameter)
        self.scroll = ScrollGate(
            viewport_height=float(self.canvas_size[1]),
            page_height_ratio=s.page_height_ratio,
            threshold_ratio=s.visibility_threshold,
        )
        self.pointer: tuple[float, float] = (0.0, 0.0)
        self._cloud = self._build_cloud()

    @property
    def cloud(self) -> PointCloud:
        """現在の点群（常に完成済みの 1 世代）。"""
        return self._cloud

    @property
    def active_effect(self) -> FieldEffect:
        return FIELD_EFFECTS[self.effect.effect_index]

    @property
    def interactive(self) -> bool:
        return self.scroll.interactive

    def _generate(self, text: str) -> PointCloud:
        s = self.settings
        w, h = self.canvas_size
        return generate_point_cloud(
            text,
            s.placeholder,
            self.shaper,
            s.font_size,
            self.effect.density,
            w,
            h,
            density_range=(s.density_min, s.density_max),
        )

    def _build_cloud(self) -> PointCloud:
        content = self.text.content
        try:
            return self._generate(content)
        except ShapingError:
            if not content:
                raise
            logger.warning(
                "Failed to shape %r; falling back to placeholder %r",
                content,
                self.settings.placeholder,
                exc_info=True,
            )
            return self._generate("")

    def regenerate(self) -> PointCloud:
        """現在の (text, density, canvas) から点群を作り直して差し替える。"""
        cloud = self._build_cloud()
        self._cloud = cloud
        logger.debug(
            "Regenerated point cloud: text=%r points=%d density=%.2f canvas=%s",
            cloud.text,
            len(cloud),
            cloud.density,
            cloud.canvas_size,
        )
        return cloud

    def resize(self, width: int, height: int) -> None:
        """キャンバス寸法の変更を反映する（同じ寸法なら何もしない）。"""
        size = (int(width), int(height))
        self.scroll.resize(float(size[1]))
        if size == self.canvas_size:
            return
        self.canvas_size = size
        self.regenerate()

    def set_pointer(self, x: float, y: float) -> None:
        self.pointer = (float(x), float(y))


__all__ = ["Session", "SessionSettings"]
