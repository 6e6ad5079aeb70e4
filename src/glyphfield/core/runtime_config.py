# どこで: `src/glyphfield/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: フォントや初期値（密度・トレイル寿命・ウィンドウ寸法）をコードを触らずに差し替えられるようにするため。

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """glyphfield の実行時設定。"""

    config_path: Path | None
    font_dirs: tuple[Path, ...]
    font: str
    font_index: int
    font_size: float
    placeholder: str
    max_length: int
    density_initial: float
    density_min: float
    density_max: float
    density_step: float
    trail_lifetime_ms: float
    trail_diameter: float
    window_size: tuple[int, int]
    window_pos: tuple[int, int]
    fps: float
    scroll_step: float
    page_height_ratio: float
    visibility_threshold: float


_EXPLICIT_CONFIG_PATH: Path | None = None
_CONFIG_CACHE: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """以降の設定探索で使う明示 config パスを設定する。

    Notes
    -----
    `path` を None にすると明示指定を解除し、既定の探索に戻る。
    """

    global _EXPLICIT_CONFIG_PATH, _CONFIG_CACHE
    if path is None:
        _EXPLICIT_CONFIG_PATH = None
        _CONFIG_CACHE = None
        return
    p = Path(str(path)).expanduser()
    _EXPLICIT_CONFIG_PATH = p
    _CONFIG_CACHE = None


def _default_config_candidates() -> tuple[Path, ...]:
    cwd = Path.cwd()
    home = Path.home()
    return (
        cwd / ".glyphfield" / "config.yaml",
        home / ".config" / "glyphfield" / "config.yaml",
    )


def _expand_path_text(text: str) -> str:
    return os.path.expandvars(os.path.expanduser(str(text)))


def _as_optional_path(value: Any) -> Path | None:
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None
    return Path(_expand_path_text(s))


def _as_path_list(value: Any) -> list[Path]:
    if value is None:
        return []
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return []
        parts = [p for p in s.split(os.pathsep) if p]
        return [Path(_expand_path_text(p)) for p in parts]

    try:
        seq = list(value)
    except TypeError:
        return []

    out: list[Path] = []
    for item in seq:
        p = _as_optional_path(item)
        if p is not None:
            out.append(p)
    return out


def _as_mapping(value: Any, *, key: str) -> dict[str, Any]:
    if value is None:
        return {}
    if isinstance(value, dict):
        return dict(value)
    raise RuntimeError(f"{key} は mapping である必要があります: got={value!r}")


def _as_int_pair(value: Any, *, key: str) -> tuple[int, int]:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        seq = list(value)
    except TypeError as exc:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}") from exc
    if len(seq) != 2:
        raise RuntimeError(f"{key} は [x, y] の配列である必要があります: got={value!r}")
    try:
        x = int(seq[0])
        y = int(seq[1])
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は [x, y] の整数配列である必要があります: got={value!r}") from exc
    return (x, y)


def _as_float(value: Any, *, key: str) -> float:
    if value is None:
        raise RuntimeError(f"{key} が未設定です（同梱 default_config.yaml を確認してください）")
    try:
        return float(value)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"{key} は数値である必要があります: got={value!r}") from exc


def _as_positive(value: Any, *, key: str) -> float:
    f = _as_float(value, key=key)
    if f <= 0:
        raise ValueError(f"{key} は正の値である必要があります: got={f}")
    return f


def _load_yaml_text(text: str, *, source: str) -> dict[str, Any]:
    import yaml  # type: ignore[import-untyped]

    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml の読み込みに失敗しました: source={source}") from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml は mapping である必要があります: source={source}")

    return dict(data)


def _load_yaml_config(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    return _load_yaml_text(text, source=str(path))


def _load_packaged_default_config() -> dict[str, Any]:
    """同梱デフォルト config をロードして dict を返す。"""

    try:
        blob = (
            resources.files("glyphfield")
            .joinpath("resource", "default_config.yaml")
            .read_text(encoding="utf-8")
        )
    except (FileNotFoundError, ModuleNotFoundError) as exc:  # pragma: no cover
        raise RuntimeError(
            "同梱 default_config.yaml の読み込みに失敗しました"
            "（パッケージ配布物の package-data を確認してください）"
        ) from exc

    return _load_yaml_text(blob, source="glyphfield/resource/default_config.yaml")


def _merge_sections(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """トップレベルのセクション単位で浅くマージする（セクション内はキー単位で後勝ち）。"""

    out = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            merged = dict(out[key])
            merged.update(value)
            out[key] = merged
        else:
            out[key] = value
    return out


def runtime_config() -> RuntimeConfig:
    """実行時設定をロードして返す（キャッシュ）。"""

    global _CONFIG_CACHE
    if _CONFIG_CACHE is not None:
        return _CONFIG_CACHE

    explicit_path = _EXPLICIT_CONFIG_PATH
    if explicit_path is not None and not explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つかりません: {explicit_path}")

    discovered_path: Path | None = None
    for p in _default_config_candidates():
        if p.is_file():
            discovered_path = p
            break

    payload = _load_packaged_default_config()
    if discovered_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(discovered_path))
    if explicit_path is not None:
        payload = _merge_sections(payload, _load_yaml_config(explicit_path))

    version = payload.get("version")
    if version is None:
        raise RuntimeError(
            "config.yaml の version が未設定です（同梱 default_config.yaml を確認してください）"
        )
    try:
        version_i = int(version)
    except (TypeError, ValueError) as exc:
        raise RuntimeError(f"config.yaml の version は整数である必要があります: got={version!r}") from exc
    if version_i != 1:
        raise RuntimeError(f"未対応の config.yaml version です: got={version_i}")

    paths = _as_mapping(payload.get("paths"), key="paths")
    font_dirs = _as_path_list(paths.get("font_dirs"))

    text = _as_mapping(payload.get("text"), key="text")
    font = str(text.get("font") or "").strip()
    font_index = int(_as_float(text.get("font_index", 0), key="text.font_index"))
    font_size = _as_positive(text.get("font_size"), key="text.font_size")
    placeholder = str(text.get("placeholder") or "")
    if not placeholder:
        raise RuntimeError("text.placeholder は空にできません")
    max_length = int(_as_positive(text.get("max_length"), key="text.max_length"))

    density = _as_mapping(payload.get("density"), key="density")
    density_min = _as_positive(density.get("min"), key="density.min")
    density_max = _as_positive(density.get("max"), key="density.max")
    if density_min > density_max:
        raise ValueError(
            f"density.min は density.max 以下である必要があります: min={density_min}, max={density_max}"
        )
    density_initial = _as_float(density.get("initial"), key="density.initial")
    density_initial = min(max(density_initial, density_min), density_max)
    density_step = _as_positive(density.get("step"), key="density.step")

    trail = _as_mapping(payload.get("trail"), key="trail")
    trail_lifetime_ms = _as_positive(trail.get("lifetime_ms"), key="trail.lifetime_ms")
    trail_diameter = _as_positive(trail.get("diameter"), key="trail.diameter")

    window = _as_mapping(payload.get("window"), key="window")
    window_size = _as_int_pair(window.get("size"), key="window.size")
    window_pos = _as_int_pair(window.get("position"), key="window.position")
    fps = _as_float(window.get("fps"), key="window.fps")
    scroll_step = _as_positive(window.get("scroll_step"), key="window.scroll_step")
    page_height_ratio = _as_float(window.get("page_height_ratio"), key="window.page_height_ratio")
    if page_height_ratio < 1.0:
        raise ValueError(
            f"window.page_height_ratio は 1.0 以上である必要があります: got={page_height_ratio}"
        )
    visibility_threshold = _as_positive(
        window.get("visibility_threshold"), key="window.visibility_threshold"
    )

    cfg = RuntimeConfig(
        config_path=explicit_path or discovered_path,
        font_dirs=tuple(font_dirs),
        font=font,
        font_index=font_index,
        font_size=font_size,
        placeholder=placeholder,
        max_length=max_length,
        density_initial=density_initial,
        density_min=density_min,
        density_max=density_max,
        density_step=density_step,
        trail_lifetime_ms=trail_lifetime_ms,
        trail_diameter=trail_diameter,
        window_size=window_size,
        window_pos=window_pos,
        fps=fps,
        scroll_step=scroll_step,
        page_height_ratio=page_height_ratio,
        visibility_threshold=visibility_threshold,
    )
    _CONFIG_CACHE = cfg
    return cfg


__all__ = ["RuntimeConfig", "runtime_config", "set_config_path"]
