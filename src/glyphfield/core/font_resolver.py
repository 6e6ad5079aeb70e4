# どこで: `src/glyphfield/core/font_resolver.py`。
# 何を: config の `text.font` 指定をフォントファイルへ解決し、見つからなければ初期化エラーにする。
# なぜ: フォントが無いと点群を 1 つも作れないため、描画ループに入る前に明確に失敗させるため。

from __future__ import annotations

import logging
import sys
from pathlib import Path

from glyphfield.core.runtime_config import runtime_config

logger = logging.getLogger(__name__)

_FONT_EXTENSIONS = (".ttf", ".otf", ".ttc")

# `text.font` 未指定時に先頭から探す候補（ファイル名）。
DEFAULT_FONT_CANDIDATES = (
    "DejaVuSans-Bold.ttf",
    "DejaVuSans.ttf",
    "LiberationSans-Bold.ttf",
    "LiberationSans-Regular.ttf",
    "NotoSans-Bold.ttf",
    "NotoSans-Regular.ttf",
    "Arial Bold.ttf",
    "Arial.ttf",
    "arialbd.ttf",
    "arial.ttf",
    "Helvetica.ttc",
    "HelveticaNeue.ttc",
)

_FONT_FILES_CACHE: dict[tuple[str, ...], tuple[Path, ...]] = {}


class FontLoadError(RuntimeError):
    """使えるフォントを解決・ロードできなかった（起動時の致命的エラー）。"""


def system_font_dirs() -> tuple[Path, ...]:
    """OS 標準のフォントディレクトリ候補を返す（存在確認はしない）。"""

    home = Path.home()
    if sys.platform == "darwin":
        return (
            home / "Library" / "Fonts",
            Path("/Library/Fonts"),
            Path("/System/Library/Fonts"),
            Path("/System/Library/Fonts/Supplemental"),
        )
    if sys.platform.startswith("win"):
        return (Path("C:/Windows/Fonts"),)
    return (
        home / ".local" / "share" / "fonts",
        home / ".fonts",
        Path("/usr/local/share/fonts"),
        Path("/usr/share/fonts"),
    )


def _search_dirs() -> tuple[Path, ...]:
    cfg = runtime_config()
    dirs: list[Path] = [Path(d).expanduser() for d in cfg.font_dirs]
    dirs.extend(system_font_dirs())
    return tuple(dirs)


def _list_font_files(*, dirs: tuple[Path, ...]) -> tuple[Path, ...]:
    key = tuple(str(d) for d in dirs)
    cached = _FONT_FILES_CACHE.get(key)
    if cached is not None:
        return cached

    # dirs の順序を保ったまま、各ディレクトリ内はファイル名で安定ソートする。
    seen: list[Path] = []
    for root in dirs:
        if not root.is_dir():
            continue
        found: list[Path] = []
        for ext in _FONT_EXTENSIONS:
            for fp in root.glob(f"**/*{ext}"):
                try:
                    resolved = fp.resolve()
                except OSError:
                    continue
                if resolved.is_file():
                    found.append(resolved)
        for fp in sorted(set(found), key=lambda p: (p.name.lower(), str(p))):
            if fp not in seen:
                seen.append(fp)

    out = tuple(seen)
    _FONT_FILES_CACHE[key] = out
    return out


def _error_hint(raw: str, dirs: tuple[Path, ...]) -> str:
    searched = ", ".join(str(d) for d in dirs) if dirs else "(none)"
    cfg = runtime_config()
    example_yaml = 'text:\n  font: "~/Fonts/MyFont.otf"\npaths:\n  font_dirs:\n    - "~/Fonts"\n'
    return (
        f"フォントが見つかりません: font={raw!r}。"
        " config.yaml の `text.font` に実在パスを渡すか、`paths.font_dirs` を設定してください"
        "（例: ./.glyphfield/config.yaml または ~/.config/glyphfield/config.yaml）。"
        f"\n\n{example_yaml}\nsearched_dirs={searched}, config_path={cfg.config_path}"
    )


def default_font_path() -> Path:
    """既定フォント候補のうち最初に見つかったものの実体パスを返す。"""

    dirs = _search_dirs()
    files = _list_font_files(dirs=dirs)
    by_name: dict[str, Path] = {}
    for fp in files:
        by_name.setdefault(fp.name.lower(), fp)

    for name in DEFAULT_FONT_CANDIDATES:
        fp = by_name.get(name.lower())
        if fp is not None:
            return fp

    raise FontLoadError(_error_hint("(default)", dirs))


def resolve_font_path(font: str) -> Path:
    """`font` 指定を実体ファイルへ解決して返す。

    解決結果は info で記録する。
    """

    path = _resolve_font_path(str(font).strip())
    logger.info("Resolved font %r -> %s", str(font), path)
    return path


def _resolve_font_path(raw: str) -> Path:
    """`raw` を実体ファイルへ解決する。

    解決順は以下。
    0) 空なら既定フォント候補
    1) 実在パス（絶対/相対）
    2) 探索ディレクトリ直下のファイル名一致
    3) 部分一致（dirs の順 → ファイル名の安定順）
    """

    if not raw:
        return default_font_path()

    direct_path = Path(raw).expanduser()
    if direct_path.is_file():
        return direct_path.resolve()

    dirs = _search_dirs()
    for d in dirs:
        fp = d / raw
        if fp.is_file():
            return fp.resolve()

    files = _list_font_files(dirs=dirs)
    key = raw.lower().replace(" ", "")
    for fp in files:
        name = fp.name.lower().replace(" ", "")
        stem = fp.stem.lower().replace(" ", "")
        if key in name or key in stem:
            return fp

    raise FontLoadError(_error_hint(raw, dirs))


def clear_font_cache() -> None:
    """フォント一覧キャッシュを破棄する（探索ディレクトリの中身が変わったとき用）。"""

    _FONT_FILES_CACHE.clear()


__all__ = [
    "DEFAULT_FONT_CANDIDATES",
    "FontLoadError",
    "clear_font_cache",
    "default_font_path",
    "resolve_font_path",
    "system_font_dirs",
]
