"""テスト共通 fixture（合成フォント・config の隔離）。"""

from __future__ import annotations

from pathlib import Path

import pytest
from fontTools.fontBuilder import FontBuilder
from fontTools.pens.ttGlyphPen import TTGlyphPen

from glyphfield.core.runtime_config import set_config_path

# 箱フォントの寸法（font units, unitsPerEm=1000）。
BOX_UPM = 1000
BOX_ADVANCE = 600
BOX_X0, BOX_X1 = 100, 500
BOX_Y0, BOX_Y1 = 0, 700
SPACE_ADVANCE = 300


def _box_glyph(x0: int, y0: int, x1: int, y1: int):
    pen = TTGlyphPen(None)
    pen.moveTo((x0, y0))
    pen.lineTo((x0, y1))
    pen.lineTo((x1, y1))
    pen.lineTo((x1, y0))
    pen.closePath()
    return pen.glyph()


def build_box_font(path: Path) -> Path:
    """ASCII 印字可能文字を全て同じ長方形にした TrueType フォントを書き出す。"""
    codepoints = list(range(0x21, 0x7F))
    names = [f"uni{cp:04X}" for cp in codepoints]
    order = [".notdef", "space", *names]

    fb = FontBuilder(BOX_UPM, isTTF=True)
    fb.setupGlyphOrder(order)
    cmap = {0x20: "space"}
    cmap.update(zip(codepoints, names))
    fb.setupCharacterMap(cmap)

    glyphs = {".notdef": _box_glyph(50, 0, 450, 700), "space": TTGlyphPen(None).glyph()}
    for name in names:
        glyphs[name] = _box_glyph(BOX_X0, BOX_Y0, BOX_X1, BOX_Y1)
    fb.setupGlyf(glyphs)

    metrics = {name: (BOX_ADVANCE, BOX_X0) for name in names}
    metrics[".notdef"] = (500, 50)
    metrics["space"] = (SPACE_ADVANCE, 0)
    fb.setupHorizontalMetrics(metrics)
    fb.setupHorizontalHeader(ascent=800, descent=-200)
    fb.setupNameTable({"familyName": "GlyphfieldBox", "styleName": "Regular"})
    fb.setupOS2(sTypoAscender=800, sTypoDescender=-200, usWinAscent=800, usWinDescent=200)
    fb.setupPost()
    fb.save(str(path))
    return path


@pytest.fixture(scope="session")
def box_font_path(tmp_path_factory: pytest.TempPathFactory) -> Path:
    return build_box_font(tmp_path_factory.mktemp("fonts") / "GlyphfieldBox-Regular.ttf")


@pytest.fixture(scope="session")
def box_shaper(box_font_path: Path):
    from glyphfield.core.text_shaper import TextShaper

    return TextShaper(box_font_path)


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """カレント/ホームの config.yaml を拾わないようにする。"""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("USERPROFILE", str(tmp_path))
    set_config_path(None)
    yield tmp_path
    set_config_path(None)
