from __future__ import annotations

from glyphfield.core.runtime_config import runtime_config
from glyphfield.interactive.render_settings import RenderSettings


def test_render_settings_from_packaged_config(isolated_config) -> None:
    settings = RenderSettings.from_config(runtime_config())
    assert settings.canvas_size == (1280, 800)
    assert settings.fps == 60.0
    assert settings.scroll_step == 40.0
    assert settings.caption == "glyphfield"
