from pathlib import Path

import pytest

from glyphfield.core.runtime_config import _merge_sections, runtime_config, set_config_path


@pytest.fixture(autouse=True)
def _reset_runtime_config() -> None:
    set_config_path(None)
    yield
    set_config_path(None)


def test_packaged_defaults(isolated_config: Path):
    cfg = runtime_config()
    assert cfg.config_path is None
    assert cfg.font == ""
    assert cfg.font_dirs == ()
    assert cfg.font_size == 250.0
    assert cfg.placeholder == "Type Anything"
    assert cfg.max_length == 10
    assert (cfg.density_initial, cfg.density_min, cfg.density_max) == (0.1, 0.05, 0.2)
    assert cfg.density_step == 0.01
    assert cfg.trail_lifetime_ms == 100.0
    assert cfg.trail_diameter == 40.0
    assert cfg.window_size == (1280, 800)
    assert cfg.window_pos == (25, 25)
    assert cfg.fps == 60.0
    assert cfg.page_height_ratio == 2.0
    assert cfg.visibility_threshold == 0.5


def test_runtime_config_is_cached(isolated_config: Path):
    assert runtime_config() is runtime_config()


def test_discovered_config_overrides_per_key(isolated_config: Path):
    discovered = isolated_config / ".glyphfield" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text(
        'text:\n  placeholder: "Hello"\npaths:\n  font_dirs:\n    - "./fonts_discovered"\n',
        encoding="utf-8",
    )

    cfg = runtime_config()
    assert cfg.config_path == discovered
    assert cfg.placeholder == "Hello"
    # 同じセクションの他キーは同梱デフォルトのまま。
    assert cfg.font_size == 250.0
    assert cfg.max_length == 10
    assert cfg.font_dirs == (Path("fonts_discovered"),)


def test_home_config_is_discovered(isolated_config: Path):
    home_cfg = isolated_config / ".config" / "glyphfield" / "config.yaml"
    home_cfg.parent.mkdir(parents=True, exist_ok=True)
    home_cfg.write_text("trail:\n  lifetime_ms: 250\n", encoding="utf-8")

    cfg = runtime_config()
    assert cfg.config_path == home_cfg
    assert cfg.trail_lifetime_ms == 250.0
    assert cfg.trail_diameter == 40.0


def test_explicit_config_wins_over_discovered(isolated_config: Path):
    discovered = isolated_config / ".glyphfield" / "config.yaml"
    discovered.parent.mkdir(parents=True, exist_ok=True)
    discovered.write_text("density:\n  initial: 0.15\n  step: 0.02\n", encoding="utf-8")

    explicit = isolated_config / "explicit.yaml"
    explicit.write_text("density:\n  initial: 0.07\n", encoding="utf-8")
    set_config_path(explicit)

    cfg = runtime_config()
    assert cfg.config_path == explicit
    assert cfg.density_initial == 0.07
    assert cfg.density_step == 0.02


def test_initial_density_is_clamped(isolated_config: Path):
    explicit = isolated_config / "explicit.yaml"
    explicit.write_text("density:\n  initial: 0.9\n", encoding="utf-8")
    set_config_path(explicit)
    assert runtime_config().density_initial == 0.2


def test_missing_explicit_config_raises(isolated_config: Path):
    set_config_path(isolated_config / "nope.yaml")
    with pytest.raises(FileNotFoundError):
        runtime_config()


@pytest.mark.parametrize(
    "body, exc",
    [
        ("version: 2\n", RuntimeError),
        ("- not\n- a mapping\n", RuntimeError),
        ("text: [1, 2]\n", RuntimeError),
        ("text:\n  font_size: -3\n", ValueError),
        ("density:\n  min: 0.3\n  max: 0.1\n", ValueError),
        ("window:\n  size: [1, 2, 3]\n", RuntimeError),
        ("window:\n  page_height_ratio: 0.5\n", ValueError),
        ('text:\n  placeholder: ""\n', RuntimeError),
        ("text: {font_size: [oops\n", RuntimeError),
    ],
)
def test_invalid_config_is_rejected(isolated_config: Path, body: str, exc: type):
    explicit = isolated_config / "bad.yaml"
    explicit.write_text(body, encoding="utf-8")
    set_config_path(explicit)
    with pytest.raises(exc):
        runtime_config()


def test_merge_sections_is_shallow_per_section():
    base = {"version": 1, "text": {"a": 1, "b": 2}, "window": {"fps": 60}}
    merged = _merge_sections(base, {"text": {"b": 3}, "window": None})
    assert merged == {"version": 1, "text": {"a": 1, "b": 3}, "window": None}
    assert base["text"] == {"a": 1, "b": 2}
