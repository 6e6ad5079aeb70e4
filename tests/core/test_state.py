"""TextState / EffectState / ScrollGate のテスト群。"""

from __future__ import annotations

import pytest

from glyphfield.core.state import EffectState, ScrollGate, TextState


def test_text_state_appends_up_to_max_length() -> None:
    state = TextState(max_length=3)
    assert state.append("a")
    assert state.append("b")
    assert state.append("c")
    assert not state.append("d")
    assert state.content == "abc"


def test_text_state_delete_on_empty_is_noop() -> None:
    state = TextState(content="x")
    assert state.delete_last()
    assert state.content == ""
    assert not state.delete_last()
    assert state.content == ""


def test_effect_state_cycles_modulo() -> None:
    state = EffectState(n_effects=9, effect_index=8)
    assert state.cycle() == 0
    for _ in range(9):
        state.cycle()
    assert state.effect_index == 0


def test_effect_state_clamps_density_at_both_ends() -> None:
    state = EffectState(n_effects=9, density=0.06)
    assert state.adjust_density(-0.01)
    assert state.density == pytest.approx(0.05)
    assert not state.adjust_density(-0.01)
    assert state.density == pytest.approx(0.05)

    state = EffectState(n_effects=9, density=0.19)
    assert state.adjust_density(+0.01)
    assert state.density == pytest.approx(0.2)
    assert not state.adjust_density(+0.01)


def test_effect_state_steps_do_not_drift() -> None:
    state = EffectState(n_effects=9, density=0.1)
    for _ in range(5):
        state.adjust_density(-0.01)
    for _ in range(5):
        state.adjust_density(+0.01)
    assert state.density == 0.1


def test_effect_state_validates_inputs() -> None:
    with pytest.raises(ValueError):
        EffectState(n_effects=0)
    state = EffectState(n_effects=9, effect_index=11, density=1.0)
    assert state.effect_index == 2
    assert state.density == 0.2


def test_scroll_gate_threshold_is_half_viewport() -> None:
    gate = ScrollGate(viewport_height=800.0)
    assert gate.interactive
    gate.scroll_by(399.0)
    assert gate.interactive
    gate.scroll_by(1.0)
    assert not gate.interactive
    gate.scroll_by(-1.0)
    assert gate.interactive


def test_scroll_gate_clamps_to_page() -> None:
    gate = ScrollGate(viewport_height=800.0, page_height_ratio=2.0)
    gate.scroll_by(-100.0)
    assert gate.scroll_y == 0.0
    gate.scroll_by(10_000.0)
    assert gate.scroll_y == 800.0


def test_scroll_gate_resize_reclamps() -> None:
    gate = ScrollGate(viewport_height=800.0)
    gate.scroll_by(800.0)
    gate.resize(300.0)
    assert gate.scroll_y == 300.0
    assert not gate.interactive
