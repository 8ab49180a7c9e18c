"""Tests for gallery presets."""

import pytest

from kolam.engine.gallery import get_preset, list_presets, render_preset
from kolam.engine.pattern import PatternStyle


def test_every_style_has_a_preset():
    styles = {p.params.style for p in list_presets()}
    assert styles == set(PatternStyle)


def test_filter_by_style():
    presets = list_presets("sikku")
    assert presets
    assert all(p.params.style is PatternStyle.SIKKU for p in presets)


@pytest.mark.parametrize("preset", list_presets(), ids=lambda p: p.id)
def test_presets_render(preset):
    pattern = render_preset(preset.id)
    assert pattern.style is preset.params.style
    assert pattern.segment_count > 0
    assert render_preset(preset.id) == pattern


def test_unknown_preset():
    with pytest.raises(KeyError):
        get_preset("missing")
