"""Gallery presets — named patterns generated on demand from fixed parameters."""

from __future__ import annotations

from dataclasses import dataclass

from kolam.engine.config import EngineConfig
from kolam.engine.generator import GenerateParams, generate, make_params
from kolam.engine.grid import make_grid
from kolam.engine.pattern import Pattern, PatternStyle


@dataclass(frozen=True)
class Preset:
    id: str
    name: str
    description: str
    params: GenerateParams


_PRESETS: tuple[Preset, ...] = (
    Preset(
        id="lotus-sikku",
        name="Lotus Sikku",
        description="One unbroken stroke winding around a seven-dot walk.",
        params=make_params(PatternStyle.SIKKU, make_grid(5, 5, 20.0), iterations=7, seed=3),
    ),
    Preset(
        id="temple-sikku",
        name="Temple Sikku",
        description="A longer single-stroke walk across a wide grid.",
        params=make_params(PatternStyle.SIKKU, make_grid(5, 7, 20.0), iterations=15, seed=11),
    ),
    Preset(
        id="nine-dot-pulli",
        name="Nine Dot Pulli",
        description="Double loops around each dot of a 3x3 grid.",
        params=make_params(PatternStyle.PULLI, make_grid(3, 3, 30.0), iterations=2, seed=1),
    ),
    Preset(
        id="kolam-grid-pulli",
        name="Kolam Grid",
        description="Single loops on a 4x4 grid, mirrored across both axes.",
        params=make_params(PatternStyle.PULLI, make_grid(4, 4, 25.0), iterations=1, seed=7),
    ),
    Preset(
        id="leaf-kambi",
        name="Scattered Leaves",
        description="Leaf strokes placed at seeded dots and orientations.",
        params=make_params(PatternStyle.KAMBI, make_grid(4, 4, 25.0), iterations=6, seed=5),
    ),
    Preset(
        id="steps-padi",
        name="Padi Steps",
        description="Five nested layers growing geometrically from the centre.",
        params=make_params(PatternStyle.PADI, make_grid(5, 5, 20.0), iterations=5, seed=2),
    ),
)


def list_presets(style: PatternStyle | str | None = None) -> list[Preset]:
    if style is None:
        return list(_PRESETS)
    wanted = PatternStyle(style)
    return [p for p in _PRESETS if p.params.style is wanted]


def get_preset(preset_id: str) -> Preset:
    for preset in _PRESETS:
        if preset.id == preset_id:
            return preset
    raise KeyError(f"No gallery preset {preset_id!r}")


def render_preset(preset_id: str, config: EngineConfig | None = None) -> Pattern:
    return generate(get_preset(preset_id).params, config)
