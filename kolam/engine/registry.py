"""Style registry — every style generator is a standalone function registered via decorator.

Usage:
    @style(PatternStyle.PULLI, description="Loops around each dot")
    def pulli(params: GenerateParams, rng: random.Random, config: EngineConfig) -> list[Path]:
        ...

Adding a style = creating one module with the decorator. Nothing else changes.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from kolam.engine.pattern import PatternStyle

if TYPE_CHECKING:
    from kolam.engine.config import EngineConfig
    from kolam.engine.generator import GenerateParams
    from kolam.svg.primitives import Path

logger = logging.getLogger(__name__)

StyleFn = Callable[["GenerateParams", random.Random, "EngineConfig"], "list[Path]"]


@dataclass
class StyleSpec:
    style: PatternStyle
    fn: StyleFn
    description: str = ""


class StyleRegistry:
    """Registry of style generators keyed by PatternStyle."""

    def __init__(self) -> None:
        self._styles: dict[PatternStyle, StyleSpec] = {}

    def register(self, spec: StyleSpec) -> None:
        if spec.style in self._styles:
            raise ValueError(f"Duplicate style generator: {spec.style.value}")
        self._styles[spec.style] = spec
        logger.debug("Registered style %s", spec.style.value)

    def get(self, style: PatternStyle) -> StyleSpec:
        try:
            return self._styles[style]
        except KeyError:
            raise KeyError(f"No generator registered for style {style.value!r}") from None

    def all(self) -> list[StyleSpec]:
        return sorted(self._styles.values(), key=lambda s: s.style.value)

    @property
    def count(self) -> int:
        return len(self._styles)


# Module-level singleton
_registry = StyleRegistry()


def get_registry() -> StyleRegistry:
    return _registry


def style(pattern_style: PatternStyle, *, description: str = ""):
    """Decorator to register a style generator."""

    def decorator(fn: StyleFn) -> StyleFn:
        _registry.register(StyleSpec(style=pattern_style, fn=fn, description=description))
        return fn

    return decorator
