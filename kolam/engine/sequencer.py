"""Step sequencer — orders a pattern's segments into replayable construction steps.

The sequence is a finite tuple: any scheduling layer can step through it
at its own cadence and restart from the beginning.
"""

from __future__ import annotations

import logging
from collections import Counter

from kolam.engine.config import EngineConfig
from kolam.errors import SequenceIntegrityError
from kolam.engine.pattern import ConstructionStep, Pattern, PatternStyle, SegmentRef

logger = logging.getLogger(__name__)

_PATH_NOUN = {
    PatternStyle.PULLI: "loop",
    PatternStyle.KAMBI: "motif",
    PatternStyle.PADI: "layer",
    PatternStyle.SIKKU: "stroke",
}


def _describe_path(pattern: Pattern, path_idx: int) -> str:
    path = pattern.paths[path_idx]
    noun = _PATH_NOUN[pattern.style]
    shape = "closed" if path.closed else "open"
    count = len(path.segments)
    return f"Draw {noun} {path_idx + 1} of {len(pattern.paths)} ({shape}, {count} segments)"


def _stroke_steps(pattern: Pattern, path_idx: int, chunk: int) -> list[tuple[list[SegmentRef], str]]:
    """Split one continuous stroke into chunks, keeping traversal order."""
    total = len(pattern.paths[path_idx].segments)
    steps = []
    for begin in range(0, total, chunk):
        end = min(begin + chunk, total)
        refs = [SegmentRef(path_idx, i) for i in range(begin, end)]
        verb = "Start" if begin == 0 else "Continue"
        tail = " and close the stroke" if end == total and pattern.paths[path_idx].closed else ""
        steps.append((refs, f"{verb} the line through segments {begin + 1}-{end} of {total}{tail}"))
    return steps


def check_coverage(pattern: Pattern, steps: tuple[ConstructionStep, ...]) -> None:
    """Every segment must appear in exactly one step."""
    counts = Counter(ref for step in steps for ref in step.segment_refs)
    expected = set(pattern.segment_refs())
    duplicated = sorted(ref for ref, n in counts.items() if n > 1)
    missing = sorted(expected - counts.keys())
    unknown = sorted(counts.keys() - expected)
    if duplicated or missing or unknown:
        raise SequenceIntegrityError(
            f"Steps for {pattern.id} do not cover the pattern exactly once: "
            f"{len(duplicated)} duplicated, {len(missing)} missing, {len(unknown)} unknown"
        )
    for i, step in enumerate(steps):
        if step.index != i:
            raise SequenceIntegrityError(f"Step {i} is numbered {step.index}")


def sequence(pattern: Pattern, config: EngineConfig | None = None) -> tuple[ConstructionStep, ...]:
    """Ordered construction steps covering every segment exactly once.

    One step per path in pattern order; Sikku strokes are split into chunks
    of ``segments_per_step`` following their traversal order.
    """
    config = config or EngineConfig()
    chunk = max(1, config.segments_per_step)

    raw: list[tuple[list[SegmentRef], str]] = []
    for p, path in enumerate(pattern.paths):
        if not path.segments:
            continue
        if pattern.style is PatternStyle.SIKKU:
            raw.extend(_stroke_steps(pattern, p, chunk))
        else:
            refs = [SegmentRef(p, i) for i in range(len(path.segments))]
            raw.append((refs, _describe_path(pattern, p)))

    steps = tuple(
        ConstructionStep(index=i, segment_refs=frozenset(refs), description=text)
        for i, (refs, text) in enumerate(raw)
    )
    check_coverage(pattern, steps)
    logger.debug("Sequenced %s into %d steps", pattern.id, len(steps))
    return steps


def ordered_refs(step: ConstructionStep) -> list[SegmentRef]:
    """Segment refs of a step in drawing order."""
    return sorted(step.segment_refs)
