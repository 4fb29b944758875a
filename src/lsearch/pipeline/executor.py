"""Runs entries through a sequence of stages, narrowing and re-ranking."""

from __future__ import annotations

import logging
from contextlib import nullcontext
from typing import Iterable, List, Sequence

from lsearch.errors import LoadError
from lsearch.models import Entry, ScoredEntry
from lsearch.pipeline.stage import Stage, default_stage
from lsearch.pipeline.stats import RunStatistics, StageStats

LOGGER = logging.getLogger(__name__)


def active_stages(stages: Sequence[Stage]) -> List[Stage]:
    """Drop stages that would do nothing, falling back to a pass-through stage."""
    valid = [stage for stage in stages if stage.is_valid]
    if not valid:
        return [default_stage()]
    return valid


class Pipeline:
    """Threads an entry set through an ordered list of stages."""

    def __init__(self, stages: Sequence[Stage]) -> None:
        self.stages = active_stages(stages)

    def run(
        self, entries: Iterable[Entry], *, stats: RunStatistics | None = None
    ) -> List[ScoredEntry]:
        """Return the survivors of every stage, highest score first.

        Scores are recomputed from zero in each stage. Ties keep no
        particular order.
        """
        current = [ScoredEntry(1.0, entry) for entry in entries]
        LOGGER.debug("Starting pipeline with %d entries", len(current))

        for stage in self.stages:
            stage_stats = None
            if stats is not None:
                stage_stats = stats.add_stage(stage.name, [spec.key for spec in stage.scorers])
            current = self._run_stage(stage, current, stage_stats)
            LOGGER.debug("%s kept %d entries", stage.name, len(current))

        return current

    def _run_stage(
        self,
        stage: Stage,
        scored: List[ScoredEntry],
        stage_stats: StageStats | None,
    ) -> List[ScoredEntry]:
        survivors: List[ScoredEntry] = []
        timer = stage_stats.time_stage() if stage_stats is not None else nullcontext()

        with timer:
            for item in scored:
                try:
                    score = stage.evaluate(item.entry, stage_stats)
                except LoadError as exc:
                    LOGGER.debug("Skipping %s", exc)
                    continue
                if score is not None:
                    survivors.append(ScoredEntry(score, item.entry))

        survivors.sort(key=lambda item: item.score, reverse=True)
        return survivors
