"""A single inspection stage: one loader, an ordered chain of scorers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from lsearch.content.loaders import ContentLoader, LoaderKind
from lsearch.content.scorers import PASS_THRESHOLD, ScorerKind, ScorerSpec
from lsearch.errors import LoadError, ScorerError
from lsearch.models import Entry
from lsearch.pipeline.stats import StageStats

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def ascii_lower(text: str) -> str:
    """Lowercase ASCII letters only, leaving other characters untouched."""
    return text.translate(_ASCII_LOWER)


@dataclass(frozen=True, slots=True)
class Stage:
    loader: ContentLoader
    scorers: Tuple[ScorerSpec, ...] = ()
    case_insensitive: bool = False

    @property
    def is_valid(self) -> bool:
        """A stage made only of ``Pass`` scorers does nothing and is dropped."""
        return any(spec.kind is not ScorerKind.PASS for spec in self.scorers)

    @property
    def name(self) -> str:
        return self.loader.name

    def evaluate(self, entry: Entry, stats: StageStats | None = None) -> float | None:
        """Score ``entry``; ``None`` means it was filtered out.

        The loader runs once. Scorers run in declared order and the first one
        scoring below the pass threshold stops the chain.

        Raises:
            LoadError: the content could not be loaded or inspected.
        """
        content = self.loader.load(entry)
        if self.case_insensitive:
            content = ascii_lower(content)

        total = 0.0
        for spec in self.scorers:
            target = spec.target
            # Exec targets are command lines, not text to compare against
            if self.case_insensitive and spec.kind is not ScorerKind.EXEC:
                target = ascii_lower(target)
            try:
                if stats is None:
                    score = spec.score(content, target)
                else:
                    with stats.time_operation(spec.key, len(content)):
                        score = spec.score(content, target)
            except ScorerError as exc:
                raise LoadError(entry.path, str(exc)) from exc
            total += score
            if score < PASS_THRESHOLD:
                return None
        return total


def default_stage() -> Stage:
    """Pass-through stage used when no valid stage was requested."""
    return Stage(
        loader=ContentLoader(LoaderKind.TITLE),
        scorers=(ScorerSpec(ScorerKind.PASS),),
        case_insensitive=True,
    )
