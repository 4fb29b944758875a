"""Scorers that rate loaded content against a target string.

A score of at least ``PASS_THRESHOLD`` means the entry passed the check.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping

from lsearch.errors import ScorerError

LOGGER = logging.getLogger(__name__)

PASS_THRESHOLD = 1.0


class ScorerKind(str, Enum):
    IS = "Is"
    NOT = "Not"
    HAS = "Has"
    HASNT = "Hasnt"
    MORE = "More"
    PASS = "Pass"
    EXEC = "Exec"


def _flag(passed: bool) -> float:
    return 1.0 if passed else 0.0


def score_is(content: str, target: str) -> float:
    return _flag(content == target)


def score_not(content: str, target: str) -> float:
    return _flag(content != target)


def score_has(content: str, target: str) -> float:
    return _flag(target in content)


def score_hasnt(content: str, target: str) -> float:
    return _flag(target not in content)


def score_more(content: str, target: str) -> float:
    """One plus the number of non-overlapping occurrences of ``target``."""
    return 1.0 + content.count(target)


def score_pass(content: str, target: str) -> float:
    return 1.0


def score_exec(content: str, target: str) -> float:
    """Pipe ``content`` into the ``target`` command; pass on exit status 0."""
    argv = target.split()
    if not argv:
        raise ScorerError("no command to execute")
    LOGGER.debug("Running %s", argv)
    try:
        completed = subprocess.run(
            argv,
            input=content.encode("utf-8"),
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        raise ScorerError(f"cannot run {argv[0]!r}: {exc}") from exc
    return _flag(completed.returncode == 0)


_SCORERS: Mapping[ScorerKind, Callable[[str, str], float]] = MappingProxyType(
    {
        ScorerKind.IS: score_is,
        ScorerKind.NOT: score_not,
        ScorerKind.HAS: score_has,
        ScorerKind.HASNT: score_hasnt,
        ScorerKind.MORE: score_more,
        ScorerKind.PASS: score_pass,
        ScorerKind.EXEC: score_exec,
    }
)


def create_key(name: str, target: str) -> str:
    """Statistics key for one scorer/target pair, e.g. ``More(foo)``."""
    return f"{name}({target})"


@dataclass(frozen=True, slots=True)
class ScorerSpec:
    kind: ScorerKind
    target: str = ""

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def key(self) -> str:
        return create_key(self.name, self.target)

    def score(self, content: str, target: str | None = None) -> float:
        """Score ``content``; ``target`` overrides the stored one (used for case folding)."""
        return _SCORERS[self.kind](content, self.target if target is None else target)
