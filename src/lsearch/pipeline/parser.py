"""Turn stage arguments such as ``-T --has foo -t -m bar`` into stages.

Loader flags open a new stage, ``-i`` makes the current stage case
insensitive and scorer flags append a check that takes the following word
as its target. Scorers given before any loader flag belong to an implicit,
case-insensitive title stage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping

from lsearch.content.loaders import ContentLoader, LoaderKind
from lsearch.content.scorers import ScorerKind, ScorerSpec
from lsearch.errors import ConfigurationError
from lsearch.pipeline.stage import Stage

LOGGER = logging.getLogger(__name__)

INSENSITIVE = "insensitive"

# long name -> short letter
STAGE_FLAGS: Mapping[str, str] = MappingProxyType(
    {
        "content-title": "T",
        "content-path": "P",
        "content-ext": "E",
        "content-text": "t",
        "content-exec": "C",
        INSENSITIVE: "i",
        "is": "e",
        "not": "n",
        "has": "h",
        "hasnt": "H",
        "more": "m",
        "exec": "x",
    }
)

_SHORT_FLAGS: Mapping[str, str] = MappingProxyType(
    {short: long for long, short in STAGE_FLAGS.items()}
)

LOADER_FLAGS: Mapping[str, LoaderKind] = MappingProxyType(
    {
        "content-title": LoaderKind.TITLE,
        "content-path": LoaderKind.PATH,
        "content-ext": LoaderKind.EXTENSION,
        "content-text": LoaderKind.TEXT,
        "content-exec": LoaderKind.EXEC,
    }
)

SCORER_FLAGS: Mapping[str, ScorerKind] = MappingProxyType(
    {
        "is": ScorerKind.IS,
        "not": ScorerKind.NOT,
        "has": ScorerKind.HAS,
        "hasnt": ScorerKind.HASNT,
        "more": ScorerKind.MORE,
        "exec": ScorerKind.EXEC,
    }
)


@dataclass(slots=True)
class ParsedArg:
    long: str
    value: str | None = None


def tokenize(args: Iterable[str]) -> List[ParsedArg]:
    """Split raw arguments into flags, attaching each bare word to the flag before it."""
    parsed: List[ParsedArg] = []
    for arg in args:
        if arg.startswith("--") and len(arg) > 2:
            name, sep, value = arg[2:].partition("=")
            if name not in STAGE_FLAGS:
                raise ConfigurationError(f"Unknown option: --{name}")
            parsed.append(ParsedArg(name, value if sep else None))
        elif arg.startswith("-") and len(arg) > 1:
            for letter in arg[1:]:
                if letter not in _SHORT_FLAGS:
                    raise ConfigurationError(f"Unknown option: -{letter}")
                parsed.append(ParsedArg(_SHORT_FLAGS[letter]))
        else:
            if not parsed:
                raise ConfigurationError(f"Value {arg!r} does not follow any option")
            last = parsed[-1]
            if last.value is not None:
                raise ConfigurationError(
                    f"Option --{last.long} already has the value {last.value!r}, got {arg!r}"
                )
            last.value = arg
    return parsed


@dataclass(slots=True)
class _StageDraft:
    loader: ContentLoader
    case_insensitive: bool
    scorers: List[ScorerSpec] = field(default_factory=list)

    def freeze(self) -> Stage:
        return Stage(
            loader=self.loader,
            scorers=tuple(self.scorers),
            case_insensitive=self.case_insensitive,
        )


def build_stages(parsed: Iterable[ParsedArg]) -> List[Stage]:
    """Group parsed flags into stages, dropping those with nothing to check.

    Raises:
        ConfigurationError: a flag is missing its value or has a stray one.
    """
    stages: List[Stage] = []
    draft = _StageDraft(ContentLoader(LoaderKind.TITLE), case_insensitive=True)

    def close(current: _StageDraft) -> None:
        stage = current.freeze()
        if stage.is_valid:
            stages.append(stage)
        else:
            LOGGER.debug("Dropping %s stage without checks", stage.name)

    for arg in parsed:
        if arg.long in LOADER_FLAGS:
            kind = LOADER_FLAGS[arg.long]
            if kind is LoaderKind.EXEC:
                if not arg.value or not arg.value.strip():
                    raise ConfigurationError("--content-exec requires a command")
                loader = ContentLoader(kind, arg.value)
            else:
                if arg.value is not None:
                    raise ConfigurationError(
                        f"--{arg.long} takes no value, got {arg.value!r}"
                    )
                loader = ContentLoader(kind)
            close(draft)
            draft = _StageDraft(loader, case_insensitive=False)
        elif arg.long == INSENSITIVE:
            if arg.value is not None:
                raise ConfigurationError(f"--{INSENSITIVE} takes no value, got {arg.value!r}")
            draft.case_insensitive = True
        else:
            kind = SCORER_FLAGS[arg.long]
            if arg.value is None:
                raise ConfigurationError(f"--{arg.long} requires a target")
            if kind is ScorerKind.EXEC and not arg.value.strip():
                raise ConfigurationError("--exec requires a command")
            draft.scorers.append(ScorerSpec(kind, arg.value))

    close(draft)
    return stages


def parse_stages(args: Iterable[str]) -> List[Stage]:
    return build_stages(tokenize(args))
