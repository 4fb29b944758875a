"""Strategies for turning an entry into a string.

Every loader is a plain function ``(entry, command) -> str``; the
``ContentLoader`` value binds one of them to a stage.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Callable, Mapping

from lsearch.errors import LoadError
from lsearch.models import Entry

LOGGER = logging.getLogger(__name__)


class LoaderKind(str, Enum):
    TITLE = "Title"
    PATH = "Path"
    EXTENSION = "Extension"
    TEXT = "Text"
    EXEC = "Exec"


def load_title(entry: Entry, command: str | None = None) -> str:
    return entry.name


def load_path(entry: Entry, command: str | None = None) -> str:
    return str(entry.path)


def load_extension(entry: Entry, command: str | None = None) -> str:
    _, dot, extension = entry.path.name.rpartition(".")
    return extension if dot else ""


def load_text(entry: Entry, command: str | None = None) -> str:
    """Read the entry as UTF-8 text; directories load as an empty string."""
    if entry.is_dir:
        return ""
    try:
        data = entry.path.read_bytes()
    except OSError as exc:
        raise LoadError(entry.path, f"cannot read: {exc}") from exc
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LoadError(entry.path, "not valid UTF-8 text") from exc


def load_exec(entry: Entry, command: str | None = None) -> str:
    """Run ``command`` with the entry's file name appended and return its stdout.

    The process runs inside the entry's parent directory so the bare file
    name resolves. Its exit status is ignored.
    """
    if not command:
        raise LoadError(entry.path, "no command to execute")
    argv = command.split() + [entry.path.name]
    LOGGER.debug("Running %s", argv)
    try:
        completed = subprocess.run(
            argv,
            cwd=entry.path.parent,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        raise LoadError(entry.path, f"cannot run {argv[0]!r}: {exc}") from exc
    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise LoadError(entry.path, f"output of {argv[0]!r} is not valid UTF-8") from exc


_LOADERS: Mapping[LoaderKind, Callable[[Entry, str | None], str]] = MappingProxyType(
    {
        LoaderKind.TITLE: load_title,
        LoaderKind.PATH: load_path,
        LoaderKind.EXTENSION: load_extension,
        LoaderKind.TEXT: load_text,
        LoaderKind.EXEC: load_exec,
    }
)


@dataclass(frozen=True, slots=True)
class ContentLoader:
    """A loader kind plus the command it runs (``Exec`` only)."""

    kind: LoaderKind
    command: str | None = None

    @property
    def name(self) -> str:
        if self.kind is LoaderKind.EXEC:
            return f"{self.kind.value}({self.command})"
        return self.kind.value

    def load(self, entry: Entry) -> str:
        return _LOADERS[self.kind](entry, self.command)
