"""Tests for stage argument parsing."""

from __future__ import annotations

import pytest

from lsearch.content.loaders import ContentLoader, LoaderKind
from lsearch.content.scorers import ScorerKind, ScorerSpec
from lsearch.errors import ConfigurationError
from lsearch.pipeline.parser import ParsedArg, build_stages, parse_stages, tokenize


class TestTokenize:
    """Test tokenize function."""

    def test_long_flags_and_values(self) -> None:
        parsed = tokenize(["--content-text", "--has", "foo"])

        assert parsed == [ParsedArg("content-text"), ParsedArg("has", "foo")]

    def test_short_bundle(self) -> None:
        """Bundled short flags expand in order; the value binds to the last."""
        parsed = tokenize(["-ti", "-m", "bar"])

        assert parsed == [
            ParsedArg("content-text"),
            ParsedArg("insensitive"),
            ParsedArg("more", "bar"),
        ]

    def test_equals_value(self) -> None:
        assert tokenize(["--is=readme"]) == [ParsedArg("is", "readme")]

    def test_empty_value(self) -> None:
        assert tokenize(["--is", ""]) == [ParsedArg("is", "")]

    def test_unknown_long(self) -> None:
        with pytest.raises(ConfigurationError, match="--less"):
            tokenize(["--less", "x"])

    def test_unknown_short(self) -> None:
        with pytest.raises(ConfigurationError, match="-z"):
            tokenize(["-tz"])

    def test_value_without_flag(self) -> None:
        with pytest.raises(ConfigurationError):
            tokenize(["orphan"])

    def test_second_value_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="already has"):
            tokenize(["--has", "a", "b"])


class TestBuildStages:
    """Test build_stages function."""

    def test_implicit_title_stage(self) -> None:
        """Scorers before any loader flag apply to a case-insensitive title stage."""
        stages = parse_stages(["--has", "Read"])

        assert len(stages) == 1
        assert stages[0].loader == ContentLoader(LoaderKind.TITLE)
        assert stages[0].case_insensitive is True
        assert stages[0].scorers == (ScorerSpec(ScorerKind.HAS, "Read"),)

    def test_loader_flags_open_stages(self) -> None:
        stages = parse_stages(["-E", "-e", "txt", "-t", "-i", "-m", "foo", "-H", "bar"])

        assert [stage.loader.kind for stage in stages] == [LoaderKind.EXTENSION, LoaderKind.TEXT]
        assert stages[0].case_insensitive is False
        assert stages[1].case_insensitive is True
        assert stages[1].scorers == (
            ScorerSpec(ScorerKind.MORE, "foo"),
            ScorerSpec(ScorerKind.HASNT, "bar"),
        )

    def test_stages_without_scorers_dropped(self) -> None:
        """A loader flag with nothing to check adds no stage."""
        stages = parse_stages(["-T", "-P", "--not", "/tmp"])

        assert len(stages) == 1
        assert stages[0].loader.kind is LoaderKind.PATH

    def test_no_args(self) -> None:
        assert parse_stages([]) == []

    def test_exec_loader_command(self) -> None:
        stages = parse_stages(["-C", "file -b", "-h", "ASCII"])

        assert stages[0].loader == ContentLoader(LoaderKind.EXEC, "file -b")

    def test_exec_loader_requires_command(self) -> None:
        with pytest.raises(ConfigurationError, match="requires a command"):
            parse_stages(["--content-exec", "--has", "x"])

    def test_scorer_requires_target(self) -> None:
        with pytest.raises(ConfigurationError, match="requires a target"):
            parse_stages(["-t", "--more"])

    def test_exec_scorer_requires_command(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_stages(["-t", "--exec", " "])

    def test_loader_value_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="takes no value"):
            build_stages([ParsedArg("content-text", "oops")])

    def test_insensitive_value_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            parse_stages(["-i", "oops"])
