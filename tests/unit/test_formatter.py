"""Tests for script formatting."""

import io

from steamcmd_script.ingestion.contracts import GameEntry, GameSource
from steamcmd_script.output import (
    OutputSink,
    SkipList,
    emit_section,
    format_entry,
    select_entries,
    store_page_url,
)


def owned(app_id: int, title: str) -> GameEntry:
    return GameEntry(app_id=app_id, title=title, source=GameSource.OWNED)


def shared(app_id: int, title: str | None = None) -> GameEntry:
    return GameEntry(app_id=app_id, title=title, source=GameSource.SHARED)


class TestFormatEntry:
    """Tests for rendering one entry."""

    def test_owned_entry(self) -> None:
        """Test comment and command lines."""
        text = format_entry(owned(570, "Dota 2"))

        assert text == ("// Dota 2 - https://store.steampowered.com/app/570\napp_update 570\n")

    def test_validate_suffix(self) -> None:
        """Test the -validate suffix."""
        text = format_entry(owned(570, "Dota 2"), validate=True)

        assert text.splitlines()[1] == "app_update 570 -validate"

    def test_shared_entry_with_title(self) -> None:
        """Test that titled shared entries look like owned ones."""
        text = format_entry(shared(413150, "Stardew Valley"))

        assert text.splitlines()[0] == (
            "// Stardew Valley - https://store.steampowered.com/app/413150"
        )

    def test_shared_entry_without_title(self) -> None:
        """Test the tag used when the title is unknown."""
        text = format_entry(shared(413150))

        assert text == (
            "// [shared library] - https://store.steampowered.com/app/413150\n"
            "app_update 413150\n"
        )

    def test_custom_store_url(self) -> None:
        """Test a store URL with a trailing slash."""
        assert store_page_url(10, "https://store.example/") == "https://store.example/app/10"


class TestSelectEntries:
    """Tests for filtering and ordering."""

    def test_sorted_by_app_id(self) -> None:
        """Test ascending numeric order (not lexical)."""
        entries = [owned(1000, "C"), owned(20, "B"), owned(3, "A")]

        assert [e.app_id for e in select_entries(entries, SkipList())] == [3, 20, 1000]

    def test_skip_by_id_and_title(self) -> None:
        """Test that skipped entries are dropped."""
        entries = [owned(10, "A"), owned(20, "B"), owned(30, "C")]

        selected = select_entries(entries, SkipList.parse("20,C"))

        assert selected == [owned(10, "A")]


class TestEmitSection:
    """Tests for writing a section."""

    def test_skip_example(self) -> None:
        """Test owned games 20/B and 10/A with skip list "20"."""
        stream = io.StringIO()
        entries = [owned(20, "B"), owned(10, "A")]

        written = emit_section(OutputSink(stream), entries, SkipList.parse("20"))

        assert written == 1
        assert stream.getvalue() == (
            "// A - https://store.steampowered.com/app/10\napp_update 10\n"
        )

    def test_every_command_validated(self) -> None:
        """Test that the flag applies to every command line."""
        stream = io.StringIO()
        entries = [owned(1, "A"), shared(2), owned(3, "C")]

        emit_section(OutputSink(stream), entries, SkipList(), validate=True)

        commands = [line for line in stream.getvalue().splitlines() if line.startswith("app_")]
        assert len(commands) == 3
        assert all(line.endswith(" -validate") for line in commands)

    def test_no_validate_suffix_by_default(self) -> None:
        """Test that no command carries the flag when it is off."""
        stream = io.StringIO()

        emit_section(OutputSink(stream), [owned(1, "A"), shared(2)], SkipList())

        assert "-validate" not in stream.getvalue()

    def test_empty_section(self) -> None:
        """Test that nothing is written for an empty list."""
        stream = io.StringIO()

        assert emit_section(OutputSink(stream), [], SkipList()) == 0
        assert stream.getvalue() == ""
