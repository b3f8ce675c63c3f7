"""
SteamCMD script formatting.

Every game becomes a comment line pointing to its store page followed
by an ``app_update`` command.
"""

from collections.abc import Iterable

from steamcmd_script.ingestion.contracts import GameEntry, GameSource
from steamcmd_script.output.sink import OutputSink
from steamcmd_script.output.skip_list import SkipList

DEFAULT_STORE_URL = "https://store.steampowered.com"
SHARED_LIBRARY_TAG = "[shared library]"


def store_page_url(app_id: int, store_url: str = DEFAULT_STORE_URL) -> str:
    """Build the store page URL for an app."""
    return f"{store_url.rstrip('/')}/app/{app_id}"


def format_entry(
    entry: GameEntry,
    *,
    validate: bool = False,
    store_url: str = DEFAULT_STORE_URL,
) -> str:
    """
    Render one entry as its comment and command lines.

    Args:
        entry: Game to render
        validate: Append ``-validate`` to the command
        store_url: Base URL of the Steam store

    Returns:
        str: Two newline-terminated lines
    """
    url = store_page_url(entry.app_id, store_url)
    if entry.title:
        comment = f"// {entry.title} - {url}"
    elif entry.source == GameSource.SHARED:
        comment = f"// {SHARED_LIBRARY_TAG} - {url}"
    else:
        comment = f"// {url}"

    suffix = " -validate" if validate else ""
    return f"{comment}\napp_update {entry.app_id}{suffix}\n"


def select_entries(entries: Iterable[GameEntry], skip_list: SkipList) -> list[GameEntry]:
    """Drop skipped entries and sort the rest by ascending app ID."""
    kept = [entry for entry in entries if not skip_list.should_skip(entry.app_id, entry.title)]
    return sorted(kept, key=lambda entry: entry.app_id)


def emit_section(
    sink: OutputSink,
    entries: Iterable[GameEntry],
    skip_list: SkipList,
    *,
    validate: bool = False,
    store_url: str = DEFAULT_STORE_URL,
) -> int:
    """
    Write one section of the script.

    Args:
        sink: Destination for the script text
        entries: Candidate games for this section
        skip_list: Games to leave out
        validate: Append ``-validate`` to every command
        store_url: Base URL of the Steam store

    Returns:
        int: Number of games written
    """
    selected = select_entries(entries, skip_list)
    for entry in selected:
        sink.write(format_entry(entry, validate=validate, store_url=store_url))
    return len(selected)
