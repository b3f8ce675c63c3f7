"""
Script output: skip list, formatting, and destination.
"""

from steamcmd_script.output.formatter import (
    DEFAULT_STORE_URL,
    SHARED_LIBRARY_TAG,
    emit_section,
    format_entry,
    select_entries,
    store_page_url,
)
from steamcmd_script.output.sink import OutputSink
from steamcmd_script.output.skip_list import SkipList

__all__ = [
    "DEFAULT_STORE_URL",
    "SHARED_LIBRARY_TAG",
    "OutputSink",
    "SkipList",
    "emit_section",
    "format_entry",
    "select_entries",
    "store_page_url",
]
