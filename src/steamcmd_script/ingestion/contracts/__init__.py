"""
Data contracts for Steam API responses.

This module provides Pydantic models that define the expected
structure of data from the owned games and shared library APIs,
plus the entry type the script is generated from.
"""

from steamcmd_script.ingestion.contracts.game_entry import GameEntry, GameSource
from steamcmd_script.ingestion.contracts.owned_games import (
    OwnedGame,
    OwnedGamesAPIResponse,
    OwnedGamesPayload,
)
from steamcmd_script.ingestion.contracts.shared_library import (
    SharedLibraryApp,
    SharedLibraryAppsAPIResponse,
    SharedLibraryAppsPayload,
)

__all__ = [
    "GameEntry",
    "GameSource",
    "OwnedGame",
    "OwnedGamesAPIResponse",
    "OwnedGamesPayload",
    "SharedLibraryApp",
    "SharedLibraryAppsAPIResponse",
    "SharedLibraryAppsPayload",
]
