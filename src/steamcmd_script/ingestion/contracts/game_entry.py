"""
Script entry shared by the owned and shared library sections.
"""

from dataclasses import dataclass
from enum import Enum


class GameSource(str, Enum):
    """Where an entry came from."""

    OWNED = "owned"
    SHARED = "shared"


@dataclass(frozen=True)
class GameEntry:
    """A game to emit an app_update command for."""

    app_id: int
    title: str | None
    source: GameSource
