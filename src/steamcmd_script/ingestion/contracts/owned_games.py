"""
Data contracts for the Steam owned games API.
"""

from pydantic import BaseModel, Field

from steamcmd_script.ingestion.contracts.game_entry import GameEntry, GameSource


class OwnedGame(BaseModel):
    """Single game from GetOwnedGames (with include_appinfo)."""

    appid: int = Field(..., gt=0, description="Steam application ID")
    name: str = Field(default="", description="Game title")


class OwnedGamesPayload(BaseModel):
    """
    Response body of the owned games endpoint.

    Endpoint: IPlayerService/GetOwnedGames/v1/
    """

    game_count: int = Field(default=0, ge=0)
    games: list[OwnedGame] = Field(default_factory=list)

    def to_entries(self) -> list[GameEntry]:
        """Convert owned games to script entries."""
        return [
            GameEntry(app_id=game.appid, title=game.name, source=GameSource.OWNED)
            for game in self.games
        ]


class OwnedGamesAPIResponse(BaseModel):
    """Wrapper for owned games API response."""

    response: OwnedGamesPayload
