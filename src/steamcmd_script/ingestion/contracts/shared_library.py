"""
Data contracts for shared library (Steam Family) API responses.

Both the family group endpoint and the lender aggregation service
answer with the same ``response.apps`` shape.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from steamcmd_script.ingestion.contracts.game_entry import GameEntry, GameSource


class SharedLibraryApp(BaseModel):
    """App made available through library sharing."""

    appid: int = Field(..., gt=0, description="Steam application ID")
    name: str | None = Field(default=None, description="Title, when the service provides it")

    @field_validator("name")
    @classmethod
    def blank_name_as_none(cls, v: str | None) -> str | None:
        """Some responses carry an empty name instead of omitting it."""
        if v is not None and not v.strip():
            return None
        return v


class SharedLibraryAppsPayload(BaseModel):
    """
    Response body of the shared library apps endpoint.

    Endpoint: IFamilyGroupsService/GetSharedLibraryApps/v1/
    """

    apps: list[SharedLibraryApp] = Field(default_factory=list)

    @field_validator("apps", mode="before")
    @classmethod
    def null_apps_as_empty(cls, v: Any) -> Any:
        """A null apps list means nothing is shared."""
        return [] if v is None else v

    def to_entries(self) -> list[GameEntry]:
        """Convert shared apps to script entries."""
        return [
            GameEntry(app_id=app.appid, title=app.name, source=GameSource.SHARED)
            for app in self.apps
        ]


class SharedLibraryAppsAPIResponse(BaseModel):
    """Wrapper for shared library apps API response."""

    response: SharedLibraryAppsPayload = Field(default_factory=SharedLibraryAppsPayload)

    @field_validator("response", mode="before")
    @classmethod
    def null_response_as_empty(cls, v: Any) -> Any:
        return {} if v is None else v
