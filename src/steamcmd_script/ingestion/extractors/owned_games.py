"""
Steam owned games extractor.

Fetches the full list of games owned by an account from
IPlayerService/GetOwnedGames. Requires a Steam API key.
"""

import time
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from steamcmd_script.config import get_settings
from steamcmd_script.ingestion.contracts import OwnedGamesAPIResponse, OwnedGamesPayload
from steamcmd_script.ingestion.extractors.base import (
    BaseExtractor,
    ExtractionError,
    ExtractionResult,
    ValidationError,
)


class OwnedGamesExtractor(BaseExtractor[OwnedGamesPayload]):
    """
    Extractor for the Steam owned games API.

    Example:
        >>> async with OwnedGamesExtractor() as extractor:
        ...     result = await extractor.extract(steam_id="76561197960287930")
        ...     if result.success:
        ...         print(f"Owned games: {len(result.data.games)}")
    """

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize owned games extractor.

        Args:
            **kwargs: Arguments passed to BaseExtractor
        """
        super().__init__(**kwargs)
        settings = get_settings()
        self._base_url = settings.steam.base_url
        self._api_key = settings.steam.api_key.get_secret_value()

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "steam_owned_games_api"

    def _build_url(self) -> str:
        """Build API URL for owned games."""
        return f"{self._base_url}/IPlayerService/GetOwnedGames/v1/"

    def _parse_response(self, raw_data: dict[str, Any]) -> OwnedGamesPayload:
        """
        Parse and validate owned games API response.

        Args:
            raw_data: Raw JSON response from API

        Returns:
            OwnedGamesPayload: Validated owned games

        Raises:
            ValidationError: If response doesn't match expected schema
        """
        try:
            wrapper = OwnedGamesAPIResponse.model_validate(raw_data)
            return wrapper.response
        except PydanticValidationError as e:
            raise ValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
            ) from e

    async def extract(self, steam_id: str) -> ExtractionResult[OwnedGamesPayload]:
        """
        Extract the games owned by an account.

        Args:
            steam_id: SteamID64 of the account

        Returns:
            ExtractionResult[OwnedGamesPayload]: Extraction result with metadata
        """
        url = self._build_url()
        endpoint = f"{url}?steamid={steam_id}"
        start_time = time.perf_counter()

        self._logger.info("Starting owned games extraction", steam_id=steam_id)

        try:
            response = await self._make_request(
                "GET",
                url,
                params={
                    "key": self._api_key,
                    "steamid": steam_id,
                    "include_appinfo": "true",
                    "include_played_free_games": "true",
                },
            )

            raw_data = self._decode_json(response)
            owned = self._parse_response(raw_data)
            duration_ms = (time.perf_counter() - start_time) * 1000

            self._logger.info(
                "Owned games extraction successful",
                steam_id=steam_id,
                game_count=len(owned.games),
                duration_ms=round(duration_ms, 2),
            )

            return ExtractionResult(
                success=True,
                data=owned,
                source=self.source_name,
                endpoint=endpoint,
                duration_ms=duration_ms,
                extracted_at=datetime.now(timezone.utc),
            )

        except ValidationError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._logger.error("Validation failed", steam_id=steam_id, error=str(e))
            return ExtractionResult(
                success=False,
                error_message=str(e),
                source=self.source_name,
                endpoint=endpoint,
                duration_ms=duration_ms,
            )

        except ExtractionError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._logger.error(
                "Extraction failed",
                steam_id=steam_id,
                error=str(e),
                status_code=e.status_code,
            )
            return ExtractionResult(
                success=False,
                error_message=str(e),
                source=self.source_name,
                endpoint=endpoint,
                duration_ms=duration_ms,
            )
