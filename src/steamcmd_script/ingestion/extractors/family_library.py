"""
Steam Family shared library extractor.

Fetches the apps shared with an account through its Steam Family group
from IFamilyGroupsService/GetSharedLibraryApps. Needs a store access
token, the family group ID, and the Steam API key.
"""

import time
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from steamcmd_script.config import get_settings
from steamcmd_script.ingestion.contracts import (
    SharedLibraryAppsAPIResponse,
    SharedLibraryAppsPayload,
)
from steamcmd_script.ingestion.extractors.base import (
    BaseExtractor,
    ExtractionError,
    ExtractionResult,
    ValidationError,
)


class FamilyLibraryExtractor(BaseExtractor[SharedLibraryAppsPayload]):
    """
    Extractor for the family group shared library endpoint.

    Example:
        >>> async with FamilyLibraryExtractor() as extractor:
        ...     result = await extractor.extract(
        ...         family_id="1234567", steam_id="76561197960287930"
        ...     )
    """

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize family library extractor.

        Args:
            **kwargs: Arguments passed to BaseExtractor

        Raises:
            ValueError: If no family access token is configured
        """
        super().__init__(**kwargs)
        settings = get_settings()
        if settings.family.api_token is None:
            raise ValueError("STEAM_API_TOKEN is required for the family library lookup")
        self._base_url = settings.steam.base_url
        self._api_key = settings.steam.api_key.get_secret_value()
        self._access_token = settings.family.api_token.get_secret_value()

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "steam_family_library_api"

    def _build_url(self) -> str:
        """Build API URL for shared library apps."""
        return f"{self._base_url}/IFamilyGroupsService/GetSharedLibraryApps/v1/"

    def _parse_response(self, raw_data: dict[str, Any]) -> SharedLibraryAppsPayload:
        """
        Parse and validate shared library apps response.

        Args:
            raw_data: Raw JSON response from API

        Returns:
            SharedLibraryAppsPayload: Validated shared apps

        Raises:
            ValidationError: If response doesn't match expected schema
        """
        try:
            wrapper = SharedLibraryAppsAPIResponse.model_validate(raw_data)
            return wrapper.response
        except PydanticValidationError as e:
            raise ValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
            ) from e

    async def extract(
        self,
        family_id: str,
        steam_id: str,
    ) -> ExtractionResult[SharedLibraryAppsPayload]:
        """
        Extract the apps shared with an account by its family group.

        Args:
            family_id: Steam Family group ID
            steam_id: SteamID64 of the account

        Returns:
            ExtractionResult[SharedLibraryAppsPayload]: Extraction result with metadata
        """
        url = self._build_url()
        endpoint = f"{url}?family_groupid={family_id}&steamid={steam_id}"
        start_time = time.perf_counter()

        self._logger.info(
            "Starting family library extraction",
            family_id=family_id,
            steam_id=steam_id,
        )

        try:
            response = await self._make_request(
                "GET",
                url,
                params={
                    "access_token": self._access_token,
                    "family_groupid": family_id,
                    "steamid": steam_id,
                },
                headers={"Authorization": f"Key {self._api_key}"},
            )

            raw_data = self._decode_json(response)
            shared = self._parse_response(raw_data)
            duration_ms = (time.perf_counter() - start_time) * 1000

            self._logger.info(
                "Family library extraction successful",
                family_id=family_id,
                app_count=len(shared.apps),
                duration_ms=round(duration_ms, 2),
            )

            return ExtractionResult(
                success=True,
                data=shared,
                source=self.source_name,
                endpoint=endpoint,
                duration_ms=duration_ms,
                extracted_at=datetime.now(timezone.utc),
            )

        except ExtractionError as e:
            duration_ms = (time.perf_counter() - start_time) * 1000
            self._logger.error(
                "Failed to fetch shared games",
                family_id=family_id,
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
