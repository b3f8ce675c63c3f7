"""
Lender aggregation shared library extractor.

Queries a third-party shared library service once per lender account
and merges the answers into one deduplicated app list.
"""

import asyncio
import time
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from steamcmd_script.config import get_settings
from steamcmd_script.ingestion.contracts import (
    SharedLibraryApp,
    SharedLibraryAppsAPIResponse,
    SharedLibraryAppsPayload,
)
from steamcmd_script.ingestion.extractors.base import (
    BaseExtractor,
    ExtractionError,
    ExtractionResult,
    ValidationError,
)


def merge_shared_apps(payloads: list[SharedLibraryAppsPayload]) -> SharedLibraryAppsPayload:
    """
    Merge per-lender payloads into one, keyed by app ID.

    Payloads are applied in order; a later payload replaces an earlier
    entry for the same app ID.
    """
    merged: dict[int, SharedLibraryApp] = {}
    for payload in payloads:
        for app in payload.apps:
            merged[app.appid] = app
    return SharedLibraryAppsPayload(apps=list(merged.values()))


class LenderLibraryExtractor(BaseExtractor[SharedLibraryAppsPayload]):
    """
    Extractor for a shared library service keyed by lender account.

    Example:
        >>> async with LenderLibraryExtractor() as extractor:
        ...     result = await extractor.extract(
        ...         lender_ids=["76561197960287931"], steam_id="76561197960287930"
        ...     )
    """

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize lender library extractor.

        Args:
            **kwargs: Arguments passed to BaseExtractor

        Raises:
            ValueError: If no shared library API key is configured
        """
        super().__init__(**kwargs)
        settings = get_settings()
        if settings.lender.api_key is None:
            raise ValueError("SHARED_LIBRARY_API_KEY is required for the lender library lookup")
        self._url = settings.lender.api_url
        self._api_key = settings.lender.api_key.get_secret_value()

    @property
    def source_name(self) -> str:
        """Return source identifier."""
        return "shared_library_lender_api"

    def _parse_response(self, raw_data: dict[str, Any]) -> SharedLibraryAppsPayload:
        """Parse and validate one lender's shared apps response."""
        try:
            wrapper = SharedLibraryAppsAPIResponse.model_validate(raw_data)
            return wrapper.response
        except PydanticValidationError as e:
            raise ValidationError(
                f"Response validation failed: {e}",
                source=self.source_name,
            ) from e

    async def _fetch_lender(self, lender_id: str, steam_id: str) -> SharedLibraryAppsPayload:
        """Fetch the apps one lender shares with the account."""
        response = await self._make_request(
            "GET",
            self._url,
            params={
                "key": self._api_key,
                "lender_steamid": lender_id,
                "steamid": steam_id,
            },
            headers={"Authorization": f"Key {self._api_key}"},
        )
        payload = self._parse_response(self._decode_json(response))

        self._logger.debug(
            "Fetched lender library",
            lender_id=lender_id,
            app_count=len(payload.apps),
        )
        return payload

    async def extract(
        self,
        lender_ids: list[str],
        steam_id: str,
    ) -> ExtractionResult[SharedLibraryAppsPayload]:
        """
        Extract and merge the apps shared by every lender.

        All lenders are queried concurrently. Any failing lender fails
        the whole extraction.

        Args:
            lender_ids: SteamID64s of the lending accounts
            steam_id: SteamID64 of the borrowing account

        Returns:
            ExtractionResult[SharedLibraryAppsPayload]: Merged result with metadata
        """
        endpoint = f"{self._url}?steamid={steam_id}&lenders={','.join(lender_ids)}"
        start_time = time.perf_counter()

        self._logger.info(
            "Starting lender library extraction",
            steam_id=steam_id,
            total_lenders=len(lender_ids),
        )

        results = await asyncio.gather(
            *(self._fetch_lender(lender_id, steam_id) for lender_id in lender_ids),
            return_exceptions=True,
        )
        duration_ms = (time.perf_counter() - start_time) * 1000

        payloads: list[SharedLibraryAppsPayload] = []
        for lender_id, result in zip(lender_ids, results):
            if isinstance(result, ExtractionError):
                self._logger.error(
                    "Failed to fetch shared games",
                    lender_id=lender_id,
                    error=str(result),
                    status_code=result.status_code,
                )
                return ExtractionResult(
                    success=False,
                    error_message=f"Lender {lender_id}: {result}",
                    source=self.source_name,
                    endpoint=endpoint,
                    duration_ms=duration_ms,
                )
            if isinstance(result, BaseException):
                raise result
            payloads.append(result)

        merged = merge_shared_apps(payloads)

        self._logger.info(
            "Lender library extraction successful",
            total_lenders=len(lender_ids),
            app_count=len(merged.apps),
            duration_ms=round(duration_ms, 2),
        )

        return ExtractionResult(
            success=True,
            data=merged,
            source=self.source_name,
            endpoint=endpoint,
            duration_ms=duration_ms,
            extracted_at=datetime.now(timezone.utc),
        )
