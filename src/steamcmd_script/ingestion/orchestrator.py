"""
Script orchestrator that coordinates the owned and shared library fetches.

Runs both fetches concurrently on one event loop, writes each section to
the shared output sink as soon as its data arrives, and closes the sink
once both are done.
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum

import httpx

from steamcmd_script.config import SharedLibraryStrategy, get_settings
from steamcmd_script.ingestion.contracts import SharedLibraryAppsPayload
from steamcmd_script.ingestion.extractors import (
    ExtractionResult,
    FamilyLibraryExtractor,
    LenderLibraryExtractor,
    OwnedGamesExtractor,
)
from steamcmd_script.ingestion.extractors.base import DEFAULT_HEADERS
from steamcmd_script.logger import get_logger
from steamcmd_script.output import OutputSink, SkipList, emit_section


class OwnedGamesFetchError(Exception):
    """Raised when the owned games list cannot be fetched."""

    pass


class SharedLookupStatus(str, Enum):
    """Outcome of the shared library section."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass
class ScriptResult:
    """Result of a complete script generation run."""

    started_at: datetime
    completed_at: datetime
    owned_written: int
    shared_written: int
    shared_status: SharedLookupStatus
    shared_strategy: SharedLibraryStrategy

    @property
    def total_written(self) -> int:
        """Get number of games written across both sections."""
        return self.owned_written + self.shared_written

    @property
    def duration_seconds(self) -> float:
        """Get total duration in seconds."""
        return (self.completed_at - self.started_at).total_seconds()


class ScriptOrchestrator:
    """
    Generates the SteamCMD script for the configured account.

    Example:
        >>> result = await ScriptOrchestrator().run()
        >>> print(result.total_written)
    """

    def __init__(
        self,
        *,
        sink: OutputSink | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            sink: Output destination (resolved from settings if None)
            client: HTTP client shared by the extractors (created per run if None)
        """
        self._settings = get_settings()
        self._sink = sink
        self._client = client
        self._skip_list = SkipList.parse(self._settings.output.skip_games)
        self._strategy = self._settings.shared_strategy
        self._logger = get_logger(__name__, component="orchestrator")

    @property
    def strategy(self) -> SharedLibraryStrategy:
        """Shared library lookup chosen at startup."""
        return self._strategy

    async def run(self) -> ScriptResult:
        """
        Run both fetch branches and write the script.

        Returns:
            ScriptResult: Counts and shared lookup outcome

        Raises:
            OwnedGamesFetchError: If the owned games list cannot be fetched
        """
        started_at = datetime.now(timezone.utc)
        sink = self._sink or OutputSink.resolve(self._settings.output.output_file)

        self._logger.info(
            "Starting script generation",
            steam_id=self._settings.steam.profile_id,
            shared_strategy=self._strategy.value,
            skip_tokens=len(self._skip_list),
            output=str(sink.path) if sink.path else "stdout",
        )

        if self._client is not None:
            owned_written, (shared_status, shared_written) = await self._run_branches(
                self._client, sink
            )
        else:
            async with httpx.AsyncClient(
                timeout=httpx.Timeout(self._settings.steam.timeout_seconds),
                follow_redirects=True,
                headers=DEFAULT_HEADERS,
            ) as client:
                owned_written, (shared_status, shared_written) = await self._run_branches(
                    client, sink
                )

        result = ScriptResult(
            started_at=started_at,
            completed_at=datetime.now(timezone.utc),
            owned_written=owned_written,
            shared_written=shared_written,
            shared_status=shared_status,
            shared_strategy=self._strategy,
        )

        self._logger.info(
            "Script generation complete",
            owned_written=result.owned_written,
            shared_written=result.shared_written,
            shared_status=result.shared_status.value,
            duration_seconds=round(result.duration_seconds, 3),
        )

        return result

    async def _run_branches(
        self,
        client: httpx.AsyncClient,
        sink: OutputSink,
    ) -> tuple[int, tuple[SharedLookupStatus, int]]:
        """Start both branches, wait for both, then close the sink."""
        owned_task = asyncio.create_task(self._owned_branch(client, sink))
        shared_task = asyncio.create_task(self._shared_branch(client, sink))
        tasks = [owned_task, shared_task]

        try:
            owned_written, shared = await asyncio.gather(*tasks)
        except BaseException:
            # The shared branch is abandoned; output written so far stays
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            sink.close()
            raise

        sink.close()
        return owned_written, shared

    async def _owned_branch(self, client: httpx.AsyncClient, sink: OutputSink) -> int:
        """Fetch and write the owned games section."""
        async with OwnedGamesExtractor(client=client) as extractor:
            result = await extractor.extract(steam_id=self._settings.steam.profile_id)

        if not result.success or result.data is None:
            raise OwnedGamesFetchError(result.error_message or "Owned games fetch failed")

        written = emit_section(
            sink,
            result.data.to_entries(),
            self._skip_list,
            validate=self._settings.output.force_validate,
            store_url=self._settings.steam.store_url,
        )
        self._logger.info(
            "Owned games written",
            fetched=len(result.data.games),
            written=written,
        )
        return written

    async def _shared_branch(
        self,
        client: httpx.AsyncClient,
        sink: OutputSink,
    ) -> tuple[SharedLookupStatus, int]:
        """Fetch and write the shared library section; failures are not fatal."""
        result = await self._fetch_shared(client)
        if result is None:
            return SharedLookupStatus.SKIPPED, 0

        if not result.success or result.data is None:
            self._logger.error(
                "Shared library section failed",
                source=result.source,
                error=result.error_message,
            )
            return SharedLookupStatus.FAILED, 0

        written = emit_section(
            sink,
            result.data.to_entries(),
            self._skip_list,
            validate=self._settings.output.force_validate,
            store_url=self._settings.steam.store_url,
        )
        self._logger.info(
            "Shared games written",
            fetched=len(result.data.apps),
            written=written,
        )
        return SharedLookupStatus.SUCCEEDED, written

    async def _fetch_shared(
        self,
        client: httpx.AsyncClient,
    ) -> ExtractionResult[SharedLibraryAppsPayload] | None:
        """Run the configured shared library lookup, or None when not configured."""
        steam_id = self._settings.steam.profile_id

        if self._strategy == SharedLibraryStrategy.FAMILY_GROUP:
            family_id = self._settings.family.family_id
            if family_id is None:
                raise ValueError("STEAM_FAMILY_ID is required for the family group lookup")
            async with FamilyLibraryExtractor(client=client) as extractor:
                return await extractor.extract(family_id=family_id, steam_id=steam_id)

        if self._strategy == SharedLibraryStrategy.LENDER_AGGREGATION:
            async with LenderLibraryExtractor(client=client) as extractor:
                return await extractor.extract(
                    lender_ids=self._settings.lender.lender_ids,
                    steam_id=steam_id,
                )

        for variable in self._settings.missing_shared_variables():
            self._logger.warning(
                f"The {variable} environment variable is required for updating "
                "shared library apps."
            )
        return None
