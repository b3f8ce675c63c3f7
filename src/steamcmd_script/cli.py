"""
Command-line interface for the SteamCMD script generator.

Takes no arguments; everything is read from the environment.
"""

import asyncio
import sys

from pydantic import ValidationError

from steamcmd_script.config import Settings, configuration_guidance, get_settings
from steamcmd_script.ingestion.orchestrator import (
    OwnedGamesFetchError,
    ScriptOrchestrator,
    ScriptResult,
)
from steamcmd_script.logger import get_logger, setup_logging
from steamcmd_script.output import OutputSink

logger = get_logger(__name__, component="cli")


def print_usage() -> None:
    """Print CLI usage information."""
    usage = """
SteamCMD Script Generator
=========================

Usage: steamcmd-script

Writes an app_update line for every owned and shared Steam game.
Configuration is read from environment variables (or a .env file):

Required:
  STEAM_API_KEY               Steam Web API key
  STEAM_PROFILE_ID            SteamID64 of the account

Shared library (family group):
  STEAM_API_TOKEN             Store access token
  STEAM_FAMILY_ID             Steam Family group ID

Shared library (lender aggregation):
  SHARED_LIBRARY_API_KEY      API key of the aggregation service
  SHARED_LIBRARY_LENDER_IDS   Comma-separated lender SteamID64s
  SHARED_LIBRARY_API_URL      Endpoint of the aggregation service

Output:
  SKIP_GAMES                  Comma-separated app IDs or titles to leave out
  OUTPUT_FILE                 Write to this file instead of standard output
  FORCE_VALIDATE              Append -validate to every command
  LOG_LEVEL, LOG_FORMAT       Diagnostics on standard error

Examples:
  STEAM_API_KEY=... STEAM_PROFILE_ID=7656... steamcmd-script > update_games.txt
"""
    print(usage)


def load_settings() -> Settings:
    """
    Load settings or exit with guidance.

    Exits with status 1 before any network activity when a required
    variable is missing or invalid.
    """
    try:
        return get_settings()
    except ValidationError as e:
        for message in configuration_guidance(e.errors()):
            print(message, file=sys.stderr)
        sys.exit(1)


async def cmd_generate(sink: OutputSink) -> ScriptResult:
    """Generate the script for the configured account."""
    orchestrator = ScriptOrchestrator(sink=sink)
    return await orchestrator.run()


def main() -> None:
    """Main CLI entry point."""
    if len(sys.argv) > 1:
        if sys.argv[1] in ("help", "--help", "-h"):
            print_usage()
            return
        print(f"Unknown argument: {sys.argv[1]}", file=sys.stderr)
        print_usage()
        sys.exit(1)

    settings = load_settings()
    setup_logging(settings.logging)

    try:
        sink = OutputSink.resolve(settings.output.output_file)
    except OSError as e:
        logger.error("Cannot open output file", path=settings.output.output_file, error=str(e))
        sys.exit(1)

    try:
        asyncio.run(cmd_generate(sink))

    except OwnedGamesFetchError as e:
        logger.error("Failed to fetch owned games", error=str(e))
        sys.exit(1)
    except OSError as e:
        logger.error("Failed to write script", error_type=type(e).__name__, error=str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)


if __name__ == "__main__":
    main()
