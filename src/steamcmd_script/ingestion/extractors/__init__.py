"""
Data extractors for Steam APIs.

This module provides extractors for the owned games and shared
library APIs, all built on a common base with error handling
and structured logging.
"""

from steamcmd_script.ingestion.extractors.base import (
    APIError,
    BaseExtractor,
    ExtractionError,
    ExtractionResult,
    RateLimitError,
    ValidationError,
)
from steamcmd_script.ingestion.extractors.family_library import FamilyLibraryExtractor
from steamcmd_script.ingestion.extractors.lender_library import (
    LenderLibraryExtractor,
    merge_shared_apps,
)
from steamcmd_script.ingestion.extractors.owned_games import OwnedGamesExtractor

__all__ = [
    # Base classes and errors
    "APIError",
    "BaseExtractor",
    "ExtractionError",
    "ExtractionResult",
    "RateLimitError",
    "ValidationError",
    # Extractors
    "FamilyLibraryExtractor",
    "LenderLibraryExtractor",
    "OwnedGamesExtractor",
    "merge_shared_apps",
]
