"""
SteamCMD script generator.

Builds an app_update script from a Steam account's owned games
and the games shared with it through Steam Family.
"""

from steamcmd_script.config import Settings, get_settings
from steamcmd_script.logger import get_logger, setup_logging

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "get_settings",
    "get_logger",
    "setup_logging",
    "__version__",
]
