"""
Skip list for leaving games out of the generated script.

Tokens name a game either by app ID or by exact title.
"""

from dataclasses import dataclass
from functools import cached_property


def _as_app_id(value: int | str) -> int | None:
    """Read a value as an app ID when it is made only of digits."""
    if isinstance(value, int):
        return value
    value = value.strip()
    if value.isascii() and value.isdigit():
        return int(value)
    return None


@dataclass(frozen=True)
class SkipList:
    """
    Immutable set of skip tokens.

    A token made only of digits is compared to app IDs as a number, so
    ``"010"`` skips app 10. Every token is also compared to titles as an
    exact, case-sensitive string.

    Example:
        >>> skip = SkipList.parse("570, Dota Underlords")
        >>> skip.should_skip(570, "Dota 2")
        True
    """

    tokens: frozenset[str] = frozenset()

    @classmethod
    def parse(cls, raw: str | None) -> "SkipList":
        """Build a skip list from a comma-separated string."""
        if not raw:
            return cls()
        return cls(frozenset(token.strip() for token in raw.split(",") if token.strip()))

    @cached_property
    def app_ids(self) -> frozenset[int]:
        """Tokens that name an app ID."""
        ids = (_as_app_id(token) for token in self.tokens)
        return frozenset(app_id for app_id in ids if app_id is not None)

    def should_skip(self, app_id: int | str, title: str | None) -> bool:
        """Check whether a game matches any token by ID or title."""
        if str(app_id) in self.tokens or _as_app_id(app_id) in self.app_ids:
            return True
        return title is not None and title in self.tokens

    def __len__(self) -> int:
        return len(self.tokens)
