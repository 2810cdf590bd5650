from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Optional

DEFAULT_RESERVED_WORDS = (
    "new",
    "edit",
    "index",
    "session",
    "login",
    "logout",
    "users",
    "admin",
    "stylesheets",
    "assets",
    "javascripts",
    "images",
)


@dataclass(frozen=True)
class SlugConfig:
    """Immutable settings handed to the slug generator at construction time."""

    separator: str = "-"
    sequence_separator: str = "-"
    slug_column: str = "slug"
    max_length: Optional[int] = None
    reserved_words: FrozenSet[str] = field(default_factory=lambda: frozenset(DEFAULT_RESERVED_WORDS))
    sequencing_enabled: bool = True

    def is_reserved(self, slug: str) -> bool:
        return slug in self.reserved_words
