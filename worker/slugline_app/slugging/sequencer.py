from __future__ import annotations

import re
import uuid
from typing import Callable, Optional, Sequence

UniqueTokenSource = Callable[[], str]

_UUID_PATTERN = r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}"
_DIGITS_RE = re.compile(r"[0-9]+")


def uuid_token() -> str:
    return str(uuid.uuid4())


class SlugSequencer:
    """Computes the next free ``base<sep>N`` slug from ordered conflicts.

    The bare base is the first slug, so duplicates are numbered from 2.
    """

    def __init__(self, separator: str = "-") -> None:
        self.separator = separator
        self._suffix_re = re.compile(rf"{re.escape(separator)}(?:[0-9]*|{_UUID_PATTERN})\Z")

    def sequence_of(self, normalized: str, conflict: str) -> int:
        prefix = normalized + self.separator
        if not conflict.startswith(prefix):
            return 0
        remainder = conflict[len(prefix):]
        return int(remainder) if _DIGITS_RE.fullmatch(remainder) else 0

    def next_slug(self, normalized: str, conflicts: Sequence[str]) -> str:
        if not conflicts:
            return normalized
        sequence = 0
        # rows such as "post-office" share the prefix without being a sequence of "post"
        for conflict in conflicts:
            sequence = self.sequence_of(normalized, conflict)
            if sequence:
                break
        next_sequence = 2 if sequence == 0 else sequence + 1
        return f"{normalized}{self.separator}{next_sequence}"

    def fallback_slug(self, normalized: str, token_source: UniqueTokenSource = uuid_token) -> str:
        return f"{normalized}{self.separator}{token_source()}"

    def strip_suffix(self, slug: Optional[str]) -> Optional[str]:
        """Drop a trailing sequence number or fallback token from ``slug``."""

        if slug is None:
            return None
        return self._suffix_re.sub("", slug, count=1)


__all__ = ["SlugSequencer", "UniqueTokenSource", "uuid_token"]
