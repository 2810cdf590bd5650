from __future__ import annotations

import re
import unicodedata
from typing import Optional, Protocol


class Normalizable(Protocol):
    """Anything that turns raw text into a slug."""

    def __call__(self, value: str) -> str:
        ...


class SlugNormalizer:
    """Default normalization: lowercase ASCII words joined by ``separator``.

    Accented characters are decomposed and reduced to their ASCII base letter;
    anything else outside ``[a-z0-9]`` is treated as a word break. The result is
    idempotent: normalizing an already normalized slug returns it unchanged.
    """

    def __init__(self, separator: str = "-", max_length: Optional[int] = None) -> None:
        self.separator = separator
        self.max_length = max_length
        self._unsafe_re = re.compile(r"[^a-z0-9]+")

    def __call__(self, value: str) -> str:
        text = unicodedata.normalize("NFKD", value or "")
        text = text.encode("ascii", "ignore").decode("ascii").lower()
        slug = self._unsafe_re.sub(self.separator, text).strip(self.separator)
        if self.max_length is not None and len(slug) > self.max_length:
            slug = slug[: self.max_length].rstrip(self.separator)
        return slug


def normalize(value: str, separator: str = "-") -> str:
    """Normalize ``value`` with the default rules."""

    return SlugNormalizer(separator)(value)


__all__ = ["Normalizable", "SlugNormalizer", "normalize"]
