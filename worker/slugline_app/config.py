from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Annotated, List, Optional

import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from .slugging.config import DEFAULT_RESERVED_WORDS, SlugConfig


class Settings(BaseSettings):
    """Central application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        env_prefix="SLUGLINE_",
        case_sensitive=False,
    )

    # Persistence
    database_url: str = Field(default="sqlite:///./slugline.db", description="SQL database URL holding slugged tables")
    slug_column: str = Field(default="slug", description="Column storing the slug value")

    # Slug generation
    slug_separator: str = Field(default="-", description="Separator placed between words of a slug")
    sequence_separator: str = Field(default="-", description="Separator placed before a sequence or fallback suffix")
    slug_max_length: Optional[int] = Field(default=None, ge=1, description="Optional maximum length of a normalized slug")
    reserved_words: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_RESERVED_WORDS),
        description=(
            "Words that may never be used as a bare slug. "
            "Accepts a JSON array or a comma separated list in SLUGLINE_RESERVED_WORDS."
        ),
    )
    sequencing_enabled: bool = Field(
        default=True,
        description="Append -2, -3, ... to duplicates; when disabled a UUID fallback token is used instead",
    )
    save_attempts: int = Field(default=3, ge=1, description="Attempts made by SlugService.save on unique violations")

    # Logging
    log_level: str = Field(default="INFO", description="Root log level")

    @field_validator("slug_separator", "sequence_separator")
    @classmethod
    def _validate_separator(cls, value: str) -> str:
        if len(value) != 1 or value.isalnum():
            raise ValueError("separators must be a single non-alphanumeric character")
        return value

    @field_validator("reserved_words", mode="before")
    @classmethod
    def _parse_reserved_words(cls, value: object) -> List[str]:
        if isinstance(value, str):
            text = value.strip()
            if text.startswith("["):
                try:
                    parsed = json.loads(text)
                except json.JSONDecodeError as exc:
                    raise ValueError("SLUGLINE_RESERVED_WORDS must be valid JSON") from exc
                if not isinstance(parsed, list):
                    raise ValueError("SLUGLINE_RESERVED_WORDS must be a JSON array")
                return [str(item) for item in parsed]
            return [word.strip() for word in text.split(",") if word.strip()]
        return value  # type: ignore[return-value]

    def slug_config(self) -> SlugConfig:
        """Freeze the slug related settings into the engine configuration."""

        return SlugConfig(
            separator=self.slug_separator,
            sequence_separator=self.sequence_separator,
            slug_column=self.slug_column,
            max_length=self.slug_max_length,
            reserved_words=frozenset(word.lower() for word in self.reserved_words),
            sequencing_enabled=self.sequencing_enabled,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache Settings."""

    return Settings()
