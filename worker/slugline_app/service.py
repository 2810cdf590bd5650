from __future__ import annotations

"""Persistence wrapper that assigns slugs and retries on unique violations."""

from typing import Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, SQLModel

from .config import Settings
from .slugging.conflicts import SQLConflictQuery
from .slugging.generator import SlugGenerator, SlugOptions
from .slugging.policy import RegenerationPolicy, record_is_new, slug_missing
from .utils.logging import get_logger

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)


class SlugService:
    """Assigns a slug to a SQLModel record and saves it.

    A concurrent writer can claim the same slug between the conflict query
    and the commit. When the unique constraint rejects the row the session is
    rolled back and the slug regenerated, up to ``settings.save_attempts``
    times; the last ``IntegrityError`` is re-raised.
    """

    def __init__(
        self,
        session: Session,
        settings: Settings,
        options: SlugOptions,
        *,
        policy: RegenerationPolicy = slug_missing,
    ) -> None:
        self.session = session
        self.settings = settings
        self.options = options
        self.policy = policy

    def generator_for(self, model: type[SQLModel]) -> SlugGenerator:
        config = self.settings.slug_config()
        query = SQLConflictQuery(
            self.session,
            model,
            slug_column=config.slug_column,
            primary_key=self.options.primary_key,
        )
        return SlugGenerator(query, config, policy=self.policy)

    def save(self, record: ModelT, *, attempts: Optional[int] = None) -> ModelT:
        """Assign the slug, commit and refresh ``record``.

        Only inserts are retried: rolling back expires an already persisted
        record, discarding the pending changes the slug was derived from.
        """

        generator = self.generator_for(type(record))
        attempts = attempts or self.settings.save_attempts
        retryable = record_is_new(record, self.options.primary_key)
        attempt = 0
        while True:
            attempt += 1
            # autoflush would push the pending row into the conflict query
            with self.session.no_autoflush:
                slug = generator.apply(record, self.options, force=attempt > 1)
            self.session.add(record)
            try:
                self.session.commit()
            except IntegrityError:
                self.session.rollback()
                if not retryable or attempt >= attempts:
                    raise
                logger.warning("Slug %r collided on save (attempt %d/%d), regenerating", slug, attempt, attempts)
                continue
            self.session.refresh(record)
            logger.info("Saved %s with slug %s", type(record).__name__, slug)
            return record
