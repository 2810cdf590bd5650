from __future__ import annotations

"""Slug generation: decide, generate and commit a slug for one record."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..utils.logging import get_logger
from .candidates import FieldAccessor, SlugCandidates, attribute_accessor
from .config import SlugConfig
from .conflicts import ConflictDetector, ConflictQuery
from .normalizer import Normalizable, SlugNormalizer
from .policy import RegenerationPolicy, record_is_new, slug_missing
from .sequencer import SlugSequencer, UniqueTokenSource, uuid_token

logger = get_logger(__name__)


@dataclass
class SlugOptions:
    """Per-model slug settings.

    ``candidates`` are tried in order; later entries should be more specific
    than earlier ones. A model with a single base value has one candidate.
    """

    candidates: Sequence[Any]
    scope: Sequence[str] = field(default_factory=tuple)
    primary_key: str = "id"


class SlugGenerator:
    """Computes a unique slug for a record from its candidate sources.

    The generator only reads: it queries for conflicts and assigns the result
    to the record's slug attribute, leaving persistence to the caller. Two
    concurrent generators may pick the same slug; the store's unique
    constraint is the final guard.
    """

    def __init__(
        self,
        conflicts: ConflictDetector | ConflictQuery,
        config: Optional[SlugConfig] = None,
        *,
        normalizer: Optional[Normalizable] = None,
        accessor: FieldAccessor = attribute_accessor,
        token_source: UniqueTokenSource = uuid_token,
        policy: RegenerationPolicy = slug_missing,
    ) -> None:
        self.config = config or SlugConfig()
        if not isinstance(conflicts, ConflictDetector):
            conflicts = ConflictDetector(conflicts, self.config.sequence_separator)
        self.detector = conflicts
        self.normalizer = normalizer or SlugNormalizer(self.config.separator, self.config.max_length)
        self.accessor = accessor
        self.token_source = token_source
        self.policy = policy
        self.sequencer = SlugSequencer(self.config.sequence_separator)

    # ------------------------------------------------------------------
    # Record access
    # ------------------------------------------------------------------
    def current_slug(self, record: Any) -> Optional[str]:
        return getattr(record, self.config.slug_column, None)

    def scope_values(self, record: Any, options: SlugOptions) -> Dict[str, Any]:
        return {name: self.accessor(record, name) for name in options.scope}

    def candidates(self, record: Any, options: SlugOptions) -> SlugCandidates:
        return SlugCandidates(options.candidates, record, self.normalizer, self.accessor)

    # ------------------------------------------------------------------
    # Decide
    # ------------------------------------------------------------------
    def should_generate(self, record: Any, options: SlugOptions) -> bool:
        is_new = record_is_new(record, options.primary_key)
        current = self.current_slug(record)
        if is_new or self.policy(record, is_new, current):
            return True
        return self.base_changed(record, options)

    def base_changed(self, record: Any, options: SlugOptions) -> bool:
        """True when neither the stored slug nor its unsuffixed form is a fresh candidate.

        A record whose sources are all empty has the empty string as its base.
        """

        current = self.current_slug(record)
        if current is None:
            return True
        known = {current, self.sequencer.strip_suffix(current)}
        has_candidates = False
        for candidate in self.candidates(record, options):
            if candidate in known:
                return False
            has_candidates = True
        return has_candidates or "" not in known

    # ------------------------------------------------------------------
    # Generate
    # ------------------------------------------------------------------
    def _unavailable(self, slug: str, scope: Dict[str, Any], exclude_pk: Any) -> List[str]:
        conflicts = self.detector.find_conflicts(slug, scope, exclude_pk)
        if not conflicts and self.config.is_reserved(slug):
            logger.debug("Slug %r is a reserved word", slug)
            conflicts = [slug]
        return conflicts

    def resolve(self, record: Any, options: SlugOptions) -> str:
        """Pick the first free candidate, or sequence/fallback when none is free."""

        scope = self.scope_values(record, options)
        exclude_pk = None if record_is_new(record, options.primary_key) else self.accessor(record, options.primary_key)

        first: Optional[str] = None
        first_conflicts: List[str] = []
        tried = 0
        for slug in self.candidates(record, options):
            tried += 1
            conflicts = self._unavailable(slug, scope, exclude_pk)
            if not conflicts:
                return slug
            if first is None:
                first, first_conflicts = slug, conflicts
            logger.debug("Candidate %r is taken, trying the next one", slug)

        if first is None:
            # every source was empty; the empty base still has to be made unique
            first = ""
            first_conflicts = self._unavailable(first, scope, exclude_pk)
            if not first_conflicts:
                return first
            tried = 1

        if tried == 1 and self.config.sequencing_enabled:
            slug = self.sequencer.next_slug(first, first_conflicts)
            logger.debug("Sequenced %r to %r", first, slug)
            return slug
        slug = self.sequencer.fallback_slug(first, self.token_source)
        logger.debug("All %d candidate(s) taken, falling back to %r", tried, slug)
        return slug

    def generate(self, record: Any, options: SlugOptions, *, force: bool = False) -> str:
        """Return the slug the record should carry, without assigning it."""

        if not force and not self.should_generate(record, options):
            current = self.current_slug(record)
            logger.debug("Keeping slug %r", current)
            return current  # type: ignore[return-value]
        return self.resolve(record, options)

    # ------------------------------------------------------------------
    # Commit
    # ------------------------------------------------------------------
    def apply(self, record: Any, options: SlugOptions, *, force: bool = False) -> str:
        slug = self.generate(record, options, force=force)
        setattr(record, self.config.slug_column, slug)
        return slug


__all__ = ["SlugGenerator", "SlugOptions"]
