"""Slug normalization, conflict detection and sequencing."""

from .candidates import Computed, FieldRef, Literal, SlugCandidates, as_source, resolve
from .config import DEFAULT_RESERVED_WORDS, SlugConfig
from .conflicts import ConflictDetector, ConflictQuery, SQLConflictQuery
from .generator import SlugGenerator, SlugOptions
from .identifiers import IdentifierKind, classify_identifier
from .normalizer import Normalizable, SlugNormalizer, normalize
from .sequencer import SlugSequencer, uuid_token

__all__ = [
    "Computed",
    "ConflictDetector",
    "ConflictQuery",
    "DEFAULT_RESERVED_WORDS",
    "FieldRef",
    "IdentifierKind",
    "Literal",
    "Normalizable",
    "SQLConflictQuery",
    "SlugCandidates",
    "SlugConfig",
    "SlugGenerator",
    "SlugNormalizer",
    "SlugOptions",
    "SlugSequencer",
    "as_source",
    "classify_identifier",
    "normalize",
    "resolve",
    "uuid_token",
]
