from __future__ import annotations

"""Candidate sources and their lazy evaluation against a record."""

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional, Protocol, Sequence, Tuple, Union

from ..utils.logging import get_logger
from .normalizer import Normalizable

logger = get_logger(__name__)


class FieldAccessor(Protocol):
    def __call__(self, record: Any, name: str) -> Any:
        ...


def attribute_accessor(record: Any, name: str) -> Any:
    """Read ``name`` from a record, calling it when it is a bound method."""

    value = getattr(record, name, None)
    if callable(value):
        value = value()
    return value


@dataclass(frozen=True)
class Literal:
    value: Any


@dataclass(frozen=True)
class FieldRef:
    name: str


@dataclass(frozen=True)
class Computed:
    fn: Callable[[Any], Any]


CandidateSource = Union[Literal, FieldRef, Computed, Tuple["CandidateSource", ...]]


def as_source(value: Any) -> CandidateSource:
    """Coerce loose configuration into a candidate source.

    Strings and other plain values are literals, callables are computed and a
    list or tuple is a compound candidate whose parts are resolved one by one
    and joined with spaces.
    """

    if isinstance(value, (Literal, FieldRef, Computed)):
        return value
    if isinstance(value, (list, tuple)):
        return tuple(as_source(part) for part in value)
    if callable(value):
        return Computed(value)
    return Literal(value)


def resolve(source: CandidateSource, record: Any, accessor: FieldAccessor = attribute_accessor) -> Any:
    if isinstance(source, Literal):
        return source.value
    if isinstance(source, FieldRef):
        return accessor(record, source.name)
    if isinstance(source, Computed):
        return source.fn(record)
    if isinstance(source, tuple):
        return [resolve(part, record, accessor) for part in source]
    raise TypeError(f"Unsupported candidate source {source!r}")


def _candidate_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (str, int, float)):
        return str(value)
    if isinstance(value, (list, tuple)):
        parts = [_candidate_text(item) for item in value]
        parts = [part for part in parts if part]
        return " ".join(parts) if parts else None
    return None


class SlugCandidates:
    """Lazily yields distinct, non-empty normalized candidates.

    Each source is resolved only when the previous candidates have been
    consumed. Sources that resolve to nothing or to an unsupported value are
    skipped.
    """

    def __init__(
        self,
        sources: Sequence[Any],
        record: Any,
        normalizer: Normalizable,
        accessor: FieldAccessor = attribute_accessor,
    ) -> None:
        self.sources: List[CandidateSource] = [as_source(source) for source in sources]
        self.record = record
        self.normalizer = normalizer
        self.accessor = accessor

    def __iter__(self) -> Iterator[str]:
        seen: set[str] = set()
        for source in self.sources:
            text = _candidate_text(resolve(source, self.record, self.accessor))
            if text is None:
                logger.debug("Skipping candidate %r: no usable value", source)
                continue
            slug = self.normalizer(text)
            if not slug or slug in seen:
                continue
            seen.add(slug)
            yield slug


__all__ = [
    "CandidateSource",
    "Computed",
    "FieldAccessor",
    "FieldRef",
    "Literal",
    "SlugCandidates",
    "as_source",
    "attribute_accessor",
    "resolve",
]
