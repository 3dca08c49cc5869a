"""Read-only triple collection consumed by the extraction engine."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Protocol

RDF_TYPE = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"
RDFS_LABEL = "http://www.w3.org/2000/01/rdf-schema#label"


@dataclass(frozen=True, slots=True)
class Triple:
    """One subject-predicate-object statement."""

    subject: str
    predicate: str
    object: str
    object_is_literal: bool = False


class TripleStore(Protocol):
    """Protocol for pluggable triple stores."""

    def __iter__(self) -> Iterator[Triple]:
        """Iterate every statement in store order."""

    def match(
        self,
        subject: str | None = None,
        predicate: str | None = None,
        object: str | None = None,
    ) -> Iterator[Triple]:
        """Iterate statements matching the pattern; ``None`` is a wildcard."""


class MemoryTripleStore:
    """Insertion-ordered in-memory store.

    Duplicate statements are kept as separate facts. Lookups by subject and
    predicate are indexed; everything else is a linear scan.
    """

    def __init__(self, triples: Iterable[Triple] = ()) -> None:
        self._triples: list[Triple] = []
        self._by_subject_predicate: dict[tuple[str, str], list[Triple]] = defaultdict(list)
        self._by_predicate: dict[str, list[Triple]] = defaultdict(list)
        self.add_many(triples)

    def add(
        self,
        subject: str,
        predicate: str,
        object: str,
        *,
        literal: bool = False,
    ) -> Triple:
        """Append one statement and return it."""

        triple = Triple(subject=subject, predicate=predicate, object=object, object_is_literal=literal)
        self._append(triple)
        return triple

    def add_many(self, triples: Iterable[Triple]) -> None:
        for triple in triples:
            self._append(triple)

    def match(
        self,
        subject: str | None = None,
        predicate: str | None = None,
        object: str | None = None,
    ) -> Iterator[Triple]:
        if subject is not None and predicate is not None:
            candidates: Iterable[Triple] = self._by_subject_predicate.get((subject, predicate), ())
        elif predicate is not None:
            candidates = self._by_predicate.get(predicate, ())
        else:
            candidates = self._triples
        for triple in candidates:
            if subject is not None and triple.subject != subject:
                continue
            if object is not None and triple.object != object:
                continue
            yield triple

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._triples)

    def __len__(self) -> int:
        return len(self._triples)

    def _append(self, triple: Triple) -> None:
        self._triples.append(triple)
        self._by_subject_predicate[(triple.subject, triple.predicate)].append(triple)
        self._by_predicate[triple.predicate].append(triple)
