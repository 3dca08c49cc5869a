"""Extractor interface for pluggable extraction implementations."""

from abc import ABC, abstractmethod

from triplemap.extraction.types import QueryResult
from triplemap.mapping.types import MappingConfiguration
from triplemap.store.triple_store import TripleStore


class ExtractorInterface(ABC):
    """Abstract extractor interface."""

    @abstractmethod
    def extract(self, store: TripleStore | None, config: MappingConfiguration) -> QueryResult:
        """Extract entities, relationships, layers, and cross-layer links."""
