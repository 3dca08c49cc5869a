"""rdflib-backed loader that turns serialized RDF into a triple store."""

from __future__ import annotations

import asyncio
import logging
from time import perf_counter

from rdflib import Graph
from rdflib import Literal as RdfLiteral

from triplemap.errors import LoadFailedError
from triplemap.store.triple_store import MemoryTripleStore

logger = logging.getLogger(__name__)


def triples_from_graph(graph: Graph) -> MemoryTripleStore:
    """Copy an rdflib graph into an in-memory store, keeping lexical values."""

    store = MemoryTripleStore()
    for subject, predicate, obj in graph:
        store.add(str(subject), str(predicate), str(obj), literal=isinstance(obj, RdfLiteral))
    return store


def parse_triples(data: str, *, format: str = "turtle", base: str | None = None) -> MemoryTripleStore:
    """Parse serialized RDF text into a store."""

    graph = Graph()
    graph.parse(data=data, format=format, publicID=base)
    return triples_from_graph(graph)


def load_source(source: str, *, format: str = "turtle") -> MemoryTripleStore:
    """Parse a local path or URL into a store."""

    started = perf_counter()
    graph = Graph()
    graph.parse(source=source, format=format)
    store = triples_from_graph(graph)
    logger.info(
        "loader.parse_timing source=%s format=%s triples=%d total_ms=%.2f",
        source,
        format,
        len(store),
        (perf_counter() - started) * 1000.0,
    )
    return store


class RdfSourceLoader:
    """Asynchronous loader running rdflib parsing in a worker thread."""

    def __init__(self, format: str = "turtle") -> None:
        self.format = format

    async def load(self, source: str) -> MemoryTripleStore:
        try:
            return await asyncio.to_thread(load_source, source, format=self.format)
        except Exception as exc:
            logger.exception("loader.parse_failed source=%s format=%s", source, self.format)
            raise LoadFailedError(source, exc) from exc
