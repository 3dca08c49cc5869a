"""Triple store protocol, in-memory store, and rdflib loader."""

from triplemap.store.rdf_loader import RdfSourceLoader, load_source, parse_triples, triples_from_graph
from triplemap.store.sources import resolve_source
from triplemap.store.triple_store import RDF_TYPE, RDFS_LABEL, MemoryTripleStore, Triple, TripleStore

__all__ = [
    "RDF_TYPE",
    "RDFS_LABEL",
    "MemoryTripleStore",
    "RdfSourceLoader",
    "Triple",
    "TripleStore",
    "load_source",
    "parse_triples",
    "resolve_source",
    "triples_from_graph",
]
