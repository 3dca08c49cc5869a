"""Shared in-memory graphs and configurations for tests."""

from __future__ import annotations

from triplemap.mapping.builtins import MULTIVERSE_NS, MULTIVERSE_VOCAB, RDFS_NS
from triplemap.mapping.types import (
    EntityTypeRule,
    LayerGroupingRule,
    MappingConfiguration,
    PropertyRule,
    RelationshipRule,
)
from triplemap.store.triple_store import RDF_TYPE, MemoryTripleStore

MV = MULTIVERSE_VOCAB
EX = MULTIVERSE_NS
LABEL = f"{RDFS_NS}label"

TEST_NS = "http://example.org/test/"


def add_character(
    store: MemoryTripleStore,
    local_name: str,
    *,
    label: str | None,
    position: str | None,
    universe: str | None,
    subtitle: str | None = None,
    type_name: str = "Character",
) -> str:
    subject = f"{EX}{local_name}"
    store.add(subject, RDF_TYPE, f"{MV}{type_name}")
    if label is not None:
        store.add(subject, LABEL, label, literal=True)
    if position is not None:
        store.add(subject, f"{MV}hasPosition", position, literal=True)
    if universe is not None:
        store.add(subject, f"{MV}belongsToUniverse", f"{EX}{universe}")
    if subtitle is not None:
        store.add(subject, f"{MV}hasSubtitle", subtitle, literal=True)
    return subject


def add_universe(
    store: MemoryTripleStore,
    local_name: str,
    *,
    label: str | None,
    color: str | None = None,
    height: str | None = None,
) -> str:
    subject = f"{EX}{local_name}"
    store.add(subject, RDF_TYPE, f"{MV}Universe")
    if label is not None:
        store.add(subject, LABEL, label, literal=True)
    if color is not None:
        store.add(subject, f"{MV}hasColor", color, literal=True)
    if height is not None:
        store.add(subject, f"{MV}hasHeight", height, literal=True)
    return subject


def build_multiverse_store() -> MemoryTripleStore:
    """Two universes, three characters, one movie, relationships and a cross-layer link."""

    store = MemoryTripleStore()
    add_universe(store, "Earth616", label="Earth-616", color="ff3344", height="0")
    add_universe(store, "Earth1610", label="Ultimate", color="0x3366ff", height="6")
    peter = add_character(
        store,
        "PeterParker616",
        label="Peter Parker",
        position="1,0,2",
        universe="Earth616",
        subtitle="Spider-Man",
    )
    miles = add_character(store, "MilesMorales", label="Miles Morales", position="-2,0,1.5", universe="Earth1610")
    add_character(store, "Gwen", label="Gwen Stacy", position="0, 0, -3", universe="Earth1610")
    movie = add_character(
        store,
        "IntoTheSpiderVerse",
        label="Into the Spider-Verse",
        position="4,0,4",
        universe="Earth1610",
        type_name="Movie",
    )
    store.add(peter, f"{MV}appearsIn", movie)
    store.add(miles, f"{MV}appearsIn", movie)
    store.add(peter, f"{MV}cameoIn", movie)
    store.add(peter, f"{MV}connectsTo", miles)
    return store


def minimal_mapping(**overrides) -> MappingConfiguration:
    """One ``Character`` type requiring label, position and layer."""

    values = {
        "entity_types": [EntityTypeRule(class_iri=f"{TEST_NS}Character", label="Character", type_id="character")],
        "properties": [
            PropertyRule(property_iri=LABEL, target_attribute="label", required=True),
            PropertyRule(property_iri=f"{TEST_NS}position", target_attribute="position", required=True),
            PropertyRule(
                property_iri=f"{TEST_NS}layer",
                target_attribute="layer",
                required=True,
                transform="iri_local_name",
            ),
        ],
        "relationships": [RelationshipRule(predicate_iri=f"{TEST_NS}knows", label="knows")],
        "layer_grouping": LayerGroupingRule(layer_property_iri=f"{TEST_NS}layer"),
        "namespaces": {"t": TEST_NS, "rdfs": RDFS_NS},
    }
    values.update(overrides)
    return MappingConfiguration(**values)
