"""Built-in mapping configurations and presets for common vocabularies."""

from __future__ import annotations

from triplemap.mapping.types import (
    CrossLayerRule,
    EntityTypeRule,
    LayerGroupingRule,
    MappingConfiguration,
    PropertyRule,
    RelationshipRule,
)

RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS_NS = "http://www.w3.org/2000/01/rdf-schema#"
XSD_NS = "http://www.w3.org/2001/XMLSchema#"
FOAF_NS = "http://xmlns.com/foaf/0.1/"
MULTIVERSE_NS = "http://example.org/multiverse/"
MULTIVERSE_VOCAB = "http://example.org/multiverse/vocab/"
ORG_NS = "http://example.org/org/"


def multiverse_mapping() -> MappingConfiguration:
    """Characters and movies grouped into universes."""

    return MappingConfiguration(
        entity_types=[
            EntityTypeRule(class_iri=f"{MULTIVERSE_VOCAB}Character", label="Character", type_id="character"),
            EntityTypeRule(class_iri=f"{MULTIVERSE_VOCAB}Movie", label="Movie", type_id="movie"),
        ],
        properties=[
            PropertyRule(property_iri=f"{RDFS_NS}label", target_attribute="label", required=True),
            PropertyRule(
                property_iri=f"{MULTIVERSE_VOCAB}hasPosition",
                target_attribute="position",
                required=True,
                transform="position_csv",
            ),
            PropertyRule(
                property_iri=f"{MULTIVERSE_VOCAB}belongsToUniverse",
                target_attribute="layer",
                required=True,
                transform="iri_local_name",
            ),
            PropertyRule(property_iri=f"{MULTIVERSE_VOCAB}hasSubtitle", target_attribute="subtitle"),
            PropertyRule(property_iri=f"{MULTIVERSE_VOCAB}hasColor", target_attribute="color", transform="hex_color"),
            PropertyRule(property_iri=f"{MULTIVERSE_VOCAB}hasHeight", target_attribute="height", transform="float"),
        ],
        relationships=[
            RelationshipRule(predicate_iri=f"{MULTIVERSE_VOCAB}appearsIn", label="appears in"),
            RelationshipRule(predicate_iri=f"{MULTIVERSE_VOCAB}cameoIn", label="cameo in"),
        ],
        layer_grouping=LayerGroupingRule(
            layer_property_iri=f"{MULTIVERSE_VOCAB}belongsToUniverse",
            extract_layer_id="iri_local_name",
            layer_class_iri=f"{MULTIVERSE_VOCAB}Universe",
        ),
        cross_layer_connections=CrossLayerRule(
            predicate_iri=f"{MULTIVERSE_VOCAB}connectsTo",
            label="connects to",
        ),
        namespaces={
            "ex": MULTIVERSE_NS,
            "mv": MULTIVERSE_VOCAB,
            "rdf": RDF_NS,
            "rdfs": RDFS_NS,
            "xsd": XSD_NS,
        },
    )


def org_chart_mapping() -> MappingConfiguration:
    """People and departments from a FOAF-flavoured org chart."""

    return MappingConfiguration(
        entity_types=[
            EntityTypeRule(class_iri=f"{FOAF_NS}Person", label="Person", type_id="person"),
            EntityTypeRule(class_iri=f"{ORG_NS}Department", label="Department", type_id="department"),
        ],
        properties=[
            PropertyRule(property_iri=f"{FOAF_NS}name", target_attribute="label", required=True),
            PropertyRule(
                property_iri=f"{ORG_NS}hasPosition",
                target_attribute="position",
                required=True,
                transform="position_csv",
            ),
            PropertyRule(
                property_iri=f"{ORG_NS}belongsToDepartment",
                target_attribute="layer",
                required=True,
                transform="iri_local_name",
            ),
            PropertyRule(property_iri=f"{ORG_NS}jobTitle", target_attribute="subtitle"),
        ],
        relationships=[
            RelationshipRule(predicate_iri=f"{ORG_NS}reportsTo", label="reports to"),
            RelationshipRule(predicate_iri=f"{ORG_NS}collaboratesWith", label="collaborates with"),
        ],
        layer_grouping=LayerGroupingRule(
            layer_property_iri=f"{ORG_NS}belongsToDepartment",
            extract_layer_id="iri_local_name",
            layer_class_iri=f"{ORG_NS}Department",
        ),
        namespaces={
            "foaf": FOAF_NS,
            "org": ORG_NS,
            "rdf": RDF_NS,
            "rdfs": RDFS_NS,
        },
    )


def person_org_mapping(
    person_class: str = f"{FOAF_NS}Person",
    org_class: str = "http://example.org/Organization",
    membership_property: str = "http://example.org/memberOf",
) -> MappingConfiguration:
    """People laid out in layers by the organization they belong to."""

    return MappingConfiguration(
        entity_types=[
            EntityTypeRule(class_iri=person_class, label="Person", type_id="person"),
            EntityTypeRule(class_iri=org_class, label="Organization", type_id="organization"),
        ],
        properties=[
            PropertyRule(property_iri=f"{FOAF_NS}name", target_attribute="label", required=True),
            PropertyRule(
                property_iri="http://example.org/hasPosition",
                target_attribute="position",
                required=True,
                transform="position_csv",
            ),
            PropertyRule(
                property_iri=membership_property,
                target_attribute="layer",
                required=True,
                transform="iri_local_name",
            ),
        ],
        relationships=[RelationshipRule(predicate_iri="http://example.org/reportsTo", label="reports to")],
        layer_grouping=LayerGroupingRule(
            layer_property_iri=membership_property,
            extract_layer_id="iri_local_name",
            layer_class_iri=org_class,
        ),
        namespaces={
            "foaf": FOAF_NS,
            "org": "http://example.org/",
            "rdf": RDF_NS,
            "rdfs": RDFS_NS,
        },
    )


def network_mapping(
    node_class: str = "http://example.org/Node",
    connection_property: str = "http://example.org/connectedTo",
) -> MappingConfiguration:
    """Generic node/edge network grouped by ``ex:inGroup``; no layer class."""

    return MappingConfiguration(
        entity_types=[EntityTypeRule(class_iri=node_class, label="Node", type_id="node")],
        properties=[
            PropertyRule(property_iri=f"{RDFS_NS}label", target_attribute="label", required=True),
            PropertyRule(
                property_iri="http://example.org/hasPosition",
                target_attribute="position",
                required=True,
                transform="position_csv",
            ),
            PropertyRule(
                property_iri="http://example.org/inGroup",
                target_attribute="layer",
                required=True,
                transform="iri_local_name",
            ),
        ],
        relationships=[RelationshipRule(predicate_iri=connection_property, label="connected to")],
        layer_grouping=LayerGroupingRule(
            layer_property_iri="http://example.org/inGroup",
            extract_layer_id="iri_local_name",
        ),
        namespaces={
            "ex": "http://example.org/",
            "rdf": RDF_NS,
            "rdfs": RDFS_NS,
        },
    )


DEFAULT_CONFIGURATION_ID = "default"


def builtin_configurations() -> dict[str, MappingConfiguration]:
    """Fresh copies of every built-in configuration keyed by id."""

    return {
        DEFAULT_CONFIGURATION_ID: multiverse_mapping(),
        "multiverse": multiverse_mapping(),
        "orgchart": org_chart_mapping(),
    }
