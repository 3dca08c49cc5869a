"""Mapping configuration model, validation, and registry."""

from triplemap.mapping.builtins import (
    DEFAULT_CONFIGURATION_ID,
    builtin_configurations,
    multiverse_mapping,
    network_mapping,
    org_chart_mapping,
    person_org_mapping,
)
from triplemap.mapping.registry import ConfigurationInfo, ConfigurationRegistry
from triplemap.mapping.transforms import BUILTIN_TRANSFORMS, Transform, build_transform_catalog
from triplemap.mapping.types import (
    CrossLayerRule,
    EntityTypeRule,
    LayerGroupingRule,
    MappingConfiguration,
    PropertyRule,
    RelationshipRule,
    TargetAttribute,
)
from triplemap.mapping.validator import validate_mapping

__all__ = [
    "BUILTIN_TRANSFORMS",
    "DEFAULT_CONFIGURATION_ID",
    "ConfigurationInfo",
    "ConfigurationRegistry",
    "CrossLayerRule",
    "EntityTypeRule",
    "LayerGroupingRule",
    "MappingConfiguration",
    "PropertyRule",
    "RelationshipRule",
    "TargetAttribute",
    "Transform",
    "build_transform_catalog",
    "builtin_configurations",
    "multiverse_mapping",
    "network_mapping",
    "org_chart_mapping",
    "person_org_mapping",
    "validate_mapping",
]
