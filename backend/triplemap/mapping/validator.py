"""Internal consistency checks for mapping configurations."""

from __future__ import annotations

from triplemap.mapping.types import MappingConfiguration

MISSING_ENTITY_TYPES = "At least one entity type mapping is required"
MISSING_REQUIRED_LABEL = "A required label property mapping is needed"
MISSING_REQUIRED_POSITION = "A required position property mapping is needed"
MISSING_REQUIRED_LAYER = "A required layer property mapping is needed"
DUPLICATE_TYPE_IDS = "Entity type IDs must be unique"
MISSING_NAMESPACES = "At least one namespace mapping is required"


def validate_mapping(config: MappingConfiguration) -> list[str]:
    """Return every violation found in ``config``; an empty list means valid.

    Checks run in a fixed order and never stop at the first failure, so the
    returned list is stable for a given configuration.
    """

    violations: list[str] = []

    if not config.entity_types:
        violations.append(MISSING_ENTITY_TYPES)

    if not _has_required_rule(config, "label"):
        violations.append(MISSING_REQUIRED_LABEL)
    if not _has_required_rule(config, "position"):
        violations.append(MISSING_REQUIRED_POSITION)
    if not _has_required_rule(config, "layer"):
        violations.append(MISSING_REQUIRED_LAYER)

    type_ids = [entity_type.type_id for entity_type in config.entity_types]
    if len(type_ids) != len(set(type_ids)):
        violations.append(DUPLICATE_TYPE_IDS)

    if not config.namespaces:
        violations.append(MISSING_NAMESPACES)

    return violations


def _has_required_rule(config: MappingConfiguration, target: str) -> bool:
    return any(rule.required and rule.target_attribute == target for rule in config.properties)
