"""Configuration-driven extraction of the visual model from a triple store."""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from time import perf_counter
from types import MappingProxyType
from typing import Any

from triplemap.errors import ConfigurationInvalidError, NoDataLoadedError
from triplemap.extraction.extractor_interface import ExtractorInterface
from triplemap.extraction.types import (
    DEFAULT_LAYER_HEIGHT,
    NEUTRAL_LAYER_COLOR,
    CrossLayerLink,
    ExtractedEntity,
    ExtractedLayer,
    ExtractedRelationship,
    Position,
    QueryResult,
)
from triplemap.mapping.transforms import Transform, build_transform_catalog, get_transform, parse_hex_color, parse_position
from triplemap.mapping.types import MappingConfiguration, PropertyRule
from triplemap.mapping.validator import validate_mapping
from triplemap.store.triple_store import RDF_TYPE, TripleStore

logger = logging.getLogger(__name__)

_ABSENT = object()


class MappingExtractor(ExtractorInterface):
    """Runs the four extraction passes for one ``(store, configuration)`` pair.

    The extractor holds no per-call state, so one instance can serve concurrent
    callers. Missing or malformed data never raises: the affected entity, layer
    or attribute is dropped and a warning is logged.
    """

    def __init__(self, transforms: Mapping[str, Transform] | None = None) -> None:
        self._transforms = build_transform_catalog(transforms)

    def extract(self, store: TripleStore | None, config: MappingConfiguration) -> QueryResult:
        if store is None:
            raise NoDataLoadedError()
        violations = validate_mapping(config)
        if violations:
            raise ConfigurationInvalidError(violations)

        total_started = perf_counter()
        entities = self._extract_entities(store, config)
        relationships = self._extract_relationships(store, config)
        layers = self._extract_layers(store, config)
        cross_layer_links = self._extract_cross_layer_links(store, config)

        result = QueryResult(
            entities=tuple(entities),
            relationships=tuple(relationships),
            layers=MappingProxyType(layers),
            cross_layer_links=tuple(cross_layer_links),
            configuration_used=config,
        )
        logger.info(
            (
                "extraction.timing entities=%d relationships=%d layers=%d "
                "cross_layer_links=%d total_ms=%.2f"
            ),
            len(result.entities),
            len(result.relationships),
            len(result.layers),
            len(result.cross_layer_links),
            (perf_counter() - total_started) * 1000.0,
        )
        return result

    def _extract_entities(self, store: TripleStore, config: MappingConfiguration) -> list[ExtractedEntity]:
        """Materialize one entity per subject typed with a configured class."""

        class_to_type: dict[str, str] = {}
        for entity_type in config.entity_types:
            class_to_type.setdefault(entity_type.class_iri, entity_type.type_id)

        entities: list[ExtractedEntity] = []
        seen_subjects: set[str] = set()
        for triple in store.match(predicate=RDF_TYPE):
            type_id = class_to_type.get(triple.object)
            if type_id is None:
                continue
            if triple.subject in seen_subjects:
                logger.debug(
                    "extraction.duplicate_type subject=%s type_id=%s",
                    triple.subject,
                    type_id,
                )
                continue
            seen_subjects.add(triple.subject)
            entity = self._build_entity(store, config, triple.subject, type_id)
            if entity is not None:
                entities.append(entity)
        return entities

    def _build_entity(
        self,
        store: TripleStore,
        config: MappingConfiguration,
        subject: str,
        type_id: str,
    ) -> ExtractedEntity | None:
        label: str | None = None
        position: Position | None = None
        layer_key: str | None = None
        subtitle: str | None = None
        color: int | None = None
        extra: dict[str, Any] = {}
        missing_required: list[str] = []

        for rule in config.properties:
            raw = self._first_value(store, subject, rule.property_iri)
            if raw is None:
                if rule.required:
                    missing_required.append(rule.property_iri)
                continue
            value = self._apply_transform(rule.transform, raw, subject=subject, property_iri=rule.property_iri)
            if value is _ABSENT:
                if rule.required:
                    missing_required.append(rule.property_iri)
                continue

            target = rule.target_attribute
            if target == "label":
                label = label or str(value)
            elif target == "position":
                if position is None:
                    position = self._route_position(value, raw, subject=subject, rule=rule)
            elif target == "layer":
                layer_key = layer_key or str(value)
            elif target == "subtitle":
                subtitle = subtitle or str(value)
            else:
                extra.setdefault(rule.property_iri, value)
                if target == "color" and color is None and _is_number(value) and float(value).is_integer():
                    color = int(value)

        if missing_required:
            logger.warning(
                "extraction.entity_dropped subject=%s reason=missing_required properties=%s",
                subject,
                ",".join(missing_required),
            )
            return None

        missing = [
            name
            for name, present in (("label", bool(label)), ("position", position is not None), ("layer", bool(layer_key)))
            if not present
        ]
        if missing:
            logger.warning(
                "extraction.entity_dropped subject=%s reason=incomplete missing=%s",
                subject,
                ",".join(missing),
            )
            return None

        return ExtractedEntity(
            id=subject,
            type_id=type_id,
            label=label,
            position=position,
            layer_key=layer_key,
            subtitle=subtitle,
            color=color,
            extra=MappingProxyType(extra),
        )

    def _route_position(
        self,
        value: Any,
        raw: str,
        *,
        subject: str,
        rule: PropertyRule,
    ) -> Position | None:
        position = _coerce_position(value)
        if position is None:
            parsed = parse_position(raw)
            position = Position(*parsed) if parsed is not None else None
        if position is None:
            logger.warning(
                "extraction.invalid_position subject=%s property=%s value=%r",
                subject,
                rule.property_iri,
                raw,
            )
        return position

    def _extract_relationships(
        self,
        store: TripleStore,
        config: MappingConfiguration,
    ) -> list[ExtractedRelationship]:
        """Emit one relationship per statement with a configured predicate."""

        predicates = {rule.predicate_iri for rule in config.relationships}
        if not predicates:
            return []
        relationships: list[ExtractedRelationship] = []
        for triple in store:
            if triple.predicate not in predicates:
                continue
            relationships.append(
                ExtractedRelationship(
                    subject_id=triple.subject,
                    predicate_iri=triple.predicate,
                    object_id=triple.object,
                    layer_key=self.lookup_layer_key(store, config, triple.subject),
                )
            )
        return relationships

    def lookup_layer_key(self, store: TripleStore, config: MappingConfiguration, subject: str) -> str:
        """Derive a subject's layer key from its layer property value; ``""`` if unresolved."""

        grouping = config.layer_grouping
        raw = self._first_value(store, subject, grouping.layer_property_iri)
        if raw is None:
            return ""
        value = self._apply_transform(
            grouping.extract_layer_id,
            raw,
            subject=subject,
            property_iri=grouping.layer_property_iri,
        )
        return "" if value is _ABSENT else str(value)

    def _extract_layers(self, store: TripleStore, config: MappingConfiguration) -> dict[str, ExtractedLayer]:
        """Materialize layers from subjects typed with the layer class.

        The layer key comes from applying the layer-id extractor to the layer
        subject's own IRI, whereas relationship layer keys come from a property
        value. Both must agree for keys to line up; see
        ``find_layer_key_mismatches``.
        """

        grouping = config.layer_grouping
        if not grouping.layer_class_iri:
            return {}

        rules = config.rules_for("label", "color", "height")
        layers: dict[str, ExtractedLayer] = {}
        for triple in store.match(predicate=RDF_TYPE, object=grouping.layer_class_iri):
            subject = triple.subject
            key = self._apply_transform(grouping.extract_layer_id, subject, subject=subject, property_iri=RDF_TYPE)
            if key is _ABSENT or not str(key):
                logger.warning("extraction.layer_dropped subject=%s reason=no_key", subject)
                continue
            key = str(key)
            if key in layers:
                logger.debug("extraction.duplicate_layer subject=%s key=%s", subject, key)
                continue

            display_name: str | None = None
            color: int | None = None
            height: float | None = None
            for rule in rules:
                raw = self._first_value(store, subject, rule.property_iri)
                if raw is None:
                    continue
                value = self._apply_transform(rule.transform, raw, subject=subject, property_iri=rule.property_iri)
                if value is _ABSENT:
                    continue
                if rule.target_attribute == "label":
                    display_name = display_name or str(value)
                elif rule.target_attribute == "color" and color is None:
                    color = _coerce_color(value, raw)
                elif rule.target_attribute == "height" and height is None:
                    height = _coerce_height(value, raw)

            if not display_name:
                logger.warning("extraction.layer_dropped subject=%s key=%s reason=no_display_name", subject, key)
                continue
            layers[key] = ExtractedLayer(
                key=key,
                display_name=display_name,
                color=NEUTRAL_LAYER_COLOR if color is None else color,
                height=DEFAULT_LAYER_HEIGHT if height is None else height,
            )
        return layers

    def _extract_cross_layer_links(
        self,
        store: TripleStore,
        config: MappingConfiguration,
    ) -> list[CrossLayerLink]:
        rule = config.cross_layer_connections
        if rule is None:
            return []
        return [
            CrossLayerLink(source_id=triple.subject, target_id=triple.object)
            for triple in store.match(predicate=rule.predicate_iri)
        ]

    def _first_value(self, store: TripleStore, subject: str, property_iri: str) -> str | None:
        """Return the first object for ``(subject, property_iri)`` in store order.

        Properties are treated as single-valued: identical duplicates are
        harmless, a differing second value is reported and ignored.
        """

        first: str | None = None
        for triple in store.match(subject=subject, predicate=property_iri):
            if first is None:
                first = triple.object
            elif triple.object != first:
                logger.warning(
                    "extraction.conflicting_values subject=%s property=%s kept=%r ignored=%r",
                    subject,
                    property_iri,
                    first,
                    triple.object,
                )
                break
        return first

    def _apply_transform(self, name: str | None, raw: str, *, subject: str, property_iri: str) -> Any:
        if not name:
            return raw
        try:
            return get_transform(self._transforms, name)(raw)
        except Exception as exc:
            logger.warning(
                "extraction.transform_failed subject=%s property=%s transform=%s error=%s",
                subject,
                property_iri,
                name,
                exc,
            )
            return _ABSENT


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


def _coerce_position(value: Any) -> Position | None:
    if isinstance(value, Mapping):
        try:
            components = (value["x"], value["y"], value["z"])
        except KeyError:
            return None
    elif isinstance(value, (tuple, list)) and len(value) == 3:
        components = tuple(value)
    else:
        return None
    if not all(_is_number(component) for component in components):
        return None
    return Position(*(float(component) for component in components))


def _coerce_color(value: Any, raw: str) -> int | None:
    if _is_number(value) and float(value).is_integer():
        return int(value)
    for candidate in (value, raw):
        if isinstance(candidate, str):
            try:
                return parse_hex_color(candidate)
            except ValueError:
                continue
    return None


def _coerce_height(value: Any, raw: str) -> float | None:
    if _is_number(value):
        return float(value)
    try:
        height = float(raw)
    except ValueError:
        return None
    return height if math.isfinite(height) else None
