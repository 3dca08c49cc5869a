"""Extraction engine and result types."""

from triplemap.extraction.engine import MappingExtractor
from triplemap.extraction.extractor_interface import ExtractorInterface
from triplemap.extraction.result_validator import (
    ensure_valid_result,
    find_layer_key_mismatches,
    validate_query_result,
)
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

__all__ = [
    "DEFAULT_LAYER_HEIGHT",
    "NEUTRAL_LAYER_COLOR",
    "CrossLayerLink",
    "ExtractedEntity",
    "ExtractedLayer",
    "ExtractedRelationship",
    "ExtractorInterface",
    "MappingExtractor",
    "Position",
    "QueryResult",
    "ensure_valid_result",
    "find_layer_key_mismatches",
    "validate_query_result",
]
