"""Service layer: extraction orchestration and result helpers."""

from triplemap.services.extraction import ExtractionService, TripleLoader

__all__ = ["ExtractionService", "TripleLoader"]
