"""Load, extract, validate, and cache orchestration."""

from __future__ import annotations

import asyncio
import logging
from collections import OrderedDict
from time import perf_counter
from typing import Protocol

from triplemap.errors import (
    ConfigurationNotFoundError,
    LoadFailedError,
    LoadTimedOutError,
    TripleMapError,
)
from triplemap.extraction.engine import MappingExtractor
from triplemap.extraction.extractor_interface import ExtractorInterface
from triplemap.extraction.result_validator import ensure_valid_result, find_layer_key_mismatches
from triplemap.extraction.types import QueryResult
from triplemap.mapping.registry import ConfigurationRegistry
from triplemap.mapping.types import MappingConfiguration
from triplemap.store.rdf_loader import RdfSourceLoader
from triplemap.store.triple_store import TripleStore

logger = logging.getLogger(__name__)

CacheKey = tuple[str, str]


class TripleLoader(Protocol):
    """Protocol for pluggable source loaders."""

    async def load(self, source: str) -> TripleStore | None:
        """Return a triple store for ``source``."""


class ExtractionService:
    """Turns a source plus a configuration id into a validated, cached result.

    At most one load runs at a time per service. Callers arriving while a load
    is in flight wait for it and then re-check the cache, so concurrent
    requests for the same ``(source, configuration_id)`` share a single load.
    """

    def __init__(
        self,
        registry: ConfigurationRegistry,
        loader: TripleLoader | None = None,
        extractor: ExtractorInterface | None = None,
        *,
        load_timeout_seconds: float | None = None,
        max_cached_results: int = 64,
    ) -> None:
        self._registry = registry
        self._loader = loader or RdfSourceLoader()
        self._extractor = extractor or MappingExtractor()
        self._load_timeout_seconds = load_timeout_seconds
        self._max_cached_results = max(1, max_cached_results)
        self._cache: OrderedDict[CacheKey, QueryResult] = OrderedDict()
        self._load_lock = asyncio.Lock()
        self._loading = False

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    async def load_and_extract(self, source: str, configuration_id: str) -> QueryResult:
        """Return the result for ``source`` under ``configuration_id``, loading it if not cached."""

        return await self._load_and_extract(source, configuration_id, force=False)

    async def load_with_active_configuration(self, source: str) -> QueryResult:
        return await self._load_and_extract(source, self._registry.active_id, force=False)

    async def refresh(self, source: str, configuration_id: str) -> QueryResult:
        """Drop any cached result and run the full load again."""

        self._cache.pop((source, configuration_id), None)
        return await self._load_and_extract(source, configuration_id, force=True)

    def get_cached(self, source: str, configuration_id: str) -> QueryResult | None:
        return self._cache.get((source, configuration_id))

    def invalidate(self, configuration_id: str | None = None) -> int:
        """Drop cached results, optionally only those built with ``configuration_id``."""

        if configuration_id is None:
            dropped = len(self._cache)
            self._cache.clear()
            return dropped
        stale = [key for key in self._cache if key[1] == configuration_id]
        for key in stale:
            del self._cache[key]
        return len(stale)

    async def _load_and_extract(self, source: str, configuration_id: str, *, force: bool) -> QueryResult:
        config = self._registry.get(configuration_id)
        if config is None:
            raise ConfigurationNotFoundError(configuration_id, self._registry.list_ids())

        key = (source, configuration_id)
        if not force:
            cached = self._fresh_cached(key, config)
            if cached is not None:
                return cached

        async with self._load_lock:
            if not force:
                cached = self._fresh_cached(key, config)
                if cached is not None:
                    logger.info(
                        "extraction_service.shared_load source=%s configuration_id=%s",
                        source,
                        configuration_id,
                    )
                    return cached
            return await self._run_pipeline(source, configuration_id, config)

    def _fresh_cached(self, key: CacheKey, config: MappingConfiguration) -> QueryResult | None:
        """Return the cached result for ``key`` unless it was built from a different configuration."""

        result = self._cache.get(key)
        if result is None:
            return None
        if result.configuration_used != config:
            logger.info(
                "extraction_service.stale_result source=%s configuration_id=%s",
                key[0],
                key[1],
            )
            del self._cache[key]
            return None
        self._cache.move_to_end(key)
        return result

    def _store(self, key: CacheKey, result: QueryResult) -> None:
        self._cache[key] = result
        self._cache.move_to_end(key)
        while len(self._cache) > self._max_cached_results:
            evicted, _ = self._cache.popitem(last=False)
            logger.debug("extraction_service.evicted source=%s configuration_id=%s", evicted[0], evicted[1])

    async def _run_pipeline(
        self,
        source: str,
        configuration_id: str,
        config: MappingConfiguration,
    ) -> QueryResult:
        total_started = perf_counter()
        self._loading = True
        try:
            started = perf_counter()
            store = await self._load(source)
            load_ms = (perf_counter() - started) * 1000.0

            started = perf_counter()
            result = await asyncio.to_thread(self._extractor.extract, store, config)
            extract_ms = (perf_counter() - started) * 1000.0

            ensure_valid_result(result)
            mismatches = find_layer_key_mismatches(result)
            if mismatches:
                logger.warning(
                    "extraction_service.layer_key_mismatch configuration_id=%s keys=%s",
                    configuration_id,
                    ",".join(mismatches),
                )

            self._store((source, configuration_id), result)
            logger.info(
                (
                    "extraction_service.timing source=%s configuration_id=%s "
                    "load_ms=%.2f extract_ms=%.2f total_ms=%.2f entities=%d relationships=%d layers=%d"
                ),
                source,
                configuration_id,
                load_ms,
                extract_ms,
                (perf_counter() - total_started) * 1000.0,
                len(result.entities),
                len(result.relationships),
                len(result.layers),
            )
            return result
        except Exception:
            logger.exception(
                "extraction_service.failed source=%s configuration_id=%s elapsed_ms=%.2f",
                source,
                configuration_id,
                (perf_counter() - total_started) * 1000.0,
            )
            raise
        finally:
            self._loading = False

    async def _load(self, source: str) -> TripleStore | None:
        timeout = self._load_timeout_seconds
        try:
            if timeout is None:
                return await self._loader.load(source)
            return await asyncio.wait_for(self._loader.load(source), timeout=timeout)
        except asyncio.TimeoutError as exc:
            if timeout is None:
                raise LoadFailedError(source, exc) from exc
            raise LoadTimedOutError(source, timeout) from exc
        except TripleMapError:
            raise
        except Exception as exc:
            raise LoadFailedError(source, exc) from exc
