"""In-memory registry of named mapping configurations."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from threading import RLock
from typing import Any

from pydantic import ValidationError

from triplemap.errors import (
    CannotRemoveDefaultError,
    ConfigurationInvalidError,
    ConfigurationNotFoundError,
    SourceNotFoundError,
)
from triplemap.mapping.builtins import DEFAULT_CONFIGURATION_ID, builtin_configurations, multiverse_mapping
from triplemap.mapping.types import MappingConfiguration
from triplemap.mapping.validator import validate_mapping

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ConfigurationInfo:
    """Summary of one configuration for configuration pickers."""

    id: str
    entity_types: list[str]
    properties: list[str]
    relationships: list[str]
    namespaces: list[str]
    is_active: bool


class ConfigurationRegistry:
    """Named configurations plus one active selection.

    Mutations are serialized with a re-entrant lock. Stored configurations are
    private deep copies, and reads hand out deep copies, so nothing outside the
    registry can change a configuration after it passed validation.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._configurations: dict[str, MappingConfiguration] = {}
        self._active_id = DEFAULT_CONFIGURATION_ID
        self._configurations.update(builtin_configurations())

    @property
    def active_id(self) -> str:
        return self._active_id

    def register(self, configuration_id: str, config: MappingConfiguration) -> None:
        """Validate and store ``config``; nothing is stored when validation fails."""

        violations = validate_mapping(config)
        if violations:
            logger.warning(
                "registry.configuration_rejected id=%s violations=%d",
                configuration_id,
                len(violations),
            )
            raise ConfigurationInvalidError(violations, configuration_id)
        with self._lock:
            self._configurations[configuration_id] = config.model_copy(deep=True)
        logger.info(
            "registry.configuration_registered id=%s entity_types=%d relationships=%d",
            configuration_id,
            len(config.entity_types),
            len(config.relationships),
        )

    def get(self, configuration_id: str) -> MappingConfiguration | None:
        config = self._configurations.get(configuration_id)
        return config.model_copy(deep=True) if config is not None else None

    def get_active(self) -> MappingConfiguration:
        """Return the active configuration, falling back to the built-in default."""

        with self._lock:
            active_id = self._active_id
            config = self._configurations.get(active_id)
        if config is None:
            logger.warning("registry.active_missing id=%s fallback=builtin_default", active_id)
            return multiverse_mapping()
        return config.model_copy(deep=True)

    def set_active(self, configuration_id: str) -> None:
        with self._lock:
            if configuration_id not in self._configurations:
                raise ConfigurationNotFoundError(configuration_id, self.list_ids())
            self._active_id = configuration_id
        logger.info("registry.active_switched id=%s", configuration_id)

    def remove(self, configuration_id: str) -> bool:
        """Remove a configuration; returns whether an entry was removed."""

        if configuration_id == DEFAULT_CONFIGURATION_ID:
            raise CannotRemoveDefaultError()
        with self._lock:
            if self._active_id == configuration_id:
                self._active_id = DEFAULT_CONFIGURATION_ID
            removed = self._configurations.pop(configuration_id, None) is not None
        if removed:
            logger.info("registry.configuration_removed id=%s", configuration_id)
        return removed

    def clone(self, source_id: str, new_id: str) -> None:
        with self._lock:
            source = self._configurations.get(source_id)
            if source is None:
                raise SourceNotFoundError(source_id)
            self.register(new_id, source.model_copy(deep=True))

    def list_ids(self) -> list[str]:
        with self._lock:
            return list(self._configurations)

    def get_info(self, configuration_id: str) -> ConfigurationInfo | None:
        with self._lock:
            config = self._configurations.get(configuration_id)
            is_active = configuration_id == self._active_id
        if config is None:
            return None
        return ConfigurationInfo(
            id=configuration_id,
            entity_types=[entity_type.type_id for entity_type in config.entity_types],
            properties=[rule.target_attribute for rule in config.properties],
            relationships=[rule.label for rule in config.relationships],
            namespaces=list(config.namespaces),
            is_active=is_active,
        )

    def list_info(self) -> list[ConfigurationInfo]:
        infos = [self.get_info(configuration_id) for configuration_id in self.list_ids()]
        return [info for info in infos if info is not None]

    def export_as_text(self, configuration_id: str) -> str:
        """Serialize a configuration to pretty-printed JSON."""

        config = self._configurations.get(configuration_id)
        if config is None:
            raise ConfigurationNotFoundError(configuration_id, self.list_ids())
        return config.model_dump_json(indent=2)

    def import_from_text(self, configuration_id: str, text: str) -> MappingConfiguration:
        """Parse JSON text, validate it, and register it under ``configuration_id``."""

        try:
            config = MappingConfiguration.model_validate_json(text)
        except ValidationError as exc:
            raise ConfigurationInvalidError([_describe_structure_error(exc)], configuration_id) from exc
        self.register(configuration_id, config)
        return config

    def import_from_dict(self, configuration_id: str, payload: dict[str, Any]) -> MappingConfiguration:
        try:
            config = MappingConfiguration.model_validate(payload)
        except ValidationError as exc:
            raise ConfigurationInvalidError([_describe_structure_error(exc)], configuration_id) from exc
        self.register(configuration_id, config)
        return config

    def reset(self) -> None:
        """Restore exactly the built-in configurations and select the default."""

        with self._lock:
            self._configurations = builtin_configurations()
            self._active_id = DEFAULT_CONFIGURATION_ID
        logger.info("registry.reset configurations=%d", len(self._configurations))

    def __contains__(self, configuration_id: object) -> bool:
        return configuration_id in self._configurations

    def __len__(self) -> int:
        return len(self._configurations)


def _describe_structure_error(exc: ValidationError) -> str:
    details = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        details.append(f"{location}: {error['msg']}" if location else error["msg"])
    return f"Invalid configuration structure: {'; '.join(details)}"
