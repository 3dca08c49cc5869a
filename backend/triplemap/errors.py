"""Error taxonomy shared by the registry, engine, and extraction service."""

from __future__ import annotations


class TripleMapError(RuntimeError):
    """Base class for all structured triplemap failures."""


class ConfigurationInvalidError(TripleMapError):
    """Raised when a mapping configuration fails validation."""

    def __init__(self, violations: list[str], configuration_id: str | None = None) -> None:
        self.violations = list(violations)
        self.configuration_id = configuration_id
        target = f' for "{configuration_id}"' if configuration_id else ""
        super().__init__(f"Invalid mapping configuration{target}: {', '.join(self.violations)}")


class ConfigurationNotFoundError(TripleMapError):
    """Raised when a configuration id is not registered."""

    def __init__(self, configuration_id: str, available: list[str] | None = None) -> None:
        self.configuration_id = configuration_id
        self.available = list(available or [])
        message = f'Configuration "{configuration_id}" not found'
        if self.available:
            message += f". Available configurations: {', '.join(self.available)}"
        super().__init__(message)


class SourceNotFoundError(TripleMapError):
    """Raised when a clone source configuration does not exist."""

    def __init__(self, configuration_id: str) -> None:
        self.configuration_id = configuration_id
        super().__init__(f'Source configuration "{configuration_id}" not found')


class CannotRemoveDefaultError(TripleMapError):
    """Raised when removal of the protected default configuration is attempted."""

    def __init__(self) -> None:
        super().__init__("Cannot remove the default configuration")


class NoDataLoadedError(TripleMapError):
    """Raised when extraction is attempted without a triple store."""

    def __init__(self) -> None:
        super().__init__("No triple data loaded. Load a source before extracting.")


class ResultValidationFailedError(TripleMapError):
    """Raised when an extraction result fails the post-hoc shape check."""

    def __init__(self, reasons: list[str]) -> None:
        self.reasons = list(reasons)
        super().__init__(f"Result validation failed: {'; '.join(self.reasons)}")


class LoadFailedError(TripleMapError):
    """Raised when the external loader cannot produce a triple store."""

    def __init__(self, source: str, cause: BaseException | str) -> None:
        self.source = source
        self.cause = cause
        super().__init__(f'Failed to load triples from "{source}": {cause}')


class LoadTimedOutError(TripleMapError):
    """Raised when loading a source exceeds the configured deadline."""

    def __init__(self, source: str, timeout_seconds: float) -> None:
        self.source = source
        self.timeout_seconds = timeout_seconds
        super().__init__(f'Loading "{source}" timed out after {timeout_seconds:g}s')


class SourceNotAllowedError(TripleMapError):
    """Raised when a requested source lies outside the configured source locations."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f'Source "{source}" is outside the allowed source locations')
