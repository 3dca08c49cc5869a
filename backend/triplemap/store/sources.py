"""Confine requested sources to a root directory plus an explicit allowlist."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from urllib.parse import urlparse

from triplemap.errors import SourceNotAllowedError


def resolve_source(source: str, *, root: Path, allowed: Iterable[str] = ()) -> str:
    """Return the location to load for ``source`` or raise ``SourceNotAllowedError``.

    Entries of ``allowed`` (URLs or paths) pass through verbatim. Anything
    else must be a filesystem path that resolves inside ``root``; relative
    paths are taken relative to it. URLs not listed in ``allowed`` are
    rejected.
    """

    if source in set(allowed):
        return source
    # Single-letter schemes are Windows drive letters, not URLs.
    if len(urlparse(source).scheme) > 1:
        raise SourceNotAllowedError(source)

    resolved_root = root.resolve()
    path = Path(source)
    if not path.is_absolute():
        path = resolved_root / path
    resolved = path.resolve()
    if not resolved.is_relative_to(resolved_root):
        raise SourceNotAllowedError(source)
    return str(resolved)
