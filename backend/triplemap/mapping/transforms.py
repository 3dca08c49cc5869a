"""Named value transforms referenced by mapping configurations."""

from __future__ import annotations

import math
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

Transform = Callable[[str], Any]


class UnknownTransformError(KeyError):
    """Raised when a configuration names a transform that is not in the catalogue."""


def parse_position(value: str) -> tuple[float, float, float] | None:
    """Parse ``"x,y,z"`` into three finite floats, or ``None``."""

    parts = [part.strip() for part in value.split(",")]
    if len(parts) != 3:
        return None
    try:
        coords = tuple(float(part) for part in parts)
    except ValueError:
        return None
    if not all(math.isfinite(coord) for coord in coords):
        return None
    return coords  # type: ignore[return-value]


def parse_hex_color(value: str) -> int:
    """Parse ``ff8800``, ``0xff8800`` or ``#ff8800`` into an int."""

    cleaned = value.strip()
    if cleaned.lower().startswith("0x"):
        cleaned = cleaned[2:]
    elif cleaned.startswith("#"):
        cleaned = cleaned[1:]
    return int(cleaned, 16)


def iri_local_name(value: str) -> str:
    """Return the segment after the last ``/`` of an IRI (empty if it ends with ``/``)."""

    return value.split("/")[-1]


def _position_csv(value: str) -> tuple[float, float, float]:
    coords = parse_position(value)
    if coords is None:
        raise ValueError(f"expected three comma-separated numbers, got {value!r}")
    return coords


BUILTIN_TRANSFORMS: Mapping[str, Transform] = MappingProxyType(
    {
        "identity": str,
        "strip": str.strip,
        "position_csv": _position_csv,
        "iri_local_name": iri_local_name,
        "hex_color": parse_hex_color,
        "float": float,
        "int": int,
    }
)


def build_transform_catalog(extra: Mapping[str, Transform] | None = None) -> Mapping[str, Transform]:
    """Merge host-supplied transforms over the built-ins."""

    if not extra:
        return BUILTIN_TRANSFORMS
    merged = dict(BUILTIN_TRANSFORMS)
    merged.update(extra)
    return MappingProxyType(merged)


def get_transform(catalog: Mapping[str, Transform], name: str) -> Transform:
    try:
        return catalog[name]
    except KeyError:
        raise UnknownTransformError(name) from None
