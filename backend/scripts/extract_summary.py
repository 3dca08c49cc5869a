"""Load an RDF source, run extraction, and print a short summary.

Usage (from repository root):
    python backend/scripts/extract_summary.py backend/data/universe.ttl

Usage (from backend directory):
    python scripts/extract_summary.py path/to/data.ttl --configuration orgchart
    python scripts/extract_summary.py data.ttl --config-file my_mapping.json
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

# Make `triplemap` imports work whether the script is run from repo root or backend/.
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from triplemap.config import get_settings
from triplemap.errors import TripleMapError
from triplemap.mapping.registry import ConfigurationRegistry
from triplemap.services.extraction import ExtractionService
from triplemap.services.result_utils import layer_statistics, result_stats, sort_layers_by_height
from triplemap.store.rdf_loader import RdfSourceLoader

CUSTOM_CONFIGURATION_ID = "custom"


def parse_args() -> argparse.Namespace:
    """Parse script CLI arguments."""

    settings = get_settings()
    parser = argparse.ArgumentParser(description="Extract the visual model from an RDF source.")
    parser.add_argument(
        "source",
        nargs="?",
        default=settings.default_source_location,
        help=f"Path or URL of the RDF source (default: {settings.default_source_location})",
    )
    parser.add_argument(
        "--configuration",
        default=settings.active_configuration_id,
        help="Registered configuration id to extract with.",
    )
    parser.add_argument(
        "--config-file",
        type=Path,
        help=f'JSON mapping configuration to register as "{CUSTOM_CONFIGURATION_ID}" and use.',
    )
    parser.add_argument("--format", default=settings.source_format, help="rdflib parser format.")
    parser.add_argument("--verbose", action="store_true", help="Log extraction diagnostics.")
    return parser.parse_args()


def main() -> int:
    """Run one extraction and print counts per layer."""

    args = parse_args()
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING)
    settings = get_settings()

    registry = ConfigurationRegistry()
    configuration_id: str = args.configuration
    service = ExtractionService(
        registry,
        RdfSourceLoader(format=args.format),
        load_timeout_seconds=settings.load_timeout_seconds,
    )
    try:
        if args.config_file is not None:
            registry.import_from_text(CUSTOM_CONFIGURATION_ID, args.config_file.read_text(encoding="utf-8"))
            configuration_id = CUSTOM_CONFIGURATION_ID
        result = asyncio.run(service.load_and_extract(args.source, configuration_id))
    except TripleMapError as exc:
        print(f"Extraction failed: {exc}", file=sys.stderr)
        return 1

    print("Extraction complete")
    print(f"source={args.source}")
    print(f"configuration_id={configuration_id}")
    for name, count in result_stats(result).items():
        print(f"{name}={count}")
    print()
    stats = layer_statistics(result)
    for key, layer in sort_layers_by_height(result):
        counts = stats.get(key, {"total": 0})
        print(f"  {key} ({layer.display_name}) height={layer.height:g} entities={counts['total']}")
    unlayered = sorted(set(stats) - set(result.layers))
    for key in unlayered:
        print(f"  {key} (no layer definition) entities={stats[key]['total']}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
