"""Command-line preprocessing: parse a nutrition CSV into a JSON snapshot."""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path

from health_tracker.app_logging import configure_logging
from health_tracker.domain.catalog import ABBREVIATED_LAYOUT, NAMED_LAYOUTS
from health_tracker.services.catalog import export_catalog_json, load_catalog

_logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse ``csv_path`` and write the catalog to ``json_path``."""
    parser = argparse.ArgumentParser(
        prog="health-tracker-export",
        description="Health Tracker: export a nutrition CSV as JSON.",
    )
    parser.add_argument("csv_path", type=Path)
    parser.add_argument("json_path", type=Path)
    parser.add_argument(
        "--layout", choices=sorted(NAMED_LAYOUTS), default=ABBREVIATED_LAYOUT.name
    )
    args = parser.parse_args(argv)
    configure_logging()

    try:
        raw_text = args.csv_path.read_text(encoding="utf-8", errors="replace")
    except OSError:
        _logger.exception("Could not read %s", args.csv_path)
        return 1
    catalog = load_catalog(raw_text, NAMED_LAYOUTS[args.layout])
    count = export_catalog_json(catalog, args.json_path)
    print(f"Health Tracker: exported {count} foods to {args.json_path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
