"""Example script showing how to run an extraction session programmatically."""
from __future__ import annotations

from pathlib import Path
import sys

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"
if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from catalog import CatalogSummary  # type: ignore  # noqa: E402
from extraction import ExtractionSession  # type: ignore  # noqa: E402
from utils.config import AppConfig  # type: ignore  # noqa: E402


def main() -> None:
    root = Path(sys.argv[1]) if len(sys.argv) > 1 else Path.cwd()
    session = ExtractionSession(AppConfig(use_external_tool=False))
    catalog = session.extract_directory(root)
    for entry in catalog:
        print(entry)
    print(CatalogSummary.from_catalog(catalog).model_dump_json(indent=2))


if __name__ == "__main__":
    main()
