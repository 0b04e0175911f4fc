"""Import a person roster (CSV or Excel) into the configured store.

Usage: python scripts/import_persons.py roster.csv
"""
from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from src.mailroom.mailroom.common.logging_setup import configure_logging
from src.mailroom.mailroom.container import build_container
from src.mailroom.mailroom.core.exceptions import DomainError
from src.mailroom.mailroom.settings import load_settings


def main(argv: list[str]) -> int:
    if len(argv) != 1:
        print("usage: import_persons.py <roster.csv|roster.xlsx>", file=sys.stderr)
        return 2

    load_dotenv(override=False)
    settings = load_settings()
    configure_logging(settings.log_level)
    container = build_container(settings)

    try:
        report = container.dispatch_service.import_persons_csv(argv[0])
    except DomainError as e:
        print(f"FAILED: {e}", file=sys.stderr)
        return 2
    print(f"Imported {len(report.imported)} of {report.total} row(s)")
    for failure in report.failures:
        print(f"  row {failure.row_number} ({failure.person_id or '-'}): {failure.reason}")
    return 0 if report.ok else 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
