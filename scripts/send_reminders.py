"""Email every person one reminder listing all of their waiting packages.

Meant to be run on a schedule (cron, systemd timer).
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
from src.mailroom.mailroom.core.exceptions import PartialBatchFailure
from src.mailroom.mailroom.settings import load_settings


def main() -> int:
    load_dotenv(override=False)
    settings = load_settings()
    configure_logging(settings.log_level)
    container = build_container(settings)

    try:
        report = container.dispatch_service.send_all_reminders()
    except PartialBatchFailure as e:
        print(f"FAILED: {e} (not sent: {', '.join(e.report.failed)})", file=sys.stderr)
        return 1

    print(f"OK: {len(report.sent)} reminder(s) sent")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
