"""Follow a session's public attendance dashboard from the terminal.

Usage: python scripts/watch_attendance.py <public_id> [--interval 30]
"""
from __future__ import annotations

import argparse
import importlib
import sys
import threading
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.cohort_tracker.cohort_tracker.attendance.dashboard import AttendancePoller
from src.cohort_tracker.cohort_tracker.container import build_container
from src.cohort_tracker.cohort_tracker.core.enums import LoadState


def _render(poller: AttendancePoller) -> None:
    if poller.state == LoadState.ERROR:
        print(f"! refresh failed: {poller.error}")
        return

    snap = poller.snapshot
    print(f"== {snap.session.session_name} ({snap.session.session_date}) present={snap.present_count}")
    if snap.notice:
        print(f"   {snap.notice}")
    for r in snap.records:
        print(f"   {r.marked_at:%H:%M:%S}  {r.student_name}")


def main() -> None:
    settings = importlib.import_module(get_settings_module())

    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("public_id")
    parser.add_argument("--interval", type=float, default=getattr(settings, "DASHBOARD_POLL_SECONDS", 30))
    args = parser.parse_args()

    container = build_container(db_config=settings.DB_CONFIG)
    poller = AttendancePoller(lambda: container.dashboard_service.load(args.public_id), interval=args.interval)
    poller.subscribe(_render)

    poller.start()
    try:
        threading.Event().wait()
    except KeyboardInterrupt:
        pass
    finally:
        poller.stop()


if __name__ == "__main__":
    main()
