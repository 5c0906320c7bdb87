"""Example: using the service layer directly (no Flask).

Controllers are a thin layer; the logic lives in the services.
"""

import importlib

from config import get_settings_module

from src.cohort_tracker.cohort_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    board = container.interview_service.leaderboard()
    print(board.summary.to_dict())
    for m in board.students[:5]:
        print(m.to_dict())


if __name__ == "__main__":
    main()
