"""Example: drive the attendance service layer directly (no Flask).

Usage: python examples/example_usage.py <telegram_id> [commit]
"""

import importlib
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.fitness_club.fitness_club.container import build_container


def main():
    if len(sys.argv) < 2:
        raise SystemExit(__doc__)

    settings = importlib.import_module(get_settings_module())
    container = build_container(
        db_config=settings.DB_CONFIG,
        venue_offset_hours=settings.VENUE_UTC_OFFSET_HOURS,
        telegram_token=settings.TELEGRAM_BOT_TOKEN,
    )

    telegram_id = sys.argv[1]
    if len(sys.argv) > 2 and sys.argv[2] == "commit":
        outcome = container.attendance_service.commit(telegram_id)
    else:
        outcome = container.attendance_service.check(telegram_id)
    print(json.dumps(outcome.to_dict(), ensure_ascii=False, indent=2))


if __name__ == "__main__":
    main()
