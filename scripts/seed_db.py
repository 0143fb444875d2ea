from __future__ import annotations

import argparse
import importlib
import sys
from datetime import date
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.leave_management.leave_management.container import build_container
from src.leave_management.leave_management.database.bootstrap import apply_seed_sql, ensure_demo_data


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed leave types, demo accounts and their quotas.")
    parser.add_argument("--year", type=int, default=date.today().year, help="quota year to provision")
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    db_config = dict(settings.DB_CONFIG)

    apply_seed_sql(db_config, seed_path=REPO_ROOT / "database" / "seed.sql")
    ensure_demo_data(build_container(db_config=db_config), year=args.year)

    print(
        "OK: Seeded database -> "
        f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')} "
        f"(quota year {args.year})"
    )


if __name__ == "__main__":
    main()
