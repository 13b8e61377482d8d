"""
Seed the database with demo team members, categories and tasks.

Usage:
    python scripts/seed_sample_data.py [--reset]

Without --reset the script only adds what is missing and leaves existing tasks
alone. With --reset it first wipes all task data (users are kept).
"""
import sys
import os
import argparse

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dotenv import load_dotenv

load_dotenv()

from taskflow.db import SessionLocal, Base, engine
from taskflow.services.workspace import clear_all_data, seed_sample_data
from taskflow.storage import DatabaseStorageProvider


def main() -> int:
    parser = argparse.ArgumentParser(description="Seed TaskFlow demo data")
    parser.add_argument("--reset", action="store_true", help="Clear all task data before seeding")
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        storage = DatabaseStorageProvider(db)
        if args.reset:
            print("[RESET] Clearing task data...")
            clear_all_data(storage)
        seed_sample_data(storage)
        print(f"[OK] {len(storage.list_team_members())} members, "
              f"{len(storage.list_categories())} categories, {len(storage.list_tasks())} tasks")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
