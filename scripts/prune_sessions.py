"""
Delete expired rows from the sessions table.

Usage:
    python scripts/prune_sessions.py

Meant to run from cron; the API never prunes on its own.
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dotenv import load_dotenv

load_dotenv()

from taskflow.db import SessionLocal
from taskflow.auth.sessions import DatabaseSessionStore


def main() -> int:
    db = SessionLocal()
    try:
        removed = DatabaseSessionStore(db).prune_expired()
        print(f"[OK] Removed {removed} expired session(s)")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
