"""
Create or update a login user.

Usage:
    python scripts/create_user.py --username admin --password secret --role admin [--email admin@company.com]

Idempotent: the user id defaults to the username, so running it again updates
the same record (new password, role, names).
"""
import sys
import os
import argparse

# Add parent directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from dotenv import load_dotenv

load_dotenv()

from taskflow.db import SessionLocal, Base, engine
from taskflow.auth.security import get_password_hash
from taskflow.storage import DatabaseStorageProvider

ROLES = ("guest", "admin", "super_admin")


def main() -> int:
    parser = argparse.ArgumentParser(description="Create or update a TaskFlow login user")
    parser.add_argument("--username", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--role", default="guest", choices=ROLES)
    parser.add_argument("--id", dest="user_id", default=None, help="User id (defaults to the username)")
    parser.add_argument("--email", default=None)
    parser.add_argument("--first-name", default=None)
    parser.add_argument("--last-name", default=None)
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        storage = DatabaseStorageProvider(db)
        user = storage.upsert_user(
            {
                "id": args.user_id or args.username,
                "username": args.username,
                "password_hash": get_password_hash(args.password),
                "email": args.email,
                "first_name": args.first_name,
                "last_name": args.last_name,
                "role": args.role,
            }
        )
        print(f"[OK] User {user.username} ({user.id}) saved with role {user.role}")
    finally:
        db.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())
