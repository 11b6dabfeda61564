"""Seed demo users for local development."""

from __future__ import annotations

from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from app import create_app
from models import db
from repositories.users import UserRepository
from services import get_services

DEMO_PASSWORD = "DemoPass123"
DEMO_EMAILS = [f"demo{index:02d}@example.com" for index in range(1, 26)]


def seed_users(emails: list[str], password: str) -> int:
    """Create any missing users and return how many were created."""

    repository = UserRepository(db.session)
    service = get_services().users
    created = 0
    for email in emails:
        if repository.email_exists(email):
            continue
        service.create_user(email, password)
        created += 1
    return created


def main() -> None:
    app = create_app()
    with app.app_context():
        db.create_all()
        created = seed_users(DEMO_EMAILS, DEMO_PASSWORD)
        print(f"Demo users created: {created} (skipped {len(DEMO_EMAILS) - created})")


if __name__ == "__main__":
    main()
