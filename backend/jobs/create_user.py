from __future__ import annotations

import argparse
import getpass

from sqlalchemy.exc import IntegrityError

from app.core.config import settings
from app.core.logger import logger, setup_logging
from app.db.database import Database
from app.services.auth_service import AuthService


def create_user(database: Database, email: str, password: str, full_name: str) -> int:
    with database.session_scope() as db:
        user = AuthService(db).create_user(email=email, password=password, full_name=full_name)
        return user.id


def main() -> None:
    parser = argparse.ArgumentParser(description="Create a clinic staff account")
    parser.add_argument("email")
    parser.add_argument("full_name")
    parser.add_argument("--password", help="Prompted for when omitted")
    args = parser.parse_args()

    password = args.password or getpass.getpass("Password: ")
    if len(password) < settings.MIN_PASSWORD_LENGTH:
        parser.error(f"password must be at least {settings.MIN_PASSWORD_LENGTH} characters")

    setup_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL)
    try:
        database.create_all()
        user_id = create_user(database, args.email, password, args.full_name)
    except IntegrityError:
        parser.error(f"a user with email {args.email} already exists")
    finally:
        database.dispose()

    logger.info("User %s created with id %s", args.email, user_id)
    print(user_id)


if __name__ == "__main__":
    main()
