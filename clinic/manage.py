"""Maintenance commands for the clinic database.

Usage:
    python -m clinic.manage mark-past
    CLINIC_ADMIN_PASSWORD=... python -m clinic.manage create-admin <username>
"""
import argparse
import getpass
import logging
import os
import sys

from sqlalchemy.exc import SQLAlchemyError

from clinic.core import config
from clinic.database import Base, SessionLocal, engine
from clinic.models import admin, appointment, doctor, patient  # noqa: F401
from clinic.repositories import admins as admin_store
from clinic.services.booking import mark_past_appointments

logger = logging.getLogger(__name__)


def mark_past(_args: argparse.Namespace) -> int:
    db = SessionLocal()
    try:
        updated = mark_past_appointments(db)
    finally:
        db.close()
    print(f"Marked {updated} appointment(s) as past.")
    return 0


def create_admin(args: argparse.Namespace) -> int:
    password = os.getenv("CLINIC_ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    if not password:
        print("A password is required.", file=sys.stderr)
        return 1

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if admin_store.find_by_username(db, args.username) is not None:
            print(f"Admin {args.username} already exists.", file=sys.stderr)
            return 1
        account = admin.Admin(username=args.username)
        account.set_password(password)
        db.add(account)
        db.commit()
    finally:
        db.close()
    print(f"Created admin {args.username}.")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clinic.manage")
    subcommands = parser.add_subparsers(dest="command", required=True)

    subcommands.add_parser("mark-past", help="flag appointments whose time has passed").set_defaults(handler=mark_past)

    create_admin_parser = subcommands.add_parser("create-admin", help="create an admin account")
    create_admin_parser.add_argument("username")
    create_admin_parser.set_defaults(handler=create_admin)

    return parser


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=config.LOG_LEVEL)
    args = build_parser().parse_args(argv)
    try:
        return args.handler(args)
    except SQLAlchemyError:
        logger.exception("Database command failed. Check DATABASE_URL and database credentials.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
