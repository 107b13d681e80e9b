#!/usr/bin/env python3
"""
CompanyHub management CLI.

Works directly against the configured database (DATABASE_URL), without going
through the HTTP API. Useful for bootstrapping the first account when self
registration is disabled, and for a quick look at what a deployment holds.

Usage:
  python main.py create-user alice@example.com
  python main.py create-user alice@example.com --display-name "Alice" --password s3cret-pass
  python main.py list-users
  python main.py deactivate-user alice@example.com
  python main.py list-companies

Environment variables:
  DATABASE_URL  SQLAlchemy URL of the database (default: sqlite:///./companyhub.db)
"""

import argparse
import getpass
import sys
from typing import Optional

from sqlalchemy.exc import IntegrityError

from auth.models import User
from auth.store import UserStore
from auth.tokens import hash_password
from companies.store import CompanyStore
from core.config import get_settings

_MIN_PASSWORD = 8
_MAX_PASSWORD = 72


def _read_password(password: Optional[str]) -> Optional[str]:
    """Return the password from the flag, or prompt twice for it."""
    if password is None:
        password = getpass.getpass("  Password: ")
        if getpass.getpass("  Repeat password: ") != password:
            print("  [!] Passwords do not match.")
            return None
    if not _MIN_PASSWORD <= len(password) <= _MAX_PASSWORD:
        print(f"  [!] Password must be {_MIN_PASSWORD} to {_MAX_PASSWORD} characters long.")
        return None
    return password


def create_user(db_url: str, username: str, password: Optional[str], display_name: Optional[str]) -> int:
    password = _read_password(password)
    if password is None:
        return 1
    store = UserStore(db_url)
    try:
        user_id = store.create_user(
            User(username=username, hashed_password=hash_password(password), display_name=display_name)
        )
    except IntegrityError:
        print(f"  [!] A user named '{username}' already exists.")
        return 1
    finally:
        store.close()
    print(f"  Created user {username} (id {user_id}).")
    return 0


def list_users(db_url: str) -> int:
    store = UserStore(db_url)
    try:
        users = store.list_users()
    finally:
        store.close()
    if not users:
        print("  No users yet. Create one with: python main.py create-user EMAIL")
        return 0
    for user in users:
        status = "" if user.is_active else "  (inactive)"
        last_login = user.last_login or "never"
        print(f"  {user.id:>5}  {user.username:<40} last login: {last_login}{status}")
    return 0


def set_active(db_url: str, username: str, active: bool) -> int:
    store = UserStore(db_url)
    try:
        user = store.get_by_username(username)
        if user is None:
            print(f"  [!] No user named '{username}'.")
            return 1
        store.update_user(user.id, is_active=active)
    finally:
        store.close()
    print(f"  {user.username} is now {'active' if active else 'inactive'}.")
    return 0


def list_companies(db_url: str) -> int:
    store = CompanyStore(db_url)
    try:
        companies = store.list_all_companies()
    finally:
        store.close()
    if not companies:
        print("  No companies yet.")
        return 0
    for company, member_count in companies:
        print(
            f"  {company.id:<24} {company.name:<32} TIN {company.tin}"
            f"  owner {company.owner_id}  members {member_count}"
        )
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="companyhub",
        description="CompanyHub management commands.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py create-user alice@example.com --display-name "Alice"
  python main.py list-users
  DATABASE_URL=sqlite:///prod.db python main.py list-companies
        """,
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")

    create = sub.add_parser("create-user", help="Create a login account")
    create.add_argument("username", metavar="EMAIL", help="Email address used to log in")
    create.add_argument("--display-name", default=None, help="Name shown in member lists")
    create.add_argument(
        "--password",
        default=None,
        help="Password (prompted for when omitted; avoid passing it on shared machines)",
    )

    sub.add_parser("list-users", help="List login accounts")
    activate = sub.add_parser("activate-user", help="Allow an account to log in again")
    activate.add_argument("username", metavar="EMAIL")
    deactivate = sub.add_parser("deactivate-user", help="Block an account from logging in")
    deactivate.add_argument("username", metavar="EMAIL")
    sub.add_parser("list-companies", help="List companies with their owners and member counts")

    args = parser.parse_args(argv)
    db_url = get_settings().database_url

    if args.command == "create-user":
        return create_user(db_url, args.username, args.password, args.display_name)
    if args.command == "list-users":
        return list_users(db_url)
    if args.command in ("activate-user", "deactivate-user"):
        return set_active(db_url, args.username, args.command == "activate-user")
    if args.command == "list-companies":
        return list_companies(db_url)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
