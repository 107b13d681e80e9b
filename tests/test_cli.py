"""
tests/test_cli.py -- Tests for the management CLI in main.py.

The command functions take the database URL explicitly, so each test points
them at a throwaway SQLite file under tmp_path.
"""

from __future__ import annotations

from pathlib import Path

import pytest

import main
from auth.store import UserStore
from auth.tokens import authenticate_user
from companies.models import Company
from companies.store import CompanyStore


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite:///{tmp_path / 'cli.db'}"


def test_create_user_then_list(db_url: str, capsys) -> None:
    assert main.create_user(db_url, "Admin@Example.com", "admin-pass", "Admin") == 0
    assert "Created user Admin@Example.com" in capsys.readouterr().out

    store = UserStore(db_url)
    try:
        user = store.get_by_username("admin@example.com")
    finally:
        store.close()
    assert user is not None
    assert user.display_name == "Admin"

    assert main.list_users(db_url) == 0
    assert "admin@example.com" in capsys.readouterr().out


def test_create_user_twice_fails(db_url: str, capsys) -> None:
    main.create_user(db_url, "dup@example.com", "long-enough", None)
    assert main.create_user(db_url, "dup@example.com", "long-enough", None) == 1
    assert "already exists" in capsys.readouterr().out


def test_short_password_refused(db_url: str, capsys) -> None:
    assert main.create_user(db_url, "short@example.com", "short", None) == 1
    assert "Password must be" in capsys.readouterr().out


def test_prompted_passwords_must_match(db_url: str, capsys, monkeypatch) -> None:
    answers = iter(["first-password", "second-password"])
    monkeypatch.setattr(main.getpass, "getpass", lambda _prompt: next(answers))
    assert main.create_user(db_url, "prompt@example.com", None, None) == 1
    assert "do not match" in capsys.readouterr().out


def test_list_companies(db_url: str, capsys) -> None:
    assert main.list_companies(db_url) == 0
    assert "No companies yet." in capsys.readouterr().out

    store = CompanyStore(db_url)
    try:
        store.create_company(Company(id="acme", name="Acme", tin="1234567890", description="d" * 60, owner_id=1))
    finally:
        store.close()
    assert main.list_companies(db_url) == 0
    out = capsys.readouterr().out
    assert "acme" in out
    assert "members 1" in out


def test_no_command_prints_help(capsys) -> None:
    assert main.main([]) == 0
    assert "create-user" in capsys.readouterr().out


def test_deactivated_user_cannot_log_in(db_url: str, capsys) -> None:
    main.create_user(db_url, "leaver@example.com", "long-enough", None)
    assert main.set_active(db_url, "leaver@example.com", False) == 0
    assert "inactive" in capsys.readouterr().out

    store = UserStore(db_url)
    try:
        assert authenticate_user(store, "leaver@example.com", "long-enough") is None
        main.set_active(db_url, "leaver@example.com", True)
        assert authenticate_user(store, "leaver@example.com", "long-enough") is not None
    finally:
        store.close()


def test_set_active_unknown_user(db_url: str, capsys) -> None:
    assert main.set_active(db_url, "nobody@example.com", True) == 1
    assert "No user named" in capsys.readouterr().out
