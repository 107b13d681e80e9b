"""
tests/conftest.py -- Shared test fixtures for CompanyHub integration tests.

This module provides:
  - _make_test_stores(): creates isolated in-memory DBs for users + companies
  - _patch_lifespan(): wires test stores into app.state, bypassing real startup
  - api_env: Env(client, users, companies) for API integration tests
  - web_env: same, with follow_redirects=False for web route tests
  - company_store / user_store: bare stores for repository unit tests

Design: Named shared-memory SQLite URIs (not plain :memory:) are required
because TestClient runs route handlers in a thread pool. Plain :memory: DBs
are per-connection and would present a blank schema to each worker thread.
The named URI format (file:name?mode=memory&cache=shared&uri=true) shares
one in-memory instance across all connections in the same process.

DEBUG and RATE_LIMIT_ENABLED must be set before any api/auth/core import:
get_settings() is cached and the limiter reads it at import time.
"""

from __future__ import annotations

import itertools
import os
from collections.abc import Generator
from contextlib import asynccontextmanager
from dataclasses import dataclass

# Set before any auth/core import so get_settings() auto-generates SECRET_KEY
# and the shared limiter is created disabled.
os.environ.setdefault("DEBUG", "true")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient

from asgi import app
from auth.models import User
from auth.store import UserStore
from auth.tokens import ACCESS_COOKIE, create_access_token, hash_password
from companies.store import CompanyStore

_db_counter = itertools.count()

DESCRIPTION = "A long enough company description that passes the fifty character rule."


# ---------------------------------------------------------------------------
# Store helpers
# ---------------------------------------------------------------------------


def _memory_url(name: str) -> str:
    return f"sqlite:///file:test_{name}_{next(_db_counter)}?mode=memory&cache=shared&uri=true"


def _make_test_stores(db_suffix: str) -> tuple[UserStore, CompanyStore]:
    """Create isolated named shared-memory SQLite stores.

    Both stores share one database, as they do in production, so the
    company tables and the users table live side by side.
    """
    url = _memory_url(db_suffix)
    return UserStore(db_url=url), CompanyStore(db_url=url)


def _patch_lifespan(user_store: UserStore, company_store: CompanyStore):
    """Return an async context manager that replaces the real lifespan."""

    @asynccontextmanager
    async def test_lifespan(app):
        app.state.user_store = user_store
        app.state.company_store = company_store
        yield

    return test_lifespan


def _company_payload(company_id: str, **overrides) -> dict:
    payload = {
        "id": company_id,
        "name": f"{company_id.title()} Ltd",
        "tin": "1234567890",
        "description": DESCRIPTION,
    }
    payload.update(overrides)
    return payload


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


# ---------------------------------------------------------------------------
# Environment object handed to tests
# ---------------------------------------------------------------------------


@dataclass
class Account:
    id: int
    username: str
    token: str

    @property
    def headers(self) -> dict:
        return auth_headers(self.token)

    @property
    def cookie_header(self) -> dict:
        """Cookie header for web routes; the pages forward it to the API."""
        return {"Cookie": f"{ACCESS_COOKIE}={self.token}"}


@dataclass
class Env:
    client: TestClient
    users: UserStore
    companies: CompanyStore

    def account(self, username: str, password: str = "password123", display_name: str | None = None) -> Account:
        """Create a user and return it with a ready-to-use JWT."""
        uid = self.users.create_user(
            User(username=username, hashed_password=hash_password(password), display_name=display_name)
        )
        token = create_access_token(user_id=uid, username=username, expire_seconds=3600)
        return Account(id=uid, username=username, token=token)


def _env(db_suffix: str, **client_kwargs) -> Generator[Env, None, None]:
    user_store, company_store = _make_test_stores(db_suffix)
    app.router.lifespan_context = _patch_lifespan(user_store, company_store)
    with TestClient(app, **client_kwargs) as client:
        yield Env(client=client, users=user_store, companies=company_store)
    company_store.close()
    user_store.close()


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="module")
def api_env() -> Generator[Env, None, None]:
    """Yield an Env for API integration tests.

    One database per test module; tests inside a module create their own
    users and companies with distinct names so they do not interfere.
    """
    yield from _env("api", raise_server_exceptions=True)


@pytest.fixture(scope="module")
def web_env() -> Generator[Env, None, None]:
    """Yield an Env for web route tests.

    follow_redirects=False is essential for web route tests: we assert on
    redirect *locations* (e.g. 302 to /login), which are invisible once
    the client follows the redirect and returns the final 200 response.
    """
    yield from _env("web", follow_redirects=False, raise_server_exceptions=True)


@pytest.fixture()
def company_store() -> Generator[CompanyStore, None, None]:
    store = CompanyStore(_memory_url("companies"))
    yield store
    store.close()


@pytest.fixture()
def user_store() -> Generator[UserStore, None, None]:
    store = UserStore(_memory_url("users"))
    yield store
    store.close()


@pytest.fixture(scope="session")
def company_payload():
    """Factory for a valid company body: company_payload("acme", name="Acme")."""
    return _company_payload
