"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Same approach as
companies/models.py -- dataclasses own domain shape; stores and routes do
the work.

Layer rule: no imports from api/, web/, or companies/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """Represents an authenticated identity in CompanyHub.

    username is the user's email address. Invitations are addressed to an
    email, so accepting one compares invitation.email with username
    (case-insensitively; the store keeps usernames lowercased).

    Users carry no global role: what a user may do is decided per company by
    their Member row (see companies/access.py).
    """

    username: str
    id: int | None = None
    hashed_password: str | None = None
    display_name: str | None = None
    created_at: str | None = None
    last_login: str | None = None
    is_active: bool = True
