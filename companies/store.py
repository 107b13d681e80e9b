"""
companies/store.py -- SQLAlchemy Core persistence layer for the tenant domain.

Uses SQLAlchemy Core (not ORM) so the dataclasses in companies/models.py
remain the authoritative domain representation. Swapping SQLite for
PostgreSQL is a connection string change.

Pattern: Repository + Data Mapper. CompanyStore is the repository; the
_row_to_* functions are the mappers. Route handlers never touch SQL directly.

Referential integrity is the database's job:
  - every child table references companies.id ON DELETE CASCADE, so deleting
    a company removes its stocks, price types, roles, members and invitations;
  - available_data rows cascade with their role, stock and price type;
  - members.role_id has no ON DELETE action, so deleting a role that is still
    held raises IntegrityError (the API reports 409).
SQLite only enforces foreign keys when PRAGMA foreign_keys=ON is set on each
connection; _set_sqlite_pragmas does that.

Paginated reads (list_*) return (total, rows). Both come from one
transaction with the same WHERE clause, so the count always describes the
rows that were paged.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = CompanyStore("sqlite:///companyhub.db")
    company = store.create_company(Company(id="acme", ...))
    total, price_types = store.list_price_types("acme", offset=0, limit=10)
    store.close()
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    create_engine,
    event,
    func,
    select,
)
from sqlalchemy.engine import Connection, Engine

from companies.models import AvailableData, Company, Invitation, Member, PriceType, Role, Stock

logger = logging.getLogger("companyhub.store")

OWNER_ROLE_NAME = "Owner"

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_companies = Table(
    "companies",
    metadata,
    Column("id", String(64), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("tin", String(10), nullable=False),
    Column("description", Text, nullable=False),
    Column("description_ru", Text),
    Column("slogan", String(255)),
    Column("slogan_ru", String(255)),
    Column("image_id", String(255)),
    Column("owner_id", Integer, nullable=False),  # auth.users.id (separate repository)
    Column("created_at", String(32), nullable=False),
)

_stocks = Table(
    "stocks",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("company_id", String(64), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("name", String(255), nullable=False),
)

_price_types = Table(
    "price_types",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("company_id", String(64), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("currency", String(10), nullable=False),
)

_roles = Table(
    "roles",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("company_id", String(64), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("name", String(255), nullable=False),
    Column("is_default", Integer, nullable=False, server_default="0"),  # boolean stored as 0/1
)

_available_data = Table(
    "available_data",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("role_id", String(32), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False, index=True),
    Column("stock_id", String(32), ForeignKey("stocks.id", ondelete="CASCADE")),
    Column("price_type_id", String(32), ForeignKey("price_types.id", ondelete="CASCADE"), nullable=False),
)

_members = Table(
    "members",
    metadata,
    Column("company_id", String(64), ForeignKey("companies.id", ondelete="CASCADE"), primary_key=True),
    Column("user_id", Integer, primary_key=True),
    Column("role_id", String(32), ForeignKey("roles.id"), nullable=False),
    Column("created_at", String(32), nullable=False),
)

_invitations = Table(
    "invitations",
    metadata,
    Column("id", String(32), primary_key=True),
    Column("company_id", String(64), ForeignKey("companies.id", ondelete="CASCADE"), nullable=False),
    Column("email", String(255), nullable=False, index=True),
    Column("role_id", String(32), ForeignKey("roles.id", ondelete="CASCADE"), nullable=False),
    Column("created_at", String(32), nullable=False),
    UniqueConstraint("company_id", "email", name="uq_invitation_company_email"),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _new_id() -> str:
    return uuid.uuid4().hex


def _insert_member(conn: Connection, company_id: str, user_id: int, role_id: str) -> None:
    conn.execute(
        _members.insert().values(company_id=company_id, user_id=user_id, role_id=role_id, created_at=_now_iso())
    )


def _set_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode and foreign key enforcement.

    Set per-connection because SQLite PRAGMAs are not inherited by new
    connections from the pool.
    """
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class CompanyStore:
    def __init__(self, db_url: str) -> None:
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            # FastAPI runs sync handlers in a thread pool; the same pooled
            # connection may be used from more than one thread.
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_sqlite_pragmas)
        metadata.create_all(self.engine)

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with self.engine.connect() as conn:
            return conn.execute(select(1)).scalar() == 1

    def _page(self, conn: Connection, table: Table, where: list, order_by: list, offset: int, limit: int):
        total = conn.execute(select(func.count()).select_from(table).where(*where)).scalar_one()
        rows = conn.execute(select(table).where(*where).order_by(*order_by).offset(offset).limit(limit)).fetchall()
        return total, rows

    # ------------------------------------------------------------------
    # Companies
    # ------------------------------------------------------------------

    def create_company(self, company: Company) -> Company:
        """Insert a company, its default "Owner" role and the owner's membership.

        All three rows are written in one transaction. Raises
        sqlalchemy.exc.IntegrityError if the company id is already taken.
        """
        now = _now_iso()
        role_id = _new_id()
        with self.engine.begin() as conn:
            conn.execute(
                _companies.insert().values(
                    id=company.id,
                    name=company.name,
                    tin=company.tin,
                    description=company.description,
                    description_ru=company.description_ru,
                    slogan=company.slogan,
                    slogan_ru=company.slogan_ru,
                    image_id=company.image_id,
                    owner_id=company.owner_id,
                    created_at=now,
                )
            )
            conn.execute(_roles.insert().values(id=role_id, company_id=company.id, name=OWNER_ROLE_NAME, is_default=1))
            _insert_member(conn, company.id, company.owner_id, role_id)
        logger.info("Company %s created by user %d", company.id, company.owner_id)
        return self.get_company(company.id)

    def get_company(self, company_id: str) -> Optional[Company]:
        with self.engine.connect() as conn:
            row = conn.execute(_companies.select().where(_companies.c.id == company_id)).fetchone()
        return _row_to_company(row) if row is not None else None

    def update_company(self, company_id: str, **fields) -> Optional[Company]:
        """Update mutable company fields. Returns the updated company, or None if not found.

        Accepts any subset of: name, tin, description, description_ru, slogan,
        slogan_ru, image_id. The id and owner are immutable.
        """
        with self.engine.begin() as conn:
            result = conn.execute(_companies.update().where(_companies.c.id == company_id).values(**fields))
        if result.rowcount == 0:
            return None
        return self.get_company(company_id)

    def delete_company(self, company_id: str) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(_companies.delete().where(_companies.c.id == company_id))
        return result.rowcount > 0

    def list_companies_for_user(self, user_id: int, offset: int, limit: int) -> tuple[int, list[Company]]:
        """Return the companies `user_id` is a member of, newest first."""
        member_of = select(_members.c.company_id).where(_members.c.user_id == user_id)
        with self.engine.begin() as conn:
            total, rows = self._page(
                conn,
                _companies,
                [_companies.c.id.in_(member_of)],
                [_companies.c.created_at.desc()],
                offset,
                limit,
            )
        return total, [_row_to_company(r) for r in rows]

    def list_all_companies(self) -> list[tuple[Company, int]]:
        """Return every company with its member count. Used by the management CLI."""
        counts = (
            select(_members.c.company_id, func.count().label("member_count"))
            .group_by(_members.c.company_id)
            .subquery()
        )
        stmt = (
            select(_companies, func.coalesce(counts.c.member_count, 0).label("member_count"))
            .select_from(_companies.outerjoin(counts, counts.c.company_id == _companies.c.id))
            .order_by(_companies.c.id)
        )
        with self.engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [(_row_to_company(r), r.member_count) for r in rows]

    # ------------------------------------------------------------------
    # Members
    # ------------------------------------------------------------------

    def get_member(self, company_id: str, user_id: int) -> Optional[Member]:
        """Fetch one membership with its role and the role's available data."""
        with self.engine.connect() as conn:
            row = conn.execute(
                _members.select().where((_members.c.company_id == company_id) & (_members.c.user_id == user_id))
            ).fetchone()
            if row is None:
                return None
            role = self._load_roles(conn, [row.role_id]).get(row.role_id)
        member = _row_to_member(row)
        member.role = role
        return member

    def add_member(self, company_id: str, user_id: int, role_id: str) -> Member:
        """Insert a membership directly, bypassing the invitation flow.

        The API never calls this; it exists for seeding data in tests and
        scripts. Raises IntegrityError if the user is already a member.
        """
        with self.engine.begin() as conn:
            _insert_member(conn, company_id, user_id, role_id)
        return self.get_member(company_id, user_id)

    def list_members(self, company_id: str, offset: int, limit: int) -> tuple[int, list[Member]]:
        """Return one page of a company's members (highest user id first) with their roles."""
        where = [_members.c.company_id == company_id]
        with self.engine.begin() as conn:
            total, rows = self._page(conn, _members, where, [_members.c.user_id.desc()], offset, limit)
            roles = self._load_roles(conn, {r.role_id for r in rows}, with_data=False)
        members = []
        for r in rows:
            member = _row_to_member(r)
            member.role = roles.get(r.role_id)
            members.append(member)
        return total, members

    def update_member_role(self, company_id: str, user_id: int, role_id: str) -> Optional[Member]:
        with self.engine.begin() as conn:
            result = conn.execute(
                _members.update()
                .where((_members.c.company_id == company_id) & (_members.c.user_id == user_id))
                .values(role_id=role_id)
            )
        if result.rowcount == 0:
            return None
        return self.get_member(company_id, user_id)

    def delete_member(self, company_id: str, user_id: int) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(
                _members.delete().where((_members.c.company_id == company_id) & (_members.c.user_id == user_id))
            )
        return result.rowcount > 0

    # ------------------------------------------------------------------
    # Stocks
    # ------------------------------------------------------------------

    def create_stock(self, stock: Stock) -> Stock:
        stock_id = _new_id()
        with self.engine.begin() as conn:
            conn.execute(_stocks.insert().values(id=stock_id, company_id=stock.company_id, name=stock.name))
        return Stock(id=stock_id, name=stock.name, company_id=stock.company_id)

    def update_stock(self, company_id: str, stock_id: str, name: str) -> Optional[Stock]:
        with self.engine.begin() as conn:
            result = conn.execute(
                _stocks.update()
                .where((_stocks.c.id == stock_id) & (_stocks.c.company_id == company_id))
                .values(name=name)
            )
        if result.rowcount == 0:
            return None
        return Stock(id=stock_id, name=name, company_id=company_id)

    def delete_stock(self, company_id: str, stock_id: str) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(
                _stocks.delete().where((_stocks.c.id == stock_id) & (_stocks.c.company_id == company_id))
            )
        return result.rowcount > 0

    def list_stocks(
        self, company_id: str, offset: int, limit: int, ids: Optional[Iterable[str]] = None
    ) -> tuple[int, list[Stock]]:
        """Return one page of a company's stocks ordered by name.

        ids=None means no id restriction; an empty collection matches nothing.
        """
        where = [_stocks.c.company_id == company_id]
        if ids is not None:
            where.append(_stocks.c.id.in_(list(ids)))
        with self.engine.begin() as conn:
            total, rows = self._page(conn, _stocks, where, [_stocks.c.name], offset, limit)
        return total, [_row_to_stock(r) for r in rows]

    def stock_ids(self, company_id: str) -> set[str]:
        with self.engine.connect() as conn:
            rows = conn.execute(select(_stocks.c.id).where(_stocks.c.company_id == company_id)).fetchall()
        return {r.id for r in rows}

    # ------------------------------------------------------------------
    # Price types
    # ------------------------------------------------------------------

    def create_price_type(self, price_type: PriceType) -> PriceType:
        price_type_id = _new_id()
        with self.engine.begin() as conn:
            conn.execute(
                _price_types.insert().values(
                    id=price_type_id,
                    company_id=price_type.company_id,
                    name=price_type.name,
                    currency=price_type.currency,
                )
            )
        return PriceType(
            id=price_type_id, name=price_type.name, currency=price_type.currency, company_id=price_type.company_id
        )

    def update_price_type(self, company_id: str, price_type_id: str, name: str, currency: str) -> Optional[PriceType]:
        with self.engine.begin() as conn:
            result = conn.execute(
                _price_types.update()
                .where((_price_types.c.id == price_type_id) & (_price_types.c.company_id == company_id))
                .values(name=name, currency=currency)
            )
        if result.rowcount == 0:
            return None
        return PriceType(id=price_type_id, name=name, currency=currency, company_id=company_id)

    def delete_price_type(self, company_id: str, price_type_id: str) -> bool:
        with self.engine.begin() as conn:
            result = conn.execute(
                _price_types.delete().where(
                    (_price_types.c.id == price_type_id) & (_price_types.c.company_id == company_id)
                )
            )
        return result.rowcount > 0

    def list_price_types(
        self, company_id: str, offset: int, limit: int, ids: Optional[Iterable[str]] = None
    ) -> tuple[int, list[PriceType]]:
        """Return one page of a company's price types, name descending.

        ids=None means no id restriction; an empty collection matches nothing.
        """
        where = [_price_types.c.company_id == company_id]
        if ids is not None:
            where.append(_price_types.c.id.in_(list(ids)))
        with self.engine.begin() as conn:
            total, rows = self._page(conn, _price_types, where, [_price_types.c.name.desc()], offset, limit)
        return total, [_row_to_price_type(r) for r in rows]

    def price_type_ids(self, company_id: str) -> set[str]:
        with self.engine.connect() as conn:
            rows = conn.execute(select(_price_types.c.id).where(_price_types.c.company_id == company_id)).fetchall()
        return {r.id for r in rows}

    # ------------------------------------------------------------------
    # Roles
    # ------------------------------------------------------------------

    def _load_roles(self, conn: Connection, role_ids: Iterable[str], with_data: bool = True) -> dict[str, Role]:
        ids = list(role_ids)
        if not ids:
            return {}
        roles = {r.id: _row_to_role(r) for r in conn.execute(_roles.select().where(_roles.c.id.in_(ids))).fetchall()}
        if with_data:
            data_rows = conn.execute(
                _available_data.select().where(_available_data.c.role_id.in_(ids)).order_by(_available_data.c.id)
            ).fetchall()
            for row in data_rows:
                roles[row.role_id].available_data.append(_row_to_available_data(row))
        return roles

    def _write_available_data(self, conn: Connection, role_id: str, data: list[AvailableData]) -> None:
        conn.execute(_available_data.delete().where(_available_data.c.role_id == role_id))
        if data:
            conn.execute(
                _available_data.insert(),
                [
                    {"id": _new_id(), "role_id": role_id, "stock_id": d.stock_id, "price_type_id": d.price_type_id}
                    for d in data
                ],
            )

    def create_role(self, role: Role) -> Role:
        """Insert a non-default role together with its available data."""
        role_id = _new_id()
        with self.engine.begin() as conn:
            conn.execute(_roles.insert().values(id=role_id, company_id=role.company_id, name=role.name, is_default=0))
            self._write_available_data(conn, role_id, role.available_data)
        return self.get_role(role.company_id, role_id)

    def get_role(self, company_id: str, role_id: str) -> Optional[Role]:
        with self.engine.connect() as conn:
            role = self._load_roles(conn, [role_id]).get(role_id)
        if role is None or role.company_id != company_id:
            return None
        return role

    def update_role(
        self, company_id: str, role_id: str, name: str, available_data: list[AvailableData]
    ) -> Optional[Role]:
        """Rename a role and replace its available data in one transaction."""
        with self.engine.begin() as conn:
            result = conn.execute(
                _roles.update().where((_roles.c.id == role_id) & (_roles.c.company_id == company_id)).values(name=name)
            )
            if result.rowcount == 0:
                return None
            self._write_available_data(conn, role_id, available_data)
        return self.get_role(company_id, role_id)

    def delete_role(self, company_id: str, role_id: str) -> bool:
        """Delete a role. Raises IntegrityError while members still hold it."""
        with self.engine.begin() as conn:
            result = conn.execute(_roles.delete().where((_roles.c.id == role_id) & (_roles.c.company_id == company_id)))
        return result.rowcount > 0

    def list_roles(self, company_id: str, offset: int, limit: int) -> tuple[int, list[Role]]:
        """Return one page of a company's roles, default role first, then by name."""
        where = [_roles.c.company_id == company_id]
        with self.engine.begin() as conn:
            total, rows = self._page(conn, _roles, where, [_roles.c.is_default.desc(), _roles.c.name], offset, limit)
            loaded = self._load_roles(conn, [r.id for r in rows])
        return total, [loaded[r.id] for r in rows]

    # ------------------------------------------------------------------
    # Invitations
    # ------------------------------------------------------------------

    def create_invitation(self, invitation: Invitation) -> Invitation:
        """Insert an invitation. Raises IntegrityError if the email is already invited."""
        invitation_id = _new_id()
        with self.engine.begin() as conn:
            conn.execute(
                _invitations.insert().values(
                    id=invitation_id,
                    company_id=invitation.company_id,
                    email=invitation.email.lower(),
                    role_id=invitation.role_id,
                    created_at=_now_iso(),
                )
            )
        return self.get_invitation(invitation_id)

    def get_invitation(self, invitation_id: str) -> Optional[Invitation]:
        with self.engine.connect() as conn:
            row = conn.execute(self._invitation_select().where(_invitations.c.id == invitation_id)).fetchone()
        return _row_to_invitation(row) if row is not None else None

    def _invitation_select(self):
        return select(
            _invitations,
            _roles.c.name.label("role_name"),
            _roles.c.is_default.label("role_is_default"),
            _companies.c.name.label("company_name"),
        ).select_from(
            _invitations.join(_roles, _roles.c.id == _invitations.c.role_id).join(
                _companies, _companies.c.id == _invitations.c.company_id
            )
        )

    def _invitation_page(self, where: list, offset: int, limit: int) -> tuple[int, list[Invitation]]:
        with self.engine.begin() as conn:
            total = conn.execute(select(func.count()).select_from(_invitations).where(*where)).scalar_one()
            rows = conn.execute(
                self._invitation_select()
                .where(*where)
                .order_by(_invitations.c.created_at.desc())
                .offset(offset)
                .limit(limit)
            ).fetchall()
        return total, [_row_to_invitation(r) for r in rows]

    def list_invitations(self, company_id: str, offset: int, limit: int) -> tuple[int, list[Invitation]]:
        return self._invitation_page([_invitations.c.company_id == company_id], offset, limit)

    def list_invitations_for_email(self, email: str, offset: int, limit: int) -> tuple[int, list[Invitation]]:
        return self._invitation_page([_invitations.c.email == email.lower()], offset, limit)

    def delete_invitation(self, invitation_id: str, company_id: Optional[str] = None) -> bool:
        condition = _invitations.c.id == invitation_id
        if company_id is not None:
            condition = condition & (_invitations.c.company_id == company_id)
        with self.engine.begin() as conn:
            result = conn.execute(_invitations.delete().where(condition))
        return result.rowcount > 0

    def accept_invitation(self, invitation: Invitation, user_id: int) -> Member:
        """Turn an invitation into a membership and remove the invitation.

        Both writes share one transaction. Raises IntegrityError (and leaves
        the invitation in place) if the user is already a member.
        """
        with self.engine.begin() as conn:
            _insert_member(conn, invitation.company_id, user_id, invitation.role_id)
            conn.execute(_invitations.delete().where(_invitations.c.id == invitation.id))
        return self.get_member(invitation.company_id, user_id)

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _row_to_company(row) -> Company:
    return Company(
        id=row.id,
        name=row.name,
        tin=row.tin,
        description=row.description,
        description_ru=row.description_ru,
        slogan=row.slogan,
        slogan_ru=row.slogan_ru,
        image_id=row.image_id,
        owner_id=row.owner_id,
        created_at=row.created_at,
    )


def _row_to_stock(row) -> Stock:
    return Stock(id=row.id, name=row.name, company_id=row.company_id)


def _row_to_price_type(row) -> PriceType:
    return PriceType(id=row.id, name=row.name, currency=row.currency, company_id=row.company_id)


def _row_to_role(row) -> Role:
    return Role(id=row.id, name=row.name, company_id=row.company_id, default=bool(row.is_default))


def _row_to_available_data(row) -> AvailableData:
    return AvailableData(id=row.id, role_id=row.role_id, stock_id=row.stock_id, price_type_id=row.price_type_id)


def _row_to_member(row) -> Member:
    return Member(company_id=row.company_id, user_id=row.user_id, role_id=row.role_id, created_at=row.created_at)


def _row_to_invitation(row) -> Invitation:
    return Invitation(
        id=row.id,
        company_id=row.company_id,
        email=row.email,
        role_id=row.role_id,
        role=Role(id=row.role_id, name=row.role_name, company_id=row.company_id, default=bool(row.role_is_default)),
        company_name=row.company_name,
        created_at=row.created_at,
    )
