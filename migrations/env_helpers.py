"""Database URL helpers for Alembic migrations.

Kept apart from env.py so they can be tested without triggering
alembic.context at import time.

DATABASE_URL may be a URL (postgres://, postgresql://, postgresql+psycopg2://)
or a libpq key=value DSN, the same values reservas.infra.db accepts.
"""

from __future__ import annotations

import os

from psycopg2.extensions import parse_dsn
from sqlalchemy.engine import URL, make_url

DRIVERNAME = "postgresql+psycopg2"


def _libpq_dsn_to_url(dsn: str) -> URL:
    """Convert a libpq key=value DSN to a SQLAlchemy URL.

    A host starting with "/" is a unix socket directory and goes in the
    query string (postgresql+psycopg2://USER:PASS@/DB?host=/path).
    """
    tokens = parse_dsn(dsn)

    password = tokens.get("password") or os.environ.get("DB_PASSWORD") or None
    host = tokens.get("host", "localhost")
    port = int(tokens.get("port", "5432"))

    if host.startswith("/"):
        return URL.create(
            DRIVERNAME,
            username=tokens.get("user"),
            password=password,
            database=tokens.get("dbname"),
            query={"host": host},
        )

    return URL.create(
        DRIVERNAME,
        username=tokens.get("user"),
        password=password,
        host=host,
        port=port,
        database=tokens.get("dbname"),
    )


def _normalize_url(raw: str) -> URL:
    url = make_url(raw)
    if url.drivername in ("postgres", "postgresql"):
        url = url.set(drivername=DRIVERNAME)
    db_password = os.environ.get("DB_PASSWORD")
    if db_password and not url.password:
        url = url.set(password=db_password)
    return url


def get_database_url() -> str:
    """Return DATABASE_URL as a SQLAlchemy URL string for the psycopg2 driver.

    Raises:
        RuntimeError: If DATABASE_URL is not set.
    """
    raw = os.environ.get("DATABASE_URL")
    if not raw:
        raise RuntimeError("DATABASE_URL is required to run migrations")
    url = _normalize_url(raw) if "://" in raw else _libpq_dsn_to_url(raw)
    return url.render_as_string(hide_password=False)
