"""Database engine, unit of work and schema management.

All models share one declarative ``Base``. A request (or a CLI command) runs
inside ``session_scope``: the session commits when the block exits cleanly and
rolls back on any exception.
"""

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from shared.config import get_config
from shared.domain import drop_domain_db, init_domain, reset_domain_data, setup_domain_db
from shared.logging import get_logger

logger = get_logger(__name__)

# Stable constraint names, so the CHECK/UNIQUE names are predictable across
# SQLite and PostgreSQL.
_NAMING_CONVENTION = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base for ORM models."""

    metadata = MetaData(naming_convention=_NAMING_CONVENTION)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Holds the engine and session factory for the running process."""

    def __init__(self):
        self.engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def initialized(self) -> bool:
        return self.engine is not None

    def init(self, url: str | None = None, echo: bool | None = None) -> Engine:
        config = get_config().database
        url = url or config.url
        echo = config.echo if echo is None else echo

        kwargs = {"echo": echo}
        if url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
            if url in ("sqlite://", "sqlite:///:memory:"):
                # One shared connection, otherwise every checkout sees a fresh empty database
                kwargs["poolclass"] = StaticPool

        self.engine = create_engine(url, **kwargs)
        if url.startswith("sqlite"):
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self._session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)
        logger.info("database_initialized", dialect=self.engine.dialect.name)
        return self.engine

    def new_session(self) -> Session:
        if not self.initialized:
            self.init()
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        session = self.new_session()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


db = Database()


def get_session() -> Iterator[Session]:
    """FastAPI dependency: one unit of work per request."""
    with db.session_scope() as session:
        yield session


def load_models() -> None:
    """Import every model module so the mappers and tables are registered."""
    import catalogue.brand.brand  # noqa: F401
    import catalogue.category.category  # noqa: F401
    import catalogue.product.product  # noqa: F401
    import identity.user.user  # noqa: F401
    import marketing.banner.banner  # noqa: F401
    import marketing.campaign.campaign  # noqa: F401
    import marketing.flash_deal.flash_deal  # noqa: F401
    import ordering.cart.cart  # noqa: F401
    import ordering.order.order  # noqa: F401
    import reviews.review.review  # noqa: F401


def setup_db(database: Database = db) -> None:
    """Setup database schema"""
    load_models()
    if not database.initialized:
        database.init()
    Base.metadata.create_all(database.engine)
    setup_domain_db(init_domain())


def drop_db(database: Database = db) -> None:
    """Drop database schema"""
    load_models()
    if not database.initialized:
        database.init()
    Base.metadata.drop_all(database.engine)
    drop_domain_db(init_domain())


def reset_db(database: Database = db) -> None:
    """Delete every row while keeping the schema."""
    with database.engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())
    reset_domain_data(init_domain())
