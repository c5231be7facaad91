# portal/db/session.py
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from portal.logger import get_logger

logger = get_logger(__name__)


class Database:
    """
    Explicitly owned handle over the catalog connection pool.

    Created once by the app factory (or a test fixture), shared read-only
    across requests and disposed at shutdown. Nothing in the package reaches
    for a module-level engine.
    """

    def __init__(self, url: str, *, echo: bool = False):
        if not url:
            raise RuntimeError("DATABASE_URL not set")

        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.url = url
        self.engine: Engine = create_engine(
            url,
            echo=echo,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        if url.startswith("sqlite"):
            _enable_sqlite_savepoints(self.engine)
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )
        logger.info(f"Database handle created for {self.engine.url!r}")

    def get_session(self) -> Session:
        return self._session_factory()

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """
        Session bound to one unit of work: committed on success,
        rolled back on any exception, always closed.
        """
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def ping(self) -> tuple[bool, str]:
        '''Round-trip a trivial statement; used by the health check.'''
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True, "Catalog database connected"
        except Exception as e:
            return False, f"Catalog database error: {e}"

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Database handle disposed")


def _enable_sqlite_savepoints(engine: Engine) -> None:
    # pysqlite defers BEGIN on its own; hand transaction control to SQLAlchemy
    # so per-record SAVEPOINTs behave
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def get_database(app=None) -> Database:
    """
    Return the Database owned by the given (or current) Flask app.

    :param app: Flask app; defaults to ``flask.current_app``
    :type app: Optional[flask.Flask]
    """
    if app is None:
        from flask import current_app
        app = current_app
    database: Optional[Database] = app.extensions.get("database")
    if database is None:
        raise RuntimeError("Database has not been initialised for this app")
    return database
