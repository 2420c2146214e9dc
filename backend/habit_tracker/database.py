from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker
from alembic import command
from alembic.config import Config

from .config import DATABASE_URL, DB_POOL_SIZE

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


def upgrade_db():
    alembic_cfg = Config(str(ALEMBIC_INI))
    command.upgrade(alembic_cfg, "head")


def _enable_sqlite_savepoints(engine: Engine):
    # pysqlite starts transactions lazily and breaks SAVEPOINT; take over BEGIN.
    # IMMEDIATE takes the write lock up front so concurrent writers queue
    # behind it instead of deadlocking on SHARED -> RESERVED upgrades.
    @event.listens_for(engine, "connect")
    def do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def do_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(url: str, **kwargs) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        engine = create_engine(url, **kwargs)
        _enable_sqlite_savepoints(engine)
        return engine

    kwargs.setdefault("pool_pre_ping", True)
    kwargs.setdefault("pool_size", DB_POOL_SIZE)
    kwargs.setdefault("max_overflow", 0)
    return create_engine(url, **kwargs)


engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind: Engine = engine):
    from . import models  # noqa: F401  registers tables on Base.metadata

    Base.metadata.create_all(bind=bind)
