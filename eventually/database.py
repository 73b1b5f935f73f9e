import logging
import os
from datetime import datetime, timezone

from sqlalchemy import create_engine, event, func
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import QueuePool

from eventually.config import DATABASE_PATH, DB_BUSY_TIMEOUT, DB_POOL_SIZE, DB_POOL_TIMEOUT

logger = logging.getLogger(__name__)

Base = declarative_base()

DEFAULT_CATEGORIES = [
    ("Personal", "#9ece6a"),
    ("Tech Guild", "#7aa2f7"),
    ("Work", "#e0af68"),
    ("Other", "#414868"),
]


def now_ts() -> int:
    """Current UTC time as integer epoch seconds."""
    return int(datetime.now(timezone.utc).timestamp())


def _configure_sqlite(dbapi_connection, connection_record):
    # Let SQLAlchemy own transaction boundaries; see _begin_transaction.
    dbapi_connection.isolation_level = None
    cursor = dbapi_connection.cursor()
    try:
        cursor.execute(f"PRAGMA busy_timeout={int(DB_BUSY_TIMEOUT * 1000)}")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA foreign_keys=ON")
    finally:
        cursor.close()


def _begin_transaction(conn):
    # Take the write lock up front: a deferred BEGIN that reads first cannot
    # wait for another writer later, it fails with "database is locked".
    conn.exec_driver_sql("BEGIN IMMEDIATE")


def build_engine(db_path: str = DATABASE_PATH, pool_size: int = DB_POOL_SIZE) -> Engine:
    """Create the shared, bounded pool against a file-backed SQLite store."""
    engine = create_engine(
        f"sqlite:///{db_path}",
        poolclass=QueuePool,
        pool_size=pool_size,
        max_overflow=0,
        pool_timeout=DB_POOL_TIMEOUT,
        connect_args={"check_same_thread": False, "timeout": DB_BUSY_TIMEOUT},
        echo=False,
    )
    event.listen(engine, "connect", _configure_sqlite)
    event.listen(engine, "begin", _begin_transaction)
    return engine


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=bind)


engine = build_engine()
SessionLocal = make_session_factory(engine)


def get_db():
    """One Session per request; its connection goes back to the pool afterwards."""
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def seed_default_categories(db) -> int:
    """Insert the default categories on a store that has none. Returns rows added."""
    from eventually.models.category import Category

    existing = db.query(func.count(Category.id)).scalar()
    if existing:
        return 0

    now = now_ts()
    for name, color in DEFAULT_CATEGORIES:
        db.add(Category(name=name, color=color, created_at=now, updated_at=now))
    db.commit()
    logger.info("Seeded %d default categories.", len(DEFAULT_CATEGORIES))
    return len(DEFAULT_CATEGORIES)


def init_db(bind: Engine | None = None):
    """Create the data directory and all tables/indexes if missing, then seed.

    Safe to call on every startup. Any failure is fatal to the caller.
    """
    bind = bind or engine
    db_file = bind.url.database
    if db_file and db_file != ":memory:":
        parent = os.path.dirname(os.path.abspath(db_file))
        os.makedirs(parent, exist_ok=True)

    # Import all models so they register with Base.metadata
    from eventually.models.category import Category  # noqa: F401
    from eventually.models.task import Task  # noqa: F401

    try:
        Base.metadata.create_all(bind=bind)
        db = make_session_factory(bind)()
        try:
            seed_default_categories(db)
        finally:
            db.close()
        logger.info("Database initialized successfully at %s.", db_file)
    except Exception:
        logger.exception("Error during database initialization")
        raise
