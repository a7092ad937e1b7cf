"""Database configuration and connection setup"""
import functools
import inspect
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import DBAPIError, IntegrityError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from slotbook.config.settings import get_settings
from slotbook.core.exceptions import StoreUnavailable

logger = logging.getLogger(__name__)

settings = get_settings()


def _enable_sqlite_fk(dbapi_connection, _):
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """
    Create a pooled engine for the given URL.

    Every store call is bounded: PostgreSQL gets a statement_timeout and
    SQLite a busy timeout, so a locked row surfaces as an OperationalError
    instead of hanging the request.
    """
    timeout_ms = settings.DB_STATEMENT_TIMEOUT_MS

    if database_url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": timeout_ms / 1000,
        }
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            engine = create_engine(
                database_url,
                connect_args=connect_args,
                poolclass=StaticPool,
            )
        else:
            engine = create_engine(
                database_url,
                connect_args=connect_args,
                poolclass=QueuePool,
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
            )
        event.listen(engine, "connect", _enable_sqlite_fk)
        return engine

    return create_engine(
        database_url,
        poolclass=QueuePool,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT_SECONDS,
        pool_pre_ping=True,
        connect_args={"options": f"-c statement_timeout={timeout_ms}"},
        echo=False,
    )


# Create database engine with connection pooling
engine = build_engine(settings.DATABASE_URL)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Database dependency for FastAPI"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables(bind: Engine = None):
    """Create all scheduling tables that do not exist yet"""
    from slotbook.models import Base

    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("Database tables created")


def commit_or_rollback(db, action: str):
    """
    Commit the session, rolling back on failure.

    Constraint violations are re-raised untouched so the caller can turn
    them into a domain error; anything else from the driver (lock timeout,
    deadlock abort, dropped connection) becomes StoreUnavailable.
    """
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise
    except DBAPIError as e:
        db.rollback()
        logger.error(f"Store failure while trying to {action}: {e}")
        raise StoreUnavailable() from e


def _store_failure(func, args, error: DBAPIError) -> StoreUnavailable:
    db = args[0] if args and isinstance(args[0], Session) else None
    if db is not None:
        db.rollback()
    logger.error(f"Store failure in {func.__qualname__}: {error}")
    return StoreUnavailable()


def store_call(func):
    """
    Re-raise driver failures escaping a service call as StoreUnavailable.

    IntegrityError passes through untouched. The session, when it is the
    first argument, is rolled back first. Generator functions are wrapped
    so failures raised while iterating are translated too.
    """
    if inspect.isgeneratorfunction(func):
        @functools.wraps(func)
        def generator_wrapper(*args, **kwargs):
            try:
                yield from func(*args, **kwargs)
            except IntegrityError:
                raise
            except DBAPIError as e:
                raise _store_failure(func, args, e) from e

        return generator_wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IntegrityError:
            raise
        except DBAPIError as e:
            raise _store_failure(func, args, e) from e

    return wrapper


if __name__ == "__main__":
    from slotbook.utils.my_logging import setup_logging

    setup_logging()
    create_tables()
