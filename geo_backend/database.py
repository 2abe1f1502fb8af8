import logging
from contextlib import contextmanager
from threading import Lock

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from geo_backend.core import config
from geo_backend.core.errors import StoreFailureError, StoreTimeoutError

logger = logging.getLogger(__name__)

_TIMEOUT_MARKERS = ('timeout', 'timed out', 'database is locked', 'canceling statement')


def build_engine(database_url: str | None, timeout_seconds: float = config.STORE_TIMEOUT_SECONDS) -> Engine:
    if not database_url:
        raise RuntimeError('DATABASE_URL environment variable is not set.')

    if database_url.startswith('sqlite'):
        connect_args = {'check_same_thread': False, 'timeout': timeout_seconds}
        if database_url in {'sqlite://', 'sqlite:///:memory:'}:
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, connect_args=connect_args)

    connect_args = {}
    if database_url.startswith('postgresql'):
        connect_args['options'] = f'-c statement_timeout={int(timeout_seconds * 1000)}'
    return create_engine(
        database_url,
        connect_args=connect_args,
        pool_timeout=timeout_seconds,
        pool_pre_ping=True,
    )


engine = build_engine(config.DATABASE_URL)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)

Base = declarative_base()

_init_lock = Lock()
_initialized_engines: set[int] = set()


def init_database(bind: Engine | None = None) -> None:
    target = bind or engine

    if id(target) in _initialized_engines:
        return

    with _init_lock:
        if id(target) in _initialized_engines:
            return

        Base.metadata.create_all(bind=target)
        _initialized_engines.add(id(target))


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _is_timeout(exc: OperationalError) -> bool:
    text = str(exc.orig or exc).lower()
    return any(marker in text for marker in _TIMEOUT_MARKERS)


@contextmanager
def store_operation(db: Session, action: str):
    """Translate SQLAlchemy failures inside the block into store errors.

    The session is rolled back before the error propagates so it can be
    reused by the caller.
    """
    try:
        yield
    except PoolTimeoutError as exc:
        db.rollback()
        logger.error('Store timeout while trying to %s', action)
        raise StoreTimeoutError() from exc
    except OperationalError as exc:
        db.rollback()
        if _is_timeout(exc):
            logger.error('Store timeout while trying to %s', action)
            raise StoreTimeoutError() from exc
        logger.exception('Store failure while trying to %s', action)
        raise StoreFailureError(f'Failed to {action}.') from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception('Store failure while trying to %s', action)
        raise StoreFailureError(f'Failed to {action}.') from exc
