from datetime import datetime, timezone

from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import declarative_base, sessionmaker
from sqlalchemy.pool import NullPool

from .. import config

DATABASE_URL = config.DATABASE_URL


def _engine_options(url: str) -> dict:
    if url.startswith('sqlite'):
        return {'poolclass': NullPool}
    # Bounded pool: small hosted Postgres plans cap concurrent connections
    return {
        'pool_size': config.DB_POOL_SIZE,
        'max_overflow': 0,
        'pool_timeout': config.DB_POOL_TIMEOUT,
        'pool_recycle': config.DB_POOL_RECYCLE,
        'pool_pre_ping': True,
        'connect_args': {
            'command_timeout': config.DB_STATEMENT_TIMEOUT_MS / 1000,
            'server_settings': {'statement_timeout': str(config.DB_STATEMENT_TIMEOUT_MS)},
        },
    }


engine = create_async_engine(DATABASE_URL, future=True, echo=False, **_engine_options(DATABASE_URL))

if DATABASE_URL.startswith('sqlite'):
    @event.listens_for(engine.sync_engine, 'connect')
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute('PRAGMA foreign_keys=ON')
        cursor.close()

AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
Base = declarative_base()


def utcnow():
    return datetime.now(timezone.utc)


# Import models to register tables
from .profiles import Profile  # noqa: F401,E402
from .relationships import Relationship  # noqa: F401,E402
from .events import Event, EventAttendee, EventViewer  # noqa: F401,E402
from .travel_locations import TravelLocation  # noqa: F401,E402
from .feature_wishes import FeatureWish  # noqa: F401,E402
