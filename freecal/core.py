import asyncio
import logging
import time

from prometheus_client import Counter, Histogram, start_http_server
from sqlalchemy import text

from .config import KEEP_ALIVE_INTERVAL_SECONDS, METRICS_PORT
from .models import engine

logger = logging.getLogger('freecal.core')

REQUEST_COUNT = Counter(
    'freecal_http_requests_total', 'HTTP requests handled', ['method', 'path', 'status']
)
REQUEST_LATENCY = Histogram(
    'freecal_http_request_duration_seconds', 'HTTP request latency', ['method', 'path']
)
DB_PING_FAILURES = Counter('freecal_db_ping_failures_total', 'Failed database pings')

KEEP_ALIVE_TASK = None


def init_metrics(port: int = METRICS_PORT):
    """Initialize Prometheus metrics server"""
    try:
        start_http_server(port)
        logger.info(f"Prometheus metrics server started on port {port}")
    except Exception as e:
        logger.warning(f'Prometheus start failed: {e}')


async def ping_database() -> bool:
    try:
        async with engine.connect() as conn:
            await conn.execute(text('SELECT 1'))
        return True
    except Exception as e:
        DB_PING_FAILURES.inc()
        logger.warning({'msg': 'db_ping_failed', 'error': str(e)})
        return False


async def warm_up_pool():
    """Open one connection up front so the first request does not pay for it."""
    started = time.perf_counter()
    if await ping_database():
        logger.info({'msg': 'db_pool_warmed', 'ms': round((time.perf_counter() - started) * 1000, 1)})
    else:
        logger.error({'msg': 'db_pool_warmup_failed'})


async def keep_alive_loop(interval: int = KEEP_ALIVE_INTERVAL_SECONDS):
    """Ping the database periodically so the hosted instance does not idle out."""
    while True:
        await asyncio.sleep(interval)
        ok = await ping_database()
        logger.info({'msg': 'db_keep_alive', 'ok': ok})


def start_keep_alive():
    global KEEP_ALIVE_TASK
    if KEEP_ALIVE_INTERVAL_SECONDS <= 0:
        return None
    KEEP_ALIVE_TASK = asyncio.create_task(keep_alive_loop(KEEP_ALIVE_INTERVAL_SECONDS))
    return KEEP_ALIVE_TASK


async def shutdown_connections():
    """Stop the keep-alive task and dispose the pool"""
    global KEEP_ALIVE_TASK
    logger.info("Shutting down connections...")

    if KEEP_ALIVE_TASK:
        KEEP_ALIVE_TASK.cancel()
        try:
            await KEEP_ALIVE_TASK
        except asyncio.CancelledError:
            pass
        KEEP_ALIVE_TASK = None

    try:
        await engine.dispose()
        logger.info("Database pool closed")
    except Exception as e:
        logger.error(f"Error closing database pool: {e}")
