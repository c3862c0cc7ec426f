import logging
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pythonjsonlogger.json import JsonFormatter

from . import config
from .core import (
    REQUEST_COUNT,
    REQUEST_LATENCY,
    init_metrics,
    ping_database,
    shutdown_connections,
    start_keep_alive,
    warm_up_pool,
)
from .routes import router

# setup structured logging
logger = logging.getLogger('freecal')
if not logger.handlers:
    handler = logging.StreamHandler()
    formatter = JsonFormatter('%(asctime)s %(levelname)s %(name)s %(message)s')
    handler.setFormatter(formatter)
    logger.addHandler(handler)
logger.setLevel(config.LOG_LEVEL)

STARTED_AT = time.monotonic()

app = FastAPI(title="FreeCal API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=['*'],
    allow_headers=['*'],
)

app.include_router(router, prefix="/api")


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception({'msg': 'unhandled_exception', 'path': request.url.path, 'error': str(exc)})
    if config.is_production():
        return JSONResponse(status_code=500, content={'detail': 'Internal server error'})
    return JSONResponse(status_code=500, content={'detail': str(exc)})


@app.get('/health')
async def health():
    """Liveness plus a live database round trip; pinged by uptime monitors."""
    started = time.perf_counter()
    db_ok = await ping_database()
    return {
        'status': 'ok',
        'database': 'connected' if db_ok else 'error',
        'uptime': round(time.monotonic() - STARTED_AT, 1),
        'response_time': round((time.perf_counter() - started) * 1000, 1),
        'timestamp': datetime.now(timezone.utc).isoformat(),
    }


@app.middleware('http')
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    logger.info({'msg': 'request_start', 'method': request.method, 'path': request.url.path})
    response = await call_next(request)
    elapsed = time.perf_counter() - started
    route = request.scope.get('route')
    path = getattr(route, 'path', request.url.path)
    REQUEST_COUNT.labels(request.method, path, response.status_code).inc()
    REQUEST_LATENCY.labels(request.method, path).observe(elapsed)
    logger.info({'msg': 'request_end', 'status': response.status_code, 'ms': round(elapsed * 1000, 1)})
    return response


@app.on_event("startup")
async def startup():
    # Best-effort init, don't block app from starting if a dependency fails
    try:
        await warm_up_pool()
    except Exception as e:
        logger.warning({'msg': 'db_warmup_failed', 'error': str(e)})
    try:
        start_keep_alive()
    except Exception as e:
        logger.warning({'msg': 'keep_alive_start_failed', 'error': str(e)})
    if config.METRICS_ENABLED:
        try:
            init_metrics()
        except Exception as e:
            logger.warning({'msg': 'metrics_init_failed', 'error': str(e)})


@app.on_event("shutdown")
async def shutdown():
    await shutdown_connections()
