# Routes/health.py
import logging
import time

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.engine import Engine

from Portfolio.models import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

CACHE_SECONDS = 10


class HealthCache:
    def __init__(self, ttl: float = CACHE_SECONDS, clock=time.monotonic):
        self.ttl = ttl
        self._clock = clock
        self._result = None
        self._stamp = 0.0
        self.started = clock()

    def fresh(self):
        if self._result is not None and self._clock() - self._stamp < self.ttl:
            return self._result
        return None

    def store(self, result: dict) -> None:
        self._result = result
        self._stamp = self._clock()

    def uptime(self) -> int:
        return int(self._clock() - self.started)


def check_database(engine: Engine) -> dict:
    start = time.perf_counter()
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        connected = True
    except Exception:
        logger.exception("Database health check failed")
        connected = False
    return {"connected": connected, "responseTime": int((time.perf_counter() - start) * 1000)}


@router.get("/", include_in_schema=False)
def root():
    return {"status": "ok"}


@router.get("/api/health")
def health_check(request: Request):
    cache: HealthCache = request.app.state.health
    result = cache.fresh()
    if result is None:
        database = check_database(request.app.state.engine)
        result = {
            "status": "healthy" if database["connected"] else "unhealthy",
            "timestamp": utcnow().isoformat(),
            "uptime": cache.uptime(),
            "database": database,
        }
        cache.store(result)
    return JSONResponse(result, status_code=200 if result["status"] == "healthy" else 503)
