# Core/middleware.py
import logging
import threading
import time
from typing import Callable, Dict, Tuple

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from Core.settings import Settings

logger = logging.getLogger(__name__)


class FixedWindowLimiter:
    """Counts hits per key (client IP) in fixed windows of ``window`` seconds."""

    def __init__(self, max_hits: int, window: int, message: str, clock: Callable[[], float] = time.time):
        self.max_hits = max_hits
        self.window = window
        self.message = message
        self._clock = clock
        self._hits: Dict[str, Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def _current(self, key: str) -> Tuple[float, int]:
        now = self._clock()
        started, count = self._hits.get(key, (now, 0))
        if now - started >= self.window:
            started, count = now, 0
        return started, count

    def blocked(self, key: str) -> bool:
        with self._lock:
            return self._current(key)[1] >= self.max_hits

    def hit(self, key: str) -> bool:
        """Record one hit; False once the key is over its allowance."""
        with self._lock:
            started, count = self._current(key)
            count += 1
            self._hits[key] = (started, count)
            return count <= self.max_hits


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


# ─── PIPELINE STAGES ────────────────────────────────────────────────────────
def security_headers(settings: Settings):
    async def stage(request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    return stage


def request_logging():
    async def stage(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        if request.url.path.startswith("/api"):
            duration = (time.perf_counter() - start) * 1000
            logger.info("%s %s %s in %dms", request.method, request.url.path, response.status_code, duration)
        return response

    return stage


def api_rate_limit(limiter: FixedWindowLimiter):
    async def stage(request: Request, call_next):
        if request.url.path.startswith("/api") and not limiter.hit(client_ip(request)):
            logger.warning("Rate limit exceeded ip=%s path=%s method=%s", client_ip(request), request.url.path, request.method)
            return JSONResponse(status_code=429, content={"error": limiter.message})
        return await call_next(request)

    return stage


def install_pipeline(app: FastAPI, settings: Settings) -> None:
    """
    Request order: CORS -> security headers -> request log -> /api rate limit
    -> route. Starlette runs the last added middleware first, so the stages
    are added back to front.
    """
    stages = [
        security_headers(settings),
        request_logging(),
        api_rate_limit(app.state.limiters["api"]),
    ]
    for stage in reversed(stages):
        app.add_middleware(BaseHTTPMiddleware, dispatch=stage)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    logger.info("CORS configured origin=%s", ",".join(settings.cors_origins))


def build_limiters(settings: Settings) -> Dict[str, FixedWindowLimiter]:
    return {
        "api": FixedWindowLimiter(
            settings.rate_limit_max,
            settings.rate_limit_window,
            "Too many requests from this IP, please try again later",
        ),
        "login": FixedWindowLimiter(
            settings.login_rate_limit_max,
            settings.login_rate_limit_window,
            "Too many login attempts, please try again later",
        ),
        "contact": FixedWindowLimiter(
            settings.contact_rate_limit_max,
            settings.contact_rate_limit_window,
            "Too many contact form submissions, please try again later",
        ),
    }
