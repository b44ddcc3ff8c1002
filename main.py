#!/usr/bin/env python3
import sys
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from Auth.sessions import SessionStore
from Core.database import init_db, make_engine
from Core.errors import PortfolioError, compose_validation_message
from Core.middleware import build_limiters, install_pipeline
from Core.settings import Settings, load_settings
from Routes import about, auth, contact, health, projects, skills, testimonials
from Routes.health import HealthCache

logger = logging.getLogger("portfolio")


# ─── LOGGING ────────────────────────────────────────────────────────────────
def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s: %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


# ─── ERROR HANDLERS ─────────────────────────────────────────────────────────
def install_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(PortfolioError)
    async def portfolio_error(request: Request, exc: PortfolioError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": compose_validation_message(exc.errors())})

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)

    @app.exception_handler(Exception)
    async def unexpected_error(request: Request, exc: Exception):
        logger.error(
            "Request error method=%s path=%s status=500",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


# ─── FASTAPI SETUP ──────────────────────────────────────────────────────────
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Portfolio",
        description="Portfolio content API and admin backend",
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.engine = make_engine(settings.database_url)
    app.state.sessions = SessionStore(settings.session_max_age)
    app.state.limiters = build_limiters(settings)
    app.state.health = HealthCache()
    init_db(app.state.engine)

    install_pipeline(app, settings)
    install_error_handlers(app)

    for module in (health, auth, projects, skills, testimonials, contact, about):
        app.include_router(module.router)

    logger.info("Configuration loaded: %s mode, port %s", settings.environment, settings.port)
    return app


app = create_app()

# ─── Uvicorn LAUNCH (DEV ONLY) ─────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=app.state.settings.port,
        reload=app.state.settings.is_development,
    )
