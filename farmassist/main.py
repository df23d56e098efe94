"""
Farmer Assistant — FastAPI Application
────────────────────────────────────────
Entry point. Run with:
    uvicorn farmassist.main:app --reload --port 4000
or, once installed:
    farmassist
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.routing import APIRoute
from starlette.exceptions import HTTPException as StarletteHTTPException

from farmassist import __version__
from farmassist.config import Settings, get_settings
from farmassist.routers import disease_router, health_router, soil_router, weather_router
from farmassist.services.errors import (
    InvalidUpstreamResponse,
    UpstreamError,
    UpstreamResponseError,
)

# ── Logging setup ─────────────────────────────────────────────────────────────
logging.basicConfig(
    level=get_settings().log_level,
    format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger("farmassist")


def _error(status_code: int, error: str, detail: Optional[str] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": error, "detail": detail, "code": status_code},
    )


def _install_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        return _error(422, "Request validation failed", problems)

    @app.exception_handler(UpstreamResponseError)
    async def upstream_response_handler(request: Request, exc: UpstreamResponseError):
        # relay the provider's own status and body
        return JSONResponse(status_code=exc.status_code, content=exc.payload)

    @app.exception_handler(InvalidUpstreamResponse)
    async def invalid_upstream_handler(request: Request, exc: InvalidUpstreamResponse):
        return _error(exc.status_code, str(exc), exc.body)

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError):
        return _error(exc.status_code, str(exc))

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url)
        return _error(500, "Internal server error", str(exc))


def _install_frontend(app: FastAPI, frontend_dir: Path) -> None:
    """
    Serve the single-page frontend: real files as-is, everything else falls
    back to index.html. /api paths are never answered with the frontend:
    a known API path hit with the wrong method is a 405, anything else a 404.
    """
    root = frontend_dir.resolve()
    index = root / "index.html"

    def _api_methods(path: str) -> set[str]:
        methods: set[str] = set()
        for route in app.routes:
            if isinstance(route, APIRoute) and route.path_regex.match(path):
                methods |= route.methods
        return methods

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            allowed = _api_methods("/" + full_path) - {"GET", "HEAD"}
            if allowed:
                response = _error(405, "Method Not Allowed")
                response.headers["Allow"] = ", ".join(sorted(allowed))
                return response
            return _error(404, "Not Found")

        candidate = (root / full_path).resolve()
        if full_path and candidate.is_relative_to(root) and candidate.is_file():
            return FileResponse(candidate)
        if index.is_file():
            return FileResponse(index)
        return _error(404, "Not Found")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    # ── Lifespan (startup / shutdown) ─────────────────────────────────────────
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Farmer Assistant API starting up...")
        logger.info(
            "Weather key configured: %s | Disease key configured: %s",
            settings.weather_configured, settings.disease_configured,
        )
        yield
        logger.info("Farmer Assistant API shutting down.")

    app = FastAPI(
        title="Farmer Assistant API",
        description=(
            "Soil nutrient evaluation with per-nutrient advice, plus weather "
            "forecast and plant health assessment proxies."
        ),
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # ── CORS ───────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    _install_exception_handlers(app)

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(health_router)
    app.include_router(soil_router)
    app.include_router(weather_router)
    app.include_router(disease_router)

    # ── Frontend (must be last: catch-all GET) ────────────────────────────────
    if settings.frontend_dir.is_dir():
        logger.info("Serving frontend from %s", settings.frontend_dir)
        _install_frontend(app, settings.frontend_dir)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("farmassist.main:app", host=settings.host, port=settings.port)


# ── Dev runner ────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    run()
