"""
FastAPI application factory for the Canton fee burn explorer.

Usage:
    python -m api.app                       # Dev server on port 8000
    BURN_DATA_SOURCE=demo python -m api.app # Static demo data, no network

OpenAPI docs available at http://localhost:8000/docs after starting.

Logging: plain text by default, newline-delimited JSON when
APP_LOG_FORMAT=json.  Every request is logged with a short request id that
is also returned in the X-Request-ID header.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from api.routes import canton
from api.routes import frontend as frontend_routes
from dashboard.sessions import SessionStore
from ledger.sources import source_from_config
from utils.config import AppConfig
from utils.formatting import format_count

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ───────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "client_ip",
                    "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("burn_explorer_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=logging.INFO, force=True)

_SLOW_REQUEST_MS = 2000  # upstream aggregation dominates; warn well above it


def _client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def create_app(source=None, config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        source: Override the data source (useful for testing). Any object
                with ``load()``, ``current_round()`` and ``close()``.
        config: Override the configuration read from the environment.

    Returns:
        Configured FastAPI application instance.
    """
    cfg = config or _cfg
    data_source = source if source is not None else source_from_config(cfg)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        _logger.info("startup data_source=%s", getattr(data_source, "mode", "custom"))
        yield
        data_source.close()

    app = FastAPI(
        title="Canton Fee Burn Explorer",
        summary="Fee-burn aggregates for the current Canton Network mining round.",
        description=(
            "## Canton Fee Burn Explorer\n\n"
            "Aggregates fee-burn events from the Canton Scan API per party for "
            "the current mining round and serves a drill-down dashboard.\n\n"
            "### Key concepts\n"
            "- **CC** is Canton Coin; **USD** values are CC × amulet price.\n"
            "- Every qualifying event counts as a placeholder burn of 1.0 CC, "
            "split evenly over holding, traffic, transfer and output fees.\n"
            "- Events are attributed to the first root party of their update.\n"
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "canton",
                "description": "Current round burn aggregate as JSON.",
            },
            {
                "name": "meta",
                "description": "Health check.",
            },
        ],
    )
    app.state.config = cfg
    app.state.source = data_source
    app.state.sessions = SessionStore(maxsize=cfg.max_sessions,
                                      ttl_seconds=cfg.session_ttl)

    # ── CORS middleware ───────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with its duration and a request id."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "client_ip": _client_ip(request),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f ip=%s rid=%s",
                request.method, path, response.status_code, duration_ms,
                _client_ip(request), request_id,
            )
        if duration_ms > _SLOW_REQUEST_MS:
            _logger.warning(
                "slow_request method=%s path=%s duration_ms=%.1f",
                request.method, path, duration_ms,
            )
        return response

    # ── Content Security Policy + security headers ───────────────────────────

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        """Add Content-Security-Policy, X-Content-Type-Options, and X-Frame-Options."""
        response = await call_next(request)
        # CSP: allow self + CDN origins used by HTMX and Chart.js.
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' unpkg.com cdn.jsdelivr.net; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self';"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.error("unhandled path=%s error=%r", request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "status_code": 500},
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK with the data source mode and live session count."""
        return {
            "status": "ok",
            "data_source": getattr(app.state.source, "mode", "custom"),
            "sessions": len(app.state.sessions),
        }

    # ── Register routers ──────────────────────────────────────────────────────

    app.include_router(canton.router, prefix="/api")

    # ── Static files + Jinja2 templates ───────────────────────────────────────
    _here = Path(__file__).parent.parent  # project root

    static_dir = _here / "static"
    templates_dir = _here / "templates"

    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    templates = Jinja2Templates(directory=str(templates_dir))
    templates.env.filters["fmt_count"] = format_count

    # Wire templates into the frontend router
    frontend_routes.set_templates(templates)
    app.include_router(frontend_routes.router)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
