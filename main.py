import os
import secrets
import time

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from api.ai import router as ai_router
from api.data import router as data_router
from api.healthcheck import router as healthcheck_router
from api.rules import router as rules_router
from api.validation import router as validation_router
from utils.logger import logger

load_dotenv()


def _csv_env(name: str) -> list:
    return [item.strip() for item in os.getenv(name, "").split(",") if item.strip()]


API_KEY = os.getenv("API_KEY")
CORS_ALLOW_ORIGINS = _csv_env("CORS_ALLOW_ORIGINS")
ALLOWED_HOSTS = _csv_env("ALLOWED_HOSTS") or ["*"]
MAX_BODY_BYTES = int(os.getenv("MAX_BODY_BYTES", "0"))  # 0 disables the limit

HEALTH_PATH = "/api/health/check"
# reachable without x-api-key
OPEN_PATHS = ("/openapi.json", "/redoc", "/docs", HEALTH_PATH)

app = FastAPI(title="Data Curation API", version="0.1.0")

if os.getenv("ENABLE_CORS") == "true":
    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Disposition"],
    )

app.add_middleware(TrustedHostMiddleware, allowed_hosts=ALLOWED_HOSTS)


def _is_open(path: str) -> bool:
    return path in OPEN_PATHS or path.startswith("/docs/")


@app.middleware("http")
async def guard_requests(request: Request, call_next):
    """Body-size limit and x-api-key check, then a timing log line."""
    path = request.url.path

    length = request.headers.get("content-length", "")
    if MAX_BODY_BYTES > 0 and length.isdigit() and int(length) > MAX_BODY_BYTES:
        logger.warning("Rejected %s: body of %s bytes", path, length)
        return JSONResponse(status_code=413, content={"detail": "Payload too large"})

    if request.method != "OPTIONS" and not _is_open(path):
        if not API_KEY:
            logger.debug("API_KEY not set; %s served without auth", path)
        else:
            supplied = request.headers.get("x-api-key") or ""
            if not secrets.compare_digest(supplied.encode(), API_KEY.encode()):
                return JSONResponse(status_code=401, content={"detail": "Unauthorized"})

    started = time.perf_counter()
    response = await call_next(request)
    logger.info(
        "%s %s -> %d (%.0f ms)",
        request.method,
        path,
        response.status_code,
        (time.perf_counter() - started) * 1000,
    )
    return response


def custom_openapi():
    """Advertise x-api-key on every operation except the health check."""
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=app.title,
        version=app.version,
        description="Validation, business rules and AI-assisted curation of clients, workers and tasks",
        routes=app.routes,
    )
    schema.setdefault("components", {})["securitySchemes"] = {
        "ApiKeyAuth": {"type": "apiKey", "in": "header", "name": "x-api-key"}
    }
    for path, operations in schema.get("paths", {}).items():
        for op in operations.values():
            op["security"] = [] if path == HEALTH_PATH else [{"ApiKeyAuth": []}]

    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi

if not API_KEY:
    logger.warning("API_KEY not set; API key auth is DISABLED (dev mode).")

# Register routers
for router in (validation_router, rules_router, data_router, ai_router, healthcheck_router):
    app.include_router(router, prefix="/api")
