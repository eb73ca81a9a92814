import logging
import sqlite3

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from library_catalog.core.config import get_settings
from library_catalog.core.errors import AuthTokenInvalid, CatalogError
from library_catalog.core.logging_config import setup_logging
from library_catalog.routers import auth, book, health

# Fails with ConfigurationError when the token settings are absent
settings = get_settings()
setup_logging(settings.log_level)

logger = logging.getLogger(__name__)
logger.info(
    "Token settings: issuer=%s audience=%s lifetime=%smin",
    settings.jwt_issuer,
    settings.jwt_audience,
    settings.access_token_expire_minutes,
)

app = FastAPI(
    title="Library Catalog Backend",
    description="APIs for user authentication and the book catalog.",
    version="0.1.0",
    openapi_tags=[
        {"name": "health", "description": "Service health"},
        {"name": "auth", "description": "Registration and login"},
        {"name": "book", "description": "Book catalog (bearer token required)"},
    ],
)

# CORS runs before routing so preflight requests never reach the token gate
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthTokenInvalid) else None
    if exc.status_code >= 500:
        logger.error("%s on %s %s: %s", exc.__class__.__name__, request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message}, headers=headers)


@app.exception_handler(sqlite3.DatabaseError)
async def sqlite_error_handler(request: Request, exc: sqlite3.DatabaseError):
    logger.exception("Database error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Database operation failed"})


# Ensure standard HTTP exceptions pass through (do not override FastAPI/Starlette defaults)
@app.exception_handler(StarletteHTTPException)
async def http_exception_passthrough(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=getattr(exc, "headers", None))


# Invalid bodies and path parameters are client errors
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [{"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")} for e in exc.errors()]
    return JSONResponse(status_code=400, content={"detail": errors})


# Catch-all for truly unhandled exceptions only
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# Routers
app.include_router(health.router)
app.include_router(auth.router)
app.include_router(book.router)
