import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .db import init_db
from .errors import CookbookError
from .routes import comments, recipes, status

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Sent on every response, preflight included
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables once at startup
    init_db()
    logger.info("Cookbook API started (environment: %s)", settings.environment)
    yield


app = FastAPI(
    title="Vintage Cookbook API",
    description="Share family recipes and comment on them",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(status.router)
app.include_router(recipes.router)
app.include_router(comments.router)


def allowed_methods(path: str):
    if path.startswith(comments.router.prefix):
        return comments.ALLOWED_METHODS
    if path.startswith(recipes.router.prefix):
        return recipes.ALLOWED_METHODS
    return ["GET"]


@app.middleware("http")
async def cors_middleware(request: Request, call_next):
    if request.method == "OPTIONS":
        return JSONResponse({"ok": True}, headers=CORS_HEADERS)

    try:
        response = await call_next(request)
    except Exception as e:
        logger.exception("API error on %s %s", request.method, request.url.path)
        response = JSONResponse(
            status_code=500,
            content={"error": "Internal server error", "message": str(e)},
        )
    for key, value in CORS_HEADERS.items():
        response.headers[key] = value
    return response


@app.exception_handler(CookbookError)
async def cookbook_error_handler(request: Request, exc: CookbookError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    if exc.status_code == 405:
        methods = allowed_methods(request.url.path)
        return JSONResponse(
            status_code=405,
            content={"error": "Method not allowed", "allowedMethods": methods},
            headers={"Allow": ", ".join(methods)},
        )
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    message = "; ".join(err.get("msg", "") for err in exc.errors())
    logger.warning("Rejected malformed request body: %s", message)
    return JSONResponse(
        status_code=400,
        content={"error": "Invalid request body", "message": message},
    )
