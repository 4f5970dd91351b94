import time
import logging
from dotenv import load_dotenv

# Load environment variables from .env file before anything else
load_dotenv()

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.core.config import settings
from app.core.errors import (
    AppError, BadRequestError, ForbiddenError, InternalFailureError, NotFoundError, UnauthorizedError,
)
from app.core.logging import setup_logging, request_id_ctx
from app.api.router import api_router
from app.core.db import init_models
from app.platform.provider_registry import ProviderRegistry


setup_logging()
app = FastAPI(title=settings.APP_NAME)
logger = logging.getLogger(__name__)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    start_time = time.time()

    response = await call_next(request)

    process_time = (time.time() - start_time) * 1000
    formatted_process_time = f"{process_time:.2f}ms"

    logger.info(
        f"Request: {request.method} {request.url.path} - Response: {response.status_code} - Time: {formatted_process_time}"
    )

    return response

# registered last so it runs first and the request log line carries the id
@app.middleware("http")
async def add_request_id(request: Request, call_next):
    rid = request.headers.get("x-request-id", "-")
    request_id_ctx.set(rid)
    response = await call_next(request)
    return response

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} for request {request.method} {request.url.path}: {exc.message}")
    else:
        logger.info(f"{exc.kind} for request {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = "; ".join(
        f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in exc.errors()
    )
    return JSONResponse(status_code=400, content=BadRequestError(errors or "Malformed request").to_dict())

# routing and static-file errors raised by the framework itself
_HTTP_ERRORS = {400: BadRequestError, 401: UnauthorizedError, 403: ForbiddenError, 404: NotFoundError}

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    fallback = BadRequestError if exc.status_code < 500 else InternalFailureError
    error = _HTTP_ERRORS.get(exc.status_code, fallback)(str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=error.to_dict(), headers=exc.headers)

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled exception for request {request.method} {request.url.path}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"error": "InternalFailure", "message": "An internal server error occurred."},
    )


@app.on_event("startup")
async def on_startup():
    await init_models()
    app.state.registry = ProviderRegistry.from_settings(settings)


app.include_router(api_router, prefix=settings.API_PREFIX)

if settings.ASSET_SINK_PROVIDER == "local":
    app.mount("/assets", StaticFiles(directory=settings.ASSETS_ROOT, check_dir=False), name="assets")


def run():
    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT, reload=settings.ENV == "local")
