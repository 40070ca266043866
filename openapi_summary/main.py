from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import List, Optional
import logging
import time
import uuid

import uvicorn

from openapi_summary.config import Settings, get_settings
from openapi_summary.errors import Outcome, PipelineError
from openapi_summary.logging_config import init_logging
from openapi_summary.openapi_parser import ResourceDescriptor
from openapi_summary.pipeline import parse_swagger_upload

init_logging(get_settings().LOG_LEVEL)
logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Validate configuration and prepare the scratch root once at startup."""
    settings = get_settings()
    settings.SCRATCH_DIR.mkdir(parents=True, exist_ok=True)
    logger.info(
        "startup",
        extra={
            "scratch_dir": str(settings.SCRATCH_DIR.resolve()),
            "allowed_extensions": settings.ALLOWED_EXTENSIONS,
            "allowed_media_types": settings.ALLOWED_MEDIA_TYPES,
            "validator_backend": settings.VALIDATOR_BACKEND,
        }
    )
    yield


app = FastAPI(title="OpenAPI Summary", lifespan=lifespan)

cors_origins = get_settings().CORS_ORIGINS
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    # credentials are not allowed together with a wildcard origin
    allow_credentials="*" not in cors_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
    logger.info(
        "incoming_request",
        extra={
            "request_id": request_id,
            "method": request.method,
            "url": request.url.path,
            "client_ip": request.client.host if request.client else None
        }
    )

    start_time = time.perf_counter()
    response = await call_next(request)
    duration = round(time.perf_counter() - start_time, 4)

    response.headers["X-Request-ID"] = request_id
    logger.info(
        "request_complete",
        extra={
            "request_id": request_id,
            "method": request.method,
            "url": request.url.path,
            "status_code": response.status_code,
            "duration": duration
        }
    )

    return response


@app.exception_handler(PipelineError)
async def pipeline_error_handler(request: Request, exc: PipelineError):
    logger.info(
        "request_failed",
        extra={"category": exc.category.value, "status_code": exc.status_code}
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    detail = "; ".join(str(err.get("msg", err)) for err in exc.errors())
    error = PipelineError(Outcome.MALFORMED_UPLOAD, detail)
    logger.warning("malformed_upload", extra={"detail": detail})
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("unhandled_error", exc_info=exc)
    detail = "unexpected error" if get_settings().REDACT_INTERNAL_ERRORS else str(exc)
    return JSONResponse(status_code=500, content={"error": f"Internal Server Error: {detail}"})


@app.post("/parse-swagger", response_model=List[ResourceDescriptor])
async def parse_swagger(
    swagger_file: Optional[UploadFile] = File(None, alias="swaggerFile"),
    settings: Settings = Depends(get_settings),
):
    """Return the (path, method) pairs declared by an uploaded OpenAPI/Swagger file."""
    return await parse_swagger_upload(swagger_file, settings)


def run() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_config=None)


if __name__ == "__main__":
    run()
