"""
FastAPI application — course reverse search.

Run as a script:
    python app/app.py

Or as a module:
    uvicorn app.app:app --reload

Endpoint:
    POST /search
        body:    {"courseCode": "CNIT 120"}
        200:     {"results": [{"degree_name": str|null, "certificate_name": str|null}, ...]}
        400:     {"error": "Invalid course code format."}
        404:     {"error": "No degrees or certificates found for that course."}
        500:     {"error": "Database query failed."}

Database errors are logged here and never sent to the caller.

Logs each lookup and wall-clock response time to stdout and logs/app.log
(rotating, 5 MB max, 3 backups).
"""

import asyncio
import logging
import logging.handlers
import sys
import time
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure project root is on sys.path when running as a script (python app/app.py)
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import load_settings
from catalog.course_code import is_valid_course_code, normalize_course_code
from catalog.store import QualificationStore, StoreError

LOG_DIR  = Path(__file__).parent.parent / "logs"
LOG_FILE = LOG_DIR / "app.log"

def _setup_logging() -> None:
    LOG_DIR.mkdir(exist_ok=True)
    fmt = logging.Formatter("%(asctime)s  %(levelname)s  %(message)s")

    stream = logging.StreamHandler(sys.stdout)
    stream.setFormatter(fmt)

    # Rotate at 5 MB, keep 3 backups
    rotating = logging.handlers.RotatingFileHandler(
        LOG_FILE, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
    )
    rotating.setFormatter(fmt)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(stream)
    root.addHandler(rotating)

_setup_logging()
log = logging.getLogger("api")

settings = load_settings()

# ---------------------------------------------------------------------------
# Response messages
# ---------------------------------------------------------------------------

INVALID_CODE = "Invalid course code format."
NOT_FOUND    = "No degrees or certificates found for that course."
QUERY_FAILED = "Database query failed."


# ---------------------------------------------------------------------------
# App + lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    log.info("Opening connection pool (min=%d, max=%d)…",
             settings.pool_min_size, settings.pool_max_size)
    store = QualificationStore.create(
        settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.pool_timeout,
    )
    await store.open()
    app.state.store = store

    # Probe in the background so a database that is down does not hold up startup.
    probe = asyncio.create_task(store.check_connection())

    yield  # server runs here

    probe.cancel()
    log.info("Closing connection pool…")
    await store.close()


app = FastAPI(title="Course Reverse Search", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.allowed_origin],
    allow_methods=["POST"],
    allow_headers=["Content-Type"],
)


def get_store(request: Request) -> QualificationStore:
    return request.app.state.store


# ---------------------------------------------------------------------------
# Error envelope: every failure is {"error": "..."}
# ---------------------------------------------------------------------------

@app.exception_handler(StarletteHTTPException)
async def _http_error(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def _bad_body(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Malformed JSON, a missing courseCode or a non-string one.
    log.info("Rejected request body (%d validation errors)", len(exc.errors()))
    return JSONResponse(status_code=400, content={"error": INVALID_CODE})


@app.exception_handler(Exception)
async def _unexpected(_: Request, exc: Exception) -> JSONResponse:
    # Anything the lookup path did not anticipate still gets the generic body.
    log.exception("Unhandled error: %s", exc)
    return JSONResponse(status_code=500, content={"error": QUERY_FAILED})


# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

class SearchRequest(BaseModel):
    courseCode: str


class Qualification(BaseModel):
    degree_name: str | None = None
    certificate_name: str | None = None


class SearchResponse(BaseModel):
    results: list[Qualification]


class ErrorResponse(BaseModel):
    error: str


# ---------------------------------------------------------------------------
# Endpoint
# ---------------------------------------------------------------------------

@app.post(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def search(
    req: SearchRequest,
    store: QualificationStore = Depends(get_store),
) -> SearchResponse:
    if not is_valid_course_code(req.courseCode):
        log.info("Rejected course code %r", req.courseCode)
        raise HTTPException(status_code=400, detail=INVALID_CODE)

    code = normalize_course_code(req.courseCode)
    t0 = time.perf_counter()

    try:
        rows = await store.find_qualifications(code)
    except StoreError as exc:
        log.error("Query error: code=%r  %s", code, exc)
        raise HTTPException(status_code=500, detail=QUERY_FAILED) from exc

    elapsed = time.perf_counter() - t0
    log.info("search=%r  hits=%d  %.3fs", code, len(rows), elapsed)

    if not rows:
        raise HTTPException(status_code=404, detail=NOT_FOUND)

    return SearchResponse(results=[Qualification.model_validate(r) for r in rows])


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def _launch_server() -> None:
    config = uvicorn.Config(app, host=settings.host, port=settings.port, reload=False)
    server = uvicorn.Server(config)

    try:
        asyncio.get_running_loop()
    except RuntimeError:
        uvicorn.run(app, host=settings.host, port=settings.port, reload=False)
        return

    log.warning(
        "Detected an existing asyncio event loop; serving with create_task() instead of asyncio.run()."
    )
    asyncio.create_task(server.serve())


if __name__ == "__main__":
    log.info("=== Course Reverse Search — launching server on http://%s:%d ===",
             settings.host, settings.port)
    _launch_server()
