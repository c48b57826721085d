"""
docsearch - FastAPI search service over a prebuilt TF-IDF index

Endpoints:
- POST /api/search: raw request body is the query, returns [[doc_id, score], ...]
- GET /, /index.html, /index.js: static search page
- GET /health: liveness and corpus size

The corpus model is loaded once at startup and only read afterwards, so
requests share it without locking. A failing request gets its own error
response and never stops the server.
"""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.responses import FileResponse, JSONResponse
from pydantic import BaseModel
from starlette.concurrency import run_in_threadpool

from . import config
from .errors import EncodingError
from .storage import load_model
from .tfidf.model import CorpusModel
from .tfidf.scorer import TfIdfRanker

logger = logging.getLogger(__name__)

STATIC_FILES = {
    "index.html": "text/html",
    "index.js": "text/javascript",
}


class HealthResponse(BaseModel):
    status: str
    documents: int
    version: str
    started_at: str
    uptime_seconds: float


def decode_query(body: bytes) -> str:
    """
    Decode a raw request body into query text

    Raises:
        EncodingError: Body is not valid UTF-8
    """
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"Query is not valid UTF-8: {e}") from e


def create_app(
    model: Optional[CorpusModel] = None,
    index_path: Optional[str] = None,
    static_dir: Optional[str] = None,
) -> FastAPI:
    """
    Build the search application

    Args:
        model: Prebuilt corpus model; when None it is loaded at startup
        index_path: Index file to load (default: INDEX_PATH setting)
        static_dir: Directory holding index.html / index.js (default: STATIC_DIR setting)

    Returns:
        FastAPI application
    """
    static_root = Path(static_dir or config.STATIC_DIR)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if app.state.ranker is None:
            # IndexFormatError propagates: no valid model, no server
            path = index_path or config.INDEX_PATH
            logger.info(f"Loading index from {path}...")
            app.state.ranker = TfIdfRanker(load_model(path))
        logger.info(f"Serving {app.state.ranker.model.document_count()} documents")
        yield
        logger.info("Shutting down...")

    app = FastAPI(
        title="docsearch",
        description="TF-IDF document search",
        version=config.APP_VERSION,
        lifespan=lifespan,
    )
    app.state.ranker = TfIdfRanker(model) if model is not None else None
    app.state.started_at = datetime.now(timezone.utc)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info(f"Received request - method: {request.method}, url: {request.url.path}")
        start = time.perf_counter()
        response = await call_next(request)
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code} in {time.perf_counter() - start:.4f}s")
        return response

    @app.exception_handler(EncodingError)
    async def encoding_error_handler(request: Request, exc: EncodingError):
        logger.warning(f"Rejected request {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "Invalid encoding", "detail": str(exc)},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Request {request.url.path} failed")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    def serve_static_file(name: str) -> FileResponse:
        file_path = static_root / name
        if not file_path.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{name} not found")
        return FileResponse(file_path, media_type=STATIC_FILES[name])

    @app.get("/")
    @app.get("/index.html")
    async def index_page():
        """Search page"""
        return serve_static_file("index.html")

    @app.get("/index.js")
    async def index_script():
        """Search page script"""
        return serve_static_file("index.js")

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check with corpus size"""
        started_at = app.state.started_at
        return HealthResponse(
            status="healthy",
            documents=app.state.ranker.model.document_count(),
            version=config.APP_VERSION,
            started_at=started_at.isoformat(),
            uptime_seconds=round((datetime.now(timezone.utc) - started_at).total_seconds(), 2),
        )

    @app.post("/api/search")
    async def api_search(
        request: Request,
        limit: Optional[int] = Query(default=None, ge=0, description="Keep only the first N results (0 = all)"),
    ):
        """
        Rank all documents against the query in the request body

        Example:
            POST /api/search
            the cat sat

        Returns:
            [["docs/a.xhtml", 0.1003], ["docs/b.xhtml", 0.0], ...]
        """
        query = decode_query(await request.body())
        results = await run_in_threadpool(app.state.ranker.search, query, limit)
        logger.debug(f"Query {query!r}: {len(results)} results")
        return [[doc_id, rank] for doc_id, rank in results]

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    from .logging_config import setup_logging

    setup_logging(log_file=config.LOG_FILE, console_level=getattr(logging, config.LOG_LEVEL, logging.INFO))
    uvicorn.run(app, host=config.HOST, port=config.PORT)
