"""FastAPI application for the Property Marketplace backend."""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from api import deps
from api.deps import ApiError, config
from api.routes import orders, ratings, users, vendors
from api.schemas import HealthResponse
from property_market.estimator.errors import CorpusUnavailable
from property_market.storage.files import InvalidUpload
from property_market.utils.config import resolve_path

logging.basicConfig(
    level=config["logging"]["level"],
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open storage and load the reference corpus on startup."""
    deps.init_state()
    yield


app = FastAPI(
    title=config["app"]["title"],
    description="Marketplace connecting clients with property and construction vendors",
    version=config["app"]["version"],
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content={"status": "error", "message": exc.message})


@app.exception_handler(InvalidUpload)
async def invalid_upload_handler(request: Request, exc: InvalidUpload):
    return JSONResponse(status_code=400, content={"status": "error", "message": str(exc)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={"status": "error", "message": "Data yang dikirim tidak valid", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"status": "error", "message": "Terjadi kesalahan pada server"})


app.include_router(users.router, prefix="/users", tags=["Users"])
app.include_router(users.router, prefix="/login", tags=["Users"], include_in_schema=False)
app.include_router(vendors.router, prefix="/vendor", tags=["Vendors"])
app.include_router(ratings.router, prefix="/rating", tags=["Ratings"])
app.include_router(orders.router, prefix="/orders", tags=["Orders"])

app.mount(
    "/uploads",
    StaticFiles(directory=resolve_path(config["storage"]["upload_dir"]), check_dir=False),
    name="uploads",
)


@app.get("/health", response_model=HealthResponse, tags=["System"])
async def health_check():
    """Check API health and reference corpus status."""
    corpus = deps.corpus_state["corpus"]
    return HealthResponse(
        status="healthy",
        corpus_loaded=corpus is not None,
        corpus_rows=len(corpus) if corpus is not None else None,
        corpus_source=deps.corpus_state["source"],
    )


@app.post("/corpus/reload", tags=["System"])
async def reload_corpus():
    """Reload the reference corpus from disk (after the dataset changes)."""
    try:
        corpus = deps.load_corpus()
    except CorpusUnavailable as e:
        logger.error(f"Corpus reload failed: {e}")
        raise ApiError(500, "Gagal memuat ulang dataset harga")
    return {
        "status": "reloaded",
        "rows": len(corpus),
        "source": deps.corpus_state["source"],
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("api.main:app", host="0.0.0.0", port=3000, reload=True)
