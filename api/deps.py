"""Shared application state and FastAPI dependencies."""

import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

import pandas as pd
from fastapi import Request, UploadFile
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from property_market.data.loader import load_reference_corpus
from property_market.estimator.errors import CorpusUnavailable
from property_market.storage.documents import DocumentStore
from property_market.storage.files import FileStore
from property_market.utils.config import load_config, resolve_path

logger = logging.getLogger(__name__)

config = load_config()

# Global corpus state: loaded once, replaced only by an explicit reload
corpus_state = {
    "corpus": None,
    "source": None,
    "loaded_at": None,
}

app_state = {
    "store": None,
    "files": None,
}


class ApiError(Exception):
    """Error answered with ``{"status": "error", "message": ...}``."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


def load_corpus(path: str | None = None) -> pd.DataFrame:
    """Load the reference corpus into the global state."""
    source = resolve_path(path or config["data"]["corpus_path"])
    corpus = load_reference_corpus(source)
    corpus_state["corpus"] = corpus
    corpus_state["source"] = str(source)
    corpus_state["loaded_at"] = datetime.now(timezone.utc)
    return corpus


def init_state() -> None:
    """Open storage and load the corpus on startup."""
    storage = config["storage"]
    app_state["store"] = DocumentStore.from_url(storage["database_url"])
    app_state["files"] = FileStore(resolve_path(storage["upload_dir"]))
    try:
        load_corpus()
    except CorpusUnavailable as e:
        logger.warning(f"Reference corpus not loaded: {e}")


def get_config() -> dict:
    return config


def get_store() -> DocumentStore:
    if app_state["store"] is None:
        app_state["store"] = DocumentStore.from_url(config["storage"]["database_url"])
    return app_state["store"]


def get_files() -> FileStore:
    if app_state["files"] is None:
        app_state["files"] = FileStore(resolve_path(config["storage"]["upload_dir"]))
    return app_state["files"]


def get_corpus() -> pd.DataFrame:
    """Loaded corpus; retries the load if startup could not read it."""
    if corpus_state["corpus"] is None:
        return load_corpus()
    return corpus_state["corpus"]


def save_upload(request: Request, files: FileStore, upload: UploadFile) -> str:
    """Store an uploaded image and return the URL it is served from."""
    name = files.save(upload.filename, upload.content_type, upload.file)
    return str(request.url_for("uploads", path=name))


FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def form_or_json(model: type[BaseModel]):
    """Body dependency accepting either a JSON object or form fields.

    Form values arrive as strings and go through the same model, so field
    coercion is identical for both encodings. An empty body is an empty object.
    """

    async def parse_body(request: Request) -> BaseModel:
        content_type = request.headers.get("content-type", "")
        if content_type.startswith(FORM_CONTENT_TYPES):
            data = dict(await request.form())
        elif await request.body():
            try:
                data = await request.json()
            except ValueError as e:
                raise RequestValidationError(
                    [{"type": "json_invalid", "loc": ("body",), "msg": f"JSON decode error: {e}"}]
                ) from e
        else:
            data = {}

        try:
            return model.model_validate(data)
        except ValidationError as e:
            raise RequestValidationError(e.errors(include_url=False, include_context=False)) from e

    return parse_body
