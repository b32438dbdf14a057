from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .config import Settings, get_settings
from .db import StorageClient
from .errors import ClientInputError, MethodNotAllowed, StorageError
from .sms import parse_record

logger = logging.getLogger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

ONLY_GET = "Only GET requests are allowed"
INSERTED = "Data inserted into MongoDB"
INSERT_FAILED = "Error inserting data into MongoDB"


def text_response(body: str, status_code: int = 200) -> PlainTextResponse:
    # Every body is one line, newline-terminated.
    return PlainTextResponse(body + "\n", status_code=status_code)


def query_params(request: Request) -> dict[str, str]:
    """
    First value of each query parameter.

    Parameters that are absent are simply not in the dict; callers treat
    them as empty strings.
    """
    return {
        key: request.query_params.getlist(key)[0]
        for key in dict.fromkeys(request.query_params.keys())
    }


# --- Storage dependency ---


def get_storage(request: Request) -> StorageClient:
    return request.app.state.storage


# --- App factory ---


def create_app(settings: Settings | None = None, storage: StorageClient | None = None) -> FastAPI:
    """
    Build the application.

    When `storage` is given (tests, or the CLI which connects before binding
    the port) the caller owns it. Otherwise the lifespan connects at startup,
    which aborts startup if MongoDB is unreachable, and disconnects on shutdown.
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        owned = app.state.storage is None
        if owned:
            app.state.storage = StorageClient.connect(settings)
        yield
        if owned:
            app.state.storage.close()
            app.state.storage = None

    app = FastAPI(title="sms-dump", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.storage = storage

    @app.exception_handler(ClientInputError)
    async def handle_client_input_error(request: Request, exc: ClientInputError) -> PlainTextResponse:
        logger.debug("Rejected %s %s: %s", request.method, request.url, exc.message)
        return text_response(exc.message, exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> Response:
        # The router answers methods outside ALL_METHODS itself.
        if exc.status_code == 405:
            return PlainTextResponse(ONLY_GET + "\n", status_code=405, headers=exc.headers)
        return await http_exception_handler(request, exc)

    # Every path is the webhook, not just "/".
    @app.api_route("/", methods=ALL_METHODS)
    @app.api_route("/{path:path}", methods=ALL_METHODS)
    def notify(request: Request, storage: StorageClient = Depends(get_storage)) -> PlainTextResponse:
        """
        SMS event webhook.

          GET /?func=add&source=Facebook&receiver=123456789&info=code

        Validates the four parameters and stores them as one document.
        """
        if request.method != "GET":
            raise MethodNotAllowed(ONLY_GET)

        record = parse_record(query_params(request))

        try:
            inserted_id = storage.insert(record)
        except StorageError:
            logger.exception(INSERT_FAILED)
            return text_response(INSERT_FAILED, 500)

        logger.info("Stored record %s from %s", inserted_id, record.source)
        return text_response(INSERTED)

    return app


app = create_app()
