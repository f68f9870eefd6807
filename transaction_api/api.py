from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from .config import Settings, get_settings
from .database import TransactionStore
from .errors import ApiError
from .handlers import TransactionHandler
from .logging_config import configure_logging


def _respond(result) -> JSONResponse:
    status_code, payload = result
    return JSONResponse(status_code=status_code, content=jsonable_encoder(payload))


def create_app(settings: Optional[Settings] = None, store: Optional[TransactionStore] = None) -> FastAPI:
    """Build the API. The store is created once at startup unless one is passed in."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        transaction_store = store or TransactionStore.from_url(settings.database_url, echo=settings.db_echo)
        await transaction_store.init()
        app.state.store = transaction_store
        app.state.handler = TransactionHandler(transaction_store)
        logger.info(f"Server running on port {settings.port}")
        try:
            yield
        finally:
            await transaction_store.close()
            logger.info("Database connections closed")

    app = FastAPI(title="Transaction API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        else:
            logger.warning(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    async def server_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        logger.warning(f"Validation error on {request.method} {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    @app.get("/api/transactions")
    async def list_transactions(request: Request):
        return _respond(await request.app.state.handler.list())

    @app.get("/api/transactions/{transaction_id}")
    async def get_transaction(transaction_id: str, request: Request):
        return _respond(await request.app.state.handler.get(transaction_id))

    @app.post("/api/transactions")
    async def create_transaction(request: Request, body: Dict[str, Any] = Body(...)):
        return _respond(await request.app.state.handler.create(body))

    @app.put("/api/transactions/{transaction_id}")
    async def update_transaction(transaction_id: str, request: Request, body: Dict[str, Any] = Body(...)):
        return _respond(await request.app.state.handler.update(transaction_id, body))

    @app.delete("/api/transactions/{transaction_id}")
    async def delete_transaction(transaction_id: str, request: Request):
        return _respond(await request.app.state.handler.delete(transaction_id))

    return app


# Target for `uvicorn transaction_api.api:app`; logs through loguru's default sink.
app = create_app()


def main():
    import uvicorn

    settings = get_settings()
    configure_logging(settings)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
