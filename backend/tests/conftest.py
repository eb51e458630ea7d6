from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from filestore.codes import ErrorCode
from filestore.config import Settings
from filestore.exceptions import AppError
from filestore.main import create_app


def _build_app(mode: str) -> FastAPI:
    """App with a few routes that fail in each of the ways handlers must cover."""
    app = create_app(Settings(app_mode=mode))

    @app.get("/boom/carrier")
    async def carrier() -> None:
        raise AppError(ErrorCode.DB_ERROR, "db failed", TimeoutError("timeout"))

    @app.get("/boom/raw")
    async def raw() -> None:
        raise RuntimeError("disk full")

    @app.get("/files")
    async def list_files(limit: int) -> dict[str, int]:
        return {"limit": limit}

    return app


@pytest.fixture
def debug_app() -> FastAPI:
    return _build_app("debug")


@pytest.fixture
def release_app() -> FastAPI:
    return _build_app("release")


async def _client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    # Unhandled exceptions are re-raised by Starlette after the 500 is sent;
    # let the response through instead.
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


@pytest_asyncio.fixture
async def client(debug_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client against an app running in debug mode."""
    async for c in _client(debug_app):
        yield c


@pytest_asyncio.fixture
async def release_client(release_app: FastAPI) -> AsyncIterator[AsyncClient]:
    """HTTP client against an app running in release mode."""
    async for c in _client(release_app):
        yield c
