"""
Shared pytest fixtures for the shellserve test suite.
"""

import logging
import pytest
from typing import AsyncGenerator, Callable, List

from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport

from shellserve.core.colors import Palette
from shellserve.core.config import Settings
from shellserve.main import create_app

PIPELINE_LOGGERS = (
    "shellserve.middleware.request_logger",
    "shellserve.middleware.error_handler",
)


@pytest.fixture
def settings() -> Settings:
    """Provide settings with colors off so log lines compare as plain text."""
    return Settings(LOG_COLOR=False, PORT=0, SHUTDOWN_TIMEOUT_SECONDS=15.0)


@pytest.fixture
def plain_palette() -> Palette:
    return Palette.plain()


@pytest.fixture
def app(settings: Settings) -> FastAPI:
    """Provide a freshly built application."""
    return create_app(settings)


@pytest.fixture
def pipeline_lines(caplog) -> Callable[[], List[str]]:
    """Capture request-pipeline log lines; call the fixture value to read them."""
    caplog.set_level(logging.INFO, logger="shellserve")

    def lines() -> List[str]:
        return [
            record.getMessage()
            for record in caplog.records
            if record.name in PIPELINE_LOGGERS and record.levelno >= logging.INFO
        ]

    return lines


@pytest.fixture
async def test_client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    """Provide an async HTTP client for testing the application in-process."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
