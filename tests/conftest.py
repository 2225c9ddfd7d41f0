"""Shared fixtures: clients wired to a real httpx.AsyncClient for respx mocking."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest

from gatsbie.adapters.retail.client import TargetClient
from gatsbie.adapters.solver.client import SolverClient
from gatsbie.core.config import GatsbieSettings

API_KEY = "gats_test"
SOLVER_URL = "https://api2.gatsbie.io"
TARGET_URL = "https://target.gatsbie.io"


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep GATSBIE_* variables from the developer shell out of the tests."""
    for name in ("GATSBIE_API_KEY", "GATSBIE_BASE_URL", "GATSBIE_TARGET_BASE_URL", "GATSBIE_TIMEOUT_SECONDS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def settings() -> GatsbieSettings:
    return GatsbieSettings(_env_file=None, api_key=API_KEY)


@pytest.fixture
async def solver_client(settings: GatsbieSettings) -> AsyncIterator[SolverClient]:
    """Solver client with real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield SolverClient(http_client=http_client, settings=settings)


@pytest.fixture
async def target_client(settings: GatsbieSettings) -> AsyncIterator[TargetClient]:
    """Target client with real httpx client for respx mocking."""
    async with httpx.AsyncClient() as http_client:
        yield TargetClient(http_client=http_client, settings=settings)
