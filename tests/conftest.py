"""Pytest fixtures for ECO memorizer tests."""

import asyncio
from typing import Optional

import pytest

from eco_memorizer.config import Settings
from eco_memorizer.services.move_index_cache import MoveIndexCache
from eco_memorizer.services.resolver import MoveResolver


# Trimmed-down copy of the chessgames.com ECO help table
SAMPLE_ECO_HTML = b"""<html>
<head><title>ECO Codes</title></head>
<body>
<table>
<tr><th>Code</th><th>Opening</th></tr>
<tr><td>A00</td><td>Uncommon Opening
g4 a3 h3</td></tr>
<tr><td>B00</td><td>King's Pawn Opening<br>e4</td></tr>
<tr><td>C50</td><td>Italian Game
e4 e5 Nf3 Nc6 Bc4</td></tr>
<tr><td> C60 </td><td><b>Ruy Lopez</b><br><font size=-1>e4 e5 Nf3 Nc6 Bb5</font></td></tr>
</table>
</body>
</html>
"""

FAKE_ECO_URL = "https://eco.example.test/chessecohelp.html"


class FakeFetcher:
    """Stand-in for EcoTableFetcher that counts upstream calls."""

    url = FAKE_ECO_URL

    def __init__(self, content: bytes = SAMPLE_ECO_HTML, delay: float = 0.0):
        self.content = content
        self.delay = delay
        self.error: Optional[Exception] = None
        self.calls = 0

    async def fetch(self) -> bytes:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.content


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fetcher():
    """Create a fake fetcher serving the sample table."""
    return FakeFetcher()


@pytest.fixture
def clock():
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def move_cache(fetcher, clock):
    """Create a fresh move index cache backed by the fake fetcher."""
    return MoveIndexCache(fetch=fetcher.fetch, ttl_seconds=180, clock=clock)


@pytest.fixture
def resolver(move_cache):
    """Create a resolver over the fresh cache."""
    return MoveResolver(move_cache)


@pytest.fixture
def test_settings():
    """Settings pointing at the fake upstream."""
    return Settings(eco_table_url=FAKE_ECO_URL, cache_ttl_seconds=180, fetch_timeout_seconds=5)


@pytest.fixture
def app_client(test_settings, fetcher):
    """Create a FastAPI test client wired to the fake fetcher."""
    from fastapi.testclient import TestClient
    from eco_memorizer.main import create_app

    app = create_app(settings=test_settings, fetcher=fetcher)
    yield TestClient(app)
