"""Root pytest configuration."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

# Load environment variables before tests run
_root = Path(__file__).parent
load_dotenv(_root / ".env")
load_dotenv(_root / ".env.local", override=True)


@pytest.fixture(autouse=True)
def _no_database_url(monkeypatch):
    """Keep tests off real Postgres; database calls are mocked per test."""
    monkeypatch.delenv("DATABASE_URL", raising=False)
