"""
Shared test fixtures
"""

import asyncio
from datetime import datetime, timezone
from typing import Optional

import pytest
from pydantic import BaseModel

from propscore.data_sources.base import DataSource, LocationQuery


class FakeSource(DataSource):
    """In-memory source: returns a record, raises, or sleeps first"""

    label = "Fake"

    def __init__(
        self,
        category: str,
        result: Optional[BaseModel] = None,
        error: Optional[Exception] = None,
        delay: float = 0.0,
    ):
        self.category = category
        super().__init__()
        self.result = result
        self.error = error
        self.delay = delay
        self.calls: list[LocationQuery] = []

    async def fetch(self, query: LocationQuery) -> BaseModel:
        self.calls.append(query)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_source():
    """Factory for FakeSource instances"""
    return FakeSource


@pytest.fixture
def as_of() -> datetime:
    return datetime(2025, 6, 1, 12, 0, 0, tzinfo=timezone.utc)
