"""
Data source base classes
Uniform async fetch contract every category adapter implements.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from loguru import logger
from pydantic import BaseModel, Field

from propscore.config import settings
from propscore.errors import SourceUnavailableError


class LocationQuery(BaseModel):
    """What an adapter is asked about"""
    lat: float
    lng: float
    address: Optional[str] = None
    fips_code: Optional[str] = Field(default=None, description="5-digit county FIPS code")
    radius_m: int = Field(
        default_factory=lambda: settings.DEFAULT_RADIUS_METERS,
        description="Search radius (meters)"
    )


class DataSource(ABC):
    """
    Data source adapter

    fetch() returns the category's record or raises
    SourceUnavailableError. The orchestrator isolates any failure
    into errors[category].
    """

    category: str = ""
    label: str = "DataSource"

    def __init__(self):
        self.logger = logger.bind(source=self.label)

    @abstractmethod
    async def fetch(self, query: LocationQuery) -> BaseModel:
        """Fetch one record for the query location"""
        pass

    def _unavailable(self, message: str) -> SourceUnavailableError:
        return SourceUnavailableError(message, category=self.category)


class HttpDataSource(DataSource):
    """
    Adapter backed by an HTTP API

    Shares the orchestrator's httpx.AsyncClient. HTTP and transport
    errors are raised as SourceUnavailableError.
    """

    def __init__(self, client: httpx.AsyncClient):
        super().__init__()
        self.client = client

    async def _get_json(
        self,
        url: str,
        params: Optional[dict] = None,
        headers: Optional[dict] = None,
    ) -> Any:
        return await self._request("GET", url, params=params, headers=headers)

    async def _post_form(self, url: str, data: dict) -> Any:
        return await self._request("POST", url, data=data)

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self.client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            self.logger.error(f"API error: {status}")
            raise self._unavailable(f"{self.label} API error: {status}") from e

        except httpx.HTTPError as e:
            self.logger.error(f"Request failed: {e}")
            raise self._unavailable(f"{self.label} request failed: {e}") from e

        except ValueError as e:
            raise self._unavailable(f"{self.label} returned invalid JSON") from e

    def _require_key(self, key: str, env_name: str) -> str:
        """API key or SourceUnavailableError when it is not configured"""
        if not key:
            raise self._unavailable(f"{self.label} API key not configured ({env_name})")
        return key
