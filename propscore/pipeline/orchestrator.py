"""
Aggregation orchestrator
Fans a location query out to every requested data source concurrently
and scores whatever came back.
"""

import asyncio
from typing import Any, Iterable, Optional

import httpx
from loguru import logger

from propscore.config import settings
from propscore.errors import InternalError, SourceUnavailableError, ValidationError
from propscore.schemas.results import (
    AggregationRequest,
    AggregationResponse,
    AggregationResult,
)
from propscore.agents.risk_agent import RiskAgent
from propscore.data_sources.base import DataSource, LocationQuery
from propscore.data_sources.registry import CATEGORIES, GROUP_TOGGLES, build_sources

DEFAULT_TOGGLES = ["flood"]


class AggregationOrchestrator:
    """
    Aggregation orchestrator

    [1. Validate]   coordinates, radius and toggles; nothing is dispatched on failure
    [2. Fan out]    one task per category, each bounded by its own timeout
    [3. Settle]     wait for every task; each failure lands in errors[category]
    [4. Score]      composite risk / livability score over the data obtained

    Every requested category ends up in exactly one of data / errors.
    One attempt per source and request; nothing is cached.
    """

    def __init__(
        self,
        sources: Optional[dict[str, DataSource]] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._owns_client = False
        if sources is None:
            if client is None:
                client = httpx.AsyncClient(
                    timeout=settings.HTTP_TIMEOUT,
                    follow_redirects=True,
                )
                self._owns_client = True
            sources = build_sources(client)

        self.client = client
        self.sources = dict(sources)
        self.timeout = timeout if timeout is not None else settings.SOURCE_TIMEOUT_SECONDS
        self.risk_agent = RiskAgent()

        self.logger = logger.bind(component="Aggregation")

    @property
    def known_categories(self) -> set[str]:
        return set(CATEGORIES) | set(self.sources)

    def resolve_toggles(self, toggles: Optional[Iterable[str]]) -> list[str]:
        """
        Expands group toggles and de-duplicates, keeping request order.
        No toggles at all (None) means flood only; an explicit empty list
        dispatches nothing.

        Raises:
            ValidationError: Unknown toggle identifier
        """
        if toggles is None:
            return list(DEFAULT_TOGGLES)

        resolved: list[str] = []
        unknown: list[str] = []

        for toggle in toggles:
            key = toggle.strip()
            for category in GROUP_TOGGLES.get(key, (key,)):
                if category not in self.known_categories:
                    unknown.append(category)
                elif category not in resolved:
                    resolved.append(category)

        if unknown:
            raise ValidationError(
                f"Unknown toggle(s): {', '.join(unknown)} "
                f"(available: {', '.join([*GROUP_TOGGLES, *sorted(self.known_categories)])})"
            )

        return resolved

    def validate(self, request: AggregationRequest) -> None:
        """
        Rejects the request before any dispatch.

        Raises:
            ValidationError: Coordinates out of range or non-positive radius
        """
        if not -90 <= request.lat <= 90:
            raise ValidationError(f"Latitude must be between -90 and 90 (got {request.lat})")
        if not -180 <= request.lng <= 180:
            raise ValidationError(f"Longitude must be between -180 and 180 (got {request.lng})")
        if request.radius is not None and request.radius <= 0:
            raise ValidationError(f"Radius must be positive (got {request.radius})")

    async def collect(self, request: AggregationRequest) -> AggregationResult:
        """
        Runs every requested source and waits for all of them to settle.

        Args:
            request: Location and toggles

        Returns:
            AggregationResult: data for succeeded categories, errors for the rest

        Raises:
            ValidationError: Invalid request (no source was called)
        """
        self.validate(request)
        categories = self.resolve_toggles(request.toggles)

        query = LocationQuery(
            lat=request.lat,
            lng=request.lng,
            address=request.address,
            fips_code=request.fips_code,
            radius_m=request.radius or settings.DEFAULT_RADIUS_METERS,
        )

        self.logger.info(
            f"Aggregating {', '.join(categories)} at ({request.lat}, {request.lng})"
        )

        outcomes = await asyncio.gather(
            *(self._fetch(category, query) for category in categories),
            return_exceptions=True,
        )

        result = AggregationResult()
        for category, outcome in zip(categories, outcomes):
            if isinstance(outcome, BaseException):
                result.errors[category] = self._describe(outcome)
            else:
                result.data[category] = outcome

        self.logger.info(
            f"Aggregation settled: {len(result.data)} succeeded, {len(result.errors)} failed"
        )
        return result

    async def aggregate(self, request: AggregationRequest) -> AggregationResponse:
        """
        Collects the data and computes the composite score.

        Raises:
            ValidationError: Invalid request (no source was called)
            InternalError: The composite score could not be computed
        """
        result = await self.collect(request)

        try:
            composite = self.risk_agent.run(result)
        except Exception as e:
            raise InternalError(f"Composite scoring failed: {e}") from e

        return AggregationResponse(
            success=True,
            data=result.data,
            property_score=composite,
            errors=result.errors or None,
        )

    async def _fetch(self, category: str, query: LocationQuery) -> Any:
        """One isolated source call"""
        source = self.sources.get(category)
        if source is None:
            raise SourceUnavailableError(
                f"No data source registered for '{category}'", category=category
            )

        try:
            return await asyncio.wait_for(source.fetch(query), timeout=self.timeout)

        except asyncio.TimeoutError:
            self.logger.warning(f"{category}: timed out after {self.timeout:g}s")
            raise SourceUnavailableError(
                f"{category} timed out after {self.timeout:g}s", category=category
            )

        except Exception as e:
            self.logger.warning(f"{category}: {e}")
            raise

    def _describe(self, error: BaseException) -> str:
        return str(error) or error.__class__.__name__

    async def aclose(self) -> None:
        """Closes the HTTP client if this orchestrator created it"""
        if self._owns_client and self.client is not None:
            await self.client.aclose()

    async def __aenter__(self) -> "AggregationOrchestrator":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()
