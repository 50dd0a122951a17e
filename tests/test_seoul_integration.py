"""End-to-end integration tests for the Seoul real-time subway API."""

import pytest

from commute_timing.adapters.api_rate_limiter import ApiRateLimiter
from commute_timing.adapters.seoul_subway_api import (
    SeoulSubwayArrivalRepository,
    SeoulSubwayHttpClient,
)


@pytest.mark.integration
@pytest.mark.asyncio
async def test_gangnam_arrivals_with_sample_key() -> None:
    """Test that the sample key returns parseable arrivals for 강남역."""
    import aiohttp

    ApiRateLimiter.reset()
    async with aiohttp.ClientSession() as session:
        repo = SeoulSubwayArrivalRepository(SeoulSubwayHttpClient(session, api_key="sample"))

        arrivals = await repo.get_arrivals("강남역")

        # Trains may not run at night; only the shape is checked
        for arrival in arrivals:
            assert arrival.line_id.isdigit()
            assert arrival.arrival_seconds >= 0
