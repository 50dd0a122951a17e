"""HTTP client for the Seoul real-time subway arrival API."""

import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from commute_timing.adapters.api_rate_limiter import ApiRateLimiter
from commute_timing.adapters.api_request_logger import log_api_request, log_api_response
from commute_timing.adapters.seoul_subway_api.constants import (
    ARRIVAL_SERVICE,
    DEFAULT_HEADERS,
    DEFAULT_MAX_RESULTS,
    DEFAULT_MIN_INTERVAL_SECONDS,
    RESULT_NO_DATA,
    RESULT_OK,
    SEOUL_SUBWAY_BASE_URL,
)
from commute_timing.domain.errors import ArrivalFetchError

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession


def extract_result(data: dict[str, Any]) -> tuple[str, str]:
    """Get (code, message) of a response body.

    Successful responses nest the result under "errorMessage"; error
    responses carry it at the top level.
    """
    result = data.get("errorMessage")
    if not isinstance(result, dict):
        result = data
    return str(result.get("code", "")), str(result.get("message", ""))


class SeoulSubwayHttpClient:
    """Fetches raw arrival items from the Seoul open data API."""

    def __init__(
        self,
        session: "ClientSession",
        api_key: str,
        base_url: str = SEOUL_SUBWAY_BASE_URL,
        timeout_seconds: float = 5.0,
        min_interval_seconds: float = DEFAULT_MIN_INTERVAL_SECONDS,
    ) -> None:
        """Initialize the client.

        Args:
            session: Shared aiohttp session.
            api_key: Seoul open data API key.
            base_url: API base URL, without a trailing slash.
            timeout_seconds: Total timeout of one request.
            min_interval_seconds: Minimum time between two requests.
        """
        self._session = session
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._min_interval_seconds = min_interval_seconds
        self._rate_limiter: ApiRateLimiter | None = None

    async def _get_rate_limiter(self) -> ApiRateLimiter:
        if self._rate_limiter is None:
            self._rate_limiter = await ApiRateLimiter.get_instance(
                "seoul_subway_api", self._min_interval_seconds
            )
        return self._rate_limiter

    def build_arrivals_url(self, station_name: str, max_results: int = DEFAULT_MAX_RESULTS) -> str:
        """URL of the arrival list for a station."""
        return (
            f"{self._base_url}/{self._api_key}/json/{ARRIVAL_SERVICE}"
            f"/0/{max_results}/{station_name}"
        )

    async def fetch_arrivals(
        self, station_name: str, max_results: int = DEFAULT_MAX_RESULTS
    ) -> list[dict[str, Any]]:
        """Fetch the raw arrival items of a station.

        Args:
            station_name: Station name without the "역" suffix.
            max_results: Maximum number of items to request.

        Returns:
            Raw "realtimeArrivalList" items; empty when the API has no data.

        Raises:
            ArrivalFetchError: If the API could not be reached or reported an error.
        """
        url = self.build_arrivals_url(station_name, max_results)
        rate_limiter = await self._get_rate_limiter()
        await rate_limiter.acquire()

        log_api_request("GET", url, secret=self._api_key)
        try:
            async with self._session.get(
                url, headers=DEFAULT_HEADERS, timeout=self._timeout
            ) as response:
                data = await self._read_json(response, url)
        except (aiohttp.ClientError, TimeoutError) as e:
            raise ArrivalFetchError(f"Request for station {station_name} failed: {e!r}") from e

        return self._extract_arrivals(data, station_name)

    async def _read_json(self, response: "ClientResponse", url: str) -> dict[str, Any]:
        if response.status != 200:
            body = await response.text()
            log_api_response(url, response.status, body, secret=self._api_key)
            raise ArrivalFetchError(
                f"Seoul subway API returned status {response.status}: {body[:200]}"
            )

        try:
            data = await response.json(content_type=None)
        except ValueError as e:
            raise ArrivalFetchError(f"Seoul subway API returned invalid JSON: {e}") from e

        log_api_response(url, response.status, data, secret=self._api_key)
        if not isinstance(data, dict):
            raise ArrivalFetchError(f"Unexpected Seoul subway API response: {type(data).__name__}")
        return data

    @staticmethod
    def _extract_arrivals(data: dict[str, Any], station_name: str) -> list[dict[str, Any]]:
        code, message = extract_result(data)

        if code == RESULT_NO_DATA:
            logger.debug(f"No arrival data for station {station_name}")
            return []
        if code and code != RESULT_OK:
            raise ArrivalFetchError(f"Seoul subway API error {code} for {station_name}: {message}")

        arrivals = data.get("realtimeArrivalList")
        if not isinstance(arrivals, list):
            return []
        return [item for item in arrivals if isinstance(item, dict)]
