"""Constants for the Seoul real-time subway arrival API adapter.

Uses the Seoul open data realtimeStationArrival endpoint:
GET {base}/{key}/json/realtimeStationArrival/{start}/{end}/{station}

The station is the Korean station name without the trailing "역".
"""

SEOUL_SUBWAY_BASE_URL = "http://swopenAPI.seoul.go.kr/api/subway"
ARRIVAL_SERVICE = "realtimeStationArrival"

# Result codes reported in the response body
RESULT_OK = "INFO-000"
RESULT_NO_DATA = "INFO-200"  # Unknown station or no trains right now

DEFAULT_MAX_RESULTS = 20

# The sample key allows very little traffic; real keys are more generous
DEFAULT_MIN_INTERVAL_SECONDS = 0.1

DEFAULT_HEADERS = {
    "Accept": "application/json",
}
