"""Parser for realtimeStationArrival items."""

import logging
from typing import Any

from commute_timing.domain.models.arrival import Arrival

logger = logging.getLogger(__name__)


class ArrivalParser:
    """Parses raw Seoul subway arrival items into Arrival objects."""

    @staticmethod
    def parse_arrivals(items: list[dict[str, Any]]) -> list[Arrival]:
        """Parse arrival items, skipping malformed ones.

        Args:
            items: Items of the "realtimeArrivalList" array.

        Returns:
            Arrivals in response order.
        """
        results = []
        for item in items:
            arrival = ArrivalParser._parse_arrival(item)
            if arrival:
                results.append(arrival)
        return results

    @staticmethod
    def _parse_arrival(item: dict[str, Any]) -> Arrival | None:
        line_id = str(item.get("subwayId", "")).strip()
        if not line_id:
            return None

        seconds = ArrivalParser._parse_seconds(item.get("barvlDt"))
        if seconds is None:
            logger.debug(f"Skipping arrival with invalid barvlDt: {item.get('barvlDt')!r}")
            return None

        return Arrival(
            line_id=line_id,
            direction=str(item.get("updnLine", "")),
            arrival_seconds=seconds,
            destination=str(item.get("bstatnNm", "")),
        )

    @staticmethod
    def _parse_seconds(value: Any) -> int | None:
        # barvlDt arrives as a numeric string ("120")
        try:
            seconds = int(value)
        except (TypeError, ValueError):
            return None
        return seconds if seconds >= 0 else None
