"""Live arrival domain model."""

import math
import re
from dataclasses import dataclass

_LINE_NUMBER_RE = re.compile(r"(\d+)")


def line_matches(line_id: str, line_info: str) -> bool:
    """Check if an API line id belongs to a user-facing line label.

    The live API identifies lines as "1001" (line 1), "1002" (line 2), ...
    while checkpoints carry labels such as "2호선". The digits of the label
    are matched against "100{n}", "10{n}" or any id ending in "{n}".
    """
    match = _LINE_NUMBER_RE.search(line_info)
    if not match:
        return False

    line_number = int(match.group(1))
    return (
        line_id == f"100{line_number}"
        or line_id == f"10{line_number}"
        or line_id.endswith(str(line_number))
    )


def seconds_to_wait_minutes(seconds: int) -> int:
    """Convert an arrival countdown to whole minutes, rounding up."""
    return math.ceil(seconds / 60)


@dataclass(frozen=True)
class Arrival:
    """A single upcoming train arrival at a station."""

    line_id: str
    direction: str
    arrival_seconds: int
    destination: str

    def matches_line(self, line_info: str | None) -> bool:
        """Whether this arrival serves the given line label.

        A checkpoint without a line label accepts any arrival.
        """
        if not line_info:
            return True
        return line_matches(self.line_id, line_info)


def shortest_wait_minutes(arrivals: list[Arrival]) -> int | None:
    """Minutes until the earliest arrival, or None if there are none."""
    if not arrivals:
        return None
    return seconds_to_wait_minutes(min(a.arrival_seconds for a in arrivals))
