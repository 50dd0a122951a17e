"""Errors raised by the commute timing core."""


class CommuteTimingError(Exception):
    """Base class for errors surfaced to callers of the core."""


class RouteNotFoundError(CommuteTimingError):
    """Raised when a referenced route does not exist."""

    def __init__(self, route_id: str) -> None:
        super().__init__(f"Route not found: {route_id}")
        self.route_id = route_id


class SettingNotFoundError(CommuteTimingError):
    """Raised when a referenced departure setting does not exist."""

    def __init__(self, setting_id: str) -> None:
        super().__init__(f"Departure setting not found: {setting_id}")
        self.setting_id = setting_id


class ArrivalFetchError(Exception):
    """Raised by arrival adapters when live data could not be fetched.

    Never surfaced to callers: services degrade the affected segment instead.
    """


class DuplicateSnapshotError(CommuteTimingError):
    """Raised by snapshot stores when a (setting, date) snapshot already exists."""

    def __init__(self, setting_id: str, departure_date: str) -> None:
        super().__init__(f"Snapshot already exists for setting {setting_id} on {departure_date}")
        self.setting_id = setting_id
        self.departure_date = departure_date
