"""Optimal departure time calculation.

Fuses a route's declared duration, the user's recent completed sessions and a
live adjustment into one travel estimate, and keeps a dated snapshot of the
resulting departure decision per setting.
"""

import asyncio
import logging
import math
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from typing import TYPE_CHECKING

from commute_timing.domain.errors import RouteNotFoundError, SettingNotFoundError
from commute_timing.domain.models.civil_time import civil_date, civil_instant, to_civil
from commute_timing.domain.models.delay_policy import DelayPolicy
from commute_timing.domain.models.departure_setting import DepartureType
from commute_timing.domain.models.departure_snapshot import (
    DepartureAlert,
    DepartureSnapshot,
    DepartureUpdate,
    NextDeparture,
    SnapshotStatus,
    TodayDepartures,
)

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from commute_timing.domain.models.departure_setting import DepartureSetting
    from commute_timing.domain.models.route import Route
    from commute_timing.domain.ports import (
        CommuteSessionRepository,
        DepartureNotifier,
        DepartureSettingRepository,
        DepartureSnapshotRepository,
        RealtimeAdjustmentProvider,
        RouteRepository,
    )

HISTORY_DAYS = 14
MIN_HISTORY_RECORDS = 3
MIN_TRAVEL_MINUTES = 5
MAX_TRAVEL_MINUTES = 120
DEFAULT_BASELINE_MINUTES = 30  # Route without a declared duration

BASELINE_WEIGHT = 0.2
HISTORY_WEIGHT = 0.5
REALTIME_WEIGHT = 0.3


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positive values."""
    return math.floor(value + 0.5)


def clamp_travel_minutes(minutes: int) -> int:
    return min(max(minutes, MIN_TRAVEL_MINUTES), MAX_TRAVEL_MINUTES)


def estimate_travel_time(
    baseline_min: int, history_avg_min: int | None, realtime_adjustment: int
) -> int:
    """Combine the three travel signals into one estimate in minutes.

    Without history the baseline is simply shifted by the live adjustment.
    With history the signals are blended 20/50/30, the realtime part being the
    history average shifted by the live adjustment.
    """
    if history_avg_min is None:
        return clamp_travel_minutes(baseline_min + realtime_adjustment)

    weighted = (
        baseline_min * BASELINE_WEIGHT
        + history_avg_min * HISTORY_WEIGHT
        + (history_avg_min + realtime_adjustment) * REALTIME_WEIGHT
    )
    return clamp_travel_minutes(round_half_up(weighted))


def calculate_optimal_departure(
    arrival_target: str, on_date: date, travel_minutes: int, prep_minutes: int
) -> datetime:
    """UTC instant to leave so that travel and preparation end at the civil arrival target."""
    arrival = civil_instant(on_date, arrival_target)
    return arrival - timedelta(minutes=travel_minutes + prep_minutes)


def due_alert_times(
    snapshot: DepartureSnapshot, setting: "DepartureSetting", now: datetime
) -> list[DepartureAlert]:
    """Pre-alerts of a snapshot that are still ahead of now, earliest first.

    Each alert fires at the optimal departure minus its lead time. Alerts that
    were already sent, or whose instant is not after now, are left out.
    """
    alerts = [
        DepartureAlert(minutes, snapshot.optimal_departure_at - timedelta(minutes=minutes))
        for minutes in set(setting.pre_alerts)
        if minutes not in snapshot.alerts_sent
    ]
    return sorted((a for a in alerts if a.alert_at > now), key=lambda a: a.alert_at)


def today_date(now: datetime | None = None) -> str:
    """Today's civil date as "YYYY-MM-DD"."""
    return civil_date(now or datetime.now(UTC)).isoformat()


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DepartureTimeCalculator:
    """Computes and persists the optimal departure for departure settings."""

    def __init__(
        self,
        route_repository: "RouteRepository",
        session_repository: "CommuteSessionRepository",
        setting_repository: "DepartureSettingRepository",
        snapshot_repository: "DepartureSnapshotRepository",
        notifier: "DepartureNotifier",
        realtime_provider: "RealtimeAdjustmentProvider",
        policy: DelayPolicy | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        """Initialize the calculator.

        Args:
            route_repository: Source of route baselines.
            session_repository: Source of completed sessions for the history average.
            setting_repository: Source of departure settings.
            snapshot_repository: Store of daily snapshots.
            notifier: Receives updates when the travel estimate moves.
            realtime_provider: Supplies the live travel adjustment.
            policy: Thresholds; defaults apply when omitted.
            clock: Returns the current time.
        """
        self._route_repository = route_repository
        self._session_repository = session_repository
        self._setting_repository = setting_repository
        self._snapshot_repository = snapshot_repository
        self._notifier = notifier
        self._realtime_provider = realtime_provider
        self._policy = policy or DelayPolicy()
        self._clock = clock

    async def calculate_for_setting(
        self,
        setting: "DepartureSetting",
        departure_date: str,
        timeout_seconds: float | None = None,
    ) -> DepartureSnapshot:
        """Create or refresh the snapshot of a setting for a civil date.

        A departed snapshot is returned as is. Nothing is written unless every
        input was gathered within timeout_seconds.

        Raises:
            RouteNotFoundError: If the setting's route does not exist.
            TimeoutError: If gathering the inputs took too long.
        """
        on_date = date.fromisoformat(departure_date)

        async with asyncio.timeout(timeout_seconds):
            existing = await self._snapshot_repository.find_by_setting_and_date(
                setting.id, departure_date
            )
            if existing is not None and existing.is_departed:
                logger.debug(f"Snapshot for setting {setting.id} on {departure_date} already departed")
                return existing

            # Store errors propagate as they are, not wrapped in an ExceptionGroup
            route, history_avg = await asyncio.gather(
                self._route_repository.find_by_id(setting.route_id),
                self._get_history_average(setting.user_id, setting.route_id),
            )
            if route is None:
                raise RouteNotFoundError(setting.route_id)
            realtime_adjustment = await self._get_realtime_adjustment(route)

        baseline = route.total_expected_duration or DEFAULT_BASELINE_MINUTES
        travel_minutes = estimate_travel_time(baseline, history_avg, realtime_adjustment)
        optimal_departure_at = calculate_optimal_departure(
            setting.arrival_target, on_date, travel_minutes, setting.prep_time_minutes
        )
        now = self._clock()

        if existing is None:
            snapshot = await self._snapshot_repository.create(
                DepartureSnapshot(
                    user_id=setting.user_id,
                    setting_id=setting.id,
                    departure_date=departure_date,
                    departure_type=setting.departure_type,
                    arrival_target=setting.arrival_target,
                    estimated_travel_min=travel_minutes,
                    prep_time_minutes=setting.prep_time_minutes,
                    optimal_departure_at=optimal_departure_at,
                    baseline_travel_min=baseline,
                    history_avg_travel_min=history_avg,
                    realtime_adjustment_min=realtime_adjustment,
                    calculated_at=now,
                    created_at=now,
                    updated_at=now,
                )
            )
            logger.info(
                f"Created snapshot for setting {setting.id}: "
                f"departure at {optimal_departure_at.isoformat()}"
            )
            return snapshot

        updated = existing.with_updated_calculation(
            estimated_travel_min=travel_minutes,
            optimal_departure_at=optimal_departure_at,
            baseline_travel_min=baseline,
            history_avg_travel_min=history_avg,
            realtime_adjustment_min=realtime_adjustment,
            now=now,
        )
        await self._snapshot_repository.update(updated)
        logger.debug(
            f"Updated snapshot for setting {setting.id}: "
            f"departure at {optimal_departure_at.isoformat()}"
        )

        change = travel_minutes - existing.estimated_travel_min
        if abs(change) >= self._policy.travel_change_notify_minutes:
            await self._publish_update(updated, existing.estimated_travel_min, timeout_seconds)

        return updated

    async def calculate_for_setting_id(
        self, setting_id: str, departure_date: str, timeout_seconds: float | None = None
    ) -> DepartureSnapshot:
        """Calculate for a setting looked up by id.

        Raises:
            SettingNotFoundError: If no such setting exists.
            RouteNotFoundError: If the setting's route does not exist.
        """
        setting = await self._setting_repository.find_by_id(setting_id)
        if setting is None:
            raise SettingNotFoundError(setting_id)
        return await self.calculate_for_setting(setting, departure_date, timeout_seconds)

    async def calculate_for_today(
        self, user_id: str, now: datetime | None = None, timeout_seconds: float | None = None
    ) -> list[DepartureSnapshot]:
        """Calculate every setting of a user that is active today.

        A setting whose calculation fails is logged and skipped.
        """
        now = now or self._clock()
        today = civil_date(now)
        settings = await self._setting_repository.find_active_by_user(user_id)

        results: list[DepartureSnapshot] = []
        for setting in settings:
            if not setting.is_active_on(today):
                continue
            try:
                results.append(
                    await self.calculate_for_setting(setting, today.isoformat(), timeout_seconds)
                )
            except Exception as e:
                logger.error(f"Failed to calculate departure for setting {setting.id}: {e!r}")
        return results

    async def mark_alert_sent(
        self, snapshot: DepartureSnapshot, alert_minutes: int
    ) -> DepartureSnapshot:
        """Record that a pre-alert was delivered."""
        if snapshot.is_departed:
            return snapshot
        updated = snapshot.with_alert_sent(alert_minutes, now=self._clock())
        await self._snapshot_repository.update(updated)
        return updated

    async def mark_departed(self, snapshot: DepartureSnapshot) -> DepartureSnapshot:
        """Record that the user left; the snapshot is final afterwards."""
        if snapshot.is_departed:
            return snapshot
        updated = snapshot.with_status(SnapshotStatus.DEPARTED, now=self._clock())
        await self._snapshot_repository.update(updated)
        logger.info(f"Setting {snapshot.setting_id} departed on {snapshot.departure_date}")
        return updated

    async def pending_alerts(
        self, snapshot: DepartureSnapshot, now: datetime | None = None
    ) -> list[DepartureAlert]:
        """Pre-alerts of a snapshot still to be delivered, earliest first.

        A departed snapshot has none.

        Raises:
            SettingNotFoundError: If the snapshot's setting no longer exists.
        """
        if snapshot.is_departed:
            return []
        setting = await self._setting_repository.find_by_id(snapshot.setting_id)
        if setting is None:
            raise SettingNotFoundError(snapshot.setting_id)

        alerts = due_alert_times(snapshot, setting, now or self._clock())
        skipped = len(set(setting.pre_alerts)) - len(alerts)
        if skipped:
            logger.debug(
                f"Skipping {skipped} pre-alert(s) of setting {setting.id}: sent or time has passed"
            )
        return alerts

    async def get_today_departures(
        self, user_id: str, now: datetime | None = None
    ) -> TodayDepartures:
        """Today's commute and return snapshots of a user, without recalculating."""
        today = self.today_date(now)
        snapshots = await self._snapshot_repository.find_by_user_and_date(user_id, today)

        commute: DepartureSnapshot | None = None
        return_trip: DepartureSnapshot | None = None
        for snapshot in snapshots:
            if snapshot.departure_type == DepartureType.COMMUTE:
                commute = snapshot
            else:
                return_trip = snapshot
        return TodayDepartures(commute=commute, return_trip=return_trip)

    async def next_departure(
        self, user_id: str, now: datetime | None = None
    ) -> NextDeparture | None:
        """The scheduled or notified departure of today a user should act on next.

        The earliest one not yet due wins; when all are overdue the earliest is
        returned, with a negative countdown.
        """
        now = now or self._clock()
        snapshots = await self._snapshot_repository.find_by_user_and_date(
            user_id, self.today_date(now)
        )
        upcoming = sorted(
            (
                s
                for s in snapshots
                if s.status in (SnapshotStatus.SCHEDULED, SnapshotStatus.NOTIFIED)
            ),
            key=lambda s: s.optimal_departure_at,
        )
        if not upcoming:
            return None

        relevant = next((s for s in upcoming if s.optimal_departure_at >= now), upcoming[0])
        return NextDeparture(
            snapshot=relevant,
            minutes_until_departure=relevant.minutes_until_departure(now),
            has_traffic_delay=relevant.has_traffic_delay,
        )

    def today_date(self, now: datetime | None = None) -> str:
        """Today's civil date as "YYYY-MM-DD"."""
        return today_date(now or self._clock())

    async def _get_history_average(self, user_id: str, route_id: str) -> int | None:
        end = self._clock()
        start = end - timedelta(days=HISTORY_DAYS)
        sessions = await self._session_repository.find_by_user_in_range(user_id, start, end)

        durations = [
            s.total_duration_minutes
            for s in sessions
            if s.route_id == route_id and s.has_duration and s.total_duration_minutes is not None
        ]
        if len(durations) < MIN_HISTORY_RECORDS:
            return None
        return round_half_up(sum(durations) / len(durations))

    async def _get_realtime_adjustment(self, route: "Route") -> int:
        try:
            return await self._realtime_provider.get_adjustment_minutes(route)
        except Exception as e:
            # A missing live signal must not block the calculation
            logger.warning(f"Realtime adjustment unavailable for route {route.id}: {e!r}")
            return 0

    async def _publish_update(
        self,
        snapshot: DepartureSnapshot,
        previous_travel_min: int,
        timeout_seconds: float | None,
    ) -> None:
        is_delay = snapshot.estimated_travel_min > previous_travel_min
        change = abs(snapshot.estimated_travel_min - previous_travel_min)
        departure_time = to_civil(snapshot.optimal_departure_at).strftime("%H:%M")
        verb = "늘어" if is_delay else "줄어"
        update = DepartureUpdate(
            user_id=snapshot.user_id,
            setting_id=snapshot.setting_id,
            departure_type=snapshot.departure_type,
            estimated_travel_min=snapshot.estimated_travel_min,
            previous_travel_min=previous_travel_min,
            optimal_departure_at=snapshot.optimal_departure_at,
            is_delay=is_delay,
            message=f"이동 시간이 {change}분 {verb} {departure_time}에 출발하세요",
        )

        try:
            async with asyncio.timeout(timeout_seconds):
                await self._notifier.publish(update)
        except Exception as e:
            logger.error(
                f"Failed to publish departure update for setting {snapshot.setting_id}: {e!r}",
                exc_info=True,
            )
