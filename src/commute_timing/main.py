"""Main entry point for the commute timing engine."""

import asyncio
import logging
import sys
from dataclasses import dataclass

import aiohttp

from commute_timing.adapters.config import AppConfig, ReferenceData, ReferenceDataLoader
from commute_timing.adapters.memory import (
    InMemoryAlternativeMappingRepository,
    InMemoryCommuteRecordRepository,
    InMemoryCommuteSessionRepository,
    InMemoryDepartureSettingRepository,
    InMemoryDepartureSnapshotRepository,
    InMemoryRouteRepository,
)
from commute_timing.adapters.notifications import (
    LoggingDepartureNotifier,
    NullRealtimeAdjustmentProvider,
)
from commute_timing.adapters.seoul_subway_api import (
    SeoulSubwayArrivalRepository,
    SeoulSubwayHttpClient,
)
from commute_timing.application.services import (
    AlternativeRouteFinder,
    CheckpointDelayMonitor,
    DelayStatusService,
    DepartureTimeCalculator,
    HistoricalPatternEstimator,
)
from commute_timing.domain.models.civil_time import to_civil
from commute_timing.domain.ports import DepartureNotifier, RealtimeAdjustmentProvider

logger = logging.getLogger(__name__)


def configure_logging(level: int = logging.INFO) -> None:
    """Configure process-wide logging."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


@dataclass
class CommuteTimingEngine:
    """The wired services and the stores behind them."""

    config: AppConfig
    routes: InMemoryRouteRepository
    settings: InMemoryDepartureSettingRepository
    snapshots: InMemoryDepartureSnapshotRepository
    records: InMemoryCommuteRecordRepository
    sessions: InMemoryCommuteSessionRepository
    arrivals: SeoulSubwayArrivalRepository
    pattern_estimator: HistoricalPatternEstimator
    delay_monitor: CheckpointDelayMonitor
    alternative_finder: AlternativeRouteFinder
    delay_status: DelayStatusService
    departure_calculator: DepartureTimeCalculator


def build_engine(
    config: AppConfig,
    session: aiohttp.ClientSession,
    reference: ReferenceData | None = None,
    notifier: DepartureNotifier | None = None,
    realtime_provider: RealtimeAdjustmentProvider | None = None,
) -> CommuteTimingEngine:
    """Wire adapters and services.

    Args:
        config: Application configuration.
        session: Shared aiohttp session for the live arrival API.
        reference: Static routes, alternatives and settings; empty when omitted.
        notifier: Delivery channel for departure updates; logs them when omitted.
        realtime_provider: Live travel adjustment; none when omitted.

    Returns:
        The wired engine.
    """
    reference = reference or ReferenceData()
    policy = config.delay_policy()

    routes = InMemoryRouteRepository(reference.routes)
    mappings = InMemoryAlternativeMappingRepository(reference.alternatives)
    settings = InMemoryDepartureSettingRepository(reference.departure_settings)
    snapshots = InMemoryDepartureSnapshotRepository()
    records = InMemoryCommuteRecordRepository()
    sessions = InMemoryCommuteSessionRepository()

    http_client = SeoulSubwayHttpClient(
        session,
        api_key=config.seoul_api_key,
        base_url=config.seoul_api_base_url,
        timeout_seconds=config.seoul_api_timeout,
        min_interval_seconds=config.seoul_api_min_interval_seconds,
    )
    arrivals = SeoulSubwayArrivalRepository(http_client)

    delay_monitor = CheckpointDelayMonitor(arrivals, policy)
    alternative_finder = AlternativeRouteFinder(mappings, arrivals, policy)

    return CommuteTimingEngine(
        config=config,
        routes=routes,
        settings=settings,
        snapshots=snapshots,
        records=records,
        sessions=sessions,
        arrivals=arrivals,
        pattern_estimator=HistoricalPatternEstimator(
            records, config.cold_start_departure_times()
        ),
        delay_monitor=delay_monitor,
        alternative_finder=alternative_finder,
        delay_status=DelayStatusService(routes, delay_monitor, alternative_finder),
        departure_calculator=DepartureTimeCalculator(
            routes,
            sessions,
            settings,
            snapshots,
            notifier or LoggingDepartureNotifier(),
            realtime_provider or NullRealtimeAdjustmentProvider(),
            policy,
        ),
    )


def load_reference_data(config: AppConfig) -> ReferenceData:
    """Load reference data, exiting on configuration errors."""
    if not config.reference_data_file:
        logger.warning("No reference data file configured (REFERENCE_DATA_FILE)")
        return ReferenceData()

    try:
        return ReferenceDataLoader.load(config)
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid reference data: {e}")
        sys.exit(1)


async def run_once(engine: CommuteTimingEngine) -> None:
    """Check every configured route and calculate today's departures."""
    timeout = engine.config.calculation_timeout_seconds

    for route in engine.routes.all():
        report = await engine.delay_status.get_delay_status(route.id, timeout)
        logger.info(
            f"Route '{route.name}' ({route.id}): {report.overall_status}, "
            f"+{report.total_delay_minutes} min, {len(report.alternatives)} alternative(s)"
        )
        for alternative in report.alternatives:
            logger.info(
                f"  - {alternative.description}: saves {alternative.savings_minutes} min "
                f"({alternative.confidence})"
            )

    for user_id in sorted(engine.settings.user_ids()):
        snapshots = await engine.departure_calculator.calculate_for_today(
            user_id, timeout_seconds=timeout
        )
        for snapshot in snapshots:
            alerts = await engine.departure_calculator.pending_alerts(snapshot)
            alert_times = ", ".join(to_civil(a.alert_at).strftime("%H:%M") for a in alerts)
            logger.info(
                f"User {user_id}, setting {snapshot.setting_id}: leave in "
                f"{snapshot.minutes_until_departure()} min "
                f"(travel {snapshot.estimated_travel_min} min, "
                f"prep {snapshot.prep_time_minutes} min), alerts at [{alert_times}]"
            )

        upcoming = await engine.departure_calculator.next_departure(user_id)
        if upcoming is not None:
            delay_note = " with traffic delay" if upcoming.has_traffic_delay else ""
            logger.info(
                f"User {user_id}: next departure {upcoming.snapshot.departure_type} in "
                f"{upcoming.minutes_until_departure} min{delay_note}"
            )


async def main() -> None:
    """Main application entry point."""
    configure_logging()
    config = AppConfig()
    reference = load_reference_data(config)

    if not reference.routes:
        logger.error("No routes configured.")
        logger.error("Set REFERENCE_DATA_FILE to a TOML file with [[routes]] entries.")
        logger.error("Or copy config.example.toml and customize it.")
        sys.exit(1)

    async with aiohttp.ClientSession() as session:
        engine = build_engine(config, session, reference)
        await run_once(engine)


def cli_run() -> None:
    """Synchronous entry point for a one-shot run."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_run()
