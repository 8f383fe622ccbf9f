"""Main entry point for the commuter sync client."""

import asyncio
import contextlib
import logging
import sys
from datetime import datetime

import aiohttp

from commuter_sync.adapters.background import BackgroundTrigger
from commuter_sync.adapters.channel import LoopbackChannel, WebSocketChannel
from commuter_sync.adapters.companion import FixtureCompanion, sample_connections
from commuter_sync.adapters.config import AppConfig
from commuter_sync.adapters.presentation import LoggingPresentationAdapter
from commuter_sync.adapters.summary import LoggingSummaryRefresher
from commuter_sync.adapters.timers import AsyncioTimerScheduler
from commuter_sync.application.services import SyncController, SyncServices, SyncSettings
from commuter_sync.domain.models import SyncSession
from commuter_sync.domain.ports import MessageChannel

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stderr,
)

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    logging.getLogger().setLevel(config.log_level)

    try:
        default_stations = config.get_default_stations()
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"Invalid station configuration: {e}")
        sys.exit(1)
    logger.info(f"Loaded {len(default_stations)} default station(s)")

    session = SyncSession()
    presentation = LoggingPresentationAdapter(session)
    settings = SyncSettings(
        loading_timeout_ms=config.loading_timeout_ms,
        config_timeout_ms=config.config_timeout_ms,
        summary_slice_limit=config.summary_slice_limit,
        default_stations=default_stations,
    )

    async with aiohttp.ClientSession() as http_session:
        companion: FixtureCompanion | None = None
        channel: MessageChannel
        if config.simulate:
            loopback = LoopbackChannel(
                inbox_size=config.inbox_size, outbox_size=config.outbox_size
            )
            companion = FixtureCompanion(
                loopback, sample_connections(datetime.now()), default_stations
            )
            channel = loopback
            logger.info("Simulation mode: using in-process fixture companion")
        else:
            channel = WebSocketChannel(
                config.companion_url,
                http_session,
                inbox_size=config.inbox_size,
                outbox_size=config.outbox_size,
                queue_length=config.outbox_queue_length,
            )

        controller = SyncController(
            SyncServices(
                channel=channel,
                timers=AsyncioTimerScheduler(),
                presentation=presentation,
                summary_refresher=LoggingSummaryRefresher(),
            ),
            settings,
            session=session,
        )
        controller.attach()

        try:
            await channel.open()
        except aiohttp.ClientError as e:
            logger.error(f"Could not connect to companion at {config.companion_url}: {e}")
            sys.exit(1)

        background_trigger: BackgroundTrigger | None = None
        try:
            controller.start()
            if companion is not None:
                companion.push_stations()

            if config.background_updates_enabled:
                background_trigger = BackgroundTrigger(
                    controller, config.background_interval_minutes * 60
                )
                await background_trigger.start()

            await asyncio.Event().wait()
        finally:
            logger.info("Shutting down...")
            if background_trigger is not None:
                await background_trigger.stop()
            controller.shutdown()
            await channel.close()


def run() -> None:
    """Console script entry point."""
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(main())


if __name__ == "__main__":
    run()
