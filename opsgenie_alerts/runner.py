"""Main runner for OpsGenie Alerts.

Polls OpsGenie for open and recently updated alerts and shows a desktop
notification for every new, unacknowledged open alert.
"""

import argparse
import asyncio
import logging
import signal
import sys

from .alert_store import AlertStore
from .channels import create_channel_from_config
from .config import CHANNELS, DEFAULT_BASE_PATH, Config
from .dispatcher import NotificationDispatcher
from .exceptions import ConfigurationError, FetchError
from .opsgenie_client import OpsGenieClient
from .scheduler import Scheduler
from .sync import SyncEngine

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="opsgenie-alerts",
        description="Poll OpsGenie and show desktop notifications for new alerts.",
    )
    parser.add_argument(
        "--api-key", "-k",
        metavar="API_KEY",
        default=None,
        help="OpsGenie API key (default: OPSGENIE_API_KEY)",
    )
    parser.add_argument(
        "--history",
        dest="history_days",
        metavar="DAYS",
        type=int,
        default=None,
        help="Oldest closed alert to retrieve, in days (default: 7)",
    )
    parser.add_argument(
        "--interval", "-i",
        dest="update_interval",
        metavar="SECONDS",
        type=int,
        default=None,
        help="How long to wait between queries in seconds (default: 60)",
    )
    parser.add_argument(
        "--request-limit",
        metavar="COUNT",
        type=int,
        default=None,
        help="Number of alerts per request (default: 100)",
    )
    parser.add_argument(
        "--base-path",
        metavar="URL",
        default=None,
        help=f"OpsGenie API base path to use (default: {DEFAULT_BASE_PATH})",
    )
    parser.add_argument(
        "--channel",
        choices=CHANNELS,
        default=None,
        help="Notification channel (default: desktop)",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single sync cycle and exit",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Don't send notifications, just log what would be sent",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Build configuration from the environment, overridden by CLI arguments."""
    config = Config.from_env()

    if args.api_key:
        config.api_key = args.api_key
    if args.history_days is not None:
        config.history_days = args.history_days
    if args.update_interval is not None:
        config.update_interval = args.update_interval
    if args.request_limit is not None:
        config.request_limit = args.request_limit
    if args.base_path:
        config.base_path = args.base_path
    if args.channel:
        config.notification_channel = args.channel

    config.validate()
    return config


def build_scheduler(config: Config, dry_run: bool = False) -> Scheduler:
    """Wire the client, store, engine and dispatcher together."""
    store = AlertStore()
    client = OpsGenieClient.from_config(config)
    engine = SyncEngine(
        client,
        store,
        request_limit=config.request_limit,
        history_days=config.history_days,
    )
    dispatcher = NotificationDispatcher(
        store,
        create_channel_from_config(config),
        dry_run=dry_run,
    )
    return Scheduler(engine, dispatcher, update_interval=config.update_interval)


async def run_daemon(scheduler: Scheduler) -> None:
    """Run the scheduler until SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, scheduler.request_stop)

    try:
        await scheduler.run()
    finally:
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.remove_signal_handler(sig)


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = load_config(args)
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return 2

    logger.info("OpsGenie Alert Monitor")
    logger.info(f"  API: {config.base_path}")
    logger.info(f"  Interval: {config.update_interval}s")
    logger.info(f"  History: {config.history_days} day(s)")
    logger.info(f"  Channel: {config.notification_channel}")

    scheduler = build_scheduler(config, dry_run=args.dry_run)

    if args.once:
        try:
            sent = asyncio.run(scheduler.run_cycle())
        except FetchError as e:
            logger.error(f"Failed to fetch alerts: {e}")
            return 1
        logger.info(f"Notifications sent: {sent}")
        return 0

    asyncio.run(run_daemon(scheduler))
    logger.info(
        f"Shutting down: {len(scheduler.engine.store)} alert(s) known, "
        f"{scheduler.dispatcher.sent_count} notification(s) sent"
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
