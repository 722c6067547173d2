"""
Main entry point for Tube Watcher.

Runs the async detection loop that polls the channel feed and announces
new videos.
"""

import argparse
import asyncio
import logging
import signal
import sys
from dataclasses import dataclass
from pathlib import Path

import coloredlogs
import yaml
from pydantic import ValidationError

from tube_watcher.config import AppConfig, load_config, redact_proxy_url
from tube_watcher.models import Feed, FeedEntry
from tube_watcher.notifier import Notifier
from tube_watcher.seen import SeenSet
from tube_watcher.telegram import TelegramNotifier
from tube_watcher.youtube_feed import FeedError, YouTubeFeedClient

logger = logging.getLogger(__name__)


class StartupError(Exception):
    """Raised when the watcher cannot start."""


@dataclass
class TickResult:
    """
    Outcome of one polling tick.

    Attributes
    ----------
    entry : FeedEntry | None
        The new entry detected this tick, if any.
    error : Exception | None
        The error that ended the tick early, if any.
    delivered : bool
        Whether the notification for ``entry`` was delivered.
    """

    entry: FeedEntry | None = None
    error: Exception | None = None
    delivered: bool = False


class VideoWatcher:
    """
    Detection loop for a single channel.

    Seeds its seen set from the current feed, then polls the feed and
    announces at most one new video per tick.
    """

    def __init__(
        self,
        config: AppConfig,
        client: YouTubeFeedClient | None = None,
        notifier: Notifier | None = None,
        seen: SeenSet | None = None,
    ):
        """
        Initialize the watcher.

        Parameters
        ----------
        config : AppConfig
            Validated application configuration.
        client : YouTubeFeedClient | None
            Feed client. Created from ``config`` on start when omitted.
        notifier : Notifier | None
            Notification backend. Created from ``config`` on start when omitted.
        seen : SeenSet | None
            Seen-ID tracker. A fresh one is created when omitted.
        """
        self.config = config
        self.client = client
        self.notifier = notifier
        self.seen = seen if seen is not None else SeenSet(config.watcher.max_seen_entries)
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def channel_id(self) -> str:
        return self.config.youtube.channel_id

    async def start(self) -> None:
        """
        Bootstrap and run the polling loop until stopped.

        Raises
        ------
        StartupError
            If Telegram rejects the credential or the initial feed
            cannot be fetched.
        """
        logger.info("Starting Tube Watcher for channel %s", self.channel_id)

        proxy_url = self.config.watcher.proxy
        if proxy_url:
            logger.info("Using proxy: %s", redact_proxy_url(proxy_url))

        if self.client is None:
            self.client = YouTubeFeedClient(
                base_url=self.config.youtube.feed_url,
                timeout=self.config.watcher.request_timeout,
                user_agent=self.config.watcher.user_agent,
                proxy_url=proxy_url,
            )
        if self.notifier is None:
            self.notifier = TelegramNotifier(self.config.telegram.bot_token, proxy_url=proxy_url)

        self._task = asyncio.current_task()
        try:
            if not await self.notifier.test_connection():
                raise StartupError("Failed to connect to Telegram")

            await self.bootstrap()

            self._running = True
            await self._poll()
        except asyncio.CancelledError:
            logger.info("Watcher cancelled")

    async def stop(self) -> None:
        """Stop the watcher and release its resources."""
        logger.info("Stopping Tube Watcher")
        self._running = False

        if self._task and self._task is not asyncio.current_task() and not self._task.done():
            self._task.cancel()
            await asyncio.gather(self._task, return_exceptions=True)

        if self.client:
            await self.client.close()
        if self.notifier:
            await self.notifier.close()

        logger.info("Tube Watcher stopped")

    async def bootstrap(self) -> None:
        """
        Mark every entry currently in the feed as seen.

        Raises
        ------
        StartupError
            If the feed cannot be fetched or parsed.
        """
        if not self.client:
            raise RuntimeError("Components not initialized")

        logger.info("Treating all current videos as being seen")
        try:
            feed = await self.client.fetch_feed(self.channel_id)
        except FeedError as e:
            raise StartupError(f"Initial feed check failed: {e}") from e

        # Feeds list newest first; seed oldest first so eviction order follows age
        self.seen.seed(reversed(feed.entry_ids))
        self.seen.prune(feed.entry_ids)
        logger.info("Marked %d existing video(s) as seen", len(feed.entries))

    async def _poll(self) -> None:
        """Run ticks until stopped, sleeping between them."""
        interval = self.config.watcher.check_interval

        while self._running:
            try:
                await self.check_for_new_video()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error("Unexpected error checking for new video: %s", e)

            await asyncio.sleep(interval)

    async def check_for_new_video(self) -> TickResult:
        """
        Run one polling tick.

        Fetch errors are logged and reported in the result instead of
        being raised.

        Returns
        -------
        TickResult
            The new entry, if any, and the tick's outcome.
        """
        if not self.client or not self.notifier:
            raise RuntimeError("Components not initialized")

        logger.info("Checking for new videos")
        try:
            feed = await self.client.fetch_feed(self.channel_id)
        except FeedError as e:
            logger.error("Error checking for new video: %s", e)
            return TickResult(error=e)

        entry = self.find_new_entry(feed)
        self.seen.prune(feed.entry_ids)
        if entry is None:
            return TickResult()

        logger.info("Found a new video: %s", entry.title)
        delivered = await self._notify(entry)
        return TickResult(entry=entry, delivered=delivered)

    def find_new_entry(self, feed: Feed) -> FeedEntry | None:
        """
        Return the first entry not yet seen and mark it seen.

        Entries further down the feed are left for later ticks.
        """
        for entry in feed.entries:
            if self.seen.add(entry.id):
                return entry
        return None

    async def _notify(self, entry: FeedEntry) -> bool:
        # The entry stays seen even if delivery fails
        try:
            delivered = await self.notifier.send_message(self.config.telegram.chat_id, entry.link)
        except Exception as e:
            logger.error("Failed to notify for video '%s': %s", entry.title[:50], e)
            return False

        if delivered:
            logger.info("Sent notification for: %s", entry.title[:50])
        else:
            logger.warning("Notification not delivered for: %s", entry.title[:50])
        return delivered


def setup_logging(verbose: bool = False) -> None:
    """
    Configure application logging.

    Parameters
    ----------
    verbose : bool
        If True, set log level to DEBUG.
    """
    level = logging.DEBUG if verbose else logging.INFO

    coloredlogs.install(
        level=level,
        fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("telegram").setLevel(logging.WARNING)


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Announce new YouTube uploads on Telegram",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-c",
        "--config",
        default=None,
        help="Path to a YAML configuration file (environment variables are used when omitted)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args()

    setup_logging(args.verbose)

    config_path = Path(args.config) if args.config else None
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ValueError, ValidationError, yaml.YAMLError) as e:
        logger.error("Invalid configuration: %s", e)
        sys.exit(1)

    watcher = VideoWatcher(config)

    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)

    def signal_handler():
        logger.info("Received shutdown signal")
        asyncio.create_task(watcher.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, signal_handler)

    exit_code = 0
    try:
        loop.run_until_complete(watcher.start())
    except StartupError as e:
        logger.error("%s", e)
        exit_code = 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    finally:
        loop.run_until_complete(watcher.stop())
        loop.close()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
