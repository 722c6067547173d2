"""
Shared fixtures for Tube Watcher tests.

Provides common test fixtures for use across all test modules.
"""

from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from tube_watcher.config import AppConfig, TelegramConfig, WatcherConfig, YouTubeConfig
from tube_watcher.models import Feed, FeedEntry

# Path to test fixtures directory
FIXTURES_DIR = Path(__file__).parent / "fixtures"

CHANNEL_ID = "UCtestchannel0000000000"
CHAT_ID = "-1001234567890"


def make_entry(video_id: str) -> FeedEntry:
    """Build a feed entry for a video ID."""
    return FeedEntry(
        id=f"yt:video:{video_id}",
        title=f"Video {video_id}",
        link=f"https://www.youtube.com/watch?v={video_id}",
        video_id=video_id,
        channel_id=CHANNEL_ID,
    )


def make_feed(*video_ids: str) -> Feed:
    """Build a feed whose entries appear in the given order."""
    return Feed(
        title="Test Channel",
        channel_id=CHANNEL_ID,
        entries=[make_entry(video_id) for video_id in video_ids],
    )


@pytest.fixture
def fixtures_dir() -> Path:
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def sample_feed_path(fixtures_dir: Path) -> Path:
    """Return path to sample channel feed file."""
    return fixtures_dir / "sample_youtube.xml"


@pytest.fixture
def sample_config_path(fixtures_dir: Path) -> Path:
    """Return path to sample config file."""
    return fixtures_dir / "sample_config.yaml"


@pytest.fixture
def sample_feed_content(sample_feed_path: Path) -> bytes:
    """Return contents of the sample channel feed."""
    return sample_feed_path.read_bytes()


@pytest.fixture
def minimal_config_dict() -> dict[str, Any]:
    """
    Create a minimal valid configuration dictionary.

    Returns
    -------
    dict
        Configuration dictionary that can be used to create AppConfig.
    """
    return {
        "telegram": {
            "bot_token": "1234567890:ABCdefGHIjklMNOpqrsTUVwxyz",
            "chat_id": CHAT_ID,
        },
        "youtube": {
            "channel_id": CHANNEL_ID,
        },
    }


@pytest.fixture
def app_config() -> AppConfig:
    """Create a valid app configuration."""
    return AppConfig(
        telegram=TelegramConfig(
            bot_token="1234567890:ABCdefGHIjklMNOpqrsTUVwxyz",
            chat_id=CHAT_ID,
        ),
        youtube=YouTubeConfig(channel_id=CHANNEL_ID),
        watcher=WatcherConfig(check_interval=10),
    )


@pytest.fixture
def mock_client() -> MagicMock:
    """
    Create a mock feed client.

    Returns
    -------
    MagicMock
        A client whose fetch_feed returns an empty feed by default.
    """
    client = MagicMock()
    client.fetch_feed = AsyncMock(return_value=make_feed())
    client.close = AsyncMock()
    return client


@pytest.fixture
def mock_notifier() -> MagicMock:
    """
    Create a mock notifier.

    Returns
    -------
    MagicMock
        A notifier that connects and delivers successfully.
    """
    notifier = MagicMock()
    notifier.test_connection = AsyncMock(return_value=True)
    notifier.send_message = AsyncMock(return_value=True)
    notifier.close = AsyncMock()
    return notifier


@pytest.fixture
def mock_telegram_bot() -> MagicMock:
    """
    Create a mock Telegram bot.

    Returns
    -------
    MagicMock
        A mock Bot instance with common methods mocked.
    """
    bot = MagicMock()
    bot.send_message = AsyncMock()
    bot.get_me = AsyncMock(return_value=MagicMock(username="test_bot"))
    bot.shutdown = AsyncMock()
    return bot


@pytest.fixture
def feed_factory():
    """Return a builder for feeds with entries in the given order."""
    return make_feed
