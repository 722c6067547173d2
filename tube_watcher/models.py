"""
Data model for parsed channel feeds.
"""

import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def _to_datetime(parsed: time.struct_time | None) -> datetime | None:
    """Convert a feedparser UTC struct_time to an aware datetime."""
    if not parsed:
        return None
    return datetime(*parsed[:6], tzinfo=timezone.utc)


@dataclass
class FeedEntry:
    """
    A single video from a channel feed.

    Attributes
    ----------
    id : str
        Stable unique identifier (``yt:video:<video_id>``).
    title : str
        Video title.
    link : str
        Watch URL of the video.
    published : datetime | None
        Publication time in UTC.
    video_id : str
        YouTube video ID.
    channel_id : str
        YouTube channel ID of the uploader.
    author : str
        Channel name.
    updated : datetime | None
        Last update time in UTC.
    description : str
        Video description.
    thumbnail : str
        Thumbnail image URL.
    """

    id: str
    title: str = ""
    link: str = ""
    published: datetime | None = None
    video_id: str = ""
    channel_id: str = ""
    author: str = ""
    updated: datetime | None = None
    description: str = ""
    thumbnail: str = ""

    @classmethod
    def from_feedparser(cls, entry: Any) -> "FeedEntry":
        """
        Create a FeedEntry from a feedparser entry.

        Parameters
        ----------
        entry : Any
            A feedparser entry object.

        Returns
        -------
        FeedEntry
            Normalized entry instance.

        Raises
        ------
        ValueError
            If the entry carries no identifier.
        """
        entry_id = entry.get("id", "")
        if not entry_id:
            raise ValueError(f"Entry has no id: {entry.get('title', '')!r}")

        thumbnail = ""
        thumbnails = entry.get("media_thumbnail") or []
        if thumbnails:
            thumbnail = thumbnails[0].get("url", "")

        return cls(
            id=entry_id,
            title=entry.get("title", ""),
            link=entry.get("link", ""),
            published=_to_datetime(entry.get("published_parsed")),
            video_id=entry.get("yt_videoid", ""),
            channel_id=entry.get("yt_channelid", ""),
            author=entry.get("author", ""),
            updated=_to_datetime(entry.get("updated_parsed")),
            description=entry.get("summary", ""),
            thumbnail=thumbnail,
        )


@dataclass
class Feed:
    """
    A parsed channel feed, newest entry first.

    Attributes
    ----------
    title : str
        Channel title.
    channel_id : str
        YouTube channel ID.
    link : str
        Channel page URL.
    author : str
        Channel name.
    entries : list[FeedEntry]
        Entries in document order.
    """

    title: str = ""
    channel_id: str = ""
    link: str = ""
    author: str = ""
    entries: list[FeedEntry] = field(default_factory=list)

    @property
    def entry_ids(self) -> list[str]:
        """IDs of all entries in document order."""
        return [entry.id for entry in self.entries]
