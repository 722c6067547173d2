"""
Tube Watcher - Announce new YouTube uploads on Telegram.

Polls a YouTube channel's Atom feed and posts the link of each newly
published video to a Telegram chat.
"""

__version__ = "1.0.0"
