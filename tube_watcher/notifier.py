"""
Protocol definition for notification backends.

Defines the interface the watcher uses to deliver messages.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    """
    Protocol defining the interface for notification backends.

    The @runtime_checkable decorator allows using isinstance() checks
    against this protocol for structural typing validation.
    """

    async def test_connection(self) -> bool:
        """
        Test the connection to the notification backend.

        Returns
        -------
        bool
            True if the credential is valid and messages can be sent.
        """
        ...

    async def send_message(self, chat_id: str, text: str) -> bool:
        """
        Send a plain-text message to a chat.

        Parameters
        ----------
        chat_id : str
            Destination chat or channel identifier.
        text : str
            Message body.

        Returns
        -------
        bool
            True if the message was delivered.
        """
        ...

    async def close(self) -> None:
        """Release any resources held by the notifier."""
        ...
