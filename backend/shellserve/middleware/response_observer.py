"""Wraps an ASGI ``send`` to see which status the handler declared."""

from starlette.types import Message, Send

DEFAULT_STATUS = 200


class ResponseObserver:
    """Records the status of ``http.response.start`` and forwards every message unchanged."""

    def __init__(self, send: Send, status: int = DEFAULT_STATUS):
        self._send = send
        self.status = status

    async def __call__(self, message: Message) -> None:
        if message["type"] == "http.response.start":
            self.status = message.get("status", self.status)
        await self._send(message)
